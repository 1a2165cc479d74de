"""Adaptive Simpson quadrature, serial and with nested worker threads."""

from __future__ import annotations

import math
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, TextIO

EXACT_INTEGRAL = 0.4147421694070212
INTERVAL = (-2.0, 4.0)
MIN_TOLERANCE = 5.0e-16
LOG_FILENAME = "quadrature.data"
BETA = 10.0
_ONE_OVER_15 = 6.666666666666667e-02
_ONE_SIXTH = 1.666666666666667e-01

_log_lock = threading.Lock()


class UsageError(Exception):
    """Raised when the command line is malformed."""


def f(x: float) -> float:
    """The integrand exp(-(10 x)**2) + sin(x)."""
    return math.exp(-((BETA * x) ** 2)) + math.sin(x)


def simpson_estimate(a: float, b: float) -> float:
    """Simpson's rule on the single interval [a, b]."""
    c = 0.5 * (a + b)
    return _ONE_SIXTH * (b - a) * (f(a) + 4.0 * f(c) + f(b))


def _record(log: Optional[TextIO], rank: int, a: float, b: float) -> None:
    if log is not None:
        with _log_lock:
            log.write(f"{rank + 1:3d} {a:24.15e} {b:24.15e}\n")


def _estimates(a: float, b: float) -> tuple:
    c = 0.5 * (a + b)
    q_ab = simpson_estimate(a, b)
    q_ac = simpson_estimate(a, c)
    q_cb = simpson_estimate(c, b)
    return c, q_ac, q_cb, _ONE_OVER_15 * abs(q_ac + q_cb - q_ab)


def _serial(a: float, b: float, tol: float, log: Optional[TextIO]) -> float:
    c, q_ac, q_cb, error = _estimates(a, b)
    _record(log, 0, a, b)
    if error < tol:
        return q_ac + q_cb
    return _serial(a, c, 0.5 * tol, log) + _serial(c, b, 0.5 * tol, log)


def adaptive_integrate_serial(a: float, b: float, tol: float,
                              log: Optional[TextIO] = None) -> float:
    """Integrate f over [a, b] by recursive interval halving.

    Every visited interval is written to `log` as "rank a b".
    """
    if tol <= 0.0:
        raise ValueError("tolerance must be positive")
    return _serial(a, b, tol, log)


def _parallel(a: float, b: float, tol: float, log: Optional[TextIO],
              num_threads: int, rank: int) -> float:
    _, q_ac, q_cb, error = _estimates(a, b)
    _record(log, rank, a, b)
    if error < tol:
        return q_ac + q_cb
    one_over = 1.0 / num_threads

    def child(local_rank: int) -> float:
        a_local = a + local_rank * (b - a) * one_over
        b_local = a_local + (b - a) * one_over
        return _parallel(a_local, b_local, one_over * tol, log, num_threads, local_rank)

    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        return sum(pool.map(child, range(num_threads)))


def adaptive_integrate(a: float, b: float, tol: float,
                       log: Optional[TextIO] = None, num_threads: int = 2) -> float:
    """Integrate f over [a, b], splitting unresolved intervals among nested threads.

    Each unresolved interval is cut into `num_threads` equal parts, each handled
    by its own thread with the tolerance divided by `num_threads`.
    """
    if num_threads < 2:
        raise ValueError("parallel integration needs at least two threads")
    if tol <= 0.0:
        raise ValueError("tolerance must be positive")
    return _parallel(a, b, tol, log, num_threads, 0)


def _usage(prog: str) -> str:
    return (
        f" usage : {prog} <num_threads > <TOL >\n"
        " num_threads should be positive \n"
        " TOL should be positive \n"
    )


def _parse(args: list) -> tuple:
    if len(args) != 2:
        raise UsageError("expected two arguments")
    try:
        thread_count = int(args[0])
        tol = float(args[1])
    except ValueError as exc:
        raise UsageError(str(exc)) from exc
    if thread_count < 1 or tol < MIN_TOLERANCE:
        raise UsageError("arguments out of range")
    return thread_count, tol


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: <num_threads> <TOL>; integrates f over [-2, 4]."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        thread_count, tol = _parse(args)
    except UsageError:
        sys.stderr.write(_usage("adaptive"))
        return 1

    a, b = INTERVAL
    with open(LOG_FILENAME, "w") as log:
        start = time.perf_counter()
        if thread_count == 1:
            result = adaptive_integrate_serial(a, b, tol, log)
        else:
            result = adaptive_integrate(a, b, tol, log, thread_count)
        elapsed = time.perf_counter() - start

    sys.stdout.write(
        f"\n thread_count = {thread_count}\n"
        f" TOL = {tol:24.15e}\n"
        f" I = {result:24.15e}\n"
        f" err = {abs(result - EXACT_INTEGRAL):24.15e}\n"
        f" Time to complete: {elapsed:10.5e}\n\n"
    )
    return 0