import io

import pytest

from numlabs.adaptive import (
    EXACT_INTEGRAL,
    INTERVAL,
    LOG_FILENAME,
    adaptive_integrate,
    adaptive_integrate_serial,
    f,
    main,
    simpson_estimate,
)


def test_integrand_at_zero():
    assert f(0.0) == 1.0


def test_simpson_estimate_of_empty_interval():
    assert simpson_estimate(1.5, 1.5) == 0.0


def test_serial_reaches_exact_value():
    a, b = INTERVAL
    result = adaptive_integrate_serial(a, b, 1.0e-10)
    assert abs(result - EXACT_INTEGRAL) < 1.0e-8


def test_parallel_reaches_exact_value():
    a, b = INTERVAL
    result = adaptive_integrate(a, b, 1.0e-6, None, 2)
    assert abs(result - EXACT_INTEGRAL) < 1.0e-5


def test_loose_tolerance_visits_one_interval():
    log = io.StringIO()
    result = adaptive_integrate_serial(0.0, 1.0, 1.0e3, log)
    lines = log.getvalue().splitlines()
    assert len(lines) == 1
    assert result == pytest.approx(simpson_estimate(0.0, 0.5) + simpson_estimate(0.5, 1.0))


def test_serial_log_format():
    log = io.StringIO()
    adaptive_integrate_serial(-2.0, 4.0, 1.0e-4, log)
    lines = log.getvalue().splitlines()
    rank, a, b = lines[0].split()
    assert int(rank) == 1
    assert float(a) == -2.0
    assert float(b) == 4.0
    assert all(line.split()[0] == "1" for line in lines)


def test_parallel_log_ranks():
    log = io.StringIO()
    adaptive_integrate(-2.0, 4.0, 1.0e-4, log, 3)
    ranks = {int(line.split()[0]) for line in log.getvalue().splitlines()}
    assert ranks <= {1, 2, 3}
    assert len(ranks) > 1


def test_parallel_needs_two_threads():
    with pytest.raises(ValueError):
        adaptive_integrate(0.0, 1.0, 1.0e-6, None, 1)


def test_non_positive_tolerance_rejected():
    with pytest.raises(ValueError):
        adaptive_integrate_serial(0.0, 1.0, 0.0)


def test_main_serial_writes_log(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["1", "1e-8"]) == 0
    out = capsys.readouterr().out
    assert "thread_count = 1" in out
    err_line = next(line for line in out.splitlines() if "err =" in line)
    assert float(err_line.split("=")[1]) < 1.0e-6
    assert (tmp_path / LOG_FILENAME).read_text().strip()


def test_main_parallel(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["2", "1e-6"]) == 0
    assert "thread_count = 2" in capsys.readouterr().out


@pytest.mark.parametrize("args", [["1"], ["0", "1e-8"], ["2", "1e-20"], ["x", "1e-8"]])
def test_main_usage(tmp_path, monkeypatch, capsys, args):
    monkeypatch.chdir(tmp_path)
    assert main(args) == 1
    assert "usage" in capsys.readouterr().err