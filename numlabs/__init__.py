"""Numerical methods: matrices, eigenvalues by QR iteration, quadrature and threaded experiments."""

__version__ = "0.1.0"

__all__ = [
    "adaptive",
    "eigen",
    "matrix",
    "normalize",
    "power_sums",
    "records",
    "simpson",
    "trapezoid",
    "trimatrix",
]