"""
Errors and warnings raised by the subject-level statistics.

Structural input problems are exceptions and abort the call. Statistical
anomalies (an exhausted resampling budget, a statistic with no valid
split) are warnings and the computation carries on.
"""

import inspect
import os
from typing import Optional


_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def find_stack_level() -> int:
    """
    Stack level of the first frame outside the package.

    Passed as ``stacklevel`` so warnings point at the caller's line
    whichever public entry point was used.
    """
    frame = inspect.currentframe()
    try:
        n = 0
        while frame is not None:
            if not os.path.abspath(inspect.getfile(frame)).startswith(_PACKAGE_DIR + os.sep):
                break
            frame = frame.f_back
            n += 1
    finally:
        del frame
    return n


class DimensionMismatch(ValueError):
    """Dependent and independent variables have different row counts."""

    def __init__(self, n_dv_rows: int, n_iv_rows: int):
        self.n_dv_rows = n_dv_rows
        self.n_iv_rows = n_iv_rows
        super().__init__(
            f"Inconsistent lengths for the dependent and independent variables. "
            f"Got dv: {n_dv_rows} rows, iv: {n_iv_rows} rows"
        )


class DegenerateFold(RuntimeError):
    """A cross-validation fold cannot yield a meaningful accuracy."""

    def __init__(self, reason: str, fold: Optional[int] = None):
        self.fold = fold
        self.reason = reason
        where = f"Fold {fold}" if fold is not None else "Cross-validation"
        super().__init__(f"{where} is degenerate: {reason}")


class ResamplingExhaustedWarning(RuntimeWarning):
    """Every resampling attempt of a split produced an undefined sign."""


class UndefinedStatisticWarning(RuntimeWarning):
    """No split produced a valid sign comparison."""
