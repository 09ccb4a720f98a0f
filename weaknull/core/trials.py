"""
TrialTable - Per-subject trial data for one statistic call.

Columns are resolved by name once, when the table is built. Estimators
work on the resulting arrays only.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .exceptions import DimensionMismatch


ColumnNames = Union[str, Sequence[str]]


def _as_column_list(columns: ColumnNames) -> List[str]:
    if isinstance(columns, str):
        return [columns]
    return list(columns)


@dataclass
class TrialTable:
    """
    Trials of a single subject.

    Attributes:
        X: Dependent variable(s), shape (n_trials, n_dv)
        labels: Independent variable label of each trial, shape (n_trials,)
        subject: Subject identifier (traceability only)
        dv_names: Names of the dependent variable columns

    Example:
        >>> table = TrialTable(
        ...     X=np.random.randn(40),
        ...     labels=np.array(["congruent", "incongruent"] * 20),
        ...     subject="s01"
        ... )
        >>> table.reference_label
        'congruent'
    """

    X: np.ndarray
    labels: np.ndarray
    subject: Optional[Any] = None
    dv_names: Optional[List[str]] = None

    def __post_init__(self):
        self.X = np.asarray(self.X, dtype=float)
        self.labels = np.asarray(self.labels)

        if self.X.ndim == 1:
            self.X = self.X.reshape(-1, 1)
        if self.X.ndim != 2:
            raise ValueError(f"X must be 1-D or 2-D. Got {self.X.ndim} dimensions")
        if self.labels.ndim != 1:
            raise ValueError(f"labels must be 1-D. Got {self.labels.ndim} dimensions")

        if self.X.shape[0] != len(self.labels):
            raise DimensionMismatch(self.X.shape[0], len(self.labels))

        if self.dv_names is None:
            self.dv_names = [f"dv_{i}" for i in range(self.n_dv)]

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        idv: str = "id",
        dv: ColumnNames = "y",
        iv: str = "condition"
    ) -> "TrialTable":
        """
        Build a table from a long-format DataFrame holding one subject.

        Args:
            df: Trials of one subject, one row per trial
            idv: Subject identifier column (optional in df)
            dv: Dependent variable column, or list of columns
            iv: Independent variable (condition label) column

        Returns:
            TrialTable
        """
        dv_names = _as_column_list(dv)
        missing = [c for c in dv_names + [iv] if c not in df.columns]
        if missing:
            raise KeyError(f"Columns not found in trial data: {missing}")

        subject = None
        if idv in df.columns and len(df) > 0:
            subject = df[idv].iloc[0]

        return cls(
            X=df[dv_names].to_numpy(dtype=float),
            labels=df[iv].to_numpy(),
            subject=subject,
            dv_names=dv_names
        )

    @property
    def n_trials(self) -> int:
        return self.X.shape[0]

    @property
    def n_dv(self) -> int:
        return self.X.shape[1]

    @property
    def label_counts(self) -> Dict[Any, int]:
        """Trials per label, ordered by sorted label."""
        unique, counts = np.unique(self.labels, return_counts=True)
        return {u.item() if hasattr(u, "item") else u: int(c)
                for u, c in zip(unique, counts)}

    @property
    def reference_label(self) -> Any:
        """The first observed label."""
        if self.n_trials == 0:
            return None
        first = self.labels[0]
        return first.item() if hasattr(first, "item") else first

    @property
    def reference_mask(self) -> np.ndarray:
        """True for trials carrying the reference label."""
        if self.n_trials == 0:
            return np.zeros(0, dtype=bool)
        return self.labels == self.labels[0]

    def dv_values(self, mask: np.ndarray) -> np.ndarray:
        """Dependent variable values of the selected trials.

        A single dv column comes back as a vector, several as a matrix.
        """
        values = self.X[mask]
        if self.n_dv == 1:
            return values[:, 0]
        return values

    def summary(self) -> str:
        lines = [
            "TrialTable Summary",
            "=" * 40,
            f"Subject: {self.subject}",
            f"Trials: {self.n_trials}",
            f"Dependent variables: {', '.join(self.dv_names)}",
            f"Reference label: {self.reference_label}",
            "",
            "Label distribution:",
        ]
        for label, count in self.label_counts.items():
            pct = count / self.n_trials * 100
            lines.append(f"  {label}: {count} ({pct:.1f}%)")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TrialTable(subject={self.subject!r}, n_trials={self.n_trials}, "
            f"n_dv={self.n_dv}, n_labels={len(self.label_counts)})"
        )

    def __len__(self) -> int:
        return self.n_trials


def as_trial_table(
    data: Union[TrialTable, pd.DataFrame],
    idv: str = "id",
    dv: ColumnNames = "y",
    iv: str = "condition"
) -> TrialTable:
    """Return data as a TrialTable, resolving DataFrame columns by name."""
    if isinstance(data, TrialTable):
        return data
    if isinstance(data, pd.DataFrame):
        return TrialTable.from_dataframe(data, idv=idv, dv=dv, iv=iv)
    raise TypeError(
        f"Expected a TrialTable or pandas DataFrame, got {type(data).__name__}"
    )
