"""
Base class for subject-level statistics.

A statistic turns one subject's trials into a single scalar. The
permutation framework calls it once per subject for the observed labels
and once per subject for every permuted labelling.
"""

from abc import ABC, abstractmethod
from typing import Union

import numpy as np
import pandas as pd

from ..core.exceptions import DimensionMismatch
from ..core.results import StatisticResult
from ..core.seeding import RandomState, make_rng
from ..core.trials import ColumnNames, TrialTable, as_trial_table


class BaseStatistic(ABC):
    """
    Abstract base class for all subject-level statistics.

    Subclasses implement compute(), which works on plain arrays.
    evaluate() and estimate() resolve a trial table first, so a statistic
    can be used as an interchangeable strategy by the caller.

    Example:
        >>> class MeanDifference(BaseStatistic):
        ...     def compute(self, X, labels):
        ...         ref = labels == labels[0]
        ...         return StatisticResult(X[ref].mean() - X[~ref].mean())
    """

    def __init__(self, random_state: RandomState = None):
        """
        Initialize statistic.

        Args:
            random_state: Seed for the private generator created on each call
        """
        self.random_state = random_state

    @abstractmethod
    def compute(self, X: np.ndarray, labels: np.ndarray) -> StatisticResult:
        """
        Compute the statistic from arrays.

        Args:
            X: Dependent variable(s) (n_trials,) or (n_trials, n_dv)
            labels: Independent variable labels (n_trials,)

        Returns:
            Result container holding the statistic
        """
        pass

    def evaluate(
        self,
        trials: Union[TrialTable, pd.DataFrame],
        idv: str = "id",
        dv: ColumnNames = "y",
        iv: str = "condition"
    ) -> StatisticResult:
        """
        Compute the statistic for one subject's trials.

        Args:
            trials: TrialTable, or DataFrame with one row per trial
            idv: Subject identifier column
            dv: Dependent variable column(s)
            iv: Independent variable column

        Returns:
            Result container with diagnostics
        """
        table = as_trial_table(trials, idv=idv, dv=dv, iv=iv)
        result = self.compute(table.X, table.labels)
        result.subject = table.subject
        return result

    def estimate(
        self,
        trials: Union[TrialTable, pd.DataFrame],
        idv: str = "id",
        dv: ColumnNames = "y",
        iv: str = "condition"
    ) -> float:
        """Compute the statistic and return it as a float (NaN if undefined)."""
        return self.evaluate(trials, idv=idv, dv=dv, iv=iv).statistic

    def _rng(self) -> np.random.Generator:
        return make_rng(self.random_state)

    @staticmethod
    def _check_arrays(X, labels):
        X = np.asarray(X, dtype=float)
        labels = np.asarray(labels)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if X.shape[0] != len(labels):
            raise DimensionMismatch(X.shape[0], len(labels))
        return X, labels

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(random_state={self.random_state})"
