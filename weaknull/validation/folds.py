"""
Label-balanced K-fold cross-validation.

Wraps scikit-learn's StratifiedKFold and refuses fold counts for which
some test fold would lack a label.
"""

from typing import Iterator, Tuple

import numpy as np
from sklearn.model_selection import BaseCrossValidator, StratifiedKFold

from ..core.seeding import RandomState, make_rng


class LabelBalancedKFold(BaseCrossValidator):
    """
    Shuffled stratified K-fold with every label in every test fold.

    Folds come from StratifiedKFold(shuffle=True). The fold count must lie
    between 2 and the size of the smallest label, so each test fold holds
    at least one trial of every label.

    Example:
        >>> cv = LabelBalancedKFold(n_splits=3, random_state=0)
        >>> for train_idx, test_idx in cv.split(X, y):
        ...     X_train, X_test = X[train_idx], X[test_idx]
    """

    def __init__(self, n_splits: int = 5, random_state: RandomState = None):
        """
        Initialize label-balanced k-fold.

        Args:
            n_splits: Number of folds
            random_state: Seed or generator for the fold assignment
        """
        self.n_splits = n_splits
        self.random_state = random_state

    def _check(self, y: np.ndarray):
        if self.n_splits < 2:
            raise ValueError(
                f"LabelBalancedKFold requires at least 2 folds. Got n_splits={self.n_splits}"
            )
        labels, counts = np.unique(y, return_counts=True)
        if len(labels) and counts.min() < self.n_splits:
            smallest = labels.tolist()[int(np.argmin(counts))]
            raise ValueError(
                f"n_splits={self.n_splits} exceeds the {counts.min()} trials of label "
                f"{smallest!r}; some test folds would lack that label"
            )

    def fold_assignment(self, y: np.ndarray) -> np.ndarray:
        """
        Test fold index of every sample.

        Args:
            y: Labels for stratification

        Returns:
            Integer array (n_samples,) with values in [0, n_splits)
        """
        y = np.asarray(y)
        self._check(y)

        seed = int(make_rng(self.random_state).integers(2**31 - 1))
        cv = StratifiedKFold(n_splits=self.n_splits, shuffle=True, random_state=seed)

        folds = np.empty(len(y), dtype=int)
        for fold, (_, test_idx) in enumerate(cv.split(np.zeros((len(y), 1)), y)):
            folds[test_idx] = fold

        return folds

    def split(
        self,
        X: np.ndarray,
        y: np.ndarray = None,
        groups: np.ndarray = None
    ) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
        """
        Generate train/test indices for each fold.

        Args:
            X: Feature matrix
            y: Labels for stratification
            groups: Ignored, for sklearn compatibility

        Yields:
            Tuple of (train_indices, test_indices)
        """
        if y is None:
            raise ValueError("LabelBalancedKFold requires y for stratification")

        folds = self.fold_assignment(y)

        for fold in range(self.n_splits):
            yield np.flatnonzero(folds != fold), np.flatnonzero(folds == fold)

    def get_n_splits(
        self,
        X: np.ndarray = None,
        y: np.ndarray = None,
        groups: np.ndarray = None
    ) -> int:
        """Get number of folds."""
        return self.n_splits
