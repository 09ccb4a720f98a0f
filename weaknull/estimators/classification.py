"""
Classification-accuracy statistic.

A linear SVM is trained per cross-validation fold to predict the
condition label from the dependent variable(s). The statistic is the
mean held-out accuracy across folds.
"""

from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.svm import SVC

from .base import BaseStatistic
from ..core.config import get_config
from ..core.exceptions import DegenerateFold
from ..core.params import AUTO, ClassificationParams, FoldCount
from ..core.results import ClassificationResult
from ..core.seeding import RandomState
from ..core.trials import ColumnNames, TrialTable
from ..validation.folds import LabelBalancedKFold


def class_weights(labels: np.ndarray, handle_imbalance: bool = True) -> Dict[Any, float]:
    """
    Per-label training weights.

    Args:
        labels: Condition label of every trial
        handle_imbalance: If True, weight each label by
            min(count) / count so that majority labels are down-weighted;
            otherwise every label gets weight 1

    Returns:
        Mapping label -> weight
    """
    unique, counts = np.unique(labels, return_counts=True)
    if handle_imbalance:
        weights = counts.min() / counts
    else:
        weights = np.ones(len(unique))
    return {u.item() if hasattr(u, "item") else u: float(w)
            for u, w in zip(unique, weights)}


class ClassificationAccuracyEstimator(BaseStatistic):
    """
    Cross-validated accuracy of a linear SVM predicting the condition.

    Args:
        K: Number of folds, or "auto" for the size of the smallest label
        handle_imbalance: Weight classes by min(count) / count
        C: SVM regularization (default from the global config)
        standardize: Z-score features within each training fold
            (default from the global config)
        random_state: Seed for the fold assignment

    Example:
        >>> estimator = ClassificationAccuracyEstimator(K="auto", random_state=0)
        >>> result = estimator.evaluate(df, dv=["rt", "accuracy"], iv="condition")
        >>> print(f"Accuracy: {result.statistic:.1%}")
    """

    def __init__(
        self,
        K: Optional[FoldCount] = AUTO,
        handle_imbalance: bool = True,
        C: Optional[float] = None,
        standardize: Optional[bool] = None,
        random_state: RandomState = None
    ):
        super().__init__(random_state=random_state)
        # Validates K
        self.params = ClassificationParams(K=K, handle_imbalance=handle_imbalance)

        config = get_config().classifier
        self.C = config.svm_C if C is None else C
        self.standardize = config.standardize if standardize is None else standardize
        self.max_iter = config.max_iter
        self.tol = config.tol

    @property
    def K(self) -> FoldCount:
        return self.params.K

    @property
    def handle_imbalance(self) -> bool:
        return self.params.handle_imbalance

    @classmethod
    def from_params(
        cls,
        params: ClassificationParams,
        random_state: RandomState = None,
        **kwargs
    ) -> "ClassificationAccuracyEstimator":
        return cls(
            K=params.K,
            handle_imbalance=params.handle_imbalance,
            random_state=random_state,
            **kwargs
        )

    def _build_pipeline(self, weights: Dict[Any, float]) -> Pipeline:
        """Build sklearn pipeline."""
        steps = []

        if self.standardize:
            steps.append(("scaler", StandardScaler()))

        svm = SVC(
            kernel="linear",
            C=self.C,
            class_weight=weights,
            max_iter=self.max_iter,
            tol=self.tol
        )
        steps.append(("svm", svm))

        return Pipeline(steps)

    def compute(self, X: np.ndarray, labels: np.ndarray) -> ClassificationResult:
        """
        Cross-validated accuracy from arrays.

        Args:
            X: Dependent variable(s) (n_trials,) or (n_trials, n_dv)
            labels: Condition labels (any number of levels)

        Returns:
            ClassificationResult with per-fold accuracies and predictions
        """
        X, labels = self._check_arrays(X, labels)

        unique, counts = np.unique(labels, return_counts=True)
        if len(unique) < 2:
            raise DegenerateFold(
                f"need at least 2 labels to classify, got {len(unique)}"
            )

        n_folds = int(self.params.resolve_k(dict(zip(unique, counts))))
        if self.params.is_auto and n_folds < 2:
            raise DegenerateFold(
                f"label {unique.tolist()[int(np.argmin(counts))]!r} has a single trial; "
                "cross-validation needs at least 2 folds"
            )

        weights = class_weights(labels, self.handle_imbalance)
        cv = LabelBalancedKFold(n_splits=n_folds, random_state=self._rng())
        fold_ids = cv.fold_assignment(labels)

        predictions = np.empty(len(labels), dtype=labels.dtype)
        fold_accuracies = []

        for fold in range(n_folds):
            test_idx = np.flatnonzero(fold_ids == fold)
            train_idx = np.flatnonzero(fold_ids != fold)

            if len(test_idx) == 0:
                raise DegenerateFold("empty test set", fold=fold)
            if len(np.unique(labels[train_idx])) < 2:
                raise DegenerateFold("training set holds a single label", fold=fold)

            train_labels = set(labels[train_idx].tolist())
            model = self._build_pipeline(
                {label: w for label, w in weights.items() if label in train_labels}
            )
            model.fit(X[train_idx], labels[train_idx])

            fold_pred = model.predict(X[test_idx])
            predictions[test_idx] = fold_pred
            fold_accuracies.append(float(np.mean(fold_pred == labels[test_idx])))

        return ClassificationResult(
            statistic=float(np.mean(fold_accuracies)),
            fold_accuracies=fold_accuracies,
            class_weights=weights,
            predictions=predictions,
            true_labels=labels,
            fold_assignment=fold_ids,
            metadata={
                "K": n_folds,
                "K_auto": self.params.is_auto,
                "handle_imbalance": self.handle_imbalance,
                "n_trials": len(labels),
                "svm_C": self.C,
                "standardize": self.standardize
            }
        )

    def __repr__(self) -> str:
        return (f"ClassificationAccuracyEstimator(K={self.K}, "
                f"handle_imbalance={self.handle_imbalance}, C={self.C})")


def get_classifier_accuracy(
    data: Union[TrialTable, pd.DataFrame],
    idv: str = "id",
    dv: ColumnNames = "y",
    iv: str = "condition",
    K: Optional[FoldCount] = AUTO,
    handle_imbalance: bool = True,
    random_state: RandomState = None
) -> float:
    """
    Cross-validated accuracy of classifying iv from dv for one subject.

    Args:
        data: Trials of one subject
        idv: Subject identifier column
        dv: Dependent variable column(s) used as features
        iv: Independent variable column, the label to classify
        K: Number of folds; None or "auto" uses the smallest label count
        handle_imbalance: Weight labels against class imbalance
        random_state: Seed for the fold assignment

    Returns:
        Mean held-out accuracy across folds
    """
    estimator = ClassificationAccuracyEstimator(
        K=K, handle_imbalance=handle_imbalance, random_state=random_state
    )
    return estimator.estimate(data, idv=idv, dv=dv, iv=iv)


def classify_conditions(
    data: Union[TrialTable, pd.DataFrame],
    idv: str = "id",
    dv: ColumnNames = "y",
    iv: str = "condition",
    params: Optional[ClassificationParams] = None,
    random_state: RandomState = None
) -> float:
    """
    Classification accuracy of one subject using a parameter bundle.

    Args:
        data: Trials of one subject
        idv: Subject identifier column
        dv: Dependent variable column(s)
        iv: Independent variable column
        params: Bundle from create_classification_params() (defaults apply
            when None)
        random_state: Seed for the fold assignment

    Returns:
        Mean held-out accuracy across folds
    """
    if params is None:
        params = ClassificationParams()
    return get_classifier_accuracy(
        data, idv=idv, dv=dv, iv=iv,
        K=params.K,
        handle_imbalance=params.handle_imbalance,
        random_state=random_state
    )
