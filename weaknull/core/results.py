"""
Result containers for subject-level statistics.

The scalar statistic is what the permutation framework consumes; the
remaining fields are diagnostics for inspecting a single call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json
import math
from pathlib import Path

import numpy as np


def _jsonable(value):
    if isinstance(value, np.ndarray):
        return [_jsonable(v) for v in value.tolist()]
    if isinstance(value, dict):
        return {str(_jsonable(k)): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


@dataclass
class StatisticResult:
    """
    Scalar statistic of one subject.

    Attributes:
        statistic: The statistic, NaN when undefined
        subject: Subject identifier the trials came from
        metadata: Additional information
    """

    statistic: float
    subject: Optional[Any] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_defined(self) -> bool:
        """False when no signal could be measured."""
        return not math.isnan(self.statistic)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statistic": self.statistic,
            "subject": self.subject,
            "metadata": self.metadata,
        }

    def summary(self) -> str:
        stat = f"{self.statistic:.4f}" if self.is_defined else "undefined"
        return f"Subject {self.subject}: {stat}"

    def save(self, path: str):
        """Save result to JSON file (NaN is written as null)."""
        with open(Path(path), "w") as f:
            json.dump(_jsonable(self.to_dict()), f, indent=2)


@dataclass
class SignConsistencyResult(StatisticResult):
    """
    Sign-consistency statistic with per-split diagnostics.

    Attributes:
        split_outcomes: 1.0 (consistent), 0.0 (inconsistent) or NaN
            (resampling exhausted) for each split
        attempts: Draws used by each split
    """

    split_outcomes: Optional[np.ndarray] = None
    attempts: Optional[np.ndarray] = None

    @property
    def n_splits(self) -> int:
        if self.split_outcomes is None:
            return 0
        return len(self.split_outcomes)

    @property
    def n_valid_splits(self) -> int:
        if self.split_outcomes is None:
            return 0
        return int(np.sum(~np.isnan(self.split_outcomes)))

    @property
    def n_exhausted_splits(self) -> int:
        return self.n_splits - self.n_valid_splits

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "n_splits": self.n_splits,
            "n_valid_splits": self.n_valid_splits,
            "n_exhausted_splits": self.n_exhausted_splits,
        })
        return data

    def summary(self) -> str:
        lines = [
            "Sign Consistency Summary",
            "=" * 40,
            f"Subject: {self.subject}",
            f"Consistency: {self.statistic:.1%}" if self.is_defined
            else "Consistency: undefined (no valid split)",
            f"Valid splits: {self.n_valid_splits}/{self.n_splits}",
        ]
        if self.n_exhausted_splits:
            lines.append(f"Exhausted splits: {self.n_exhausted_splits}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        stat = f"{self.statistic:.3f}" if self.is_defined else "nan"
        return (f"SignConsistencyResult(consistency={stat}, "
                f"valid={self.n_valid_splits}/{self.n_splits})")


@dataclass
class ClassificationResult(StatisticResult):
    """
    Cross-validated classification accuracy with per-fold diagnostics.

    Attributes:
        fold_accuracies: Held-out accuracy of each fold
        class_weights: Weight of each label used in training
        predictions: Held-out prediction of every trial
        true_labels: Label of every trial
        fold_assignment: Test fold of every trial
    """

    fold_accuracies: Optional[List[float]] = None
    class_weights: Optional[Dict[Any, float]] = None
    predictions: Optional[np.ndarray] = None
    true_labels: Optional[np.ndarray] = None
    fold_assignment: Optional[np.ndarray] = None

    @property
    def n_folds(self) -> int:
        if self.fold_accuracies is None:
            return 0
        return len(self.fold_accuracies)

    @property
    def accuracy_std(self) -> Optional[float]:
        if not self.fold_accuracies:
            return None
        return float(np.std(self.fold_accuracies))

    @property
    def accuracy_per_class(self) -> Dict[Any, float]:
        """Held-out recall of each label."""
        if self.predictions is None or self.true_labels is None:
            return {}
        per_class = {}
        for label in np.unique(self.true_labels):
            mask = self.true_labels == label
            key = label.item() if hasattr(label, "item") else label
            per_class[key] = float(np.mean(self.predictions[mask] == label))
        return per_class

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "n_folds": self.n_folds,
            "fold_accuracies": self.fold_accuracies,
            "class_weights": self.class_weights,
            "accuracy_per_class": self.accuracy_per_class,
        })
        return data

    def summary(self) -> str:
        lines = [
            "Classification Accuracy Summary",
            "=" * 40,
            f"Subject: {self.subject}",
            f"Accuracy: {self.statistic:.1%}",
        ]
        if self.fold_accuracies is not None:
            lines.append(f"CV Folds: {self.n_folds} (+/- {self.accuracy_std:.1%})")

        if self.class_weights:
            lines.append("")
            lines.append("Class weights:")
            for label, weight in self.class_weights.items():
                lines.append(f"  {label}: {weight:.3f}")

        per_class = self.accuracy_per_class
        if per_class:
            lines.append("")
            lines.append("Per-class accuracy:")
            for label, acc in per_class.items():
                lines.append(f"  {label}: {acc:.1%}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ClassificationResult(accuracy={self.statistic:.1%}, n_folds={self.n_folds})"
