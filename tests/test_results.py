"""
Tests for core/results.py
"""

import json

import numpy as np

from weaknull.core.results import (
    ClassificationResult,
    SignConsistencyResult,
    StatisticResult,
)


class TestSignConsistencyResult:
    """Split bookkeeping and serialisation."""

    def make_result(self):
        return SignConsistencyResult(
            statistic=2 / 3,
            subject="s01",
            split_outcomes=np.array([1.0, np.nan, 0.0, 1.0]),
            attempts=np.array([1, 5, 2, 1])
        )

    def test_counts(self):
        result = self.make_result()

        assert result.n_splits == 4
        assert result.n_valid_splits == 3
        assert result.n_exhausted_splits == 1

    def test_summary(self):
        text = self.make_result().summary()

        assert "Valid splits: 3/4" in text
        assert "Exhausted splits: 1" in text

    def test_undefined(self):
        result = SignConsistencyResult(statistic=float("nan"), split_outcomes=np.full(3, np.nan))

        assert not result.is_defined
        assert "undefined" in result.summary()
        assert "nan" in repr(result)

    def test_save_writes_null_for_nan(self, tmp_path):
        path = tmp_path / "result.json"
        SignConsistencyResult(statistic=float("nan"), subject="s09").save(str(path))

        data = json.loads(path.read_text())

        assert data["statistic"] is None
        assert data["subject"] == "s09"


class TestClassificationResult:
    """Per-class accuracy and summary."""

    def make_result(self):
        return ClassificationResult(
            statistic=0.75,
            fold_accuracies=[0.5, 1.0],
            class_weights={"a": 0.5, "b": 1.0},
            predictions=np.array(["a", "a", "b", "a"]),
            true_labels=np.array(["a", "b", "b", "a"])
        )

    def test_accuracy_per_class(self):
        assert self.make_result().accuracy_per_class == {"a": 1.0, "b": 0.5}

    def test_fold_statistics(self):
        result = self.make_result()

        assert result.n_folds == 2
        assert result.accuracy_std == 0.25

    def test_summary(self):
        text = self.make_result().summary()

        assert "Accuracy: 75.0%" in text
        assert "b: 50.0%" in text

    def test_to_dict(self):
        data = self.make_result().to_dict()

        assert data["n_folds"] == 2
        assert data["class_weights"] == {"a": 0.5, "b": 1.0}


class TestStatisticResult:
    def test_is_defined(self):
        assert StatisticResult(statistic=0.4).is_defined
        assert not StatisticResult(statistic=float("nan")).is_defined
