"""
Tests for validation/folds.py
"""

import numpy as np
import pytest
from sklearn.model_selection import StratifiedKFold, cross_val_score
from sklearn.svm import SVC

from weaknull.validation.folds import LabelBalancedKFold


LABELS = np.array(["a"] * 10 + ["b"] * 3 + ["c"] * 7)


class TestLabelBalancedKFold:
    """Fold construction."""

    def test_partition(self):
        cv = LabelBalancedKFold(n_splits=3, random_state=0)
        test_sets = [test for _, test in cv.split(np.zeros(len(LABELS)), LABELS)]

        all_test = np.concatenate(test_sets)
        assert sorted(all_test) == list(range(len(LABELS)))

    def test_train_is_complement(self):
        cv = LabelBalancedKFold(n_splits=3, random_state=0)

        for train, test in cv.split(np.zeros(len(LABELS)), LABELS):
            assert len(np.intersect1d(train, test)) == 0
            assert len(train) + len(test) == len(LABELS)

    def test_every_fold_holds_every_label(self):
        cv = LabelBalancedKFold(n_splits=3, random_state=1)

        for _, test in cv.split(np.zeros(len(LABELS)), LABELS):
            assert set(LABELS[test]) == {"a", "b", "c"}

    def test_every_fold_holds_every_label_across_seeds(self):
        for seed in range(50):
            folds = LabelBalancedKFold(n_splits=3, random_state=seed).fold_assignment(LABELS)

            for fold in range(3):
                assert set(LABELS[folds == fold]) == {"a", "b", "c"}

    def test_matches_stratified_kfold(self):
        seed = int(np.random.default_rng(4).integers(2**31 - 1))
        expected = np.empty(len(LABELS), dtype=int)
        cv = StratifiedKFold(n_splits=3, shuffle=True, random_state=seed)
        for fold, (_, test) in enumerate(cv.split(np.zeros((len(LABELS), 1)), LABELS)):
            expected[test] = fold

        folds = LabelBalancedKFold(n_splits=3, random_state=4).fold_assignment(LABELS)

        np.testing.assert_array_equal(folds, expected)

    def test_fold_sizes_differ_by_at_most_one(self):
        folds = LabelBalancedKFold(n_splits=3, random_state=2).fold_assignment(LABELS)

        for label in np.unique(LABELS):
            sizes = np.bincount(folds[LABELS == label], minlength=3)
            assert sizes.max() - sizes.min() <= 1

    def test_reproducible(self):
        first = LabelBalancedKFold(n_splits=3, random_state=5).fold_assignment(LABELS)
        second = LabelBalancedKFold(n_splits=3, random_state=5).fold_assignment(LABELS)

        np.testing.assert_array_equal(first, second)

    def test_get_n_splits(self):
        assert LabelBalancedKFold(n_splits=4).get_n_splits() == 4

    def test_too_few_folds(self):
        with pytest.raises(ValueError, match="at least 2"):
            LabelBalancedKFold(n_splits=1).fold_assignment(LABELS)

    def test_too_many_folds(self):
        with pytest.raises(ValueError, match="'b'"):
            LabelBalancedKFold(n_splits=4).fold_assignment(LABELS)

    def test_requires_labels(self):
        with pytest.raises(ValueError, match="requires y"):
            list(LabelBalancedKFold(n_splits=2).split(np.zeros(5)))

    def test_sklearn_compatible(self):
        rng = np.random.default_rng(0)
        y = np.array([0] * 12 + [1] * 12)
        X = y[:, None] * 4.0 + rng.normal(0, 0.5, (24, 1))

        scores = cross_val_score(
            SVC(kernel="linear"), X, y, cv=LabelBalancedKFold(n_splits=4, random_state=0)
        )

        assert len(scores) == 4
        assert np.all(scores == 1.0)
