"""
Tests for core/config.py and core/seeding.py
"""

import numpy as np
import pytest

from weaknull.core.config import ClassifierConfig, WeakNullConfig, get_config, set_config
from weaknull.core.seeding import derive_seed, make_rng, spawn_seeds


class TestWeakNullConfig:
    """Config loading, saving and the global instance."""

    def test_defaults(self):
        config = WeakNullConfig()

        assert config.classifier.svm_C == 1.0
        assert config.classifier.standardize is True
        assert config.random_state is None
        assert config.n_jobs == 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("WEAKNULL_RANDOM_STATE", "13")
        monkeypatch.setenv("WEAKNULL_N_JOBS", "4")
        monkeypatch.setenv("WEAKNULL_VERBOSE", "true")
        monkeypatch.setenv("WEAKNULL_SVM_C", "0.5")

        config = WeakNullConfig.from_env()

        assert config.random_state == 13
        assert config.n_jobs == 4
        assert config.verbose is True
        assert config.classifier.svm_C == 0.5

    def test_save_and_load(self, tmp_path):
        config = WeakNullConfig(
            classifier=ClassifierConfig(svm_C=0.1, standardize=False),
            random_state=3,
            n_jobs=2
        )
        path = tmp_path / "weaknull.json"

        config.save(str(path))
        loaded = WeakNullConfig.from_file(str(path))

        assert loaded == config

    def test_partial_file(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text('{"n_jobs": 8}')

        loaded = WeakNullConfig.from_file(str(path))

        assert loaded.n_jobs == 8
        assert loaded.classifier == ClassifierConfig()

    def test_global_instance(self):
        config = WeakNullConfig(n_jobs=6)
        set_config(config)

        assert get_config() is config

    def test_global_reset_reads_env(self, monkeypatch):
        monkeypatch.setenv("WEAKNULL_N_JOBS", "3")
        set_config(None)

        assert get_config().n_jobs == 3


class TestSeeding:
    """Independent, reproducible seeds."""

    def test_spawn_seeds_distinct(self):
        seeds = spawn_seeds(0, 50)

        assert len(seeds) == 50
        assert len(set(seeds)) == 50

    def test_spawn_seeds_reproducible(self):
        assert spawn_seeds(1, 5) == spawn_seeds(1, 5)

    def test_derive_seed_deterministic(self):
        assert derive_seed(42, 3, 0) == derive_seed(42, 3, 0)

    def test_derive_seed_depends_on_keys(self):
        seeds = {derive_seed(42, subject, perm) for subject in range(5) for perm in range(5)}

        assert len(seeds) == 25

    def test_derive_seed_unseeded(self):
        assert derive_seed(None, 1, 2) is None

    def test_derive_seed_negative_key(self):
        with pytest.raises(ValueError):
            derive_seed(1, -1)

    def test_make_rng_passthrough(self):
        rng = np.random.default_rng(0)

        assert make_rng(rng) is rng
