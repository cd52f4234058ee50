from __future__ import annotations

from pathlib import Path

import pytest

from phi_accrual.config import (
    FailureDetectorConfig,
    PhiAccrualConfig,
    discover_config,
    load_config,
)


class TestFailureDetectorConfig:
    def test_defaults(self) -> None:
        cfg = FailureDetectorConfig()
        assert cfg.window_length == 100
        assert cfg.threshold == 8.0
        assert cfg.min_samples == 1

    def test_custom(self) -> None:
        cfg = FailureDetectorConfig(window_length=20, threshold=12.0)
        assert cfg.window_length == 20
        assert cfg.threshold == 12.0

    def test_frozen(self) -> None:
        cfg = FailureDetectorConfig()
        with pytest.raises(AttributeError):
            cfg.threshold = 1.0  # type: ignore[misc]


def test_top_level_defaults() -> None:
    assert PhiAccrualConfig().failure_detector == FailureDetectorConfig()


class TestLoadConfig:
    def test_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "phi_accrual.toml"
        path.write_text(
            "[failure_detector]\nwindow_length = 32\nthreshold = 10.5\n"
        )
        cfg = load_config(path)
        assert cfg.failure_detector == FailureDetectorConfig(
            window_length=32, threshold=10.5
        )

    def test_partial_table_keeps_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "phi_accrual.toml"
        path.write_text("[failure_detector]\nthreshold = 5.0\n")
        cfg = load_config(path)
        assert cfg.failure_detector.window_length == 100
        assert cfg.failure_detector.threshold == 5.0

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "phi_accrual.toml"
        path.write_text("")
        assert load_config(path) == PhiAccrualConfig()

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "phi_accrual.toml"
        path.write_text("[failure_detector]\nmax_sample_size = 5\n")
        with pytest.raises(TypeError):
            load_config(path)

    def test_discovered_from_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "phi_accrual.toml").write_text(
            "[failure_detector]\nwindow_length = 7\n"
        )
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert load_config().failure_detector.window_length == 7


class TestDiscoverConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        target = tmp_path / "phi_accrual.toml"
        target.write_text("")
        nested = tmp_path / "x" / "y"
        nested.mkdir(parents=True)
        assert discover_config(nested) == target.resolve()

    def test_prefers_nearest(self, tmp_path: Path) -> None:
        (tmp_path / "phi_accrual.toml").write_text("")
        nested = tmp_path / "inner"
        nested.mkdir()
        (nested / "phi_accrual.toml").write_text("")
        assert discover_config(nested) == (nested / "phi_accrual.toml").resolve()
