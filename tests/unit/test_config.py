"""Тесты для EngineConfig.

Coverage:
- Значения по умолчанию
- Валидация в __post_init__
- Environment overrides (NUMINT_THROTTLE_MS, NUMINT_MAX_WORKERS, NUMINT_PROGRESS)
"""

import dataclasses

import pytest

from numint.config import DEMO_THROTTLE_SECONDS, EngineConfig


class TestEngineConfig:
    """Тесты EngineConfig."""

    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.throttle_seconds == 0.0
        assert config.max_workers is None
        assert config.progress_enabled is True

    def test_frozen(self) -> None:
        config = EngineConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.max_workers = 4

    def test_negative_throttle_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            EngineConfig(throttle_seconds=-0.001)

    def test_zero_workers_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_workers"):
            EngineConfig(max_workers=0)

    def test_demo_throttle_is_ten_milliseconds(self) -> None:
        assert DEMO_THROTTLE_SECONDS == pytest.approx(0.01)


class TestEngineConfigFromEnv:
    """Environment overrides."""

    def test_empty_environment_keeps_base(self) -> None:
        base = EngineConfig(throttle_seconds=0.5)
        assert EngineConfig.from_env({}, base=base) is base

    def test_all_overrides(self) -> None:
        config = EngineConfig.from_env(
            {
                "NUMINT_THROTTLE_MS": "2.5",
                "NUMINT_MAX_WORKERS": "3",
                "NUMINT_PROGRESS": "off",
            }
        )
        assert config.throttle_seconds == pytest.approx(0.0025)
        assert config.max_workers == 3
        assert config.progress_enabled is False

    @pytest.mark.parametrize("flag", ["1", "true", "YES", " on "])
    def test_progress_enabled_flags(self, flag) -> None:
        base = EngineConfig(progress_enabled=False)
        assert EngineConfig.from_env({"NUMINT_PROGRESS": flag}, base=base).progress_enabled

    def test_reads_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv("NUMINT_MAX_WORKERS", "2")
        monkeypatch.delenv("NUMINT_THROTTLE_MS", raising=False)
        monkeypatch.delenv("NUMINT_PROGRESS", raising=False)
        assert EngineConfig.from_env().max_workers == 2

    @pytest.mark.parametrize(
        "name, value",
        [
            ("NUMINT_THROTTLE_MS", "fast"),
            ("NUMINT_MAX_WORKERS", "many"),
            ("NUMINT_PROGRESS", "maybe"),
        ],
    )
    def test_invalid_values_name_variable(self, name, value) -> None:
        with pytest.raises(ValueError, match=name):
            EngineConfig.from_env({name: value})

    def test_override_still_validated(self) -> None:
        with pytest.raises(ValueError, match="max_workers"):
            EngineConfig.from_env({"NUMINT_MAX_WORKERS": "0"})
