from pathlib import Path

from mapscore.core.config import Settings


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("MAPSCORE_ENVIRONMENT", "prod")
    monkeypatch.setenv("MAPSCORE_NORMS_FILE", "/srv/norms/map-2025.yaml")
    monkeypatch.setenv("MAPSCORE_PRELOAD_NORMS", "false")
    settings = Settings(_env_file=None)
    assert settings.environment == "prod"
    assert settings.is_production is True
    assert settings.norms_file == Path("/srv/norms/map-2025.yaml")
    assert settings.preload_norms is False


def test_blank_norms_file_means_builtin(monkeypatch):
    monkeypatch.setenv("MAPSCORE_NORMS_FILE", "  ")
    settings = Settings(_env_file=None)
    assert settings.norms_file is None
    assert settings.is_production is False


def test_debug_is_forced_off_in_production(monkeypatch):
    monkeypatch.setenv("MAPSCORE_ENVIRONMENT", "prod")
    monkeypatch.setenv("MAPSCORE_DEBUG", "true")
    assert Settings(_env_file=None).debug is False

    monkeypatch.setenv("MAPSCORE_ENVIRONMENT", "staging")
    assert Settings(_env_file=None).debug is True
