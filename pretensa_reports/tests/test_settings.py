"""Tests for export defaults and logging setup."""

from pretensa_reports.config.settings import CORPORATE_COLORS, ExportSettings, init_logging


def test_default_settings() -> None:
    settings = ExportSettings.default()
    assert settings.company.name == "Estructuras Pretensa"
    assert settings.branding.primary_color == CORPORATE_COLORS["primary"]
    assert settings.default_title == "Reporte de Datos"


def test_default_settings_are_independent() -> None:
    first = ExportSettings.default()
    first.keywords.append("extra")
    assert "extra" not in ExportSettings.default().keywords


def test_init_logging_opens_log_file(tmp_path) -> None:
    log_file = tmp_path / "exportaciones.log"
    init_logging(log_file=log_file)
    assert log_file.exists()
