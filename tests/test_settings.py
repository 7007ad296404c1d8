"""Tests for configuration loading and saving."""

from __future__ import annotations

from tdeecoach.config.settings import Settings, reload_settings


class TestSettings:
    """Tests for Settings.load and Settings.save."""

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        settings = Settings.load(tmp_path / "absent.yaml")
        assert settings.ai.model == "gpt-4o-mini"
        assert settings.ai.api_key_env == "OPENAI_API_KEY"
        assert settings.validation.pass_threshold == 7.0
        assert settings.defaults.output_format == "table"

    def test_partial_file(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "ai:\n"
            "  base_url: http://localhost:11434/v1/\n"
            "  timeout_seconds: 60\n"
            "validation:\n"
            "  pass_threshold: 8\n"
        )
        settings = Settings.load(path)

        assert settings.ai.base_url == "http://localhost:11434/v1"
        assert settings.ai.timeout_seconds == 60.0
        assert settings.ai.enabled is True
        assert settings.validation.pass_threshold == 8.0
        assert settings.defaults.include_coaching is True

    def test_empty_sections(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("ai:\ndefaults:\n")
        assert Settings.load(path) == Settings()

    def test_save_and_reload(self, tmp_path) -> None:
        settings = Settings()
        settings.ai.enabled = False
        settings.defaults.output_format = "json"

        written = settings.save(tmp_path / "nested" / "config.yaml")
        assert written.exists()

        reloaded = reload_settings(written)
        assert reloaded.ai.enabled is False
        assert reloaded.defaults.output_format == "json"
        assert reloaded == settings

        reload_settings(tmp_path / "absent.yaml")
