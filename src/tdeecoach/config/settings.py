"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".tdeecoach"


def _default_config_path() -> Path:
    """Return the default config file path."""
    return _default_config_dir() / "config.yaml"


@dataclass
class AIConfig:
    """External text-generation provider configuration.

    The API key itself is never written to the config file; only the name of
    the environment variable holding it.
    """

    enabled: bool = True
    api_key_env: str = "OPENAI_API_KEY"
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    timeout_seconds: float = 25.0


@dataclass
class ValidationConfig:
    """Accuracy validation configuration."""

    pass_threshold: float = 7.0


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table" or "json"
    include_coaching: bool = True
    include_mini_plan: bool = True


@dataclass
class Settings:
    """Main application settings."""

    ai: AIConfig = field(default_factory=AIConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.tdeecoach/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse AI provider config
        if "ai" in data:
            ai_data = data["ai"] or {}
            if "enabled" in ai_data:
                settings.ai.enabled = bool(ai_data["enabled"])
            if "api_key_env" in ai_data:
                settings.ai.api_key_env = str(ai_data["api_key_env"])
            if "base_url" in ai_data:
                settings.ai.base_url = str(ai_data["base_url"]).rstrip("/")
            if "model" in ai_data:
                settings.ai.model = str(ai_data["model"])
            if "timeout_seconds" in ai_data:
                settings.ai.timeout_seconds = float(ai_data["timeout_seconds"])

        # Parse validation config
        if "validation" in data:
            val_data = data["validation"] or {}
            if "pass_threshold" in val_data:
                settings.validation.pass_threshold = float(val_data["pass_threshold"])

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]
            if "include_coaching" in def_data:
                settings.defaults.include_coaching = bool(def_data["include_coaching"])
            if "include_mini_plan" in def_data:
                settings.defaults.include_mini_plan = bool(def_data["include_mini_plan"])

        return settings

    def to_dict(self) -> dict:
        """Return the YAML-serializable form of the settings."""
        return {
            "ai": {
                "enabled": self.ai.enabled,
                "api_key_env": self.ai.api_key_env,
                "base_url": self.ai.base_url,
                "model": self.ai.model,
                "timeout_seconds": self.ai.timeout_seconds,
            },
            "validation": {
                "pass_threshold": self.validation.pass_threshold,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
                "include_coaching": self.defaults.include_coaching,
                "include_mini_plan": self.defaults.include_mini_plan,
            },
        }

    def save(self, config_path: Optional[Path] = None) -> Path:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.tdeecoach/config.yaml

        Returns:
            Path that was written
        """
        if config_path is None:
            config_path = _default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        return config_path


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
