"""Configuration management for screenkit."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from screenkit.data.models import Settings
from screenkit.errors import ScreenkitError
from screenkit.utils.logger import get_logger
from screenkit.vision.template_matcher import MATCHING_METHODS


class ConfigError(ScreenkitError):
    """Configuration related error."""
    pass


class ConfigManager:
    """
    Manages screenkit settings from a YAML file.

    Missing sections and keys fall back to the Settings defaults; values
    that cannot be used are logged and replaced by their default.
    """

    DEFAULT_CONFIG_DIR = "config"
    SETTINGS_FILE = "settings.yaml"

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config manager.

        Args:
            config_dir: Path to configuration directory
        """
        self.config_dir = Path(config_dir or self.DEFAULT_CONFIG_DIR)
        self.log = get_logger("config")
        self._settings: Optional[Settings] = None

    @property
    def settings_path(self) -> Path:
        return self.config_dir / self.SETTINGS_FILE

    def load(self) -> Settings:
        """
        Load settings.

        Returns:
            Settings object

        Raises:
            ConfigError: If the settings file is invalid
        """
        settings_path = self.settings_path

        if not settings_path.exists():
            self.log.warning(f"No {self.SETTINGS_FILE} found at {settings_path}, using defaults")
            self._settings = Settings()
            return self._settings

        try:
            with open(settings_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.SETTINGS_FILE}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{self.SETTINGS_FILE} must contain a mapping at top level")

        self._settings = self._parse_settings(data)
        self.log.info(f"Loaded settings from {settings_path}")
        return self._settings

    def _parse_settings(self, data: Dict[str, Any]) -> Settings:
        """Parse raw YAML data into a Settings object."""
        defaults = Settings()
        matching = data.get("matching") or {}
        ocr = data.get("ocr") or {}
        input_cfg = data.get("input") or {}
        logging_cfg = data.get("logging") or {}

        method = str(matching.get("method", defaults.matching_method)).lower()
        if method not in MATCHING_METHODS:
            self.log.warning(
                f"Unknown matching method '{method}', defaulting to {defaults.matching_method}"
            )
            method = defaults.matching_method

        if "language" in ocr:
            self.log.warning(
                "ocr.language is ignored; pass a Language to read_text/read_words instead"
            )

        max_workers = ocr.get("max_workers", defaults.ocr_max_workers)
        if not isinstance(max_workers, int) or max_workers < 1:
            self.log.warning(f"Invalid OCR max_workers '{max_workers}', defaulting to 1")
            max_workers = defaults.ocr_max_workers

        return Settings(
            # Matching
            matching_method=method,
            min_distance=matching.get("min_distance", defaults.min_distance),
            max_candidates=matching.get("max_candidates", defaults.max_candidates),
            # OCR
            tesseract_cmd=ocr.get("tesseract_cmd", defaults.tesseract_cmd),
            ocr_psm=ocr.get("psm", defaults.ocr_psm),
            ocr_max_workers=max_workers,
            ocr_extra_config=ocr.get("extra_config", defaults.ocr_extra_config),
            # Input
            mouse_delay_ms=input_cfg.get("mouse_delay_ms", defaults.mouse_delay_ms),
            keyboard_delay_ms=input_cfg.get("keyboard_delay_ms", defaults.keyboard_delay_ms),
            # Logging
            log_level=logging_cfg.get("level", defaults.log_level),
            log_dir=logging_cfg.get("directory", defaults.log_dir),
            log_to_file=logging_cfg.get("file", defaults.log_to_file),
        )

    def get_settings(self) -> Settings:
        """Get loaded settings, loading if necessary."""
        if self._settings is None:
            self.load()
        return self._settings

    def save(self, settings: Settings) -> None:
        """
        Save settings to settings.yaml.

        Args:
            settings: Settings object to save
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "matching": {
                "method": settings.matching_method,
                "min_distance": settings.min_distance,
                "max_candidates": settings.max_candidates,
            },
            "ocr": {
                "tesseract_cmd": settings.tesseract_cmd,
                "psm": settings.ocr_psm,
                "max_workers": settings.ocr_max_workers,
                "extra_config": settings.ocr_extra_config,
            },
            "input": {
                "mouse_delay_ms": settings.mouse_delay_ms,
                "keyboard_delay_ms": settings.keyboard_delay_ms,
            },
            "logging": {
                "level": settings.log_level,
                "directory": settings.log_dir,
                "file": settings.log_to_file,
            },
        }

        with open(self.settings_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

        self._settings = settings
        self.log.info(f"Saved settings to {self.settings_path}")
