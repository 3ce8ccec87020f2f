"""Configuration management for the N-Queens visualizer.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize board limits, animation pacing and output options.

File format (high-level)
------------------------
- board_settings: default N, maximum N and the find-all confirmation threshold.
- animation_settings: step delay, solution pause, auto-skip threshold and
  verbosity while skipping.
- output_settings: output directory, run tag and datestamp policy.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist visualizer configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_board_settings(self):
        """Return board limits (default_size, max_size, confirm_threshold)."""
        return self.config.get("board_settings", {})

    def get_animation_settings(self):
        """Return pacing settings (step_delay, solution_pause, auto_skip_threshold, ...)."""
        return self.config.get("animation_settings", {})

    def get_output_settings(self):
        """Return output settings (output_dir, run_tag, date_in_filenames)."""
        return self.config.get("output_settings", {})

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
