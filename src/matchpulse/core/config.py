"""
Configuration Management for MatchPulse

Provides configuration loading from multiple sources:
- Default values
- Configuration files (YAML, TOML, JSON)
- Environment variables
- Command line arguments

Configuration precedence (highest to lowest):
1. Command line arguments
2. Environment variables (MATCHPULSE_*)
3. Configuration file
4. Default values
"""

import json
import logging
import logging.handlers
import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Dataclasses
# ============================================================================


@dataclass
class StatisticsConfig:
    """Settings for the statistics views.

    The heuristics themselves (half-time minute, momentum window, possession
    and pass accuracy) are fixed module constants.
    """

    # Default player count for "top performers" listings; 0 lists everyone
    top_performers: int = 5


@dataclass
class LiveConfig:
    """Configuration for live match sessions."""

    # 0 = keep every event (statistics always use the full count)
    event_history_limit: int = 0
    warn_on_duplicate_ids: bool = True
    default_time_range: str = "all"


@dataclass
class ExportConfig:
    """Configuration for data export."""

    default_format: str = "json"
    json_indent: int = 2
    csv_delimiter: str = ","
    include_metadata: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str | None = None
    file_max_bytes: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5


@dataclass
class MatchPulseConfig:
    """Main configuration container."""

    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    live: LiveConfig = field(default_factory=LiveConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Version of the config format
    config_version: str = "1.0"


SECTIONS = ("statistics", "live", "export", "logging")


# ============================================================================
# Configuration Loading
# ============================================================================


def get_default_config_paths() -> list[Path]:
    """Get the default paths to search for configuration files."""
    paths = []

    # Current directory
    paths.append(Path.cwd() / "matchpulse.yaml")
    paths.append(Path.cwd() / "matchpulse.toml")
    paths.append(Path.cwd() / "matchpulse.json")
    paths.append(Path.cwd() / ".matchpulse.yaml")

    # User home directory
    home = Path.home()
    paths.append(home / ".config" / "matchpulse" / "config.yaml")
    paths.append(home / ".config" / "matchpulse" / "config.toml")
    paths.append(home / ".matchpulse.yaml")

    # XDG config directory
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(home / ".config"))
    paths.append(Path(xdg_config) / "matchpulse" / "config.yaml")

    return paths


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file."""
    import yaml

    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_json_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON file."""
    with open(path) as f:
        return json.load(f)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a file, detecting format from extension."""
    if not path.exists():
        return {}

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return load_yaml_config(path)
    elif suffix == ".toml":
        return load_toml_config(path)
    elif suffix == ".json":
        return load_json_config(path)
    else:
        logger.warning(f"Unknown config file format: {suffix}")
        return {}


def _convert_env_value(value: str) -> Any:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    env_mappings = {
        "MATCHPULSE_LOG_LEVEL": ("logging", "level"),
        "MATCHPULSE_LOG_FILE": ("logging", "file"),
        "MATCHPULSE_EXPORT_FORMAT": ("export", "default_format"),
        "MATCHPULSE_JSON_INDENT": ("export", "json_indent"),
        "MATCHPULSE_CSV_DELIMITER": ("export", "csv_delimiter"),
        "MATCHPULSE_EVENT_HISTORY_LIMIT": ("live", "event_history_limit"),
        "MATCHPULSE_WARN_ON_DUPLICATES": ("live", "warn_on_duplicate_ids"),
        "MATCHPULSE_TOP_PERFORMERS": ("statistics", "top_performers"),
    }

    for env_var, (section, key) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            config.setdefault(section, {})[key] = _convert_env_value(value)

    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def dict_to_config(data: dict[str, Any]) -> MatchPulseConfig:
    """Convert a dictionary to MatchPulseConfig. Unknown keys are ignored."""
    config = MatchPulseConfig()

    for section in SECTIONS:
        values = data.get(section)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)
            else:
                logger.debug(f"Ignoring unknown config key: {section}.{key}")

    return config


def load_config(config_file: Path | None = None, include_env: bool = True) -> MatchPulseConfig:
    """
    Load configuration from all sources.

    Args:
        config_file: Explicit path to a config file (optional)
        include_env: Whether to include environment variables

    Returns:
        Merged MatchPulseConfig
    """
    config_data: dict[str, Any] = {}

    if config_file:
        config_data = load_config_file(config_file)
        logger.info(f"Loaded config from: {config_file}")
    else:
        for path in get_default_config_paths():
            if path.exists():
                config_data = load_config_file(path)
                logger.info(f"Loaded config from: {path}")
                break

    if include_env:
        config_data = merge_configs(config_data, load_env_config())

    return dict_to_config(config_data)


# ============================================================================
# Configuration Saving
# ============================================================================


def config_to_dict(config: MatchPulseConfig) -> dict[str, Any]:
    """Convert MatchPulseConfig to a dictionary."""
    return asdict(config)


def save_config(config: MatchPulseConfig, path: Path) -> None:
    """
    Save configuration to a file.

    Args:
        config: Configuration to save
        path: Path to save to (.yaml, .yml or .json)
    """
    data = config_to_dict(config)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        import yaml

        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    elif suffix == ".json":
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    else:
        raise ValueError(f"Unsupported config format for saving: {suffix}")

    logger.info(f"Saved config to: {path}")


# ============================================================================
# Logging Setup
# ============================================================================


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Apply logging configuration to the root logger."""
    config = config or get_config().logging

    root = logging.getLogger()
    level = getattr(logging, str(config.level).upper(), logging.INFO)
    root.setLevel(level)

    formatter = logging.Formatter(config.format)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if config.file:
        file_handler = logging.handlers.RotatingFileHandler(
            config.file,
            maxBytes=config.file_max_bytes,
            backupCount=config.file_backup_count,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        logger.info(f"Logging to file: {config.file}")


# ============================================================================
# Global Configuration
# ============================================================================

_global_config: MatchPulseConfig | None = None


def get_config() -> MatchPulseConfig:
    """Get the global configuration, loading it if necessary."""
    global _global_config

    if _global_config is None:
        _global_config = load_config()

    return _global_config


def set_config(config: MatchPulseConfig) -> None:
    """Set the global configuration."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _global_config
    _global_config = None


# ============================================================================
# Configuration Templates
# ============================================================================

DEFAULT_CONFIG_YAML = """# MatchPulse Configuration

# Statistics display settings (the heuristics themselves are fixed)
statistics:
  top_performers: 5

# Live session settings
live:
  event_history_limit: 0      # 0 = keep every event
  warn_on_duplicate_ids: true
  default_time_range: all     # all, first_half, second_half

# Export settings
export:
  default_format: json
  json_indent: 2
  csv_delimiter: ","
  include_metadata: true

# Logging settings
logging:
  level: INFO
  # file: /path/to/matchpulse.log
"""


def generate_default_config(path: Path) -> None:
    """Generate a default configuration file."""
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        path.write_text(DEFAULT_CONFIG_YAML)
    else:
        save_config(MatchPulseConfig(), path)

    logger.info(f"Generated default config at: {path}")
