"""
Tool settings for claudectx.

Resolution order (later wins):
1. built-in defaults rooted at the home directory
2. the [claudectx] table of the settings file
   ($CLAUDECTX_CONFIG, default ~/.config/claudectx/config.toml)
3. CLAUDECTX_* environment variables
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib
from typing import Any

from claudectx.errors import SettingsError

CONFIG_FILENAME = ".claude.json"
PROFILES_DIRNAME = ".claudectx"
DEFAULT_EXECUTABLE = "claude"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class ToolSettings:
    home: Path
    config_path: Path
    profiles_dir: Path
    executable: str = DEFAULT_EXECUTABLE
    log_level: str = DEFAULT_LOG_LEVEL
    sync_on_switch: bool = True

    @classmethod
    def for_home(cls, home: Path, **overrides: Any) -> ToolSettings:
        """Defaults for a given home directory (handy in tests)."""
        home = Path(home)
        values: dict[str, Any] = {
            "home": home,
            "config_path": home / CONFIG_FILENAME,
            "profiles_dir": home / PROFILES_DIRNAME,
        }
        values.update(overrides)
        return cls(**values)


def _expand(path: str | Path) -> Path:
    return Path(os.path.expanduser(str(path)))


def home_dir(env: Mapping[str, str] | None = None) -> Path:
    """
    Home directory, with CLAUDECTX_HOME taking precedence.

    The override keeps child processes and tests away from the real
    ~/.claude.json.
    """
    env = os.environ if env is None else env
    override = env.get("CLAUDECTX_HOME")
    if override:
        return _expand(override)
    return Path.home()


def settings_file_path(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    explicit = env.get("CLAUDECTX_CONFIG")
    if explicit:
        return _expand(explicit)
    xdg = env.get("XDG_CONFIG_HOME")
    base = _expand(xdg) if xdg else home_dir(env) / ".config"
    return base / "claudectx" / "config.toml"


def _read_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise SettingsError(f"Invalid settings file {path}: {e}") from e

    section = raw.get("claudectx", {})
    if not isinstance(section, dict):
        raise SettingsError(f"Invalid settings file {path}: [claudectx] must be a table")
    return section


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    low = str(value).strip().lower()
    if low in ("1", "true", "yes", "on"):
        return True
    if low in ("0", "false", "no", "off"):
        return False
    raise SettingsError(f"Invalid boolean for {key}: {value!r}")


def load_settings(env: Mapping[str, str] | None = None) -> ToolSettings:
    """Build ToolSettings from defaults, the settings file and the environment."""
    env = os.environ if env is None else env

    home = home_dir(env)
    raw = _read_settings_file(settings_file_path(env))

    settings = ToolSettings.for_home(home)

    if "config_path" in raw:
        settings.config_path = _expand(raw["config_path"])
    if "profiles_dir" in raw:
        settings.profiles_dir = _expand(raw["profiles_dir"])
    if "executable" in raw:
        settings.executable = str(raw["executable"])
    if "log_level" in raw:
        settings.log_level = str(raw["log_level"])
    if "sync_on_switch" in raw:
        settings.sync_on_switch = _parse_bool(raw["sync_on_switch"], "sync_on_switch")

    if env.get("CLAUDECTX_PROFILES_DIR"):
        settings.profiles_dir = _expand(env["CLAUDECTX_PROFILES_DIR"])
    if env.get("CLAUDECTX_EXECUTABLE"):
        settings.executable = env["CLAUDECTX_EXECUTABLE"]
    if env.get("CLAUDECTX_LOG_LEVEL"):
        settings.log_level = env["CLAUDECTX_LOG_LEVEL"]

    settings.log_level = settings.log_level.upper()
    if settings.log_level not in _LOG_LEVELS:
        raise SettingsError(
            f"Invalid log_level '{settings.log_level}' "
            f"(allowed: {', '.join(sorted(_LOG_LEVELS))})"
        )
    if not settings.executable:
        raise SettingsError("executable must not be empty")

    return settings
