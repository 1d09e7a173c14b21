"""
Live config manager for ~/.claude.json.

Handles loading, atomic writing, backup and restore of the single JSON
document Claude Code reads. Writes go to a temp file in the same directory
and are moved into place with os.replace, so a reader never observes a
half-written config and a failed write leaves the original untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
import json
import logging
import os
from pathlib import Path
import shutil
import stat
import tempfile
from typing import Any

from claudectx.config.patcher import ACCOUNT_FIELDS, apply_in_place, changed_fields
from claudectx.errors import ConfigCorrupt, ConfigNotFound, ConfigUnreadable, WriteError

logger = logging.getLogger(__name__)


def dump_json(data: Mapping[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def atomic_write_text(path: Path, content: str) -> None:
    """
    Atomically write content to file using temp + rename.

    Raises WriteError; the target is left as it was on failure.
    """
    path = Path(path)
    fd = None
    temp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        os.write(fd, content.encode("utf-8"))
        os.fsync(fd)
        os.close(fd)
        fd = None

        # Keep permissions of the file being replaced (mkstemp uses 0600)
        if path.exists():
            os.chmod(temp_path, stat.S_IMODE(path.stat().st_mode))

        os.replace(temp_path, path)
        temp_path = None
    except OSError as e:
        raise WriteError(path, e.strerror or str(e)) from e
    finally:
        if fd is not None:
            os.close(fd)
        if temp_path is not None:
            try:
                os.unlink(temp_path)
            except OSError:
                pass


class LiveConfigManager:
    """Reads and writes the live Claude config."""

    def __init__(self, config_path: Path, fields: tuple[str, ...] = ACCOUNT_FIELDS):
        self.config_path = Path(config_path)
        self.fields = fields

    @property
    def backup_path(self) -> Path:
        return self.config_path.with_name(self.config_path.name + ".bak")

    def exists(self) -> bool:
        return self.config_path.is_file()

    def load(self) -> dict[str, Any]:
        """Load and parse the live config."""
        try:
            text = self.config_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ConfigNotFound(self.config_path) from e
        except IsADirectoryError as e:
            raise ConfigCorrupt(self.config_path, "is a directory") from e
        except UnicodeDecodeError as e:
            raise ConfigCorrupt(self.config_path, str(e)) from e
        except OSError as e:
            raise ConfigUnreadable(self.config_path, e.strerror or str(e)) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigCorrupt(self.config_path, str(e)) from e
        if not isinstance(data, dict):
            raise ConfigCorrupt(
                self.config_path, f"expected a JSON object, got {type(data).__name__}"
            )
        return data

    def save(self, config: Mapping[str, Any]) -> None:
        atomic_write_text(self.config_path, dump_json(config))
        logger.debug("Wrote %s", self.config_path)

    def patch(self, profile_fields: Mapping[str, Any]) -> dict[str, Any]:
        """
        Apply account fields to the live config and write it back.

        The whole document is patched in memory first; nothing is written
        when no allow-listed value changes.
        """
        config = self.load()
        changed = changed_fields(config, profile_fields, self.fields)
        if not changed:
            logger.debug("Live config already matches profile, nothing to write")
            return config

        apply_in_place(config, profile_fields, self.fields)
        self.save(config)
        logger.info("Patched %s: %s", self.config_path, ", ".join(changed))
        return config

    def backup(self) -> Path | None:
        """Copy the live config to <config>.bak; None when there is nothing to back up."""
        if not self.exists():
            return None
        try:
            shutil.copy2(self.config_path, self.backup_path)
        except OSError as e:
            raise WriteError(self.backup_path, e.strerror or str(e)) from e
        logger.debug("Backed up %s to %s", self.config_path, self.backup_path)
        return self.backup_path

    def restore(self, backup_path: Path) -> None:
        """Move a backup made by backup() back over the live config."""
        try:
            os.replace(backup_path, self.config_path)
        except OSError as e:
            raise WriteError(self.config_path, e.strerror or str(e)) from e
        logger.debug("Restored %s from %s", self.config_path, backup_path)
