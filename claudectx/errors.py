"""
Error types raised by claudectx.

Library code raises these; the CLI turns them into a message on stderr and
the exit code carried by the exception.
"""

from __future__ import annotations

from pathlib import Path


class ClaudectxError(Exception):
    """Base class for every error surfaced to the user."""

    exit_code = 1


class InvalidProfileName(ClaudectxError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Invalid profile name {name!r}: it must contain at least one letter or digit"
        )


class ProfileNotFound(ClaudectxError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Profile '{slug}' not found")


class ProfileCorrupt(ClaudectxError):
    verb = "parse"

    def __init__(self, slug: str, reason: str):
        self.slug = slug
        super().__init__(f"Failed to {self.verb} profile '{slug}': {reason}")


class ProfileUnreadable(ProfileCorrupt):
    verb = "read"


class ConfigNotFound(ClaudectxError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"Failed to read Claude config at {path} - is Claude Code installed? "
            "Run 'claudectx login' or 'claude /login' first."
        )


class ConfigCorrupt(ClaudectxError):
    verb = "parse"

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Failed to {self.verb} Claude config at {path}: {reason}")


class ConfigUnreadable(ConfigCorrupt):
    verb = "read"


class WriteError(ClaudectxError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")


class ExecutableNotFound(ClaudectxError):
    exit_code = 127

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(
            f"Executable '{executable}' not found on PATH - is Claude Code installed?"
        )


class LoginFailed(ClaudectxError):
    """Raised when `claude /login` fails or leaves no config behind."""


class SettingsError(ClaudectxError):
    """Raised when the claudectx settings file is invalid."""
