"""claudectx - switch Claude Code accounts by swapping profile fields."""

CLAUDECTX_VERSION = "0.2.0"

__version__ = CLAUDECTX_VERSION
