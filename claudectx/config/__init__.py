"""
Live config module.

Provides the account-field patcher and the manager that loads and atomically
rewrites ~/.claude.json.
"""

from claudectx.config.manager import LiveConfigManager, atomic_write_text
from claudectx.config.patcher import ACCOUNT_FIELDS, apply_in_place, extract

__all__ = [
    "ACCOUNT_FIELDS",
    "LiveConfigManager",
    "apply_in_place",
    "atomic_write_text",
    "extract",
]
