"""
Field-level patching of the live Claude config.

Only the top-level keys in ACCOUNT_FIELDS are account-specific. Everything
else in ~/.claude.json (settings, MCP servers, project history) belongs to
the user and is never read or written here. Values under an account key are
treated as one opaque blob per account: they are copied and replaced
wholesale, never merged recursively.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import copy
import json
from typing import Any

ACCOUNT_FIELDS: tuple[str, ...] = (
    "oauthAccount",
    "userID",
    "clientDataCache",
    "groveConfigCache",
    "passesEligibilityCache",
    "s1mAccessCache",
)


def extract(
    live_config: Mapping[str, Any],
    fields: Iterable[str] = ACCOUNT_FIELDS,
) -> dict[str, Any]:
    """Return a new dict with the allow-listed keys present in `live_config`."""
    return {
        key: copy.deepcopy(live_config[key]) for key in fields if key in live_config
    }


def apply_in_place(
    live_config: dict[str, Any],
    profile_fields: Mapping[str, Any],
    fields: Iterable[str] = ACCOUNT_FIELDS,
) -> dict[str, Any]:
    """
    Overlay the allow-listed keys of `profile_fields` onto `live_config`.

    Keys the profile omits keep their current value; keys outside the
    allow-list are ignored on both sides. Nothing is ever deleted.
    Returns `live_config` itself.
    """
    for key in fields:
        if key in profile_fields:
            live_config[key] = copy.deepcopy(profile_fields[key])
    return live_config


def changed_fields(
    live_config: Mapping[str, Any],
    profile_fields: Mapping[str, Any],
    fields: Iterable[str] = ACCOUNT_FIELDS,
) -> list[str]:
    """Allow-listed keys whose value would change if the profile were applied."""
    return [
        key
        for key in fields
        if key in profile_fields
        and (
            key not in live_config
            or not same_json(live_config[key], profile_fields[key])
        )
    ]


def same_json(a: Any, b: Any) -> bool:
    """
    Equality as JSON documents.

    Python treats True == 1 == 1.0, but `true`, `1` and `1.0` are different
    values once written back to disk.
    """
    return json.dumps(a, sort_keys=True) == json.dumps(b, sort_keys=True)


def account_identity(fields: Mapping[str, Any]) -> str | None:
    """
    Stable identity of the account described by `fields`.

    Prefers the OAuth account UUID, then its email address, then userID.
    """
    account = fields.get("oauthAccount")
    if isinstance(account, Mapping):
        for key in ("accountUuid", "emailAddress"):
            value = account.get(key)
            if value:
                return f"{key}:{value}"
    user_id = fields.get("userID")
    if user_id:
        return f"userID:{user_id}"
    return None


def account_summary(fields: Mapping[str, Any]) -> dict[str, str]:
    """Display fields of the OAuth account, empty strings when missing."""
    account = fields.get("oauthAccount")
    if not isinstance(account, Mapping):
        account = {}
    return {
        "display_name": str(account.get("displayName") or ""),
        "email": str(account.get("emailAddress") or ""),
        "organization": str(account.get("organizationName") or ""),
    }
