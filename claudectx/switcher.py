"""
Profile operations on top of the store and the live config.

This is the layer the CLI and the login workflow talk to: it validates
names, moves account fields between ~/.claude.json and profile files, and
works out which saved profile is currently live.
"""

from __future__ import annotations

import logging
from typing import Any

from claudectx.config.manager import LiveConfigManager
from claudectx.config.patcher import (
    ACCOUNT_FIELDS,
    account_identity,
    account_summary,
    extract,
    same_json,
)
from claudectx.errors import ConfigCorrupt, ConfigNotFound
from claudectx.profiles import Profile, ProfileStore
from claudectx.settings import ToolSettings
from claudectx.slug import require_slug

logger = logging.getLogger(__name__)


class Switcher:
    """Save, switch, list and delete profiles for one live config."""

    def __init__(
        self,
        settings: ToolSettings,
        store: ProfileStore | None = None,
        manager: LiveConfigManager | None = None,
        fields: tuple[str, ...] = ACCOUNT_FIELDS,
    ) -> None:
        self.settings = settings
        self.fields = fields
        self.store = store or ProfileStore(settings.profiles_dir)
        self.manager = manager or LiveConfigManager(settings.config_path, fields)

    def save_current(self, name: str) -> Profile:
        """Copy the live account fields into profile `name`."""
        slug = require_slug(name)
        live = self.manager.load()
        fields = extract(live, self.fields)
        if not fields:
            logger.warning(
                "%s has no account fields; saving an empty profile '%s'",
                self.manager.config_path,
                slug,
            )
        profile = self.store.save(slug, fields)
        logger.info("Saved profile '%s' (%s)", slug, ", ".join(fields) or "empty")
        return profile

    def switch(self, name: str) -> Profile:
        """
        Make profile `name` the live account.

        The target is loaded before anything is written, so a missing or
        corrupt profile leaves the live config as it was.
        """
        slug = require_slug(name)
        target = self.store.load(slug)
        live = self.manager.load()

        if self.settings.sync_on_switch:
            self._sync_active(live, exclude=slug)

        self.manager.patch(target.fields)
        logger.info("Switched to profile '%s'", slug)
        return target

    def active_slug(self) -> str | None:
        """Slug of the saved profile whose account is currently live."""
        try:
            live = self.manager.load()
        except (ConfigNotFound, ConfigCorrupt):
            return None
        return self._match(live, self.store.list())

    def current_account(self) -> dict[str, str]:
        return account_summary(self.manager.load())

    def list_profiles(self) -> list[Profile]:
        return self.store.list()

    def exists(self, name: str) -> bool:
        return self.store.exists(require_slug(name))

    def delete(self, name: str) -> str:
        slug = require_slug(name)
        self.store.delete(slug)
        logger.info("Deleted profile '%s'", slug)
        return slug

    # Internal helpers -------------------------------------------------

    def _match(self, live: dict[str, Any], profiles: list[Profile]) -> str | None:
        identity = account_identity(live)
        if identity is None:
            return None
        for profile in profiles:
            if profile.identity == identity:
                return profile.slug
        return None

    def _sync_active(self, live: dict[str, Any], exclude: str) -> None:
        """
        Write the live account fields back to the profile they came from.

        Claude Code refreshes tokens and caches while it runs; without this
        the outgoing profile would keep the values from its last save.
        """
        active = self._match(live, self.store.list())
        if active is None or active == exclude:
            return
        current = extract(live, self.fields)
        if same_json(self.store.load(active).fields, current):
            return
        self.store.save(active, current)
        logger.debug("Synced live account fields back to profile '%s'", active)
