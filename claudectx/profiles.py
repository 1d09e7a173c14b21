"""Profile store: one JSON file per profile under the profiles directory."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Any

from claudectx.config.manager import atomic_write_text, dump_json
from claudectx.config.patcher import account_identity, account_summary
from claudectx.errors import ProfileCorrupt, ProfileNotFound, ProfileUnreadable, WriteError
from claudectx.slug import require_slug, slugify

logger = logging.getLogger(__name__)

PROFILE_SUFFIX = ".json"


@dataclass
class Profile:
    slug: str
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return account_summary(self.fields)["display_name"]

    @property
    def email(self) -> str:
        return account_summary(self.fields)["email"]

    @property
    def organization(self) -> str:
        return account_summary(self.fields)["organization"]

    @property
    def identity(self) -> str | None:
        return account_identity(self.fields)

    @property
    def label(self) -> str:
        """Picker/list line, e.g. "work - Jane Doe @ Acme"."""
        who = self.display_name or self.email
        if who and self.organization:
            return f"{self.slug} - {who} @ {self.organization}"
        if who:
            return f"{self.slug} - {who}"
        return self.slug


class ProfileStore:
    """Persist profiles as individual JSON files, sorted by slug."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path_for(self, slug: str) -> Path:
        return self.root / f"{require_slug(slug)}{PROFILE_SUFFIX}"

    def exists(self, slug: str) -> bool:
        return self.path_for(slug).is_file()

    def list(self) -> list[Profile]:
        """All readable profiles, ordered lexicographically by slug."""
        if not self.root.is_dir():
            return []

        profiles: list[Profile] = []
        for path in self.root.glob(f"*{PROFILE_SUFFIX}"):
            slug = path.name[: -len(PROFILE_SUFFIX)]
            # Skip in-flight temp files and names save() would never produce
            if slugify(slug) != slug or not path.is_file():
                continue
            try:
                profiles.append(self._load_path(slug, path))
            except ProfileCorrupt as e:
                # One bad file should not hide the others
                logger.warning("skip %s: %s", path, e)
        return sorted(profiles, key=lambda p: p.slug)

    def load(self, slug: str) -> Profile:
        slug = require_slug(slug)
        path = self.path_for(slug)
        if not path.is_file():
            raise ProfileNotFound(slug)
        return self._load_path(slug, path)

    def save(self, slug: str, fields: Mapping[str, Any]) -> Profile:
        slug = require_slug(slug)
        path = self.path_for(slug)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(self.root, e.strerror or str(e)) from e
        atomic_write_text(path, dump_json(fields))
        logger.debug("Saved profile %s to %s", slug, path)
        return Profile(slug=slug, fields=dict(fields))

    def delete(self, slug: str) -> None:
        slug = require_slug(slug)
        path = self.path_for(slug)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise ProfileNotFound(slug) from e
        except OSError as e:
            raise WriteError(path, e.strerror or str(e)) from e
        logger.debug("Deleted profile %s", slug)

    # Internal helpers -------------------------------------------------

    def _load_path(self, slug: str, path: Path) -> Profile:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProfileCorrupt(slug, str(e)) from e
        except OSError as e:
            raise ProfileUnreadable(slug, e.strerror or str(e)) from e
        if not isinstance(raw, dict):
            raise ProfileCorrupt(slug, f"expected a JSON object, got {type(raw).__name__}")
        return Profile(slug=slug, fields=raw)
