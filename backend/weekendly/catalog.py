"""
Read-only activity catalog: activities grouped by category, themes, and weekend options.

Entries are validated when the catalog is built, so malformed data fails at
load time rather than in the middle of a placement.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .catalog_data import DEFAULT_CATALOG
from .errors import CatalogError, UnknownOptionError
from .models import Activity, Theme, WeekendConfiguration
from .observability import log_event

logger = logging.getLogger("weekendly.catalog")


class Catalog:
    """Catalog provider. Immutable for the lifetime of a planning session."""

    def __init__(
        self,
        activities: List[Activity],
        themes: List[Theme],
        weekend_options: List[WeekendConfiguration],
        group_names: Optional[Dict[str, str]] = None,
    ):
        ids = [a.id for a in activities]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise CatalogError(f"Duplicate activity ids in catalog: {', '.join(duplicates)}")
        if not weekend_options:
            raise CatalogError("Catalog must define at least one weekend option")

        self._activities = tuple(activities)
        self._by_id = {a.id: a for a in activities}
        self._themes = {t.key: t for t in themes}
        self._options = {o.key: o for o in weekend_options}
        self.group_names = dict(group_names or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Catalog":
        """
        Build a catalog from plain data.

        Expected shape::

            {"groups": {key: {"name": ..., "activities": [...]}},
             "themes": {key: {"name": ..., "activity_ids": [...]}},
             "weekend_options": {key: {"name": ..., "days": [...]}}}
        """
        activities: List[Activity] = []
        group_names: Dict[str, str] = {}
        try:
            for group_key, group in (data.get("groups") or {}).items():
                group_names[group_key] = group.get("name", group_key)
                for entry in group.get("activities", []):
                    activities.append(Activity(**{**entry, "group": group_key, "source": "catalog"}))

            themes = [
                Theme(key=key, **theme) for key, theme in (data.get("themes") or {}).items()
            ]
            options = [
                WeekendConfiguration(key=key, **option)
                for key, option in (data.get("weekend_options") or {}).items()
            ]
        except (ValidationError, TypeError) as e:
            raise CatalogError(f"Invalid catalog entry: {e}") from e

        return cls(activities, themes, options, group_names)

    @classmethod
    def from_file(cls, path: str) -> "Catalog":
        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Could not read catalog file {path}: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def default(cls) -> "Catalog":
        return cls.from_dict(DEFAULT_CATALOG)

    # Provider interface

    def get_all_activities(self) -> List[Activity]:
        return list(self._activities)

    def get_themes(self) -> List[Theme]:
        return list(self._themes.values())

    def get_weekend_options(self) -> List[WeekendConfiguration]:
        return list(self._options.values())

    # Lookups

    def get_activity(self, activity_id: str) -> Optional[Activity]:
        return self._by_id.get(activity_id)

    def get_theme(self, key: str) -> Theme:
        theme = self._themes.get(key)
        if theme is None:
            raise UnknownOptionError(f"Unknown theme: {key}")
        return theme

    def get_weekend_option(self, key: str) -> WeekendConfiguration:
        option = self._options.get(key)
        if option is None:
            raise UnknownOptionError(f"Unknown weekend option: {key}")
        return option

    def resolve_theme(self, theme: Theme) -> List[Activity]:
        """Catalog activities for a theme, in theme order; unknown and repeated ids are skipped."""
        resolved: List[Activity] = []
        seen = set()
        for activity_id in theme.activity_ids:
            activity = self._by_id.get(activity_id)
            if activity is None or activity_id in seen:
                continue
            seen.add(activity_id)
            resolved.append(activity)
        return resolved

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groups": {
                key: {
                    "name": name,
                    "activities": [a.model_dump() for a in self._activities if a.group == key],
                }
                for key, name in self.group_names.items()
            },
            "themes": {t.key: t.model_dump(exclude={"key"}) for t in self._themes.values()},
            "weekend_options": {o.key: o.model_dump(exclude={"key"}) for o in self._options.values()},
        }


def load_catalog(catalog_path: Optional[str] = None) -> Catalog:
    """Load the catalog file when a path is configured, else the built-in catalog."""
    catalog = Catalog.from_file(catalog_path) if catalog_path else Catalog.default()
    log_event(
        logger,
        logging.INFO,
        "catalog_loaded",
        source=catalog_path or "builtin",
        activities=len(catalog.get_all_activities()),
        themes=len(catalog.get_themes()),
        weekend_options=len(catalog.get_weekend_options()),
    )
    return catalog
