"""Expansion catalog: the fixed table of expansion team definitions.

Supports two flows:
1. The built-in 31-team catalog (``DEFAULT_CATALOG``)
2. A YAML override, loaded when ``GRIDIRON_CATALOG_PATH`` is set
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

import yaml

from gridiron.config import Settings
from gridiron.models.expansion import ExpansionCatalogEntry, TeamColors

logger = logging.getLogger(__name__)


class ExpansionCatalog:
    """Immutable name → entry table. Names and logo ids are both unique."""

    def __init__(self, entries: Iterable[ExpansionCatalogEntry]) -> None:
        self._entries: dict[str, ExpansionCatalogEntry] = {}
        seen_logos: dict[int, str] = {}
        for entry in entries:
            if entry.name in self._entries:
                raise ValueError(f"Duplicate catalog entry: {entry.name}")
            if entry.logo_id in seen_logos:
                raise ValueError(
                    f"Logo id {entry.logo_id} shared by {seen_logos[entry.logo_id]} "
                    f"and {entry.name}"
                )
            self._entries[entry.name] = entry
            seen_logos[entry.logo_id] = entry.name

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ExpansionCatalogEntry]:
        return iter(self._entries.values())

    def get(self, name: str) -> ExpansionCatalogEntry | None:
        """Look up an entry by exact name."""
        return self._entries.get(name)

    def is_valid_name(self, name: str | None) -> bool:
        """True if ``name`` is a catalog key. Matching is exact (case-sensitive)."""
        return bool(name) and name in self._entries

    def names(self) -> list[str]:
        return list(self._entries)

    def entries(self) -> list[ExpansionCatalogEntry]:
        return list(self._entries.values())

    def logo_id_for(self, name: str, fallback: int) -> int:
        """Catalog logo id for ``name``; ``fallback`` when the name is not cataloged."""
        entry = self._entries.get(name)
        return entry.logo_id if entry is not None else fallback

    def colors_for(self, name: str) -> TeamColors | None:
        entry = self._entries.get(name)
        return entry.colors if entry is not None else None


def _entry(name: str, logo_id: int, *colors: str) -> ExpansionCatalogEntry:
    primary, secondary, *rest = colors
    return ExpansionCatalogEntry(
        name=name,
        colors=TeamColors(primary=primary, secondary=secondary, tertiary=rest[0] if rest else None),
        logo_id=logo_id,
    )


DEFAULT_CATALOG = ExpansionCatalog(
    [
        _entry("Antlers", 1, "Green", "White", "Brown"),
        _entry("Armadillos", 2, "Red", "Gold", "Black"),
        _entry("Aviators", 3, "Black", "Blue", "White"),
        _entry("Bisons", 4, "Yellow", "Orange", "Blue"),
        _entry("Black Knights", 5, "Black", "White", "Red"),
        _entry("Blues", 6, "Blue", "White", "Black"),
        _entry("Bulls", 7, "White", "Blue", "Yellow"),
        _entry("Caps", 8, "White", "Blue", "Red"),
        _entry("Condors", 9, "White", "Purple", "Black"),
        _entry("Desperados", 10, "Black", "Grey", "Red"),
        _entry("Dragons", 11, "Red", "Black", "White"),
        _entry("Dreadnoughts", 12, "Blue", "Yellow", "White"),
        _entry("Elks", 13, "Blue", "Yellow", "White"),
        _entry("Golden Eagles", 14, "Red", "Green", "White"),
        _entry("Huskies", 15, "Blue", "Black", "White"),
        _entry("Lumberjacks", 16, "Black", "Red", "White"),
        _entry("Monarchs", 17, "Blue", "White", "Red"),
        _entry("Mounties", 18, "Navy", "Mustard", "Red"),
        _entry("Night Hawks", 19, "Blue", "Grey", "Black"),
        _entry("Orbits", 20, "Blue", "Grey", "White"),
        _entry("Pioneers", 21, "Brown", "Orange", "White"),
        _entry("Redwoods", 22, "Green", "White", "Brown"),
        _entry("River Hogs", 23, "Navy", "Blue", "White"),
        _entry("Sentinels", 24, "Blue", "Grey", "Black"),
        _entry("Shamrocks", 25, "Green", "White"),
        _entry("Snowhawks", 26, "White", "Grey", "Light Blue"),
        _entry("Steamers", 27, "Black", "Brown", "White"),
        _entry("Thunderbirds", 28, "Red", "White", "Orange"),
        _entry("Tigers", 29, "Black", "Orange", "White"),
        _entry("Voyagers", 30, "Blue", "White", "Yellow"),
        _entry("Wizards", 31, "Blue", "Yellow", "White"),
    ]
)

# Cities a franchise can relocate to in the game's relocation flow.
RELOCATION_CITIES: tuple[str, ...] = (
    "St. Louis",
    "Virginia Beach",
    "Dublin",
    "Anchorage",
    "Vancouver",
    "Sacramento",
    "San Diego",
    "Mexico City",
    "Buenos Aires",
    "Omaha",
    "Houston",
    "San Antonio",
    "San Juan",
    "Toronto",
    "Oklahoma City",
    "London",
    "Tokyo",
    "Salt Lake City",
    "Albuquerque",
    "Memphis",
    "Louisville",
    "Chicago",
    "Canton",
    "Brooklyn",
    "Melbourne",
    "Honolulu",
    "Portland",
    "Rio De Janeiro",
    "Austin",
    "Orlando",
    "Columbus",
    "Montreal",
    "Paris",
    "Oakland",
)


def save_catalog_yaml(catalog: ExpansionCatalog, path: Path) -> None:
    """Save a catalog to YAML."""
    data = {"teams": [entry.model_dump(exclude_none=True) for entry in catalog]}
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_catalog_yaml(path: Path) -> ExpansionCatalog:
    """Load a catalog from YAML. Raises ValueError on duplicate names or logo ids."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    entries = [ExpansionCatalogEntry.model_validate(item) for item in data.get("teams", [])]
    return ExpansionCatalog(entries)


def get_catalog(settings: Settings | None = None) -> ExpansionCatalog:
    """Return the configured catalog: the YAML override if set, else the built-in one."""
    if settings is None or not settings.gridiron_catalog_path:
        return DEFAULT_CATALOG
    catalog = load_catalog_yaml(Path(settings.gridiron_catalog_path))
    logger.info(
        "catalog_loaded path=%s entries=%d", settings.gridiron_catalog_path, len(catalog)
    )
    return catalog
