"""Expansion mapping store: which league slots are overlaid by which expansion team.

One store per league session. Entries live until removed; nothing is persisted.

Mappings are sticky: once a slot is registered, auto-detection never clears or
rewrites it, even if the slot's current name later reverts to a standard name.
Only an explicit ``register`` (overwrite) or ``remove`` changes an entry.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from gridiron.core.catalog import DEFAULT_CATALOG, ExpansionCatalog
from gridiron.models.expansion import ExpansionMapping
from gridiron.models.team import Team

logger = logging.getLogger(__name__)


def candidate_team_name(team: Team) -> str:
    """Name used to detect an expansion team.

    Precedence: ``display_name`` → ``nick_name`` → ``team_name``. The first
    non-empty value wins; returns "" when all three are empty.
    """
    for value in (team.display_name, team.nick_name, team.team_name):
        if value:
            return value
    return ""


class MappingStore:
    """Thread-safe registry of ``team_id`` → ExpansionMapping.

    Every operation is total. Each read-modify-write holds the store lock, so a
    ``team_id`` never has more than one entry, and concurrent writers to the same
    key resolve last-writer-wins.
    """

    def __init__(self, catalog: ExpansionCatalog | None = None) -> None:
        self._catalog = catalog or DEFAULT_CATALOG
        self._mappings: dict[int, ExpansionMapping] = {}
        self._lock = threading.Lock()

    @property
    def catalog(self) -> ExpansionCatalog:
        return self._catalog

    def register(
        self,
        team_id: int,
        expansion_name: str,
        original_team_name: str,
        division_id: int,
        conference_id: int,
    ) -> ExpansionMapping:
        """Insert or overwrite the mapping for ``team_id``. Last write wins."""
        mapping = ExpansionMapping(
            team_id=team_id,
            expansion_name=expansion_name,
            original_team_name=original_team_name,
            division_id=division_id,
            conference_id=conference_id,
        )
        with self._lock:
            previous = self._mappings.get(team_id)
            self._mappings[team_id] = mapping
        if previous is not None and previous != mapping:
            logger.info(
                "expansion_mapping_overwritten team_id=%s old=%s new=%s",
                team_id,
                previous.expansion_name,
                expansion_name,
            )
        else:
            logger.info("expansion_registered team_id=%s name=%s", team_id, expansion_name)
        return mapping

    def is_registered(self, team_id: int) -> bool:
        with self._lock:
            return team_id in self._mappings

    def get(self, team_id: int) -> ExpansionMapping | None:
        with self._lock:
            return self._mappings.get(team_id)

    def remove(self, team_id: int) -> None:
        """Drop the mapping for ``team_id``. No-op if absent."""
        with self._lock:
            removed = self._mappings.pop(team_id, None)
        if removed is not None:
            logger.info(
                "expansion_removed team_id=%s name=%s", team_id, removed.expansion_name
            )

    def all(self) -> list[ExpansionMapping]:
        """All mappings, ordered by team id."""
        with self._lock:
            return [self._mappings[k] for k in sorted(self._mappings)]

    def snapshot(self) -> dict[int, ExpansionMapping]:
        """Point-in-time copy of the registry."""
        with self._lock:
            return dict(self._mappings)

    def clear(self) -> None:
        with self._lock:
            self._mappings.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._mappings)

    def __contains__(self, team_id: object) -> bool:
        with self._lock:
            return team_id in self._mappings

    def auto_detect(self, teams: Iterable[Team]) -> list[int]:
        """Register teams whose current name is a catalog entry.

        Teams already registered are skipped, whatever their current name. The
        team's own current division and conference are captured. Returns the ids
        of newly registered teams.
        """
        registered: list[int] = []
        for team in teams:
            name = candidate_team_name(team)
            if not self._catalog.is_valid_name(name):
                continue
            mapping = ExpansionMapping(
                team_id=team.team_id,
                expansion_name=name,
                original_team_name=team.original_name or name,
                division_id=team.division_id,
                conference_id=team.conference_id,
            )
            with self._lock:
                if team.team_id in self._mappings:
                    continue
                self._mappings[team.team_id] = mapping
            registered.append(team.team_id)
            logger.info("expansion_detected team_id=%s name=%s", team.team_id, name)
        if registered:
            logger.debug("auto_detect_complete new=%d", len(registered))
        return registered
