"""League sessions: the long-lived owner of one league's expansion mappings.

Each league gets its own MappingStore, so leagues never share overlay state and
tests can build isolated sessions. Team data itself comes from a TeamSource
(the persistence collaborator); sessions only hold mappings.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Protocol

from gridiron.config import Settings
from gridiron.core.catalog import ExpansionCatalog, get_catalog
from gridiron.core.enrichment import EnrichedRoster
from gridiron.core.integrity import (
    ExportValidation,
    HealthReport,
    TeamAssignments,
    expansion_health_check,
    validate_divisions,
    validate_team_assignments,
)
from gridiron.core.mappings import MappingStore
from gridiron.core.search import resolve_team
from gridiron.models.expansion import ExpansionMapping
from gridiron.models.team import EnrichedTeam, Team

logger = logging.getLogger(__name__)


class TeamSource(Protocol):
    """Supplies the latest raw team list for a league."""

    async def latest_teams(self, league_id: str) -> list[Team]: ...


class InMemoryTeamSource:
    """TeamSource backed by a dict. Used for local runs and tests."""

    def __init__(self, teams_by_league: dict[str, list[Team]] | None = None) -> None:
        self._teams: dict[str, list[Team]] = {
            league_id: list(teams) for league_id, teams in (teams_by_league or {}).items()
        }

    def set_teams(self, league_id: str, teams: Sequence[Team]) -> None:
        self._teams[league_id] = list(teams)

    async def latest_teams(self, league_id: str) -> list[Team]:
        return list(self._teams.get(league_id, []))


class LeagueSession:
    """Overlay state and operations for one league."""

    def __init__(
        self,
        league_id: str,
        catalog: ExpansionCatalog | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.league_id = league_id
        self.settings = settings or Settings()
        self.catalog = catalog or get_catalog(self.settings)
        self.store = MappingStore(self.catalog)

    def enrich(self, teams: Sequence[Team]) -> EnrichedRoster:
        return EnrichedRoster.build(teams, self.store, self.catalog)

    def validate(self, teams: Sequence[Team]) -> bool:
        return validate_divisions(
            self.enrich(teams).in_input_order(),
            self.settings.gridiron_division_size,
            self.settings.gridiron_league_size,
        )

    def validate_assignments(
        self, teams: Sequence[Team], assignments: TeamAssignments
    ) -> ExportValidation:
        """Check stored team assignments against the freshly enriched roster."""
        return validate_team_assignments(
            self.enrich(teams).in_input_order(),
            assignments,
            self.settings.gridiron_division_size,
            self.settings.gridiron_league_size,
        )

    def resolve(self, query: str, teams: Sequence[Team]) -> EnrichedTeam:
        """Resolve free text against the freshly enriched roster."""
        return resolve_team(query, self.enrich(teams).in_input_order())

    def health(self, teams: Sequence[Team]) -> HealthReport:
        report = expansion_health_check(
            self.enrich(teams).in_input_order(),
            self.settings.gridiron_division_size,
            self.settings.gridiron_league_size,
        )
        if report.status != "healthy":
            logger.info(
                "league_health league_id=%s status=%s message=%s",
                self.league_id,
                report.status,
                report.message,
            )
        return report

    def register(
        self,
        team_id: int,
        expansion_name: str,
        original_team_name: str,
        division_id: int,
        conference_id: int,
    ) -> ExpansionMapping:
        return self.store.register(
            team_id, expansion_name, original_team_name, division_id, conference_id
        )

    def remove(self, team_id: int) -> None:
        self.store.remove(team_id)


class SessionRegistry:
    """Lazily creates one LeagueSession per league id."""

    def __init__(
        self,
        catalog: ExpansionCatalog | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._catalog = catalog or get_catalog(self._settings)
        self._sessions: dict[str, LeagueSession] = {}
        self._lock = threading.Lock()

    @property
    def catalog(self) -> ExpansionCatalog:
        return self._catalog

    def get(self, league_id: str) -> LeagueSession:
        with self._lock:
            session = self._sessions.get(league_id)
            if session is None:
                session = LeagueSession(league_id, self._catalog, self._settings)
                self._sessions[league_id] = session
                logger.debug("league_session_created league_id=%s", league_id)
            return session

    def drop(self, league_id: str) -> None:
        with self._lock:
            self._sessions.pop(league_id, None)

    def league_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._sessions)
