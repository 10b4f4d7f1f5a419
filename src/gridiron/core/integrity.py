"""Roster integrity checks: division structure, export sanity, relocation diffs.

Everything here reports; nothing enforces. Problems come back as warnings or
issue strings and are logged, so callers (health checks, export processing)
decide what to do with them.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

from gridiron.config import DEFAULT_DIVISION_SIZE, DEFAULT_LEAGUE_SIZE
from gridiron.core.catalog import ExpansionCatalog
from gridiron.core.enrichment import enrich_teams
from gridiron.core.mappings import MappingStore
from gridiron.models.team import EnrichedTeam, Team, TeamExport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationWarning:
    """Advisory: a division does not have the expected number of teams."""

    division: int
    count: int
    expected: int = DEFAULT_DIVISION_SIZE

    @property
    def message(self) -> str:
        return f"Division {self.division} has {self.count} teams instead of {self.expected}"


def division_counts(teams: Sequence[Team]) -> dict[int, int]:
    """Team count per division id, ordered by division id."""
    counts = Counter(t.division_id for t in teams)
    return {division: counts[division] for division in sorted(counts)}


def division_warnings(
    teams: Sequence[Team],
    division_size: int = DEFAULT_DIVISION_SIZE,
) -> list[ValidationWarning]:
    """One warning per division whose count differs from ``division_size``."""
    return [
        ValidationWarning(division=division, count=count, expected=division_size)
        for division, count in division_counts(teams).items()
        if count != division_size
    ]


def validate_divisions(
    teams: Sequence[EnrichedTeam],
    division_size: int = DEFAULT_DIVISION_SIZE,
    league_size: int = DEFAULT_LEAGUE_SIZE,
) -> bool:
    """True only if every division has ``division_size`` teams and the total is ``league_size``.

    Logs one warning line per off-size division. Never raises.
    """
    warnings = division_warnings(teams, division_size)
    for warning in warnings:
        logger.warning(
            "division_size_mismatch division=%s count=%d expected=%d",
            warning.division,
            warning.count,
            warning.expected,
        )
    return not warnings and len(teams) == league_size


# ---------------------------------------------------------------------------
# Export validation
# ---------------------------------------------------------------------------


@dataclass
class ExportValidation:
    """Outcome of an export or assignment check. ``valid`` is False when any issue exists."""

    valid: bool
    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_team_export(
    export: TeamExport,
    store: MappingStore,
    catalog: ExpansionCatalog | None = None,
    division_size: int = DEFAULT_DIVISION_SIZE,
    league_size: int = DEFAULT_LEAGUE_SIZE,
) -> ExportValidation:
    """Sanity-check an incoming team export before it is stored.

    Issues: unsuccessful export, no teams, wrong team count, duplicate team ids,
    off-size divisions. Warnings: expansion teams present. Runs auto-detection
    as a side effect, which is how new expansion slots get registered.
    """
    if not export.success:
        return ExportValidation(valid=False, issues=["Team export marked as unsuccessful"])

    teams = export.league_team_info_list
    if not teams:
        return ExportValidation(valid=False, issues=["No team data in export"])

    issues: list[str] = []
    if len(teams) != league_size:
        issues.append(f"Expected {league_size} teams, found {len(teams)}")

    team_ids = [t.team_id for t in teams]
    if len(team_ids) != len(set(team_ids)):
        issues.append("Duplicate team IDs found in export")

    issues.extend(w.message for w in division_warnings(teams, division_size))

    warnings: list[str] = []
    expansion = [t for t in enrich_teams(teams, store, catalog) if t.is_expansion]
    if expansion:
        names = ", ".join(t.display_name for t in expansion)
        warnings.append(f"Found {len(expansion)} expansion teams: {names}")

    return ExportValidation(valid=not issues, issues=issues, warnings=warnings)


# ---------------------------------------------------------------------------
# Relocation diff
# ---------------------------------------------------------------------------


@dataclass
class Relocation:
    old_team: Team
    new_team: Team


@dataclass
class RosterDiff:
    """Changes between two exports of the same league."""

    relocated: list[Relocation] = field(default_factory=list)
    unchanged: list[Team] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)


def compare_team_data(old_teams: Sequence[Team], new_teams: Sequence[Team]) -> RosterDiff:
    """Detect relocations (name or city changes) between two exports."""
    old_by_id = {t.team_id: t for t in old_teams}
    new_ids = {t.team_id for t in new_teams}
    diff = RosterDiff()

    for new_team in new_teams:
        old_team = old_by_id.get(new_team.team_id)
        if old_team is None:
            diff.issues.append(
                f"New team found with ID {new_team.team_id}: {new_team.display_name}"
            )
            continue
        if (
            old_team.display_name != new_team.display_name
            or old_team.nick_name != new_team.nick_name
            or old_team.city_name != new_team.city_name
        ):
            diff.relocated.append(Relocation(old_team=old_team, new_team=new_team))
        else:
            diff.unchanged.append(new_team)

    for old_team in old_teams:
        if old_team.team_id not in new_ids:
            diff.issues.append(
                f"Team missing in new data: {old_team.display_name} (ID: {old_team.team_id})"
            )
    return diff


# ---------------------------------------------------------------------------
# Team assignments
# ---------------------------------------------------------------------------

TeamAssignments = Mapping[str, Mapping[str, object]]


def _assignment_team_id(key: str) -> int | None:
    try:
        return int(key)
    except ValueError:
        return None


def filter_team_assignments(
    teams: Sequence[EnrichedTeam],
    assignments: TeamAssignments,
) -> dict[str, Mapping[str, object]]:
    """Assignments whose team id is on the roster. Expansion slots keep their id."""
    team_ids = {t.team_id for t in teams}
    return {
        key: assignment
        for key, assignment in assignments.items()
        if _assignment_team_id(key) in team_ids
    }


def validate_team_assignments(
    teams: Sequence[EnrichedTeam],
    assignments: TeamAssignments,
    division_size: int = DEFAULT_DIVISION_SIZE,
    league_size: int = DEFAULT_LEAGUE_SIZE,
) -> ExportValidation:
    """Check that every assigned team id exists, alongside the roster shape checks.

    Assignments are keyed by team id as a string, the way the bot stores them.
    """
    team_ids = {t.team_id for t in teams}
    issues = [
        f"Team ID {key} in assignments does not exist"
        for key in assignments
        if _assignment_team_id(key) not in team_ids
    ]
    if not validate_divisions(teams, division_size, league_size):
        if division_warnings(teams, division_size):
            issues.append(
                f"Division structure is invalid - not all divisions have {division_size} teams"
            )
        if len(teams) != league_size:
            issues.append(f"Expected {league_size} teams, found {len(teams)}")
    if issues:
        logger.warning("team_assignments_invalid issues=%s", "; ".join(issues))
    return ExportValidation(valid=not issues, issues=issues)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

HealthStatus = Literal["healthy", "warning", "error"]


@dataclass
class HealthReport:
    status: HealthStatus
    message: str
    total_teams: int
    expansion_team_names: list[str] = field(default_factory=list)
    division_warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def expansion_teams(self) -> int:
        return len(self.expansion_team_names)


def expansion_health_check(
    teams: Sequence[EnrichedTeam],
    division_size: int = DEFAULT_DIVISION_SIZE,
    league_size: int = DEFAULT_LEAGUE_SIZE,
) -> HealthReport:
    """Summarize an enriched roster for monitoring.

    ``error`` when division structure or team count is broken, ``warning`` when
    expansion teams are present, ``healthy`` otherwise.
    """
    expansion_names = [t.display_name for t in teams if t.is_expansion]
    warnings = division_warnings(teams, division_size)

    if not validate_divisions(teams, division_size, league_size):
        if warnings:
            message = "Division structure validation failed"
        else:
            message = f"Expected {league_size} teams, found {len(teams)}"
        return HealthReport(
            status="error",
            message=message,
            total_teams=len(teams),
            expansion_team_names=expansion_names,
            division_warnings=warnings,
        )

    if expansion_names:
        return HealthReport(
            status="warning",
            message=f"Found {len(expansion_names)} expansion teams",
            total_teams=len(teams),
            expansion_team_names=expansion_names,
        )

    return HealthReport(
        status="healthy",
        message="All teams are original league teams",
        total_teams=len(teams),
    )
