"""League roster API: enriched teams, team resolution, expansion mappings, health."""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from gridiron.api.deps import LeagueSessionDep, SessionsDep, SettingsDep, TeamSourceDep
from gridiron.core.enrichment import enhance_team_events, team_abbreviation, team_colors
from gridiron.core.integrity import filter_team_assignments, validate_team_export
from gridiron.core.search import AmbiguousTeamError, TeamNotFoundError, search_teams
from gridiron.core.session import LeagueSession
from gridiron.models.team import EnrichedTeam, TeamExport

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leagues", tags=["leagues"])


class MappingRequest(BaseModel):
    """Body for registering an expansion mapping.

    Division, conference and original name default to the team's current values.
    """

    team_id: int
    expansion_name: str
    original_team_name: str | None = None
    division_id: int | None = None
    conference_id: int | None = None


def _team_payload(team: EnrichedTeam, session: LeagueSession) -> dict:
    data = team.model_dump()
    data["abbreviation"] = team_abbreviation(team)
    data["colors"] = team_colors(team, session.catalog).model_dump()
    return data


@router.get("")
async def list_leagues(sessions: SessionsDep) -> dict:
    """League ids with an active session."""
    return {"data": sessions.league_ids()}


@router.get("/{league_id}/teams")
async def list_teams(
    league_id: str,
    session: LeagueSessionDep,
    source: TeamSourceDep,
    order: Literal["display", "input"] = "display",
) -> dict:
    """List a league's teams with the expansion overlay applied."""
    roster = session.enrich(await source.latest_teams(league_id))
    teams = roster.for_display() if order == "display" else roster.in_input_order()
    return {"data": [_team_payload(t, session) for t in teams]}


@router.get("/{league_id}/teams/resolve")
async def resolve_team(
    league_id: str,
    q: str,
    session: LeagueSessionDep,
    source: TeamSourceDep,
) -> dict:
    """Resolve free text to exactly one team. 404 if none match, 409 if several do."""
    teams = await source.latest_teams(league_id)
    try:
        team = session.resolve(q, teams)
    except TeamNotFoundError as e:
        raise HTTPException(404, {"message": str(e), "query": e.query}) from e
    except AmbiguousTeamError as e:
        raise HTTPException(
            409, {"message": str(e), "query": e.query, "candidates": e.candidates}
        ) from e
    return {"data": _team_payload(team, session)}


@router.get("/{league_id}/teams/search")
async def search_league_teams(
    league_id: str,
    session: LeagueSessionDep,
    source: TeamSourceDep,
    settings: SettingsDep,
    q: str = "",
) -> dict:
    """Autocomplete: teams whose names, city or abbreviation contain ``q``."""
    roster = session.enrich(await source.latest_teams(league_id))
    records = search_teams(q, roster.in_input_order(), settings.gridiron_autocomplete_limit)
    return {
        "data": [
            {"team_id": r.team_id, "display_name": r.display_name, "abbreviation": r.abbr_name}
            for r in records
        ]
    }


@router.get("/{league_id}/teams/{team_id}")
async def get_team(
    league_id: str,
    team_id: int,
    session: LeagueSessionDep,
    source: TeamSourceDep,
) -> dict:
    """Get one enriched team by id."""
    team = session.enrich(await source.latest_teams(league_id)).team_for_id(team_id)
    if team is None:
        raise HTTPException(404, "Team not found")
    return {"data": _team_payload(team, session)}


@router.post("/{league_id}/teams/export")
async def process_team_export(
    league_id: str,
    export: TeamExport,
    session: LeagueSessionDep,
) -> dict:
    """Validate an incoming team export and return enriched team events to store."""
    validation = validate_team_export(
        export,
        session.store,
        session.catalog,
        session.settings.gridiron_division_size,
        session.settings.gridiron_league_size,
    )
    if not validation.valid:
        logger.error(
            "team_export_invalid league_id=%s issues=%s", league_id, "; ".join(validation.issues)
        )
        raise HTTPException(422, {"issues": validation.issues})
    if validation.warnings:
        logger.warning(
            "team_export_warnings league_id=%s warnings=%s",
            league_id,
            "; ".join(validation.warnings),
        )
    events = enhance_team_events(export.league_team_info_list, session.store, session.catalog)
    return {"data": {"warnings": validation.warnings, "events": events}}


@router.post("/{league_id}/teams/assignments/validate")
async def validate_assignments(
    league_id: str,
    assignments: dict[str, dict[str, Any]],
    session: LeagueSessionDep,
    source: TeamSourceDep,
) -> dict:
    """Check team assignments against the roster; return the ones that still apply."""
    teams = await source.latest_teams(league_id)
    result = session.validate_assignments(teams, assignments)
    roster = session.enrich(teams).in_input_order()
    return {
        "data": {
            "valid": result.valid,
            "issues": result.issues,
            "assignments": filter_team_assignments(roster, assignments),
        }
    }


@router.get("/{league_id}/expansion/health")
async def expansion_health(
    league_id: str,
    session: LeagueSessionDep,
    source: TeamSourceDep,
) -> dict:
    """Division integrity and expansion summary for a league."""
    report = session.health(await source.latest_teams(league_id))
    return {
        "data": {
            "status": report.status,
            "message": report.message,
            "total_teams": report.total_teams,
            "expansion_teams": report.expansion_teams,
            "expansion_team_names": report.expansion_team_names,
            "division_warnings": [
                {"division": w.division, "count": w.count} for w in report.division_warnings
            ],
        },
    }


@router.get("/{league_id}/expansion/mappings")
async def list_mappings(league_id: str, session: LeagueSessionDep) -> dict:
    """All registered expansion mappings for a league."""
    return {"data": [m.model_dump() for m in session.store.all()]}


@router.post("/{league_id}/expansion/mappings", status_code=201)
async def register_mapping(
    league_id: str,
    body: MappingRequest,
    session: LeagueSessionDep,
    source: TeamSourceDep,
) -> dict:
    """Register (or overwrite) an expansion mapping for a team slot."""
    if not session.catalog.is_valid_name(body.expansion_name):
        raise HTTPException(400, f"Unknown expansion team: {body.expansion_name}")

    team = next(
        (t for t in await source.latest_teams(league_id) if t.team_id == body.team_id),
        None,
    )
    if team is None and (body.division_id is None or body.conference_id is None):
        raise HTTPException(404, "Team not found")

    mapping = session.register(
        body.team_id,
        body.expansion_name,
        body.original_team_name or (team.display_name if team else body.expansion_name),
        body.division_id if body.division_id is not None else team.division_id,
        body.conference_id if body.conference_id is not None else team.conference_id,
    )
    return {"data": mapping.model_dump()}


@router.delete("/{league_id}/expansion/mappings/{team_id}")
async def remove_mapping(league_id: str, team_id: int, session: LeagueSessionDep) -> dict:
    """Remove a mapping, returning the slot to its original team. Idempotent."""
    existed = session.store.is_registered(team_id)
    session.remove(team_id)
    return {"data": {"team_id": team_id, "removed": existed}}
