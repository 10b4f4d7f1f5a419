"""FastAPI dependency injection for league sessions and the team source."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from gridiron.config import Settings
from gridiron.core.catalog import ExpansionCatalog
from gridiron.core.session import LeagueSession, SessionRegistry, TeamSource


async def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_sessions(request: Request) -> SessionRegistry:
    """Get the league session registry from app state."""
    return request.app.state.sessions


async def get_team_source(request: Request) -> TeamSource:
    """Get the team source (persistence collaborator) from app state."""
    return request.app.state.team_source


async def get_catalog(
    sessions: Annotated[SessionRegistry, Depends(get_sessions)],
) -> ExpansionCatalog:
    return sessions.catalog


async def get_league_session(
    league_id: str,
    sessions: Annotated[SessionRegistry, Depends(get_sessions)],
) -> LeagueSession:
    """The session for the league in the path, created on first use."""
    return sessions.get(league_id)


SettingsDep = Annotated[Settings, Depends(get_settings)]
SessionsDep = Annotated[SessionRegistry, Depends(get_sessions)]
TeamSourceDep = Annotated[TeamSource, Depends(get_team_source)]
CatalogDep = Annotated[ExpansionCatalog, Depends(get_catalog)]
LeagueSessionDep = Annotated[LeagueSession, Depends(get_league_session)]
