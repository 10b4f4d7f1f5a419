"""Expansion catalog and mapping models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TeamColors(BaseModel):
    """Named uniform colors for a catalog entry."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    tertiary: str | None = None


class ExpansionCatalogEntry(BaseModel):
    """A build-time expansion team definition. ``name`` is the catalog key."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    colors: TeamColors
    logo_id: int = Field(ge=0)


class ExpansionMapping(BaseModel):
    """A league slot currently overlaid by an expansion team.

    Division and conference are captured when the mapping is registered and are
    never re-derived from later team data.
    """

    model_config = ConfigDict(frozen=True)

    team_id: int
    expansion_name: str
    original_team_name: str
    division_id: int = 0
    conference_id: int = 0
