"""Game-level models: sim request outcomes and scoreboard inputs."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, field_validator


class SimResult(StrEnum):
    """Outcome of a sim request, derived from which side(s) asked for it.

    The str mixin lets results compare against raw values stored by the
    reaction tracker (e.g. ``sim.result == SimResult.FAIR_SIM``).
    """

    FORCE_WIN_HOME = "FORCE_WIN_HOME"
    FORCE_WIN_AWAY = "FORCE_WIN_AWAY"
    FAIR_SIM = "FAIR_SIM"
    NONE = "NONE"


class ScheduledGame(BaseModel):
    """One game on a weekly schedule. Zero-zero means unplayed."""

    schedule_id: int
    away_team_id: int
    home_team_id: int
    away_score: int = 0
    home_score: int = 0


class SimRecord(BaseModel):
    """A confirmed sim for a scheduled game. ``result`` is never NONE."""

    schedule_id: int
    result: SimResult
    league_id: str | None = None

    @field_validator("result")
    @classmethod
    def _reject_none(cls, v: SimResult) -> SimResult:
        if v == SimResult.NONE:
            raise ValueError("A confirmed sim needs a result other than NONE")
        return v
