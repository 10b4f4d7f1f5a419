"""Sim request classification.

A game channel collects two reaction sets: users asking for a home force win
and users asking for an away force win. Both sides asking means a fair sim.
"""

from __future__ import annotations

from collections.abc import Collection

from gridiron.models.game import SimResult

SIM_LABELS: dict[SimResult, str] = {
    SimResult.FAIR_SIM: "Fair Sim",
    SimResult.FORCE_WIN_AWAY: "Force Win Away",
    SimResult.FORCE_WIN_HOME: "Force Win Home",
}


def classify_sim(
    home_reactors: Collection[object],
    away_reactors: Collection[object],
) -> SimResult:
    """Classify a sim request from the home and away reaction sets.

    The branches are mutually exclusive: "home only" must never fall through
    to the fair-sim case.
    """
    home = len(home_reactors) > 0
    away = len(away_reactors) > 0
    if home and not away:
        return SimResult.FORCE_WIN_HOME
    elif away and not home:
        return SimResult.FORCE_WIN_AWAY
    elif home and away:
        return SimResult.FAIR_SIM
    return SimResult.NONE


def sim_label(result: SimResult) -> str:
    """Scoreboard label for a confirmed sim. NONE is never a confirmed sim."""
    try:
        return SIM_LABELS[result]
    except KeyError:
        raise ValueError(f"No scoreboard label for sim result {result!r}") from None
