"""Enrichment pipeline: project raw teams through the expansion overlay.

Pure projection: the input teams are never mutated, every call builds fresh
EnrichedTeam objects, and nothing is cached. Auto-detection runs first, so a
team renamed to a catalog name in the latest export picks up its overlay on the
same call.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Sequence

from gridiron.core.catalog import ExpansionCatalog
from gridiron.core.mappings import MappingStore
from gridiron.models.expansion import ExpansionMapping, TeamColors
from gridiron.models.team import EnrichedTeam, Team

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def apply_overlay(
    team: Team,
    mapping: ExpansionMapping | None,
    catalog: ExpansionCatalog,
) -> EnrichedTeam:
    """Apply (or skip) the overlay for one team, returning a new EnrichedTeam."""
    data = team.source_fields()
    if mapping is None:
        return EnrichedTeam(**data, is_expansion=False)

    data["original_display_name"] = team.display_name
    data["original_nick_name"] = team.nick_name
    data["display_name"] = mapping.expansion_name
    data["nick_name"] = mapping.expansion_name
    # Names outside the catalog keep the slot's own logo.
    data["logo_id"] = catalog.logo_id_for(mapping.expansion_name, team.logo_id)
    return EnrichedTeam(**data, is_expansion=True)


def enrich_teams(
    teams: Sequence[Team],
    store: MappingStore,
    catalog: ExpansionCatalog | None = None,
) -> list[EnrichedTeam]:
    """Run auto-detection, then overlay every team. Output keeps input order."""
    catalog = catalog or store.catalog
    store.auto_detect(teams)
    enriched = [apply_overlay(team, store.get(team.team_id), catalog) for team in teams]
    logger.debug(
        "teams_enriched total=%d expansion=%d",
        len(enriched),
        sum(1 for t in enriched if t.is_expansion),
    )
    return enriched


def team_logo_id(
    team_id: int,
    original_logo_id: int,
    store: MappingStore,
    catalog: ExpansionCatalog | None = None,
) -> int:
    """Logo id a slot should display."""
    mapping = store.get(team_id)
    if mapping is None:
        return original_logo_id
    return (catalog or store.catalog).logo_id_for(mapping.expansion_name, original_logo_id)


def team_display_name(team_id: int, original_name: str, store: MappingStore) -> str:
    """Display name a slot should show."""
    mapping = store.get(team_id)
    return mapping.expansion_name if mapping is not None else original_name


def sort_for_division_display(teams: Iterable[EnrichedTeam]) -> list[EnrichedTeam]:
    """New list ordered by division id, then overlaid display name (case-insensitive)."""
    return sorted(teams, key=lambda t: (t.division_id, t.display_name.casefold()))


class EnrichedRoster:
    """One enrichment pass over a league's teams, with both read orders.

    ``in_input_order`` is for export and event contexts; ``for_display`` is for
    anything a user reads.
    """

    def __init__(self, teams: Sequence[EnrichedTeam]) -> None:
        self._teams = list(teams)
        self._by_id = {t.team_id: t for t in self._teams}

    @classmethod
    def build(
        cls,
        teams: Sequence[Team],
        store: MappingStore,
        catalog: ExpansionCatalog | None = None,
    ) -> EnrichedRoster:
        return cls(enrich_teams(teams, store, catalog))

    def in_input_order(self) -> list[EnrichedTeam]:
        return list(self._teams)

    def for_display(self) -> list[EnrichedTeam]:
        return sort_for_division_display(self._teams)

    def team_for_id(self, team_id: int) -> EnrichedTeam | None:
        return self._by_id.get(team_id)

    def expansion_teams(self) -> list[EnrichedTeam]:
        return [t for t in self._teams if t.is_expansion]

    def __len__(self) -> int:
        return len(self._teams)

    def __iter__(self) -> Iterator[EnrichedTeam]:
        return iter(self._teams)


# ---------------------------------------------------------------------------
# Presentation helpers
# ---------------------------------------------------------------------------


def channel_slug(team: EnrichedTeam) -> str:
    """Lower-case, dash-joined name for Discord channel names."""
    return _WHITESPACE.sub("-", team.display_name.strip().lower())


def team_abbreviation(team: EnrichedTeam) -> str:
    """Abbreviation for a team.

    Expansion teams get one derived from the expansion name: the first three
    letters of a one-word name, or up to three initials of a multi-word name.
    Other teams keep their export abbreviation.
    """
    if not team.is_expansion:
        return team.abbr_name
    words = team.display_name.split()
    if len(words) == 1:
        return words[0][:3].upper()
    return "".join(word[0] for word in words).upper()[:3]


def _hex_color(value: int | None, default: str) -> str:
    if value is None:
        return default
    return f"#{value:06x}"


def team_colors(team: EnrichedTeam, catalog: ExpansionCatalog) -> TeamColors:
    """Catalog colors for expansion teams, export colors otherwise."""
    if team.is_expansion:
        colors = catalog.colors_for(team.display_name)
        if colors is not None:
            return colors
    return TeamColors(
        primary=_hex_color(team.primary_color, "#000000"),
        secondary=_hex_color(team.secondary_color, "#FFFFFF"),
    )


def formatted_team_name(team: EnrichedTeam, include_record: bool = False) -> str:
    """Display name, optionally followed by the W-L or W-L-T record."""
    if include_record and team.total_wins is not None and team.total_losses is not None:
        if team.total_ties:
            record = f"{team.total_wins}-{team.total_losses}-{team.total_ties}"
        else:
            record = f"{team.total_wins}-{team.total_losses}"
        return f"{team.display_name} ({record})"
    return team.display_name


def enhance_team_events(
    teams: Sequence[Team],
    store: MappingStore,
    catalog: ExpansionCatalog | None = None,
) -> list[dict[str, object]]:
    """Enriched teams as export events, keyed by team id."""
    events: list[dict[str, object]] = []
    for team in enrich_teams(teams, store, catalog):
        data = team.model_dump(by_alias=True)
        data.pop("platform", None)
        events.append(
            {
                "key": str(team.team_id),
                "event_type": "MADDEN_TEAM",
                "platform": getattr(team, "platform", None) or "unknown",
                **data,
            }
        )
    return events
