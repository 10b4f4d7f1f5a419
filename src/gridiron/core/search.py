"""Team name resolution: map free text typed by a user to exactly one team.

Two passes, both case-insensitive:

1. Exact: query equals display name, nick name or abbreviation.
2. Partial (only when the exact pass finds nothing): query is a substring of
   display name, city, nick name, or the pre-overlay display / nick name.
   Abbreviations are deliberately left out of this pass; a two-letter query
   would otherwise substring-match half the league.

More than one match is an error, never a pick. The index is rebuilt on every
call from the roster passed in, so it always reflects current registrations.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from gridiron.config import MAX_AUTOCOMPLETE_CHOICES
from gridiron.core.enrichment import team_abbreviation
from gridiron.models.team import EnrichedTeam

logger = logging.getLogger(__name__)


class TeamResolutionError(Exception):
    """Base for resolver failures. ``str(err)`` is safe to show to users."""

    def __init__(self, query: str, message: str) -> None:
        super().__init__(message)
        self.query = query


class TeamNotFoundError(TeamResolutionError):
    """No team matched the query."""

    def __init__(self, query: str) -> None:
        super().__init__(
            query,
            f'No team found for "{query}". Please check the team name and try again.',
        )


class AmbiguousTeamError(TeamResolutionError):
    """Several teams matched the query; ``candidates`` lists their display names."""

    def __init__(self, query: str, candidates: list[str]) -> None:
        super().__init__(
            query,
            f'Multiple teams found for "{query}": {", ".join(candidates)}. '
            "Please be more specific.",
        )
        self.candidates = candidates


@dataclass(frozen=True)
class SearchRecord:
    """Searchable strings for one team, current and pre-overlay."""

    team_id: int
    display_name: str
    nick_name: str
    city_name: str
    abbr_name: str
    original_display_name: str
    original_nick_name: str
    is_expansion: bool

    def exact_keys(self) -> tuple[str, ...]:
        return (self.display_name, self.nick_name, self.abbr_name)

    def partial_keys(self) -> tuple[str, ...]:
        return (
            self.display_name,
            self.city_name,
            self.nick_name,
            self.original_display_name,
            self.original_nick_name,
        )


def build_search_record(team: EnrichedTeam) -> SearchRecord:
    return SearchRecord(
        team_id=team.team_id,
        display_name=team.display_name,
        nick_name=team.nick_name,
        city_name=team.city_name,
        abbr_name=team_abbreviation(team),
        original_display_name=team.original_display_name or team.display_name,
        original_nick_name=team.original_nick_name or team.nick_name,
        is_expansion=team.is_expansion,
    )


def build_search_index(teams: Sequence[EnrichedTeam]) -> dict[int, SearchRecord]:
    """``team_id`` → SearchRecord for the given roster, in roster order."""
    return {team.team_id: build_search_record(team) for team in teams}


def _matches_exact(query: str, record: SearchRecord) -> bool:
    return any(key.lower() == query for key in record.exact_keys() if key)


def _matches_partial(query: str, record: SearchRecord) -> bool:
    return any(query in key.lower() for key in record.partial_keys() if key)


def resolve_team(query: str, teams: Sequence[EnrichedTeam]) -> EnrichedTeam:
    """Resolve free text to a single team.

    Raises:
        TeamNotFoundError: nothing matched, or the query is blank.
        AmbiguousTeamError: more than one team matched in the deciding pass.
    """
    lowered = query.strip().lower()
    if not lowered:
        raise TeamNotFoundError(query)

    index = build_search_index(teams)
    by_id = {team.team_id: team for team in teams}

    exact = [r for r in index.values() if _matches_exact(lowered, r)]
    if len(exact) == 1:
        return by_id[exact[0].team_id]
    if len(exact) > 1:
        logger.info("team_resolve_ambiguous pass=exact query=%r matches=%d", query, len(exact))
        raise AmbiguousTeamError(query, [r.display_name for r in exact])

    partial = [r for r in index.values() if _matches_partial(lowered, r)]
    if not partial:
        logger.info("team_resolve_not_found query=%r", query)
        raise TeamNotFoundError(query)
    if len(partial) > 1:
        logger.info(
            "team_resolve_ambiguous pass=partial query=%r matches=%d", query, len(partial)
        )
        raise AmbiguousTeamError(query, [r.display_name for r in partial])
    return by_id[partial[0].team_id]


def search_teams(
    phrase: str,
    teams: Sequence[EnrichedTeam],
    limit: int = MAX_AUTOCOMPLETE_CHOICES,
) -> list[SearchRecord]:
    """Autocomplete matches: substring across every name field, abbreviation included."""
    lowered = phrase.strip().lower()
    results: list[SearchRecord] = []
    for record in build_search_index(teams).values():
        keys = (*record.partial_keys(), record.abbr_name)
        if any(lowered in key.lower() for key in keys if key):
            results.append(record)
            if len(results) >= limit:
                break
    return results
