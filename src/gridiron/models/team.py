"""Team and EnrichedTeam models.

Team is the raw record handed to us by the league export / persistence layer.
EnrichedTeam is a Team after the expansion overlay has been applied.

Exports use camelCase keys (``teamId``, ``displayName``). The alias generator
below is the one place that translation happens; everything past this module
works with snake_case attributes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Keys added by enrichment. Stripped before an overlay is re-applied so a record
# fed back through the pipeline never carries two values for the same field.
ENRICHMENT_KEYS: frozenset[str] = frozenset(
    {
        "is_expansion",
        "isExpansion",
        "original_display_name",
        "originalDisplayName",
        "original_nick_name",
        "originalNickName",
    }
)


class Team(BaseModel):
    """A league team slot. ``team_id`` is stable and unique within a league."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    team_id: int
    display_name: str = ""
    nick_name: str = ""
    city_name: str = ""
    abbr_name: str = ""
    division_id: int = 0
    conference_id: int = 0
    logo_id: int = 0
    div_name: str = ""

    # Alternate name sources used by auto-detection.
    team_name: str = ""
    original_name: str = ""

    # Assignment / record fields. Irrelevant to the overlay, carried for display.
    user_name: str = ""
    primary_color: int | None = None
    secondary_color: int | None = None
    total_wins: int | None = None
    total_losses: int | None = None
    total_ties: int | None = None

    def source_fields(self) -> dict[str, object]:
        """Field dump without any enrichment keys."""
        data = self.model_dump()
        for key in ENRICHMENT_KEYS:
            data.pop(key, None)
        return data


class EnrichedTeam(Team):
    """A Team with the expansion overlay applied.

    When ``is_expansion`` is true, ``display_name`` and ``nick_name`` hold the
    expansion name and the pre-overlay values live in the ``original_*`` fields.
    """

    is_expansion: bool = False
    original_display_name: str | None = None
    original_nick_name: str | None = None


class TeamExport(BaseModel):
    """A league team export as delivered by the companion app."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    success: bool = True
    league_team_info_list: list[Team] = Field(default_factory=list)
