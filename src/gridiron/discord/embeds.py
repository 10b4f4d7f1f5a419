"""Discord message and embed builders for expansion-aware rosters.

Pure builders: each takes enriched domain data and returns a string, a
discord.Embed, or autocomplete choices. Sending is the bot's job.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from itertools import groupby

import discord
from discord import app_commands

from gridiron.config import MAX_AUTOCOMPLETE_CHOICES
from gridiron.core.enrichment import EnrichedRoster, channel_slug, formatted_team_name
from gridiron.core.integrity import HealthReport
from gridiron.core.search import AmbiguousTeamError, TeamResolutionError, search_teams
from gridiron.core.sim import sim_label
from gridiron.models.game import ScheduledGame, SimRecord
from gridiron.models.team import EnrichedTeam

COLOR_TEAMS = 0x3498DB  # Blue, team listings
COLOR_HEALTHY = 0x2ECC71  # Green
COLOR_WARNING = 0xE67E22  # Orange
COLOR_ERROR = 0xE74C3C  # Red

_HEALTH_COLORS: dict[str, int] = {
    "healthy": COLOR_HEALTHY,
    "warning": COLOR_WARNING,
    "error": COLOR_ERROR,
}

# First keyword found in the lower-cased name wins.
_TEAM_EMOJI: tuple[tuple[tuple[str, ...], str], ...] = (
    (("dragon",), "\N{DRAGON}"),
    (("eagle",), "\N{EAGLE}"),
    (("tiger",), "\N{TIGER}"),
    (("bull",), "\N{OX}"),
    (("wolf", "husk"), "\N{WOLF FACE}"),
    (("hawk",), "\N{EAGLE}"),
    (("knight",), "\N{CROSSED SWORDS}️"),
    (("wizard",), "\N{MAGE}"),
    (("pioneer",), "\N{FACE WITH COWBOY HAT}"),
    (("shamrock",), "\N{SHAMROCK}️"),
)
DEFAULT_TEAM_EMOJI = "\N{AMERICAN FOOTBALL}"
SIM_REACTION = "\N{BLACK RIGHT-POINTING DOUBLE TRIANGLE WITH VERTICAL BAR}"


def team_emoji(team: EnrichedTeam) -> str:
    """Keyword-matched emoji for a team name, football by default."""
    name = team.display_name.lower()
    for keywords, emoji in _TEAM_EMOJI:
        if any(keyword in name for keyword in keywords):
            return emoji
    return DEFAULT_TEAM_EMOJI


def _assigned_user(assignments: Mapping[str, Mapping[str, object]], team_id: int) -> str | None:
    assignment = assignments.get(str(team_id)) or {}
    user = assignment.get("discord_user")
    if isinstance(user, Mapping):
        user_id = user.get("id")
        return str(user_id) if user_id else None
    return None


def _team_line(team: EnrichedTeam, assignments: Mapping[str, Mapping[str, object]]) -> str:
    parts: list[str] = []
    user_id = _assigned_user(assignments, team.team_id)
    if user_id:
        parts.append(f"<@{user_id}>")
    parts.append(f"`{team.user_name}`" if team.user_name else "`CPU`")
    return f"{formatted_team_name(team)}: {', '.join(parts)}"


def _division_blocks(
    teams: Sequence[EnrichedTeam],
    assignments: Mapping[str, Mapping[str, object]],
) -> list[tuple[str, str]]:
    """(division name, team lines) pairs, divisions and teams alphabetized."""
    ordered = sorted(teams, key=lambda t: (t.div_name, formatted_team_name(t).casefold()))
    return [
        (division, "\n".join(_team_line(t, assignments) for t in members))
        for division, members in groupby(ordered, key=lambda t: t.div_name)
    ]


def _open_teams(
    teams: Sequence[EnrichedTeam],
    assignments: Mapping[str, Mapping[str, object]],
) -> str:
    return ", ".join(
        formatted_team_name(t) for t in teams if not _assigned_user(assignments, t.team_id)
    )


def format_teams_message(
    teams: Sequence[EnrichedTeam],
    assignments: Mapping[str, Mapping[str, object]] | None = None,
) -> str:
    """The pinned "# Teams" message: divisions, assignments, open teams."""
    assignments = assignments or {}
    divisions = "\n".join(
        f"__**{division}**__\n{lines}" for division, lines in _division_blocks(teams, assignments)
    )
    return f"# Teams\n{divisions}\n\nOPEN TEAMS: {_open_teams(teams, assignments)}"


def build_teams_embed(
    teams: Sequence[EnrichedTeam],
    assignments: Mapping[str, Mapping[str, object]] | None = None,
) -> discord.Embed:
    """Embed version of the teams message, one field per division."""
    assignments = assignments or {}
    embed = discord.Embed(title="Teams", color=COLOR_TEAMS)
    if not teams:
        embed.description = "No teams exported yet."
        return embed

    for division, lines in _division_blocks(teams, assignments):
        embed.add_field(name=division or "Unassigned", value=lines, inline=False)
    open_teams = _open_teams(teams, assignments)
    embed.set_footer(text=f"Open teams: {open_teams}" if open_teams else "All teams assigned")
    return embed


def build_health_embed(report: HealthReport, league_id: str = "") -> discord.Embed:
    """Embed for an expansion health check."""
    embed = discord.Embed(
        title=f"Expansion Health -- {report.status.title()}",
        description=report.message,
        color=_HEALTH_COLORS.get(report.status, COLOR_WARNING),
    )
    embed.add_field(name="Teams", value=str(report.total_teams), inline=True)
    embed.add_field(name="Expansion Teams", value=str(report.expansion_teams), inline=True)
    if report.expansion_team_names:
        embed.add_field(
            name="Expansion Slots",
            value=", ".join(report.expansion_team_names),
            inline=False,
        )
    if report.division_warnings:
        embed.add_field(
            name="Division Warnings",
            value="\n".join(w.message for w in report.division_warnings),
            inline=False,
        )
    if league_id:
        embed.set_footer(text=f"League {league_id}")
    return embed


def game_channel_name(away: EnrichedTeam, home: EnrichedTeam) -> str:
    """Channel name for a matchup, e.g. ``night-hawks-at-dragons``."""
    return f"{channel_slug(away)}-at-{channel_slug(home)}"


def format_game_channel_message(
    away: EnrichedTeam,
    home: EnrichedTeam,
    away_user: str,
    home_user: str,
    away_record: str,
    home_record: str,
    wait_ping_hours: int,
    admin_role_id: str,
) -> str:
    """Opening message posted in a new game channel."""
    matchup = (
        f"{team_emoji(away)} {away_user} {formatted_team_name(away)} ({away_record}) at "
        f"{team_emoji(home)} {home_user} {formatted_team_name(home)} ({home_record})"
    )
    return (
        f"**{matchup}**\n\n"
        ":alarm_clock: **Time to schedule your game!**\n"
        "Once your game is scheduled, hit the \N{ALARM CLOCK}. Otherwise, you will be "
        f"notified again every **{wait_ping_hours} hours**.\n\n"
        "When you're done playing, let me know with \N{TROPHY} and I will delete the channel.\n"
        f"Need to sim this game? React with {SIM_REACTION} **AND** "
        f"select home/away to request a force win from <@&{admin_role_id}>. Choose both home "
        f"and away for a fair sim! <@&{admin_role_id}> hit {SIM_REACTION} to confirm!\n"
    )


def _scoreboard_line(
    game: ScheduledGame,
    roster: EnrichedRoster,
    sim: SimRecord | None,
) -> str:
    away_team = roster.team_for_id(game.away_team_id)
    home_team = roster.team_for_id(game.home_team_id)
    away = (
        f"{team_emoji(away_team)} {formatted_team_name(away_team)}"
        if away_team
        else f"Team {game.away_team_id}"
    )
    home = (
        f"{team_emoji(home_team)} {formatted_team_name(home_team)}"
        if home_team
        else f"Team {game.home_team_id}"
    )
    sim_note = f" ({sim_label(sim.result)})" if sim is not None else ""

    if game.away_score == 0 and game.home_score == 0:
        return f"• {away} vs {home}{sim_note}"
    if game.away_score > game.home_score:
        return f"• **{away} {game.away_score}** vs {game.home_score} {home}{sim_note}"
    if game.home_score > game.away_score:
        return f"• {away} {game.away_score} vs **{game.home_score} {home}**{sim_note}"
    return f"• {away} {game.away_score} vs {game.home_score} {home}{sim_note}"


def format_scoreboard(
    week: int,
    season_index: int,
    games: Sequence[ScheduledGame],
    roster: EnrichedRoster,
    sims: Sequence[SimRecord] = (),
    league_id: str | None = None,
    base_year: int = 2024,
) -> str:
    """Weekly scoreboard. Sims tagged with another league are ignored."""
    sims_by_game = {
        s.schedule_id: s
        for s in sims
        if s.league_id is None or s.league_id == league_id
    }
    lines = [
        _scoreboard_line(game, roster, sims_by_game.get(game.schedule_id))
        for game in sorted(games, key=lambda g: g.schedule_id)
    ]
    header = f"## {season_index + base_year} Season – Week {week} Scoreboard"
    return "\n".join([header, *lines])


def team_autocomplete_choices(
    phrase: str,
    teams: Sequence[EnrichedTeam],
    limit: int = MAX_AUTOCOMPLETE_CHOICES,
) -> list[app_commands.Choice[str]]:
    """Autocomplete choices for a team option; value is the display name."""
    return [
        app_commands.Choice(name=record.display_name, value=record.display_name)
        for record in search_teams(phrase, teams, limit)
    ]


def resolution_error_message(err: TeamResolutionError) -> str:
    """User-facing text for a failed team lookup."""
    if isinstance(err, AmbiguousTeamError):
        options = "\n".join(f"- {name}" for name in err.candidates)
        return f'Multiple teams match "{err.query}". Did you mean one of:\n{options}'
    return str(err)
