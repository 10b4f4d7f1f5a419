"""Shared test fixtures."""

from collections.abc import Callable

import pytest

from gridiron.config import Settings
from gridiron.core.catalog import DEFAULT_CATALOG, ExpansionCatalog
from gridiron.core.mappings import MappingStore
from gridiron.models.team import Team

# (division name, [(city, nick, abbr), ...]): a standard 32-team league.
LEAGUE_LAYOUT: list[tuple[str, list[tuple[str, str, str]]]] = [
    (
        "AFC East",
        [
            ("Buffalo", "Bills", "BUF"),
            ("Miami", "Dolphins", "MIA"),
            ("New England", "Patriots", "NE"),
            ("New York", "Jets", "NYJ"),
        ],
    ),
    (
        "AFC North",
        [
            ("Baltimore", "Ravens", "BAL"),
            ("Cincinnati", "Bengals", "CIN"),
            ("Cleveland", "Browns", "CLE"),
            ("Pittsburgh", "Steelers", "PIT"),
        ],
    ),
    (
        "AFC South",
        [
            ("Houston", "Texans", "HOU"),
            ("Indianapolis", "Colts", "IND"),
            ("Jacksonville", "Jaguars", "JAX"),
            ("Tennessee", "Titans", "TEN"),
        ],
    ),
    (
        "AFC West",
        [
            ("Denver", "Broncos", "DEN"),
            ("Kansas City", "Chiefs", "KC"),
            ("Las Vegas", "Raiders", "LV"),
            ("Los Angeles", "Chargers", "LAC"),
        ],
    ),
    (
        "NFC East",
        [
            ("Dallas", "Cowboys", "DAL"),
            ("New York", "Giants", "NYG"),
            ("Philadelphia", "Eagles", "PHI"),
            ("Washington", "Commanders", "WAS"),
        ],
    ),
    (
        "NFC North",
        [
            ("Chicago", "Bears", "CHI"),
            ("Detroit", "Lions", "DET"),
            ("Green Bay", "Packers", "GB"),
            ("Minnesota", "Vikings", "MIN"),
        ],
    ),
    (
        "NFC South",
        [
            ("Atlanta", "Falcons", "ATL"),
            ("Carolina", "Panthers", "CAR"),
            ("New Orleans", "Saints", "NO"),
            ("Tampa Bay", "Buccaneers", "TB"),
        ],
    ),
    (
        "NFC West",
        [
            ("Arizona", "Cardinals", "ARI"),
            ("Los Angeles", "Rams", "LAR"),
            ("San Francisco", "49ers", "SF"),
            ("Seattle", "Seahawks", "SEA"),
        ],
    ),
]


def build_league_teams() -> list[Team]:
    """32 teams, 8 divisions of 4. Team ids 100+, logo ids 200+."""
    teams: list[Team] = []
    for division_id, (div_name, members) in enumerate(LEAGUE_LAYOUT):
        conference_id = 0 if div_name.startswith("AFC") else 1
        for city, nick, abbr in members:
            index = len(teams)
            teams.append(
                Team(
                    team_id=100 + index,
                    display_name=nick,
                    nick_name=nick,
                    city_name=city,
                    abbr_name=abbr,
                    division_id=division_id,
                    conference_id=conference_id,
                    logo_id=200 + index,
                    div_name=div_name,
                    total_wins=index % 10,
                    total_losses=10 - index % 10,
                    total_ties=0,
                )
            )
    return teams


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(gridiron_env="development")


@pytest.fixture
def catalog() -> ExpansionCatalog:
    return DEFAULT_CATALOG


@pytest.fixture
def store(catalog: ExpansionCatalog) -> MappingStore:
    """A fresh, empty mapping store per test."""
    return MappingStore(catalog)


@pytest.fixture
def teams() -> list[Team]:
    return build_league_teams()


@pytest.fixture
def team_by_nick(teams: list[Team]) -> Callable[[str], Team]:
    """Look up a team in the ``teams`` fixture by nick name."""

    def _lookup(nick: str) -> Team:
        return next(t for t in teams if t.nick_name == nick)

    return _lookup
