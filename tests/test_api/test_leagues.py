"""API tests: enriched rosters, team resolution, mappings, exports and health."""

import pytest
from httpx import ASGITransport, AsyncClient

from gridiron.config import Settings
from gridiron.core.session import InMemoryTeamSource
from gridiron.main import create_app
from gridiron.models.team import Team

LEAGUE = "league-1"


@pytest.fixture
async def client(settings: Settings, teams: list[Team]):
    """API client over an app serving one 32-team league."""
    app = create_app(settings, InMemoryTeamSource({LEAGUE: teams}))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def _register(client: AsyncClient, team_id: int, name: str, **extra) -> dict:
    r = await client.post(
        f"/api/leagues/{LEAGUE}/expansion/mappings",
        json={"team_id": team_id, "expansion_name": name, **extra},
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


def _export_payload(teams: list[Team]) -> dict:
    return {
        "success": True,
        "leagueTeamInfoList": [t.model_dump(by_alias=True) for t in teams],
    }


class TestHealth:
    async def test_health(self, client: AsyncClient):
        r = await client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "env": "development"}


class TestTeams:
    async def test_list_display_order(self, client: AsyncClient):
        r = await client.get(f"/api/leagues/{LEAGUE}/teams")
        assert r.status_code == 200
        data = r.json()["data"]
        assert len(data) == 32
        assert [t["display_name"] for t in data[:4]] == ["Bills", "Dolphins", "Jets", "Patriots"]

    async def test_list_input_order(self, client: AsyncClient, teams: list[Team]):
        r = await client.get(f"/api/leagues/{LEAGUE}/teams", params={"order": "input"})
        assert [t["team_id"] for t in r.json()["data"]] == [t.team_id for t in teams]

    async def test_bad_order(self, client: AsyncClient):
        r = await client.get(f"/api/leagues/{LEAGUE}/teams", params={"order": "random"})
        assert r.status_code == 422

    async def test_overlay_in_payload(self, client: AsyncClient):
        await _register(client, 110, "Dragons")
        r = await client.get(f"/api/leagues/{LEAGUE}/teams/110")
        assert r.status_code == 200
        team = r.json()["data"]
        assert team["display_name"] == "Dragons"
        assert team["is_expansion"] is True
        assert team["logo_id"] == 11
        assert team["original_display_name"] == "Jaguars"
        assert team["abbreviation"] == "DRA"
        assert team["colors"]["primary"] == "Red"

    async def test_missing_team(self, client: AsyncClient):
        r = await client.get(f"/api/leagues/{LEAGUE}/teams/999")
        assert r.status_code == 404

    async def test_unknown_league_is_empty(self, client: AsyncClient):
        r = await client.get("/api/leagues/nope/teams")
        assert r.status_code == 200
        assert r.json()["data"] == []

    async def test_list_leagues(self, client: AsyncClient):
        await client.get(f"/api/leagues/{LEAGUE}/teams")
        r = await client.get("/api/leagues")
        assert r.json()["data"] == [LEAGUE]


class TestResolve:
    async def test_resolve_by_original_name(self, client: AsyncClient):
        await _register(client, 110, "Dragons")
        r = await client.get(f"/api/leagues/{LEAGUE}/teams/resolve", params={"q": "jaguars"})
        assert r.status_code == 200
        assert r.json()["data"]["display_name"] == "Dragons"

    async def test_not_found(self, client: AsyncClient):
        r = await client.get(f"/api/leagues/{LEAGUE}/teams/resolve", params={"q": "Unicorns"})
        assert r.status_code == 404
        assert r.json()["detail"]["query"] == "Unicorns"

    async def test_ambiguous(self, client: AsyncClient):
        r = await client.get(f"/api/leagues/{LEAGUE}/teams/resolve", params={"q": "new york"})
        assert r.status_code == 409
        assert sorted(r.json()["detail"]["candidates"]) == ["Giants", "Jets"]

    async def test_search(self, client: AsyncClient):
        r = await client.get(f"/api/leagues/{LEAGUE}/teams/search", params={"q": "ny"})
        assert r.status_code == 200
        assert [t["abbreviation"] for t in r.json()["data"]] == ["NYJ", "NYG"]


class TestMappings:
    async def test_register_defaults_from_team(self, client: AsyncClient):
        mapping = await _register(client, 110, "Dragons")
        assert mapping == {
            "team_id": 110,
            "expansion_name": "Dragons",
            "original_team_name": "Jaguars",
            "division_id": 2,
            "conference_id": 0,
        }

    async def test_unknown_expansion_name(self, client: AsyncClient):
        r = await client.post(
            f"/api/leagues/{LEAGUE}/expansion/mappings",
            json={"team_id": 110, "expansion_name": "Comets"},
        )
        assert r.status_code == 400

    async def test_unknown_team_needs_division(self, client: AsyncClient):
        r = await client.post(
            f"/api/leagues/{LEAGUE}/expansion/mappings",
            json={"team_id": 999, "expansion_name": "Dragons"},
        )
        assert r.status_code == 404

        mapping = await _register(client, 999, "Dragons", division_id=3, conference_id=0)
        assert mapping["original_team_name"] == "Dragons"
        assert mapping["division_id"] == 3

    async def test_list_and_remove(self, client: AsyncClient):
        await _register(client, 120, "Wizards")
        await _register(client, 110, "Dragons")
        r = await client.get(f"/api/leagues/{LEAGUE}/expansion/mappings")
        assert [m["team_id"] for m in r.json()["data"]] == [110, 120]

        r = await client.delete(f"/api/leagues/{LEAGUE}/expansion/mappings/110")
        assert r.json()["data"] == {"team_id": 110, "removed": True}
        r = await client.delete(f"/api/leagues/{LEAGUE}/expansion/mappings/110")
        assert r.json()["data"] == {"team_id": 110, "removed": False}

        r = await client.get(f"/api/leagues/{LEAGUE}/teams/110")
        assert r.json()["data"]["display_name"] == "Jaguars"

    async def test_leagues_do_not_share_mappings(self, client: AsyncClient):
        await _register(client, 110, "Dragons")
        r = await client.get("/api/leagues/other/expansion/mappings")
        assert r.json()["data"] == []


class TestExport:
    async def test_valid_export_returns_events(self, client: AsyncClient, teams: list[Team]):
        teams[10] = teams[10].model_copy(update={"display_name": "Dragons"})
        r = await client.post(f"/api/leagues/{LEAGUE}/teams/export", json=_export_payload(teams))
        assert r.status_code == 200, r.text
        data = r.json()["data"]
        assert data["warnings"] == ["Found 1 expansion teams: Dragons"]
        assert len(data["events"]) == 32
        event = data["events"][10]
        assert event["key"] == "110"
        assert event["event_type"] == "MADDEN_TEAM"
        assert event["isExpansion"] is True
        assert event["logoId"] == 11

        # The export registered the slot for the league.
        r = await client.get(f"/api/leagues/{LEAGUE}/expansion/mappings")
        assert [m["team_id"] for m in r.json()["data"]] == [110]

    async def test_invalid_export(self, client: AsyncClient, teams: list[Team]):
        r = await client.post(
            f"/api/leagues/{LEAGUE}/teams/export", json=_export_payload(teams[:31])
        )
        assert r.status_code == 422
        issues = r.json()["detail"]["issues"]
        assert "Expected 32 teams, found 31" in issues
        assert "Division 7 has 3 teams instead of 4" in issues


class TestAssignments:
    async def test_valid(self, client: AsyncClient):
        assignments = {"110": {"discord_user": {"id": "42"}}}
        r = await client.post(
            f"/api/leagues/{LEAGUE}/teams/assignments/validate", json=assignments
        )
        assert r.status_code == 200
        assert r.json()["data"] == {"valid": True, "issues": [], "assignments": assignments}

    async def test_unknown_team_dropped(self, client: AsyncClient):
        assignments = {"110": {"discord_user": {"id": "42"}}, "999": {}}
        r = await client.post(
            f"/api/leagues/{LEAGUE}/teams/assignments/validate", json=assignments
        )
        data = r.json()["data"]
        assert data["valid"] is False
        assert data["issues"] == ["Team ID 999 in assignments does not exist"]
        assert data["assignments"] == {"110": {"discord_user": {"id": "42"}}}


class TestExpansionHealth:
    async def test_healthy(self, client: AsyncClient):
        r = await client.get(f"/api/leagues/{LEAGUE}/expansion/health")
        assert r.json()["data"]["status"] == "healthy"

    async def test_warning(self, client: AsyncClient):
        await _register(client, 110, "Dragons")
        data = (await client.get(f"/api/leagues/{LEAGUE}/expansion/health")).json()["data"]
        assert data["status"] == "warning"
        assert data["expansion_teams"] == 1
        assert data["expansion_team_names"] == ["Dragons"]
