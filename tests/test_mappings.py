"""Tests for the expansion mapping store."""

from concurrent.futures import ThreadPoolExecutor

from gridiron.core.mappings import MappingStore, candidate_team_name
from gridiron.models.team import Team


class TestRegister:
    def test_register_and_get(self, store: MappingStore):
        store.register(101, "Dragons", "Jaguars", 2, 0)
        mapping = store.get(101)
        assert mapping is not None
        assert mapping.expansion_name == "Dragons"
        assert mapping.original_team_name == "Jaguars"
        assert mapping.division_id == 2
        assert store.is_registered(101)
        assert 101 in store

    def test_last_write_wins(self, store: MappingStore):
        store.register(101, "Dragons", "Jaguars", 2, 0)
        store.register(101, "Wizards", "Jaguars", 2, 0)
        assert store.get(101).expansion_name == "Wizards"
        assert len(store) == 1

    def test_get_absent(self, store: MappingStore):
        assert store.get(999) is None
        assert not store.is_registered(999)

    def test_remove(self, store: MappingStore):
        store.register(101, "Dragons", "Jaguars", 2, 0)
        store.remove(101)
        assert not store.is_registered(101)

    def test_remove_absent_is_noop(self, store: MappingStore):
        store.remove(999)
        assert len(store) == 0

    def test_all_sorted_by_team_id(self, store: MappingStore):
        store.register(130, "Wizards", "Rams", 7, 1)
        store.register(101, "Dragons", "Dolphins", 0, 0)
        assert [m.team_id for m in store.all()] == [101, 130]

    def test_snapshot_is_a_copy(self, store: MappingStore):
        store.register(101, "Dragons", "Dolphins", 0, 0)
        snap = store.snapshot()
        store.remove(101)
        assert 101 in snap

    def test_clear(self, store: MappingStore):
        store.register(101, "Dragons", "Dolphins", 0, 0)
        store.register(102, "Wizards", "Patriots", 0, 0)
        store.clear()
        assert len(store) == 0
        assert store.all() == []


class TestCandidateName:
    def test_display_name_first(self):
        team = Team(team_id=1, display_name="Dragons", nick_name="Jaguars", team_name="Tigers")
        assert candidate_team_name(team) == "Dragons"

    def test_falls_back_to_nick_name(self):
        team = Team(team_id=1, nick_name="Dragons", team_name="Tigers")
        assert candidate_team_name(team) == "Dragons"

    def test_falls_back_to_team_name(self):
        team = Team(team_id=1, team_name="Tigers")
        assert candidate_team_name(team) == "Tigers"

    def test_all_empty(self):
        assert candidate_team_name(Team(team_id=1)) == ""

    def test_camel_case_export_keys(self):
        team = Team.model_validate({"teamId": 1, "displayName": "", "teamName": "Orbits"})
        assert candidate_team_name(team) == "Orbits"


class TestAutoDetect:
    def test_registers_catalog_names(self, store: MappingStore, teams: list[Team]):
        teams[10] = teams[10].model_copy(update={"display_name": "Dragons"})
        new = store.auto_detect(teams)
        assert new == [teams[10].team_id]
        mapping = store.get(teams[10].team_id)
        assert mapping.expansion_name == "Dragons"
        assert mapping.division_id == teams[10].division_id
        assert mapping.conference_id == teams[10].conference_id

    def test_original_name_fallback(self, store: MappingStore):
        store.auto_detect([Team(team_id=5, display_name="Dragons")])
        assert store.get(5).original_team_name == "Dragons"

    def test_original_name_from_team(self, store: MappingStore):
        store.auto_detect([Team(team_id=5, display_name="Dragons", original_name="Jaguars")])
        assert store.get(5).original_team_name == "Jaguars"

    def test_ignores_standard_names(self, store: MappingStore, teams: list[Team]):
        assert store.auto_detect(teams) == []
        assert len(store) == 0

    def test_idempotent(self, store: MappingStore, teams: list[Team]):
        teams[0] = teams[0].model_copy(update={"display_name": "Orbits"})
        teams[31] = teams[31].model_copy(update={"display_name": "Snowhawks"})
        store.auto_detect(teams)
        first = store.snapshot()
        assert store.auto_detect(teams) == []
        assert store.snapshot() == first
        assert len(store) == 2

    def test_registered_teams_untouched(self, store: MappingStore):
        store.register(5, "Wizards", "Jaguars", 3, 1)
        store.auto_detect([Team(team_id=5, display_name="Dragons", division_id=6)])
        mapping = store.get(5)
        assert mapping.expansion_name == "Wizards"
        assert mapping.division_id == 3

    def test_sticky_after_name_reverts(self, store: MappingStore):
        store.auto_detect([Team(team_id=5, display_name="Dragons")])
        store.auto_detect([Team(team_id=5, display_name="Jaguars")])
        assert store.get(5).expansion_name == "Dragons"


class TestConcurrency:
    def test_concurrent_writes_leave_one_entry_per_team(self, store: MappingStore):
        names = ["Dragons", "Wizards", "Orbits", "Tigers"]

        def write(i: int) -> None:
            team_id = i % 8
            store.register(team_id, names[i % len(names)], f"Team {team_id}", 0, 0)
            if i % 5 == 0:
                store.remove(team_id)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(write, range(400)))

        snap = store.snapshot()
        assert len(snap) <= 8
        for team_id, mapping in snap.items():
            assert mapping.team_id == team_id
            assert mapping.expansion_name in names

    def test_concurrent_auto_detect(self, store: MappingStore):
        teams = [Team(team_id=i, display_name="Dragons") for i in range(50)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(store.auto_detect, [teams] * 4))
        assert sorted(team_id for new in results for team_id in new) == list(range(50))
        assert len(store) == 50
