"""
Tests for the persistence layer: the conditional update builder, result
variants and the team/game repositories against a SQLite database.
"""

import pytest

from app.repositories.base import BaseRepository
from app.repositories.result import Outcome, Result


class RecordingRepository(BaseRepository):
    """Captures the SQL instead of executing it."""

    def __init__(self):
        super().__init__(db=None)
        self.calls = []

    def query(self, sql, params=None, write=False, silent=False):
        self.calls.append((sql, params))
        return Result.ok([])


class TestResult:

    def test_only_ok_is_truthy(self):
        assert Result.ok([])
        assert not Result.not_found()
        assert not Result.failed("boom")

    def test_variants_are_distinct(self):
        assert Result.not_found().outcome is Outcome.NOT_FOUND
        assert Result.not_found().is_not_found
        assert Result.failed("boom").is_failed
        assert Result.failed("boom").error == "boom"


class TestConditionalUpdate:

    def test_no_fields_is_a_noop_failure(self):
        repo = RecordingRepository()
        result = repo.conditional_update("teams", 1, [None, None, None], [None, None, None])
        assert not result
        assert result.is_failed
        assert repo.calls == []

    def test_only_present_fields_are_set(self):
        repo = RecordingRepository()
        repo.conditional_update("teams", 7, ["name", "slug", None], ["Foo", "foo", None])

        sql, params = repo.calls[0]
        assert "SET name = :v0, slug = :v1, updated = CURRENT_TIMESTAMP WHERE id = :id" in sql
        assert "description" not in sql
        assert params == {"v0": "Foo", "v1": "foo", "id": 7}

    def test_skipped_name_drops_its_value(self):
        repo = RecordingRepository()
        repo.conditional_update("teams", 1, [None, "description"], ["ignored", "Desc"])

        sql, params = repo.calls[0]
        assert "SET description = :v0, updated = CURRENT_TIMESTAMP WHERE id = :id" in sql
        assert params == {"v0": "Desc", "id": 1}

    def test_games_have_no_timestamp_to_touch(self):
        repo = RecordingRepository()
        repo.conditional_update("games", 3, ["home_score"], [2])

        sql, params = repo.calls[0]
        assert "SET home_score = :v0 WHERE id = :id" in sql
        assert params == {"v0": 2, "id": 3}

    def test_mismatched_lengths_fail_fast(self):
        repo = RecordingRepository()
        with pytest.raises(ValueError, match="equal length"):
            repo.conditional_update("teams", 1, ["name", "slug"], ["Foo"])
        assert repo.calls == []

    def test_present_name_without_value_fails_fast(self):
        repo = RecordingRepository()
        with pytest.raises(ValueError, match="needs a value"):
            repo.conditional_update("teams", 1, ["name", "slug"], ["Foo", None])
        assert repo.calls == []

    def test_unknown_table_fails_fast(self):
        repo = RecordingRepository()
        with pytest.raises(ValueError, match="unknown table"):
            repo.conditional_update("teams; DROP TABLE teams", 1, ["name"], ["Foo"])


class TestQuery:

    def test_sql_error_becomes_failed_result(self, team_repo):
        result = team_repo.query("SELECT * FROM no_such_table", silent=True)
        assert result.is_failed

    def test_session_usable_after_failure(self, team_repo):
        team_repo.query("SELECT * FROM no_such_table", silent=True)
        assert team_repo.get_all()


class TestTeamRepository:

    def test_insert_and_fetch(self, team_repo):
        created = team_repo.insert("Valur", "valur", "Hlidarendi")
        assert created
        assert created.value.id is not None

        fetched = team_repo.get_by_slug("valur")
        assert fetched.value == created.value
        assert team_repo.get_by_id(created.value.id).value == created.value

    def test_unknown_slug_is_not_found(self, team_repo):
        assert team_repo.get_by_slug("nope").is_not_found

    def test_duplicate_slug_insert_fails(self, team_repo):
        team_repo.insert("Valur", "valur", None)
        assert team_repo.insert("Valur", "valur", None, silent=True).is_failed

    def test_slug_exists(self, team_repo, two_teams):
        assert team_repo.slug_exists("valur").value is True
        assert team_repo.slug_exists("kr").value is False

    def test_update_name_touches_name_and_slug_only(self, team_repo, two_teams):
        valur, _ = two_teams
        updated = team_repo.update(valur.id, name="Foo", slug="foo")
        assert updated.value.name == "Foo"
        assert updated.value.slug == "foo"
        assert updated.value.description == "Hlidarendi"

    def test_update_without_fields_fails(self, team_repo, two_teams):
        valur, _ = two_teams
        assert team_repo.update(valur.id).is_failed
        assert team_repo.get_by_id(valur.id).value == valur

    def test_update_bumps_updated_timestamp(self, team_repo, two_teams):
        valur, _ = two_teams
        team_repo.query(
            "UPDATE teams SET updated = '2000-01-01 00:00:00' WHERE id = :id",
            {"id": valur.id},
            write=True,
        )

        assert team_repo.update(valur.id, description="Nyr vollur")

        row = team_repo.query("SELECT updated FROM teams WHERE id = :id", {"id": valur.id}).value[0]
        assert not str(row["updated"]).startswith("2000-01-01")

    def test_update_missing_row_is_not_found(self, team_repo):
        assert team_repo.update(999, description="ghost").is_not_found

    def test_delete(self, team_repo, two_teams):
        assert team_repo.delete_by_slug("fram")
        assert team_repo.delete_by_slug("fram").is_not_found
        assert [t.slug for t in team_repo.get_all().value] == ["valur"]


class TestGameRepository:

    def test_insert_resolves_teams(self, game_repo, two_teams, recent_date):
        valur, fram = two_teams
        created = game_repo.insert(recent_date, valur.id, fram.id, 2, 0)
        assert created
        game = created.value
        assert game.home == valur
        assert game.away == fram
        assert game.date == recent_date
        assert game.away_score == 0

    def test_insert_with_explicit_id(self, game_repo, two_teams, recent_date):
        valur, fram = two_teams
        created = game_repo.insert(recent_date, valur.id, fram.id, 1, 1, game_id=42)
        assert created.value.id == 42
        assert game_repo.id_exists(42).value is True
        assert game_repo.id_exists(43).value is False

    def test_dangling_team_reference_maps_to_not_found(self, game_repo, two_teams, recent_date):
        valur, _ = two_teams
        # SQLite does not enforce the foreign key, so a dangling row can exist
        game_repo.query(
            "INSERT INTO games (id, date, home, away, home_score, away_score) "
            "VALUES (5, :date, :home, 999, 1, 0)",
            {"date": recent_date.isoformat(), "home": valur.id},
            write=True,
        )
        assert game_repo.get_by_id(5).is_not_found
        assert game_repo.get_all().value == []

    def test_list_by_team(self, game_repo, team_repo, two_teams, recent_date):
        valur, fram = two_teams
        kr = team_repo.insert("KR", "kr", None).value
        game_repo.insert(recent_date, valur.id, fram.id, 1, 0, game_id=1)
        game_repo.insert(recent_date, fram.id, kr.id, 2, 2, game_id=2)
        game_repo.insert(recent_date, kr.id, valur.id, 0, 3, game_id=3)

        assert [g.id for g in game_repo.get_by_team_id(valur.id).value] == [1, 3]
        assert [g.id for g in game_repo.get_all().value] == [1, 2, 3]

    def test_update_scores_keeps_zero(self, game_repo, two_teams, recent_date):
        valur, fram = two_teams
        game = game_repo.insert(recent_date, valur.id, fram.id, 2, 1).value
        updated = game_repo.update(game.id, home_score=0)
        assert updated.value.home_score == 0
        assert updated.value.away_score == 1

    def test_delete(self, game_repo, two_teams, recent_date):
        valur, fram = two_teams
        game = game_repo.insert(recent_date, valur.id, fram.id, 2, 1).value
        assert game_repo.delete_by_id(game.id)
        assert game_repo.get_by_id(game.id).is_not_found
        assert game_repo.delete_by_id(game.id).is_not_found
