import datetime
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from app.core.mappers import game_mapper, games_mapper
from app.repositories.base import BaseRepository
from app.repositories.result import Result
from app.repositories.team_repository import TeamRepository
from app.schemas.game import Game
from app.schemas.team import Team

GAME_COLUMNS = "id, date, home, away, home_score, away_score"


class GameRepository(BaseRepository):
    def __init__(self, db: Session, teams: Optional[TeamRepository] = None):
        super().__init__(db)
        self.teams = teams or TeamRepository(db)

    def _resolver(self):
        """
        Team lookup for the mappers, memoized for the lifetime of one call so a
        list of games does not fetch the same team twice.
        """
        cache: Dict[int, Optional[Team]] = {}

        def resolve(team_id: int) -> Optional[Team]:
            if team_id not in cache:
                cache[team_id] = self.teams.find_by_id(team_id)
            return cache[team_id]

        return resolve

    def _many(self, result: Result) -> Result[List[Game]]:
        if not result:
            return result
        return Result.ok(games_mapper(result.value, self._resolver()))

    def _one(self, result: Result) -> Result[Game]:
        if not result:
            return result
        rows = result.value or []
        game = game_mapper(rows[0], self._resolver()) if rows else None
        if game is None:
            return Result.not_found()
        return Result.ok(game)

    def get_all(self) -> Result[List[Game]]:
        return self._many(self.query(f"SELECT {GAME_COLUMNS} FROM games ORDER BY date, id"))

    def get_by_team_id(self, team_id: int) -> Result[List[Game]]:
        return self._many(
            self.query(
                f"SELECT {GAME_COLUMNS} FROM games WHERE home = :id OR away = :id ORDER BY date, id",
                {"id": team_id},
            )
        )

    def get_by_id(self, game_id: int) -> Result[Game]:
        return self._one(
            self.query(f"SELECT {GAME_COLUMNS} FROM games WHERE id = :id", {"id": game_id})
        )

    def id_exists(self, game_id: int) -> Result[bool]:
        result = self.query("SELECT 1 FROM games WHERE id = :id", {"id": game_id})
        if not result:
            return result
        return Result.ok(len(result.value) > 0)

    def insert(
        self,
        date: datetime.date,
        home_id: int,
        away_id: int,
        home_score: int,
        away_score: int,
        game_id: Optional[int] = None,
        silent: bool = False,
    ) -> Result[Game]:
        params = {
            "date": date.isoformat(),
            "home": home_id,
            "away": away_id,
            "home_score": home_score,
            "away_score": away_score,
        }
        if game_id is None:
            sql = f"""
                INSERT INTO games (date, home, away, home_score, away_score)
                VALUES (:date, :home, :away, :home_score, :away_score)
                RETURNING {GAME_COLUMNS}
            """
        else:
            params["id"] = game_id
            sql = f"""
                INSERT INTO games (id, date, home, away, home_score, away_score)
                VALUES (:id, :date, :home, :away, :home_score, :away_score)
                RETURNING {GAME_COLUMNS}
            """

        mapped = self._one(self.query(sql, params, write=True, silent=silent))
        if mapped.is_not_found:
            return Result.failed("unable to create game")
        return mapped

    def update(
        self,
        game_id: int,
        date: Optional[datetime.date] = None,
        home_id: Optional[int] = None,
        away_id: Optional[int] = None,
        home_score: Optional[int] = None,
        away_score: Optional[int] = None,
    ) -> Result[Game]:
        candidates = [
            ("date", date.isoformat() if date else None),
            ("home", home_id),
            ("away", away_id),
            ("home_score", home_score),
            ("away_score", away_score),
        ]
        # a score of 0 is a real value, only None means "leave as is"
        fields = [name if value is not None else None for name, value in candidates]
        values = [value for _, value in candidates]
        return self._one(self.conditional_update("games", game_id, fields, values))

    def delete_by_id(self, game_id: int) -> Result[None]:
        result = self.query("DELETE FROM games WHERE id = :id", {"id": game_id}, write=True)
        if not result:
            return result
        if result.value != 1:
            return Result.not_found()
        return Result.ok()
