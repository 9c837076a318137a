from typing import List, Optional

from app.core.mappers import team_mapper, teams_mapper
from app.repositories.base import BaseRepository
from app.repositories.result import Result
from app.schemas.team import Team

TEAM_COLUMNS = "id, name, slug, description"


class TeamRepository(BaseRepository):
    def _one(self, result: Result) -> Result[Team]:
        """First row of a query result as a Team."""
        if not result:
            return result
        rows = result.value or []
        team = team_mapper(rows[0]) if rows else None
        if team is None:
            return Result.not_found()
        return Result.ok(team)

    def get_all(self) -> Result[List[Team]]:
        result = self.query(f"SELECT {TEAM_COLUMNS} FROM teams ORDER BY id")
        if not result:
            return result
        return Result.ok(teams_mapper(result.value))

    def get_by_slug(self, slug: str) -> Result[Team]:
        return self._one(
            self.query(f"SELECT {TEAM_COLUMNS} FROM teams WHERE slug = :slug", {"slug": slug})
        )

    def get_by_id(self, team_id: int) -> Result[Team]:
        return self._one(
            self.query(f"SELECT {TEAM_COLUMNS} FROM teams WHERE id = :id", {"id": team_id})
        )

    def find_by_id(self, team_id: int) -> Optional[Team]:
        # resolver signature expected by the game mappers
        result = self.get_by_id(team_id)
        return result.value if result else None

    def slug_exists(self, slug: str) -> Result[bool]:
        result = self.query("SELECT 1 FROM teams WHERE slug = :slug", {"slug": slug})
        if not result:
            return result
        return Result.ok(len(result.value) > 0)

    def insert(self, name: str, slug: str, description: Optional[str], silent: bool = False) -> Result[Team]:
        result = self.query(
            f"""
            INSERT INTO teams (name, slug, description)
            VALUES (:name, :slug, :description)
            RETURNING {TEAM_COLUMNS}
            """,
            {"name": name, "slug": slug, "description": description},
            write=True,
            silent=silent,
        )
        mapped = self._one(result)
        if mapped.is_not_found:
            # the insert succeeded but the row could not be mapped back
            return Result.failed("unable to create team")
        return mapped

    def update(self, team_id: int, name: Optional[str] = None, slug: Optional[str] = None,
               description: Optional[str] = None) -> Result[Team]:
        """
        Partial update. A new name always carries its slug with it.
        """
        fields = [
            "name" if name else None,
            "slug" if name else None,
            "description" if description else None,
        ]
        values = [
            name if name else None,
            slug if name else None,
            description if description else None,
        ]
        return self._one(self.conditional_update("teams", team_id, fields, values))

    def delete_by_slug(self, slug: str) -> Result[None]:
        result = self.query("DELETE FROM teams WHERE slug = :slug", {"slug": slug}, write=True)
        if not result:
            return result
        if result.value != 1:
            return Result.not_found()
        return Result.ok()
