from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.repositories.game_repository import GameRepository
from app.repositories.result import Result
from app.repositories.team_repository import TeamRepository


def get_team_repository(db: Session = Depends(get_db)) -> TeamRepository:
    return TeamRepository(db)


def get_game_repository(db: Session = Depends(get_db)) -> GameRepository:
    return GameRepository(db)


def unwrap(result: Result, error: str):
    """
    Value of an OK result. NOT_FOUND falls through to the generic 404
    handler, FAILED becomes a 500 carrying `error`.
    """
    if result:
        return result.value
    if result.is_not_found:
        raise HTTPException(status_code=404)
    raise HTTPException(status_code=500, detail=error)
