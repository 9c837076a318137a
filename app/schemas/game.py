import datetime
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Any, Optional

from app.schemas.team import Team
from app.core.validation import validate_game_date, validate_score, validate_string, at_least_one

GAME_FIELDS = ['date', 'home', 'away', 'home_score', 'away_score']


# 1. OUTPUT: game with both teams resolved
class Game(BaseModel):
    id: int
    date: datetime.date
    home: Team
    away: Team
    home_score: int
    away_score: int


# 2. INPUT: POST /games (home/away are team slugs)
class GameCreate(BaseModel):
    id: Optional[int] = None
    date: Optional[datetime.date] = None
    home: Optional[str] = None
    away: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None

    model_config = ConfigDict(validate_default=True)

    @field_validator('id', mode='before')
    @classmethod
    def check_id(cls, v: Any) -> Optional[int]:
        if v is None:
            return None
        if isinstance(v, bool) or not isinstance(v, int) or v < 1:
            raise ValueError("id must be a positive integer")
        return v

    @field_validator('date', mode='before')
    @classmethod
    def check_date(cls, v: Any) -> datetime.date:
        if v is None:
            raise ValueError("date is required")
        return validate_game_date(v)

    @field_validator('home', 'away', mode='before')
    @classmethod
    def check_team(cls, v: Any, info) -> str:
        return validate_string(v, info.field_name, max_length=64)

    @field_validator('home_score', 'away_score', mode='before')
    @classmethod
    def check_score(cls, v: Any, info) -> int:
        if v is None:
            raise ValueError(f"{info.field_name} is required")
        return validate_score(v, info.field_name)

    @model_validator(mode='after')
    def check_opponents(self):
        if self.home == self.away:
            raise ValueError("home and away must be different teams")
        return self


# 3. INPUT: PATCH /games/{id}
class GameUpdate(BaseModel):
    date: Optional[datetime.date] = None
    home: Optional[str] = None
    away: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None

    @field_validator('date', mode='before')
    @classmethod
    def check_date(cls, v: Any) -> Optional[datetime.date]:
        return None if v is None else validate_game_date(v)

    @field_validator('home', 'away', mode='before')
    @classmethod
    def check_team(cls, v: Any, info) -> Optional[str]:
        return validate_string(v, info.field_name, required=False, max_length=64)

    @field_validator('home_score', 'away_score', mode='before')
    @classmethod
    def check_score(cls, v: Any, info) -> Optional[int]:
        return None if v is None else validate_score(v, info.field_name)

    @model_validator(mode='after')
    def check_any_field(self):
        at_least_one(self.model_dump(), GAME_FIELDS)
        if self.home and self.home == self.away:
            raise ValueError("home and away must be different teams")
        return self
