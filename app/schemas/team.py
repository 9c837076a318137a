from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Any, Optional

from app.core.normalization import slug_from_name
from app.core.validation import validate_string, at_least_one

NAME_MAX_LENGTH = 64
DESCRIPTION_MAX_LENGTH = 1000


# 1. OUTPUT: domain object
class Team(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# 2. INPUT: POST /teams
class TeamCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None

    # run the validators on missing fields too, so a missing name is reported
    model_config = ConfigDict(validate_default=True)

    @field_validator('name', mode='before')
    @classmethod
    def check_name(cls, v: Any) -> str:
        return validate_string(v, 'name', max_length=NAME_MAX_LENGTH)

    @field_validator('description', mode='before')
    @classmethod
    def check_description(cls, v: Any) -> Optional[str]:
        return validate_string(
            v, 'description', required=False, max_length=DESCRIPTION_MAX_LENGTH
        )

    @property
    def slug(self) -> str:
        return slug_from_name(self.name)


# 3. INPUT: PATCH /teams/{slug}
class TeamUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def check_name(cls, v: Any) -> Optional[str]:
        return validate_string(v, 'name', required=False, max_length=NAME_MAX_LENGTH)

    @field_validator('description', mode='before')
    @classmethod
    def check_description(cls, v: Any) -> Optional[str]:
        return validate_string(
            v, 'description', required=False, max_length=DESCRIPTION_MAX_LENGTH
        )

    @model_validator(mode='after')
    def check_any_field(self):
        at_least_one({'name': self.name, 'description': self.description}, ['name', 'description'])
        # a rename must still produce a reachable slug
        if self.name and not self.slug:
            raise ValueError("name must contain letters or digits")
        return self

    @property
    def slug(self) -> Optional[str]:
        return slug_from_name(self.name) if self.name else None
