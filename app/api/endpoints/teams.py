import logging
from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.deps import get_team_repository, get_game_repository, unwrap
from app.core.validation import ValidationFailed, field_error
from app.repositories.game_repository import GameRepository
from app.repositories.team_repository import TeamRepository
from app.schemas.game import Game
from app.schemas.team import Team, TeamCreate, TeamUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def team_does_not_exist(
    payload: TeamCreate,
    teams: TeamRepository = Depends(get_team_repository),
) -> TeamCreate:
    """
    Runs after the schema validators: rejects a name whose slug is already
    taken, before anything is inserted.
    """
    if not payload.slug:
        raise ValidationFailed([field_error("name", "name must contain letters or digits", payload.name)])

    exists = teams.slug_exists(payload.slug)
    if not exists:
        raise HTTPException(status_code=500, detail="unable to create team")
    if exists.value:
        raise ValidationFailed([field_error("name", "Team already exists", payload.name)])
    return payload


@router.get("/teams", response_model=list[Team])
def list_teams(teams: TeamRepository = Depends(get_team_repository)):
    return unwrap(teams.get_all(), "unable to get teams")


@router.post("/teams", response_model=Team, status_code=201)
def create_team(
    payload: TeamCreate = Depends(team_does_not_exist),
    teams: TeamRepository = Depends(get_team_repository),
):
    created = teams.insert(payload.name, payload.slug, payload.description)
    team = unwrap(created, "unable to create team")
    logger.info(f"team created: {team.slug}")
    return team


@router.get("/teams/{slug}", response_model=Team)
def get_team(slug: str, teams: TeamRepository = Depends(get_team_repository)):
    return unwrap(teams.get_by_slug(slug), "unable to get team")


@router.patch("/teams/{slug}", response_model=Team)
def update_team(
    slug: str,
    payload: TeamUpdate,
    teams: TeamRepository = Depends(get_team_repository),
):
    team = unwrap(teams.get_by_slug(slug), "unable to get team")

    new_slug = payload.slug
    if new_slug and new_slug != team.slug:
        taken = unwrap(teams.slug_exists(new_slug), "unable to update team")
        if taken:
            raise ValidationFailed([field_error("name", "Team already exists", payload.name)])

    updated = teams.update(
        team.id,
        name=payload.name,
        slug=new_slug,
        description=payload.description,
    )
    return unwrap(updated, "unable to update team")


@router.delete("/teams/{slug}", status_code=204)
def delete_team(slug: str, teams: TeamRepository = Depends(get_team_repository)):
    team = unwrap(teams.get_by_slug(slug), "unable to get team")

    deleted = teams.delete_by_slug(team.slug)
    if not deleted:
        # the row was there a moment ago, anything else is a failure
        raise HTTPException(status_code=500, detail="unable to delete team")

    logger.info(f"team deleted: {team.slug}")
    return Response(status_code=204)


@router.get("/teams/{slug}/games", response_model=list[Game])
def list_team_games(
    slug: str,
    teams: TeamRepository = Depends(get_team_repository),
    games: GameRepository = Depends(get_game_repository),
):
    team = unwrap(teams.get_by_slug(slug), "unable to get team")
    return unwrap(games.get_by_team_id(team.id), "unable to get games")
