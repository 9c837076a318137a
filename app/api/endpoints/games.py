import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.deps import get_team_repository, get_game_repository, unwrap
from app.core.validation import ValidationFailed, field_error
from app.repositories.game_repository import GameRepository
from app.repositories.team_repository import TeamRepository
from app.schemas.game import Game, GameCreate, GameUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def game_does_not_exist(
    payload: GameCreate,
    games: GameRepository = Depends(get_game_repository),
) -> GameCreate:
    if payload.id is None:
        return payload

    exists = games.id_exists(payload.id)
    if not exists:
        raise HTTPException(status_code=500, detail="unable to create game")
    if exists.value:
        raise ValidationFailed([field_error("id", "Game already exists", payload.id)])
    return payload


def _resolve_team_ids(teams: TeamRepository, **slugs: Optional[str]) -> dict:
    """
    Maps {"home": slug, "away": slug} to team ids. Every unknown slug is
    reported, not just the first one.
    """
    ids = {}
    errors = []
    for field, slug in slugs.items():
        if slug is None:
            ids[field] = None
            continue
        result = teams.get_by_slug(slug)
        if result:
            ids[field] = result.value.id
        elif result.is_not_found:
            errors.append(field_error(field, "Team does not exist", slug))
        else:
            raise HTTPException(status_code=500, detail="unable to get team")

    if errors:
        raise ValidationFailed(errors)
    return ids


@router.get("/games", response_model=list[Game])
def list_games(games: GameRepository = Depends(get_game_repository)):
    return unwrap(games.get_all(), "unable to get games")


@router.get("/games/{game_id}", response_model=Game)
def get_game(game_id: int, games: GameRepository = Depends(get_game_repository)):
    return unwrap(games.get_by_id(game_id), "unable to get game")


@router.post("/games", response_model=Game, status_code=201)
def create_game(
    payload: GameCreate = Depends(game_does_not_exist),
    teams: TeamRepository = Depends(get_team_repository),
    games: GameRepository = Depends(get_game_repository),
):
    ids = _resolve_team_ids(teams, home=payload.home, away=payload.away)

    created = games.insert(
        date=payload.date,
        home_id=ids["home"],
        away_id=ids["away"],
        home_score=payload.home_score,
        away_score=payload.away_score,
        game_id=payload.id,
    )
    game = unwrap(created, "unable to create game")
    logger.info(f"game created: {game.id} ({game.home.slug} - {game.away.slug})")
    return game


@router.patch("/games/{game_id}", response_model=Game)
def update_game(
    game_id: int,
    payload: GameUpdate,
    teams: TeamRepository = Depends(get_team_repository),
    games: GameRepository = Depends(get_game_repository),
):
    game = unwrap(games.get_by_id(game_id), "unable to get game")

    ids = _resolve_team_ids(teams, home=payload.home, away=payload.away)

    # the pair must stay distinct once merged with the stored teams
    home_id = ids["home"] if ids["home"] is not None else game.home.id
    away_id = ids["away"] if ids["away"] is not None else game.away.id
    if home_id == away_id:
        raise ValidationFailed([field_error("", "home and away must be different teams")])

    updated = games.update(
        game.id,
        date=payload.date,
        home_id=ids["home"],
        away_id=ids["away"],
        home_score=payload.home_score,
        away_score=payload.away_score,
    )
    return unwrap(updated, "unable to update game")


@router.delete("/games/{game_id}", status_code=204)
def delete_game(game_id: int, games: GameRepository = Depends(get_game_repository)):
    deleted = games.delete_by_id(game_id)
    unwrap(deleted, "unable to delete game")
    logger.info(f"game deleted: {game_id}")
    return Response(status_code=204)
