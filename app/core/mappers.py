# app/core/mappers.py
"""
Row -> domain object mapping.

Every mapper returns a fully populated object or None. Nothing here raises
on malformed input: None means "not representable", callers decide what
that means for them.
"""
from collections.abc import Iterable, Mapping
from typing import Any, Callable, List, Optional

from app.core.validation import parse_date
from app.schemas.game import Game
from app.schemas.team import Team

TEAM_REQUIRED = ('id', 'name', 'slug')
GAME_REQUIRED = ('id', 'date', 'home', 'away', 'home_score', 'away_score')

TeamResolver = Callable[[int], Optional[Team]]


def _as_mapping(record: Any) -> Optional[Mapping]:
    # SQLAlchemy rows expose their columns through ._mapping
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record
    mapping = getattr(record, '_mapping', None)
    if isinstance(mapping, Mapping):
        return mapping
    return None


def _has_fields(record: Mapping, fields) -> bool:
    # 0 is a valid score, only absent/None counts as missing
    return all(record.get(field) is not None for field in fields)


def team_mapper(potential_team: Any) -> Optional[Team]:
    team = _as_mapping(potential_team)
    if team is None or not _has_fields(team, TEAM_REQUIRED):
        return None

    try:
        return Team(
            id=team['id'],
            name=team['name'],
            slug=team['slug'],
            description=team.get('description') or None,
        )
    except (TypeError, ValueError):
        return None


def teams_mapper(potential_teams: Any) -> List[Team]:
    if not isinstance(potential_teams, Iterable) or isinstance(potential_teams, (str, bytes, Mapping)):
        return []
    mapped = (team_mapper(t) for t in potential_teams)
    return [t for t in mapped if t is not None]


def game_mapper(potential_game: Any, resolve_team: TeamResolver) -> Optional[Game]:
    """
    Maps a games row, resolving its home/away ids into full teams through
    `resolve_team`. A reference that does not resolve makes the whole game
    unmappable.
    """
    game = _as_mapping(potential_game)
    if game is None or not _has_fields(game, GAME_REQUIRED):
        return None

    try:
        game_date = parse_date(game['date'])
    except ValueError:
        return None

    home_team = resolve_team(game['home'])
    away_team = resolve_team(game['away'])
    if home_team is None or away_team is None:
        return None

    try:
        return Game(
            id=game['id'],
            date=game_date,
            home=home_team,
            away=away_team,
            home_score=game['home_score'],
            away_score=game['away_score'],
        )
    except (TypeError, ValueError):
        return None


def games_mapper(potential_games: Any, resolve_team: TeamResolver) -> List[Game]:
    if not isinstance(potential_games, Iterable) or isinstance(potential_games, (str, bytes, Mapping)):
        return []
    mapped = (game_mapper(g, resolve_team) for g in potential_games)
    return [g for g in mapped if g is not None]
