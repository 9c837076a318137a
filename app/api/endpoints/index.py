from fastapi import APIRouter

router = APIRouter()

ROUTES = [
    {"href": "/teams", "methods": ["GET", "POST"]},
    {"href": "/teams/{slug}", "methods": ["GET", "PATCH", "DELETE"]},
    {"href": "/teams/{slug}/games", "methods": ["GET"]},
    {"href": "/games", "methods": ["GET", "POST"]},
    {"href": "/games/{id}", "methods": ["GET", "PATCH", "DELETE"]},
]


@router.get("/")
def index():
    return ROUTES
