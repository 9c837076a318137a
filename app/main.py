import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.endpoints import index, teams, games
from app.core.config import settings
from app.core.validation import ValidationFailed, format_errors

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(levelname)s: %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Teams & Games API",
    description="CRUD over teams and the games played between them",
    version="1.0.0"
)

# --- 1. CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- 2. ROUTES ---
app.include_router(index.router, tags=["Index"])
app.include_router(teams.router, tags=["Teams"])
app.include_router(games.router, tags=["Games"])


# --- 3. ERROR HANDLERS ---
@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    raw = exc.errors()
    if any(err.get("type") == "json_invalid" for err in raw):
        return JSONResponse(status_code=400, content={"error": "invalid json"})
    return JSONResponse(status_code=400, content={"errors": format_errors(raw)})


@app.exception_handler(ValidationFailed)
async def handle_validation_failed(request: Request, exc: ValidationFailed):
    return JSONResponse(status_code=400, content={"errors": exc.errors})


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "not found"})
    if exc.status_code >= 500:
        logger.error(f"error handling {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    logger.exception(f"error handling {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "internal server error"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
