# townhub/main.py
import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from townhub import models  # noqa
from townhub.api.v1.endpoints import (
    admin,
    auth,
    bank_settings,
    health,
    job_challenges,
    jobs,
    math_game,
    plugins,
    students,
    wordle_game,
)
from townhub.core.config import settings
from townhub.core.logging_config import setup_logging
from townhub.db.base import Base
from townhub.db.session import engine
from townhub.services.errors import ServiceError

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
    logger.info(
        "%s started (environment: %s)", settings.PROJECT_NAME, settings.NODE_ENV
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    message = str(first.get("msg", "Invalid request")).removeprefix("Value error, ")
    return JSONResponse(
        status_code=400,
        content={
            "error": message,
            "details": [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors
            ],
        },
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(health.router)
app.include_router(auth.router, prefix="/api")
app.include_router(students.router, prefix="/api")
app.include_router(admin.router, prefix="/api")
app.include_router(jobs.router, prefix="/api")
app.include_router(plugins.router, prefix="/api")
app.include_router(math_game.router, prefix="/api")
app.include_router(wordle_game.router, prefix="/api")
app.include_router(job_challenges.router, prefix="/api")
app.include_router(bank_settings.router, prefix="/api")


def resolve_frontend_file(dist: Path, path: str) -> Path:
    """File under ``dist`` for ``path``, or index.html for client-side routes."""
    root = dist.resolve()
    candidate = (root / path).resolve()
    if path and candidate.is_file() and candidate.is_relative_to(root):
        return candidate
    return root / "index.html"


# registered last so every API route wins
@app.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(full_path: str):
    if full_path.startswith("api/") or full_path == "api" or not settings.is_production:
        return JSONResponse(status_code=404, content={"error": "Route not found"})

    dist = Path(settings.CLIENT_DIST_PATH)
    if not (dist / "index.html").is_file():
        logger.error("Frontend build not found at %s", dist)
        return JSONResponse(
            status_code=500,
            content={"error": "Frontend not built", "path": str(dist)},
        )
    return FileResponse(resolve_frontend_file(dist, full_path))


def run() -> None:
    uvicorn.run("townhub.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
