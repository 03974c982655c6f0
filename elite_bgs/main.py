import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from elite_bgs.config import settings
from elite_bgs.database import Base, engine
from elite_bgs.exceptions import BGSError
from elite_bgs.routers import admin, community, factions, stations, systems, users
from elite_bgs.services.ingame_ids import load_ingame_ids

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if settings.CREATE_TABLES:
        import elite_bgs.models  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    # Reference tables are read once and served from memory
    load_ingame_ids()

    yield

    await engine.dispose()


app = FastAPI(title="Elite BGS API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BGSError)
async def bgs_error_handler(request: Request, exc: BGSError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path} storage error")
    return JSONResponse(
        status_code=500,
        content={"detail": "Storage query failed", "error": "StorageError"},
    )


# Include routers
app.include_router(factions.router)
app.include_router(systems.router)
app.include_router(stations.router)
app.include_router(users.router)
app.include_router(community.router)
app.include_router(admin.router)


@app.get("/")
async def health():
    """Health check."""
    return {"status": "ok"}


def run():
    uvicorn.run("elite_bgs.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
