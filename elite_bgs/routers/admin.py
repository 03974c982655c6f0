import logging
from pathlib import Path

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from elite_bgs.config import settings
from elite_bgs.database import get_session_factory
from elite_bgs.dependencies import Caller, require_admin
from elite_bgs.exceptions import NotFoundError
from elite_bgs.schemas import ScriptRunRequest
from elite_bgs.scripts import SCRIPTS
from elite_bgs.services.ingame_ids import load_ingame_ids

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["admin"])


def get_backgrounds_dir() -> Path:
    return settings.BACKGROUNDS_DIR


def get_ingame_ids() -> dict[str, dict[str, str]]:
    return load_ingame_ids()


@router.get("/backgroundimages", response_model=list[str])
async def list_background_images(directory: Path = Depends(get_backgrounds_dir)):
    """File names of the available background images."""
    if not directory.is_dir():
        logger.warning(f"Backgrounds directory {directory} does not exist")
        return []
    return sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and not entry.name.startswith(".")
    )


@router.get("/scripts", response_model=list[str])
async def list_scripts(_: Caller = Depends(require_admin)):
    """Names of the maintenance scripts (admins only)."""
    return sorted(SCRIPTS)


@router.put("/scripts/run", response_model=bool)
async def run_script(
    data: ScriptRunRequest,
    background_tasks: BackgroundTasks,
    caller: Caller = Depends(require_admin),
    sessions: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """Start a maintenance script in the background (admins only)."""
    script = SCRIPTS.get(data.script)
    if script is None:
        raise NotFoundError(f"Unknown script '{data.script}'")
    logger.info(f"Script {data.script} started by {caller.id}")
    background_tasks.add_task(script, sessions)
    return True


@router.get("/ingameids/all")
async def all_ingame_ids(tables: dict = Depends(get_ingame_ids)):
    """In-game id to display name tables."""
    return tables
