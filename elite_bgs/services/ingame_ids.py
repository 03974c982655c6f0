"""In-game identifier tables (journal ids to display names)."""
import json
import logging
from functools import lru_cache
from pathlib import Path

from elite_bgs.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def load_ingame_ids(path: Path = settings.INGAME_IDS_FILE) -> dict[str, dict[str, str]]:
    with open(path, encoding="utf-8") as f:
        tables = json.load(f)
    logger.info(f"Loaded {len(tables)} in-game id tables from {path}")
    return tables
