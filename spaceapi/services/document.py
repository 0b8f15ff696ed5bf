"""Startup loading of the status document."""
from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from ..errors import DocumentLoadError
from ..logging_config import logger
from ..models.schemas import SpaceAPI


def load_document(path: str | Path) -> SpaceAPI:
    source = Path(path)
    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("document.read_failed", path=str(source), error=str(exc))
        raise DocumentLoadError(f"Could not load {source}: {exc}") from exc
    try:
        document = SpaceAPI.model_validate_json(raw)
    except ValidationError as exc:
        logger.error("document.parse_failed", path=str(source), errors=exc.error_count())
        raise DocumentLoadError(f"Could not parse {source}: {exc}") from exc
    logger.info("document.loaded", path=str(source), space=document.space)
    return document
