from __future__ import annotations

from typing import Any, Dict, List, Type, TypeVar

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from ..deps import get_status_service
from ..errors import ClientInputError
from ..models.schemas import EventCreate, SensorUpdate, StateUpdate
from ..services.status import PEOPLE_SENSOR, StatusService
from ..utils.auth import require_api_key

router = APIRouter(tags=["space"])

PayloadT = TypeVar("PayloadT", bound=BaseModel)


async def parse_body(request: Request, model: Type[PayloadT]) -> PayloadT:
    # Runs after require_api_key: auth failures take precedence over malformed bodies.
    raw = await request.body()
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise ClientInputError() from exc


@router.get("/")
@router.get("/api/space")
async def get_space(service: StatusService = Depends(get_status_service)) -> Dict[str, Any]:
    return service.snapshot()


@router.post("/api/space/state")
async def update_state(
    request: Request,
    client_id: str = Depends(require_api_key),
    service: StatusService = Depends(get_status_service),
) -> Dict[str, Any]:
    payload = await parse_body(request, StateUpdate)
    return service.update_state(payload, client_id=client_id)


@router.post("/api/space/people")
async def update_people_count(
    request: Request,
    client_id: str = Depends(require_api_key),
    service: StatusService = Depends(get_status_service),
) -> List[Dict[str, Any]]:
    payload = await parse_body(request, SensorUpdate)
    return service.update_sensor(PEOPLE_SENSOR, payload, client_id=client_id)


@router.post("/api/space/sensors/{category}")
async def update_sensor(
    category: str,
    request: Request,
    client_id: str = Depends(require_api_key),
    service: StatusService = Depends(get_status_service),
) -> List[Dict[str, Any]]:
    payload = await parse_body(request, SensorUpdate)
    return service.update_sensor(category, payload, client_id=client_id)


@router.post("/api/space/event")
async def add_event(
    request: Request,
    client_id: str = Depends(require_api_key),
    service: StatusService = Depends(get_status_service),
) -> Dict[str, Any]:
    payload = await parse_body(request, EventCreate)
    return service.add_event(payload, client_id=client_id)
