"""Reads and writes against the shared status document.

Every operation runs inside one exclusive lock held only for the in-memory
work; responses are built from copies taken under that lock.
"""
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, List

from ..errors import UnknownSensorError
from ..logging_config import logger
from ..models.schemas import (
    Event,
    EventCreate,
    SensorUpdate,
    SensorValue,
    Sensors,
    SpaceAPI,
    State,
    StateUpdate,
)

MAX_EVENTS = 10
DEFAULT_SENSOR_LOCATION = "Main Space"
PEOPLE_SENSOR = "people_now_present"
PEOPLE_SENSOR_NAME = "People Counter"
NUMERIC_SENSOR_CATEGORIES = frozenset(
    {
        "temperature",
        "humidity",
        "barometer",
        "power_consumption",
        "beverage_supply",
        "network_connections",
        "account_balance",
        "total_member_count",
        PEOPLE_SENSOR,
    }
)


class StatusService:
    def __init__(self, document: SpaceAPI, clock: Callable[[], float] = time.time) -> None:
        self._document = document
        self._clock = clock
        self._lock = threading.Lock()

    def _now(self) -> int:
        return int(self._clock())

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return self._document.to_public()

    def update_state(self, update: StateUpdate, client_id: str = "unknown") -> Dict[str, Any]:
        with self._lock:
            state = self._document.state
            if state is None:
                state = State()
                self._document.state = state
            changed: List[str] = []
            if update.open is not None:
                state.open = update.open
                changed.append(f"open={update.open}")
            if update.message:
                state.message = update.message
                changed.append(f"message={update.message!r}")
            if update.trigger_person:
                state.trigger_person = update.trigger_person
                changed.append(f"trigger_person={update.trigger_person!r}")
            state.lastchange = self._now()
            result = state.model_dump(mode="json", exclude_none=True)

        logger.info(
            "state.updated",
            summary=", ".join(changed) or "lastchange only",
            lastchange=result["lastchange"],
            client_id=client_id,
        )
        return result

    def update_sensor(self, category: str, update: SensorUpdate, client_id: str = "unknown") -> List[Dict[str, Any]]:
        if category not in NUMERIC_SENSOR_CATEGORIES:
            raise UnknownSensorError(category)
        location = update.location or DEFAULT_SENSOR_LOCATION
        with self._lock:
            now = self._now()
            if self._document.sensors is None:
                self._document.sensors = Sensors()
            readings = getattr(self._document.sensors, category)
            if readings is None:
                readings = []
                setattr(self._document.sensors, category, readings)

            reading = next((item for item in readings if item.location == location), None)
            created = reading is None
            if reading is None:
                default_name = PEOPLE_SENSOR_NAME if category == PEOPLE_SENSOR else None
                reading = SensorValue(
                    value=update.value,
                    unit=update.unit,
                    location=location,
                    name=update.name or default_name,
                    lastchange=now,
                )
                readings.append(reading)
            else:
                reading.value = update.value
                reading.lastchange = now
                if update.unit:
                    reading.unit = update.unit
                if update.name:
                    reading.name = update.name
            result = [item.model_dump(mode="json", exclude_none=True) for item in readings]

        logger.info(
            "sensor.updated",
            sensor=category,
            location=location,
            value=update.value,
            created=created,
            client_id=client_id,
        )
        return result

    def add_event(self, payload: EventCreate, client_id: str = "unknown") -> Dict[str, Any]:
        with self._lock:
            event = Event(name=payload.name, type=payload.type, extra=payload.extra, timestamp=self._now())
            events = self._document.events
            if events is None:
                events = []
            events.append(event)
            self._document.events = events[-MAX_EVENTS:]
            result = event.model_dump(mode="json", exclude_none=True)

        logger.info("event.added", name=event.name, type=event.type, timestamp=event.timestamp, client_id=client_id)
        return result
