from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from spaceapi.errors import UnknownSensorError
from spaceapi.models.schemas import EventCreate, SensorUpdate, StateUpdate
from spaceapi.services.status import MAX_EVENTS, StatusService

from conftest import FakeClock, make_document


def test_update_state_stamps_lastchange_from_clock():
    clock = FakeClock(1_800_000_000)
    service = StatusService(make_document(), clock=clock)

    state = service.update_state(StateUpdate())

    assert state["lastchange"] == 1_800_000_000
    assert state["message"] == "Space is open for testing"


def test_snapshot_is_detached_from_document():
    service = StatusService(make_document())
    snapshot = service.snapshot()
    snapshot["state"]["open"] = False
    assert service.snapshot()["state"]["open"] is True


def test_update_sensor_rejects_unsupported_category():
    service = StatusService(make_document())
    with pytest.raises(UnknownSensorError, match="wind") as excinfo:
        service.update_sensor("wind", SensorUpdate(value=3))
    assert excinfo.value.status_code == 404
    assert service.snapshot()["sensors"].get("wind") is None


def test_sensor_created_when_document_has_none():
    document = make_document()
    document.sensors = None
    service = StatusService(document)

    readings = service.update_sensor("people_now_present", SensorUpdate(value=4))

    assert readings[0]["location"] == "Main Space"
    assert readings[0]["name"] == "People Counter"


def test_concurrent_event_appends_keep_the_bound():
    service = StatusService(make_document())

    def append(index: int) -> None:
        service.add_event(EventCreate(name=f"Event {index}", type="test"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(append, range(100)))

    events = service.snapshot()["events"]
    assert len(events) == MAX_EVENTS
    assert len({event["name"] for event in events}) == MAX_EVENTS


def test_concurrent_sensor_upserts_lose_no_locations():
    service = StatusService(make_document())

    def upsert(index: int) -> None:
        service.update_sensor("people_now_present", SensorUpdate(value=index, location=f"Room {index % 20}"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(upsert, range(200)))

    readings = service.snapshot()["sensors"]["people_now_present"]
    locations = [reading["location"] for reading in readings]
    assert len(locations) == len(set(locations)) == 21
