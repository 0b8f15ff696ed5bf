"""SpaceAPI v15 document and the write-request payloads."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt


class BaseSchema(BaseModel):
    """Keeps unknown keys so documents round-trip verbatim."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Area(BaseSchema):
    name: str
    description: Optional[str] = None
    square_meters: float


class Location(BaseSchema):
    address: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    timezone: Optional[str] = None
    country_code: Optional[str] = None
    hint: Optional[str] = None
    areas: Optional[List[Area]] = None


class Spacefed(BaseSchema):
    spacenet: bool = False
    spacesaml: bool = False


class Icon(BaseSchema):
    open: str
    closed: str


class State(BaseSchema):
    open: Optional[bool] = None
    lastchange: Optional[int] = None
    trigger_person: Optional[str] = None
    message: Optional[str] = None
    icon: Optional[Icon] = None


class Event(BaseSchema):
    name: str
    type: str
    timestamp: int
    extra: Optional[str] = None


class Keymaster(BaseSchema):
    name: Optional[str] = None
    irc_nick: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    twitter: Optional[str] = None
    xmpp: Optional[str] = None
    mastodon: Optional[str] = None
    matrix: Optional[str] = None


class Contact(BaseSchema):
    phone: Optional[str] = None
    sip: Optional[str] = None
    keymasters: Optional[List[Keymaster]] = None
    irc: Optional[str] = None
    twitter: Optional[str] = None
    mastodon: Optional[str] = None
    facebook: Optional[str] = None
    identica: Optional[str] = None
    foursquare: Optional[str] = None
    email: Optional[str] = None
    ml: Optional[str] = None
    xmpp: Optional[str] = None
    issue_mail: Optional[str] = None


class SensorValue(BaseSchema):
    value: Any = None
    unit: Optional[str] = None
    location: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    lastchange: Optional[int] = None


class Sensors(BaseSchema):
    temperature: Optional[List[SensorValue]] = None
    door_locked: Optional[List[SensorValue]] = None
    barometer: Optional[List[SensorValue]] = None
    radiation: Optional[List[SensorValue]] = None
    humidity: Optional[List[SensorValue]] = None
    beverage_supply: Optional[List[SensorValue]] = None
    power_consumption: Optional[List[SensorValue]] = None
    wind: Optional[List[SensorValue]] = None
    network_connections: Optional[List[SensorValue]] = None
    account_balance: Optional[List[SensorValue]] = None
    total_member_count: Optional[List[SensorValue]] = None
    people_now_present: Optional[List[SensorValue]] = None
    network_traffic: Optional[List[SensorValue]] = None


class Feed(BaseSchema):
    type: Optional[str] = None
    url: str


class Feeds(BaseSchema):
    blog: Optional[Feed] = None
    wiki: Optional[Feed] = None
    calendar: Optional[Feed] = None
    flickr: Optional[Feed] = None


class Link(BaseSchema):
    name: str
    description: Optional[str] = None
    url: str


class MembershipPlan(BaseSchema):
    name: str
    value: float
    currency: str
    billing_interval: str
    description: Optional[str] = None


class LinkedSpace(BaseSchema):
    endpoint: Optional[str] = None
    website: Optional[str] = None


class SpaceAPI(BaseSchema):
    api_compatibility: List[str] = Field(default_factory=lambda: ["15"])
    space: str
    logo: str
    url: str
    location: Optional[Location] = None
    spacefed: Optional[Spacefed] = None
    cam: Optional[List[str]] = None
    state: Optional[State] = None
    events: Optional[List[Event]] = None
    contact: Contact = Field(default_factory=Contact)
    sensors: Optional[Sensors] = None
    feeds: Optional[Feeds] = None
    projects: Optional[List[str]] = None
    links: Optional[List[Link]] = None
    membership_plans: Optional[List[MembershipPlan]] = None
    linked_spaces: Optional[List[LinkedSpace]] = None

    def to_public(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


# ----------------------------------------------------------------------
# Write payloads
# ----------------------------------------------------------------------
class RequestSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")


class StateUpdate(RequestSchema):
    """Partial state update.

    ``open`` is applied whenever it is present and not null, so ``false``
    closes the space. ``message`` and ``trigger_person`` are applied only when
    they are non-empty strings; an empty string leaves the current value alone.
    """

    open: Optional[StrictBool] = None
    message: Optional[str] = None
    trigger_person: Optional[str] = None


class SensorUpdate(RequestSchema):
    value: Union[StrictInt, StrictFloat]
    location: Optional[str] = None
    unit: Optional[str] = None
    name: Optional[str] = None


class EventCreate(RequestSchema):
    name: str
    type: str
    extra: Optional[str] = None
