from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import TypedMessage
from rmsforms.toolkit.location import INVALID, LatLongPair


@dataclass(frozen=True)
class DyfiMessage(TypedMessage):
    """Did You Feel It (DYFI) earthquake report, extracted from its embedded JSON."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.DYFI

    exercise_id: str = ""
    is_real_event: bool = False
    is_felt: bool = False
    form_date_time: datetime | None = None
    location_string: str = ""
    location: LatLongPair = INVALID
    response: str = ""
    comments: str = ""
    intensity: str = ""
    form_version: str = ""
    location_source: str = ""
    situation: str = ""
    situation_other: str = ""
    situation_floor: str = ""
    situation_floor_other: str = ""
    structure_stories: str = ""
    structure_stories_other: str = ""
    situation_sleep: str = ""
    situation_others_felt_it: str = ""
    experience_shaking: str = ""
    experience_reaction: str = ""
    experience_response_other: str = ""
    experience_stand: str = ""
    effects_doors: str = ""
    effects_sounds: str = ""
    effects_shelves: str = ""
    effects_pictures: str = ""
    effects_furniture: str = ""
    effects_appliances: str = ""
    effects_walls: str = ""
    damage_text: str = ""
    building_damage: str = ""
    language: str = ""


@dataclass(frozen=True)
class WxLocalMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WX_LOCAL

    organization: str = ""
    location: LatLongPair = INVALID
    form_date_time: datetime | None = None
    location_string: str = ""
    city: str = ""
    state: str = ""
    county: str = ""
    temperature: str = ""
    wind_speed: str = ""
    range: str = ""
    max_gusts: str = ""
    warning_type: str = ""
    warning_field: str = ""
    comments: str = ""


@dataclass(frozen=True)
class WxSevereMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WX_SEVERE

    location: LatLongPair = INVALID
    type: str = ""
    contact_person: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    city: str = ""
    region: str = ""
    county: str = ""
    other: str = ""
    flood: str = ""
    hail_size: str = ""
    wind_speed: str = ""
    tornado: str = ""
    wind_damage: str = ""
    precipitation: str = ""
    snow: str = ""
    freezing_rain: str = ""
    rain: str = ""
    rain_period: str = ""
    comments: str = ""


@dataclass(frozen=True)
class WxHurricaneMessage(TypedMessage):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WX_HURRICANE

    location: LatLongPair = INVALID
    status: str = ""
    is_observer: str = ""
    observer_phone: str = ""
    observer_email: str = ""
    city: str = ""
    county: str = ""
    state: str = ""
    country: str = ""
    instruments_used: str = ""
    wind_speed: str = ""
    gust_speed: str = ""
    wind_direction: str = ""
    barometric_pressure: str = ""
    comments: str = ""
