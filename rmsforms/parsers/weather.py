import json
import math

from rmsforms.core.message_type import MessageType
from rmsforms.core.reject_type import RejectType
from rmsforms.logging.logger import Log
from rmsforms.messages.base import ParseResult, RawMessage, RejectionMessage
from rmsforms.messages.weather import DyfiMessage, WxHurricaneMessage, WxLocalMessage, WxSevereMessage
from rmsforms.parsers.base import BaseParser
from rmsforms.toolkit.dates import MultiDateTimeParser
from rmsforms.toolkit.document import missing_location_context
from rmsforms.toolkit.location import LatLongPair

BEGIN_JSON = "--- BEGIN json ---"
END_JSON = "--- END json ---"

MISSING = "--"
SPEED_SUFFIX = " MPH"
TEMPERATURE_SUFFIX = " F"
METRIC = "Metric"
KPH_TO_MPH = 0.62137119


class DyfiParser(BaseParser):
    """USGS "Did You Feel It?" report carried as JSON between two marker lines."""

    MESSAGE_TYPE = MessageType.DYFI

    DATE_TIME = MultiDateTimeParser(["%m/%d/%Y %H:%M"])

    def _parse(self, message: RawMessage) -> ParseResult:
        content = message.plain_content or ""
        if BEGIN_JSON not in content:
            return self.reject(message, RejectType.CANT_PARSE_DYFI_JSON, BEGIN_JSON)
        if END_JSON not in content:
            return self.reject(message, RejectType.CANT_PARSE_DYFI_JSON, END_JSON)

        begin = content.index(BEGIN_JSON) + len(BEGIN_JSON)
        json_string = content[begin:content.index(END_JSON, begin)].strip()
        try:
            values = json.loads(json_string)
        except json.JSONDecodeError as exc:
            return self.reject(message, RejectType.CANT_PARSE_DYFI_JSON, str(exc))
        if not isinstance(values, dict):
            return self.reject(message, RejectType.CANT_PARSE_DYFI_JSON, "json block is not an object")

        def value(key: str) -> str:
            found = values.get(key)
            return "" if found is None else str(found)

        return DyfiMessage(
            message,
            exercise_id=value("exercise_id"),
            is_real_event=value("eventType").upper() != "EXERCISE",
            is_felt=value("fldSituation_felt") == "1",
            form_date_time=self.DATE_TIME.parse(value("ciim_time")),
            location_string=value("ciim_mapAddress"),
            location=LatLongPair(value("ciim_mapLat"), value("ciim_mapLon")),
            response=value("fldExperience_response"),
            comments=value("comments"),
            intensity=value("mapmmscale"),
            form_version=value("form_version"),
            location_source=value("location_source"),
            situation=value("fldSituation_situation"),
            situation_other=value("fldSituation_others"),
            situation_floor=value("fldSituation_floor"),
            situation_floor_other=value("ifHigherPleaseDescribe"),
            structure_stories=value("fldSituation_structureStories"),
            structure_stories_other=value("howTallPleaseDescribe"),
            situation_sleep=value("fldSituation_sleep"),
            situation_others_felt_it=value("fldSituation_others"),
            experience_shaking=value("fldExperience_shaking"),
            experience_reaction=value("fldExperience_reaction"),
            experience_response_other=value("fldExperience_response_other"),
            experience_stand=value("fldExperience_stand"),
            effects_doors=value("fldEffects_doors"),
            effects_sounds=value("fldEffects_sounds"),
            effects_shelves=value("fldEffects_shelved"),
            effects_pictures=value("fldEffects_pictures"),
            effects_furniture=value("fldEffects_furniture"),
            effects_appliances=value("fldEffects_appliances"),
            effects_walls=value("fldEffects_walls"),
            damage_text=value("d_text"),
            building_damage=value("BuildingDamage"),
            language=value("language"),
        )


class WxLocalParser(BaseParser):
    """Local weather report; temperatures and speeds are normalised to F and MPH."""

    MESSAGE_TYPE = MessageType.WX_LOCAL

    LOCATION_TAGS = ("gps", "GPS")
    DATE_TIME = MultiDateTimeParser(
        [
            "%Y-%m-%d %H:%M:%S",
            "%m/%d/%Y %H:%M:%S",
            "%Y/%m/%d %H:%M:%S",
            "%Y-%m-%d %H:%M:%SZ",
            "%Y-%m-%d %H:%M:%S GMT",
            "%Y-%m-%d %H:%M:%S local time",
            "%Y-%m-%d %H:%M",
            "%m/%d/%Y %H%M",
            "%m-%d-%Y",
            "%m/%d/%Y %I:%M:%S %p",
            "%m/%d/%Y %H:%M %p",
            "%Y-%m-%d %H:%M %p",
        ]
    )

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)

        location = document.get_lat_long(self.LOCATION_TAGS)
        if not location.is_valid:
            return self.reject_location(message, self.LOCATION_TAGS)

        date_time_string = document.get("datetime")
        form_date_time = self.DATE_TIME.parse(" ".join(date_time_string.split()))
        if form_date_time is None and date_time_string:
            Log.warning(f"could not parse datetime: {date_time_string} for {message.sender}")

        is_metric = document.get("measurmentused") == METRIC
        temperature = format_temperature(document.get("temp"), is_metric)
        return WxLocalMessage(
            message,
            organization=document.get("title"),
            location=location,
            form_date_time=form_date_time,
            location_string=document.get("location"),
            city=document.get("city"),
            state=document.get("state"),
            county=document.get("county"),
            temperature=temperature,
            wind_speed=format_wind_speed(document.get("windspeed"), is_metric),
            range=temperature_range(temperature),
            max_gusts=format_wind_speed(document.get("maxgusts"), is_metric),
            warning_type=document.get("warning"),
            warning_field=document.get("warningfld"),
            comments=document.get("comments"),
        )


def _number(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def _clean_reading(text: str) -> str:
    if text.startswith(MISSING) and len(text) > 2:
        text = text[2:]
    return text.replace(" ", "").replace(",", ".")


def format_temperature(temperature: str, is_metric: bool) -> str:
    """Temperature as ``"<n> F"``, converting from Celsius for metric forms."""
    temperature = _clean_reading(temperature or MISSING)
    if not is_metric:
        return temperature + TEMPERATURE_SUFFIX
    celsius = _number(temperature)
    if celsius is None:
        return MISSING + TEMPERATURE_SUFFIX
    return f"{_round(celsius * 1.8 + 32)}{TEMPERATURE_SUFFIX}"


def format_wind_speed(wind_speed: str, is_metric: bool) -> str:
    """Wind speed as ``"<n> MPH"``; a ``"6-12"`` range is averaged."""
    if wind_speed == MISSING:
        return MISSING + SPEED_SUFFIX
    wind_speed = _clean_reading(wind_speed or "0.0")

    speed = _number(wind_speed)
    if speed is None:
        low, separator, high = wind_speed.partition("-")
        low_speed, high_speed = _number(low), _number(high)
        if not separator or low_speed is None or high_speed is None:
            return MISSING + SPEED_SUFFIX
        speed = (low_speed + high_speed) / 2

    if is_metric:
        speed = speed * KPH_TO_MPH
    return f"{_round(speed)}{SPEED_SUFFIX}"


def temperature_range(temperature: str) -> str:
    """Bucket a formatted temperature for aggregation ("teens", "40s", ...)."""
    if temperature.startswith(MISSING):
        return MISSING
    value = _number(temperature[:-len(TEMPERATURE_SUFFIX)])
    if value is None:
        return MISSING
    temp = _round(value)
    if temp >= 0:
        if temp < 10:
            return "single digits"
        if temp < 20:
            return "teens"
        return f"{temp // 10}0s"
    if temp > -10:
        return "negative single digits"
    if temp > -20:
        return "negative teens"
    return "really cold"


class WxSevereParser(BaseParser):
    MESSAGE_TYPE = MessageType.WX_SEVERE

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)

        location = document.get_lat_long()
        if not location.is_valid:
            return self.reject_location(message)

        return WxSevereMessage(
            message,
            location=location,
            type=document.get("type"),
            contact_person=document.get("repname"),
            contact_phone=document.get("phone"),
            contact_email=document.get("email"),
            city=document.get("city"),
            region=document.get("region"),
            county=document.get("county"),
            other=document.get("other"),
            flood=document.get("flood"),
            hail_size=document.get("hailsize"),
            wind_speed=document.get("windspeed"),
            tornado=document.get("tornado"),
            wind_damage=document.get("winddamage"),
            precipitation=document.get("precipitation"),
            snow=document.get("snow"),
            freezing_rain=document.get("freezingrain"),
            rain=document.get("rain"),
            rain_period=document.get("rainperiod"),
            comments=document.get("comments"),
        )


class WxHurricaneParser(BaseParser):
    """Hurricane report, which travels only as a FormData side channel."""

    MESSAGE_TYPE = MessageType.WX_HURRICANE

    def _parse(self, message: RawMessage) -> ParseResult:
        values = self.form_data(message)
        if isinstance(values, RejectionMessage):
            return values

        location = LatLongPair(values.get("Latitude", ""), values.get("Longitude", ""))
        if not location.is_valid:
            return self.reject(message, RejectType.CANT_PARSE_LATLONG, missing_location_context())

        return WxHurricaneMessage(
            message,
            location=location,
            status=values.get("Status", ""),
            is_observer=values.get("Is Sending Station the Observing Party", ""),
            observer_phone=values.get("Reporting Observer Phone Number", ""),
            observer_email=values.get("Reporting Observer Email", ""),
            city=values.get("City", ""),
            county=values.get("County", ""),
            state=values.get("State", ""),
            country=values.get("Country", ""),
            instruments_used=values.get("Weather Instruments Used", ""),
            wind_speed=values.get("Wind Speed", ""),
            gust_speed=values.get("Gust Speed", ""),
            wind_direction=values.get("Wind Direction", ""),
            barometric_pressure=values.get("Barometric Pressure", ""),
            comments=values.get("Event Comments", ""),
        )
