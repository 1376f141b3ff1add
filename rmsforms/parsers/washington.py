from datetime import datetime

from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import ParseResult, RawMessage
from rmsforms.messages.ics import LineItem
from rmsforms.messages.washington import (
    BRIDGE_ROADWAY_DAMAGE_TYPES,
    Functionality,
    ProviderStatus,
    WaEyewarnMessage,
    WaFieldSituationMessage,
    WaIcs213RRMessage,
    WaIsnapMessage,
    WaWebEocIcs213RRMessage,
    WaWsdotBridgeDamageMessage,
    WaWsdotBridgeRoadwayDamageMessage,
    WaWsdotRoadwayDamageMessage,
)
from rmsforms.parsers.base import BaseParser
from rmsforms.parsers.ics import IS_EXERCISE
from rmsforms.toolkit.dates import MultiDateTimeParser
from rmsforms.toolkit.document import FormDocument
from rmsforms.toolkit.version import after_prefix, exact_token, version_token

CHECKED = "CHECKED"
CHECKBOX = "checkbox"


class WaEyewarnParser(BaseParser):
    MESSAGE_TYPE = MessageType.WA_EYEWARN

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        return WaEyewarnMessage(
            message,
            precedence=document.get("prec"),
            is_exercise=document.get("excer"),
            ncs=document.get("ncs"),
            location_string=document.get("loc"),
            form_date_time=document.get("datetime"),
            report_type=document.get("reptype"),
            activation_type=document.get("acttype"),
            mission_number=document.get("missnum"),
            incident_type=document.get("inctype"),
            number_of_zips=document.get("zip"),
            total_check_ins=document.get("chkins"),
            questions=document.get("questions"),
            bridges=document.get("bridges"),
            cell_towers=document.get("cells"),
            hospitals=document.get("hospitals"),
            power_lines_towers=document.get("power"),
            roads=document.get("roads"),
            schools=document.get("schools"),
            other_local_damage=document.get("other"),
            relay_operator=document.get("relayop"),
            relay_received=document.get("rctime1"),
            relay_sent=document.get("senttime1"),
            radio_operator=document.get("radioop"),
            radio_received=document.get("rctime2"),
        )


class WaFieldSituationParser(BaseParser):
    """Washington State Field Situation Report; checked boxes mark impacted services."""

    MESSAGE_TYPE = MessageType.WA_FIELD_SITUATION

    DATE_TIME = MultiDateTimeParser(
        [
            "%Y-%m-%d %H:%M",
            "%Y-%m-%d %H:%M:%S",
            "%Y-%m-%d %H%M",
        ]
    )

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        location = document.get_lat_long()
        if not location.is_valid:
            return self.reject_location(message)

        def checked(tag: str) -> bool:
            return document.get(tag) == CHECKED

        def provider(tag: str) -> ProviderStatus:
            return ProviderStatus(is_down=checked(tag), provider=document.get("provider1"))

        def functionality(index: int) -> Functionality:
            return Functionality(status=document.get(f"func{index}"), notes=document.get(f"funstr{index}"))

        form_date_time_string = document.get("thedate")
        approved_date_time_string = document.get("approvetime")
        return WaFieldSituationMessage(
            message,
            form_to=document.get("msgto"),
            form_cc=document.get("msgcc"),
            reporting_party=document.get("reportingparty"),
            reporting_location=document.get("location"),
            provide_update=document.get("providepdate"),
            winlink_address=document.get("winlinkaddress"),
            served_agency=document.get("servedagency"),
            county=document.get("county"),
            town=document.get("town"),
            location=location,
            form_location_source=document.get("locationsource"),
            frequencies_monitored=document.get("freqmonitored"),
            radio_service=document.get("service"),
            precedence=document.get("precedence"),
            form_date_time=self._date_time(form_date_time_string),
            form_date_time_string=form_date_time_string,
            transport_highway=checked("btf1"),
            transport_mass_transit=checked("btf2"),
            transport_railroad=checked("btf3"),
            transport_airport=checked("btf4"),
            transport_seaport=checked("btf5"),
            transport_arterial=checked("btf6"),
            transport_pipeline=checked("btf7"),
            transport_comments=document.get("transportation"),
            util_gas=checked("btf8"),
            util_gas_company=document.get("gascompany"),
            util_water=checked("btf9"),
            util_water_company=document.get("watercompany"),
            util_sewer=checked("btf10"),
            util_sewer_company=document.get("sewercompany"),
            util_electric=checked("btf11"),
            util_electric_company=document.get("electricompany"),
            util_electric_stable=document.get("stablepwr"),
            util_comments=document.get("utilitynote"),
            env_air=checked("btf12"),
            env_water=checked("btf13"),
            env_landslide=checked("btf14"),
            env_avalanche=checked("btf15"),
            env_hazmat=checked("btf16"),
            env_flood=checked("btf17"),
            env_comments=document.get("enviromentnaotes"),
            health_needs=checked("healthobserved"),
            health_comments=document.get("healthnotes"),
            comm_landline=provider("btf18"),
            comm_voip=provider("btf19"),
            comm_cell_voice=provider("btf29"),
            comm_cell_text=provider("btf21"),
            comm_cell_data=provider("btf22"),
            comm_cable_internet=functionality(1),
            comm_cable_television=functionality(2),
            comm_sat_internet=functionality(3),
            comm_sat_television=functionality(4),
            comm_ota_television=functionality(5),
            comm_am_fm_radio=functionality(6),
            comm_noaa_radio=functionality(7),
            approved_by=document.get("approved_name"),
            approved_by_title=document.get("approved_postitle"),
            approved_date_time=self._date_time(approved_date_time_string),
            approved_date_time_string=approved_date_time_string,
            version=exact_token(document.get("templateversion"), 4, 5),
        )

    def _date_time(self, text: str) -> datetime | None:
        return self.DATE_TIME.parse(text.removesuffix(":"))


class WaIcs213RRParser(BaseParser):
    """Washington State ICS-213 RR, which carries a single line item."""

    MESSAGE_TYPE = MessageType.WA_ICS_213_RR

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        line_item = LineItem(
            quantity=document.get("qty1"),
            kind=document.get("kind1"),
            type=document.get("type1"),
            item=document.get("item1"),
            requested_date_time=document.get("reqdatetime1"),
            estimated_date_time=document.get("estdatetime1"),
            cost=document.get("cost1"),
        )
        return WaIcs213RRMessage(
            message,
            is_exercise=document.get("isexercise"),
            incident_name=document.get("incname"),
            organization=document.get("agname"),
            activity_date_time=document.get("datetime"),
            request_number=document.get("reqtracknum"),
            line_items=(line_item,),
            support_needed=document.get("supneed"),
            duration=document.get("duration"),
            delivery_location=document.get("reqloc1"),
            delivery_poc=document.get("reqloc"),
            substitutes=document.get("sub"),
            priority=document.get("priority"),
            commercial_resources_exhausted=document.get("b12a"),
            local_resources_exhausted=document.get("b12b"),
            mutual_aid_resources_exhausted=document.get("b12c"),
            willing_to_fund=document.get("b13"),
            funding_explanation=document.get("explain"),
            requested_by=document.get("reqname"),
            approved_by=document.get("reqauth"),
            logistics_order_number=document.get("eocnum"),
            supplier_name=document.get("supname1"),
            supply_notes=document.get("notes"),
            logistics_authorizer=document.get("logrep"),
            logistics_date_time=document.get("datetime1"),
            ordered_by=document.get("orderby"),
            extra_ordered_by=document.get("other"),
            elevate_to_state=document.get("elevate"),
            state_tracking_number=document.get("statenum"),
            mutual_aid_tracking_number=document.get("matracking"),
            finance_comments=document.get("fincomm"),
            finance_name=document.get("finrepname"),
            finance_date_time=document.get("datetime2"),
        )


WEB_EOC_INPUTS = 32
WEB_EOC_VERSION_PREFIX = "RR WebEOC WA "


class WaWebEocIcs213RRParser(BaseParser):
    MESSAGE_TYPE = MessageType.WA_ICS_213_RR_WEB_EOC

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        inputs = tuple(document.get(f"input{i}") for i in range(1, WEB_EOC_INPUTS + 1))
        line_item = LineItem(
            quantity=document.get("input19"),
            kind=document.get("input17"),
            type=document.get("input18"),
            item=document.get("input16"),
            requested_date_time=document.get("input24"),
        )
        template_version = document.get("templateversion")
        version = after_prefix(template_version, WEB_EOC_VERSION_PREFIX) if template_version else "unknown"
        return WaWebEocIcs213RRMessage(message, inputs=inputs, line_items=(line_item,), version=version)


class WaIsnapParser(BaseParser):
    MESSAGE_TYPE = MessageType.WA_ISNAP

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        return WaIsnapMessage(
            message,
            form_date=document.get("date"),
            form_time=document.get("time"),
            isnap_version=document.get("isn_ver"),
            incident_type=document.get("inc_type"),
            state_mission_number=document.get("sta_mis_num"),
            affected_jurisdictions=document.get("aff_jur"),
            reporting_jurisdiction=document.get("rep_jur"),
            point_of_contact=document.get("poi_con"),
            eoc_status=document.get("eoc_sta"),
            county_status=document.get("cty_sta"),
            description=document.get("sit"),
            government_status=document.get("selec1"),
            government_comments=document.get("gvt_cmt"),
            transportation_status=document.get("selec2"),
            transportation_comments=document.get("tran_cmt"),
            utilities_status=document.get("selec3"),
            utilities_comments=document.get("util_cmt"),
            medical_status=document.get("selec4"),
            medical_comments=document.get("med_cmt"),
            communications_status=document.get("selec5"),
            communications_comments=document.get("comm_cmt"),
            public_safety_status=document.get("selec6"),
            public_safety_comments=document.get("psaf_cmt"),
            environment_status=document.get("selec7"),
            environment_comments=document.get("envi_cmt"),
        )


def _inspection_fields(document: FormDocument) -> dict:
    """Header and communications-log fields common to every WSDOT inspection."""
    return {
        "form_date": document.get("inspectdate"),
        "form_time": document.get("inspecttime"),
        "status": document.get("status"),
        "region": document.get("region"),
        "county": document.get("county"),
        "route": document.get("route"),
        "milepost": document.get("milepost"),
        "bridge_number": document.get("bridgenumber"),
        "location_string": document.get("location"),
        "inspector_name": document.get("inspector"),
        "remarks": document.get("remarks"),
        "comm_log_sending_station": document.get("sendingstation"),
        "comm_log_receiving_station": document.get("receivingstation"),
        "comm_log_frequency_mhz": document.get("freq"),
        "version": version_token(document.get("templateversion"), 4) or "unknown",
    }


class WaWsdotBridgeDamageParser(BaseParser):
    MESSAGE_TYPE = MessageType.WA_WSDOT_BRIDGE_DAMAGE

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)

        def button(tag: str) -> bool:
            return document.get(tag) == CHECKBOX

        return WaWsdotBridgeDamageMessage(
            message,
            is_exercise=document.get("isexercise") == IS_EXERCISE,
            comm_log_received_local=document.get("timesend"),
            damage_approaches=button("btna1"),
            damage_wing_walls=button("btna2"),
            damage_abutments=button("btna3"),
            damage_bent_caps_and_columns=button("btna4"),
            damage_bearings=button("btna5"),
            damage_beams_girders=button("btna6"),
            damage_deck=button("btna7"),
            damage_hinge_expansion_joints=button("btna8"),
            damage_hand_rails=button("btna9"),
            damage_utilities_surrounding_areas=button("btna10"),
            damage_seismic_restraint_devices=button("btna11"),
            **_inspection_fields(document),
        )


class WaWsdotRoadwayDamageParser(BaseParser):
    MESSAGE_TYPE = MessageType.WA_WSDOT_ROADWAY_DAMAGE

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)

        def button(tag: str) -> bool:
            return document.get(tag) == CHECKBOX

        return WaWsdotRoadwayDamageMessage(
            message,
            is_exercise=document.get("isexercise") == IS_EXERCISE,
            comm_log_received_local=document.get("timesend"),
            damage_cracking=button("btna1"),
            damage_buckling=button("btna2"),
            damage_heaving_rolling=button("btna3"),
            damage_pavement_separation=button("btna4"),
            damage_change_in_configuration=button("btna5"),
            damage_change_in_surface=button("btna6"),
            damage_signs_vms_bridges=button("btna7"),
            damage_drainage=button("btna8"),
            geo_shoulder_settlement=button("btna9"),
            geo_sags=button("btna10"),
            geo_movement=button("btna11"),
            geo_debris=button("btna12"),
            geo_sloughing_slopes=button("btna13"),
            **_inspection_fields(document),
        )


class WaWsdotBridgeRoadwayDamageParser(BaseParser):
    MESSAGE_TYPE = MessageType.WA_WSDOT_BRIDGE_ROADWAY_DAMAGE

    def _parse(self, message: RawMessage) -> ParseResult:
        document = self.document(message)
        exercise_label = document.get("isexercise")
        return WaWsdotBridgeRoadwayDamageMessage(
            message,
            is_exercise=exercise_label == IS_EXERCISE,
            exercise_label=exercise_label,
            comm_log_received_local=document.get("timesend"),
            damage=tuple((label, document.get(tag)) for label, tag in BRIDGE_ROADWAY_DAMAGE_TYPES),
            **_inspection_fields(document),
        )
