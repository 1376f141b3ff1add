from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from rmsforms.core.message_type import MessageType
from rmsforms.messages.base import TypedMessage
from rmsforms.messages.ics import LineItem
from rmsforms.toolkit.location import INVALID, LatLongPair


@dataclass(frozen=True)
class WaEyewarnMessage(TypedMessage):
    """Washington State EyeWarn report: counts of damaged infrastructure by kind."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WA_EYEWARN

    precedence: str = ""
    is_exercise: str = ""
    ncs: str = ""
    location_string: str = ""
    form_date_time: str = ""
    report_type: str = ""
    activation_type: str = ""
    mission_number: str = ""
    incident_type: str = ""
    number_of_zips: str = ""
    total_check_ins: str = ""
    questions: str = ""
    bridges: str = ""
    cell_towers: str = ""
    hospitals: str = ""
    power_lines_towers: str = ""
    roads: str = ""
    schools: str = ""
    other_local_damage: str = ""
    relay_operator: str = ""
    relay_received: str = ""
    relay_sent: str = ""
    radio_operator: str = ""
    radio_received: str = ""


@dataclass(frozen=True)
class ProviderStatus:
    """One communications service: whether it is out, and who provides it."""

    is_down: bool = False
    provider: str = ""


@dataclass(frozen=True)
class Functionality:
    """A broadcast or data service: ``YES``, ``YES but degraded``, ``NO`` or ``Not observed``."""

    status: str = ""
    notes: str = ""


@dataclass(frozen=True)
class WaFieldSituationMessage(TypedMessage):
    """Washington State Field Situation Report.

    Transport, utility and environment flags are ``True`` when the box was
    checked, meaning the service is impacted.
    """

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WA_FIELD_SITUATION

    form_to: str = ""
    form_cc: str = ""
    reporting_party: str = ""
    reporting_location: str = ""
    provide_update: str = ""
    winlink_address: str = ""
    served_agency: str = ""
    county: str = ""
    town: str = ""
    location: LatLongPair = INVALID
    form_location_source: str = ""
    frequencies_monitored: str = ""
    radio_service: str = ""
    precedence: str = ""
    form_date_time: datetime | None = None
    form_date_time_string: str = ""
    transport_highway: bool = False
    transport_mass_transit: bool = False
    transport_railroad: bool = False
    transport_airport: bool = False
    transport_seaport: bool = False
    transport_arterial: bool = False
    transport_pipeline: bool = False
    transport_comments: str = ""
    util_gas: bool = False
    util_gas_company: str = ""
    util_water: bool = False
    util_water_company: str = ""
    util_sewer: bool = False
    util_sewer_company: str = ""
    util_electric: bool = False
    util_electric_company: str = ""
    util_electric_stable: str = ""
    util_comments: str = ""
    env_air: bool = False
    env_water: bool = False
    env_landslide: bool = False
    env_avalanche: bool = False
    env_hazmat: bool = False
    env_flood: bool = False
    env_comments: str = ""
    health_needs: bool = False
    health_comments: str = ""
    comm_landline: ProviderStatus = ProviderStatus()
    comm_voip: ProviderStatus = ProviderStatus()
    comm_cell_voice: ProviderStatus = ProviderStatus()
    comm_cell_text: ProviderStatus = ProviderStatus()
    comm_cell_data: ProviderStatus = ProviderStatus()
    comm_cable_internet: Functionality = Functionality()
    comm_cable_television: Functionality = Functionality()
    comm_sat_internet: Functionality = Functionality()
    comm_sat_television: Functionality = Functionality()
    comm_ota_television: Functionality = Functionality()
    comm_am_fm_radio: Functionality = Functionality()
    comm_noaa_radio: Functionality = Functionality()
    approved_by: str = ""
    approved_by_title: str = ""
    approved_date_time: datetime | None = None
    approved_date_time_string: str = ""
    version: str = ""


@dataclass(frozen=True)
class WaIcs213RRMessage(TypedMessage):
    """Washington State ICS-213 RR resource request (single line item)."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WA_ICS_213_RR

    is_exercise: str = ""
    incident_name: str = ""
    organization: str = ""
    activity_date_time: str = ""
    request_number: str = ""
    line_items: tuple[LineItem, ...] = ()
    support_needed: str = ""
    duration: str = ""
    delivery_location: str = ""
    delivery_poc: str = ""
    substitutes: str = ""
    priority: str = ""
    commercial_resources_exhausted: str = ""
    local_resources_exhausted: str = ""
    mutual_aid_resources_exhausted: str = ""
    willing_to_fund: str = ""
    funding_explanation: str = ""
    requested_by: str = ""
    approved_by: str = ""
    logistics_order_number: str = ""
    supplier_name: str = ""
    supply_notes: str = ""
    logistics_authorizer: str = ""
    logistics_date_time: str = ""
    ordered_by: str = ""
    extra_ordered_by: str = ""
    elevate_to_state: str = ""
    state_tracking_number: str = ""
    mutual_aid_tracking_number: str = ""
    finance_comments: str = ""
    finance_name: str = ""
    finance_date_time: str = ""


@dataclass(frozen=True)
class WaWebEocIcs213RRMessage(TypedMessage):
    """ICS-213 RR exported from WebEOC, whose fields are only numbered ``input1``..``input32``."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WA_ICS_213_RR_WEB_EOC

    inputs: tuple[str, ...] = ()
    line_items: tuple[LineItem, ...] = ()
    version: str = ""

    def input(self, number: int) -> str:
        """Value of ``input<number>``, 1-based as on the form."""
        if 1 <= number <= len(self.inputs):
            return self.inputs[number - 1]
        return ""


@dataclass(frozen=True)
class WaIsnapMessage(TypedMessage):
    """Washington State ISNAP (Incident Snapshot) report."""

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WA_ISNAP

    form_date: str = ""
    form_time: str = ""
    isnap_version: str = ""
    incident_type: str = ""
    state_mission_number: str = ""
    affected_jurisdictions: str = ""
    reporting_jurisdiction: str = ""
    point_of_contact: str = ""
    eoc_status: str = ""
    county_status: str = ""
    description: str = ""
    government_status: str = ""
    government_comments: str = ""
    transportation_status: str = ""
    transportation_comments: str = ""
    utilities_status: str = ""
    utilities_comments: str = ""
    medical_status: str = ""
    medical_comments: str = ""
    communications_status: str = ""
    communications_comments: str = ""
    public_safety_status: str = ""
    public_safety_comments: str = ""
    environment_status: str = ""
    environment_comments: str = ""


@dataclass(frozen=True)
class WsdotInspection(TypedMessage):
    """Fields shared by the WSDOT bridge and roadway damage inspections."""

    is_exercise: bool = False
    form_date: str = ""
    form_time: str = ""
    status: str = ""
    region: str = ""
    county: str = ""
    route: str = ""
    milepost: str = ""
    bridge_number: str = ""
    location_string: str = ""
    inspector_name: str = ""
    remarks: str = ""
    comm_log_sending_station: str = ""
    comm_log_receiving_station: str = ""
    comm_log_frequency_mhz: str = ""
    comm_log_received_local: str = ""
    version: str = ""


@dataclass(frozen=True)
class WaWsdotBridgeDamageMessage(WsdotInspection):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WA_WSDOT_BRIDGE_DAMAGE

    damage_approaches: bool = False
    damage_wing_walls: bool = False
    damage_abutments: bool = False
    damage_bent_caps_and_columns: bool = False
    damage_bearings: bool = False
    damage_beams_girders: bool = False
    damage_deck: bool = False
    damage_hinge_expansion_joints: bool = False
    damage_hand_rails: bool = False
    damage_utilities_surrounding_areas: bool = False
    damage_seismic_restraint_devices: bool = False


@dataclass(frozen=True)
class WaWsdotRoadwayDamageMessage(WsdotInspection):
    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WA_WSDOT_ROADWAY_DAMAGE

    damage_cracking: bool = False
    damage_buckling: bool = False
    damage_heaving_rolling: bool = False
    damage_pavement_separation: bool = False
    damage_change_in_configuration: bool = False
    damage_change_in_surface: bool = False
    damage_signs_vms_bridges: bool = False
    damage_drainage: bool = False
    geo_shoulder_settlement: bool = False
    geo_sags: bool = False
    geo_movement: bool = False
    geo_debris: bool = False
    geo_sloughing_slopes: bool = False


# Combined inspection checkboxes: label shown on the form and the tag that holds it.
BRIDGE_ROADWAY_DAMAGE_TYPES = (
    ("Bridge Approaches", "btna14"),
    ("Wing Walls", "btna15"),
    ("Bridge Abutments", "btna16"),
    ("Bent Caps, and Columns", "btna17"),
    ("Bearings", "btna18"),
    ("Beams or Girders", "btna19"),
    ("Deck (top and underside)", "btna20"),
    ("Hinge or Expansion Joints", "btna21"),
    ("Railings, Parapet and Curb", "btna22"),
    ("Utilities and Surrounding Areas", "btna23"),
    ("Seismic Restraint Devices", "btna24"),
    ("Debris Accumulation in Channel", "btna25"),
    ("Undermined Footings", "btna26"),
    ("Cracking", "btna27"),
    ("Buckling", "btna28"),
    ("Heaving or rolling", "btna29"),
    ("Pavement separation", "btna30"),
    ("Change in configuration", "btna31"),
    ("Change in roadway surface", "btna32"),
    ("Signs, VMS and sign bridges", "btna33"),
    ("Shoulder settlement", "btna34"),
    ("Sags in roadway safety features", "btna35"),
    ("Movement above or below tilted trees", "btna36"),
    ("Debris on Roadway", "btna37"),
    ("Sloughing slopes", "btna38"),
    ("Unstable road blocks above roadway", "btna39"),
    ("Sinkhole", "btna40"),
)


@dataclass(frozen=True)
class WaWsdotBridgeRoadwayDamageMessage(WsdotInspection):
    """Combined bridge and roadway inspection.

    ``damage`` pairs each label in ``BRIDGE_ROADWAY_DAMAGE_TYPES`` with the raw
    checkbox value, in form order.
    """

    MESSAGE_TYPE: ClassVar[MessageType] = MessageType.WA_WSDOT_BRIDGE_ROADWAY_DAMAGE

    exercise_label: str = ""
    damage: tuple[tuple[str, str], ...] = ()
