from enum import Enum

FORM_PREFIX = "RMS_Express_Form_"
FORM_DATA_ATTACHMENT = "FormData.txt"


class MessageType(Enum):
    """Closed set of message types; the discriminant of every parse result.

    Each member carries its output key, the canonical attachment name it is
    keyed on (if any), whether that name is a prefix for a family of template
    versions, and the FormData ``MapFileName`` prefix that identifies it when
    no viewer attachment is present.

    Attachment-keyed members are declared in classification order.
    """

    FIELD_SITUATION = ("field_situation", "RMS_Express_Form_Field Situation Report", True)
    CHECK_IN = ("check_in", "RMS_Express_Form_Winlink_Check_In_Viewer.xml", False, "Winlink_Check_In")
    CHECK_OUT = ("check_out", "RMS_Express_Form_Winlink_Check_out_Viewer.xml", False, "Winlink_Check_out")
    HOSPITAL_BED = ("hospital_bed", "RMS_Express_Form_Hospital_Bed_Report_Viewer.xml")
    SPOTREP = ("spotrep", "RMS_Express_Form_Shares_Spotrep-2_Viewer.xml")
    WX_LOCAL = ("wx_local", "RMS_Express_Form_Local Weather Report Viewer.xml")
    WX_SEVERE = ("wx_severe", "RMS_Express_Form_Severe WX Report viewer.xml")
    ICS_213 = ("ics_213", "RMS_Express_Form_ICS213_Initial_Viewer.xml", False, "ICS213_Initial")
    ICS_213_REPLY = ("ics_213_reply", "RMS_Express_Form_ICS213_SendReply_Viewer.xml")
    ICS_213_RR = ("ics_213_rr", "RMS_Express_Form_ICS213RR_Viewer.xml")
    ICS_214 = ("ics_214", "RMS_Express_Form_ICS214_Viewer.xml")
    ICS_214A = ("ics_214a", "RMS_Express_Form_ICS214A_Viewer.xml")
    ICS_309 = ("ics_309", "RMS_Express_Form_ICS309_Viewer.xml")
    DAMAGE_ASSESSMENT = ("damage_assessment", "RMS_Express_Form_Damage_Assessment_Viewer.xml")
    QUICK = ("quick", "RMS_Express_Form_Quick Message Viewer.xml")
    ICS_205 = ("ics_205", "RMS_Express_Form_ICS205 Radio Plan_Viewer.xml")
    HUMANITARIAN_NEEDS = (
        "humanitarian_needs",
        "RMS_Express_Form_Humanitarian Needs Identification viewer.xml",
    )
    HOSPITAL_STATUS = ("hospital_status", "RMS_Express_Form_Hospital_Status_Viewer.xml")
    WA_ICS_213_RR = ("wa_ics_213_rr", "RMS_Express_Form_ICS213RR_WA_Viewer.xml")
    WA_ISNAP = ("wa_isnap", "RMS_Express_Form_ISNAP_WA_Viewer.xml")
    EYEWARN = ("eyewarn", "RMS_Express_Form_EYEWARN_Viewer.xml")
    WA_EYEWARN = ("wa_eyewarn", "RMS_Express_Form_EYEWARN_WA_Viewer.xml")
    HICS_259 = ("hics_259", "RMS_Express_Form_HICS 259_viewer.xml")
    WA_FIELD_SITUATION = ("wa_field_situation", "RMS_Express_Form_Field_Situation_WA_Viewer.xml")
    WA_ICS_213_RR_WEB_EOC = (
        "wa_ics_213_rr_web_eoc",
        "RMS_Express_Form_ICS213RR_WebEOC_WA_Viewer.xml",
    )
    WA_WSDOT_BRIDGE_DAMAGE = (
        "wa_wsdot_bridge_damage",
        "RMS_Express_Form_WSDOT_Bridge_Damage_Viewer.xml",
    )
    WA_WSDOT_ROADWAY_DAMAGE = (
        "wa_wsdot_roadway_damage",
        "RMS_Express_Form_WSDOT_Roadway_Damage_Viewer.xml",
    )
    WA_WSDOT_BRIDGE_ROADWAY_DAMAGE = (
        "wa_wsdot_bridge_roadway_damage",
        "RMS_Express_Form_WSDOT_Bridge_Roadway_Damage_Viewer.xml",
    )
    WELFARE_BULLETIN_BOARD = (
        "welfare_bulletin_board",
        "RMS_Express_Form_Welfare_Bulletin_Board_Viewer.xml",
    )

    DYFI = ("dyfi",)
    WX_HURRICANE = ("wx_hurricane", None, False, "Hurricane")
    ETO_CHECK_IN = ("eto_check_in",)
    ETO_CHECK_IN_V2 = ("eto_check_in_v2",)
    ETO_RESUME = ("eto_resume",)
    MIRO_CHECK_IN = ("miro_check_in",)
    POSITION = ("position",)
    ACK = ("ack",)
    PEGELSTAND = ("pegelstand",)
    RRI_QUICK_WELFARE = ("rri_quick_welfare",)
    RRI_WELFARE_RADIOGRAM = ("rri_welfare_radiogram",)
    RRI_REPLY_WELFARE_RADIOGRAM = ("rri_reply_welfare_radiogram",)
    PDF_ICS_309 = ("pdf_ics_309",)
    UNSUPPORTED = ("unsupported",)
    PLAIN = ("plain",)

    REJECTS = ("rejects",)
    EYEWARN_DETAIL = ("eyewarn_detail",)

    def __init__(
        self,
        key: str,
        attachment_name: str | None = None,
        match_prefix: bool = False,
        map_file_prefix: str | None = None,
    ) -> None:
        self.key = key
        self.attachment_name = attachment_name
        self.match_prefix = match_prefix
        self.map_file_prefix = map_file_prefix

    def __str__(self) -> str:
        return self.key

    @property
    def is_synthetic(self) -> bool:
        """Types produced by the driver, never by classification."""
        return self in (MessageType.REJECTS, MessageType.EYEWARN_DETAIL)

    def matches_attachment(self, name: str) -> bool:
        if self.attachment_name is None:
            return False
        if self.match_prefix:
            return name.startswith(self.attachment_name)
        return name == self.attachment_name

