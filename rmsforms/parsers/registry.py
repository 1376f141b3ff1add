from rmsforms.core.context import ParserContext
from rmsforms.core.message_type import MessageType
from rmsforms.parsers.base import BaseParser
from rmsforms.parsers.checkin import (
    AckParser,
    CheckInParser,
    EtoCheckInParser,
    EtoCheckInV2Parser,
    EtoResumeParser,
    MiroCheckInParser,
    PositionParser,
)
from rmsforms.parsers.hospital import Hics259Parser, HospitalBedParser, HospitalStatusParser
from rmsforms.parsers.ics import (
    Ics205Parser,
    Ics213Parser,
    Ics213ReplyParser,
    Ics213RRParser,
    Ics214Parser,
    Ics309Parser,
    PdfIcs309Parser,
)
from rmsforms.parsers.plain import PlainParser, UnsupportedParser
from rmsforms.parsers.situation import (
    DamageAssessmentParser,
    EyeWarnParser,
    FieldSituationParser,
    HumanitarianNeedsParser,
    PegelstandParser,
    QuickParser,
    SpotrepParser,
)
from rmsforms.parsers.washington import (
    WaEyewarnParser,
    WaFieldSituationParser,
    WaIcs213RRParser,
    WaIsnapParser,
    WaWebEocIcs213RRParser,
    WaWsdotBridgeDamageParser,
    WaWsdotBridgeRoadwayDamageParser,
    WaWsdotRoadwayDamageParser,
)
from rmsforms.parsers.weather import DyfiParser, WxHurricaneParser, WxLocalParser, WxSevereParser
from rmsforms.parsers.welfare import (
    RRIQuickWelfareParser,
    RRIReplyWelfareRadiogramParser,
    RRIWelfareRadiogramParser,
    WelfareBulletinBoardParser,
)


class ParserRegistry:
    """Fixed mapping from message type to the parser that extracts it.

    Built once at start-up; every non-synthetic ``MessageType`` has exactly one
    parser. Parser instances hold only the read-only context, so the registry
    is safe to share across worker threads.
    """

    PARSERS: dict[MessageType, type[BaseParser]] = {
        MessageType.FIELD_SITUATION: FieldSituationParser,
        MessageType.CHECK_IN: CheckInParser,
        MessageType.CHECK_OUT: CheckInParser,
        MessageType.HOSPITAL_BED: HospitalBedParser,
        MessageType.SPOTREP: SpotrepParser,
        MessageType.WX_LOCAL: WxLocalParser,
        MessageType.WX_SEVERE: WxSevereParser,
        MessageType.ICS_213: Ics213Parser,
        MessageType.ICS_213_REPLY: Ics213ReplyParser,
        MessageType.ICS_213_RR: Ics213RRParser,
        MessageType.ICS_214: Ics214Parser,
        MessageType.ICS_214A: Ics214Parser,
        MessageType.ICS_309: Ics309Parser,
        MessageType.DAMAGE_ASSESSMENT: DamageAssessmentParser,
        MessageType.QUICK: QuickParser,
        MessageType.ICS_205: Ics205Parser,
        MessageType.HUMANITARIAN_NEEDS: HumanitarianNeedsParser,
        MessageType.HOSPITAL_STATUS: HospitalStatusParser,
        MessageType.WA_ICS_213_RR: WaIcs213RRParser,
        MessageType.WA_ISNAP: WaIsnapParser,
        MessageType.EYEWARN: EyeWarnParser,
        MessageType.WA_EYEWARN: WaEyewarnParser,
        MessageType.HICS_259: Hics259Parser,
        MessageType.WA_FIELD_SITUATION: WaFieldSituationParser,
        MessageType.WA_ICS_213_RR_WEB_EOC: WaWebEocIcs213RRParser,
        MessageType.WA_WSDOT_BRIDGE_DAMAGE: WaWsdotBridgeDamageParser,
        MessageType.WA_WSDOT_ROADWAY_DAMAGE: WaWsdotRoadwayDamageParser,
        MessageType.WA_WSDOT_BRIDGE_ROADWAY_DAMAGE: WaWsdotBridgeRoadwayDamageParser,
        MessageType.WELFARE_BULLETIN_BOARD: WelfareBulletinBoardParser,
        MessageType.DYFI: DyfiParser,
        MessageType.WX_HURRICANE: WxHurricaneParser,
        MessageType.ETO_CHECK_IN: EtoCheckInParser,
        MessageType.ETO_CHECK_IN_V2: EtoCheckInV2Parser,
        MessageType.ETO_RESUME: EtoResumeParser,
        MessageType.MIRO_CHECK_IN: MiroCheckInParser,
        MessageType.POSITION: PositionParser,
        MessageType.ACK: AckParser,
        MessageType.PEGELSTAND: PegelstandParser,
        MessageType.RRI_QUICK_WELFARE: RRIQuickWelfareParser,
        MessageType.RRI_WELFARE_RADIOGRAM: RRIWelfareRadiogramParser,
        MessageType.RRI_REPLY_WELFARE_RADIOGRAM: RRIReplyWelfareRadiogramParser,
        MessageType.PDF_ICS_309: PdfIcs309Parser,
        MessageType.UNSUPPORTED: UnsupportedParser,
        MessageType.PLAIN: PlainParser,
    }

    def __init__(self, parsers: dict[MessageType, BaseParser]) -> None:
        self._parsers = dict(parsers)

    @classmethod
    def create(cls, context: ParserContext) -> "ParserRegistry":
        missing = [str(t) for t in MessageType if not t.is_synthetic and t not in cls.PARSERS]
        if missing:
            raise ValueError(f"No parser registered for: {missing}")
        parsers = {message_type: parser_cls(context, message_type) for message_type, parser_cls in cls.PARSERS.items()}
        return cls(parsers)

    def get(self, message_type: MessageType) -> BaseParser | None:
        return self._parsers.get(message_type)

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._parsers

    def __len__(self) -> int:
        return len(self._parsers)

    @property
    def message_types(self) -> list[MessageType]:
        return list(self._parsers)
