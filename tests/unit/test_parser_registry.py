from unittest.mock import patch

import pytest

from rmsforms.core.context import ParserContext
from rmsforms.core.message_type import MessageType
from rmsforms.parsers.checkin import CheckInParser
from rmsforms.parsers.ics import Ics214Parser
from rmsforms.parsers.plain import PlainParser
from rmsforms.parsers.registry import ParserRegistry


class TestParserRegistry:
    def test_every_classifiable_type_has_a_parser(self) -> None:
        registry = ParserRegistry.create(ParserContext())
        expected = [member for member in MessageType if not member.is_synthetic]

        assert len(registry) == len(expected) == 44
        assert all(member in registry for member in expected)

    def test_synthetic_types_have_no_parser(self) -> None:
        registry = ParserRegistry.create(ParserContext())

        assert registry.get(MessageType.REJECTS) is None
        assert registry.get(MessageType.EYEWARN_DETAIL) is None
        assert MessageType.REJECTS not in registry

    def test_create_refuses_an_incomplete_mapping(self) -> None:
        parsers = {k: v for k, v in ParserRegistry.PARSERS.items() if k is not MessageType.ICS_309}

        with patch.object(ParserRegistry, "PARSERS", parsers):
            with pytest.raises(ValueError, match="ics_309"):
                ParserRegistry.create(ParserContext())

    def test_shared_parser_class_is_bound_to_its_type(self) -> None:
        registry = ParserRegistry.create(ParserContext())

        check_out = registry.get(MessageType.CHECK_OUT)
        assert isinstance(check_out, CheckInParser)
        assert check_out.message_type is MessageType.CHECK_OUT
        assert registry.get(MessageType.CHECK_IN).message_type is MessageType.CHECK_IN

        ics_214a = registry.get(MessageType.ICS_214A)
        assert isinstance(ics_214a, Ics214Parser)
        assert ics_214a.message_type is MessageType.ICS_214A

    def test_parsers_share_the_context(self) -> None:
        context = ParserContext(strict_parsing=True)
        registry = ParserRegistry.create(context)

        assert all(registry.get(member).strict for member in registry.message_types)

    def test_custom_mapping(self) -> None:
        plain = PlainParser(ParserContext())
        registry = ParserRegistry({MessageType.PLAIN: plain})

        assert registry.get(MessageType.PLAIN) is plain
        assert registry.get(MessageType.ICS_213) is None
        assert registry.message_types == [MessageType.PLAIN]
