import pytest

from rmsforms.toolkit.document import (
    DEFAULT_LATLON_TAGS,
    FormDocument,
    merged_tag_names,
    missing_location_context,
)
from rmsforms.toolkit.exceptions import DocumentParseError
from rmsforms.toolkit.location import INVALID, LatLongPair


def _make_document(variables: str, message_id: str = "MSG1") -> FormDocument:
    text = f"<RMS_Express_Form><variables>{variables}</variables></RMS_Express_Form>"
    return FormDocument.build(message_id, text)


class TestFormDocumentBuild:
    def test_skips_leading_garbage_and_closes_truncated_tag(self) -> None:
        text = "junk<form><variables><title>Report</title></variables></form"
        document = FormDocument.build("MSG1", text)
        assert document.get("title") == "Report"

    def test_accepts_bytes(self) -> None:
        document = FormDocument.build("MSG1", b"<form><title>Report</title></form>")
        assert document.get("title") == "Report"

    def test_removes_parseme_block_by_default(self) -> None:
        text = "<form><parseme>{\"a\": 1 < 2}</parseme><title>T</title></form>"
        assert FormDocument.build("MSG1", text).get("title") == "T"

    def test_parseme_kept_when_requested(self) -> None:
        text = "<form><parseme>{\"a\": 1 < 2}</parseme><title>T</title></form>"
        with pytest.raises(DocumentParseError):
            FormDocument.build("MSG1", text, remove_parseme=False)

    def test_replaces_bad_character_reference(self) -> None:
        document = FormDocument.build("MSG1", "<form><title>a&#21;b</title></form>")
        assert document.get("title") == "a_b"

    def test_unparseable_raises_with_message_id(self) -> None:
        with pytest.raises(DocumentParseError, match="MSG9"):
            FormDocument.build("MSG9", "<form><a></b></form>")


class TestFormDocumentGet:
    def test_returns_trimmed_text(self) -> None:
        assert _make_document("<city>  Seattle </city>").get("city") == "Seattle"

    def test_missing_tag_is_empty(self) -> None:
        assert _make_document("<city>Seattle</city>").get("state") == ""

    def test_falls_back_to_capitalised_tag(self) -> None:
        assert _make_document("<Title>Old</Title>").get("title") == "Old"

    def test_value_map_lists_second_level_elements(self) -> None:
        document = _make_document("<a>1</a><b> 2 </b>")
        assert document.value_map() == {"a": "1", "b": "2"}


class TestFormDocumentLatLong:
    def test_maplat_and_maplon(self) -> None:
        document = _make_document("<maplat>47.1</maplat><maplon>-122.2</maplon>")
        assert document.get_lat_long() == LatLongPair("47.1", "-122.2")

    def test_falls_back_to_combined_gps2(self) -> None:
        document = _make_document("<maplat></maplat><gps2>47.1, -122.2</gps2>")
        assert document.get_lat_long() == LatLongPair("47.1", "-122.2")

    def test_skips_invalid_pair_for_later_tag(self) -> None:
        document = _make_document(
            "<maplat>999</maplat><maplon>1</maplon><gpslat>10</gpslat><gpslon>20</gpslon>"
        )
        assert document.get_lat_long() == LatLongPair("10", "20")

    def test_form_specific_tags_searched_after_defaults(self) -> None:
        document = _make_document("<gps>47.1,-122.2</gps>")
        assert document.get_lat_long(("gps",)) == LatLongPair("47.1", "-122.2")

    def test_nothing_found_is_invalid(self) -> None:
        assert _make_document("<city>x</city>").get_lat_long() == INVALID


class TestLocationTagNames:
    def test_merged_tag_names_appends_without_repeats(self) -> None:
        assert merged_tag_names(("maplat", "gps")) == [*DEFAULT_LATLON_TAGS, "gps"]

    def test_missing_location_context_lists_every_tag(self) -> None:
        assert missing_location_context(("gps", "GPS")) == (
            "couldn't find lat/long within tags: [maplat, gps2, GPS2, gpslat, gps, GPS]"
        )
