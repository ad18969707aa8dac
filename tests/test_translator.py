"""Tests for the type & validation translator and formatting helpers."""

import re
import time
from datetime import date, datetime

import pytest
from pydantic import BaseModel

from model_ui.config import ModelUIConfig
from model_ui.errors import InvalidAttributeKey, ValueParseError
from model_ui.formatting import (
    escape_html,
    format_by_type,
    format_date,
    generate_ui_model_id,
    parse_to_number,
    parse_value_by_type,
    revert_html,
    to_strftime,
)
from model_ui.models.validation import ValidationFragment
from model_ui.translator import Translator, translate


class ItemModel(BaseModel):
    id: int = 0


class TestTranslate:
    """Tests for base type <-> input type mapping."""

    @pytest.mark.parametrize(
        "base, expected",
        [
            ("string", "text"),
            ("number", "number"),
            ("bigint", "number"),
            ("boolean", "checkbox"),
            ("date", "date"),
        ],
    )
    def test_to_view(self, base, expected):
        assert translate(base) == expected

    @pytest.mark.parametrize(
        "input_type, expected",
        [
            ("text", "string"),
            ("email", "string"),
            ("password", "string"),
            ("tel", "string"),
            ("range", "number"),
            ("radio", "boolean"),
            ("datetime-local", "date"),
            ("time", "date"),
        ],
    )
    def test_from_view(self, input_type, expected):
        assert translate(input_type, to_view=False) == expected

    def test_unknown_keys_pass_through(self):
        assert translate("minlength") == "minlength"
        assert translate("signature", to_view=False) == "signature"


class TestTranslator:
    """Tests for Translator."""

    @pytest.fixture
    def translator(self):
        return Translator(config=ModelUIConfig())

    def test_required_is_true(self, translator):
        assert translator.to_attribute_value("required", ValidationFragment(key="required")) is True

    def test_literal_values(self, translator):
        assert translator.to_attribute_value("minlength", ValidationFragment(key="minlength", value=5)) == 5
        assert translator.to_attribute_value("different", ValidationFragment(key="different", value="email")) == "email"

    def test_pattern(self, translator):
        fragment = ValidationFragment(key="pattern", pattern=r"^\d+$")
        assert translator.to_attribute_value("pattern", fragment) == r"^\d+$"

    def test_invalid_attribute_key(self, translator):
        with pytest.raises(InvalidAttributeKey, match='Invalid attribute key "email"'):
            translator.to_attribute_value("email", ValidationFragment(key="email"))

    def test_invalid_attribute_key_is_value_error(self, translator):
        with pytest.raises(ValueError):
            translator.to_attribute_value("bogus", ValidationFragment(key="bogus"))

    def test_key_classification(self, translator):
        assert translator.is_validatable_by_attribute("max")
        assert not translator.is_validatable_by_attribute("url")
        assert translator.is_validatable_by_type("url")
        assert not translator.is_validatable_by_type("max")

    def test_date_marker_default_format(self, translator):
        assert translator.type_marker(ValidationFragment(key="date")) == ("date", "yyyy-MM-dd")

    def test_date_marker_explicit_format(self, translator):
        fragment = ValidationFragment(key="date", format="dd/MM/yyyy")
        assert translator.type_marker(fragment) == ("date", "dd/MM/yyyy")

    def test_configured_date_format(self):
        translator = Translator(date_format="MM/dd/yyyy", config=ModelUIConfig())
        assert translator.type_marker(ValidationFragment(key="date")) == ("date", "MM/dd/yyyy")

    def test_other_markers(self, translator):
        assert translator.type_marker(ValidationFragment(key="email")) == ("email", None)
        assert translator.type_marker(ValidationFragment(key="password")) == ("password", None)

    def test_format_date_value(self, translator):
        assert translator.format_value("date", date(2024, 1, 1)) == "2024-01-01"

    def test_format_escapes_strings(self, translator):
        assert translator.format_value("text", "a < b & c") == "a &lt; b &amp; c"

    def test_format_passes_other_types(self, translator):
        assert translator.format_value("number", 42) == 42
        assert translator.format_value("checkbox", False) is False

    def test_format_without_escaping(self):
        translator = Translator(config=ModelUIConfig(escape_html=False))
        assert translator.format_value("text", "<b>") == "<b>"


class TestDateFormatting:
    """Tests for date format strings."""

    def test_to_strftime(self):
        assert to_strftime("yyyy-MM-dd") == "%Y-%m-%d"
        assert to_strftime("dd/MM/yy HH:mm:ss") == "%d/%m/%y %H:%M:%S"
        assert to_strftime("hh:mm a") == "%I:%M %p"

    def test_format_date(self):
        assert format_date(datetime(2024, 3, 9, 14, 5), "dd.MM.yyyy HH:mm") == "09.03.2024 14:05"

    def test_format_date_from_string(self):
        assert format_date("2024-03-09") == "2024-03-09"

    def test_format_by_type_date(self):
        assert format_by_type("date", date(2024, 1, 1), "yyyy-MM-dd") == "2024-01-01"

    def test_format_by_type_other(self):
        assert format_by_type("text", 0.25) == 0.25

    def test_format_by_type_unreadable_date(self):
        assert format_by_type("date", "") == ""
        assert format_by_type("date", "not a date") == "not a date"
        assert format_by_type("date", 10**20) == 10**20


class TestParseValueByType:
    """Tests for parsing view values back into model values."""

    def test_number(self):
        assert parse_value_by_type("number", "42") == 42

    def test_float(self):
        assert parse_value_by_type("range", "2.5") == 2.5

    def test_timestamp_to_date(self):
        timestamp = int(time.time() * 1000)
        assert parse_value_by_type("date", timestamp) == datetime.fromtimestamp(timestamp / 1000)

    def test_string_date_with_format(self):
        result = parse_value_by_type("date", "16/05/2024", {"format": "dd/MM/yyyy"})
        assert result == datetime(2024, 5, 16)

    def test_string_date_without_format(self):
        assert parse_value_by_type("date", "May 16 2024") == datetime(2024, 5, 16)

    def test_boolean(self):
        assert parse_value_by_type("checkbox", "on") is True
        assert parse_value_by_type("checkbox", "false") is False

    def test_string_is_escaped(self):
        assert parse_value_by_type("text", "<b>&Test</b>") == "&lt;b&gt;&amp;Test&lt;/b&gt;"

    def test_unparseable_number(self):
        with pytest.raises(ValueParseError, match="Failed to parse value"):
            parse_value_by_type("number", {})

    def test_unparseable_date(self):
        with pytest.raises(ValueParseError, match="Failed to parse value"):
            parse_value_by_type("date", "31/31/2024", {"format": "dd/MM/yyyy"})


class TestHelpers:
    """Tests for number parsing, HTML escaping and id generation."""

    def test_parse_to_number(self):
        assert parse_to_number(10) == 10
        assert parse_to_number("15.5") == 15.5
        assert parse_to_number("abc") is None
        assert parse_to_number(True) is None

    def test_escape_html(self):
        assert escape_html("<div>& test ></div>") == "&lt;div&gt;&amp; test &gt;&lt;/div&gt;"
        assert escape_html("") == ""

    def test_revert_html(self):
        assert revert_html("&lt;div&gt;&amp; test&lt;/div&gt;") == "<div>& test</div>"

    def test_id_from_primary_key(self):
        assert generate_ui_model_id(ItemModel(id=101), "id") == "ItemModel-101"

    def test_id_without_primary_key(self):
        assert re.fullmatch(r"ItemModel-\d+", generate_ui_model_id(ItemModel(id=102)))

    def test_id_with_missing_attribute(self):
        assert re.search(r"-\d+$", generate_ui_model_id(object(), "id"))
