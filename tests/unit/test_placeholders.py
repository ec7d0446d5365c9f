"""
Unit tests for placeholder handling
"""

import pytest

from locales.placeholders import (
    collect_placeholders,
    decode_placeholders,
    encode_placeholders,
    encode_placeholders_fallback,
    escape_xml,
    unescape_xml,
)


class TestCollectPlaceholders:
    """Test cases for collect_placeholders"""

    def test_sorted_unique_names(self):
        assert collect_placeholders("Hello {name}, you have {count} items") == ["count", "name"]
        assert collect_placeholders("{a} and {a} again") == ["a"]

    def test_ignores_non_identifier_braces(self):
        assert collect_placeholders("{not valid} {ok_1}") == ["ok_1"]

    @pytest.mark.parametrize("value", [None, 42, True, ["{name}"], {"x": "{name}"}])
    def test_non_strings_have_no_placeholders(self, value):
        assert collect_placeholders(value) == []


class TestEncoding:
    """Test cases for transit encoding"""

    def test_encode_wraps_placeholders_in_tags(self):
        assert encode_placeholders("Hi {name} & <b>") == 'Hi <ph id="name"/> &amp; &lt;b&gt;'

    def test_encode_decode_round_trip(self):
        text = "Price: {amount} & 50% <off>"
        assert decode_placeholders(encode_placeholders(text)) == text

    def test_fallback_round_trip(self):
        text = "Hello {name}, you have {count} items"
        encoded = encode_placeholders_fallback(text)

        assert encoded == "Hello __DEEPL_PH_name__, you have __DEEPL_PH_count__ items"
        assert decode_placeholders(encoded) == text

    def test_decode_double_escaped_tag(self):
        assert decode_placeholders("Hallo &lt;ph id=&quot;name&quot;/&gt;") == "Hallo {name}"

    def test_decode_tag_with_whitespace(self):
        assert decode_placeholders('Hallo <ph id="name" />!') == "Hallo {name}!"

    def test_unescape_handles_ampersand_last(self):
        assert unescape_xml("&amp;lt;") == "&lt;"
        assert unescape_xml(escape_xml("a < b & 'c' \"d\"")) == "a < b & 'c' \"d\""
