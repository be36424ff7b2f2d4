"""Tests for the indenting XML transform."""

from __future__ import annotations

import re

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gscontext.common.exceptions import EmptyInputError, XMLParseError
from gscontext.xml import indent_xml

HEADER = '<?xml version="1.0" encoding="UTF-8"?>'


def test_indent_breaks_line_after_declaration() -> None:
    result = indent_xml("<root><a>1</a><b/></root>")

    assert result == HEADER + "\r\n<root>\n  <a>1</a>\n  <b/>\n</root>"


def test_indent_reformats_existing_whitespace() -> None:
    source = "<root>\n<a>\n        <b>x</b></a>   </root>"

    assert indent_xml(source) == HEADER + "\r\n<root>\n  <a>\n    <b>x</b>\n  </a>\n</root>"


def test_indent_amount_is_configurable() -> None:
    result = indent_xml("<root><a/></root>", indent=4)

    assert "\n    <a/>" in result


@pytest.mark.parametrize("value", ["", "   ", "\n\t ", None])
def test_indent_rejects_empty_input(value: str | None) -> None:
    with pytest.raises(EmptyInputError):
        indent_xml(value)


def test_indent_rejects_malformed_xml() -> None:
    with pytest.raises(XMLParseError):
        indent_xml("<root><a></root>")


def test_indent_keeps_text_and_attributes() -> None:
    result = indent_xml('<r xmlns:x="urn:x"><x:a id="1">  keep me  </x:a></r>')

    assert '<x:a id="1">  keep me  </x:a>' in result
    assert 'xmlns:x="urn:x"' in result


def test_indent_honours_declared_encoding() -> None:
    result = indent_xml('<?xml version="1.0" encoding="ISO-8859-1"?><a>café</a>')

    assert result == HEADER + "\r\n<a>café</a>"


def test_indent_strips_byte_order_mark() -> None:
    assert indent_xml("\ufeff<a/>") == HEADER + "\r\n<a/>"


def test_indent_is_idempotent_for_sample_document(csw_record_xml: str) -> None:
    once = indent_xml(csw_record_xml)

    assert indent_xml(once) == once


_tags = st.sampled_from(["a", "b", "item", "ns"])
_texts = st.text(alphabet="xyz01", max_size=5)
_elements = st.recursive(
    st.builds(lambda tag, text: f"<{tag}>{text}</{tag}>", _tags, _texts),
    lambda children: st.builds(lambda tag, kids: f"<{tag}>{''.join(kids)}</{tag}>", _tags, st.lists(children, max_size=4)),
    max_leaves=12,
)


@settings(max_examples=60, deadline=None)
@given(_elements)
def test_indent_is_idempotent_modulo_whitespace(document: str) -> None:
    once = indent_xml(document)
    twice = indent_xml(once)

    assert re.sub(r"\s+", "", twice) == re.sub(r"\s+", "", once)
