"""Tests for reducing capability documents to Filter_Capabilities."""

from __future__ import annotations

from lxml import etree

from gscontext.xml import OGC_NS, remove_all_but_filter


def _parse(text: str) -> etree._Element:
    return etree.fromstring(text.encode("utf-8"))


def test_keeps_only_filter_capabilities_and_text() -> None:
    result = remove_all_but_filter("<root><a/><!--c--><Filter_Capabilities/>text</root>")

    root = _parse(result)
    children = list(root)
    assert [child.tag for child in children] == ["Filter_Capabilities"]
    assert children[0].tail == "text"
    assert "<!--c-->" not in result
    assert result.startswith('<?xml version="1.0" encoding="UTF-8"?>')


def test_namespaced_capabilities_document(wfs_capabilities_xml: str) -> None:
    result = remove_all_but_filter(wfs_capabilities_xml)

    root = _parse(result)
    assert [etree.QName(child).localname for child in root] == ["Filter_Capabilities"]
    # nested content of the kept section is untouched
    operators = root.xpath("//ogc:SpatialOperator/@name", namespaces=OGC_NS)
    assert operators == ["BBOX"]
    assert root.get("version") == "1.1.0"
    assert "generated by the map server" not in result


def test_text_after_removed_element_is_kept() -> None:
    result = remove_all_but_filter("<root>lead<a/>mid<b/><Filter_Capabilities/></root>")

    root = _parse(result)
    assert root.text == "leadmid"
    assert [child.tag for child in root] == ["Filter_Capabilities"]


def test_processing_instructions_are_kept() -> None:
    result = remove_all_but_filter("<root><?keep me?><a/></root>")

    root = _parse(result)
    assert len(root) == 1
    assert isinstance(root[0], etree._ProcessingInstruction)


def test_malformed_input_is_returned_unchanged() -> None:
    source = "<root><a></root>"

    assert remove_all_but_filter(source) == source


def test_non_xml_input_is_returned_unchanged() -> None:
    source = "  Service Unavailable \n"

    assert remove_all_but_filter(source) is source
