"""Tests for the XML scanner."""

from __future__ import annotations

import textwrap

from webpulse.scanners.xml import XMLScanner

SAMPLE = textwrap.dedent(
    """
    <?xml version="1.0" encoding="UTF-8"?>
    <CustomObject xmlns="http://soap.sforce.com/2006/04/metadata">
        <fields>
            <fullName>Name__c</fullName>
            <sf:label>Name</sf:label>
            <empty/>
        </fields>
    </CustomObject>
    """
)


def test_counts_elements_attributes_and_declaration() -> None:
    info = XMLScanner().scan(SAMPLE)

    assert info.has_xml_declaration is True
    assert info.attribute_count == 3
    assert info.element_count == 5
    assert info.max_nesting_level == 3
    assert info.namespace_count == 1


def test_namespaces_are_deduplicated() -> None:
    info = XMLScanner().scan("<a:x/><a:y/><b:z/>")
    assert info.namespace_count == 2


def test_comments_are_not_elements() -> None:
    info = XMLScanner().scan("<!-- note --><root></root>")
    assert info.element_count == 1


def test_unbalanced_closers_never_go_negative() -> None:
    info = XMLScanner().scan("</a></b><c><d/></c>")
    assert info.max_nesting_level == 2


def test_deep_nesting_issue() -> None:
    content = "<n>" * 11 + "</n>" * 11
    info = XMLScanner().scan(content)

    assert info.max_nesting_level == 11
    assert [issue.description for issue in info.potential_issues] == [
        "Deep XML nesting (depth: 11) may impact readability and processing"
    ]


def test_namespace_issue() -> None:
    content = "".join(f"<ns{index}:item/>" for index in range(6))
    info = XMLScanner().scan(content)

    assert info.namespace_count == 6
    assert info.potential_issues[0].description == (
        "High number of namespaces (6) may complicate maintenance"
    )
