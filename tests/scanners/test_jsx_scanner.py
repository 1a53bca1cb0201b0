"""Tests for the JSX scanner."""

from __future__ import annotations

import textwrap

from webpulse.scanners.jsx import JSXScanner

SAMPLE = textwrap.dedent(
    """
    import React, { useState, useEffect } from "react";

    export function App(props) {
      const [count, setCount] = useState(0);
      useEffect(() => {}, []);
      return (
        <Layout title="home">
          <Header {...props} />
          <div>
            <Card>
              <Button onClick={() => setCount(count + 1)} />
            </Card>
          </div>
        </Layout>
      );
    }
    """
)


def test_tracks_components_hooks_and_spreads() -> None:
    info = JSXScanner().scan(SAMPLE)

    assert info.custom_component_count == 4
    assert info.max_component_nesting == 3
    assert info.hook_count == 2
    assert info.prop_spreading_count == 1
    assert info.framework.has_react is True
    assert len(info.potential_issues) == 0


def test_self_closing_components_do_not_deepen_nesting() -> None:
    info = JSXScanner().scan("<List><Item /><Item /><Item /></List>")

    assert info.custom_component_count == 4
    assert info.max_component_nesting == 2


def test_arrow_inside_attribute_braces_does_not_end_tag() -> None:
    info = JSXScanner().scan("<Outer render={() => <Inner />}><Leaf /></Outer>")
    assert info.max_component_nesting == 2


def test_deep_nesting_issue() -> None:
    info = JSXScanner().scan("<A><B><C><D><E><F /></E></D></C></B></A>")

    assert info.max_component_nesting == 6
    assert [issue.description for issue in info.potential_issues] == [
        "Deep component nesting (depth: 6) may impact performance"
    ]


def test_prop_spreading_issue() -> None:
    info = JSXScanner().scan("<X {...a} />\n" * 11)

    assert info.prop_spreading_count == 11
    assert info.max_component_nesting == 1
    assert info.potential_issues[0].description == (
        "Heavy use of prop spreading (11 occurrences) may make props harder to track"
    )


def test_unterminated_markup_does_not_crash() -> None:
    info = JSXScanner().scan("<Broken attr={")
    assert info.custom_component_count == 1
