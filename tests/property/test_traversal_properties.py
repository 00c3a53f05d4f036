# tests/property/test_traversal_properties.py
"""Property tests for both traversal variants over cyclic and acyclic data.

Properties:
- Validation of any record graph terminates and succeeds
- In-place validation returns the input reference
- Rebuilt output is acyclic (JSON-serializable)
- A single bad field is reported exactly once, at a path that reaches it
- Acyclic JSON documents rebuild to an equal document
"""

from __future__ import annotations

import json
from typing import Any

from hypothesis import given
from hypothesis import strategies as st

from cyclic_schema import validate_in_place, validate_rebuilding
from cyclic_schema.schema import SchemaNode, dynamic, fixed
from tests.property.settings import QUICK_SETTINGS, STANDARD_SETTINGS
from tests.strategies.graphs import json_values, make_graph_node_schema, make_json_schema, record_graphs


def _roster(nodes: list[dict[str, Any]]) -> dict[str, Any]:
    """Root document that reaches every node directly."""
    return {"roster": {str(index): node for index, node in enumerate(nodes)}}


def _roster_schema() -> SchemaNode:
    return fixed(roster=dynamic(make_graph_node_schema()))


def _follow(value: Any, path: tuple[str | int, ...]) -> Any:
    for segment in path:
        value = value[segment]
    return value


class TestRecordGraphs:
    """Arbitrarily wired record graphs."""

    @given(nodes=record_graphs())
    @STANDARD_SETTINGS
    def test_in_place_succeeds_with_same_reference(self, nodes: list[dict[str, Any]]) -> None:
        result = validate_in_place(make_graph_node_schema(), nodes[0])

        assert result.ok
        assert result.data is nodes[0]

    @given(nodes=record_graphs())
    @STANDARD_SETTINGS
    def test_rebuilt_output_is_acyclic(self, nodes: list[dict[str, Any]]) -> None:
        result = validate_rebuilding(make_graph_node_schema(), nodes[0])

        assert result.ok
        json.dumps(result.data)
        assert result.data["name"] == nodes[0]["name"]

    @given(nodes=record_graphs(), data=st.data())
    @STANDARD_SETTINGS
    def test_bad_name_reported_once(self, nodes: list[dict[str, Any]], data: st.DataObject) -> None:
        bad = data.draw(st.sampled_from(nodes))
        bad["name"] = 0
        document = _roster(nodes)

        for validate in (validate_in_place, validate_rebuilding):
            result = validate(_roster_schema(), document)

            assert not result.ok
            assert len(result.issues) == 1
            issue = result.issues[0]
            assert issue.code == "string_type"
            assert issue.path[-1] == "name"
            assert _follow(document, issue.path[:-1]) is bad


class TestJsonDocuments:
    """Acyclic documents behave like an ordinary validator."""

    @given(value=json_values)
    @STANDARD_SETTINGS
    def test_rebuild_preserves_document(self, value: Any) -> None:
        result = validate_rebuilding(make_json_schema(), value)

        assert result.ok
        assert result.data == value

    @given(value=json_values)
    @QUICK_SETTINGS
    def test_rebuild_is_idempotent(self, value: Any) -> None:
        schema = make_json_schema()

        once = validate_rebuilding(schema, value)
        twice = validate_rebuilding(schema, once.data)

        assert twice.ok
        assert twice.data == once.data

    @given(value=json_values)
    @QUICK_SETTINGS
    def test_in_place_accepts_document(self, value: Any) -> None:
        result = validate_in_place(make_json_schema(), value)

        assert result.ok
        assert result.data is value
