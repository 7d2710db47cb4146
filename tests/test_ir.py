from pathlib import Path

import pytest
from pydantic import ValidationError

from thoughtgraph.generator import TEMPLATES, generate_graph_from_template, load_document, save_graph_yaml
from thoughtgraph.ir import ComponentNode, ComponentRegistry, Graph, PlainNode
from thoughtgraph.validator import validate_graph_from_file

from conftest import make_graph


@pytest.mark.parametrize("name", TEMPLATES)
def test_generate_and_validate(tmp_path: Path, name: str):
    g = generate_graph_from_template(name)
    path = tmp_path / f"{name}.yaml"
    save_graph_yaml(g, path)
    ok, messages = validate_graph_from_file(path)
    assert ok, messages


def test_unknown_template():
    with pytest.raises(ValueError, match="Unknown template"):
        generate_graph_from_template("pyramid")


def test_duplicate_node_ids_rejected():
    with pytest.raises(ValidationError, match="Duplicate node id"):
        Graph(nodes=[PlainNode(id="a"), PlainNode(id="a")])


def test_nodes_are_tagged_by_kind():
    g = Graph.model_validate({
        "nodes": [
            {"kind": "plain", "id": "a", "position": {"x": 1, "y": 2}},
            {"kind": "component", "id": "k", "component_id": "comp_1", "label": "Critic"},
        ],
        "edges": [{"source": "a", "target": "k"}],
    })
    assert isinstance(g.nodes[0], PlainNode)
    assert isinstance(g.nodes[1], ComponentNode)
    assert g.edges[0].id.startswith("edge_")


def test_dangling_edges_are_ignored_by_helpers():
    g = make_graph(["a", "b"], [("a", "b"), ("a", "ghost"), ("ghost", "b")])
    assert [e.id for e in g.live_edges()] == ["e0"]
    assert g.parents_of("b") == ["a"]
    assert g.roots() == ["a"]
    assert g.leaves() == ["b"]


def test_registry_save_freezes_a_copy():
    registry = ComponentRegistry()
    inner = make_graph(["x", "y"], [("x", "y")])
    first = registry.save("Refiner", inner)
    second = registry.save("Refiner", inner)

    assert first.id != second.id
    assert len(registry) == 2
    assert registry.lookup(first.id) is first
    assert registry.lookup("comp_missing") is None

    inner.nodes.append(PlainNode(id="z"))
    assert [n.id for n in first.graph.nodes] == ["x", "y"]
    with pytest.raises(ValidationError):
        first.name = "Renamed"


def test_document_round_trip_with_components(tmp_path: Path):
    path = tmp_path / "doc.yaml"
    path.write_text(
        "nodes:\n"
        "  - {kind: component, id: k, component_id: comp_1, label: Refiner}\n"
        "edges: []\n"
        "components:\n"
        "  - id: comp_1\n"
        "    name: Refiner\n"
        "    graph:\n"
        "      nodes: [{kind: plain, id: x}, {kind: plain, id: y}]\n"
        "      edges: [{id: e1, source: x, target: y}]\n"
    )
    doc = load_document(path)
    registry = doc.registry()
    assert "comp_1" in registry
    assert registry.lookup("comp_1").graph.leaves() == ["y"]
    assert [n.id for n in doc.to_graph().nodes] == ["k"]
