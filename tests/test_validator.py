from pathlib import Path

from thoughtgraph.ir import ComponentRegistry, Graph
from thoughtgraph.validator import find_component_recursion, validate_graph, validate_graph_from_file

from conftest import make_graph


def _statuses(messages):
    return [m.split(":", 1)[0] for m in messages]


def test_valid_graph_reports_only_ok():
    ok, messages = validate_graph(make_graph(["a", "b"], [("a", "b")]))
    assert ok
    assert set(_statuses(messages)) == {"OK"}


def test_empty_graph_is_an_error():
    ok, messages = validate_graph(Graph())
    assert not ok
    assert "ERR: Graph has no nodes." in messages


def test_cycle_is_an_error():
    ok, messages = validate_graph(make_graph(["a", "b"], [("a", "b"), ("b", "a")]))
    assert not ok
    assert any(m.startswith("ERR: Cycle detected") for m in messages)


def test_dangling_edge_is_only_a_warning():
    ok, messages = validate_graph(make_graph(["a"], [("a", "ghost")]))
    assert ok
    assert any(m.startswith("WARN: Edge a->ghost") for m in messages)


def test_missing_component_is_only_a_warning():
    ok, messages = validate_graph(make_graph(["k"], components={"k": "comp_nope"}))
    assert ok
    assert any("unknown component 'comp_nope'" in m for m in messages)


def test_mutually_recursive_components():
    registry = ComponentRegistry()
    a = registry.save("A", make_graph(["x"]))
    b = registry.save("B", make_graph(["kb"], components={"kb": a.id}))
    # root -> a2 -> b -> a ends at a plain graph
    a2 = registry.save("A2", make_graph(["ka"], components={"ka": b.id}))
    assert find_component_recursion(make_graph(["k"], components={"k": a2.id}), registry) is None

    looped = ComponentRegistry([
        a.model_copy(update={"graph": make_graph(["ka"], components={"ka": b.id})}),
        b,
    ])
    chain = find_component_recursion(make_graph(["k"], components={"k": a.id}), looped)
    assert chain is not None and chain[0] == chain[-1]
    assert set(chain) == {a.id, b.id}

    ok, messages = validate_graph(make_graph(["k"], components={"k": a.id}), looped)
    assert not ok
    assert any(m.startswith("ERR: Components embed each other recursively") for m in messages)


def test_unreadable_file_is_reported(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("nodes: [{kind: plain, id: a}, {kind: plain, id: a}]\n")
    ok, messages = validate_graph_from_file(path)
    assert not ok
    assert messages[0].startswith("ERR: Could not load graph")


def test_missing_file_is_reported(tmp_path: Path):
    ok, messages = validate_graph_from_file(tmp_path / "nope.yaml")
    assert not ok
    assert len(messages) == 1


def test_components_saved_into_a_shared_registry_are_seen():
    registry = ComponentRegistry()
    graph = make_graph(["k"], components={"k": "comp_later"})
    ok, messages = validate_graph(graph, registry)
    assert any("unknown component 'comp_later'" in m for m in messages)

    comp = registry.save("Later", make_graph(["x"]))
    ok, messages = validate_graph(make_graph(["k"], components={"k": comp.id}), registry)
    assert ok
    assert not any(m.startswith("WARN") for m in messages)
