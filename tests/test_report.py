from thoughtgraph.generator import generate_graph_from_template
from thoughtgraph.ir import Graph
from thoughtgraph.report import architecture_notes, ascii_plan

from conftest import make_graph


def test_empty_configuration():
    assert architecture_notes(Graph()).startswith("This configuration is empty")


def test_disconnected_template():
    notes = architecture_notes(generate_graph_from_template("disconnected"))
    assert "- Entry Points (Root Nodes): 2" in notes
    assert "Warning: 2 node(s) are completely isolated" in notes
    assert "All nodes are disconnected" in notes


def test_single_flow():
    notes = architecture_notes(generate_graph_from_template("linear"))
    assert "single-flow architecture" in notes


def test_multiple_outputs():
    notes = architecture_notes(generate_graph_from_template("brainstorm"))
    assert "Multiple final outputs" in notes
    assert "from 2 different endpoints" in notes


def test_cycle_short_circuits():
    notes = architecture_notes(make_graph(["a", "b"], [("a", "b"), ("b", "a")]))
    assert "Error: A cycle is detected" in notes
    assert "Observation" not in notes


def test_ascii_plan_lists_order_and_successors():
    plan = ascii_plan(make_graph(["a", "k"], [("a", "k")], components={"k": "comp_1"}))
    lines = plan.splitlines()
    assert lines[1] == "01. a [plain]"
    assert lines[2].strip().endswith("k")
    assert lines[3] == "02. k [component:k-label]"


def test_ascii_plan_with_cycle():
    plan = ascii_plan(make_graph(["a", "b"], [("a", "b"), ("b", "a")]))
    assert "no plan" in plan
