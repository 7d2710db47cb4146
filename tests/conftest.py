"""Shared fixtures: a recording stub client and small graph builders."""

from typing import Iterable, List, Optional, Sequence, Tuple

import pytest

from thoughtgraph.client import MockGenerationClient
from thoughtgraph.ir import ComponentNode, Edge, Graph, PlainNode


def make_graph(node_ids: Sequence[str], edges: Iterable[Tuple[str, str]] = (),
               components: Optional[dict] = None) -> Graph:
    """Build a graph; ``components`` maps node id -> component id for component nodes."""
    components = components or {}
    nodes: List = []
    for nid in node_ids:
        if nid in components:
            nodes.append(ComponentNode(id=nid, component_id=components[nid], label=f"{nid}-label"))
        else:
            nodes.append(PlainNode(id=nid))
    return Graph(
        nodes=nodes,
        edges=[Edge(id=f"e{i}", source=s, target=t) for i, (s, t) in enumerate(edges)],
    )


@pytest.fixture()
def length_client() -> MockGenerationClient:
    """Answers ``out:<prompt length>`` and records every prompt."""
    return MockGenerationClient(responder=lambda prompt: f"out:{len(prompt)}")


@pytest.fixture()
def echo_client() -> MockGenerationClient:
    """Echoes the prompt back; pair with an ``{{input}}``-only template to see node inputs."""
    return MockGenerationClient(responder=lambda prompt: f"<{prompt}>")
