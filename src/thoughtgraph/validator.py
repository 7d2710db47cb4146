from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Set, Tuple

import networkx as nx
import yaml

from .generator import load_document
from .ir import ComponentNode, ComponentRegistry, Graph
from .scheduler import find_cycle, has_cycle

_ROOT = "<graph>"


def component_refs(graph: Graph) -> List[str]:
    return [n.component_id for n in graph.nodes if isinstance(n, ComponentNode)]


def find_component_recursion(graph: Graph, registry: ComponentRegistry) -> Optional[List[str]]:
    """Component ids forming a loop reachable from ``graph`` (A embeds B embeds A), if any."""
    refs = nx.DiGraph()
    refs.add_node(_ROOT)
    pending = [(_ROOT, graph)]
    seen: Set[str] = set()
    while pending:
        owner, g = pending.pop()
        for cid in component_refs(g):
            refs.add_edge(owner, cid)
            definition = registry.lookup(cid)
            if definition is not None and cid not in seen:
                seen.add(cid)
                pending.append((cid, definition.graph))
    try:
        cycle = nx.find_cycle(refs, source=_ROOT)
    except nx.NetworkXNoCycle:
        return None
    return [u for u, _ in cycle] + [cycle[0][0]]


def validate_graph(graph: Graph, registry: Optional[ComponentRegistry] = None) -> Tuple[bool, List[str]]:
    messages: List[str] = []
    ok = True
    registry = registry if registry is not None else ComponentRegistry()

    # 1) Something to run
    if not graph.nodes:
        ok = False
        messages.append("ERR: Graph has no nodes.")
    else:
        messages.append(f"OK: {len(graph.nodes)} node(s) with unique IDs.")

    # 2) Dangling edges are skipped at run time, so only warn
    node_ids = {n.id for n in graph.nodes}
    dangling = [e for e in graph.edges if e.source not in node_ids or e.target not in node_ids]
    for e in dangling:
        messages.append(f"WARN: Edge {e.source}->{e.target} references missing node(s) and will be ignored.")
    if not dangling:
        messages.append("OK: All edges reference existing nodes.")

    # 3) Acyclic check
    if has_cycle(graph.nodes, graph.edges):
        ok = False
        loop = find_cycle(graph.nodes, graph.edges) or []
        messages.append("ERR: Cycle detected in the graph." + (f" Loop: {' -> '.join(loop)}" if loop else ""))
    else:
        messages.append("OK: Graph is acyclic.")

    # 4) Component references
    missing = [n for n in graph.nodes if isinstance(n, ComponentNode) and n.component_id not in registry]
    for n in missing:
        messages.append(f"WARN: Node {n.id} references unknown component '{n.component_id}'; "
                        "it will output a placeholder.")
    for definition in registry:
        if has_cycle(definition.graph.nodes, definition.graph.edges):
            ok = False
            messages.append(f"ERR: Component '{definition.name}' ({definition.id}) contains a cycle.")
    chain = find_component_recursion(graph, registry)
    if chain:
        ok = False
        messages.append(f"ERR: Components embed each other recursively: {' -> '.join(chain)}")
    elif component_refs(graph):
        messages.append("OK: Component references are not recursive.")

    return ok, messages


def validate_graph_from_file(path: Path) -> Tuple[bool, List[str]]:
    try:
        doc = load_document(path)
        registry = doc.registry()
    except (OSError, yaml.YAMLError, ValueError) as e:
        return False, [f"ERR: Could not load graph from {path}: {e}"]
    return validate_graph(doc.to_graph(), registry)
