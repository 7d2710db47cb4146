from __future__ import annotations
from collections import deque
from typing import List, Optional, Sequence

import networkx as nx

from .errors import CycleError
from .ir import Edge, Node


def _build_digraph(nodes: Sequence[Node], edges: Sequence[Edge]) -> nx.MultiDiGraph:
    nxg = nx.MultiDiGraph()
    nxg.add_nodes_from([n.id for n in nodes])  # declaration order is iteration order
    for i, e in enumerate(edges):
        if e.source in nxg and e.target in nxg:
            nxg.add_edge(e.source, e.target, order=i)  # parallel edges each count
    return nxg


def _kahn(nxg: nx.MultiDiGraph) -> List[str]:
    in_degree = {nid: deg for nid, deg in nxg.in_degree()}
    queue = deque(nid for nid in nxg.nodes if in_degree[nid] == 0)
    visited: List[str] = []
    while queue:
        nid = queue.popleft()
        visited.append(nid)
        for _, succ, _ in sorted(nxg.out_edges(nid, data="order"), key=lambda edge: edge[2]):
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                queue.append(succ)
    return visited


def has_cycle(nodes: Sequence[Node], edges: Sequence[Edge]) -> bool:
    if not nodes:
        return False
    nxg = _build_digraph(nodes, edges)
    return len(_kahn(nxg)) != nxg.number_of_nodes()


def would_create_cycle(nodes: Sequence[Node], edges: Sequence[Edge], source: str, target: str) -> bool:
    """Pre-flight check for the editor: would wiring source -> target close a loop?"""
    return has_cycle(nodes, [*edges, Edge(source=source, target=target)])


def find_cycle(nodes: Sequence[Node], edges: Sequence[Edge]) -> Optional[List[str]]:
    nxg = _build_digraph(nodes, edges)
    try:
        cycle = nx.find_cycle(nxg)
    except nx.NetworkXNoCycle:
        return None
    return [edge[0] for edge in cycle] + [cycle[0][0]]


def topological_order(nodes: Sequence[Node], edges: Sequence[Edge]) -> List[str]:
    """Kahn's order; ties go to whichever node became eligible first (roots in declaration order)."""
    nxg = _build_digraph(nodes, edges)
    order = _kahn(nxg)
    if len(order) != nxg.number_of_nodes():
        raise CycleError(path=find_cycle(nodes, edges))
    return order
