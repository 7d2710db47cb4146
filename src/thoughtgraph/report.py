from typing import List
from .errors import CycleError
from .ir import ComponentNode, Graph
from .scheduler import has_cycle, topological_order


def architecture_notes(graph: Graph) -> str:
    nodes = graph.nodes
    if not nodes:
        return "This configuration is empty. Add nodes to begin building an AI."

    roots = set(graph.roots())
    leaves = set(graph.leaves())
    isolated = roots & leaves

    lines = [
        "Architecture Report:",
        "",
        f"- Nodes: {len(nodes)}",
        f"- Connections: {len(graph.edges)}",
        f"- Entry Points (Root Nodes): {len(roots)}",
        f"- Final Outputs (Leaf Nodes): {len(leaves)}",
    ]
    components = sum(1 for n in nodes if isinstance(n, ComponentNode))
    if components:
        lines.append(f"- Component Nodes: {components}")

    if has_cycle(graph.nodes, graph.edges):
        lines += ["", "Error: A cycle is detected in the graph. The AI cannot process this configuration. "
                      "Please find and remove the connection that forms the loop."]
        return "\n".join(lines)

    if isolated:
        lines += ["", f"Warning: {len(isolated)} node(s) are completely isolated. They will act as both "
                      "entry points and final outputs, which may lead to fragmented results."]

    if len(nodes) > 1 and not graph.edges:
        lines += ["", "Observation: All nodes are disconnected. The final output will be a collection of "
                      "independent thoughts. To create a coherent process, connect the nodes."]
    elif len(roots) > 1:
        lines += ["", "Observation: Multiple entry points exist. The AI will start multiple independent "
                      "thought processes. This can be useful for parallel analysis but may result in a "
                      "disjointed final answer unless merged."]
    elif len(leaves) > 1:
        lines += ["", f"Observation: Multiple final outputs. The AI's response will be a combination of "
                      f"the results from {len(leaves)} different endpoints."]
    elif len(roots) == 1 and len(leaves) == 1:
        lines += ["", "Observation: This is a single-flow architecture (one entry, one exit). It should "
                      "produce a focused, sequential thought process."]
    return "\n".join(lines)


def ascii_plan(graph: Graph) -> str:
    lines: List[str] = ["# ASCII Plan (topological order)"]
    try:
        order = topological_order(graph.nodes, graph.edges)
    except CycleError as e:
        lines.append(f"(no plan: {e})")
        return "\n".join(lines)

    node_map = graph.node_map()
    edges = graph.live_edges()
    for i, nid in enumerate(order, 1):
        node = node_map[nid]
        kind = f"component:{node.label or node.component_id}" if isinstance(node, ComponentNode) else "plain"
        lines.append(f"{i:02d}. {nid} [{kind}]")
        for e in edges:
            if e.source == nid:
                lines.append(f"    └─▶ {e.target}")
    return "\n".join(lines)
