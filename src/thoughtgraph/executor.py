"""Graph execution: validate, schedule, run each node, aggregate the leaves.

One ``execute`` call owns a fresh output table for its graph level. Component
nodes recurse into their frozen sub-graph with the same goal and their own
computed input as the nested level's context input.
"""

from __future__ import annotations
from typing import Dict, Optional, Tuple

import structlog

from .client import GenerationClient, build_client
from .config import settings
from .errors import CycleError, GenerationError, RecursiveComponentError, ThoughtGraphError
from .ir import ComponentNode, ComponentRegistry, Graph, Node
from .prompts import UNIVERSAL_NODE_PROMPT, render_prompt
from .scheduler import find_cycle, has_cycle, topological_order

logger = structlog.get_logger(__name__)

INPUT_SEPARATOR = "\n\n---\n\n"
NO_OUTPUT_SENTINEL = "The AI produced no output."


def missing_component_placeholder(node: ComponentNode) -> str:
    return f'[Missing component: "{node.label or node.component_id}"]'


class GraphExecutor:
    def __init__(self, client: GenerationClient, registry: Optional[ComponentRegistry] = None,
                 max_depth: Optional[int] = None, template: str = UNIVERSAL_NODE_PROMPT):
        self.client = client
        self.registry = registry if registry is not None else ComponentRegistry()
        self.max_depth = max_depth if max_depth is not None else settings.max_component_depth
        self.template = template

    async def execute(self, graph: Graph, goal: str, context_input: str = "") -> str:
        return await self._execute(graph, goal, context_input, chain=())

    async def _execute(self, graph: Graph, goal: str, context_input: str,
                       chain: Tuple[str, ...]) -> str:
        if has_cycle(graph.nodes, graph.edges):
            logger.warning("graph_rejected_cycle", depth=len(chain), chain=list(chain))
            raise CycleError(path=find_cycle(graph.nodes, graph.edges))
        order = topological_order(graph.nodes, graph.edges)
        logger.debug("graph_execution_started", depth=len(chain), nodes=len(order))

        node_map = graph.node_map()
        outputs: Dict[str, str] = {}

        for nid in order:
            parents = [outputs[pid] for pid in graph.parents_of(nid)]
            node_input = INPUT_SEPARATOR.join(parents) if parents else context_input
            outputs[nid] = await self._run_node(node_map[nid], goal, node_input, chain)

        leaves = [outputs[nid] for nid in graph.leaves()]
        result = INPUT_SEPARATOR.join(leaves).strip()
        logger.debug("graph_execution_finished", depth=len(chain), leaves=len(leaves))
        return result or NO_OUTPUT_SENTINEL

    async def _run_node(self, node: Node, goal: str, node_input: str,
                        chain: Tuple[str, ...]) -> str:
        if isinstance(node, ComponentNode):
            return await self._run_component(node, goal, node_input, chain)

        prompt = render_prompt(self.template, goal, node_input)
        if not prompt.strip():
            return ""
        try:
            output = await self.client.generate(prompt)
        except GenerationError as e:
            if e.node_id is None:
                raise GenerationError(str(e), node_id=node.id) from e
            raise
        except ThoughtGraphError:
            raise
        except Exception as e:
            logger.error("generation_failed", node_id=node.id, error=str(e))
            raise GenerationError(f"{type(e).__name__}: {e}", node_id=node.id) from e
        logger.debug("node_executed", node_id=node.id, input_chars=len(node_input),
                     output_chars=len(output))
        return output

    async def _run_component(self, node: ComponentNode, goal: str, node_input: str,
                             chain: Tuple[str, ...]) -> str:
        definition = self.registry.lookup(node.component_id)
        if definition is None:
            logger.warning("component_missing", node_id=node.id, component_id=node.component_id)
            return missing_component_placeholder(node)
        if node.component_id in chain:
            raise RecursiveComponentError("Recursive component cycle.", [*chain, node.component_id])
        if len(chain) >= self.max_depth:
            raise RecursiveComponentError(
                f"Component nesting exceeds the maximum depth of {self.max_depth}.",
                [*chain, node.component_id],
            )
        return await self._execute(definition.graph, goal, node_input, (*chain, node.component_id))


async def execute(graph: Graph, goal: str, context_input: str = "",
                  registry: Optional[ComponentRegistry] = None,
                  client: Optional[GenerationClient] = None) -> str:
    return await GraphExecutor(client or build_client(), registry).execute(graph, goal, context_input)
