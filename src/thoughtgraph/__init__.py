from .errors import CycleError, GenerationError, GraphValidationError, RecursiveComponentError, ThoughtGraphError
from .executor import INPUT_SEPARATOR, NO_OUTPUT_SENTINEL, GraphExecutor, execute
from .ir import ComponentDefinition, ComponentNode, ComponentRegistry, Edge, Graph, GraphDocument, PlainNode
from .scheduler import has_cycle, topological_order, would_create_cycle

__all__ = [
    "ComponentDefinition", "ComponentNode", "ComponentRegistry", "CycleError", "Edge", "GenerationError",
    "Graph", "GraphDocument", "GraphExecutor", "GraphValidationError", "INPUT_SEPARATOR", "NO_OUTPUT_SENTINEL",
    "PlainNode", "RecursiveComponentError", "ThoughtGraphError", "execute", "has_cycle", "topological_order",
    "would_create_cycle",
]
