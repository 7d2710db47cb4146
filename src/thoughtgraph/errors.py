from __future__ import annotations
from typing import Optional, Sequence


class ThoughtGraphError(Exception):
    """Base class for everything the engine raises on purpose."""


class GraphValidationError(ThoughtGraphError):
    pass


class CycleError(GraphValidationError):
    def __init__(self, message: str = "Graph has a cycle and cannot be processed.",
                 path: Optional[Sequence[str]] = None):
        self.path = list(path or [])
        if self.path:
            message = f"{message} Loop: {' -> '.join(self.path)}"
        super().__init__(message)


class RecursiveComponentError(GraphValidationError):
    def __init__(self, message: str, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__(f"{message} Chain: {' -> '.join(self.chain)}")


class GenerationError(ThoughtGraphError):
    def __init__(self, message: str, node_id: Optional[str] = None):
        self.node_id = node_id
        if node_id:
            message = f"Node '{node_id}': {message}"
        super().__init__(message)
