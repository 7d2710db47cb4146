from __future__ import annotations
import uuid
from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


def generate_id(prefix: str = "id") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class PlainNode(BaseModel):
    kind: Literal["plain"] = "plain"
    id: str = Field(default_factory=lambda: generate_id("node"))
    position: Optional[Dict[str, float]] = None  # editor-owned, never read by the engine


class ComponentNode(BaseModel):
    kind: Literal["component"] = "component"
    id: str = Field(default_factory=lambda: generate_id("node"))
    component_id: str
    label: str = ""
    position: Optional[Dict[str, float]] = None


Node = Annotated[Union[PlainNode, ComponentNode], Field(discriminator="kind")]


class Edge(BaseModel):
    id: str = Field(default_factory=lambda: generate_id("edge"))
    source: str
    target: str


class Graph(BaseModel):
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _unique_node_ids(self) -> "Graph":
        seen = set()
        for n in self.nodes:
            if n.id in seen:
                raise ValueError(f"Duplicate node id '{n.id}'")
            seen.add(n.id)
        return self

    def node_map(self) -> Dict[str, Node]:
        return {n.id: n for n in self.nodes}

    def live_edges(self) -> List[Edge]:
        """Edges whose endpoints both exist; dangling edges are ignored everywhere."""
        ids = {n.id for n in self.nodes}
        return [e for e in self.edges if e.source in ids and e.target in ids]

    def parents_of(self, node_id: str) -> List[str]:
        return [e.source for e in self.live_edges() if e.target == node_id]

    def roots(self) -> List[str]:
        targets = {e.target for e in self.live_edges()}
        return [n.id for n in self.nodes if n.id not in targets]

    def leaves(self) -> List[str]:
        sources = {e.source for e in self.live_edges()}
        return [n.id for n in self.nodes if n.id not in sources]


class ComponentDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    graph: Graph


class ComponentRegistry:
    """Append-only store of frozen component graphs, keyed by component id."""

    def __init__(self, components: Optional[List[ComponentDefinition]] = None):
        self._components: Dict[str, ComponentDefinition] = {}
        for c in components or []:
            if c.id in self._components:
                raise ValueError(f"Duplicate component id '{c.id}'")
            self._components[c.id] = c

    def lookup(self, component_id: str) -> Optional[ComponentDefinition]:
        return self._components.get(component_id)

    def save(self, name: str, graph: Graph) -> ComponentDefinition:
        component_id = generate_id("comp")
        while component_id in self._components:
            component_id = generate_id("comp")
        definition = ComponentDefinition(id=component_id, name=name, graph=graph.model_copy(deep=True))
        self._components[component_id] = definition
        return definition

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._components

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[ComponentDefinition]:
        return iter(list(self._components.values()))


class GraphDocument(Graph):
    """What a graph YAML file holds: the graph plus the components it references."""

    components: List[ComponentDefinition] = Field(default_factory=list)

    def to_graph(self) -> Graph:
        return Graph(nodes=self.nodes, edges=self.edges, metadata=self.metadata)

    def registry(self) -> ComponentRegistry:
        return ComponentRegistry(self.components)
