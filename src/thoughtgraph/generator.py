from importlib.resources import files
from pathlib import Path
import yaml
from .ir import Graph, GraphDocument

TEMPLATES = ("disconnected", "linear", "brainstorm", "debate")


def _load_template_yaml(name: str) -> str:
    pkg = files('thoughtgraph.templates')
    return (pkg / f"{name}.yaml").read_text()


def generate_graph_from_template(name: str) -> Graph:
    name = name.lower()
    if name not in TEMPLATES:
        raise ValueError(f"Unknown template '{name}'. Use one of: {', '.join(TEMPLATES)}")
    data = yaml.safe_load(_load_template_yaml(name))
    return Graph.model_validate(data)


def load_document(path: Path) -> GraphDocument:
    data = yaml.safe_load(Path(path).read_text())
    return GraphDocument.model_validate(data if data is not None else {})


def save_graph_yaml(graph: Graph, path: Path):
    path.write_text(yaml.safe_dump(graph.model_dump(exclude_none=True), sort_keys=False))
