import asyncio
from pathlib import Path
import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .client import build_client
from .config import configure_logging, settings
from .errors import ThoughtGraphError
from .executor import GraphExecutor
from .generator import TEMPLATES, generate_graph_from_template, load_document, save_graph_yaml
from .ir import GraphDocument
from .quiz import QUIZZES, run_quiz
from .report import architecture_notes, ascii_plan
from .validator import validate_graph_from_file

app = typer.Typer(no_args_is_help=True, help="thoughtgraph CLI — wire thinking steps into a graph and run it")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every node execution.")):
    if verbose:
        configure_logging("DEBUG", settings.log_format)


def _load_or_exit(file: Path) -> GraphDocument:
    try:
        return load_document(file)
    except (OSError, yaml.YAMLError, ValueError) as e:
        rprint(f"[bold red]Failed to load graph:[/] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def init():
    """Create a local project layout (graphs/)."""
    Path("graphs").mkdir(exist_ok=True)
    rprint(Panel.fit("[bold green]Initialized[/] directory: graphs/"))


@app.command()
def generate(template: str = typer.Option(..., help=f"Template to use: {' | '.join(TEMPLATES)}"),
             name: str = typer.Option("graph", help="Output filename (without .yaml)"),
             outdir: Path = typer.Option(Path("graphs"), help="Where to place the YAML"),
    ):
    """Generate a graph YAML from a built-in template."""
    try:
        graph = generate_graph_from_template(template)
    except ValueError as e:
        rprint(f"[bold red]{escape(str(e))}[/]")
        raise typer.Exit(code=1)
    outdir.mkdir(exist_ok=True, parents=True)
    outfile = outdir / f"{name}.yaml"
    save_graph_yaml(graph, outfile)
    rprint(Panel.fit(f"Saved template [bold]{template}[/] to [cyan]{outfile}[/]"))


@app.command()
def validate(file: Path):
    """Validate a graph YAML (node ids, edges, cycles, components)."""
    ok, messages = validate_graph_from_file(file)
    table = Table(title="Validation Report", show_lines=True)
    table.add_column("Status", justify="center", style="bold")
    table.add_column("Message")
    for m in messages:
        status, _, text = m.partition(": ")
        table.add_row(status, escape(text))
    rprint(table)
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def explain(file: Path):
    """Print the architecture report and an ASCII plan of the graph."""
    graph = _load_or_exit(file).to_graph()
    print(architecture_notes(graph))
    print()
    print(ascii_plan(graph))


@app.command()
def run(file: Path,
        goal: str = typer.Option(..., help="The overall goal every node works toward."),
        context: str = typer.Option("", help="Input handed to the root nodes.")):
    """Execute the graph once and print the combined leaf output."""
    doc = _load_or_exit(file)
    executor = GraphExecutor(build_client(), doc.registry())
    try:
        answer = asyncio.run(executor.execute(doc.to_graph(), goal, context))
    except ThoughtGraphError as e:
        rprint(f"[bold red]Run failed:[/] {escape(str(e))}")
        raise typer.Exit(code=1)
    rprint(Panel(escape(answer), title=escape(goal)))


@app.command()
def quiz(file: Path,
         quiz_name: str = typer.Option("Simple Concepts", "--quiz", help=f"One of: {', '.join(QUIZZES)}")):
    """Run every question of a quiz against the graph concurrently."""
    if quiz_name not in QUIZZES:
        rprint(f"[bold red]Unknown quiz '{quiz_name}'.[/] Use one of: {', '.join(QUIZZES)}")
        raise typer.Exit(code=1)
    doc = _load_or_exit(file)
    executor = GraphExecutor(build_client(), doc.registry())
    results = asyncio.run(run_quiz(executor, doc.to_graph(), QUIZZES[quiz_name]))

    table = Table(title=quiz_name, show_lines=True)
    table.add_column("Question", style="bold")
    table.add_column("Answer")
    for r in results:
        answer = escape(r.answer)
        table.add_row(escape(r.question), answer if r.ok else f"[red]{answer}[/]")
    rprint(table)
    if not all(r.ok for r in results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
