"""Command-line interface for qmodel code generation."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from lark.exceptions import LarkError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from qmodel.generator import python
from qmodel.generator.ancestors import ClassResolutionError, resolve_ancestor
from qmodel.generator.batch import BatchResult, Outcome, generate_all
from qmodel.generator.classgen import generate
from qmodel.generator.parser import ValidationError, load_schema
from qmodel.generator.sink import DirectorySink
from qmodel.generator.types import AccessStyle, GenerationConfig

if TYPE_CHECKING:
    from qmodel.generator.schema import SchemaIndex


def _load(input_file: str) -> SchemaIndex:
    try:
        return load_schema(input_file)
    except (ValidationError, LarkError) as e:
        print(f"Invalid schema {input_file}: {e}")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every generated class")
def cli(verbose: bool) -> None:
    """qmodel typed query class generator."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input schema file")
@click.option("--output", "-o", "output_path", required=True, help="Output directory")
@click.option(
    "--access-style",
    "--query-mode",
    "access_style",
    type=click.Choice([s.value for s in AccessStyle], case_sensitive=False),
    default=AccessStyle.FIELD.value,
    show_default=True,
    help="Expose members as fields or as accessor methods",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=5,
    show_default=True,
    help="How deep persistable members are expanded",
)
@click.option(
    "--runtime-import",
    default="qmodel.query",
    show_default=True,
    help="Module the generated classes import their runtime from",
)
@click.option("--workers", type=click.IntRange(min=1), default=1, help="Worker threads")
def gen(
    input_file: str,
    output_path: str,
    access_style: str,
    max_depth: int,
    runtime_import: str,
    workers: int,
) -> None:
    """Generate query classes for the persistent classes of a schema."""
    schema = _load(input_file)
    config = GenerationConfig(
        access_style=AccessStyle(access_style.lower()),
        max_depth=max_depth,
        runtime_import=runtime_import,
    )

    result = generate_all(schema, config, DirectorySink(output_path), workers=workers)
    _output_summary(result)

    if not result.ok:
        sys.exit(1)


@cli.command()
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option("--name", default="qmodel_runtime", help="Runtime package name")
def runtime(output_path: str, name: str) -> None:
    """Generate the query runtime package."""
    runtime_dir = Path(output_path) / name
    runtime_dir.mkdir(parents=True, exist_ok=True)
    for filename, content in python.runtime().items():
        (runtime_dir / filename).write_text(content)
    print(f"Generated query runtime in {runtime_dir}")


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input schema file")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.option(
    "--max-depth", type=click.IntRange(min=0), default=5, help="Depth used for the report"
)
def info(input_file: str, output_json: bool, max_depth: int) -> None:
    """Display the classes of a schema and their query classes."""
    schema = _load(input_file)
    config = GenerationConfig(max_depth=max_depth)

    if output_json:
        _output_json(schema, config)
    else:
        _output_plain(schema, config)


def _describe(schema: SchemaIndex, config: GenerationConfig) -> list[dict]:
    """Collect what generation would produce for every class."""
    rows: list[dict] = []
    for cls in schema:
        row: dict = {
            "class": cls.qualified_name,
            "persistent": cls.persistent,
            "query_class": None,
            "superclass": None,
            "members": {},
            "error": None,
        }
        if cls.persistent and cls.outer is None:
            try:
                generated = generate(cls, schema, config)
            except ClassResolutionError as e:
                row["error"] = str(e)
            else:
                row["query_class"] = generated.qualified_name
                ancestor = resolve_ancestor(cls, schema)
                row["superclass"] = ancestor.qualified_name if ancestor else None
                row["members"] = {m.name: m.public_name for m in generated.members}
        rows.append(row)
    return rows


def _output_json(schema: SchemaIndex, config: GenerationConfig) -> None:
    """Output schema info as JSON."""
    print(json.dumps({"classes": _describe(schema, config)}, indent=2))


def _output_plain(schema: SchemaIndex, config: GenerationConfig) -> None:
    """Output schema info using rich text formatting."""
    console = Console()

    console.print("[bold cyan]Classes[/bold cyan]")
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Class", style="white")
    table.add_column("Query class", style="green")
    table.add_column("Extends", style="dim")
    table.add_column("Members", style="yellow")

    for row in _describe(schema, config):
        if row["error"]:
            query_class = f"[red]{escape(row['error'])}[/red]"
        else:
            query_class = row["query_class"] or ""
        members = ", ".join(f"{name}: {expr}" for name, expr in row["members"].items())
        table.add_row(row["class"], query_class, row["superclass"] or "", escape(members))

    console.print(table)


def _output_summary(result: BatchResult) -> None:
    """Print the outcome of a generation run."""
    console = Console()

    styles = {
        Outcome.GENERATED: "green",
        Outcome.SKIPPED: "yellow",
        Outcome.FAILED: "red",
    }
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Class", style="white")
    table.add_column("Outcome")
    table.add_column("Query class / diagnostic", style="dim")

    for r in result.results:
        style = styles[r.outcome]
        detail = r.diagnostic or r.generated or ""
        table.add_row(r.source, f"[{style}]{r.outcome.value}[/{style}]", escape(detail))

    console.print(table)
    console.print(
        f"{len(result.generated)} generated, {len(result.skipped)} skipped, "
        f"{len(result.failed)} failed"
    )


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
