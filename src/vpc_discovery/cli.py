"""VPC discovery CLI"""

import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from .config import load_descriptor
from .core import Context, RetryPolicy, VPCDiscoveryError, setup_logging
from .modules import VPCDiscoveryPlugin

app = typer.Typer(
    name="vpc-discovery",
    help="Resolve VPC, subnet and security group names into ids for functions",
    no_args_is_help=True,
)
console = Console()


def _render(data, fmt: str) -> bool:
    if fmt == "table":
        return False  # caller should render the table
    if fmt == "json":
        console.print_json(json.dumps(data, default=str))
        return True
    if fmt == "yaml":
        console.print(yaml.safe_dump(data, sort_keys=False))
        return True
    console.print(f"[yellow]Unknown format: {fmt}. Defaulting to table.[/]")
    return False


def _show_table(results: dict) -> None:
    if not results:
        console.print("[yellow]No function received a VPC config[/]")
        return
    table = Table(title="Function VPC config", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Function", style="cyan")
    table.add_column("Subnet IDs", style="green")
    table.add_column("Security Group IDs", style="magenta")
    for i, (name, config) in enumerate(results.items(), 1):
        vpc = config["vpc"]
        table.add_row(
            str(i),
            name,
            "\n".join(vpc.get("subnetIds", [])) or "-",
            "\n".join(vpc.get("securityGroupIds", [])) or "-",
        )
    console.print(table)


@app.callback()
def _global(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", help="Also write logs to this file"
    ),
):
    setup_logging(debug=debug, log_file=log_file)


@app.command("resolve")
def resolve(
    descriptor: Path = typer.Argument(..., help="Deployment descriptor (YAML)"),
    functions: Optional[list[str]] = typer.Option(
        None, "--function", "-f", help="Only resolve these functions"
    ),
    profile: Optional[str] = typer.Option(None, "--profile", "-p"),
    region: Optional[str] = typer.Option(None, "--region"),
    output_format: str = typer.Option("table", "--format", help="table|json|yaml"),
    min_wait: float = typer.Option(3.0, "--min-wait", help="Min backoff (seconds)"),
    max_wait: float = typer.Option(60.0, "--max-wait", help="Max backoff (seconds)"),
    retry_ceiling: float = typer.Option(
        300.0, "--retry-ceiling", help="Give up retrying after this many seconds"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit non-zero if any function was skipped"
    ),
):
    """Resolve the VPC config of every function in a descriptor"""
    try:
        retry = RetryPolicy(min_wait=min_wait, max_wait=max_wait, ceiling=retry_ceiling)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    try:
        desc = load_descriptor(descriptor)
        context = Context.create(
            profile=profile or desc.profile, region=region or desc.region, retry=retry
        )
        plugin = VPCDiscoveryPlugin(desc, context)
        plugin.validate_custom_config()
        with console.status("Updating VPC config..."):
            results = plugin.update_functions_vpc_config(functions or None)
    except VPCDiscoveryError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    if not _render(results, output_format):
        _show_table(results)

    for name, error in plugin.failures.items():
        console.print(f"[yellow]Skipped {name}: {error}[/]")
    if strict and plugin.failures:
        raise typer.Exit(1)


@app.command("validate")
def validate(
    descriptor: Path = typer.Argument(..., help="Deployment descriptor (YAML)"),
):
    """Check the discovery config of a descriptor without calling AWS"""
    try:
        desc = load_descriptor(descriptor)
        plugin = VPCDiscoveryPlugin(desc, context=None)
        errors = plugin.validate_functions()
    except VPCDiscoveryError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    if errors:
        for name, error in errors.items():
            console.print(f"[red]{name}: {error}[/]")
        raise typer.Exit(1)
    console.print(
        f"[green]VPC discovery config is valid for {len(desc.functions)} function(s)[/]"
    )


if __name__ == "__main__":
    app()
