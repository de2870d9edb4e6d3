"""
Command-line interface for High5.
This module provides the CLI commands for serving the API and inspecting definitions.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, cast

import typer
import uvicorn
from rich.console import Console
from rich.logging import RichHandler

from high5.builder import build_envelope
from high5.env import High5Env, env
from high5.interpreter import Interpreter

cli = typer.Typer(
	name="high5",
	help="High5 - declarative UI definitions for an AI assistant",
	no_args_is_help=True,
)


def setup_logging(level: str | None = None) -> None:
	logging.basicConfig(
		level=(level or env.log_level).upper(),
		format="%(message)s",
		datefmt="[%X]",
		handlers=[RichHandler(rich_tracebacks=True)],
		force=True,
	)


@cli.command("serve")
def serve(
	address: str | None = typer.Option(
		None, "--bind-address", help="Host uvicorn binds to (default: HIGH5_HOST)"
	),
	port: int | None = typer.Option(
		None, "--bind-port", help="Port uvicorn binds to (default: HIGH5_PORT)"
	),
	# Env flags
	dev: bool = typer.Option(False, "--dev", help="Run in development env"),
	prod: bool = typer.Option(False, "--prod", help="Run in production env"),
	reload: bool = typer.Option(False, "--reload"),
):
	"""Run the High5 API server."""
	if dev and prod:
		typer.echo("❌ Please specify only one of --dev or --prod.")
		raise typer.Exit(1)
	if dev or prod:
		env.high5_env = cast(High5Env, "dev" if dev else "prod")

	setup_logging()
	host = address or env.host
	bind_port = port or env.port
	console = Console()
	console.log(f"🚀 Serving High5 API on [cyan]http://{host}:{bind_port}[/cyan]")
	uvicorn.run(
		"high5.server:create_app",
		factory=True,
		host=host,
		port=bind_port,
		reload=reload,
		log_level=env.log_level.lower(),
	)


@cli.command("build")
def build(
	archetype: str = typer.Argument(
		..., help="Archetype to build: form, dashboard, chart or table"
	),
	params: str = typer.Option("{}", "--params", help="Builder parameters as JSON"),
):
	"""Print the server-rendered definition for an archetype."""
	console = Console()
	parameters = _load_json(params, console, "--params")
	if not isinstance(parameters, dict):
		console.log("❌ --params must be a JSON object")
		raise typer.Exit(1)
	console.print_json(data=build_envelope(archetype, cast(dict[str, Any], parameters)))


@cli.command("render")
def render(
	definition_file: Path = typer.Argument(
		..., exists=True, dir_okay=False, help="JSON definition or envelope"
	),
):
	"""Mount a definition file and print the rendered VDOM."""
	setup_logging()
	console = Console()
	definition = _load_json(definition_file.read_text(), console, str(definition_file))
	mount = Interpreter().mount(definition)
	if mount is None:
		console.log("Nothing to render")
		raise typer.Exit(0)
	console.print_json(data=mount.vdom)
	for diagnostic in mount.errors.diagnostics:
		console.log(f"⚠️  [yellow]{diagnostic.code}[/yellow] {diagnostic.message}")
	if mount.callbacks:
		console.log(f"Callbacks: {', '.join(mount.callbacks)}")


def _load_json(text: str, console: Console, source: str) -> Any:
	try:
		return json.loads(text)
	except json.JSONDecodeError as exc:
		console.log(f"❌ Invalid JSON in {source}: {exc}")
		raise typer.Exit(1) from None


def main():
	cli()


if __name__ == "__main__":
	main()
