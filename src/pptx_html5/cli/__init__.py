from __future__ import annotations

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import AppConfig, dump_config, load_config
from ..core import ConversionService
from ..errors import ConversionFailedError
from ..settings import ENV_PREFIX

console = Console()

app = typer.Typer(help="Convert PPTX presentations into HTML5 slideshows")


def _load_config(path: Path | None) -> AppConfig:
    return load_config(path)


@app.command()
def convert(
    file: Path = typer.Argument(..., help="PPTX file to convert"),
    output: Path = typer.Option(Path("./output"), "--output", "-o", help="Output directory for HTML5 files"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    if not file.exists():
        console.print(f"[red]Error[/red]: Input file {file} does not exist")
        raise typer.Exit(1)
    cfg = _load_config(config)
    service = ConversionService(cfg)
    console.print(f"Converting {file} to HTML5...")
    try:
        result = service.convert(file, output)
    except ConversionFailedError as exc:
        console.print(f"[red]Conversion failed[/red]: {exc.code} - {exc.cause}")
        raise typer.Exit(1) from exc

    table = Table(title="Conversion result")
    table.add_column("Field")
    table.add_column("Value")
    for key, value in result.to_payload().items():
        rendered = ", ".join(value) if isinstance(value, list) else str(value)
        table.add_row(key, rendered or "-")
    console.print("[green]Conversion completed successfully![/green]")
    console.print(table)
    console.print(f"Output saved to: {result.output_directory}")
    for warning in result.warnings:
        console.print(f"[yellow]Warning[/yellow]: {warning}")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind the service to"),
    port: int | None = typer.Option(None, "--port", "-p", min=1, help="Port to run the service on"),
    dev: bool = typer.Option(False, "--dev", help="Run in development mode (auto-reload)"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    import uvicorn

    from ..api import create_app

    cfg = _load_config(config)
    cfg.runtime.enable_local_api = True
    bind_host = host or cfg.api.host
    bind_port = port or cfg.api.port
    console.print(f"PPTX to HTML5 Converter Service is running on http://{bind_host}:{bind_port}")
    console.print(f"Development mode: {'enabled' if dev else 'disabled'}")
    if dev:
        # The reloader imports main:app in a fresh process; hand the overrides over through the environment.
        if config is not None:
            os.environ[f"{ENV_PREFIX}CONFIG_PATH"] = str(config.resolve())
        os.environ[f"{ENV_PREFIX}ENABLE_LOCAL_API"] = "true"
        os.environ[f"{ENV_PREFIX}HOST"] = bind_host
        os.environ[f"{ENV_PREFIX}PORT"] = str(bind_port)
        uvicorn.run("main:app", host=bind_host, port=bind_port, reload=True)
    else:
        uvicorn.run(create_app(cfg), host=bind_host, port=bind_port)


@app.command()
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    console.print_json(dump_config(_load_config(config)))


if __name__ == "__main__":
    app()
