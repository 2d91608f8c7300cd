# blurthing/__main__.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from blurthing.app.event_bus import EventBus
from blurthing.app.intents import Commit, LoadImage, SetField
from blurthing.app.orchestrator import Orchestrator
from blurthing.app.services.files import UnsupportedFileType, load_image, save_image
from blurthing.config import dump_config, load_config
from blurthing.core.params import RANGES, ParamSnapshot

app = typer.Typer(help="BlurThing CLI")

log = logging.getLogger("blurthing")


def setup_logging(verbosity: int = 0) -> None:
    level = [logging.WARNING, logging.INFO, logging.DEBUG][min(verbosity, 2)]
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )


@app.command("hash")
def hash_cmd(
    image: Path = typer.Argument(..., exists=True, file_okay=True, dir_okay=False, readable=True),
    x: int = typer.Option(4, "--x", help="Horizontal components (1-8)"),
    y: int = typer.Option(3, "--y", help="Vertical components (1-8)"),
    blur: int = typer.Option(0, help="Blur sigma before hashing (0-32)"),
    hue: int = typer.Option(0, help="Hue rotation in degrees (-180..180)"),
    brightness: int = typer.Option(0, help="Brightness (-100..100), applied x2"),
    contrast: int = typer.Option(0, help="Contrast (-100..100)"),
    preview: Optional[Path] = typer.Option(None, help="Write the decoded preview to this file"),
    export: Optional[Path] = typer.Option(None, help="Write a large render to this file"),
    size: Optional[int] = typer.Option(None, help="Export size in px (default from config)"),
    config: Optional[Path] = typer.Option(None, help="YAML/JSON config file"),
    as_json: bool = typer.Option(False, "--json", help="Print hash and params as JSON"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True),
):
    """Compute the blurhash of IMAGE with the given parameters."""
    setup_logging(verbose)
    cfg = load_config(config)
    params = ParamSnapshot(components=(x, y), blur=blur, hue_rotate=hue,
                           brightness=brightness, contrast=contrast)
    try:
        params.validate()
    except ValueError as ex:
        raise typer.BadParameter(str(ex)) from ex

    bus = EventBus()
    bus.subscribe("compute.error", lambda _t, d: log.error(d.get("error")))
    orch = Orchestrator(cfg, bus=bus)
    session = orch.new_session()

    try:
        buffer = load_image(image, cfg)
    except (UnsupportedFileType, OSError) as ex:
        typer.echo(f"failed to load image: {ex}", err=True)
        raise typer.Exit(code=2)

    err = orch.dispatch(session, LoadImage(buffer, path=str(image)))
    for name in ("components", "blur", "hue_rotate", "brightness", "contrast"):
        value = params.get(name)
        if err is None and value != session.params.get(name):
            err = orch.dispatch(session, SetField(name, value))
    if err is not None or session.computed is None:
        typer.echo(err or "failed to compute blurhash", err=True)
        raise typer.Exit(code=1)
    orch.dispatch(session, Commit())

    if preview:
        save_image(session.computed.preview, preview, cfg)
    if export:
        result, err = orch.export_checked(session, size)
        if result is None:
            typer.echo(err, err=True)
            raise typer.Exit(code=1)
        save_image(result.preview, export, cfg)

    if as_json:
        typer.echo(json.dumps({"hash": session.computed.hash, "params": session.params.to_dict()}, indent=2))
    else:
        typer.echo(session.computed.hash)


@app.command("params")
def params_cmd():
    """Print default parameters and their ranges."""
    typer.echo(json.dumps({
        "defaults": ParamSnapshot().to_dict(),
        "ranges": {k: list(v) for k, v in RANGES.items()},
    }, indent=2))


@app.command("config")
def config_cmd(config: Optional[Path] = typer.Option(None, help="YAML/JSON config file")):
    """Print the effective configuration as YAML."""
    typer.echo(dump_config(load_config(config)), nl=False)


if __name__ == "__main__":
    app()
