# scripts/replay_session.py
"""CLI for replaying recorded editing sessions and rendering the result."""
from __future__ import annotations

import sys
from pathlib import Path

import click
from loguru import logger
from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wallmaker.editor import WallEditor
from wallmaker.events import Session
from wallmaker.renderer import IntentRenderer, RenderConfig, fit_viewport
from wallmaker.viewport import Viewport


def replay(session: Session) -> WallEditor:
    editor = WallEditor(
        config=session.config,
        walls=session.walls,
        doors=session.doors,
        viewport=Viewport(width=session.width, height=session.height),
    )
    for event in session.events:
        editor.dispatch(event)
    return editor


def collect_sessions(path: Path) -> list[Path]:
    if path.is_dir():
        return sorted(path.glob("*.json"))
    return [path]


@click.command()
@click.option("--input", "input_path", type=click.Path(exists=True), required=True,
              help="Session JSON file or a directory of them")
@click.option("--output-dir", type=click.Path(), required=True, help="Output directory for PNG files")
@click.option("--width", type=int, default=None, help="Image width (defaults to the session's)")
@click.option("--height", type=int, default=None, help="Image height (defaults to the session's)")
@click.option("--fit/--no-fit", default=False, help="Frame all walls instead of the session viewport")
@click.option("--verbose", is_flag=True, help="Log editor decisions")
def cli(input_path, output_dir, width, height, fit, verbose):
    """Replay wall/door editing sessions and render the final scene."""
    logger.remove()
    logger.add(lambda msg: click.echo(msg, err=True, nl=False), level="DEBUG" if verbose else "WARNING")

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    files = collect_sessions(Path(input_path))
    if not files:
        click.echo("No session files found.")
        return

    for path in tqdm(files, desc="Replaying", disable=len(files) < 2):
        session = Session.model_validate_json(path.read_text())
        editor = replay(session)

        cfg = RenderConfig(
            width=width or int(session.width),
            height=height or int(session.height),
        )
        viewport = (
            fit_viewport(editor.walls, cfg.width, cfg.height, cfg.margin)
            if fit else editor.viewport
        )
        img = IntentRenderer(cfg).render(editor.scene(), viewport)
        img.save(out / f"{path.stem}.png")
        click.echo(f"{path.stem}: {len(editor.walls)} walls, {len(editor.doors)} doors")

    click.echo(f"Rendered {len(files)} sessions to {out}")


if __name__ == "__main__":
    cli()
