from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import humanize
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .reader import SourceReadError, read_bytes
from .source import InvalidSourceError, PathSource, Source, UrlSource, from_token


console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)
app = typer.Typer(add_completion=False, rich_markup_mode="rich")


def configure_logging(log_target: Optional[str], verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("buildsrc")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    logger.handlers.clear()

    if not log_target:
        logger.addHandler(logging.NullHandler())
        return logger

    if log_target in {"-", "--"}:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    else:
        log_path = Path(log_target)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path)
        err_console.print(f"[dim]Logging to {log_path}[/dim]")

    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger


def source_kind(source: Source) -> str:
    if isinstance(source, PathSource):
        return "file"
    if isinstance(source, UrlSource):
        return "url"
    return "memory"


def _resolve(token: str) -> Source:
    try:
        return from_token(token)
    except InvalidSourceError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback()
def _root(
    logfile: Optional[str] = typer.Option(
        None,
        "--logfile",
        envvar="BUILDSRC_LOGFILE",
        help="Path to log file (use '-' for stderr, default: no logging)",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug records"
    ),
):
    """Inspect build input sources (local files or http(s) URLs)."""

    configure_logging(logfile, verbose)


@app.command()
def info(
    tokens: List[str] = typer.Argument(..., metavar="SOURCE..."),
):
    """Show location, kind and size of each source."""

    logger = logging.getLogger("buildsrc")
    failed = 0
    for token in tokens:
        source = _resolve(token)
        kind = source_kind(source)
        try:
            data = read_bytes(source)
        except SourceReadError as exc:
            failed += 1
            console.print(
                f"[red]{'error':<6}[/red] {escape(source.location())} "
                f"[dim]{kind}: {escape(str(exc.cause))}[/dim]"
            )
            logger.error("failed location=%s error=%s", exc.location, exc.cause)
            continue
        console.print(
            f"[green]{'ok':<6}[/green] {escape(source.location())} "
            f"[dim]{kind} • {humanize.naturalsize(len(data))}[/dim]"
        )
        logger.info("ok location=%s kind=%s bytes=%d", source.location(), kind, len(data))

    if failed:
        raise typer.Exit(code=1)


@app.command()
def cat(token: str = typer.Argument(..., metavar="SOURCE")):
    """Write the raw bytes of SOURCE to stdout."""

    source = _resolve(token)
    try:
        data = read_bytes(source)
    except SourceReadError as exc:
        err_console.print(f"[red]Cannot read[/red] {escape(str(exc))}")
        logging.getLogger("buildsrc").error(
            "failed location=%s error=%s", exc.location, exc.cause
        )
        raise typer.Exit(code=1)
    typer.echo(data, nl=False)


def main() -> None:
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
