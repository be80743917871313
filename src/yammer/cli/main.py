"""yammer command line.

Scaffold docker compose files by composing services picked out of compose
files in GitHub repositories:

    yammer omnivore-app/omnivore+main:docker-compose.yml@redis,x-postgres -o docker-compose.yml
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import typer
from rich.console import Console
from rich.logging import RichHandler

from yammer import __version__
from yammer.adapters.compose_writer import read_existing_compose, write_compose_file
from yammer.adapters.github_fetcher import GitHubRawFetcher
from yammer.adapters.http_client import build_async_client
from yammer.adapters.yaml_codec import dump_document, load_document
from yammer.cli.ui_components import print_error, print_written
from yammer.core.config import AppSettings
from yammer.core.domain.errors import YammerError
from yammer.core.domain.models import CompositeDocument, ConflictPolicy, Selector
from yammer.core.merge import build_document_tree, seed_composite
from yammer.core.selectors import parse_selectors
from yammer.core.services.compose_pipeline import ComposeRequest, PipelineHooks, compose

app = typer.Typer(
    add_completion=False,
    help="Scaffold docker compose files by composing services from compose files on GitHub.",
)

_console = Console()
_err_console = Console(stderr=True)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False, rich_tracebacks=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"yammer {__version__}")
        raise typer.Exit()


async def _compose(
    settings: AppSettings,
    selectors: Sequence[Selector],
    *,
    policy: ConflictPolicy,
    base: CompositeDocument | None,
    show_progress: bool,
) -> CompositeDocument:
    request = ComposeRequest(
        selectors=selectors,
        policy=policy,
        max_concurrency=settings.max_concurrency,
        base=base,
    )
    async with build_async_client(settings) as client:
        fetcher = GitHubRawFetcher(settings, client=client)
        if not show_progress:
            result = await compose(fetcher=fetcher, parser=load_document, request=request)
            return result.composite

        total = len(selectors)
        with _err_console.status(f"Fetching {total} compose file(s)...") as status:

            def resolved(selector: Selector, done: int) -> None:
                status.update(f"Fetched {done}/{total}: {selector}")

            result = await compose(
                fetcher=fetcher,
                parser=load_document,
                request=request,
                hooks=PipelineHooks(resolved=resolved),
            )
        return result.composite


@app.command()
def main(
    selectors: List[str] = typer.Argument(
        ...,
        metavar="SELECTOR...",
        help=(
            "Compose file selectors: owner/repo+ref:path@name1,name2 "
            "(e.g. omnivore-app/omnivore+main:docker-compose.yml@redis,x-postgres)."
        ),
        show_default=False,
    ),
    output: Path = typer.Option(
        Path("docker-compose.yml"),
        "--output",
        "-o",
        help="Path of the docker compose file to write.",
    ),
    update: bool = typer.Option(
        False,
        "--update/--no-update",
        help="Keep services and x- fields already in the output file; selectors replace same names.",
    ),
    on_conflict: Optional[ConflictPolicy] = typer.Option(
        None,
        "--on-conflict",
        case_sensitive=False,
        help="When two selectors define the same name differently: fail (default) or keep the last one.",
        show_default=False,
    ),
    to_stdout: bool = typer.Option(False, "--stdout", help="Print the composed file instead of writing it."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No progress or summary output."),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="More logging (-v info, -vv debug)."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Compose the requested services into one docker compose file."""

    configure_logging(verbose)
    settings = AppSettings()
    policy = on_conflict or settings.on_conflict

    try:
        parsed = parse_selectors(selectors)

        base = None
        if update and output.exists():
            base = seed_composite(read_existing_compose(output), source=f"existing:{output}")

        composite = asyncio.run(
            _compose(
                settings,
                parsed,
                policy=policy,
                base=base,
                show_progress=not quiet and not to_stdout,
            )
        )
        text = dump_document(build_document_tree(composite))
    except YammerError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        print_error(_err_console, f"could not read {output}: {exc}")
        raise typer.Exit(code=1) from exc

    if to_stdout:
        typer.echo(text, nl=False)
        return

    try:
        write_compose_file(text=text, output_path=output)
    except OSError as exc:
        print_error(_err_console, f"could not write {output}: {exc}")
        raise typer.Exit(code=1) from exc

    if not quiet:
        print_written(_console, output, composite)


def run() -> None:
    app()
