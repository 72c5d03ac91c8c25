from __future__ import annotations

import asyncio
import logging
from typing import Any

import typer

from movie_browser import __version__
from movie_browser.clients.tmdb import TMDBClient
from movie_browser.config import Settings, SettingsError, SettingsLoadResult, load_settings
from movie_browser.presentation import render_list, render_screen
from movie_browser.services.controller import ViewStateController

app = typer.Typer(
    add_completion=False,
    help="Search the TMDB catalog, browse popular titles, and inspect trailers and providers.",
)

BROWSE_HELP = (
    "Commands: s <text> search | p popular | o <n> open result | "
    "t trailer | w where to watch | c close | q quit"
)


@app.callback()
def _cli_entry(ctx: typer.Context) -> None:
    """Entrypoint for the movie-browser CLI."""
    ctx.obj = {} if ctx.obj is None else ctx.obj


@app.command()
def version() -> None:
    """Print the installed version."""
    typer.echo(__version__)


@app.command()
def config(show_sources: bool = typer.Option(False, help="Display where settings came from.")) -> None:
    """Describe configuration expectations."""
    load_result = _safe_load_settings(load_even_if_missing=True)
    if load_result is None:
        raise typer.Exit(code=1)

    settings = load_result.settings
    values: dict[str, Any] = {
        "tmdb_api_key": "<set>" if settings.tmdb_api_key else "<unset>",
        "tmdb_base_url": settings.tmdb_base_url,
        "image_base_url": settings.image_base_url,
        "watch_region": settings.watch_region,
        "request_timeout": settings.request_timeout if settings.request_timeout else "<none>",
        "poster_size": settings.poster_size,
        "logo_size": settings.logo_size,
    }

    for key, value in values.items():
        typer.echo(f"{key}: {value}")

    if show_sources:
        source_hint = load_result.source_path or "<env/.env>"
        typer.echo(f"resolved_from: {source_hint}")
        typer.echo(
            "Set TMDB_API_KEY or configure ~/.config/movie-browser/config.toml"
            " for persistent settings.",
        )


@app.command()
def search(
    query: str = typer.Argument(..., help="Title text to search for."),
    debug: bool = typer.Option(False, help="Enable debug logging."),
) -> None:
    """Search the catalog and print matching titles."""
    if debug:
        _setup_logging(logging.DEBUG)

    settings = _require_settings()
    exit_code = asyncio.run(_run_list(settings, query=query))
    raise typer.Exit(code=exit_code)


@app.command()
def popular(debug: bool = typer.Option(False, help="Enable debug logging.")) -> None:
    """Print the catalog's current popular titles."""
    if debug:
        _setup_logging(logging.DEBUG)

    settings = _require_settings()
    exit_code = asyncio.run(_run_list(settings, query=None))
    raise typer.Exit(code=exit_code)


@app.command()
def browse(debug: bool = typer.Option(False, help="Enable debug logging.")) -> None:
    """Interactive search / browse / detail screen."""
    if debug:
        _setup_logging(logging.DEBUG)

    settings = _require_settings()
    asyncio.run(_run_browse(settings))


def main() -> None:
    """Expose Typer app for the console script."""
    app()


def _safe_load_settings(load_even_if_missing: bool = False) -> SettingsLoadResult | None:
    try:
        return load_settings()
    except SettingsError as exc:
        if load_even_if_missing:
            typer.secho(
                f"Warning: configuration incomplete – {exc}",
                fg=typer.colors.YELLOW,
            )
            return SettingsLoadResult(settings=Settings(), source_path=None)
        typer.secho(str(exc), fg=typer.colors.RED)
        return None


def _require_settings() -> Settings:
    load_result = _safe_load_settings()
    if load_result is None:
        raise typer.Exit(code=1)
    return load_result.settings


def _setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for debug mode."""
    logging.basicConfig(
        format="%(message)s",
        level=level,
        force=True,
    )


def _build_controller(settings: Settings, client: TMDBClient) -> ViewStateController:
    return ViewStateController(client, region=settings.watch_region)


def _detail_options(settings: Settings) -> dict[str, str]:
    return {
        "image_base": settings.image_base_url,
        "poster_size": settings.poster_size,
        "logo_size": settings.logo_size,
    }


async def _run_list(settings: Settings, *, query: str | None) -> int:
    async with TMDBClient(
        api_key=settings.api_key,
        base_url=settings.tmdb_base_url,
        timeout=settings.request_timeout,
    ) as client:
        controller = _build_controller(settings, client)
        if query is None:
            await controller.list_popular()
        else:
            await controller.search(query)

    state = controller.state
    if state.error:
        typer.secho(state.error, fg=typer.colors.RED)
        return 1
    for line in render_list(state):
        typer.echo(line)
    return 0


async def _run_browse(settings: Settings) -> None:
    detail_options = _detail_options(settings)
    async with TMDBClient(
        api_key=settings.api_key,
        base_url=settings.tmdb_base_url,
        timeout=settings.request_timeout,
    ) as client:
        controller = _build_controller(settings, client)
        typer.secho(BROWSE_HELP, fg=typer.colors.CYAN)
        while True:
            raw = await asyncio.to_thread(typer.prompt, ">", default="", show_default=False)
            command, _, argument = raw.strip().partition(" ")
            argument = argument.strip()

            if command == "q":
                break
            if command == "s":
                controller.set_query(argument)
                await controller.search()
            elif command == "p":
                await controller.list_popular()
            elif command == "o":
                movie = _pick_movie(controller, argument)
                if movie is None:
                    continue
                await controller.open_detail(movie)
            elif command == "c":
                controller.close_detail()
            elif command == "t":
                if controller.open_trailer() is None:
                    typer.secho("No trailer available", fg=typer.colors.YELLOW)
                continue
            elif command == "w":
                if controller.open_provider_page() is None:
                    typer.secho("Open a movie first.", fg=typer.colors.YELLOW)
                continue
            else:
                typer.secho(BROWSE_HELP, fg=typer.colors.YELLOW)
                continue

            _print_screen(controller, detail_options)


def _pick_movie(controller: ViewStateController, argument: str):
    movies = controller.state.movies
    try:
        index = int(argument)
    except ValueError:
        typer.secho("Usage: o <result number>", fg=typer.colors.YELLOW)
        return None
    if not 1 <= index <= len(movies):
        typer.secho(f"No result numbered {index}.", fg=typer.colors.YELLOW)
        return None
    return movies[index - 1]


def _print_screen(controller: ViewStateController, detail_options: dict[str, str]) -> None:
    state = controller.state
    color = typer.colors.RED if state.error and not state.modal_open else None
    for line in render_screen(state, **detail_options):
        typer.secho(line, fg=color)


if __name__ == "__main__":
    main()
