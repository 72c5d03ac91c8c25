from __future__ import annotations

from movie_browser.config.settings import DEFAULT_IMAGE_BASE_URL
from movie_browser.links import (
    LOGO_SIZE,
    POSTER_SIZE,
    image_url,
    trailer_embed_url,
    trailer_watch_url,
)
from movie_browser.models import MovieSummary, ViewState

LOADING_TEXT = "Loading..."
EMPTY_LIST_TEXT = "No movies found"
UNKNOWN_YEAR_TEXT = "Unknown year"
NO_TRAILER_TEXT = "No trailer available"
PROVIDERS_HEADING = "Available On:"
DISCLAIMER_TEXT = "This app does not support piracy. Please use official streaming services."


def render_movie_row(movie: MovieSummary) -> str:
    year = movie.year if movie.year is not None else UNKNOWN_YEAR_TEXT
    return f"{movie.title} ({year})"


def render_list(state: ViewState) -> list[str]:
    """Render the result area: spinner, error, or numbered list."""
    if state.loading:
        return [LOADING_TEXT]
    if state.error:
        return [state.error]
    if not state.movies:
        return [EMPTY_LIST_TEXT]
    return [f"{idx}. {render_movie_row(movie)}" for idx, movie in enumerate(state.movies, start=1)]


def render_detail(
    state: ViewState,
    *,
    image_base: str = DEFAULT_IMAGE_BASE_URL,
    poster_size: str = POSTER_SIZE,
    logo_size: str = LOGO_SIZE,
) -> list[str]:
    movie = state.selected_movie
    if not state.modal_open or movie is None:
        return []

    lines: list[str] = []
    poster = image_url(movie.poster_path, poster_size, base=image_base)
    if poster:
        lines.append(f"Poster: {poster}")
    lines.append(movie.title)

    if state.trailer_key:
        lines.append(f"Trailer: {trailer_embed_url(state.trailer_key)}")
        lines.append(f"Watch Full Trailer on YouTube: {trailer_watch_url(state.trailer_key)}")
    else:
        lines.append(NO_TRAILER_TEXT)

    if state.providers:
        lines.append(PROVIDERS_HEADING)
        for provider in state.providers:
            logo = image_url(provider.logo_path, logo_size, base=image_base)
            entry = f"  - {provider.provider_name}"
            if logo:
                entry = f"{entry} ({logo})"
            lines.append(entry)

    if movie.overview:
        lines.append(movie.overview)
    lines.append(f"Rating: {movie.vote_average:g}/10")
    release = movie.release_date.isoformat() if movie.release_date else "Unknown"
    lines.append(f"Release Date: {release}")
    lines.append(DISCLAIMER_TEXT)
    return lines


def render_screen(state: ViewState, **detail_options: str) -> list[str]:
    """Render the detail view when it is open, otherwise the result list."""
    if state.modal_open:
        return render_detail(state, **detail_options)
    return render_list(state)


__all__ = [
    "DISCLAIMER_TEXT",
    "EMPTY_LIST_TEXT",
    "LOADING_TEXT",
    "NO_TRAILER_TEXT",
    "PROVIDERS_HEADING",
    "UNKNOWN_YEAR_TEXT",
    "render_detail",
    "render_list",
    "render_movie_row",
    "render_screen",
]
