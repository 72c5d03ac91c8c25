"""URL builders for catalog images, trailers, and provider pages."""

from __future__ import annotations

import logging
from collections.abc import Callable

import typer

from movie_browser.config.settings import DEFAULT_IMAGE_BASE_URL

logger = logging.getLogger(__name__)

POSTER_SIZE = "w500"
LOGO_SIZE = "w200"

YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{key}"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={key}"
PROVIDER_WATCH_URL = "https://www.themoviedb.org/movie/{movie_id}/watch"

LinkOpener = Callable[[str], object]


def image_url(path: str | None, size: str, *, base: str = DEFAULT_IMAGE_BASE_URL) -> str | None:
    if not path:
        return None
    return f"{base.rstrip('/')}/{size}{path}"


def trailer_embed_url(key: str) -> str:
    return YOUTUBE_EMBED_URL.format(key=key)


def trailer_watch_url(key: str) -> str:
    return YOUTUBE_WATCH_URL.format(key=key)


def provider_watch_url(movie_id: int) -> str:
    return PROVIDER_WATCH_URL.format(movie_id=movie_id)


def open_external(url: str) -> None:
    """Hand ``url`` to the platform's default link handler and move on."""
    logger.debug(f"Opening external page {url}")
    typer.launch(url)


__all__ = [
    "LOGO_SIZE",
    "POSTER_SIZE",
    "LinkOpener",
    "image_url",
    "open_external",
    "provider_watch_url",
    "trailer_embed_url",
    "trailer_watch_url",
]
