"""View-state controller for the search / browse / detail screen."""

from __future__ import annotations

import logging
from collections.abc import Coroutine
from typing import Any

from movie_browser.clients.tmdb import CatalogError, TMDBClient
from movie_browser.links import LinkOpener, open_external, provider_watch_url, trailer_watch_url
from movie_browser.models import MovieSummary, ViewState

logger = logging.getLogger(__name__)

SEARCH_ERROR_MESSAGE = "Failed to fetch movies"
POPULAR_ERROR_MESSAGE = "Failed to fetch popular movies"
DEFAULT_WATCH_REGION = "US"


class ViewStateController:
    """Owns the screen's view state and the requests that mutate it.

    Overlapping list requests are not serialized: whichever response settles
    last determines ``movies``/``error``. Detail responses are likewise applied
    even if the detail view was closed or another title opened meanwhile.
    """

    def __init__(
        self,
        client: TMDBClient,
        *,
        region: str = DEFAULT_WATCH_REGION,
        opener: LinkOpener = open_external,
        state: ViewState | None = None,
    ) -> None:
        self._client = client
        self._region = region
        self._opener = opener
        self._state = state if state is not None else ViewState()

    @property
    def state(self) -> ViewState:
        return self._state

    def set_query(self, text: str) -> None:
        self._state.query = text

    async def search(self, query: str | None = None) -> None:
        """Replace the result list with catalog matches for ``query``.

        Falls back to the stored query text. An empty query is a no-op.
        """
        text = self._state.query if query is None else query
        if not text:
            return

        logger.debug(f"Searching catalog for {text!r}")
        self._state.loading = True
        try:
            movies = await self._client.search_movies(text)
        except CatalogError:
            logger.debug("Search request failed", exc_info=True)
            self._state.error = SEARCH_ERROR_MESSAGE
        else:
            self._state.movies = movies
            self._state.error = None
        finally:
            self._state.loading = False

    async def list_popular(self) -> None:
        logger.debug("Fetching popular titles")
        self._state.loading = True
        try:
            movies = await self._client.popular_movies()
        except CatalogError:
            logger.debug("Popular request failed", exc_info=True)
            self._state.error = POPULAR_ERROR_MESSAGE
        else:
            self._state.movies = movies
            self._state.error = None
        finally:
            self._state.loading = False

    def open_detail(self, movie: MovieSummary) -> Coroutine[Any, Any, None]:
        """Show the detail view for ``movie`` and return the coroutine that loads it.

        The view opens, and stale detail is cleared, before this returns; the
        caller awaits or schedules the returned ``load_detail`` coroutine.
        """
        if movie not in self._state.movies:
            raise ValueError(f"Movie {movie.id} is not in the current result list")

        self._state.selected_movie = movie
        self._state.modal_open = True
        self._state.trailer_key = None
        self._state.providers = []
        return self.load_detail(movie)

    async def load_detail(self, movie: MovieSummary) -> None:
        """Fetch trailer and providers for ``movie``. Failures are logged only."""
        try:
            detail = await self._client.movie_details(movie.id)
        except CatalogError:
            logger.exception(f"Error fetching details for movie {movie.id}")
            return

        self._state.trailer_key = detail.trailer_key()
        self._state.providers = detail.flatrate_providers(self._region)

    def close_detail(self) -> None:
        self._state.modal_open = False

    def open_trailer(self) -> str | None:
        if not self._state.trailer_key:
            return None
        url = trailer_watch_url(self._state.trailer_key)
        self._opener(url)
        return url

    def open_provider_page(self) -> str | None:
        if self._state.selected_movie is None:
            return None
        url = provider_watch_url(self._state.selected_movie.id)
        self._opener(url)
        return url


__all__ = [
    "POPULAR_ERROR_MESSAGE",
    "SEARCH_ERROR_MESSAGE",
    "ViewStateController",
]
