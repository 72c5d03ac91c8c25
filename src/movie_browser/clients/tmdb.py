from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

import httpx
from pydantic import ValidationError

from movie_browser import __version__
from movie_browser.config.settings import DEFAULT_BASE_URL
from movie_browser.models import MovieDetail, MovieListResponse, MovieSummary

logger = logging.getLogger(__name__)

USER_AGENT = f"movie-browser/{__version__}"
DETAIL_APPENDS = "videos,watch/providers"


class CatalogError(RuntimeError):
    """Raised when a catalog request fails for any reason."""


class TMDBClient:
    """Thin asynchronous wrapper around the read-only TMDB v3 endpoints."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
    ) -> None:
        self._api_key = api_key
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def search_movies(self, query: str) -> list[MovieSummary]:
        payload = await self._get_json("/search/movie", {"query": query})
        return self._parse_list(payload)

    async def popular_movies(self) -> list[MovieSummary]:
        payload = await self._get_json("/movie/popular")
        return self._parse_list(payload)

    async def movie_details(self, movie_id: int) -> MovieDetail:
        """Fetch a title together with its videos and watch providers.

        Args:
            movie_id: The Movie Database ID

        Returns:
            Parsed detail payload
        """
        payload = await self._get_json(
            f"/movie/{movie_id}",
            {"append_to_response": DETAIL_APPENDS},
        )
        try:
            return MovieDetail.model_validate(payload)
        except ValidationError as exc:
            raise CatalogError(f"Malformed detail payload for movie {movie_id}") from exc

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        query = {"api_key": self._api_key, **(params or {})}
        logger.debug(f"GET {path}")
        try:
            response = await self._client.get(path, params=query)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise CatalogError(f"{path} returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise CatalogError(f"{path} request failed: {exc.__class__.__name__}") from exc
        except ValueError as exc:  # body was not JSON
            raise CatalogError(f"{path} returned a non-JSON body") from exc

    @staticmethod
    def _parse_list(payload: Any) -> list[MovieSummary]:
        try:
            return MovieListResponse.model_validate(payload).results
        except ValidationError as exc:
            raise CatalogError("Malformed movie list payload") from exc

    async def __aenter__(self) -> TMDBClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.close()


@asynccontextmanager
async def tmdb_client(
    api_key: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float | None = None,
):
    client = TMDBClient(api_key=api_key, base_url=base_url, timeout=timeout)
    try:
        yield client
    finally:
        await client.close()


__all__ = ["CatalogError", "TMDBClient", "tmdb_client"]
