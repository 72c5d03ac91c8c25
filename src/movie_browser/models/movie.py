from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator

TRAILER_VIDEO_TYPE = "Trailer"


class MovieSummary(BaseModel):
    """A single catalog entry as returned by the search and list endpoints."""

    id: int
    title: str
    poster_path: str | None = None
    release_date: date | None = None
    vote_average: float = 0.0
    overview: str = ""

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("release_date", mode="before")
    @classmethod
    def _unparseable_date_is_missing(cls, value: Any) -> Any:
        # The catalog sends "" for unreleased titles and the odd partial date.
        if value is None or isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value)
            except ValueError:
                return None
        return None

    @field_validator("vote_average", mode="before")
    @classmethod
    def _null_vote_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("overview", mode="before")
    @classmethod
    def _null_overview_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def year(self) -> int | None:
        """Convenience accessor for the release year."""
        return self.release_date.year if self.release_date else None


class Video(BaseModel):
    key: str
    type: str
    site: str | None = None
    name: str | None = None

    model_config = {"extra": "ignore", "frozen": True}


class WatchProvider(BaseModel):
    """A flatrate (subscription) streaming service offering a title."""

    provider_id: int
    provider_name: str
    logo_path: str | None = None

    model_config = {"extra": "ignore", "frozen": True}


class VideoList(BaseModel):
    results: list[Video] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class RegionProviders(BaseModel):
    flatrate: list[WatchProvider] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class WatchProviderResults(BaseModel):
    results: dict[str, RegionProviders] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}


class MovieDetail(MovieSummary):
    """Detail payload fetched with ``append_to_response=videos,watch/providers``."""

    videos: VideoList = Field(default_factory=VideoList)
    watch_providers: WatchProviderResults = Field(
        default_factory=WatchProviderResults,
        alias="watch/providers",
    )

    def trailer_key(self) -> str | None:
        """Return the key of the first video typed exactly ``Trailer``."""
        for video in self.videos.results:
            if video.type == TRAILER_VIDEO_TYPE:
                return video.key
        return None

    def flatrate_providers(self, region: str) -> list[WatchProvider]:
        region_providers = self.watch_providers.results.get(region)
        if region_providers is None:
            return []
        return list(region_providers.flatrate)


class MovieListResponse(BaseModel):
    """Envelope shared by the search and popular endpoints."""

    results: list[MovieSummary]

    model_config = {"extra": "ignore"}


class ViewState(BaseModel):
    """Everything the screen needs to render itself."""

    query: str = ""
    movies: list[MovieSummary] = Field(default_factory=list)
    loading: bool = False
    error: str | None = None
    selected_movie: MovieSummary | None = None
    modal_open: bool = False
    trailer_key: str | None = None
    providers: list[WatchProvider] = Field(default_factory=list)


__all__ = [
    "MovieDetail",
    "MovieListResponse",
    "MovieSummary",
    "RegionProviders",
    "Video",
    "VideoList",
    "ViewState",
    "WatchProvider",
    "WatchProviderResults",
]
