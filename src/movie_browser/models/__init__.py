from .movie import (
    MovieDetail,
    MovieListResponse,
    MovieSummary,
    Video,
    ViewState,
    WatchProvider,
)

__all__ = [
    "MovieDetail",
    "MovieListResponse",
    "MovieSummary",
    "Video",
    "ViewState",
    "WatchProvider",
]
