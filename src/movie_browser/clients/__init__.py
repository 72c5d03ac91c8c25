from .tmdb import CatalogError, TMDBClient, tmdb_client

__all__ = ["CatalogError", "TMDBClient", "tmdb_client"]
