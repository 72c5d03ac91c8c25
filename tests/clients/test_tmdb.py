"""Tests for TMDB client functionality."""

import pytest
import httpx
import respx

from movie_browser.clients.tmdb import CatalogError, TMDBClient, tmdb_client
from movie_browser.models import MovieDetail, MovieSummary
from tests.fixtures.tmdb_responses import (
    BATMAN_SEARCH_RESPONSE,
    EMPTY_LIST_RESPONSE,
    MIXED_QUALITY_SEARCH_RESPONSE,
    MOVIE_DETAIL_RESPONSE,
    POPULAR_RESPONSE,
    UNAUTHORIZED_RESPONSE,
)

BASE_URL = "https://api.themoviedb.org/3"


@pytest.fixture
def client():
    """Create a TMDBClient instance for testing."""
    return TMDBClient(api_key="test-api-key", base_url=BASE_URL)


class TestTMDBClient:
    """Test cases for TMDBClient."""

    @pytest.mark.asyncio
    async def test_client_initialization(self):
        """Test client is properly initialized with headers and no timeout."""
        client = TMDBClient(api_key="test-key")

        assert client._client.base_url == "https://api.themoviedb.org/3/"
        assert client._client.headers["User-Agent"] == "movie-browser/0.1.0"
        assert client._client.headers["Accept"] == "application/json"
        assert client._client.timeout.read is None

        await client.close()

    @pytest.mark.asyncio
    async def test_client_accepts_configured_timeout(self):
        client = TMDBClient(api_key="test-key", timeout=7.5)

        assert client._client.timeout.read == 7.5
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_movies_success(self, client):
        """Test search returns summaries in server order."""
        respx.get(f"{BASE_URL}/search/movie").mock(
            return_value=httpx.Response(200, json=BATMAN_SEARCH_RESPONSE)
        )

        result = await client.search_movies("batman")

        assert [movie.id for movie in result] == [268, 364, 1234567]
        assert all(isinstance(movie, MovieSummary) for movie in result)
        assert result[0].title == "Batman"
        assert result[0].year == 1989

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_keeps_rows_with_imperfect_optional_fields(self, client):
        """Test that one odd row does not invalidate the whole result list."""
        respx.get(f"{BASE_URL}/search/movie").mock(
            return_value=httpx.Response(200, json=MIXED_QUALITY_SEARCH_RESPONSE)
        )

        result = await client.search_movies("batman")

        assert [movie.id for movie in result] == [268, 2, 3]
        assert result[1].release_date is None
        assert result[1].vote_average == 0.0

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_movies_sends_key_and_query(self, client):
        """Test that search sends the api key and query as parameters."""
        mock_route = respx.get(f"{BASE_URL}/search/movie").mock(
            return_value=httpx.Response(200, json=EMPTY_LIST_RESPONSE)
        )

        await client.search_movies("the dark knight")

        assert mock_route.call_count == 1
        request = mock_route.calls[0].request
        assert request.url.params["api_key"] == "test-api-key"
        assert request.url.params["query"] == "the dark knight"

    @pytest.mark.asyncio
    @respx.mock
    async def test_popular_movies(self, client):
        mock_route = respx.get(f"{BASE_URL}/movie/popular").mock(
            return_value=httpx.Response(200, json=POPULAR_RESPONSE)
        )

        result = await client.popular_movies()

        assert [movie.title for movie in result] == ["Dune: Part Two", "The Matrix"]
        request = mock_route.calls[0].request
        assert request.url.params["api_key"] == "test-api-key"
        assert "query" not in request.url.params

    @pytest.mark.asyncio
    @respx.mock
    async def test_movie_details_requests_appends(self, client):
        mock_route = respx.get(f"{BASE_URL}/movie/268").mock(
            return_value=httpx.Response(200, json=MOVIE_DETAIL_RESPONSE)
        )

        detail = await client.movie_details(268)

        assert isinstance(detail, MovieDetail)
        assert detail.trailer_key() == "dgC9Q0uhX70"
        request = mock_route.calls[0].request
        assert request.url.params["append_to_response"] == "videos,watch/providers"
        assert request.url.params["api_key"] == "test-api-key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_is_wrapped(self, client):
        """Test that an HTTP error status surfaces as CatalogError."""
        respx.get(f"{BASE_URL}/movie/popular").mock(
            return_value=httpx.Response(401, json=UNAUTHORIZED_RESPONSE)
        )

        with pytest.raises(CatalogError, match="HTTP 401") as excinfo:
            await client.popular_movies()

        assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_is_wrapped(self, client):
        respx.get(f"{BASE_URL}/search/movie").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        with pytest.raises(CatalogError) as excinfo:
            await client.search_movies("batman")

        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_body_is_wrapped(self, client):
        respx.get(f"{BASE_URL}/search/movie").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        with pytest.raises(CatalogError, match="non-JSON"):
            await client.search_movies("batman")

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_without_results_is_malformed(self, client):
        respx.get(f"{BASE_URL}/movie/popular").mock(
            return_value=httpx.Response(200, json={"page": 1})
        )

        with pytest.raises(CatalogError, match="Malformed movie list"):
            await client.popular_movies()

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_detail_is_wrapped(self, client):
        respx.get(f"{BASE_URL}/movie/5").mock(
            return_value=httpx.Response(200, json={"id": "not-a-number"})
        )

        with pytest.raises(CatalogError, match="movie 5"):
            await client.movie_details(5)

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_retry_on_failure(self, client):
        mock_route = respx.get(f"{BASE_URL}/movie/popular").mock(
            return_value=httpx.Response(503, json={})
        )

        with pytest.raises(CatalogError):
            await client.popular_movies()

        assert mock_route.call_count == 1

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self):
        async with TMDBClient(api_key="test-key") as client:
            assert not client._client.is_closed

        assert client._client.is_closed


class TestTMDBClientContextManager:
    """Test the tmdb_client async context manager."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_tmdb_client_context_manager(self):
        respx.get(f"{BASE_URL}/movie/popular").mock(
            return_value=httpx.Response(200, json=POPULAR_RESPONSE)
        )

        async with tmdb_client(api_key="test-key", base_url=BASE_URL) as client:
            result = await client.popular_movies()
            assert len(result) == 2

        assert client._client.is_closed
