"""Tests for HttpClient."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from rwanda_cinema.utils.http_client import HttpClient


def _response(status=200, json_data=None, text=None, headers=None):
    response = MagicMock()
    response.status = status
    response.reason = 'OK' if status == 200 else 'Error'
    response.headers = headers or {}
    response.json = AsyncMock(return_value=json_data)
    response.text = AsyncMock(return_value=text)
    return response


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.closed = False
    session.request = AsyncMock()
    session.close = AsyncMock()
    with patch('rwanda_cinema.utils.http_client.ClientSession', return_value=session), \
            patch('aiohttp.TCPConnector'):
        yield session


class TestHttpClient:
    """Test cases for HttpClient."""

    def test_init(self):
        client = HttpClient(timeout=60, max_retries=5, retry_delay=2.0, user_agent='Inyarwanda-Films')

        assert client.timeout.total == 60
        assert client.max_retries == 5
        assert client.retry_delay == 2.0
        assert client.default_headers['User-Agent'] == 'Inyarwanda-Films'

    def test_default_user_agent(self):
        assert HttpClient().default_headers['User-Agent'] == 'Rwanda-Cinema'

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with HttpClient() as client:
            assert client._session is not None
            assert not client._session.closed

        assert client._session.closed

    @pytest.mark.asyncio
    async def test_rate_limiting(self):
        client = HttpClient(rate_limit_delay=0.1)
        loop = asyncio.get_running_loop()

        await client._rate_limit()
        start_time = loop.time()
        await client._rate_limit()

        assert loop.time() - start_time >= 0.09

    @pytest.mark.asyncio
    async def test_request_merges_headers(self, mock_session):
        mock_session.request.return_value = _response()
        client = HttpClient(user_agent='Rwanda-Cinema')

        await client.get('https://api.github.com/x', headers={'Authorization': 'Bearer t'})

        headers = mock_session.request.call_args.kwargs['headers']
        assert headers['User-Agent'] == 'Rwanda-Cinema'
        assert headers['Authorization'] == 'Bearer t'

    @pytest.mark.asyncio
    async def test_fetch_json(self, mock_session):
        mock_session.request.return_value = _response(json_data=[{'name': 'a.md'}])
        client = HttpClient()

        assert await client.fetch_json('https://api.github.com/x') == (200, [{'name': 'a.md'}])

    @pytest.mark.asyncio
    async def test_fetch_json_error_status(self, mock_session):
        response = _response(status=404)
        mock_session.request.return_value = response
        client = HttpClient()

        assert await client.fetch_json('https://api.github.com/x') == (404, None)
        response.json.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetch_text(self, mock_session):
        mock_session.request.return_value = _response(text='---\ntitle: X\n---')
        client = HttpClient()

        assert await client.fetch_text('https://raw.githubusercontent.com/x.md') == (200, '---\ntitle: X\n---')

    @pytest.mark.asyncio
    async def test_retry_on_failure(self, mock_session):
        mock_session.request.side_effect = [
            aiohttp.ClientError('Connection failed'),
            aiohttp.ClientError('Connection failed'),
            _response(),
        ]
        client = HttpClient(max_retries=2, retry_delay=0.01)

        response = await client.get('https://example.com')

        assert response.status == 200
        assert mock_session.request.call_count == 3
        assert client.get_stats()['failed_count'] == 2

    @pytest.mark.asyncio
    async def test_max_retries_exceeded(self, mock_session):
        mock_session.request.side_effect = aiohttp.ClientError('Connection failed')
        client = HttpClient(max_retries=1, retry_delay=0.01)

        with pytest.raises(aiohttp.ClientError):
            await client.get('https://example.com')

        assert mock_session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_timeout_is_retried(self, mock_session):
        mock_session.request.side_effect = [asyncio.TimeoutError(), _response()]
        client = HttpClient(max_retries=1, retry_delay=0.01)

        assert (await client.get('https://example.com')).status == 200

    @pytest.mark.asyncio
    async def test_rate_limit_response(self, mock_session):
        limited = _response(status=429, headers={'Retry-After': '0.01'})
        mock_session.request.side_effect = [limited, _response()]
        client = HttpClient(max_retries=1)

        response = await client.get('https://api.github.com/x')

        assert response.status == 200
        limited.release.assert_called_once()

    @pytest.mark.asyncio
    async def test_long_retry_after_is_not_waited_on(self, mock_session):
        mock_session.request.return_value = _response(status=429, headers={'Retry-After': '3600'})
        client = HttpClient(timeout=30, max_retries=2)

        with patch('rwanda_cinema.utils.http_client.asyncio.sleep', new_callable=AsyncMock) as sleep:
            response = await client.get('https://api.github.com/x')

        assert response.status == 429
        assert mock_session.request.call_count == 1
        sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_rate_limit_without_retry_after_is_returned(self, mock_session):
        mock_session.request.return_value = _response(status=429)
        client = HttpClient(max_retries=2)

        response = await client.get('https://api.github.com/x')

        assert response.status == 429
        assert mock_session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_stats(self, mock_session):
        mock_session.request.return_value = _response()
        client = HttpClient(max_retries=3)

        await client.get('https://example.com')
        stats = client.get_stats()

        assert stats['request_count'] == 1
        assert stats['failed_count'] == 0
        assert stats['max_retries'] == 3
        assert stats['session_active']
