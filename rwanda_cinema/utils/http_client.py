"""HTTP client for making web requests with retry and rate limiting."""

import asyncio
import logging
import time
from typing import Dict, Optional, Any, Tuple

import aiohttp
from aiohttp import ClientSession, ClientTimeout, ClientError


class HttpClient:
    """Async HTTP client with retry logic and optional rate limiting."""

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        rate_limit_delay: float = 0.0,
        user_agent: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        """
        Initialize the HTTP client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            retry_delay: Base delay between retries in seconds
            rate_limit_delay: Minimum delay between requests in seconds
            user_agent: User-Agent header sent with every request
            headers: Extra default headers
        """
        self.timeout = ClientTimeout(total=timeout)
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.rate_limit_delay = rate_limit_delay
        self.logger = logging.getLogger(__name__)

        self.default_headers = {
            'User-Agent': user_agent or 'Rwanda-Cinema',
            'Accept': '*/*',
        }
        if headers:
            self.default_headers.update(headers)

        self._session: Optional[ClientSession] = None
        self._last_request_time = 0.0
        self._request_count = 0
        self._failed_count = 0

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self):
        """Ensure the HTTP session is created."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(
                connector=aiohttp.TCPConnector(),
                timeout=self.timeout,
                headers=self.default_headers
            )
            self.logger.debug("Created new HTTP session")

    async def close(self):
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self.logger.debug("Closed HTTP session")

    async def _rate_limit(self):
        """Apply rate limiting between requests."""
        if self.rate_limit_delay <= 0:
            return

        current_time = time.time()
        time_since_last = current_time - self._last_request_time

        if time_since_last < self.rate_limit_delay:
            sleep_time = self.rate_limit_delay - time_since_last
            self.logger.debug(f"Rate limiting: sleeping for {sleep_time:.2f}s")
            await asyncio.sleep(sleep_time)

        self._last_request_time = time.time()

    async def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> aiohttp.ClientResponse:
        """
        Make a GET request.

        Args:
            url: URL to request
            headers: Additional headers
            params: Query parameters
            **kwargs: Additional arguments for aiohttp

        Returns:
            HTTP response object

        Raises:
            aiohttp.ClientError: If request fails after all retries
        """
        return await self._request('GET', url, headers=headers, params=params, **kwargs)

    async def fetch_json(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Tuple[int, Any]:
        """
        GET a URL and decode its JSON body.

        Returns:
            ``(status, payload)``; payload is None for non-200 responses
        """
        response = await self.get(url, headers=headers, params=params)
        async with response:
            if response.status != 200:
                return response.status, None
            return response.status, await response.json(content_type=None)

    async def fetch_text(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None
    ) -> Tuple[int, Optional[str]]:
        """
        GET a URL and return its body as text.

        Returns:
            ``(status, text)``; text is None for non-200 responses
        """
        response = await self.get(url, headers=headers)
        async with response:
            if response.status != 200:
                return response.status, None
            return response.status, await response.text()

    async def _request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> aiohttp.ClientResponse:
        """
        Make an HTTP request with retry logic.

        Args:
            method: HTTP method
            url: URL to request
            headers: Additional headers
            **kwargs: Additional arguments for aiohttp

        Returns:
            HTTP response object

        Raises:
            aiohttp.ClientError: If request fails after all retries
        """
        await self._ensure_session()
        await self._rate_limit()

        request_headers = self.default_headers.copy()
        if headers:
            request_headers.update(headers)

        last_exception = None

        for attempt in range(self.max_retries + 1):
            try:
                self._request_count += 1
                self.logger.debug(f"Making {method} request to {url} (attempt {attempt + 1})")

                response = await self._session.request(
                    method,
                    url,
                    headers=request_headers,
                    **kwargs
                )

                self.logger.debug(f"Response: {response.status} {response.reason}")

                # GitHub answers secondary rate limits with 429 + Retry-After
                if response.status == 429 and attempt < self.max_retries:
                    retry_after = response.headers.get('Retry-After')
                    if retry_after:
                        try:
                            wait_time = float(retry_after)
                        except ValueError:
                            return response
                        # Waits longer than the request timeout are not retried
                        if self.timeout.total is not None and wait_time > self.timeout.total:
                            self.logger.warning(f"Rate limited for {wait_time}s, not retrying {url}")
                            return response
                        self.logger.warning(f"Rate limited, waiting {wait_time}s")
                        response.release()
                        await asyncio.sleep(wait_time)
                        continue

                # Return response for any status code (let caller handle errors)
                return response

            except (ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                self._failed_count += 1
                self.logger.warning(f"Request failed (attempt {attempt + 1}): {e}")

                if attempt < self.max_retries:
                    wait_time = self.retry_delay * (2 ** attempt)
                    self.logger.debug(f"Retrying in {wait_time}s...")
                    await asyncio.sleep(wait_time)
                else:
                    self.logger.error(f"Request to {url} failed after {self.max_retries + 1} attempts")

        raise last_exception or ClientError("Request failed")

    def get_stats(self) -> Dict[str, Any]:
        """
        Get client statistics.

        Returns:
            Dictionary with client statistics
        """
        return {
            'request_count': self._request_count,
            'failed_count': self._failed_count,
            'session_active': self._session is not None and not self._session.closed,
            'max_retries': self.max_retries,
            'rate_limit_delay': self.rate_limit_delay
        }
