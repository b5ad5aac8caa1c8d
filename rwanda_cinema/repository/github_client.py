"""GitHub contents API client for the content repositories."""

import asyncio
import logging
from typing import Dict, List, Optional

from aiohttp import ClientError

from ..models.repository_file import RawFile
from ..utils.error_handler import ErrorHandler, RepositoryError
from ..utils.http_client import HttpClient

GITHUB_API_URL = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github.v3+json"


class GitHubContentsClient:
    """
    Lists directories and downloads files through the GitHub contents API.

    Every failure (network error, non-200 answer, unexpected payload) is
    logged and turned into an empty result so one broken directory never
    takes a whole page down.
    """

    def __init__(
        self,
        http_client: HttpClient,
        token: Optional[str] = None,
        user_agent: str = "Rwanda-Cinema",
        api_base_url: str = GITHUB_API_URL,
        error_handler: Optional[ErrorHandler] = None
    ):
        """
        Initialize the contents client.

        Args:
            http_client: Open HTTP client used for every request
            token: GitHub token sent as a bearer credential (optional)
            user_agent: User-Agent identifying this client to GitHub
            api_base_url: API root, overridable for GitHub Enterprise or tests
            error_handler: Records failed listings and downloads
        """
        self.http_client = http_client
        self.token = token
        self.user_agent = user_agent
        self.api_base_url = api_base_url.rstrip('/')
        self.error_handler = error_handler
        self.logger = logging.getLogger(__name__)

    def _api_headers(self) -> Dict[str, str]:
        headers = {
            'User-Agent': self.user_agent,
            'Accept': GITHUB_ACCEPT,
        }
        if self.token:
            headers['Authorization'] = f"Bearer {self.token}"
        return headers

    def contents_url(self, repository: str, path: str) -> str:
        """API URL of a directory in ``owner/name``."""
        return f"{self.api_base_url}/repos/{repository}/contents/{path.strip('/')}"

    def _record_failure(self, message: str, context: Dict[str, str]) -> None:
        error = RepositoryError(message)
        if self.error_handler:
            self.error_handler.handle_error(error, context)
        else:
            self.logger.warning(message)

    async def list_directory(self, repository: str, path: str) -> List[RawFile]:
        """
        List one directory of a repository.

        Args:
            repository: Repository in ``owner/name`` form
            path: Directory path inside the repository

        Returns:
            Entries in the order GitHub reports them, or an empty list on any
            failure
        """
        url = self.contents_url(repository, path)
        context = {'repository': repository, 'path': path}

        try:
            status, payload = await self.http_client.fetch_json(url, headers=self._api_headers())
        except (ClientError, asyncio.TimeoutError, ValueError) as e:
            self._record_failure(f"Error listing {repository}/{path}: {e}", context)
            return []

        if status != 200:
            self._record_failure(f"GitHub API error {status} for {repository}/{path}", context)
            return []

        if not isinstance(payload, list):
            self._record_failure(f"Unexpected listing payload for {repository}/{path}", context)
            return []

        files = [RawFile.from_api(entry) for entry in payload if isinstance(entry, dict) and entry.get('name')]
        self.logger.info(f"Found {len(files)} entries in {repository}/{path}")
        return files

    async def list_markdown_files(self, repository: str, path: str) -> List[RawFile]:
        """Markdown files of a directory, sub-directories left out."""
        entries = await self.list_directory(repository, path)
        return [entry for entry in entries if entry.is_markdown]

    async def fetch_file_text(self, raw_file: RawFile) -> Optional[str]:
        """
        Download the raw contents of a file.

        Returns:
            File text, or None when the file has no download URL or the
            download fails
        """
        if not raw_file.download_url:
            self._record_failure(f"No download URL for {raw_file.name}", {'filename': raw_file.name})
            return None

        try:
            status, text = await self.http_client.fetch_text(
                raw_file.download_url,
                headers={'User-Agent': self.user_agent}
            )
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            self._record_failure(f"Error fetching {raw_file.name}: {e}", {'filename': raw_file.name})
            return None

        if status != 200 or text is None:
            self._record_failure(
                f"Failed to fetch file content: {raw_file.name} ({status})",
                {'filename': raw_file.name}
            )
            return None

        return text
