"""
Source readers for bundled artifacts.

The source copy of each artifact ships with the game. On desktop builds it
is a plain file under the assets directory; on web and mobile builds the
assets are only reachable through a retrieval request. A SourceReader hides
that difference from the secret store.
"""

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import httpx

from lazyencrypt.errors import RetrievalFailedError, SourceUnavailableError
from lazyencrypt.store import artifact_io

logger = logging.getLogger(__name__)

# Status codes meaning the asset is not part of the bundle
_MISSING_STATUS_CODES = (404, 410)

# Clock used for the overall download deadline
_clock = time.monotonic


class SourceReader(ABC):
    """Read-only access to the bundled (source) copy of an artifact."""

    @abstractmethod
    def location(self, filename: str) -> str:
        """Describe where an artifact's source copy lives."""

    @abstractmethod
    def exists(self, filename: str) -> bool:
        """
        Check whether the source copy of an artifact exists.

        Raises:
            RetrievalFailedError: If existence cannot be determined
        """

    @abstractmethod
    def read_bytes(self, filename: str) -> bytes:
        """
        Read the raw source bytes of an artifact.

        Raises:
            SourceUnavailableError: If the artifact does not exist
            RetrievalFailedError: If the artifact cannot be retrieved
        """

    def read_text(self, filename: str, encoding: str = artifact_io.DEFAULT_ENCODING) -> str:
        """
        Read the trimmed source text of an artifact.

        Raises:
            SourceUnavailableError: If the artifact does not exist
            RetrievalFailedError: If the artifact cannot be retrieved
            CorruptArtifactError: If the artifact is not valid text
        """
        data = self.read_bytes(filename)
        return artifact_io.decode_text(data, encoding, self.location(filename)).strip()


class LocalFileReader(SourceReader):
    """Reads artifacts straight from the bundled assets directory."""

    def __init__(self, root: Path):
        self.root = Path(root).expanduser()

    def path(self, filename: str) -> Path:
        return self.root / filename

    def location(self, filename: str) -> str:
        return str(self.path(filename))

    def exists(self, filename: str) -> bool:
        return self.path(filename).is_file()

    def read_bytes(self, filename: str) -> bytes:
        source = self.path(filename)
        if not source.is_file():
            raise SourceUnavailableError(str(source))
        return source.read_bytes()


class BundledAssetReader(SourceReader):
    """
    Retrieves artifacts from a packaged asset location over HTTP.

    Every request blocks until it completes or the timeout expires. The
    timeout applies to each connect/read step and, for downloads, to the
    whole transfer, so a server trickling bytes still times out. A timeout
    is reported as a RetrievalFailedError with ``timed_out`` set.

    Example:
        with BundledAssetReader('http://localhost:8080/StreamingAssets') as reader:
            payload = reader.read_bytes('lazy_enc.dat')
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0
    ):
        """
        Initialize bundled asset reader.

        Args:
            base_url: URL of the bundled assets root
            client: Optional httpx.Client to reuse (caller keeps ownership)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(timeout=timeout)

    def location(self, filename: str) -> str:
        return f"{self.base_url}/{filename}"

    def exists(self, filename: str) -> bool:
        url = self.location(filename)
        logger.debug(f"HEAD {url}")
        try:
            response = self.client.head(url, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise RetrievalFailedError(url, str(e) or "request timed out", timed_out=True)
        except httpx.HTTPError as e:
            raise RetrievalFailedError(url, str(e) or e.__class__.__name__)

        if response.status_code == 405:
            # Some static servers only answer GET
            try:
                self.read_bytes(filename)
            except SourceUnavailableError:
                return False
            return True

        if response.status_code in _MISSING_STATUS_CODES:
            return False
        self._raise_for_status(response, url)
        return True

    def read_bytes(self, filename: str) -> bytes:
        """
        Download the raw bytes of an artifact.

        Raises:
            SourceUnavailableError: If the server reports the asset missing
            RetrievalFailedError: On transport errors, timeouts or bad status
        """
        url = self.location(filename)
        logger.debug(f"GET {url}")
        deadline = _clock() + self.timeout

        try:
            with self.client.stream('GET', url, timeout=self.timeout) as response:
                if response.status_code in _MISSING_STATUS_CODES:
                    raise SourceUnavailableError(url)
                self._raise_for_status(response, url)

                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    if _clock() > deadline:
                        raise RetrievalFailedError(
                            url,
                            f"download not finished within {self.timeout}s",
                            timed_out=True
                        )
                return b"".join(chunks)
        except httpx.TimeoutException as e:
            raise RetrievalFailedError(url, str(e) or "request timed out", timed_out=True)
        except httpx.HTTPError as e:
            raise RetrievalFailedError(url, str(e) or e.__class__.__name__)

    def close(self) -> None:
        """Close the HTTP client if this reader created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> 'BundledAssetReader':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _raise_for_status(self, response: httpx.Response, url: str) -> None:
        if not response.is_success:
            raise RetrievalFailedError(url, f"HTTP {response.status_code}")
