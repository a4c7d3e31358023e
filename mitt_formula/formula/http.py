"""HTTP client abstraction for asset downloads.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Canned responses for testing, records every call
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from mitt_formula.core.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from mitt_formula.core.result import Err, Ok, Result
from mitt_formula.formula.errors import NetworkError

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
]


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Lets tests inject MockHttpClient instead of touching the network.
    """

    def get_bytes(
        self,
        url: str,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[bytes, NetworkError]:
        """Fetch URL and return the response body.

        Args:
            url: URL to fetch
            progress: Optional callback(downloaded, total)

        Returns:
            Ok with body bytes, or Err with NetworkError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - Redirects (GitHub release assets redirect to object storage)
    - Chunked reads with progress callback
    - Timeout handling
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def get_bytes(
        self,
        url: str,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[bytes, NetworkError]:
        try:
            req = urllib.request.Request(
                url,
                headers={"User-Agent": self.user_agent, "Accept": "application/octet-stream"},
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                total = int(response.headers.get("Content-Length", 0))
                chunks: list[bytes] = []
                downloaded = 0
                while True:
                    chunk = response.read(64 * 1024)
                    if not chunk:
                        break
                    chunks.append(chunk)
                    downloaded += len(chunk)
                    if progress:
                        progress(downloaded, total)
                return Ok(b"".join(chunks))

        except urllib.error.HTTPError as e:
            return Err(NetworkError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(NetworkError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(NetworkError(url=url, status=0, message="Download timed out"))
        except ValueError as e:
            return Err(NetworkError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(NetworkError(url=url, status=0, message=str(e)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_bytes("https://example.com/mitt.tar.gz", archive_bytes)
        result = client.get_bytes("https://example.com/mitt.tar.gz")
    """

    def __init__(self) -> None:
        self._responses: dict[str, bytes | NetworkError] = {}
        self.calls: list[str] = []

    def set_bytes(self, url: str, response: bytes | NetworkError) -> None:
        self._responses[url] = response

    def get_bytes(
        self,
        url: str,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[bytes, NetworkError]:
        self.calls.append(url)

        if url not in self._responses:
            return Err(NetworkError(url=url, status=404, message="Not found (mock)"))

        response = self._responses[url]
        if isinstance(response, NetworkError):
            return Err(response)
        if progress:
            progress(len(response), len(response))
        return Ok(response)
