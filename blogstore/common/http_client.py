"""HTTP client with rate limiting and retry, used by the link checker."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from .config import LinkCheckSettings
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class HTTPClient:
    """HTTP client wrapping a requests.Session.

    Features:
    - Rate limiting (shared across all requests of a lint run)
    - Automatic retries with exponential backoff on connection errors,
      429 and 5xx responses
    - Fixed User-Agent so site owners can identify the checker

    Unlike a scraper, a 4xx/5xx answer is a result, not an error: the
    final response is returned whatever its status. Only transport
    failures raise.
    """

    BACKOFF_BASE = 2.0
    RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})

    def __init__(
        self,
        settings: LinkCheckSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or LinkCheckSettings()
        self._rate_limiter = RateLimiter(self.settings.rate_limit_rpm)
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.settings.user_agent})

    @property
    def max_attempts(self) -> int:
        """First try plus ``max_retries`` retries."""
        return max(self.settings.max_retries, 0) + 1

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request with rate limiting and retries.

        Args:
            method: HTTP method ("HEAD", "GET").
            url: Target URL.
            **kwargs: Passed through to requests.Session.request.

        Returns:
            The last response received.

        Raises:
            requests.RequestException: After all retries exhausted.
        """
        kwargs.setdefault("timeout", self.settings.request_timeout)
        kwargs.setdefault("allow_redirects", True)

        last_exc: requests.RequestException | None = None
        for attempt in range(self.max_attempts):
            self._rate_limiter.wait()
            wait_time = self.BACKOFF_BASE ** attempt
            is_last = attempt + 1 >= self.max_attempts
            try:
                resp = self._session.request(method, url, **kwargs)
            except requests.RequestException as exc:
                last_exc = exc
                if is_last:
                    break
                logger.warning(
                    "%s %s failed (attempt %d/%d): %s, retrying in %.1fs",
                    method, url, attempt + 1, self.max_attempts, exc, wait_time,
                )
                time.sleep(wait_time)
                continue

            if resp.status_code in self.RETRY_STATUSES and not is_last:
                logger.warning(
                    "%s %s returned %d (attempt %d/%d), retrying in %.1fs",
                    method, url, resp.status_code, attempt + 1, self.max_attempts, wait_time,
                )
                resp.close()
                time.sleep(wait_time)
                continue

            return resp

        raise last_exc  # type: ignore[misc]

    def head(self, url: str, **kwargs: Any) -> requests.Response:
        return self.request("HEAD", url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        # Only the status matters, so avoid downloading the body
        kwargs.setdefault("stream", True)
        return self.request("GET", url, **kwargs)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
