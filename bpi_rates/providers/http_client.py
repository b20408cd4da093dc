"""Shared HTTP client wrapper returning raw response bodies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests import Response, Session
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)

JSON_ACCEPT = "application/json"


class HTTPClientError(RuntimeError):
    """Raised when the HTTP client cannot satisfy a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client."""

    timeout: float = 10.0
    accept: str = JSON_ACCEPT


class HTTPClient:
    """Small HTTP client issuing a single GET per call, without retries."""

    def __init__(
        self,
        config: HTTPClientConfig | None = None,
        session: Optional[Session] = None,
    ) -> None:
        self._config = config or HTTPClientConfig()
        self._session = session or requests.Session()

    def get_bytes(self, url: str) -> bytes:
        try:
            response = self._session.get(
                url,
                headers={"Accept": self._config.accept},
                timeout=self._config.timeout,
            )
        except RequestException as exc:
            raise HTTPClientError(f"Failed to fetch {url}: {exc}") from exc

        return self._handle_response(url, response)

    @staticmethod
    def _handle_response(url: str, response: Response) -> bytes:
        status = response.status_code
        if not isinstance(status, int):
            raise HTTPClientError(f"Malformed response from {url}: missing status code")
        if status < 200 or status >= 300:
            raise HTTPClientError(f"Unexpected status {status} from {url}", status_code=status)

        body = response.content
        if not isinstance(body, bytes):
            raise HTTPClientError(f"Malformed response from {url}: body is not bytes", status_code=status)

        logger.debug("Fetched %s bytes from %s", len(body), url)
        return body
