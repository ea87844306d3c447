# wemo_agent/infrastructure/http/http_transport.py
import logging
from typing import Dict, Optional, Tuple

import httpx

from wemo_agent.core.config import settings
from wemo_agent.core.exceptions import TransportError

logger = logging.getLogger(__name__)


class HttpTransport:
    """Blocking HTTP adapter used for every device exchange.

    Status codes are handed back untouched; only failures of the exchange
    itself (connect, timeout, broken response) become ``TransportError``.
    """

    def __init__(self, timeout: Optional[float] = None, client: Optional[httpx.Client] = None):
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: str = "",
    ) -> Tuple[int, bytes]:
        client = self._get_client()
        try:
            resp = client.request(
                method,
                url,
                headers=headers or {},
                content=body.encode("utf-8") if body else None,
            )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.error(f"HttpTransport: {method} {url} failed: {exc!r}")
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if resp.is_error:
            logger.warning(f"HttpTransport: {method} {url} answered {resp.status_code}")

        return resp.status_code, resp.content

    def get(self, url: str) -> Tuple[int, bytes]:
        return self.send("GET", url)

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None


http_transport = HttpTransport(timeout=settings.HTTP_TIMEOUT)
