"""Transport for smart queries against upstream price contracts."""

from __future__ import annotations

import base64
import json
import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import requests

from .constants import DEFAULT_QUERY_TIMEOUT, LCD_SMART_QUERY_PATH
from .errors import UpstreamQueryFailed

logger = logging.getLogger(__name__)


class Querier(ABC):
    """Sends a JSON query message to a contract and returns its JSON response."""

    @abstractmethod
    def query_smart(self, contract: str, msg: dict[str, Any]) -> Any:
        """Run ``msg`` against ``contract``.

        Raises:
            UpstreamQueryFailed: If the call fails or the response cannot be decoded
        """
        ...


class LcdQuerier(Querier):
    """Smart queries over a Cosmos SDK LCD (REST) endpoint."""

    def __init__(self, endpoint: str, timeout: float = DEFAULT_QUERY_TIMEOUT):
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout

    def _url(self, contract: str, msg: dict[str, Any]) -> str:
        encoded = base64.b64encode(
            json.dumps(msg, separators=(",", ":")).encode()
        ).decode()
        path = LCD_SMART_QUERY_PATH.format(
            contract=quote(contract, safe=""), query=quote(encoded, safe="")
        )
        return f"{self.endpoint}{path}"

    def query_smart(self, contract: str, msg: dict[str, Any]) -> Any:
        url = self._url(contract, msg)
        logger.debug("Smart query %s -> %s", contract, msg)
        try:
            r = requests.get(url, timeout=self.timeout)
            r.raise_for_status()
            body = r.json()
        except requests.RequestException as e:
            raise UpstreamQueryFailed(f"Query to {contract} failed: {e}") from e
        except ValueError as e:
            raise UpstreamQueryFailed(f"Query to {contract} returned invalid JSON: {e}") from e

        if not isinstance(body, dict) or "data" not in body:
            raise UpstreamQueryFailed(
                f"Query to {contract} returned an unexpected payload: {body!r}"
            )
        return body["data"]
