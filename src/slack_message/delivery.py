from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol
from urllib import error, request
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: str


class Transport(Protocol):
    def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> TransportResponse: ...


def webhook_host(url: str) -> str:
    return urlsplit(url).hostname or "<unknown>"


class UrllibTransport:
    """POSTs JSON with ``urllib``.

    Non-2xx answers come back as a ``TransportResponse`` so their body can be
    inspected; connection failures raise ``URLError``/``OSError``.
    """

    def __init__(self, timeout_seconds: float = 10.0):
        self.timeout_seconds = timeout_seconds

    def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        headers: Mapping[str, str] = JSON_HEADERS,
    ) -> TransportResponse:
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        req = request.Request(url, data=data, headers=dict(headers), method="POST")
        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as response:
                status = getattr(response, "status", 200)
                body = response.read().decode("utf-8", errors="replace")
        except error.HTTPError as exc:
            status = exc.code
            body = exc.read().decode("utf-8", errors="replace")
            exc.close()
        logger.debug("Webhook %s answered with status %s", webhook_host(url), status)
        return TransportResponse(status=status, body=body)
