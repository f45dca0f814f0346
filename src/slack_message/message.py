from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from .attachments import validate_attachment
from .delivery import JSON_HEADERS, Transport, TransportResponse, UrllibTransport, webhook_host
from .errors import InvalidPackageError, RemoteRejectionError
from .models import DEFAULT_USERNAME, MessageBody, OutgoingPayload, TextMessage, as_message, payload_to_dict

if TYPE_CHECKING:
    from .config import WebhookConfig

logger = logging.getLogger(__name__)


def build_package(
    channel: str,
    message: str | Mapping[str, Any] | MessageBody | None,
    attachments: Iterable[Mapping[str, Any]] = (),
    *,
    username: str = DEFAULT_USERNAME,
    emoji: str | None = None,
) -> dict[str, Any]:
    payload = OutgoingPayload(channel=channel, username=username)
    if emoji:
        payload.icon_emoji = emoji

    body = as_message(message)
    if isinstance(body, TextMessage):
        payload.text = body.text
    elif body is not None:
        payload.attachments.append(validate_attachment(body.attachment))

    for attachment in attachments:
        payload.attachments.append(validate_attachment(attachment))

    if not payload.is_deliverable():
        raise InvalidPackageError("Channel not set or message has no text or attachments")

    logger.debug(
        "Built payload for %s with %d attachment(s)",
        channel,
        len(payload.attachments),
    )
    return payload_to_dict(payload)


def interpret_response(response: TransportResponse) -> bool:
    if response.body == "ok":
        return True
    if response.body:
        raise RemoteRejectionError(response.body, code=RemoteRejectionError.REJECTED)
    raise RemoteRejectionError(
        "Unknown error sending Slack message",
        code=RemoteRejectionError.EMPTY_RESPONSE,
    )


class Message:
    """Sends messages to one Slack incoming webhook.

    ``username`` falls back to ``slackbot``; the emoji is only sent when
    configured. Pass ``transport`` to replace the HTTP client (tests do).
    """

    def __init__(
        self,
        url: str,
        username: str | None = None,
        emoji: str | None = None,
        transport: Transport | None = None,
    ):
        self.url = url
        self.username = username if username is not None else DEFAULT_USERNAME
        self.emoji = emoji if emoji is not None else ""
        self.transport = transport if transport is not None else UrllibTransport()

    @classmethod
    def from_config(cls, config: WebhookConfig, transport: Transport | None = None) -> "Message":
        if not config.url:
            raise ValueError("A webhook URL is required to send Slack messages.")
        return cls(
            config.url,
            username=config.username,
            emoji=config.emoji,
            transport=transport if transport is not None else UrllibTransport(config.timeout_seconds),
        )

    def send(
        self,
        channel: str,
        message: str | Mapping[str, Any] | MessageBody | None,
        attachments: Iterable[Mapping[str, Any]] = (),
    ) -> bool:
        package = self.build_package(channel, message, attachments)
        logger.debug("Posting message for %s to %s", channel, webhook_host(self.url))
        response = self.transport.post_json(self.url, package, JSON_HEADERS)
        return interpret_response(response)

    def build_package(
        self,
        channel: str,
        message: str | Mapping[str, Any] | MessageBody | None,
        attachments: Iterable[Mapping[str, Any]] = (),
    ) -> dict[str, Any]:
        return build_package(
            channel,
            message,
            attachments,
            username=self.username,
            emoji=self.emoji,
        )

    @staticmethod
    def validate_attachment(attachment: Mapping[str, Any]) -> dict[str, Any]:
        return validate_attachment(attachment)
