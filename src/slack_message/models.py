from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

DEFAULT_USERNAME = "slackbot"


@dataclass(frozen=True)
class TextMessage:
    text: str


@dataclass(frozen=True)
class AttachmentMessage:
    attachment: Mapping[str, Any]


MessageBody = Union[TextMessage, AttachmentMessage]


def as_message(value: str | Mapping[str, Any] | MessageBody | None) -> MessageBody | None:
    """Wrap a plain string or attachment mapping; empty input yields ``None``."""
    if isinstance(value, (TextMessage, AttachmentMessage)):
        body = value.text if isinstance(value, TextMessage) else value.attachment
        return value if body else None
    if value is None:
        return None
    if isinstance(value, str):
        return TextMessage(value) if value else None
    if isinstance(value, Mapping):
        return AttachmentMessage(value) if value else None
    raise TypeError(f"Message must be a string or an attachment mapping, not {type(value).__name__}")


class AttachmentField(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    value: str | None = None
    short: bool | None = None


@dataclass
class OutgoingPayload:
    channel: str
    username: str = DEFAULT_USERNAME
    attachments: list[dict[str, Any]] = field(default_factory=list)
    icon_emoji: str | None = None
    text: str | None = None

    def is_deliverable(self) -> bool:
        return bool(self.channel) and (bool(self.text) or bool(self.attachments))


def payload_to_dict(payload: OutgoingPayload) -> dict[str, Any]:
    data: dict[str, Any] = {
        "channel": payload.channel,
        "username": payload.username,
        "attachments": [dict(item) for item in payload.attachments],
    }
    if payload.icon_emoji is not None:
        data["icon_emoji"] = payload.icon_emoji
    if payload.text is not None:
        data["text"] = payload.text
    return data
