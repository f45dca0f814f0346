"""Post messages to Slack incoming webhooks."""

from .attachments import validate_attachment
from .config import WebhookConfig, load_config, with_env_overrides
from .delivery import Transport, TransportResponse, UrllibTransport
from .errors import InvalidAttachmentError, InvalidPackageError, RemoteRejectionError, SlackMessageError
from .message import Message, build_package
from .models import AttachmentMessage, OutgoingPayload, TextMessage

__all__ = [
    "AttachmentMessage",
    "InvalidAttachmentError",
    "InvalidPackageError",
    "Message",
    "OutgoingPayload",
    "RemoteRejectionError",
    "SlackMessageError",
    "TextMessage",
    "Transport",
    "TransportResponse",
    "UrllibTransport",
    "WebhookConfig",
    "build_package",
    "load_config",
    "validate_attachment",
    "with_env_overrides",
]
