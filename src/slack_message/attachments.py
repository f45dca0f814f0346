from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlsplit

from pydantic import ValidationError

from .errors import InvalidAttachmentError
from .models import AttachmentField

logger = logging.getLogger(__name__)

COLOR_PATTERN = re.compile(r"good|warning|danger|#[0-9a-fA-F]{6}")


def _is_raw_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_color(value: Any) -> bool:
    return isinstance(value, str) and COLOR_PATTERN.fullmatch(value) is not None


def _is_url(value: Any) -> bool:
    if not isinstance(value, str) or not value.isascii():
        return False
    if any(ch.isspace() or not ch.isprintable() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        _ = parts.port
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)


ATTACHMENT_VALIDATORS: dict[str, Callable[[Any], bool]] = {
    "fallback": _is_raw_string,
    "color": _is_color,
    "pretext": _is_raw_string,
    "author_name": _is_raw_string,
    "author_link": _is_url,
    "author_icon": _is_url,
    "title": _is_raw_string,
    "title_link": _is_url,
    "text": _is_raw_string,
    "image_url": _is_url,
    "thumb_url": _is_url,
}


def _coerce_field(entry: Any) -> Any:
    # Entries that do not coerce are passed through untouched rather than
    # failing the attachment.
    try:
        return AttachmentField.model_validate(entry).model_dump(exclude_unset=True)
    except ValidationError:
        logger.debug("Keeping attachment field as given; coercion failed: %r", entry)
        return entry


def _coerce_fields(fields: Any) -> list[Any]:
    if isinstance(fields, (str, bytes)) or not isinstance(fields, (list, tuple)):
        raise InvalidAttachmentError("Invalid value for `fields`", key="fields")
    return [_coerce_field(entry) for entry in fields]


def validate_attachment(attachment: Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(attachment, Mapping):
        raise InvalidAttachmentError(
            f"Attachment must be a mapping, not {type(attachment).__name__}"
        )

    fallback = attachment.get("fallback")
    if fallback is None or fallback == "":
        raise InvalidAttachmentError("All attachments require `fallback` to be set")

    cleaned: dict[str, Any] = {}
    for key in sorted(attachment, key=str):
        value = attachment[key]
        if value is None:
            continue
        if key == "fields":
            fields = _coerce_fields(value)
            if fields:
                cleaned[key] = fields
            continue
        validator = ATTACHMENT_VALIDATORS.get(key)
        if validator is None:
            logger.debug("Dropping unrecognized attachment key %r", key)
            continue
        if not validator(value):
            raise InvalidAttachmentError(f"Invalid value for `{key}`", key=key)
        cleaned[key] = value
    return cleaned
