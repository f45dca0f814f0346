from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from .models import DEFAULT_USERNAME


@dataclass(frozen=True)
class WebhookConfig:
    url: str
    username: str = DEFAULT_USERNAME
    emoji: str = ""
    timeout_seconds: float = 10.0

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "WebhookConfig":
        webhook = data.get("webhook", data)
        if not isinstance(webhook, dict):
            raise ValueError("The `webhook` section must be a mapping.")

        try:
            timeout_seconds = float(webhook.get("timeout_seconds", 10.0))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid timeout_seconds: {webhook.get('timeout_seconds')!r}") from exc
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive.")

        return WebhookConfig(
            url=str(webhook.get("url") or ""),
            username=str(webhook.get("username") or DEFAULT_USERNAME),
            emoji=str(webhook.get("emoji") or ""),
            timeout_seconds=timeout_seconds,
        )


def load_config(path: str | Path) -> WebhookConfig:
    config_path = Path(path)
    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError("Configuration root must be a mapping.")
    return WebhookConfig.from_dict(raw)


def with_env_overrides(config: WebhookConfig) -> WebhookConfig:
    url = os.getenv("SLACK_WEBHOOK_URL", "").strip()
    username = os.getenv("SLACK_USERNAME", "").strip()
    emoji = os.getenv("SLACK_EMOJI", "").strip()
    if not url and not username and not emoji:
        return config
    return replace(
        config,
        url=url or config.url,
        username=username or config.username,
        emoji=emoji or config.emoji,
    )
