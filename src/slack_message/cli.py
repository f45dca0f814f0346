from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from .config import WebhookConfig, load_config, with_env_overrides
from .errors import InvalidAttachmentError, InvalidPackageError, RemoteRejectionError
from .message import Message


def _read_attachments(path: str | None) -> list[dict[str, Any]]:
    if not path:
        return []
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list):
        return payload
    raise ValueError("Attachment JSON must be an object or a list of objects.")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="slack-message",
        description="Post a message to a Slack incoming webhook.",
    )
    parser.add_argument("channel", help="Slack #channel or @username")
    parser.add_argument("text", nargs="?", default="", help="Message text, or - to read stdin")
    parser.add_argument("--config", help="Path to a YAML file with a `webhook` section")
    parser.add_argument("--url", help="Webhook URL (overrides SLACK_WEBHOOK_URL and the config file)")
    parser.add_argument("--username", help="Post as this username")
    parser.add_argument("--emoji", help="Icon emoji, e.g. :rocket:")
    parser.add_argument("--attachment-json", help="Path to one attachment object or a list of them")
    parser.add_argument("--dry-run", action="store_true", help="Print the payload instead of posting it")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
    return parser.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> WebhookConfig:
    config = load_config(args.config) if args.config else WebhookConfig(url="")
    config = with_env_overrides(config)
    return replace(
        config,
        url=args.url or config.url,
        username=args.username or config.username,
        emoji=args.emoji or config.emoji,
    )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    text = sys.stdin.read().rstrip("\n") if args.text == "-" else args.text
    try:
        config = _resolve_config(args)
        attachments = _read_attachments(args.attachment_json)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Could not load input: {exc}", file=sys.stderr)
        return 2

    try:
        if args.dry_run:
            client = Message(config.url, username=config.username, emoji=config.emoji)
            print(json.dumps(client.build_package(args.channel, text, attachments), indent=2))
            return 0
        client = Message.from_config(config)
        client.send(args.channel, text, attachments)
    except (InvalidPackageError, InvalidAttachmentError) as exc:
        print(f"Invalid message: {exc}", file=sys.stderr)
        return 2
    except RemoteRejectionError as exc:
        print(f"Slack rejected the message: {exc.detail}", file=sys.stderr)
        return 3
    except OSError as exc:
        print(f"Slack webhook failed: {exc}", file=sys.stderr)
        return 3
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    print("Message sent.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
