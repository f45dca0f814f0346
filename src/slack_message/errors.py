from __future__ import annotations


class SlackMessageError(Exception):
    """Base class for errors raised by this library itself."""


class InvalidPackageError(SlackMessageError, ValueError):
    pass


class InvalidAttachmentError(SlackMessageError, ValueError):
    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class RemoteRejectionError(SlackMessageError, RuntimeError):
    """The webhook answered, but not with ``ok``.

    ``code`` is ``REJECTED`` when Slack returned an error body (kept in
    ``detail``) and ``EMPTY_RESPONSE`` when the body was empty.
    """

    REJECTED = 1
    EMPTY_RESPONSE = 2

    def __init__(self, detail: str, code: int):
        super().__init__(detail)
        self.detail = detail
        self.code = code
