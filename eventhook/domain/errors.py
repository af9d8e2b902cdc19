# eventhook/domain/errors.py
from __future__ import annotations
from enum import Enum

class ErrorKind(str, Enum):
    SHAPE = "shape"
    VALIDATION = "validation"
    NOT_READY = "not_ready"
    COMMUNITY_NOT_FOUND = "community_not_found"
    PERMISSION_DENIED = "permission_denied"
    REMOTE_REJECTED = "remote_rejected"

class WebhookError(Exception):
    """
    Base of every failure the webhook maps to an HTTP answer.
    `message` is the public error label, `details` the raw text or list.
    """
    kind: ErrorKind = ErrorKind.REMOTE_REJECTED
    status: int = 500
    message: str = "Internal server error"

    def __init__(self, details: str | list[str] = ""):
        self.details = details
        super().__init__(details if isinstance(details, str) else "; ".join(details))

class ShapeError(WebhookError):
    kind = ErrorKind.SHAPE
    status = 400
    message = "Invalid payload shape"

class ValidationFailed(WebhookError):
    kind = ErrorKind.VALIDATION
    status = 400
    message = "Invalid eventData fields"

class NotReady(WebhookError):
    kind = ErrorKind.NOT_READY
    status = 503
    message = "Discord bot not ready"

class CommunityNotFound(WebhookError):
    kind = ErrorKind.COMMUNITY_NOT_FOUND
    status = 404
    message = "Discord server (guild) not found"

class PermissionDenied(WebhookError):
    kind = ErrorKind.PERMISSION_DENIED
    status = 403
    message = "Bot lacks permissions to create events"

class RemoteRejected(WebhookError):
    kind = ErrorKind.REMOTE_REJECTED
    status = 500
    message = "Internal server error"
