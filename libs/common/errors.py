"""Tagged error kinds shared by the services and their clients.

Services decide the kind of a failure and send it as
``{"detail": {"code": ..., "message": ...}}``. Clients map the code back to an
``ErrorKind`` and pick a user-facing message for it. Errors that arrive
without a code (identity-provider SDK messages, plain exceptions) are
classified from their message text as a last resort.
"""

import enum
from typing import Mapping, Optional

from fastapi import status


class ErrorKind(str, enum.Enum):
    ALREADY_MEMBER = "already_member"
    ALREADY_INVITED = "already_invited"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    UNKNOWN = "unknown"


# Checked in order; the first phrase found in the message wins.
_MESSAGE_PATTERNS: tuple[tuple[str, ErrorKind], ...] = (
    ("already a member", ErrorKind.ALREADY_MEMBER),
    ("already invited", ErrorKind.ALREADY_INVITED),
    ("not found", ErrorKind.NOT_FOUND),
    ("permission", ErrorKind.PERMISSION_DENIED),
)

_STATUS_CODES = {
    ErrorKind.ALREADY_MEMBER: status.HTTP_409_CONFLICT,
    ErrorKind.ALREADY_INVITED: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.ALREADY_MEMBER: "This email address is already a member of this organization.",
    ErrorKind.ALREADY_INVITED: "An invitation has already been sent to this email address.",
    ErrorKind.NOT_FOUND: "Staff member not found.",
    ErrorKind.PERMISSION_DENIED: "You do not have permission to update this staff member.",
}

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."


class ServiceError(Exception):
    """A failure whose kind was decided by the service that raised it."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.kind]

    def to_detail(self) -> dict[str, str]:
        return {"code": self.kind.value, "message": self.message}


def classify_error_message(message: Optional[str]) -> ErrorKind:
    """Derive an ``ErrorKind`` from free-form error text."""
    if not message:
        return ErrorKind.UNKNOWN
    lowered = message.lower()
    for phrase, kind in _MESSAGE_PATTERNS:
        if phrase in lowered:
            return kind
    return ErrorKind.UNKNOWN


def error_kind_of(exc: BaseException) -> ErrorKind:
    if isinstance(exc, ServiceError):
        return exc.kind
    return classify_error_message(str(exc))


def user_message_for(
    exc: BaseException,
    *,
    fallback: str = GENERIC_FAILURE_MESSAGE,
    messages: Optional[Mapping[ErrorKind, str]] = None,
) -> str:
    """
    Pick the user-facing message for a failed operation.

    ``messages`` lets an operation restrict or reword the kinds it knows about;
    any kind missing from the table gets ``fallback``.
    """
    table = USER_MESSAGES if messages is None else messages
    return table.get(error_kind_of(exc), fallback)
