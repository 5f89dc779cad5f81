"""Check outcome port definition (DTOs)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["CheckError", "CheckErrorKind", "CheckOutcome"]


class CheckErrorKind(str, Enum):
    """Failure classes a single check can end in."""

    TRANSPORT = "transport"
    MALFORMED_CREDENTIAL = "malformed_credential"
    NOT_CONNECTED = "not_connected"


@dataclass(slots=True, frozen=True)
class CheckError:
    """Why a check failed.

    Attributes:
        kind: Failure classification.
        message: Human-readable error message.
        exception: The underlying error, kept for diagnostic capture.
    """

    kind: CheckErrorKind
    message: str
    exception: BaseException


@dataclass(slots=True, frozen=True)
class CheckOutcome:
    """Immutable result of one connectivity check.

    Produced once per check, turned into one log record and discarded.

    Attributes:
        succeeded: True if connect (and listing, when configured) worked.
        connect_duration_ms: Time to an established connection; success only.
        listed_file_count: Entries listed; only when a listing was performed.
        list_duration_ms: Time spent listing; only when a listing was performed.
        total_duration_ms: Time from start until the failure; failure only.
        error: Failure detail; failure only.
    """

    succeeded: bool
    connect_duration_ms: int | None = None
    listed_file_count: int | None = None
    list_duration_ms: int | None = None
    total_duration_ms: int | None = None
    error: CheckError | None = None

    @classmethod
    def success(
        cls,
        connect_duration_ms: int,
        listed_file_count: int | None = None,
        list_duration_ms: int | None = None,
    ) -> CheckOutcome:
        return cls(
            succeeded=True,
            connect_duration_ms=connect_duration_ms,
            listed_file_count=listed_file_count,
            list_duration_ms=list_duration_ms,
        )

    @classmethod
    def failure(cls, total_duration_ms: int, error: CheckError) -> CheckOutcome:
        return cls(succeeded=False, total_duration_ms=total_duration_ms, error=error)
