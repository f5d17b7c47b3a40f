from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    TRANSPORT = "transport"  # connection failure or timeout
    PROTOCOL = "protocol"  # non-200 status
    READ = "read"  # body could not be drained or decoded
    FORMAT = "format"  # non-numeric field, or nothing numeric at all
    SHAPE = "shape"  # wrong number of fields


class PollError(Exception):
    """A poll cycle failed at one of its stages.

    The loop treats every kind the same way; the kind and detail only feed
    the diagnostic log.
    """

    def __init__(self, kind: FailureKind, detail: str = "") -> None:
        super().__init__(kind, detail)
        self.kind = kind
        self.detail = detail

    def __str__(self) -> str:
        if not self.detail:
            return self.kind.value
        return f"{self.kind.value}: {self.detail}"
