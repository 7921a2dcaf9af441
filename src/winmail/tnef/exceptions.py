"""Exceptions raised while decoding TNEF streams."""

from __future__ import annotations

from winmail.tnef.enums import ComplianceStatus


class TnefError(Exception):
    """Base class for every TNEF decoding error."""


class TnefComplianceError(TnefError):
    """A compliance violation encountered while reading in strict mode."""

    def __init__(
        self, status: ComplianceStatus, cause: BaseException | None = None
    ) -> None:
        super().__init__(f"TNEF stream is not compliant: {status!r}")
        self.status = status
        self.cause = cause


class TnefTruncatedError(TnefError, EOFError):
    """The stream ended in the middle of a record."""


class TnefStateError(TnefError, RuntimeError):
    """A reader method was called when the cursor does not allow it."""
