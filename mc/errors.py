"""Error classes for mc.

Two families:
  FatalError    - bootstrap-phase failures (environment, runtime, migration,
                  config, registry). Always terminate the process.
  ReportedError - dispatch-phase failures (unknown command, handler errors).
                  Also terminate with a non-zero status, but they reflect user
                  input rather than environment integrity.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class McError(Exception):
    """Base class for every classified mc error."""

    exit_code = 1

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None and str(self.cause):
            return f"{self.message} ({self.cause})"
        return self.message

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "cause": str(self.cause) if self.cause is not None else None,
            "type": type(self).__name__,
        }


# ---------- Fatal ----------


class FatalError(McError):
    """Bootstrap-phase failure."""


class DuplicateRegistrationError(FatalError):
    pass


class RegistrySealedError(FatalError):
    pass


class RuntimeIncompatibleError(FatalError):
    pass


class MigrationError(FatalError):
    pass


class EnvironmentCheckError(FatalError):
    pass


class ConfigError(FatalError):
    pass


class DiagnosticsError(FatalError):
    pass


# ---------- Reported ----------


class ReportedError(McError):
    """Dispatch-phase failure."""


class CommandNotFoundError(ReportedError):
    def __init__(self, token: str):
        super().__init__(f"Command not found: ‘{token}’")
        self.token = token


class UnsupportedBackendError(ReportedError):
    pass


class UsageError(ReportedError):
    pass


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a fallible step: either a value or a classified error."""

    value: Optional[T] = None
    error: Optional[McError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: McError) -> "Result[T]":
        return cls(error=error)
