"""
Error taxonomy for DGSEA.

Input problems raise a subclass of DgseaError tagged with a FailureKind.
Numeric degeneracy (empty gene universe, NaN probabilities) is never raised
from the statistical engine; it is normalized to documented defaults there.
Callers that prefer values over exceptions can wrap an operation with
Outcome.capture.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional


class FailureKind(Enum):
    """Tag describing why an operation failed."""
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    DEGENERATE = "degenerate"
    PARSE = "parse"


class DgseaError(Exception):
    """Base class for all errors raised by dgsea."""

    kind: FailureKind = FailureKind.INVALID_ARGUMENT


class InvalidArgumentError(DgseaError, ValueError):
    """A required input is missing, empty or out of range."""

    kind = FailureKind.INVALID_ARGUMENT


class PathwayNotFoundError(InvalidArgumentError):
    """A requested pathway id has no rows in the pathway-gene table."""

    kind = FailureKind.NOT_FOUND

    def __init__(self, pathway_id: str):
        self.pathway_id = pathway_id
        super().__init__(
            f"Pathway not found: provided pathway-id '{pathway_id}' was not "
            f"found in the pathway-genes data"
        )


class DegenerateDataError(DgseaError):
    """There is nothing left to present after filtering."""

    kind = FailureKind.DEGENERATE


class ParseError(DgseaError, ValueError):
    """An input file could not be read or has malformed rows."""

    kind = FailureKind.PARSE


@dataclass(frozen=True)
class Outcome:
    """
    Result of an operation: either a value or a tagged failure.

    Attributes:
        value: Return value of the operation (None on failure)
        kind: Failure tag, None on success
        message: Human-readable failure message, None on success

    Example:
        >>> outcome = Outcome.capture(distributor.percentages_for_pathways, ['hsaXX'])
        >>> if not outcome.ok:
        ...     print(outcome.kind, outcome.message)
    """
    value: Any = None
    kind: Optional[FailureKind] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is None

    @classmethod
    def success(cls, value: Any) -> "Outcome":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: FailureKind, message: str) -> "Outcome":
        return cls(kind=kind, message=message)

    @classmethod
    def capture(cls, func: Callable[..., Any], *args, **kwargs) -> "Outcome":
        """Run func and convert a raised DgseaError into a failure."""
        try:
            return cls.success(func(*args, **kwargs))
        except DgseaError as e:
            return cls.failure(e.kind, str(e))

    def unwrap(self) -> Any:
        """Return the value, or raise DgseaError for a failure."""
        if not self.ok:
            raise DgseaError(self.message)
        return self.value
