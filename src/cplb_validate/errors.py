"""Error types and error collection for CPLB validation.

Validation never raises. Every problem found is represented by a ``SpecError``
instance and appended to a list, so that a single pass reports the complete
set of problems in a configuration. ``ErrorCollector`` gathers those lists for
reporting at the end of a run.
"""

import logging

logger = logging.getLogger(__name__)


class SpecError(ValueError):
    """Base class for a single validation problem.

    Attributes:
        message: Human-readable error message
        field: Path of the offending field using JSON names
            (e.g., "keepalived.vrrpInstances[0].authPass")
    """

    def __init__(self, message: str, field: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, field={self.field!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpecError):
            return NotImplemented
        return (type(self), self.message, self.field) == (
            type(other),
            other.message,
            other.field,
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.field))

    @property
    def section(self) -> str:
        """Top-level section of the field path, used to group summaries.

        ``keepalived.vrrpInstances[1].authPass`` belongs to section
        ``keepalived.vrrpInstances[1]``; ``type`` belongs to ``type``.
        """
        if not self.field:
            return "spec"
        parts = self.field.split(".")
        if parts[0] == "keepalived" and len(parts) > 1:
            return ".".join(parts[:2])
        return parts[0]


class NICLookupError(SpecError):
    """The default network interface could not be resolved."""


class RangeError(SpecError):
    """A numeric field is outside its allowed bounds."""


class FormatError(SpecError):
    """A CIDR or IP literal could not be parsed."""


class EnumError(SpecError):
    """A value is not one of a fixed set of choices."""


class RequiredFieldError(SpecError):
    """A required field is empty."""


class LengthError(SpecError):
    """A string field is too long."""


class ConflictError(SpecError):
    """Two settings cannot be used together."""


class ErrorCollector:
    """Collects validation errors for batch reporting.

    Errors are logged as they are added; ``log_summary`` produces a grouped
    report once everything has been collected.
    """

    def __init__(self) -> None:
        """Initialize an empty error collector."""
        self.errors: list[SpecError] = []

    def add_error(self, error: SpecError) -> None:
        """Add an error to the collection and log it immediately.

        Args:
            error: The validation error to record
        """
        self.errors.append(error)
        if error.field:
            logger.error("[%s] %s", error.field, error)
        else:
            logger.error("%s", error)

    def extend(self, errors: list[SpecError]) -> None:
        """Add several errors, preserving their order.

        Args:
            errors: Errors returned by a validator
        """
        for error in errors:
            self.add_error(error)

    def has_errors(self) -> bool:
        """Check if any errors have been collected."""
        return bool(self.errors)

    def get_error_count(self) -> int:
        """Get the number of collected errors."""
        return len(self.errors)

    def log_summary(self) -> None:
        """Log a summary of all collected errors grouped by section."""
        if not self.errors:
            logger.info("Validation completed with no errors")
            return

        logger.error("=" * 80)
        logger.error("CPLB VALIDATION ERROR SUMMARY")
        logger.error("=" * 80)
        logger.error("Total errors: %d", self.get_error_count())

        errors_by_section: dict[str, list[SpecError]] = {}
        for error in self.errors:
            errors_by_section.setdefault(error.section, []).append(error)

        # Sections keep the order in which they were first reported
        for section, section_errors in errors_by_section.items():
            logger.error("")
            logger.error("Section: %s (%d issues)", section, len(section_errors))
            for error in section_errors:
                logger.error("  [%s] %s", type(error).__name__, error)

        logger.error("=" * 80)
        logger.error("Configuration rejected with %d error(s)", self.get_error_count())
