"""Data models for renewal schedule calculation."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class Diagnostic(Enum):
    """Why a computed lead time deviates from the caller's literal request."""

    NONE = "None"
    DURATION_MISMATCH = "DurationMismatch"
    SCHEDULE_ADJUSTED = "ScheduleAdjusted"


@dataclass(frozen=True)
class ValidityWindow:
    """Validity interval of an issued certificate.

    Both bounds must be timezone-aware and not_after must be strictly later
    than not_before. Certificates parsed by cryptography always satisfy this;
    anything else is rejected here rather than inside the calculator.
    """

    not_before: datetime
    not_after: datetime

    def __post_init__(self) -> None:
        if self.not_before.tzinfo is None or self.not_after.tzinfo is None:
            raise ValueError("validity window bounds must be timezone-aware")
        if self.not_after <= self.not_before:
            raise ValueError(
                f"notAfter {self.not_after.isoformat()} must be later than "
                f"notBefore {self.not_before.isoformat()}"
            )

    @property
    def actual_duration(self) -> timedelta:
        return self.not_after - self.not_before


@dataclass(frozen=True)
class RenewalPolicy:
    """Requested duration and renew-before for one certificate.

    A zero timedelta means the caller expressed no preference.
    """

    requested_duration: timedelta = timedelta(0)
    requested_renew_before: timedelta = timedelta(0)

    @property
    def duration_set(self) -> bool:
        return self.requested_duration != timedelta(0)

    @property
    def renew_before_set(self) -> bool:
        return self.requested_renew_before != timedelta(0)


@dataclass(frozen=True)
class ScheduleResult:
    """Lead time to wait after notBefore, plus the reason it deviates from the request."""

    lead_time: timedelta
    diagnostic: Diagnostic = Diagnostic.NONE


@dataclass(frozen=True)
class RenewalSchedule:
    """Absolute renewal decision for one certificate at a given instant.

    Contains the calculator result, the instant renewal should begin, and
    how long the controller should wait before looking at it again.
    """

    name: str
    window: ValidityWindow
    result: ScheduleResult
    renew_at: datetime
    requeue_after: timedelta
    due: bool

    @property
    def renew_before(self) -> timedelta:
        """Effective renewal window before notAfter."""
        return self.window.not_after - self.renew_at


@dataclass
class RenewalCheckResult:
    """Result from checking renewal schedules for a set of certificate files.

    Contains one JSON-ready report per certificate and the paths that failed.
    """

    reports: list[dict[str, str | bool | None]]
    failed_paths: list[str]

    @property
    def failed_count(self) -> int:
        return len(self.failed_paths)
