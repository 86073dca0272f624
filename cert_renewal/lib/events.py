"""Map calculator diagnostics to informational events for the controller."""

from dataclasses import dataclass
from typing import Protocol

from .durations import format_duration
from .logging_config import LOGGER
from .models import Diagnostic, RenewalPolicy, ScheduleResult, ValidityWindow

EVENT_TYPE_NORMAL = "Normal"

MESSAGE_DURATION_MISMATCH = (
    "Certificate received from server has a validity duration of {actual}. "
    "The requested certificate validity duration was {requested}"
)
MESSAGE_SCHEDULE_ADJUSTED = (
    "Certificate renewal schedule adjusted. Certificate will be renewed {renew_before} "
    "before expiry"
)


@dataclass(frozen=True)
class DiagnosticEvent:
    """Informational event describing why a schedule deviates from the request."""

    event_type: str
    reason: str
    message: str


class EventRecorder(Protocol):
    """Sink for diagnostic events (Kubernetes event recorder, log, test double)."""

    def record(self, name: str, event: DiagnosticEvent) -> None: ...


class LoggingEventRecorder:
    """Records events as structured log lines."""

    def record(self, name: str, event: DiagnosticEvent) -> None:
        LOGGER.info("%s %s for %s: %s", event.event_type, event.reason, name, event.message)


class MemoryEventRecorder:
    """Keeps recorded events in memory, in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, DiagnosticEvent]] = []

    def record(self, name: str, event: DiagnosticEvent) -> None:
        self.events.append((name, event))

    @property
    def reasons(self) -> list[str]:
        return [event.reason for _, event in self.events]


def build_event(
    window: ValidityWindow,
    policy: RenewalPolicy,
    result: ScheduleResult,
) -> DiagnosticEvent | None:
    """Translate a ScheduleResult diagnostic into an event, or None when there is nothing to say."""
    if result.diagnostic is Diagnostic.DURATION_MISMATCH:
        message = MESSAGE_DURATION_MISMATCH.format(
            actual=format_duration(window.actual_duration),
            requested=format_duration(policy.requested_duration),
        )
    elif result.diagnostic is Diagnostic.SCHEDULE_ADJUSTED:
        message = MESSAGE_SCHEDULE_ADJUSTED.format(
            renew_before=format_duration(window.actual_duration - result.lead_time),
        )
    else:
        return None

    return DiagnosticEvent(
        event_type=EVENT_TYPE_NORMAL,
        reason=result.diagnostic.value,
        message=message,
    )


def record_diagnostic(
    recorder: EventRecorder,
    name: str,
    window: ValidityWindow,
    policy: RenewalPolicy,
    result: ScheduleResult,
) -> DiagnosticEvent | None:
    """Build the event for result and hand it to recorder if there is one."""
    event = build_event(window, policy, result)
    if event is not None:
        recorder.record(name, event)
    return event
