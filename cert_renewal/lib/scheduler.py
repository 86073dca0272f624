"""Turn calculator results into absolute renewal decisions for a reconciliation loop."""

from datetime import timedelta

from cryptography import x509

from .calculator import compute
from .cert_utils import validity_window_from_certificate
from .clock import Clock, utc_now
from .config import RenewalConfig
from .events import EventRecorder, LoggingEventRecorder, record_diagnostic
from .logging_config import LOGGER
from .models import RenewalPolicy, RenewalSchedule, ValidityWindow


class RenewalScheduler:
    """Schedules certificate renewal relative to an injected clock."""

    def __init__(
        self,
        config: RenewalConfig | None = None,
        clock: Clock = utc_now,
        recorder: EventRecorder | None = None,
    ) -> None:
        """Initialize scheduler.

        Args:
            config: Renewal configuration (defaults to RenewalConfig())
            clock: Zero-argument callable returning the current aware datetime
            recorder: Event sink for diagnostics (defaults to logging)
        """
        self.config = config or RenewalConfig()
        self.clock = clock
        self.recorder = recorder or LoggingEventRecorder()

    def schedule(
        self, name: str, window: ValidityWindow, policy: RenewalPolicy
    ) -> RenewalSchedule:
        """Compute when name should be renewed and how long to wait until then.

        Args:
            name: Certificate identifier used in events and logs
            window: Validity window of the currently issued certificate
            policy: Requested duration and renew-before

        Returns:
            RenewalSchedule with renew_at, requeue_after and due flag
        """
        result = compute(window, policy, self.config)
        record_diagnostic(self.recorder, name, window, policy, result)

        now = self.clock()
        renew_at = window.not_before + result.lead_time
        requeue_after = max(renew_at - now, timedelta(0))
        due = now >= renew_at

        LOGGER.info(
            "Certificate %s renews at %s (requeue in %s, due=%s)",
            name,
            renew_at.isoformat(),
            requeue_after,
            due,
        )

        return RenewalSchedule(
            name=name,
            window=window,
            result=result,
            renew_at=renew_at,
            requeue_after=requeue_after,
            due=due,
        )

    def schedule_certificate(
        self, name: str, cert: x509.Certificate, policy: RenewalPolicy
    ) -> RenewalSchedule:
        """Schedule renewal for a parsed X.509 certificate."""
        return self.schedule(name, validity_window_from_certificate(cert), policy)
