"""Renewal schedule calculator.

Reconciles the validity window actually granted by the issuing authority with
the requested duration and renew-before values from the certificate's policy.
The function is total: misconfigured policies are normalised into a safe
schedule and the deviation is reported through ``ScheduleResult.diagnostic``.
"""

from datetime import timedelta

from .config import RenewalConfig
from .models import Diagnostic, RenewalPolicy, ScheduleResult, ValidityWindow


def compute(
    window: ValidityWindow,
    policy: RenewalPolicy,
    config: RenewalConfig | None = None,
) -> ScheduleResult:
    """Compute how long after notBefore renewal should be triggered.

    Steps:
    1. Flag a requested duration that disagrees with the granted one beyond
       the configured tolerance. The granted window is always used.
    2. A renew-before inside (0, actual duration) is honoured as is.
    3. No renew-before at all uses the default window, unless the certificate
       is no longer than that window.
    4. Anything else (short certificate, renew-before out of range) renews
       at the fallback fraction of the validity period.

    Args:
        window: Validity window read from the issued certificate
        policy: Requested duration and renew-before (zero means unset)
        config: Tolerance and default window; module defaults when omitted

    Returns:
        ScheduleResult with 0 < lead_time <= window.actual_duration
    """
    config = config or RenewalConfig()
    actual_duration = window.actual_duration
    diagnostic = Diagnostic.NONE

    if policy.duration_set:
        drift = abs(policy.requested_duration - actual_duration)
        if drift > config.duration_tolerance:
            diagnostic = Diagnostic.DURATION_MISMATCH

    renew_before = policy.requested_renew_before

    if policy.renew_before_set:
        # Negative values count as configured but out of range
        if timedelta(0) < renew_before < actual_duration:
            return ScheduleResult(actual_duration - renew_before, diagnostic)
    elif actual_duration > config.default_renew_before:
        return ScheduleResult(actual_duration - config.default_renew_before, diagnostic)

    if diagnostic is Diagnostic.NONE:
        diagnostic = Diagnostic.SCHEDULE_ADJUSTED
    return ScheduleResult(config.fallback_lead_time(actual_duration), diagnostic)
