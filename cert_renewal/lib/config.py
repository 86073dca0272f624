"""Renewal policy constants and configuration dataclass."""

from dataclasses import dataclass
from datetime import timedelta

# Renewal window used when a certificate carries no renew-before preference.
# Validity periods shorter than this fall back to the fractional schedule.
DEFAULT_RENEW_BEFORE = timedelta(days=30)

# Issuing authorities backdate notBefore and round notAfter, so a granted
# lifetime within this distance of the requested one is not a mismatch.
DURATION_MISMATCH_TOLERANCE = timedelta(minutes=5)


@dataclass
class RenewalConfig:
    """Renewal scheduling configuration with no controller dependencies."""

    default_renew_before: timedelta = DEFAULT_RENEW_BEFORE
    duration_tolerance: timedelta = DURATION_MISMATCH_TOLERANCE
    fallback_numerator: int = 2
    fallback_denominator: int = 3

    def __post_init__(self) -> None:
        if self.fallback_denominator <= 0:
            raise ValueError("fallback_denominator must be positive")
        if not 0 < self.fallback_numerator <= self.fallback_denominator:
            raise ValueError("fallback_numerator must be in (0, fallback_denominator]")
        if self.default_renew_before <= timedelta(0):
            raise ValueError("default_renew_before must be positive")
        if self.duration_tolerance < timedelta(0):
            raise ValueError("duration_tolerance must not be negative")

    def fallback_lead_time(self, actual_duration: timedelta) -> timedelta:
        """Return the fraction of the validity period used when renew-before is unusable."""
        return actual_duration * self.fallback_numerator / self.fallback_denominator
