#!/usr/bin/env python3
"""Check renewal schedules: report when each issued certificate should be renewed."""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

from cert_renewal.lib.cert_utils import (
    get_certificate_serial_hex,
    get_common_name,
    load_certificates,
)
from cert_renewal.lib.clock import FrozenClock, utc_now
from cert_renewal.lib.durations import format_duration, parse_duration
from cert_renewal.lib.logging_config import LOGGER
from cert_renewal.lib.models import (
    Diagnostic,
    RenewalCheckResult,
    RenewalPolicy,
    RenewalSchedule,
)
from cert_renewal.lib.scheduler import RenewalScheduler


def build_report(schedule: RenewalSchedule, serial_number: str) -> dict[str, str | bool | None]:
    """Flatten a RenewalSchedule into the JSON object printed per certificate."""
    diagnostic = schedule.result.diagnostic
    return {
        "name": schedule.name,
        "serialNumber": serial_number,
        "notBefore": schedule.window.not_before.isoformat(),
        "notAfter": schedule.window.not_after.isoformat(),
        "leadTime": format_duration(schedule.result.lead_time),
        "renewBefore": format_duration(schedule.renew_before),
        "renewAt": schedule.renew_at.isoformat(),
        "requeueAfter": format_duration(schedule.requeue_after),
        "due": schedule.due,
        "diagnostic": None if diagnostic is Diagnostic.NONE else diagnostic.value,
    }


def check_renewal(
    cert_paths: list[Path],
    policy: RenewalPolicy,
    scheduler: RenewalScheduler,
) -> RenewalCheckResult:
    """Compute the renewal schedule for the leaf certificate of every file.

    Args:
        cert_paths: PEM files; the first certificate in each is the leaf
        policy: Requested duration and renew-before applied to every file
        scheduler: Scheduler carrying config, clock and event recorder

    Returns:
        RenewalCheckResult with per-certificate reports and failed paths
    """
    reports: list[dict[str, str | bool | None]] = []
    failed_paths: list[str] = []

    for cert_path in cert_paths:
        try:
            leaf = load_certificates(cert_path.read_bytes())[0]
            name = get_common_name(leaf) or cert_path.stem
            schedule = scheduler.schedule_certificate(name, leaf, policy)
            reports.append(build_report(schedule, get_certificate_serial_hex(leaf)))
        except (OSError, ValueError) as e:
            LOGGER.error("Failed to check %s: %s", cert_path, str(e))
            failed_paths.append(str(cert_path))

    return RenewalCheckResult(reports=reports, failed_paths=failed_paths)


def main(argv: list[str] | None = None) -> int:
    """Run renewal schedule check.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(
        description="Report when issued certificates should be renewed"
    )
    parser.add_argument(
        "certificates",
        nargs="+",
        type=Path,
        help="PEM certificate files (leaf first)",
    )
    parser.add_argument(
        "--duration",
        type=parse_duration,
        default="0",
        help="Requested certificate duration, e.g. 2160h or 90d (default: unset)",
    )
    parser.add_argument(
        "--renew-before",
        type=parse_duration,
        default="0",
        help="Requested renew-before, e.g. 720h or 30d (default: unset)",
    )
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Evaluate the schedule at this ISO 8601 instant instead of the current time",
    )
    parser.add_argument(
        "--json-indent",
        type=int,
        default=2,
        help="Indentation for JSON output (default: 2)",
    )
    args = parser.parse_args(argv)

    if args.now is not None and args.now.tzinfo is None:
        parser.error("--now must include a UTC offset")

    try:
        clock = FrozenClock(args.now) if args.now is not None else utc_now
        scheduler = RenewalScheduler(clock=clock)
        policy = RenewalPolicy(
            requested_duration=args.duration,
            requested_renew_before=args.renew_before,
        )

        result = check_renewal(args.certificates, policy, scheduler)

        for report in result.reports:
            print(json.dumps(report, indent=args.json_indent))

        if result.failed_count > 0:
            LOGGER.warning("Failed certificates: %s", result.failed_paths)
            return 1

        return 0

    except Exception as e:
        LOGGER.error("Renewal check failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
