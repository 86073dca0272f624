"""Tests for check_renewal script."""

import json
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import serialization

from cert_renewal.lib.clock import FrozenClock
from cert_renewal.lib.events import MemoryEventRecorder
from cert_renewal.lib.models import RenewalPolicy
from cert_renewal.lib.scheduler import RenewalScheduler
from cert_renewal.scripts.check_renewal import check_renewal, main


@pytest.fixture
def scheduler(frozen_clock: FrozenClock, recorder: MemoryEventRecorder) -> RenewalScheduler:
    """Return scheduler with frozen clock and in-memory recorder."""
    return RenewalScheduler(clock=frozen_clock, recorder=recorder)


def _write_cert(path: Path, cert: x509.Certificate) -> Path:
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    return path


def test_happy_path(client_cert_path: Path, scheduler: RenewalScheduler) -> None:
    """One certificate produces one report and no failures."""
    result = check_renewal([client_cert_path], RenewalPolicy(), scheduler)

    assert result.failed_count == 0
    assert len(result.reports) == 1
    report = result.reports[0]
    assert report["name"] == "test-client-001"
    assert report["leadTime"] == "1440h0m0s"
    assert report["renewBefore"] == "720h0m0s"
    assert report["requeueAfter"] == "1440h0m0s"
    assert report["due"] is False
    assert report["diagnostic"] is None


def test_diagnostic_in_report(
    client_cert_path: Path, scheduler: RenewalScheduler, recorder: MemoryEventRecorder
) -> None:
    """Requested duration disagreeing with the certificate is reported."""
    policy = RenewalPolicy(requested_duration=timedelta(days=120))

    result = check_renewal([client_cert_path], policy, scheduler)

    assert result.reports[0]["diagnostic"] == "DurationMismatch"
    assert recorder.reasons == ["DurationMismatch"]


def test_name_falls_back_to_file_stem(
    tmp_path: Path,
    make_certificate: Callable[..., x509.Certificate],
    scheduler: RenewalScheduler,
) -> None:
    """Certificates without CN are named after their file."""
    cert = make_certificate(timedelta(days=90), common_name=None)
    path = _write_cert(tmp_path / "ingress.pem", cert)

    result = check_renewal([path], RenewalPolicy(), scheduler)

    assert result.reports[0]["name"] == "ingress"


def test_partial_failure(
    tmp_path: Path, client_cert_path: Path, scheduler: RenewalScheduler
) -> None:
    """Unreadable files are counted without stopping the others."""
    missing = tmp_path / "missing.pem"
    garbage = tmp_path / "garbage.pem"
    garbage.write_bytes(b"not a certificate")

    result = check_renewal([missing, client_cert_path, garbage], RenewalPolicy(), scheduler)

    assert len(result.reports) == 1
    assert result.failed_paths == [str(missing), str(garbage)]


class TestMain:
    """Tests for the CLI entry point."""

    def test_prints_json_report(
        self, client_cert_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """main prints one JSON document and exits 0."""
        exit_code = main(
            [
                str(client_cert_path),
                "--renew-before",
                "360h",
                "--now",
                "2026-01-11T00:00:00+00:00",
                "--json-indent",
                "0",
            ]
        )

        assert exit_code == 0
        report = json.loads(capsys.readouterr().out)
        assert report["renewAt"] == "2026-03-17T00:00:00+00:00"
        assert report["requeueAfter"] == "1560h0m0s"
        assert report["due"] is False

    def test_duration_flag(
        self, client_cert_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """--duration feeds the mismatch check."""
        exit_code = main([str(client_cert_path), "--duration", "30d"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["diagnostic"] == "DurationMismatch"

    def test_missing_file_exits_1(self, tmp_path: Path) -> None:
        """Any failed certificate makes the run fail."""
        assert main([str(tmp_path / "missing.pem")]) == 1

    def test_rejects_naive_now(self, client_cert_path: Path) -> None:
        """--now without an offset is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(client_cert_path), "--now", "2026-01-11T00:00:00"])
        assert exc_info.value.code == 2

    def test_rejects_bad_duration(self, client_cert_path: Path) -> None:
        """Malformed durations are rejected by argparse."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(client_cert_path), "--renew-before", "ten days"])
        assert exc_info.value.code == 2

    def test_rejects_out_of_range_duration(self, client_cert_path: Path) -> None:
        """Durations too large for timedelta are a usage error, not a crash."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(client_cert_path), "--renew-before", "99999999999d"])
        assert exc_info.value.code == 2
