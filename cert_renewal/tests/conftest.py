"""Test fixtures for cert_renewal tests."""

import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from cryptography.x509 import oid

from cert_renewal.lib.clock import FrozenClock
from cert_renewal.lib.events import MemoryEventRecorder
from cert_renewal.lib.models import ValidityWindow

ISSUED_AT = datetime(2026, 1, 1, tzinfo=UTC)

CertFactory = Callable[..., x509.Certificate]


@pytest.fixture(scope="session")
def signing_key() -> RSAPrivateKey:
    """Generate one RSA key for every test certificate."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def make_certificate(signing_key: RSAPrivateKey) -> CertFactory:
    """Return factory building self-signed certificates with a given validity."""

    def _make(
        validity: timedelta,
        not_before: datetime = ISSUED_AT,
        common_name: str | None = "test-client-001",
    ) -> x509.Certificate:
        attributes = [x509.NameAttribute(oid.NameOID.ORGANIZATION_NAME, "Test Org")]
        if common_name is not None:
            attributes.append(x509.NameAttribute(oid.NameOID.COMMON_NAME, common_name))
        subject = x509.Name(attributes)

        return (
            x509.CertificateBuilder()
            .subject_name(subject)
            .issuer_name(subject)
            .public_key(signing_key.public_key())
            .serial_number(uuid.uuid4().int)
            .not_valid_before(not_before)
            .not_valid_after(not_before + validity)
            .sign(signing_key, hashes.SHA256())
        )

    return _make


@pytest.fixture
def client_cert(make_certificate: CertFactory) -> x509.Certificate:
    """Return 90-day client certificate issued at ISSUED_AT."""
    return make_certificate(timedelta(days=90))


@pytest.fixture
def client_cert_path(tmp_path: Path, client_cert: x509.Certificate) -> Path:
    """Write the 90-day client certificate to disk and return its path."""
    path = tmp_path / "tls.crt"
    path.write_bytes(client_cert.public_bytes(serialization.Encoding.PEM))
    return path


@pytest.fixture
def window_factory() -> Callable[[timedelta], ValidityWindow]:
    """Return factory building validity windows starting at ISSUED_AT."""

    def _make(validity: timedelta) -> ValidityWindow:
        return ValidityWindow(not_before=ISSUED_AT, not_after=ISSUED_AT + validity)

    return _make


@pytest.fixture
def frozen_clock() -> FrozenClock:
    """Return clock frozen at ISSUED_AT."""
    return FrozenClock(ISSUED_AT)


@pytest.fixture
def recorder() -> MemoryEventRecorder:
    """Return in-memory event recorder."""
    return MemoryEventRecorder()


@pytest.fixture
def issued_at() -> datetime:
    """Return notBefore shared by all test certificates and windows."""
    return ISSUED_AT
