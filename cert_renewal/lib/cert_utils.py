"""Certificate utility functions for loading PEM data and reading validity windows."""

from cryptography import x509

from .models import ValidityWindow


def deserialize_certificate(pem_data: bytes) -> x509.Certificate:
    """Deserialize certificate from PEM bytes."""
    return x509.load_pem_x509_certificate(pem_data)


def load_certificates(pem_bundle: bytes) -> list[x509.Certificate]:
    """Load every certificate from a PEM bundle, leaf first.

    Text outside the PEM blocks (comments, trailing newlines) is ignored.

    Args:
        pem_bundle: One or more concatenated PEM certificates (e.g. tls.crt)

    Returns:
        Certificates in file order

    Raises:
        ValueError: If the bundle holds no certificate or a block is malformed
    """
    return x509.load_pem_x509_certificates(pem_bundle)


def validity_window_from_certificate(cert: x509.Certificate) -> ValidityWindow:
    """Read the validity window an issuing authority actually granted."""
    return ValidityWindow(
        not_before=cert.not_valid_before_utc,
        not_after=cert.not_valid_after_utc,
    )


def get_certificate_serial_hex(cert: x509.Certificate) -> str:
    """Return certificate serial number as hex with colons (e.g., 3A:F2:B1:...)."""
    serial_hex = f"{cert.serial_number:X}"
    if len(serial_hex) % 2 != 0:
        serial_hex = "0" + serial_hex
    return ":".join(serial_hex[i : i + 2] for i in range(0, len(serial_hex), 2))


def get_common_name(cert: x509.Certificate) -> str | None:
    """Return the subject CN, or None when the certificate carries only SANs."""
    attributes = cert.subject.get_attributes_for_oid(x509.NameOID.COMMON_NAME)
    if not attributes:
        return None
    cn = attributes[0].value
    if not isinstance(cn, str):
        raise ValueError("CN must be string")
    return cn
