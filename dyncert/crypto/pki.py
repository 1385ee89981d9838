"""
Certificate Factory and X.509 inspection helpers.
Provides issue(hostname, key_pair) and verify_self_signed(cert).
"""
import datetime
import logging
from typing import Optional

from cryptography import x509
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

from dyncert.common.errors import InvalidHostnameError
from dyncert.common.protocol import IssuedCertificate, KeyPair
from dyncert.common.utils import add_one_year, now_utc
from dyncert.crypto import serial
from dyncert.crypto.sign import check_compatible, sign_builder, verify_signature

logger = logging.getLogger(__name__)

MAX_HOSTNAME_LENGTH = 253


def load_cert(pem_bytes):
    """Load certificate from PEM bytes (string or bytes)."""
    if isinstance(pem_bytes, str):
        pem_bytes = pem_bytes.encode()
    return x509.load_pem_x509_certificate(pem_bytes)


def get_cn(cert: x509.Certificate):
    attrs = cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    return attrs[0].value if attrs else None


def get_san_dns_names(cert: x509.Certificate):
    san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    return san.get_values_for_type(x509.DNSName)


# -------------------- ISSUANCE -------------------- #

def _host_name(hostname: str) -> x509.Name:
    if not isinstance(hostname, str) or not hostname.strip():
        raise InvalidHostnameError("Hostname must be a non-empty string")
    if not hostname.isascii():
        raise InvalidHostnameError(f"Hostname must be ASCII (use the IDNA A-label): {hostname!r}")
    if len(hostname) > MAX_HOSTNAME_LENGTH:
        raise InvalidHostnameError(f"Hostname longer than {MAX_HOSTNAME_LENGTH} characters")
    # CN carries the full DNS name, past the 64 character X.520 bound
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, hostname, _validate=False)])


def issue(hostname: str, key_pair: KeyPair,
          now: Optional[datetime.datetime] = None,
          today: Optional[datetime.date] = None) -> IssuedCertificate:
    """
    Build and self-sign a server certificate for hostname.

    subject == issuer == CN=hostname, valid from now for one calendar year,
    SAN = [hostname, *.hostname]. Extensions are added in a fixed order:
    basicConstraints, keyUsage, extendedKeyUsage, subjectAltName,
    subjectKeyIdentifier. IP literals still go in as DNS names.
    """
    name = _host_name(hostname)
    check_compatible(key_pair)

    not_before = now if now is not None else now_utc()
    serial_number = serial.current(today)

    builder = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key_pair.public_key)
        .serial_number(int(serial_number))
        .not_valid_before(not_before)
        .not_valid_after(add_one_year(not_before))
        .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=False)
        .add_extension(
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=False,
                key_encipherment=True,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=False,
        )
        .add_extension(
            x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH, ExtendedKeyUsageOID.CLIENT_AUTH]),
            critical=False,
        )
        .add_extension(
            x509.SubjectAlternativeName([x509.DNSName(hostname), x509.DNSName("*." + hostname)]),
            critical=False,
        )
        .add_extension(x509.SubjectKeyIdentifier.from_public_key(key_pair.public_key), critical=False)
    )
    cert = sign_builder(builder, key_pair.private_key)
    logger.debug("Issued certificate for %s (serial %s)", hostname, serial_number)
    return IssuedCertificate(certificate=cert, serial_number=serial_number, key_pair=key_pair)


# -------------------- VERIFICATION -------------------- #

def verify_self_signed(cert_or_pem, expected_cn: str = None):
    """
    Verify a self-issued certificate.
    cert_or_pem: Either a x509.Certificate object or PEM bytes/string
    expected_cn: Optional expected common name
    """
    if isinstance(cert_or_pem, x509.Certificate):
        cert = cert_or_pem
    else:
        cert = load_cert(cert_or_pem)

    if cert.issuer != cert.subject:
        raise ValueError("BAD CERT: issuer differs from subject")
    if not verify_signature(cert.public_key(), cert.signature,
                            cert.tbs_certificate_bytes, cert.signature_hash_algorithm):
        raise ValueError("BAD CERT: signature invalid")
    now = datetime.datetime.now(datetime.timezone.utc)
    if cert.not_valid_before_utc > now or cert.not_valid_after_utc < now:
        raise ValueError("BAD CERT: EXPIRED/NOT YET VALID")
    if expected_cn:
        cn = get_cn(cert)
        if cn != expected_cn:
            raise ValueError(f"BAD CERT: CN MISMATCH (got {cn}, expected {expected_cn})")
    return True
