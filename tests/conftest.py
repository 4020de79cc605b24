"""Pytest configuration: env defaults, import path, and shared skill fixtures.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so local overrides are honored.
"""
from __future__ import annotations

import base64
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

os.environ.setdefault("SKILL_LOG_LEVEL", "info")
os.environ.setdefault("ENABLE_HEALTHCHECK_AUTH", "false")


def _key_usage(*, cert_sign: bool) -> x509.KeyUsage:
    return x509.KeyUsage(
        digital_signature=not cert_sign,
        content_commitment=False,
        key_encipherment=not cert_sign,
        data_encipherment=False,
        key_agreement=False,
        key_cert_sign=cert_sign,
        crl_sign=cert_sign,
        encipher_only=False,
        decipher_only=False,
    )


@dataclass
class SigningPki:
    """Throwaway root CA plus a signing certificate issued by it."""

    root_cert: x509.Certificate
    leaf_cert: x509.Certificate
    leaf_key: rsa.RSAPrivateKey

    @property
    def chain_pem(self) -> bytes:
        encoding = serialization.Encoding.PEM
        return self.leaf_cert.public_bytes(encoding) + self.root_cert.public_bytes(encoding)

    def sign(self, body: bytes, algorithm: hashes.HashAlgorithm | None = None) -> str:
        signature = self.leaf_key.sign(body, padding.PKCS1v15(), algorithm or hashes.SHA1())
        return base64.b64encode(signature).decode("ascii")


def build_pki(domain: str = "echo-api.amazon.com", *, leaf_days: int = 30) -> SigningPki:
    """Generate a root CA and a leaf certificate for ``domain``."""
    now = datetime.now(timezone.utc)
    root_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    root_name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "Skill Test Root CA")])
    root_cert = (
        x509.CertificateBuilder()
        .subject_name(root_name)
        .issuer_name(root_name)
        .public_key(root_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=365))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .add_extension(_key_usage(cert_sign=True), critical=True)
        .add_extension(
            x509.SubjectKeyIdentifier.from_public_key(root_key.public_key()), critical=False
        )
        .sign(root_key, hashes.SHA256())
    )

    leaf_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    leaf_cert = (
        x509.CertificateBuilder()
        .subject_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, domain)]))
        .issuer_name(root_name)
        .public_key(leaf_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=leaf_days))
        .add_extension(x509.SubjectAlternativeName([x509.DNSName(domain)]), critical=False)
        .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
        .add_extension(_key_usage(cert_sign=False), critical=True)
        .add_extension(x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH]), critical=False)
        .add_extension(
            x509.AuthorityKeyIdentifier.from_issuer_public_key(root_key.public_key()),
            critical=False,
        )
        .add_extension(
            x509.SubjectKeyIdentifier.from_public_key(leaf_key.public_key()), critical=False
        )
        .sign(root_key, hashes.SHA256())
    )
    return SigningPki(root_cert=root_cert, leaf_cert=leaf_cert, leaf_key=leaf_key)


@pytest.fixture(scope="session")
def pki() -> SigningPki:
    """Signing PKI trusted by the verifiers built in tests."""
    return build_pki()


def iso_timestamp(moment: datetime | None = None) -> str:
    """Format ``moment`` (default: now) the way the platform stamps requests."""
    return (moment or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H:%M:%SZ")


def make_envelope(
    request_type: str = "IntentRequest",
    intent: str | None = None,
    *,
    display: bool = True,
    timestamp: str | None = None,
    application_id: str = "amzn1.ask.skill.meteosat",
) -> dict[str, Any]:
    """Build a skill request envelope as sent by the platform."""
    interfaces: dict[str, Any] = {"AudioPlayer": {}}
    if display:
        interfaces["Display"] = {"templateVersion": "1.0", "markupVersion": "1.0"}
    request: dict[str, Any] = {
        "type": request_type,
        "requestId": "amzn1.echo-api.request.test",
        "timestamp": timestamp or iso_timestamp(),
        "locale": "it-IT",
    }
    if intent is not None:
        request["intent"] = {"name": intent, "confirmationStatus": "NONE"}
    if request_type == "SessionEndedRequest":
        request["reason"] = "USER_INITIATED"
    return {
        "version": "1.0",
        "session": {
            "new": request_type == "LaunchRequest",
            "sessionId": "amzn1.echo-api.session.test",
            "application": {"applicationId": application_id},
        },
        "context": {
            "System": {
                "application": {"applicationId": application_id},
                "device": {"deviceId": "device-1", "supportedInterfaces": interfaces},
            }
        },
        "request": request,
    }


@pytest.fixture
def envelope_factory() -> Callable[..., dict[str, Any]]:
    """Return the envelope builder for tests that need raw payloads."""
    return make_envelope


@pytest.fixture(scope="session")
def pki_factory() -> Callable[..., SigningPki]:
    """Return the PKI builder for tests that need foreign or mis-named certificates."""
    return build_pki
