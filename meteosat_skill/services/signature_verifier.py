"""Verification that skill requests were signed by the voice platform.

A request is trusted only when all of the following hold:

* the ``SignatureCertChainUrl`` header points at the platform's certificate
  bucket (https, ``s3.amazonaws.com``, port 443, path under ``/echo.api/``);
* the PEM chain served there validates against the trusted root store and the
  leaf certificate names ``echo-api.amazon.com``;
* the ``Signature`` (SHA-1) or ``Signature-256`` (SHA-256) header is a valid
  RSA PKCS#1 v1.5 signature of the raw body under the leaf public key;
* the request timestamp is within the configured tolerance of now.

``RequestVerifier.validate`` never raises: every failure is logged and
reported as ``False`` so callers can answer with a bare 400.
"""

from __future__ import annotations

import base64
import binascii
import posixpath
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence
from urllib.parse import urlsplit

import certifi
import httpx
from cachetools import TTLCache
from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.x509.verification import PolicyBuilder, Store, VerificationError

from meteosat_skill.core.exceptions import CertificateChainError, SignatureMismatchError
from meteosat_skill.core.logging import get_logger

logger = get_logger(__name__)

CERT_CHAIN_URL_SCHEME = "https"
CERT_CHAIN_URL_HOST = "s3.amazonaws.com"
CERT_CHAIN_URL_PORT = 443
CERT_CHAIN_URL_PATH_PREFIX = "/echo.api/"
SIGNING_CERT_DOMAIN = "echo-api.amazon.com"
DEFAULT_TIMESTAMP_TOLERANCE_SECONDS = 150

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_valid_cert_chain_url(url: Optional[str]) -> bool:
    """Return True when ``url`` points at the platform's signing certificate bucket."""
    if not url or not url.strip():
        return False
    candidate = url.strip()
    # whitespace and control characters never appear in a fetchable url
    if any(ch.isspace() or not ch.isprintable() for ch in candidate):
        return False
    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError:
        return False
    if parts.scheme.lower() != CERT_CHAIN_URL_SCHEME:
        return False
    if (parts.hostname or "").lower() != CERT_CHAIN_URL_HOST:
        return False
    if port is not None and port != CERT_CHAIN_URL_PORT:
        return False
    # normpath collapses "/echo.api/../" tricks before the prefix check
    path = posixpath.normpath(parts.path) if parts.path else ""
    return path.startswith(CERT_CHAIN_URL_PATH_PREFIX)


def timestamp_within_tolerance(
    request_timestamp: Optional[datetime],
    tolerance_seconds: int = DEFAULT_TIMESTAMP_TOLERANCE_SECONDS,
    *,
    now: Optional[datetime] = None,
) -> bool:
    """Return True when ``request_timestamp`` is within ``tolerance_seconds`` of now."""
    if request_timestamp is None:
        return False
    if request_timestamp.tzinfo is None:
        request_timestamp = request_timestamp.replace(tzinfo=timezone.utc)
    current = now or _utcnow()
    return abs((current - request_timestamp).total_seconds()) <= tolerance_seconds


def load_trusted_roots(path: Optional[Path] = None) -> list[x509.Certificate]:
    """Load the PEM root bundle at ``path``, defaulting to the certifi bundle."""
    bundle = Path(path) if path is not None else Path(certifi.where())
    return x509.load_pem_x509_certificates(bundle.read_bytes())


def decode_signature(signature: str) -> bytes:
    """Decode a base64 signature header, raising ``SignatureMismatchError`` when malformed."""
    try:
        return base64.b64decode(signature.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SignatureMismatchError("signature header is not valid base64") from exc


def verify_body_signature(
    certificate: x509.Certificate,
    body: bytes,
    signature: bytes,
    algorithm: hashes.HashAlgorithm,
) -> None:
    """Check ``signature`` over ``body`` with the certificate's RSA public key."""
    public_key = certificate.public_key()
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise SignatureMismatchError("signing certificate does not carry an RSA key")
    try:
        public_key.verify(signature, body, padding.PKCS1v15(), algorithm)
    except InvalidSignature as exc:
        raise SignatureMismatchError("body signature does not match") from exc


class CertificateChainLoader:
    """Fetch, validate, and cache signing certificate chains by URL."""

    def __init__(
        self,
        trusted_roots: Sequence[x509.Certificate],
        *,
        timeout_seconds: float = 3.0,
        cache_ttl_seconds: int = 3600,
        cache_max_entries: int = 32,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Clock = _utcnow,
    ) -> None:
        if not trusted_roots:
            raise ValueError("at least one trusted root certificate is required")
        self._store = Store(list(trusted_roots))
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport
        self._clock = clock
        self._cache: TTLCache[str, x509.Certificate] = TTLCache(
            maxsize=cache_max_entries, ttl=cache_ttl_seconds
        )

    async def load_signing_certificate(self, url: str) -> x509.Certificate:
        """Return the validated leaf certificate of the chain served at ``url``."""
        cached = self._cache.get(url)
        if cached is not None and self._still_valid(cached):
            return cached
        pem = await self._fetch(url)
        leaf = self._validate_chain(pem)
        self._cache[url] = leaf
        return leaf

    def cached_urls(self) -> list[str]:
        """Return the chain URLs currently held in the cache."""
        return list(self._cache.keys())

    async def _fetch(self, url: str) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise CertificateChainError(f"unable to fetch certificate chain: {exc}") from exc
        return response.content

    def _validate_chain(self, pem: bytes) -> x509.Certificate:
        try:
            certificates = x509.load_pem_x509_certificates(pem)
        except ValueError as exc:
            raise CertificateChainError("certificate chain is not valid PEM") from exc
        leaf, intermediates = certificates[0], certificates[1:]
        verifier = (
            PolicyBuilder()
            .store(self._store)
            .time(self._now_naive())
            .build_server_verifier(x509.DNSName(SIGNING_CERT_DOMAIN))
        )
        try:
            verifier.verify(leaf, intermediates)
        except VerificationError as exc:
            raise CertificateChainError(f"certificate chain rejected: {exc}") from exc
        return leaf

    def _still_valid(self, certificate: x509.Certificate) -> bool:
        now = self._clock()
        return certificate.not_valid_before_utc <= now <= certificate.not_valid_after_utc

    def _now_naive(self) -> datetime:
        return self._clock().astimezone(timezone.utc).replace(tzinfo=None)


class RequestVerifier:
    """Decide whether an inbound skill request is authentic and fresh."""

    def __init__(
        self,
        loader: CertificateChainLoader,
        *,
        timestamp_tolerance_seconds: int = DEFAULT_TIMESTAMP_TOLERANCE_SECONDS,
        clock: Clock = _utcnow,
    ) -> None:
        self._loader = loader
        self._tolerance = timestamp_tolerance_seconds
        self._clock = clock

    async def validate(
        self,
        raw_body: bytes,
        signature: Optional[str],
        cert_chain_url: Optional[str],
        request_timestamp: Optional[datetime],
        *,
        signature_256: Optional[str] = None,
    ) -> bool:
        """Return True only when every verification step passes."""
        if not cert_chain_url or not cert_chain_url.strip():
            logger.warning("request rejected: missing certificate chain url")
            return False
        if not is_valid_cert_chain_url(cert_chain_url):
            logger.warning("request rejected: untrusted certificate chain url %s", cert_chain_url)
            return False
        if not signature or not signature.strip():
            logger.warning("request rejected: missing signature")
            return False
        if not raw_body:
            logger.warning("request rejected: empty body")
            return False
        if not timestamp_within_tolerance(request_timestamp, self._tolerance, now=self._clock()):
            logger.warning("request rejected: timestamp %s outside tolerance", request_timestamp)
            return False

        if signature_256 and signature_256.strip():
            encoded, algorithm = signature_256, hashes.SHA256()
        else:
            encoded, algorithm = signature, hashes.SHA1()

        try:
            decoded = decode_signature(encoded)
            certificate = await self._loader.load_signing_certificate(cert_chain_url.strip())
            verify_body_signature(certificate, raw_body, decoded, algorithm)
        except CertificateChainError as exc:
            logger.warning("request rejected: %s", exc)
            return False
        except SignatureMismatchError as exc:
            logger.warning("request rejected: %s", exc)
            return False

        return True


__all__ = [
    "CertificateChainLoader",
    "RequestVerifier",
    "decode_signature",
    "is_valid_cert_chain_url",
    "load_trusted_roots",
    "timestamp_within_tolerance",
    "verify_body_signature",
]
