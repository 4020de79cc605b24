"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from meteosat_skill.core.config import config
from meteosat_skill.services import ServiceContainer, build_default_services
from meteosat_skill.services.signature_verifier import (
    CertificateChainLoader,
    RequestVerifier,
    load_trusted_roots,
)


def build_request_verifier() -> RequestVerifier:
    """Return a request verifier configured from settings."""

    loader = CertificateChainLoader(
        load_trusted_roots(config.TRUSTED_ROOTS_PATH),
        timeout_seconds=config.CERT_FETCH_TIMEOUT_SECONDS,
        cache_ttl_seconds=config.CERT_CACHE_TTL_SECONDS,
        cache_max_entries=config.CERT_CACHE_MAX_ENTRIES,
    )
    return RequestVerifier(
        loader,
        timestamp_tolerance_seconds=config.REQUEST_TIMESTAMP_TOLERANCE_SECONDS,
    )


def build_default_service_container() -> ServiceContainer:
    """Return the default service container wired to production verification."""

    return build_default_services(verifier=build_request_verifier())


__all__ = ["build_default_service_container", "build_request_verifier"]
