"""Application service layer: request verification and intent routing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .intent_router import IntentRouter
    from .signature_verifier import RequestVerifier


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to handlers."""

    verifier: Optional["RequestVerifier"] = None
    intent_router: Optional["IntentRouter"] = None


def build_default_services(
    *,
    verifier: Optional["RequestVerifier"] = None,
) -> ServiceContainer:
    """Return a service container with the default intent router wiring."""

    from .intent_router import IntentRouter  # pylint: disable=import-outside-toplevel

    return ServiceContainer(verifier=verifier, intent_router=IntentRouter())


__all__ = ["ServiceContainer", "build_default_services"]
