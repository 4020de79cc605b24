"""Skill request endpoint called by the voice platform."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Header, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from meteosat_skill.core.config import config
from meteosat_skill.core.logging import get_logger, skill_request_id_context
from meteosat_skill.core.models import SkillRequest
from meteosat_skill.services import ServiceContainer
from meteosat_skill.services.intent_router import IntentRouter
from meteosat_skill.services.response_builder import build_response
from meteosat_skill.services.signature_verifier import RequestVerifier

router = APIRouter()
logger = get_logger(__name__)


def _get_services(request: Request) -> ServiceContainer:
    services = getattr(request.app.state, "services", None)
    if not isinstance(services, ServiceContainer):
        raise RuntimeError("Service container is not configured on app.state.")
    return services


def _require_verifier(services: ServiceContainer) -> RequestVerifier:
    verifier = services.verifier
    if verifier is None:
        raise RuntimeError("Request verifier has not been configured.")
    return verifier


def _require_router(services: ServiceContainer) -> IntentRouter:
    intent_router = services.intent_router
    if intent_router is None:
        raise RuntimeError("Intent router has not been configured.")
    return intent_router


def _bad_request() -> Response:
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


def _parse_envelope(body: bytes) -> SkillRequest | None:
    if not body:
        return None
    try:
        return SkillRequest.model_validate_json(body)
    except ValidationError:
        logger.error("Invalid skill request body received", exc_info=True)
        return None


def _addressed_to_this_skill(envelope: SkillRequest) -> bool:
    expected = config.ALEXA_SKILL_ID
    if not expected:
        return True
    return envelope.application_id() == expected


@router.post("/alexa")
async def handle_skill_request(
    request: Request,
    signature_cert_chain_url: Annotated[
        Optional[str], Header(alias="SignatureCertChainUrl")
    ] = None,
    signature: Annotated[Optional[str], Header(alias="Signature")] = None,
    signature_256: Annotated[Optional[str], Header(alias="Signature-256")] = None,
) -> Response:
    """Verify the request, route its intent, and return the skill response."""
    services = _get_services(request)
    verifier = _require_verifier(services)
    intent_router = _require_router(services)

    if not (signature_cert_chain_url or "").strip() or not (signature or "").strip():
        logger.warning("skill request missing signature headers.")
        return _bad_request()

    body = await request.body()
    envelope = _parse_envelope(body)
    if envelope is None:
        return _bad_request()

    with skill_request_id_context(envelope.request.requestId):
        valid = await verifier.validate(
            body,
            signature,
            signature_cert_chain_url,
            envelope.request.timestamp,
            signature_256=signature_256,
        )
        if not valid:
            return _bad_request()
        if not _addressed_to_this_skill(envelope):
            logger.warning("skill request addressed to %s rejected.", envelope.application_id())
            return _bad_request()

        logger.info(
            "%s received (intent: %s).",
            envelope.request.type,
            envelope.request.intent_name or "-",
        )
        action = intent_router.route(envelope)
        skill_response = build_response(action)
        return JSONResponse(content=skill_response.to_payload())


__all__ = ["router"]
