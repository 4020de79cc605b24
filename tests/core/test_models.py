"""Tests for skill request and response models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from meteosat_skill.core.api_models import OutputSpeech, SkillResponse, SkillResponseBody
from meteosat_skill.core.intents import RequestType
from meteosat_skill.core.models import SkillRequest

# pylint: disable=missing-function-docstring


def test_skill_request_parses_platform_envelope(envelope_factory) -> None:
    payload = envelope_factory("IntentRequest", "snow")
    envelope = SkillRequest.model_validate_json(json.dumps(payload))

    assert envelope.request_type is RequestType.INTENT
    assert envelope.request.intent_name == "snow"
    assert envelope.request.timestamp.tzinfo is not None
    assert envelope.supports_interface("Display")
    assert envelope.application_id() == "amzn1.ask.skill.meteosat"


def test_skill_request_without_display(envelope_factory) -> None:
    envelope = SkillRequest.model_validate(envelope_factory("LaunchRequest", display=False))

    assert envelope.request_type is RequestType.LAUNCH
    assert envelope.request.intent_name is None
    assert not envelope.supports_interface("Display")


def test_unknown_request_type_maps_to_none(envelope_factory) -> None:
    envelope = SkillRequest.model_validate(envelope_factory("CanFulfillIntentRequest"))
    assert envelope.request_type is None


def test_application_id_falls_back_to_session(envelope_factory) -> None:
    payload = envelope_factory("LaunchRequest", application_id="amzn1.ask.skill.other")
    del payload["context"]["System"]["application"]

    envelope = SkillRequest.model_validate(payload)
    assert envelope.application_id() == "amzn1.ask.skill.other"


def test_minimal_envelope_defaults_context() -> None:
    envelope = SkillRequest.model_validate(
        {"request": {"type": "LaunchRequest", "timestamp": "2024-01-01T00:00:00Z"}}
    )
    assert not envelope.supports_interface("Display")
    assert envelope.application_id() is None


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b"{}",
        b'{"request": {"type": "LaunchRequest"}}',
        b'{"request": {"type": "LaunchRequest", "timestamp": "yesterday"}}',
    ],
)
def test_malformed_envelopes_raise(body: bytes) -> None:
    with pytest.raises(ValidationError):
        SkillRequest.model_validate_json(body)


def test_response_payload_omits_empty_fields() -> None:
    response = SkillResponse(
        response=SkillResponseBody(outputSpeech=OutputSpeech(text="Ciao"), shouldEndSession=True)
    )

    assert response.to_payload() == {
        "version": "1.0",
        "response": {
            "outputSpeech": {"type": "PlainText", "text": "Ciao"},
            "shouldEndSession": True,
        },
    }
    assert response.speech == "Ciao"
    assert response.items == []
