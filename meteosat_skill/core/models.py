"""Pydantic models of the inbound skill request envelope."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from meteosat_skill.core.intents import RequestType


class _SkillModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SkillApplication(_SkillModel):
    """Skill the request is addressed to."""

    applicationId: str


class SkillIntentPayload(_SkillModel):
    """Intent resolved by the platform from the user's utterance."""

    name: str
    slots: dict[str, Any] = Field(default_factory=dict)


class SkillRequestBody(_SkillModel):
    """The ``request`` object of a skill request envelope."""

    type: str
    requestId: str | None = None
    timestamp: datetime
    locale: str | None = None
    intent: SkillIntentPayload | None = None
    reason: str | None = None

    @property
    def intent_name(self) -> str | None:
        """Return the intent name, if this is an intent request."""
        return self.intent.name if self.intent is not None else None


class SkillSession(_SkillModel):
    """Session metadata sent with in-session requests."""

    sessionId: str | None = None
    new: bool = False
    application: SkillApplication | None = None


class SkillDevice(_SkillModel):
    """Invoking device and the interfaces it supports."""

    deviceId: str | None = None
    supportedInterfaces: dict[str, Any] = Field(default_factory=dict)


class SkillSystem(_SkillModel):
    """The ``context.System`` object."""

    application: SkillApplication | None = None
    device: SkillDevice = Field(default_factory=SkillDevice)


class SkillContext(_SkillModel):
    """The ``context`` object of a skill request envelope."""

    system: SkillSystem = Field(default_factory=SkillSystem, alias="System")


class SkillRequest(_SkillModel):
    """Inbound skill request envelope."""

    version: str = "1.0"
    session: SkillSession | None = None
    context: SkillContext = Field(default_factory=SkillContext)
    request: SkillRequestBody

    @property
    def request_type(self) -> RequestType | None:
        """Return the known request kind, or ``None`` for other request types."""
        try:
            return RequestType(self.request.type)
        except ValueError:
            return None

    def supports_interface(self, name: str) -> bool:
        """True when the invoking device declares support for interface ``name``."""
        return name in self.context.system.device.supportedInterfaces

    def application_id(self) -> str | None:
        """Return the addressed skill id from the context, falling back to the session."""
        application = self.context.system.application
        if application is None and self.session is not None:
            application = self.session.application
        return application.applicationId if application is not None else None


__all__ = [
    "SkillApplication",
    "SkillContext",
    "SkillDevice",
    "SkillIntentPayload",
    "SkillRequest",
    "SkillRequestBody",
    "SkillSession",
    "SkillSystem",
]
