"""Intent router mapping skill request envelopes to response actions."""

from __future__ import annotations

from typing import Callable, Mapping, MutableMapping

from meteosat_skill.core.intents import (
    DisplayRequired,
    Goodbye,
    Help,
    RequestType,
    ResponseAction,
    Scroll,
    ScrollDirection,
    ShowImages,
    SkillIntent,
    Unrecognized,
    ViewMode,
)
from meteosat_skill.core.logging import get_logger
from meteosat_skill.core.models import SkillRequest

logger = get_logger(__name__)

DISPLAY_INTERFACE = "Display"

ActionFactory = Callable[[], ResponseAction]


def _show(mode: ViewMode) -> ActionFactory:
    return lambda: ShowImages(mode)


def _scroll(direction: ScrollDirection) -> ActionFactory:
    return lambda: Scroll(direction)


def default_intent_handlers() -> dict[str, ActionFactory]:
    """Return the intent table of the Meteosat skill."""
    return {
        SkillIntent.INFRARED.value: _show(ViewMode.INFRARED),
        SkillIntent.NORMAL.value: _show(ViewMode.NORMAL),
        SkillIntent.NAVIGATE_HOME.value: _show(ViewMode.NORMAL),
        SkillIntent.RAIN.value: _show(ViewMode.RAIN),
        SkillIntent.SNOW.value: _show(ViewMode.SNOW),
        SkillIntent.STOP.value: lambda: Goodbye(end_session=True),
        SkillIntent.CANCEL.value: lambda: Goodbye(end_session=True),
        SkillIntent.HELP.value: Help,
        SkillIntent.NEXT.value: _scroll(ScrollDirection.FORWARD),
        SkillIntent.PREVIOUS.value: _scroll(ScrollDirection.BACKWARD),
    }


class IntentRouter:
    """Select a response action for each skill request.

    Routing depends only on the request kind, the intent name, and whether
    the device has a display. Nothing is remembered between requests.
    """

    def __init__(self, handlers: Mapping[str, ActionFactory] | None = None) -> None:
        source = default_intent_handlers() if handlers is None else handlers
        self._handlers: MutableMapping[str, ActionFactory] = dict(source)

    def register(self, intent_name: str, factory: ActionFactory) -> None:
        """Register or replace the action factory for ``intent_name``."""

        self._handlers[intent_name] = factory

    def unregister(self, intent_name: str) -> None:
        """Remove a handler if present."""

        self._handlers.pop(intent_name, None)

    def handlers(self) -> Mapping[str, ActionFactory]:
        """Return a shallow copy of the current intent registry."""

        return dict(self._handlers)

    def route(self, envelope: SkillRequest) -> ResponseAction:
        """Return the action that answers ``envelope``."""

        if not envelope.supports_interface(DISPLAY_INTERFACE):
            logger.info("device without display support; answering with apology.")
            return DisplayRequired()

        request_type = envelope.request_type
        if request_type is RequestType.LAUNCH:
            return ShowImages(ViewMode.NORMAL)
        if request_type is RequestType.SESSION_ENDED:
            logger.info("session ended by platform (reason: %s).", envelope.request.reason)
            return Goodbye(end_session=True)
        if request_type is RequestType.INTENT:
            return self._route_intent(envelope.request.intent_name)

        logger.info("unsupported request type %s; returning empty response.", envelope.request.type)
        return Unrecognized()

    def _route_intent(self, intent_name: str | None) -> ResponseAction:
        factory = self._handlers.get(intent_name or "")
        if factory is None:
            logger.warning("unrecognized intent: %s", intent_name)
            return Unrecognized()
        logger.info("routing intent %s.", intent_name)
        return factory()


def route(envelope: SkillRequest) -> ResponseAction:
    """Route ``envelope`` with the default intent table."""
    return IntentRouter().route(envelope)


__all__ = [
    "ActionFactory",
    "DISPLAY_INTERFACE",
    "IntentRouter",
    "default_intent_handlers",
    "route",
]
