"""Intent names, view modes, and the actions the router can select."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class RequestType(str, Enum):
    """Skill request kinds the router distinguishes."""

    LAUNCH = "LaunchRequest"
    INTENT = "IntentRequest"
    SESSION_ENDED = "SessionEndedRequest"


class SkillIntent(str, Enum):
    """Intent names declared in the skill's interaction model."""

    INFRARED = "infrared"
    NORMAL = "normal"
    RAIN = "rain"
    SNOW = "snow"
    NAVIGATE_HOME = "AMAZON.NavigateHomeIntent"
    STOP = "AMAZON.StopIntent"
    CANCEL = "AMAZON.CancelIntent"
    HELP = "AMAZON.HelpIntent"
    NEXT = "AMAZON.NextIntent"
    PREVIOUS = "AMAZON.PreviousIntent"


class ViewMode(str, Enum):
    """Imagery presentation styles offered by the skill."""

    NORMAL = "normal"
    INFRARED = "infrared"
    RAIN = "rain"
    SNOW = "snow"


class ScrollDirection(str, Enum):
    """Direction of a list navigation request."""

    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True, slots=True)
class ShowImages:
    """Render the region image list for ``mode``."""

    mode: ViewMode


@dataclass(frozen=True, slots=True)
class Help:
    """Explain which words switch the view mode."""


@dataclass(frozen=True, slots=True)
class Goodbye:
    """Say goodbye, optionally closing the session."""

    end_session: bool = True


@dataclass(frozen=True, slots=True)
class Scroll:
    """Tell the user how to move through the image list."""

    direction: ScrollDirection


@dataclass(frozen=True, slots=True)
class Unrecognized:
    """Answer with an empty response and leave the session open."""


@dataclass(frozen=True, slots=True)
class DisplayRequired:
    """Apologize to devices that cannot render the image list."""


ResponseAction = Union[ShowImages, Help, Goodbye, Scroll, Unrecognized, DisplayRequired]


__all__ = [
    "DisplayRequired",
    "Goodbye",
    "Help",
    "RequestType",
    "ResponseAction",
    "Scroll",
    "ScrollDirection",
    "ShowImages",
    "SkillIntent",
    "Unrecognized",
    "ViewMode",
]
