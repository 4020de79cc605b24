"""Build skill responses for the actions selected by the intent router."""

from __future__ import annotations

from typing_extensions import assert_never

from meteosat_skill.core.api_models import (
    DisplayRenderTemplateDirective,
    ImageItem,
    ImageSource,
    ListTemplate2,
    OutputSpeech,
    SimpleCard,
    SkillResponse,
    SkillResponseBody,
    TemplateImage,
    TemplateText,
    TextContent,
)
from meteosat_skill.core.config import config
from meteosat_skill.core.intents import (
    DisplayRequired,
    Goodbye,
    Help,
    ResponseAction,
    Scroll,
    ScrollDirection,
    ShowImages,
    Unrecognized,
    ViewMode,
)
from meteosat_skill.core.regions import REGIONS, Region

LIST_TITLE = "Immagini meteosat"
HELP_CARD_TITLE = "Aiuto"
HELP_TEXT = (
    "Puoi dire 'normale' per la visione diurna, 'infrarosso' per le immagini "
    "all'infrarosso, 'pioggia' per il radar delle precipitazioni oppure 'neve' "
    "per il radar della neve."
)
GOODBYE_TEXT = "Arrivederci!"
DISPLAY_REQUIRED_TEXT = (
    "Mi spiace, questa skill é supportata solo da dispositivi muniti di schermo."
)
SCROLL_FORWARD_TEXT = "Fai scorrere lo schermo verso sinistra per l'immagine successiva"
SCROLL_BACKWARD_TEXT = "Fai scorrere lo schermo verso destra per l'immagine precedente"


def mode_phrase(mode: ViewMode) -> str:
    """Return the introductory sentence spoken for ``mode``."""
    match mode:
        case ViewMode.NORMAL:
            return "Ecco le ultime immagini dal satellite meteosàt"
        case ViewMode.INFRARED:
            return "Ecco le ultime immagini all' infraross dal satellite meteosàt"
        case ViewMode.RAIN:
            return "Ecco le ultime immagini radar della pioggia dal satellite meteosàt"
        case ViewMode.SNOW:
            return "Ecco le ultime immagini radar della neve dal satellite meteosàt"
        case _:
            assert_never(mode)


def mode_path(mode: ViewMode) -> str:
    """Return the provider's imagery path segment for ``mode``."""
    match mode:
        case ViewMode.NORMAL:
            return "visual5hdcomplete"
        case ViewMode.INFRARED:
            return "infraPolair"
        case ViewMode.RAIN:
            return "rainTMC"
        case ViewMode.SNOW:
            return "snow"
        case _:
            assert_never(mode)


def image_url(mode: ViewMode, region_code: str, *, base_url: str | None = None) -> str:
    """Return the most recent image URL of ``region_code`` in ``mode``."""
    base = (base_url or config.SATELLITE_IMAGE_BASE_URL).rstrip("/")
    return f"{base}/{region_code}/{mode_path(mode)}"


def _image_item(region: Region, mode: ViewMode) -> ImageItem:
    return ImageItem(
        image=TemplateImage(
            contentDescription=f"Vista {region.name}",
            sources=[ImageSource(url=image_url(mode, region.code))],
        ),
        textContent=TextContent(primaryText=TemplateText(text=region.name)),
    )


def _tell(text: str, *, end_session: bool) -> SkillResponse:
    return SkillResponse(
        response=SkillResponseBody(
            outputSpeech=OutputSpeech(text=text),
            shouldEndSession=end_session,
        )
    )


def build_images_response(mode: ViewMode) -> SkillResponse:
    """Speak the mode phrase and render one list item per region."""
    template = ListTemplate2(
        title=LIST_TITLE,
        backButton="HIDDEN",
        listItems=[_image_item(region, mode) for region in REGIONS],
    )
    response = _tell(mode_phrase(mode), end_session=False)
    response.response.directives = [DisplayRenderTemplateDirective(template=template)]
    return response


def build_help_response() -> SkillResponse:
    """Return the help text as both speech and card; the session stays open."""
    response = _tell(HELP_TEXT, end_session=False)
    response.response.card = SimpleCard(title=HELP_CARD_TITLE, content=HELP_TEXT)
    return response


def build_goodbye_response(end_session: bool = True) -> SkillResponse:
    return _tell(GOODBYE_TEXT, end_session=end_session)


def build_scroll_response(direction: ScrollDirection) -> SkillResponse:
    """Explain how to swipe; list position is handled entirely by the device."""
    match direction:
        case ScrollDirection.FORWARD:
            text = SCROLL_FORWARD_TEXT
        case ScrollDirection.BACKWARD:
            text = SCROLL_BACKWARD_TEXT
        case _:
            assert_never(direction)
    return _tell(text, end_session=False)


def build_empty_response() -> SkillResponse:
    return SkillResponse(response=SkillResponseBody(shouldEndSession=False))


def build_display_required_response() -> SkillResponse:
    return _tell(DISPLAY_REQUIRED_TEXT, end_session=True)


def build_response(action: ResponseAction) -> SkillResponse:
    """Return the skill response for ``action``."""
    match action:
        case ShowImages(mode=mode):
            return build_images_response(mode)
        case Help():
            return build_help_response()
        case Goodbye(end_session=end_session):
            return build_goodbye_response(end_session)
        case Scroll(direction=direction):
            return build_scroll_response(direction)
        case Unrecognized():
            return build_empty_response()
        case DisplayRequired():
            return build_display_required_response()
        case _:
            assert_never(action)


__all__ = [
    "DISPLAY_REQUIRED_TEXT",
    "GOODBYE_TEXT",
    "HELP_TEXT",
    "LIST_TITLE",
    "SCROLL_BACKWARD_TEXT",
    "SCROLL_FORWARD_TEXT",
    "build_display_required_response",
    "build_empty_response",
    "build_goodbye_response",
    "build_help_response",
    "build_images_response",
    "build_response",
    "build_scroll_response",
    "image_url",
    "mode_path",
    "mode_phrase",
]
