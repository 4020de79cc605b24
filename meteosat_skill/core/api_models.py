"""Skill response models serialized back to the voice platform."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

IMAGE_WIDTH = 845
IMAGE_HEIGHT = 615


class OutputSpeech(BaseModel):
    """Plain text speech output."""

    type: Literal["PlainText"] = "PlainText"
    text: str


class SimpleCard(BaseModel):
    """Card shown in the companion app."""

    type: Literal["Simple"] = "Simple"
    title: str
    content: str


class ImageSource(BaseModel):
    """A single rendition of an image."""

    url: str
    width: int = IMAGE_WIDTH
    height: int = IMAGE_HEIGHT


class TemplateImage(BaseModel):
    """Image with its accessibility description."""

    contentDescription: str
    sources: list[ImageSource] = Field(default_factory=list)


class TemplateText(BaseModel):
    """Text shown on a template item."""

    type: Literal["PlainText"] = "PlainText"
    text: str


class TextContent(BaseModel):
    """Primary text block of a list item."""

    primaryText: TemplateText


class ImageItem(BaseModel):
    """One region entry of the image list."""

    image: TemplateImage
    textContent: TextContent

    @property
    def caption(self) -> str:
        """Return the region name shown under the image."""
        return self.textContent.primaryText.text

    @property
    def url(self) -> str:
        """Return the URL of the first image source."""
        return self.image.sources[0].url


class ListTemplate2(BaseModel):
    """Horizontal list of images."""

    type: Literal["ListTemplate2"] = "ListTemplate2"
    title: str
    backButton: Literal["VISIBLE", "HIDDEN"] = "HIDDEN"
    listItems: list[ImageItem] = Field(default_factory=list)


class DisplayRenderTemplateDirective(BaseModel):
    """Directive telling a screen device to render a template."""

    type: Literal["Display.RenderTemplate"] = "Display.RenderTemplate"
    template: ListTemplate2


class SkillResponseBody(BaseModel):
    """The ``response`` object of a skill response envelope."""

    outputSpeech: OutputSpeech | None = None
    card: SimpleCard | None = None
    directives: list[DisplayRenderTemplateDirective] | None = None
    shouldEndSession: bool = False


class SkillResponse(BaseModel):
    """Outbound skill response envelope."""

    version: str = "1.0"
    response: SkillResponseBody = Field(default_factory=SkillResponseBody)

    @property
    def speech(self) -> str | None:
        """Return the spoken text, if any."""
        output = self.response.outputSpeech
        return output.text if output is not None else None

    @property
    def items(self) -> list[ImageItem]:
        """Return the image list items of the first directive, if any."""
        if not self.response.directives:
            return []
        return self.response.directives[0].template.listItems

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON-compatible shape expected by the platform."""
        return self.model_dump(mode="json", exclude_none=True)


__all__ = [
    "IMAGE_HEIGHT",
    "IMAGE_WIDTH",
    "DisplayRenderTemplateDirective",
    "ImageItem",
    "ImageSource",
    "ListTemplate2",
    "OutputSpeech",
    "SimpleCard",
    "SkillResponse",
    "SkillResponseBody",
    "TemplateImage",
    "TemplateText",
    "TextContent",
]
