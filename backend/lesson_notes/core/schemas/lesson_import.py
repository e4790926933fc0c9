from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from lesson_notes.core.models.base import AppBaseModel
from lesson_notes.core.models.lesson import Lesson, PageType

# Collection each page type must carry in its content
REQUIRED_CONTENT_KEYS: dict[PageType, str] = {
    PageType.INTRO: "text",
    PageType.VOCABULARY: "words",
    PageType.FLASHCARDS: "cards",
    PageType.MULTIPLE_CHOICE: "questions",
    PageType.FILL_IN_BLANK: "exercises",
    PageType.MATCHING: "pairs",
    PageType.SPEED_ROUND: "questions",
}


class LessonImportPage(AppBaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    type: PageType
    title: str | None = None
    content: dict[str, Any]


class LessonImport(AppBaseModel):
    """JSON document accepted by the lesson importer."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(..., min_length=1)
    description: str | None = None
    day_id: str | None = None
    pages: list[LessonImportPage]

    def to_lesson(self) -> Lesson:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if not data.get("dayId"):
            data.pop("dayId", None)
        return Lesson.model_validate(data)


def parse_lesson_import(data: Any) -> LessonImport:
    """Validate an imported lesson document.

    Raises ValueError with a message naming the offending page and field.
    """
    if not isinstance(data, dict):
        raise ValueError("Lesson import must be a JSON object")
    if not data.get("title"):
        raise ValueError("Missing required field: title")
    pages = data.get("pages")
    if not isinstance(pages, list):
        raise ValueError("Missing or invalid pages array")

    for number, page in enumerate(pages, start=1):
        if not isinstance(page, dict):
            raise ValueError(f"Page {number} must be an object")
        if not page.get("type"):
            raise ValueError(f"Page {number} is missing required field: type")
        if not page.get("content"):
            raise ValueError(f"Page {number} is missing required field: content")
        try:
            page_type = PageType(page["type"])
        except ValueError as err:
            raise ValueError(f"Page {number} has unknown type: {page['type']}") from err
        content = page["content"]
        if not isinstance(content, dict):
            raise ValueError(f"Page {number} content must be an object")
        required = REQUIRED_CONTENT_KEYS.get(page_type)
        if required and required not in content:
            raise ValueError(f"Page {number} ({page_type.value}) is missing content field: {required}")

    return LessonImport.model_validate(data)
