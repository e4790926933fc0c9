"""Markdown templates for new notes.

Everything here is pure string formatting: the same input always yields the
same document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lesson_notes.core.models.note import ClassInfo
from lesson_notes.core.schemas.note_template import NoteTemplateData

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from lesson_notes.core.models.note import VocabularyItem

VOCABULARY_TABLE_HEADER = "| Dutch | English | Example |\n|-------|---------|---------|"
EMPTY_VOCABULARY_ROW = "| - | - | - |"
NOT_AVAILABLE = "N/A"
DEFAULT_TITLE = "New Note"


def generate_vocabulary_table(vocabulary: Sequence[VocabularyItem] | None) -> str:
    """Render vocabulary as a three-column markdown table.

    Empty cells are shown as ``-``; no vocabulary at all yields a single
    placeholder row.
    """
    if not vocabulary:
        return f"{VOCABULARY_TABLE_HEADER}\n{EMPTY_VOCABULARY_ROW}"

    rows = [
        f"| {item.word or '-'} | {item.translation or '-'} | {item.example_sentence or '-'} |"
        for item in vocabulary
    ]
    return "\n".join([VOCABULARY_TABLE_HEADER, *rows])


def generate_class_info_section(class_info: ClassInfo) -> str:
    lines = [
        "## Class Information",
        "",
        f"- **Lesson**: {class_info.lesson_title or NOT_AVAILABLE}",
        f"- **Date**: {class_info.lesson_date or NOT_AVAILABLE}",
        f"- **Topic**: {class_info.topic_name or NOT_AVAILABLE}",
        f"- **Level**: {class_info.level or NOT_AVAILABLE}",
    ]
    if class_info.series_info:
        lines.append(f"- **Series**: {class_info.series_info}")
    return "\n".join(lines)


def generate_note_template(data: NoteTemplateData | Mapping[str, Any] | None = None) -> str:
    """Build the starter document for a note.

    Sections, in order: title, Class Information, Vocabulary, My Notes,
    Key Concepts, Questions.
    """
    if data is None:
        data = NoteTemplateData()
    elif not isinstance(data, NoteTemplateData):
        data = NoteTemplateData.model_validate(data)

    class_info = ClassInfo(
        lesson_title=data.lesson_title or "",
        lesson_date=data.lesson_date or "",
        topic_name=data.topic_name or "",
        level=data.level or "",
        series_info=data.series_info,
    )

    return "\n".join(
        [
            f"# {data.lesson_title or DEFAULT_TITLE}",
            "",
            generate_class_info_section(class_info),
            "",
            "## Vocabulary",
            "",
            generate_vocabulary_table(data.vocabulary),
            "",
            "## My Notes",
            "",
            "[Your notes here...]",
            "",
            "## Key Concepts",
            "",
            "- ",
            "",
            "## Questions",
            "",
            "- ",
            "",
        ]
    )
