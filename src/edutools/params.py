# SPDX-FileCopyrightText: 2025 Mark Liffiton <liffiton@gmail.com>
#
# SPDX-License-Identifier: AGPL-3.0-only

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum


class ToolMode(StrEnum):
    QUESTION_GENERATOR = 'Question Generator'
    MEMORANDUM = 'Memorandum / Model Answers'
    WORKSHEET_BUILDER = 'Worksheet & Revision Builder'
    REWRITER = 'Question Rewriter'


class CognitiveLevel(StrEnum):
    LOWER = 'Lower Order (Recall, State)'
    MIDDLE = 'Middle Order (Explain, Compare)'
    HIGHER = 'Higher Order (Analyse, Evaluate)'
    MIXED = 'Mixed (Standard NSC Paper)'


SUBJECTS = [
    "Mechanical Technology – Fitting & Machining",
    "Mechanical Technology – Automotive",
    "Mechanical Technology – Welding & Metalwork",
    "Civil Technology",
    "Electrical Technology",
    "Engineering Graphics and Design",
    "Technical Mathematics",
    "Technical Sciences",
    "Mathematics",
    "Physical Sciences",
    "Life Sciences",
    "Geography",
    "History",
    "Accounting",
    "English Home Language",
]

GRADES = [f"Grade {n}" for n in range(4, 13)]
DEFAULT_GRADE = "Grade 10"

DEFAULT_QUESTION_COUNT = 5
DEFAULT_TOTAL_MARKS = 20


class InvalidFieldError(Exception):
    def __init__(self, field: str, value: str):
        super().__init__(f"Invalid value for {field}: {value!r}")
        self.field = field


class MissingFieldError(Exception):
    pass


@dataclass(frozen=True)
class GenerationRequest:
    """ One set of generator inputs, as submitted from the form. """
    subject: str
    grade: str
    topic: str
    mode: ToolMode
    cognitive_level: CognitiveLevel = CognitiveLevel.MIXED
    question_count: int = DEFAULT_QUESTION_COUNT
    total_marks: int = DEFAULT_TOTAL_MARKS
    sub_topic: str | None = None
    additional_notes: str | None = None

    @property
    def title(self) -> str:
        return f"{self.grade} {self.subject}: {self.topic or 'Assessment Output'}"


_leading_int_re = re.compile(r"\s*([-+]?\d+)")


def _parse_count(field: str, value: str | None) -> int:
    # Only leading digits count ("4.5" is 4, "12abc" is 12); no digits at all is 0.
    match = _leading_int_re.match(value or "")
    if match is None:
        return 0
    count = int(match.group(1))
    if count < 0:
        raise InvalidFieldError(field, str(value))
    return count


def clean_notes(notes: str | None) -> str | None:
    ''' Keep notes verbatim, but treat whitespace-only notes as absent. '''
    return notes if notes and notes.strip() else None


def request_from_form(form: Mapping[str, str]) -> GenerationRequest:
    ''' Build a GenerationRequest from submitted form data.

    Raises InvalidFieldError for a value outside the fixed catalogs/enums or
    a negative count.
    '''
    mode_value = form.get('mode', '')
    try:
        mode = ToolMode(mode_value)
    except ValueError:
        raise InvalidFieldError('mode', mode_value) from None

    level_value = form.get('cognitive_level', CognitiveLevel.MIXED.value)
    try:
        cognitive_level = CognitiveLevel(level_value)
    except ValueError:
        raise InvalidFieldError('cognitive_level', level_value) from None

    subject = form.get('subject', SUBJECTS[0])
    if subject not in SUBJECTS:
        raise InvalidFieldError('subject', subject)

    grade = form.get('grade', DEFAULT_GRADE)
    if grade not in GRADES:
        raise InvalidFieldError('grade', grade)

    return GenerationRequest(
        subject=subject,
        grade=grade,
        topic=form.get('topic', '').strip(),
        sub_topic=form.get('sub_topic', '').strip() or None,
        mode=mode,
        cognitive_level=cognitive_level,
        question_count=_parse_count('question_count', form.get('question_count')),
        total_marks=_parse_count('total_marks', form.get('total_marks')),
        additional_notes=clean_notes(form.get('additional_notes')),
    )


def check_required_fields(req: GenerationRequest) -> None:
    ''' Reject a request that lacks the inputs its mode depends on.

    The prompt engine itself accepts anything; this is checked before a
    request is sent for generation.
    '''
    match req.mode:
        case ToolMode.REWRITER:
            if not req.additional_notes:
                raise MissingFieldError("Rewriter mode requires existing text in 'Contextual Input'.")
        case ToolMode.MEMORANDUM:
            if not req.additional_notes and not req.topic:
                raise MissingFieldError("Memorandum mode requires a Topic or pasted questions in 'Contextual Input'.")
        case _:
            if not req.topic:
                raise MissingFieldError("Please specify a Topic (e.g., 'Safety') in the sidebar first.")
