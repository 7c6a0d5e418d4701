"""Turn parsed candidates into multiple-choice questions that are safe to store.

Candidates are judged one at a time. Whatever survives satisfies the stored
question invariants: non-empty text, at least four unique options and a
correct answer that is one of them.
"""

import logging
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, List, Optional, Sequence

from app.core.config import settings
from app.core.errors import ValidationExhaustion
from app.models.quiz_db.question_db import MULTIPLE_CHOICE


logger = logging.getLogger(__name__)

MIN_OPTIONS = 4
PLACEHOLDER_OPTIONS = ["Option A", "Option B", "Option C", "Option D"]

_KEY_ALIASES = {
    "question_text": ("question_text", "question"),
    "options": ("options", "choices"),
    "correct_answer": ("correct_answer", "answer"),
}


@dataclass
class QuestionDraft:
    question_text: str
    options: List[str]
    correct_answer: str
    points: int
    question_type: str = MULTIPLE_CHOICE


@dataclass
class SanitizeReport:
    received: int = 0
    dropped_options: int = 0
    dropped_text: int = 0
    placeholder_options: int = 0
    repaired_answers: int = 0

    @property
    def dropped(self) -> int:
        return self.dropped_options + self.dropped_text


@dataclass
class SanitizeResult:
    questions: List[QuestionDraft] = field(default_factory=list)
    report: SanitizeReport = field(default_factory=SanitizeReport)


def _field(candidate: dict, name: str) -> Any:
    for key in _KEY_ALIASES[name]:
        if key in candidate:
            return candidate[key]
    return None


def _has_enough_options(candidate: Any) -> bool:
    if not isinstance(candidate, dict):
        return False
    options = _field(candidate, "options")
    return isinstance(options, list) and len(options) >= MIN_OPTIONS


def option_text(value: Any) -> Optional[str]:
    """Text form of an option or answer value, or None when it is unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Number):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def clean_options(raw_options: Sequence[Any]) -> List[str]:
    """Keep usable option texts verbatim, dropping blanks and repeats."""
    cleaned: List[str] = []
    for raw in raw_options:
        option = option_text(raw)
        if option is not None and option not in cleaned:
            cleaned.append(option)
    return cleaned


def resolve_points(question_configs: Sequence[Any], position: int) -> int:
    if position < len(question_configs):
        config = question_configs[position]
        points = config.get("points") if isinstance(config, dict) else getattr(config, "points", None)
        if isinstance(points, int) and not isinstance(points, bool) and points > 0:
            return points
    return settings.DEFAULT_QUESTION_POINTS


def sanitize_candidate(candidate: dict, points: int, report: SanitizeReport) -> Optional[QuestionDraft]:
    text = _field(candidate, "question_text")
    if not isinstance(text, str) or not text.strip():
        report.dropped_text += 1
        return None

    options = clean_options(_field(candidate, "options") or [])
    if len(options) < MIN_OPTIONS:
        report.placeholder_options += 1
        options = list(PLACEHOLDER_OPTIONS)

    # numeric answers must compare equal to their stringified options
    correct_answer = option_text(_field(candidate, "correct_answer"))
    if correct_answer not in options:
        report.repaired_answers += 1
        correct_answer = options[0]

    return QuestionDraft(
        question_text=text.strip(),
        options=options,
        correct_answer=correct_answer,
        points=points,
    )


def sanitize_candidates(candidates: Sequence[Any], question_configs: Sequence[Any] = ()) -> SanitizeResult:
    result = SanitizeResult()
    result.report.received = len(candidates)

    with_options = [c for c in candidates if _has_enough_options(c)]
    result.report.dropped_options = len(candidates) - len(with_options)

    for candidate in with_options:
        draft = sanitize_candidate(candidate, resolve_points(question_configs, len(result.questions)), result.report)
        if draft is not None:
            result.questions.append(draft)

    report = result.report
    logger.info(
        "Sanitized %d candidates: kept=%d dropped_options=%d dropped_text=%d placeholders=%d repaired_answers=%d",
        report.received, len(result.questions), report.dropped_options,
        report.dropped_text, report.placeholder_options, report.repaired_answers,
    )

    if not result.questions:
        raise ValidationExhaustion("failed to generate valid multiple choice questions", report=report)
    return result
