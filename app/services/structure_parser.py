"""Recover question-like structures from free-form model output.

The generator gives no format guarantee, so parsing goes through three
increasingly lenient stages. Each stage is a pure function that returns
``ParsedCandidates`` on success or ``None`` when the text is not parseable
that way; ``parse_candidates`` tries them once each, in order, and stops at
the first success. A stage that recovers nothing counts as not parseable.
"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from app.core.errors import ParseFailure


logger = logging.getLogger(__name__)

ADJACENT_OBJECTS_RE = re.compile(r"}\s*{")
FLAT_OBJECT_RE = re.compile(r"{[^}]+}")


class ParseStage(str, Enum):
    direct = "direct"
    delimiter_repair = "delimiter_repair"
    object_extraction = "object_extraction"


@dataclass(frozen=True)
class ParsedCandidates:
    stage: ParseStage
    items: List[Any]


def _loads(text: str) -> Tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except ValueError:
        return False, None


def _recovered(stage: ParseStage, items: List[Any]) -> Optional[ParsedCandidates]:
    return ParsedCandidates(stage, items) if items else None


def parse_direct(text: str) -> Optional[ParsedCandidates]:
    ok, value = _loads(text)
    if not ok:
        return None
    return _recovered(ParseStage.direct, value if isinstance(value, list) else [value])


def parse_delimiter_repair(text: str) -> Optional[ParsedCandidates]:
    repaired = "[" + ADJACENT_OBJECTS_RE.sub("},{", text) + "]"
    ok, value = _loads(repaired)
    if not ok:
        return None
    # text that was already an array ends up wrapped twice
    if len(value) == 1 and isinstance(value[0], list):
        value = value[0]
    return _recovered(ParseStage.delimiter_repair, value)


def parse_object_extraction(text: str) -> Optional[ParsedCandidates]:
    spans = FLAT_OBJECT_RE.findall(text)
    if not spans:
        return None
    ok, value = _loads("[" + ",".join(spans) + "]")
    if not ok:
        return None
    return _recovered(ParseStage.object_extraction, value)


STAGES: List[Callable[[str], Optional[ParsedCandidates]]] = [
    parse_direct,
    parse_delimiter_repair,
    parse_object_extraction,
]


def parse_candidates(text: str, stages=None) -> ParsedCandidates:
    for stage in stages or STAGES:
        result = stage(text)
        if result is not None:
            if result.stage is not ParseStage.direct:
                logger.info("Recovered %d candidates via %s", len(result.items), result.stage.value)
            return result

    logger.warning("Could not recover any question structure from model output: %r", text)
    raise ParseFailure("failed to parse generated questions", raw_text=text)
