# File: agent/response_parser.py
# Turns whatever the analysis service sent back into a ReactionOutcome. Never raises.
#
# The service's "result" comes in three shapes, sorted out once by classify_payload():
#   structured     - already a JSON object {type, title, explanation, recommendations}
#   embedded_json  - a string holding valid JSON (optionally in a ``` fence); only an
#                    object contributes fields
#   markdown       - free text, mined for a safety keyword, a **Category: X** title and a
#                    **Precautions** list

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from db.schema import ReactionOutcome, SafetyLevel

STRUCTURED = "structured"
EMBEDDED_JSON = "embedded_json"
MARKDOWN = "markdown"

DEFAULT_TITLE = "Analysis Result"
DEFAULT_EXPLANATION = "No explanation provided."
MARKDOWN_TITLE = "Chemical Analysis"
DEFAULT_RECOMMENDATION = "Proceed with caution."
MAX_RECOMMENDATIONS = 5

# First hit wins, so the alarming words are checked before "safe" ("unsafe" contains it).
SAFETY_KEYWORDS = (
    (("unsafe", "danger", "toxic", "explode"), SafetyLevel.DANGEROUS),
    (("exothermic",), SafetyLevel.EXOTHERMIC),
    (("mild",), SafetyLevel.MILD),
    (("safe",), SafetyLevel.SAFE),
)

CATEGORY_RE = re.compile(r"\*\*Category:\s*(.*?)\*\*", re.I)
SECTION_NAMES = ("precautions", "safety considerations", "safety precautions")
SECTION_RE = re.compile(r"\*\*(?:Precautions|Safety Considerations|Safety Precautions):?\*\*", re.I)
LIST_MARKER_RE = re.compile(r"^(\d+\.|-|\*)\s*")
CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.S | re.I)


@dataclass(frozen=True)
class ClassifiedPayload:
    kind: str
    data: Any  # a mapping for structured/embedded_json, text for markdown


def _try_json(text: str) -> Tuple[bool, Any]:
    """(True, value) when the text (minus an optional ``` fence) is valid JSON."""
    s = text.strip()
    m = CODE_FENCE_RE.match(s)
    if m:
        s = m.group(1)
    try:
        return True, json.loads(s)
    except ValueError:
        return False, None


def classify_payload(result: Any) -> ClassifiedPayload:
    if isinstance(result, Mapping):
        return ClassifiedPayload(STRUCTURED, result)
    if isinstance(result, str):
        parsed_ok, parsed = _try_json(result)
        if parsed_ok:
            # Valid JSON is never mined: a non-object value ('"toxic"', 42, null) has no
            # fields, so every field falls back to its default.
            return ClassifiedPayload(EMBEDDED_JSON, parsed if isinstance(parsed, dict) else {})
        return ClassifiedPayload(MARKDOWN, result)
    return ClassifiedPayload(MARKDOWN, "" if result is None else str(result))


# ---------------- markdown mining ----------------

def classify_text(text: str) -> SafetyLevel:
    lower = text.lower()
    for words, level in SAFETY_KEYWORDS:
        if any(w in lower for w in words):
            return level
    return SafetyLevel.UNKNOWN


def _is_section_header(line: str) -> bool:
    return line.strip("*: \t").lower() in SECTION_NAMES


def _mine_recommendations(text: str) -> List[str]:
    m = SECTION_RE.search(text)
    if not m:
        return []
    recs: List[str] = []
    for line in text[m.end():].splitlines():
        clean = LIST_MARKER_RE.sub("", line.strip()).strip()
        if not clean or _is_section_header(clean):
            continue
        recs.append(clean)
        if len(recs) == MAX_RECOMMENDATIONS:
            break
    return recs


def parse_markdown(text: str) -> Dict[str, Any]:
    """Best-effort extraction of type/title/explanation/recommendations from free text."""
    category = CATEGORY_RE.search(text)
    title = category.group(1).strip() if category else ""

    explanation = CATEGORY_RE.sub("", text, count=1).strip()
    explanation = SECTION_RE.split(explanation, maxsplit=1)[0].strip()

    return {
        "type": classify_text(text).value,
        "title": title or MARKDOWN_TITLE,
        "explanation": explanation,
        "recommendations": _mine_recommendations(text) or [DEFAULT_RECOMMENDATION],
    }


# ---------------- validation ----------------

def coerce_level(raw_type: Any) -> SafetyLevel:
    """
    Map a label to the closed set. Near misses such as "Generally Safe" count as Safe;
    anything else unrecognised is Unknown.
    """
    level = SafetyLevel.from_label(raw_type)
    if level is not None:
        return level
    if isinstance(raw_type, str) and "safe" in raw_type.lower():
        return SafetyLevel.SAFE
    return SafetyLevel.UNKNOWN


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _recommendations(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [s for s in (_text(v) for v in value) if s]


def outcome_from_mapping(data: Mapping) -> ReactionOutcome:
    return ReactionOutcome(
        coerce_level(data.get("type")),
        _text(data.get("title")) or DEFAULT_TITLE,
        _text(data.get("explanation")) or DEFAULT_EXPLANATION,
        tuple(_recommendations(data.get("recommendations"))),
    )


def interpret(payload: Any) -> ReactionOutcome:
    """
    Build an outcome from the analysis service's response envelope ({"result": ...}).
    A bare result (not wrapped in an envelope) is accepted too.
    """
    if isinstance(payload, Mapping) and "result" in payload:
        result = payload.get("result")
    else:
        result = payload
    classified = classify_payload(result)
    if classified.kind == MARKDOWN:
        data = parse_markdown(classified.data)
    else:
        data = classified.data
    return outcome_from_mapping(data)
