import json
import re
from typing import Any

from app.agent.artifacts import (
    BusinessProfileSuggestion,
    ComplexityLevel,
    IdeaDraft,
    MagnetSpec,
)
from app.core.errors import MalformedResponseError

IDEA_DEFAULTS = {
    "name": "Unnamed Idea",
    "summary": "No summary provided",
    "detailedDescription": "No description provided",
    "whyThis": "No explanation provided",
}
IDEA_FIELDS = ("name", "summary", "detailedDescription", "whyThis", "complexityLevel")


def _extract_fenced_block(text: str) -> str | None:
    blocks = re.findall(r"```(?:json)?\s*(.*?)\s*```", text, re.DOTALL | re.IGNORECASE)
    return blocks[0].strip() if blocks else None


def _extract_balanced_json_object(text: str) -> str | None:
    """Best-effort extraction of the first balanced top-level JSON object."""
    start_idx = text.find("{")
    if start_idx == -1:
        return None

    depth = 0
    in_string = False
    escape = False
    for i in range(start_idx, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start_idx:i + 1]
    return None


def _load_object(raw_text: str, what: str) -> dict[str, Any]:
    try:
        data = json.loads(raw_text or "", strict=False)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"{what} response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedResponseError(f"{what} response is not a JSON object")
    return data


def _as_text(value: Any) -> str | None:
    """Strings pass through; structured values are kept as pretty JSON."""
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2) if value else None
    return str(value)


def normalize_complexity(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    wanted = value.strip().lower()
    for level in ComplexityLevel:
        if level.value.lower() == wanted:
            return level.value
    return None


def parse_ideas_response(raw_text: str) -> list[IdeaDraft]:
    """
    Parse the idea-generation completion.

    Only unparseable JSON or a missing/non-array `ideas` key fails the batch.
    Missing fields on an individual idea fall back to defaults.
    """
    data = _load_object(raw_text, "Idea generation")
    items = data.get("ideas")
    if not isinstance(items, list):
        raise MalformedResponseError("Idea generation response has no 'ideas' array")

    ideas: list[IdeaDraft] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        ideas.append(
            IdeaDraft(
                name=_as_text(item.get("name")) or IDEA_DEFAULTS["name"],
                summary=_as_text(item.get("summary")) or IDEA_DEFAULTS["summary"],
                detailed_description=(
                    _as_text(item.get("detailedDescription")) or IDEA_DEFAULTS["detailedDescription"]
                ),
                why_this=_as_text(item.get("whyThis")) or IDEA_DEFAULTS["whyThis"],
                complexity_level=(
                    normalize_complexity(item.get("complexityLevel")) or ComplexityLevel.SIMPLE.value
                ),
            )
        )
    return ideas


def parse_spec_response(raw_text: str) -> MagnetSpec:
    data = _load_object(raw_text, "Spec")
    magnet_spec = _as_text(data.get("magnetSpec"))
    creation_prompt = _as_text(data.get("creationPrompt"))
    if not magnet_spec or not creation_prompt:
        raise MalformedResponseError("Spec response is missing magnetSpec or creationPrompt")
    return MagnetSpec(magnet_spec=magnet_spec, creation_prompt=creation_prompt)


def parse_iteration_response(raw_text: str) -> IdeaDraft:
    data = _load_object(raw_text, "Iteration")
    missing = [key for key in IDEA_FIELDS if not _as_text(data.get(key))]
    if missing:
        raise MalformedResponseError(f"Iteration response is missing {', '.join(missing)}")

    complexity = normalize_complexity(data["complexityLevel"])
    if complexity is None:
        raise MalformedResponseError(
            f"Iteration response has unknown complexityLevel {data['complexityLevel']!r}"
        )
    return IdeaDraft(
        name=_as_text(data["name"]),
        summary=_as_text(data["summary"]),
        detailed_description=_as_text(data["detailedDescription"]),
        why_this=_as_text(data["whyThis"]),
        complexity_level=complexity,
    )


def _autofill_candidates(raw_text: str) -> list[str]:
    text = (raw_text or "").strip()
    if not text:
        return []

    candidates = [text]
    fenced = _extract_fenced_block(text)
    if fenced:
        candidates.append(fenced)
    balanced = _extract_balanced_json_object(text)
    if balanced:
        candidates.append(balanced)
    return list(dict.fromkeys(candidates))


def _coerce_confidence(value: Any) -> int | None:
    try:
        confidence = int(value)
    except (TypeError, ValueError):
        return None
    return min(max(confidence, 1), 10)


def parse_autofill_response(raw_text: str, website: str | None = None) -> BusinessProfileSuggestion:
    """
    Parse the homepage-research completion. Web search responses often arrive
    wrapped in markdown fences despite the prompt, so fenced and embedded
    objects are tried after the raw text.
    """
    data: dict[str, Any] | None = None
    for candidate in _autofill_candidates(raw_text):
        try:
            parsed = json.loads(candidate, strict=False)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            data = parsed
            break
    if data is None:
        raise MalformedResponseError("Autofill response did not contain a JSON object")

    prod_description = _as_text(data.get("prodDescription"))
    target_audience = _as_text(data.get("targetAudience"))
    if not prod_description or not target_audience:
        raise MalformedResponseError("Autofill response is missing prodDescription or targetAudience")

    return BusinessProfileSuggestion(
        prod_description=prod_description,
        target_audience=target_audience,
        confidence=_coerce_confidence(data.get("confidence")),
        website=website,
    )
