# utils/llm_output.py
import json
import re
from typing import Any, Optional

_FENCE_RE = re.compile(r"^```(?:json|javascript|js)?\s*|\s*```$", re.IGNORECASE)


def _strip_code_fences(s: str) -> str:
    return _FENCE_RE.sub("", s.strip()).strip()


def _load(s: str) -> Optional[Any]:
    try:
        return json.loads(s)
    except ValueError:
        return None


def _first_object(s: str) -> Optional[str]:
    start = s.find("{")
    if start == -1:
        return None
    depth = 0
    for i in range(start, len(s)):
        if s[i] == "{":
            depth += 1
        elif s[i] == "}":
            depth -= 1
            if depth == 0:
                return s[start:i + 1]
    return None


def message_text(content: Any) -> str:
    """Chat model content can be a string or a list of typed parts."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content or "")


def extract_suggestion(text: str, key: str = "suggestedImprovements") -> str:
    """
    Pull the suggestion out of model output. Accepts bare JSON, fenced JSON,
    JSON embedded in prose, or plain prose (returned as-is).
    """
    if not text or not text.strip():
        raise ValueError("empty model output")
    s = _strip_code_fences(text)
    for candidate in (s, _first_object(s)):
        if not candidate:
            continue
        obj = _load(candidate)
        if isinstance(obj, dict) and isinstance(obj.get(key), str):
            return obj[key].strip()
    return s
