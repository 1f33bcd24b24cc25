"""
/**
 * @file smarttranslate/services/output_parser_service.py
 * @description 模型输出解析：从自由文本中恢复 JSON 对象（去代码块 -> 直接解析 -> 提取花括号片段）。
 */
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

logger = logging.getLogger("smarttranslate.output_parser")

_FENCED_BLOCK_RE = re.compile(r"```[A-Za-z0-9_-]*[ \t]*\r?\n?(.*?)\s*```", re.DOTALL)
_LEADING_FENCE_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE_RE = re.compile(r"```\s*$")


@dataclass
class ParseFailure:
    raw: str
    hint: str


def strip_code_fence(text: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence."""
    content = (text or "").strip()
    content = _LEADING_FENCE_RE.sub("", content)
    content = _TRAILING_FENCE_RE.sub("", content)
    return content.strip()


def fenced_block(text: str) -> Optional[str]:
    """Inner text of the first complete fenced block, if any."""
    match = _FENCED_BLOCK_RE.search(text or "")
    if not match:
        return None
    return match.group(1).strip()


def try_parse_json(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    return value if isinstance(value, dict) else None


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse the span from the first `{` to the last `}`."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return try_parse_json(text[start : end + 1])


def parse_model_output(raw: str) -> Union[Dict[str, Any], ParseFailure]:
    """
    Recover a JSON object from model output.
    Order: edge fences stripped and parsed directly, then the body of a fenced
    block found after prose, then the first `{` to last `}` span. Failures keep
    the edge-stripped full text.
    """
    cleaned = strip_code_fence(raw)

    parsed = try_parse_json(cleaned)
    if parsed is not None:
        return parsed

    inner = fenced_block(raw)
    if inner is not None:
        parsed = try_parse_json(inner)
        if parsed is not None:
            logger.debug("Recovered JSON object from fenced block")
            return parsed

    if "{" not in cleaned:
        logger.error("No JSON found in response: %s", cleaned[:500])
        return ParseFailure(raw=cleaned, hint="No JSON structure found in response")

    parsed = extract_json_object(cleaned)
    if parsed is not None:
        logger.debug("Recovered JSON object embedded in model output")
        return parsed

    logger.error("Failed to parse extracted JSON, raw content: %s", cleaned[:500])
    return ParseFailure(raw=cleaned, hint="Could not parse model output as JSON")
