"""
/**
 * @file smarttranslate/utils/text_utils.py
 * @description 文本工具：截取选中文本周围的上下文。
 */
"""

from __future__ import annotations

import re

CONTEXT_LIMIT = 500
CONTEXT_RADIUS = 200


def extract_selection_context(container_text: str, selected_text: str) -> str:
    """
    Surrounding text for a selection, at most CONTEXT_LIMIT characters.

    When the selection is found inside a long container, a window of
    CONTEXT_RADIUS characters on each side is kept and cut ends are marked
    with "...".
    """
    context = re.sub(r"\s+", " ", (container_text or "").strip())
    selected = (selected_text or "").strip()
    if len(context) <= CONTEXT_LIMIT:
        return context

    index = context.find(selected) if selected else -1
    if index == -1:
        return context[:CONTEXT_LIMIT] + "..."

    start = max(0, index - CONTEXT_RADIUS)
    end = min(len(context), index + len(selected) + CONTEXT_RADIUS)
    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(context) else ""
    return prefix + context[start:end] + suffix
