"""
/**
 * @file smarttranslate/models/dispatch_request_model.py
 * @description 客户端请求模型（翻译 / 分析 / 语音合成）。
 */
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class MessageKind(str, Enum):
    TRANSLATE = "TRANSLATE_TEXT"
    ANALYZE = "ANALYZE_TEXT"
    SYNTHESIZE = "GET_TTS"


DEFAULT_TARGET = "it"

# per-kind network deadline in seconds
DEFAULT_DEADLINES: Dict[MessageKind, float] = {
    MessageKind.TRANSLATE: 15.0,
    MessageKind.ANALYZE: 15.0,
    MessageKind.SYNTHESIZE: 25.0,
}


class DispatchRequest(BaseModel):
    # kept as a plain string: an unknown kind is a dispatch failure, not a validation error
    kind: Optional[str] = None
    text: Optional[str] = None
    target: Optional[str] = None
    voice: Optional[str] = None
    context: Optional[str] = None

    @classmethod
    def from_message(cls, message: Dict[str, Any]) -> "DispatchRequest":
        """Build from an extension message, which names the kind `type`."""
        data = dict(message or {})
        if "kind" not in data and "type" in data:
            data["kind"] = data.pop("type")
        text = data.get("text")
        return cls(
            kind=data.get("kind") if isinstance(data.get("kind"), str) else None,
            text=text if text is None or isinstance(text, str) else str(text),
            target=data.get("target") or None,
            voice=data.get("voice") or None,
            context=data.get("context") or None,
        )

    def message_kind(self) -> Optional[MessageKind]:
        try:
            return MessageKind(self.kind)
        except ValueError:
            return None
