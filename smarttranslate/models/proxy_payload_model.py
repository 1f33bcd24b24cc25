"""
/**
 * @file smarttranslate/models/proxy_payload_model.py
 * @description 代理服务入站请求体模型（Pydantic）。
 */
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ProxyPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: Any = None
    target: Optional[str] = None
    tts: Any = None
    voice: Optional[str] = None
    action: Optional[str] = None
    context: Optional[str] = None

    @property
    def wants_analysis(self) -> bool:
        return self.action == "analyze"

    @property
    def wants_speech(self) -> bool:
        return self.tts is True
