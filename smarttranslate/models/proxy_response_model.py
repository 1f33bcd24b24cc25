"""
/**
 * @file smarttranslate/models/proxy_response_model.py
 * @description 客户端归一化响应模型：Translation / Analysis / Audio / Failure 四选一。
 */
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel


class Translation(BaseModel):
    type: Literal["translation"] = "translation"
    text: str
    cached: bool = False

    def to_message(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {"translation": self.text}
        if self.cached:
            message["cached"] = True
        return message


class Analysis(BaseModel):
    type: Literal["analysis"] = "analysis"
    data: Dict[str, Any]

    def to_message(self) -> Dict[str, Any]:
        return {"analysis": self.data}


class Audio(BaseModel):
    type: Literal["audio"] = "audio"
    base64: str
    mime: str = "audio/mpeg"

    def to_message(self) -> Dict[str, Any]:
        return {"audio": self.base64, "mime": self.mime}


class Failure(BaseModel):
    type: Literal["failure"] = "failure"
    error: str
    status: Optional[int] = None
    message: Optional[str] = None
    detail: Optional[Any] = None
    raw: Optional[Any] = None

    def to_message(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"type"}, exclude_none=True)


ProxyResponse = Union[Translation, Analysis, Audio, Failure]
