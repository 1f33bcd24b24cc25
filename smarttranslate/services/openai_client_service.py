"""
/**
 * @file smarttranslate/services/openai_client_service.py
 * @description OpenAI Chat Completions 调用封装（翻译与分析）。
 */
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from smarttranslate.config import Settings, load_settings


class OpenAIChatClient:
    def __init__(self, settings: Optional[Settings] = None):
        # settings are fetched on each call so config reloads apply without a restart
        self._initial_settings = settings

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    @property
    def api_key(self) -> Optional[str]:
        return self.settings.resolve_openai_key()

    def _get_headers(self, api_key: Optional[str] = None) -> Dict[str, str]:
        key = api_key or self.api_key
        if not key:
            raise ValueError("Missing API key. Set OPENAI_API_KEY or config.local.json")
        return {"Authorization": f"Bearer {key}", "Content-Type": "application/json"}

    @staticmethod
    def extract_content(data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return ""
        message = choices[0].get("message")
        if not isinstance(message, dict):
            return ""
        content = message.get("content")
        return content if isinstance(content, str) else ""

    def complete(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": model or self.settings.resolve_openai_model(),
            "messages": messages,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if temperature is not None:
            payload["temperature"] = temperature
        if response_format is not None:
            payload["response_format"] = response_format

        try:
            response = requests.post(self.settings.openai_chat_endpoint, headers=self._get_headers(), json=payload)
            if 200 <= response.status_code < 300:
                data = response.json()
                return {"status": "success", "output": self.extract_content(data), "data": data}
            return {"status": "error", "code": response.status_code, "message": response.text}
        except Exception as e:
            return {"status": "error", "message": str(e)}
