"""
/**
 * @file smarttranslate/services/elevenlabs_client_service.py
 * @description ElevenLabs 文本转语音调用封装。
 */
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from smarttranslate.config import Settings, load_settings

DEFAULT_AUDIO_MIME = "audio/mpeg"


def audio_mime_from_header(content_type: Optional[str]) -> str:
    value = (content_type or "").split(";")[0].strip().lower()
    return value if value.startswith("audio/") else DEFAULT_AUDIO_MIME


class ElevenLabsClient:
    def __init__(self, settings: Optional[Settings] = None):
        self._initial_settings = settings

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    @property
    def api_key(self) -> Optional[str]:
        return self.settings.resolve_elevenlabs_key()

    def synthesize(self, text: str, voice_id: str) -> Dict[str, Any]:
        endpoint = f"{self.settings.elevenlabs_tts_endpoint.rstrip('/')}/{voice_id}"
        headers = {
            "Accept": DEFAULT_AUDIO_MIME,
            "Content-Type": "application/json",
            "xi-api-key": self.api_key or "",
        }
        payload = {"text": text, "model_id": self.settings.resolve_elevenlabs_model()}
        try:
            response = requests.post(endpoint, headers=headers, json=payload)
            if 200 <= response.status_code < 300:
                return {
                    "status": "success",
                    "audio": response.content,
                    "mime": audio_mime_from_header(response.headers.get("Content-Type")),
                }
            return {"status": "error", "code": response.status_code, "message": response.text}
        except Exception as e:
            return {"status": "error", "message": str(e)}
