"""
/**
 * @file smarttranslate/services/proxy_service.py
 * @description 代理请求处理：校验入站请求，按 action 路由到翻译 / 分析 / 语音合成，并归一化上游错误。
 */
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from smarttranslate.config import Settings, load_settings
from smarttranslate.models.proxy_payload_model import ProxyPayload
from smarttranslate.services.elevenlabs_client_service import ElevenLabsClient
from smarttranslate.services.openai_client_service import OpenAIChatClient
from smarttranslate.services.output_parser_service import ParseFailure, parse_model_output
from smarttranslate.services.prompt_service import WORD, build_analysis_messages, build_translation_messages
from smarttranslate.utils.validators import MAX_TEXT_LENGTH

logger = logging.getLogger("smarttranslate.proxy")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, x-proxy-token",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

_WORD_ARRAY_FIELDS = ("synonyms", "antonyms", "examples")
_SENTENCE_ARRAY_FIELDS = ("words", "examples")


@dataclass
class ProxyHttpResponse:
    status: int
    payload: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=lambda: dict(CORS_HEADERS))


def _json(status: int, payload: Dict[str, Any]) -> ProxyHttpResponse:
    return ProxyHttpResponse(status=status, payload=payload)


def fill_analysis_defaults(parsed: Dict[str, Any], kind: str) -> Dict[str, Any]:
    """Default the optional list fields so consumers never see a missing key."""
    shape = parsed.get("type") if parsed.get("type") in ("word", "sentence") else kind
    if shape == WORD:
        if not parsed.get("antonyms") and isinstance(parsed.get("contrary"), list):
            parsed["antonyms"] = parsed["contrary"]
        names = _WORD_ARRAY_FIELDS
    else:
        names = _SENTENCE_ARRAY_FIELDS
    for name in names:
        if not parsed.get(name):
            parsed[name] = []
    return parsed


class ProxyHandler:
    """Stateless entry point; one call per inbound HTTP request."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        chat_client: Optional[OpenAIChatClient] = None,
        tts_client: Optional[ElevenLabsClient] = None,
    ):
        self._initial_settings = settings
        self._chat_client = chat_client
        self._tts_client = tts_client

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    @property
    def chat_client(self) -> OpenAIChatClient:
        return self._chat_client or OpenAIChatClient(settings=self._initial_settings)

    @property
    def tts_client(self) -> ElevenLabsClient:
        return self._tts_client or ElevenLabsClient(settings=self._initial_settings)

    def handle(self, method: str, body: Union[bytes, str, Dict[str, Any], None]) -> ProxyHttpResponse:
        method = (method or "").upper()
        if method == "OPTIONS":
            return ProxyHttpResponse(status=200)
        if method != "POST":
            return _json(405, {"error": "method_not_allowed"})

        try:
            payload = self._parse_body(body)
        except (ValueError, ValidationError) as e:
            return _json(400, {"error": "invalid_json", "detail": str(e)})

        try:
            return self._route(payload)
        except Exception as e:
            logger.exception("Handler error")
            return _json(500, {"error": "proxy_failed", "message": str(e)})

    @staticmethod
    def _parse_body(body: Union[bytes, str, Dict[str, Any], None]) -> ProxyPayload:
        if isinstance(body, (bytes, bytearray)):
            body = body.decode("utf-8")
        if isinstance(body, str):
            body = json.loads(body) if body.strip() else {}
        if body is None:
            body = {}
        if not isinstance(body, dict):
            raise ValueError("request body must be a JSON object")
        return ProxyPayload.model_validate(body)

    def _route(self, payload: ProxyPayload) -> ProxyHttpResponse:
        text = payload.text
        if not isinstance(text, str) or not text.strip():
            return _json(400, {"error": "missing_text"})
        if len(text.strip()) > MAX_TEXT_LENGTH:
            return _json(400, {"error": "text_too_long"})

        settings = self.settings
        if not settings.resolve_openai_key():
            return _json(500, {"error": "server_misconfigured"})

        if payload.wants_analysis:
            return self.analyze(text)
        if payload.wants_speech:
            return self.synthesize(text, payload.voice)
        return self.translate(text, payload.target, payload.context)

    def analyze(self, text: str) -> ProxyHttpResponse:
        kind, messages = build_analysis_messages(text)
        params = self.settings.generation_params("analyze")
        result = self.chat_client.complete(
            messages,
            max_tokens=params.get("max_tokens"),
            temperature=params.get("temperature"),
            response_format={"type": "json_object"},
        )
        upstream_error = self._chat_error(result)
        if upstream_error:
            return upstream_error

        parsed = parse_model_output(result.get("output") or "")
        if isinstance(parsed, ParseFailure):
            return _json(502, {"error": "invalid_analysis", "raw": parsed.raw, "hint": parsed.hint})
        return _json(200, {"analysis": fill_analysis_defaults(parsed, kind)})

    def translate(self, text: str, target: Optional[str] = None, context: Optional[str] = None) -> ProxyHttpResponse:
        messages = build_translation_messages(text, target or "it", context)
        params = self.settings.generation_params("translate")
        result = self.chat_client.complete(
            messages,
            max_tokens=params.get("max_tokens"),
            temperature=params.get("temperature"),
        )
        upstream_error = self._chat_error(result)
        if upstream_error:
            return upstream_error

        translation = (result.get("output") or "").strip()
        if not translation:
            return _json(502, {"error": "no_translation", "raw": result.get("data")})
        return _json(200, {"translation": translation})

    def synthesize(self, text: str, voice: Optional[str] = None) -> ProxyHttpResponse:
        settings = self.settings
        api_key = settings.resolve_elevenlabs_key()
        # the server-side default voice takes precedence over the request
        voice_id = settings.resolve_default_voice() or voice
        if not api_key or not voice_id:
            return _json(
                500,
                {"error": "tts_not_configured", "detail": "Missing ELEVENLABS_KEY or ELEVEN_VOICE_ID in server env"},
            )

        result = self.tts_client.synthesize(text, voice_id)
        if result.get("status") != "success":
            if isinstance(result.get("code"), int):
                logger.error("ElevenLabs error %s: %s", result["code"], result.get("message"))
                return _json(502, {"error": "eleven_error", "status": result["code"], "detail": result.get("message", "")})
            logger.error("ElevenLabs TTS error: %s", result.get("message"))
            return _json(502, {"error": "tts_failed", "message": result.get("message", "")})

        audio = base64.b64encode(result.get("audio") or b"").decode("ascii")
        return _json(200, {"audio": audio, "mime": result.get("mime") or "audio/mpeg"})

    @staticmethod
    def _chat_error(result: Dict[str, Any]) -> Optional[ProxyHttpResponse]:
        if result.get("status") == "success":
            return None
        if isinstance(result.get("code"), int):
            logger.error("OpenAI error: %s", result.get("message"))
            return _json(502, {"error": "openai_error", "detail": result.get("message", "")})
        # transport failure, no upstream status
        logger.error("OpenAI request failed: %s", result.get("message"))
        return _json(500, {"error": "proxy_failed", "message": result.get("message", "")})
