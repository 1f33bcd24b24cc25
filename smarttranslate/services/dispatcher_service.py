"""
/**
 * @file smarttranslate/services/dispatcher_service.py
 * @description 客户端请求分发：校验、缓存、带截止时间的网络调用，以及错误归一化。
 */
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Union

import requests

from smarttranslate.models.dispatch_request_model import (
    DEFAULT_DEADLINES,
    DEFAULT_TARGET,
    DispatchRequest,
    MessageKind,
)
from smarttranslate.models.proxy_config_model import ProxyConfig
from smarttranslate.models.proxy_response_model import Analysis, Audio, Failure, ProxyResponse, Translation
from smarttranslate.services.config_resolver_service import ConfigResolver
from smarttranslate.services.result_cache_service import ResultCache, make_cache_key
from smarttranslate.utils.validators import normalize_text, validate_text

logger = logging.getLogger("smarttranslate.dispatcher")

Transport = Callable[..., Any]


def post_json(url: str, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> requests.Response:
    return requests.post(url, json=json, headers=headers, timeout=timeout)


def _read_json(response: Any) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None


def _read_text(response: Any) -> str:
    try:
        return response.text or ""
    except Exception:
        return ""


class RequestDispatcher:
    def __init__(
        self,
        resolver: Optional[ConfigResolver] = None,
        cache: Optional[ResultCache] = None,
        transport: Optional[Transport] = None,
        deadlines: Optional[Dict[MessageKind, float]] = None,
    ):
        self._resolver = resolver or ConfigResolver()
        self._cache = cache
        self._transport = transport or post_json
        self._deadlines = dict(DEFAULT_DEADLINES)
        if deadlines:
            self._deadlines.update(deadlines)
        # fingerprint -> running translate task, so identical requests share one network call
        self._inflight: Dict[str, asyncio.Task] = {}

    @property
    def cache(self) -> ResultCache:
        if self._cache is None:
            self._cache = ResultCache()
        return self._cache

    async def dispatch(self, request: Union[DispatchRequest, Dict[str, Any]]) -> ProxyResponse:
        """Resolve one request to a ProxyResponse. Never raises."""
        try:
            if not isinstance(request, DispatchRequest):
                request = DispatchRequest.from_message(request)
            return await self._dispatch(request)
        except Exception as e:
            logger.exception("Dispatch failed")
            return Failure(error="request_failed", message=str(e))

    async def _dispatch(self, request: DispatchRequest) -> ProxyResponse:
        error = validate_text(request.text)
        if error:
            return Failure(error=error)
        kind = request.message_kind()
        if kind is None:
            return Failure(error="unknown_message_type")

        text = normalize_text(request.text)
        if kind is MessageKind.TRANSLATE:
            return await self._translate(text, request.target or DEFAULT_TARGET, request.context)
        if kind is MessageKind.ANALYZE:
            return await self._call(kind, {"text": text, "action": "analyze"})
        return await self._call(kind, {"text": text, "tts": True, "voice": request.voice})

    async def _translate(self, text: str, target: str, context: Optional[str]) -> ProxyResponse:
        key = make_cache_key(MessageKind.TRANSLATE.value, target, text)
        try:
            cached = await asyncio.to_thread(self.cache.get, key)
            if cached:
                return Translation(text=cached, cached=True)
        except Exception as e:
            logger.warning("Cache read failed: %s", e)

        running = self._inflight.get(key)
        if running is not None:
            return await asyncio.shield(running)

        body: Dict[str, Any] = {"text": text, "target": target}
        if context:
            body["context"] = context
        task = asyncio.ensure_future(self._call(MessageKind.TRANSLATE, body, cache_key=key))
        self._inflight[key] = task
        task.add_done_callback(lambda _done: self._inflight.pop(key, None))
        return await asyncio.shield(task)

    async def _call(self, kind: MessageKind, body: Dict[str, Any], cache_key: Optional[str] = None) -> ProxyResponse:
        """
        Send one proxy request under the kind's deadline.
        On expiry only the wait is abandoned: the worker thread running the
        blocking POST keeps going until the requests socket timeout (also the
        deadline, applied per read) fires or the response completes, and its
        result is dropped without touching the cache.
        """
        config = await asyncio.to_thread(self._resolver.resolve)
        deadline = self._deadlines[kind]
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(self._send, config, body, deadline),
                timeout=deadline,
            )
        except (asyncio.TimeoutError, requests.Timeout):
            logger.error("Proxy request timed out after %ss", deadline)
            return Failure(error="timeout")
        except Exception as e:
            logger.error("Proxy request failed: %s", e)
            return Failure(error="request_failed", message=str(e))

        if not 200 <= response.status_code < 300:
            message = _read_text(response)
            logger.error("Proxy responded with error %s: %s", response.status_code, message[:500])
            return Failure(error="proxy_error", status=response.status_code, message=message)

        data = _read_json(response)
        if kind is MessageKind.TRANSLATE:
            return await self._translation_result(data, response, cache_key)
        if kind is MessageKind.ANALYZE:
            if not isinstance(data, dict) or not data.get("analysis"):
                return Failure(error="no_analysis", raw=data if data is not None else _read_text(response))
            return Analysis(data=data["analysis"])
        if not isinstance(data, dict) or not data.get("audio"):
            return Failure(error="no_audio", raw=data if data is not None else _read_text(response))
        return Audio(base64=data["audio"], mime=data.get("mime") or "audio/mpeg")

    async def _translation_result(self, data: Any, response: Any, cache_key: Optional[str]) -> ProxyResponse:
        if not isinstance(data, dict):
            return Failure(error="invalid_response", raw=_read_text(response) or None)
        translation = data.get("translation")
        if isinstance(translation, str) and translation:
            if cache_key:
                try:
                    await asyncio.to_thread(self.cache.put, cache_key, translation)
                except Exception as e:
                    logger.warning("Cache write failed: %s", e)
            return Translation(text=translation)
        if data.get("error"):
            return Failure(error="proxy_error", detail=data)
        return Failure(error="invalid_response", raw=data)

    def _send(self, config: ProxyConfig, body: Dict[str, Any], timeout: float) -> Any:
        headers = {"Content-Type": "application/json"}
        if config.token:
            headers["x-proxy-token"] = config.token
        return self._transport(config.endpoint_url, json=body, headers=headers, timeout=timeout)
