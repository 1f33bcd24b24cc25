"""
/**
 * @file smarttranslate/config/settings.py
 * @description 代理服务配置加载与合并（config.json + config.local.json + 环境变量）。
 */
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional


PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(PACKAGE_ROOT, "config.json")
CONFIG_LOCAL_PATH = os.path.join(PACKAGE_ROOT, "config.local.json")
CONFIG_EXAMPLE_PATH = os.path.join(PACKAGE_ROOT, "config.example.json")

DEFAULT_OPENAI_CHAT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_ELEVENLABS_TTS_ENDPOINT = "https://api.elevenlabs.io/v1/text-to-speech"
DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_ELEVENLABS_MODEL = "eleven_multilingual_v2"

logger = logging.getLogger("smarttranslate.config")


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            value = json.load(f)
            return value if isinstance(value, dict) else {}
    except FileNotFoundError:
        return {}


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class Settings:
    raw: Dict[str, Any]

    @property
    def endpoints(self) -> Dict[str, str]:
        value = self.raw.get("endpoints", {})
        return value if isinstance(value, dict) else {}

    @property
    def models(self) -> Dict[str, str]:
        value = self.raw.get("models", {})
        return value if isinstance(value, dict) else {}

    @property
    def api_keys(self) -> Dict[str, str]:
        value = self.raw.get("api_keys", {})
        return value if isinstance(value, dict) else {}

    @property
    def voices(self) -> Dict[str, str]:
        value = self.raw.get("voices", {})
        return value if isinstance(value, dict) else {}

    @property
    def parameters(self) -> Dict[str, Any]:
        value = self.raw.get("parameters", {})
        return value if isinstance(value, dict) else {}

    @property
    def openai_chat_endpoint(self) -> str:
        return _str_or_none(self.endpoints.get("openai_chat")) or DEFAULT_OPENAI_CHAT_ENDPOINT

    @property
    def elevenlabs_tts_endpoint(self) -> str:
        return _str_or_none(self.endpoints.get("elevenlabs_tts")) or DEFAULT_ELEVENLABS_TTS_ENDPOINT

    def generation_params(self, action: str) -> Dict[str, Any]:
        """Sampling parameters for a chat action ("translate" or "analyze")."""
        defaults = {
            "translate": {"max_tokens": 800, "temperature": 0.0},
            "analyze": {"max_tokens": 1000, "temperature": 0.3},
        }
        params = dict(defaults.get(action, {}))
        override = self.parameters.get(action)
        if isinstance(override, dict):
            params.update({k: v for k, v in override.items() if k in ("max_tokens", "temperature")})
        return params

    def resolve_openai_key(self) -> Optional[str]:
        return os.getenv("OPENAI_API_KEY") or _str_or_none(self.api_keys.get("openai"))

    def resolve_openai_model(self) -> str:
        return os.getenv("OPENAI_MODEL") or _str_or_none(self.models.get("openai")) or DEFAULT_OPENAI_MODEL

    def resolve_elevenlabs_key(self) -> Optional[str]:
        return (
            os.getenv("ELEVENLABS_KEY")
            or os.getenv("ELEVEN_API_KEY")
            or _str_or_none(self.api_keys.get("elevenlabs"))
        )

    def resolve_default_voice(self) -> Optional[str]:
        return os.getenv("ELEVEN_VOICE_ID") or _str_or_none(self.voices.get("default"))

    def resolve_elevenlabs_model(self) -> str:
        return (
            os.getenv("ELEVEN_MODEL_ID")
            or _str_or_none(self.models.get("elevenlabs"))
            or DEFAULT_ELEVENLABS_MODEL
        )


_CACHED_SETTINGS: Optional[Settings] = None
_LAST_LOAD_TIME = 0.0
_CONFIG_HASH = ""
_SETTINGS_LOCK = threading.Lock()


def _deep_diff(d1: Dict[str, Any], d2: Dict[str, Any], path="") -> list:
    diffs = []
    for k in set(d1.keys()) | set(d2.keys()):
        p = f"{path}.{k}" if path else k
        if k not in d1:
            diffs.append(f"Added: {p}")
        elif k not in d2:
            diffs.append(f"Removed: {p}")
        elif isinstance(d1[k], dict) and isinstance(d2[k], dict):
            diffs.extend(_deep_diff(d1[k], d2[k], p))
        elif d1[k] != d2[k]:
            # api keys end up here too, so only the path is logged
            diffs.append(f"Changed: {p}")
    return diffs


def _read_merged(base_path: str, local_path: str, example_path: str) -> Dict[str, Any]:
    base_cfg = _load_json(base_path)
    if not base_cfg.get("endpoints") and os.path.exists(example_path):
        base_cfg = _merge_dicts(_load_json(example_path), base_cfg)
    local_cfg = _load_json(local_path)
    return _merge_dicts(base_cfg, local_cfg)


def reload_settings(
    base_path: str = CONFIG_PATH,
    local_path: str = CONFIG_LOCAL_PATH,
    example_path: str = CONFIG_EXAMPLE_PATH,
) -> Settings:
    global _CACHED_SETTINGS, _LAST_LOAD_TIME, _CONFIG_HASH

    with _SETTINGS_LOCK:
        now = time.time()
        # Debounce: 500ms
        if _CACHED_SETTINGS and (now - _LAST_LOAD_TIME < 0.5):
            return _CACHED_SETTINGS

        try:
            merged = _read_merged(base_path, local_path, example_path)

            # Sort keys to ensure consistent hash for same content
            new_hash = hashlib.md5(json.dumps(merged, sort_keys=True).encode("utf-8")).hexdigest()
            if _CACHED_SETTINGS and new_hash == _CONFIG_HASH:
                _LAST_LOAD_TIME = now
                return _CACHED_SETTINGS

            is_reload = _CACHED_SETTINGS is not None
            if is_reload:
                diffs = _deep_diff(_CACHED_SETTINGS.raw, merged)
                if diffs:
                    logger.info("Config changes detected: %s", "; ".join(diffs))

            _CACHED_SETTINGS = Settings(raw=merged)
            _CONFIG_HASH = new_hash
            _LAST_LOAD_TIME = now

            if is_reload:
                logger.info("Configuration reloaded successfully.")

        except Exception as e:
            logger.error("Failed to reload config: %s. Keeping old config.", e)
            if not _CACHED_SETTINGS:
                logger.warning("Initializing with empty settings due to load failure.")
                _CACHED_SETTINGS = Settings(raw={})

    return _CACHED_SETTINGS


def load_settings(
    base_path: Optional[str] = None,
    local_path: Optional[str] = None,
    example_path: Optional[str] = None,
) -> Settings:
    """
    Get current settings. Lazy loads on first call.
    Explicit paths bypass the shared cache and read those files directly.
    Subsequent reloads are handled by the file watcher calling reload_settings().
    """
    if base_path or local_path or example_path:
        return Settings(
            raw=_read_merged(
                base_path or CONFIG_PATH,
                local_path or CONFIG_LOCAL_PATH,
                example_path or CONFIG_EXAMPLE_PATH,
            )
        )
    if _CACHED_SETTINGS is None:
        return reload_settings()
    return _CACHED_SETTINGS
