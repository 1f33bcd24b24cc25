"""
/**
 * @file smarttranslate/services/config_resolver_service.py
 * @description 解析客户端代理配置（地址 + 可选令牌），读取失败时回退到内置默认地址。
 */
"""

from __future__ import annotations

import logging
from typing import Optional

from smarttranslate.models.proxy_config_model import ProxyConfig
from smarttranslate.services.local_store_service import LocalStore
from smarttranslate.utils.validators import is_valid_url

logger = logging.getLogger("smarttranslate.config_resolver")

DEFAULT_PROXY_URL = "https://smarttranslateplus-f5y4.vercel.app/api/translate"
PROXY_URL_KEY = "proxyUrl"
PROXY_TOKEN_KEY = "proxyToken"


class ConfigResolver:
    def __init__(self, store: Optional[LocalStore] = None, default_url: str = DEFAULT_PROXY_URL):
        self._store = store
        self._default_url = default_url

    def resolve(self) -> ProxyConfig:
        try:
            store = self._store or LocalStore()
            values = store.get([PROXY_URL_KEY, PROXY_TOKEN_KEY])
        except Exception as e:
            logger.warning("Proxy config read failed, using default endpoint: %s", e)
            return ProxyConfig(endpoint_url=self._default_url)

        url = values.get(PROXY_URL_KEY)
        token = values.get(PROXY_TOKEN_KEY)
        return ProxyConfig(
            endpoint_url=url.strip() if isinstance(url, str) and is_valid_url(url) else self._default_url,
            token=token if isinstance(token, str) and token else None,
        )
