"""
/**
 * @file smarttranslate/models/proxy_config_model.py
 * @description 客户端代理配置模型（Pydantic）。
 */
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProxyConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint_url: str
    token: Optional[str] = Field(default=None, repr=False)
