"""
/**
 * @file smarttranslate/controllers/__init__.py
 * @description 控制器（路由）导出。
 */
"""

from .health_controller import router as health_router
from .proxy_controller import router as proxy_router

__all__ = [
    "health_router",
    "proxy_router",
]
