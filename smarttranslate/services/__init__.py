"""
/**
 * @file smarttranslate/services/__init__.py
 * @description 业务服务层导出。
 */
"""

from .config_resolver_service import ConfigResolver
from .dispatcher_service import RequestDispatcher
from .elevenlabs_client_service import ElevenLabsClient
from .local_store_service import LocalStore
from .openai_client_service import OpenAIChatClient
from .output_parser_service import ParseFailure, parse_model_output
from .proxy_service import ProxyHandler, ProxyHttpResponse
from .result_cache_service import ResultCache, make_cache_key

__all__ = [
    "ConfigResolver",
    "RequestDispatcher",
    "ElevenLabsClient",
    "LocalStore",
    "OpenAIChatClient",
    "ParseFailure",
    "parse_model_output",
    "ProxyHandler",
    "ProxyHttpResponse",
    "ResultCache",
    "make_cache_key",
]
