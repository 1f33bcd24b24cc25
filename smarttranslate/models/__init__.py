"""
/**
 * @file smarttranslate/models/__init__.py
 * @description 数据模型导出。
 */
"""

from .analysis_model import SentenceAnalysis, SentenceWord, WordAnalysis, parse_analysis
from .dispatch_request_model import DispatchRequest, MessageKind
from .proxy_config_model import ProxyConfig
from .proxy_payload_model import ProxyPayload
from .proxy_response_model import Analysis, Audio, Failure, ProxyResponse, Translation

__all__ = [
    "SentenceAnalysis",
    "SentenceWord",
    "WordAnalysis",
    "parse_analysis",
    "DispatchRequest",
    "MessageKind",
    "ProxyConfig",
    "ProxyPayload",
    "Analysis",
    "Audio",
    "Failure",
    "ProxyResponse",
    "Translation",
]
