"""
/**
 * @file smarttranslate/utils/__init__.py
 * @description 工具函数导出。
 */
"""

from .text_utils import extract_selection_context
from .validators import MAX_TEXT_LENGTH, is_valid_url, normalize_text, validate_text

__all__ = ["extract_selection_context", "MAX_TEXT_LENGTH", "is_valid_url", "normalize_text", "validate_text"]
