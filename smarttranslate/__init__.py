"""
/**
 * @file smarttranslate/__init__.py
 * @description SmartTranslate：选中文本翻译 / 分析 / 语音合成的请求分发与代理层。
 */
"""

__version__ = "0.1.0"
