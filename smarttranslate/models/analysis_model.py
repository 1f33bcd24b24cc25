"""
/**
 * @file smarttranslate/models/analysis_model.py
 * @description 语言分析结果模型：单词分析与句子分析两种结构。
 */
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WordAnalysis(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = "word"
    word: str = ""
    definition: str = ""
    synonyms: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)
    examples: List[str] = Field(default_factory=list)


class SentenceWord(BaseModel):
    model_config = ConfigDict(extra="allow")

    word: str = ""
    index: Optional[int] = None
    role: str = ""
    explanation: str = ""


class SentenceAnalysis(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = "sentence"
    sentence: str = ""
    words: List[SentenceWord] = Field(default_factory=list)
    meaning: str = ""
    examples: List[str] = Field(default_factory=list)


AnalysisResult = Union[WordAnalysis, SentenceAnalysis]


def parse_analysis(data: Dict[str, Any]) -> AnalysisResult:
    kind = data.get("type")
    if kind == "word" or (kind != "sentence" and "word" in data and "sentence" not in data):
        return WordAnalysis.model_validate(data)
    return SentenceAnalysis.model_validate(data)
