"""
/**
 * @file smarttranslate/services/prompt_service.py
 * @description 提示词构建：翻译提示、单词/句子分析提示，以及单词与句子的判定。
 */
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

Message = Dict[str, str]

WORD = "word"
SENTENCE = "sentence"

_TERMINAL_PUNCTUATION_RE = re.compile(r"[.!?;]")

TRANSLATOR_SYSTEM_PROMPT = (
    "You are a concise, literal translator. Always reply only with the translated text and nothing else."
)
ANALYST_SYSTEM_PROMPT = (
    "You are a linguistic assistant. Respond ONLY with valid JSON, no markdown, no code fences, no extra text."
)


def classify_analysis_input(text: str) -> str:
    """A single whitespace-delimited token without . ! ? ; is a word, anything else a sentence."""
    trimmed = (text or "").strip()
    if len(trimmed.split()) == 1 and not _TERMINAL_PUNCTUATION_RE.search(trimmed):
        return WORD
    return SENTENCE


def build_translation_messages(text: str, target: Optional[str] = None, context: Optional[str] = None) -> List[Message]:
    user_prompt = f'Translate the following text to {target or "it"} exactly (do not add commentary):\n"""\n{text}\n"""'
    if context:
        user_prompt += (
            "\n\nSurrounding text, for disambiguation only (do not translate it):\n"
            f'"""\n{context}\n"""'
        )
    return [
        {"role": "system", "content": TRANSLATOR_SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


def build_word_analysis_messages(word: str) -> List[Message]:
    user_prompt = f"""Analyze the word "{word}" and return a JSON object with this exact structure:
{{
  "type": "word",
  "word": "{word}",
  "definition": "brief definition",
  "synonyms": ["synonym1", "synonym2", "synonym3"],
  "antonyms": ["antonym1", "antonym2"],
  "examples": ["Example sentence 1", "Example sentence 2", "Example sentence 3"]
}}

Return ONLY the JSON object, nothing else."""
    return [
        {"role": "system", "content": ANALYST_SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


def build_sentence_analysis_messages(sentence: str) -> List[Message]:
    user_prompt = f"""Analyze this sentence and return a JSON object with this exact structure:
{{
  "type": "sentence",
  "sentence": "{sentence}",
  "words": [
    {{
      "word": "actual_word",
      "index": 0,
      "role": "noun/verb/adjective/etc",
      "explanation": "brief explanation of its grammatical role"
    }}
  ],
  "meaning": "overall meaning of the sentence",
  "examples": ["Similar example 1", "Similar example 2"]
}}

Sentence to analyze: "{sentence}"

Return ONLY the JSON object, nothing else."""
    return [
        {"role": "system", "content": ANALYST_SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


def build_analysis_messages(text: str) -> Tuple[str, List[Message]]:
    trimmed = (text or "").strip()
    kind = classify_analysis_input(trimmed)
    if kind == WORD:
        return kind, build_word_analysis_messages(trimmed)
    return kind, build_sentence_analysis_messages(trimmed)
