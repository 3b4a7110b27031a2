"""
agent.tools.text_analyzer - Basic text metrics.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Any, Mapping

from toolloop.agent.tools.base import BaseTool, ParameterSpec, ToolParameters
from toolloop.domain.results import Result

_WORD = re.compile(r"\b[\w']+\b", re.UNICODE)
_SENTENCE_END = re.compile(r"[.!?。！？]+")


class TextAnalyzerTool(BaseTool):
    """Count characters, words, sentences and report frequent words."""

    name = "text_analyzer"
    description = "Analyse a text: character, word, sentence and paragraph counts plus the most frequent words"
    category = "text"
    parameters = ToolParameters(
        properties={
            "text": ParameterSpec(type="string", description="Text to analyse"),
            "top_n": ParameterSpec(type="integer", description="How many frequent words to list (default 5)"),
        },
        required=["text"],
    )

    async def execute(self, args: Mapping[str, Any]) -> Result:
        text: str = args["text"]
        top_n = args.get("top_n", 5)
        if top_n < 0:
            return self._err("top_n must be zero or positive")

        words = _WORD.findall(text)
        sentences = [s for s in _SENTENCE_END.split(text) if s.strip()]
        paragraphs = [p for p in re.split(r"\n\s*\n", text) if p.strip()]
        frequent = Counter(word.lower() for word in words).most_common(top_n)

        return self._ok({
            "characters": len(text),
            "characters_no_spaces": len(re.sub(r"\s", "", text)),
            "words": len(words),
            "sentences": len(sentences),
            "paragraphs": len(paragraphs),
            "average_word_length": round(sum(map(len, words)) / len(words), 2) if words else 0.0,
            "top_words": [{"word": w, "count": c} for w, c in frequent],
        })
