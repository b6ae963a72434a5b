"""QueryClassifier: keyword heuristics for complexity and reasoning mode.

Classification runs before every model call, so it stays a handful of
substring checks with no model round-trip. Keyword lists come from
``ClassifierConfig`` and can be tuned or localised without touching the
control flow here.
"""

from __future__ import annotations

import logging
import re
from typing import Protocol

from context_budget_sdk.config import BudgetConfig, ClassifierConfig
from context_budget_sdk.core.types import (
    ContextAvailability,
    QueryAnalysis,
    QueryComplexity,
    ReasoningMode,
)

logger = logging.getLogger(__name__)


class QueryClassifier(Protocol):
    def classify_complexity(self, query: str) -> QueryComplexity: ...

    def detect_reasoning_mode(self, query: str) -> ReasoningMode: ...

    def analyze(
        self, query: str, context: ContextAvailability
    ) -> QueryAnalysis: ...


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(k in text for k in keywords)


class KeywordQueryClassifier:
    """Case-insensitive substring classifier; first matching rule wins."""

    def __init__(
        self,
        config: ClassifierConfig | None = None,
        budget_config: BudgetConfig | None = None,
    ) -> None:
        self._cfg = config or ClassifierConfig()
        self._budget = budget_config or BudgetConfig()
        self._simple_question = re.compile(self._cfg.simple_question_pattern)

    def classify_complexity(self, query: str) -> QueryComplexity:
        lower = (query or "").lower()
        word_count = len(lower.split())
        cfg = self._cfg

        if word_count < cfg.simple_max_words and (
            lower in cfg.greetings
            or self._simple_question.fullmatch(lower) is not None
        ):
            return QueryComplexity.SIMPLE

        # Research is checked first so long keyword-heavy queries never downgrade.
        if word_count > cfg.research_min_words or _contains_any(
            lower, cfg.research_keywords
        ):
            return QueryComplexity.RESEARCH

        if word_count > cfg.complex_min_words or _contains_any(
            lower, cfg.complex_keywords
        ):
            return QueryComplexity.COMPLEX

        return QueryComplexity.MODERATE

    def detect_reasoning_mode(self, query: str) -> ReasoningMode:
        lower = (query or "").lower()
        for mode, keywords in self._cfg.mode_keywords:
            if _contains_any(lower, keywords):
                return mode
        return self._cfg.default_mode

    def requires_memory(self, query: str, context: ContextAvailability) -> bool:
        return context.has_memories and _contains_any(
            (query or "").lower(), self._cfg.memory_cues
        )

    def requires_sources(self, query: str, context: ContextAvailability) -> bool:
        return context.has_sources and _contains_any(
            (query or "").lower(), self._cfg.source_cues
        )

    def analyze(
        self, query: str, context: ContextAvailability
    ) -> QueryAnalysis:
        complexity = self.classify_complexity(query)
        mode = self.detect_reasoning_mode(query)
        analysis = QueryAnalysis(
            complexity=complexity,
            reasoning_mode=mode,
            requires_memory=self.requires_memory(query, context),
            requires_sources=self.requires_sources(query, context),
            has_attachments=context.has_attachments,
            is_multi_turn=(
                context.conversation_length > self._budget.multi_turn_threshold
            ),
            estimated_response_tokens=self._budget.estimated_response_tokens[
                complexity
            ],
        )
        logger.debug(
            "Query classified as %s/%s (memory=%s, sources=%s)",
            complexity.value,
            mode.value,
            analysis.requires_memory,
            analysis.requires_sources,
        )
        return analysis
