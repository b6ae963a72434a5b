"""ContextOptimizer: the main entry point for token budgeting."""

from __future__ import annotations

from typing import Mapping, Protocol

from context_budget_sdk.analysis.classifier import (
    KeywordQueryClassifier,
    QueryClassifier,
)
from context_budget_sdk.budget.allocator import BudgetAllocator, DefaultBudgetAllocator
from context_budget_sdk.budget.compression import ContextCompressor
from context_budget_sdk.budget.limits import (
    calculate_memory_limit,
    calculate_message_limit,
    calculate_source_chunk_limit,
    derive_limits,
)
from context_budget_sdk.config import RuntimeConfig
from context_budget_sdk.core.token_estimator import CharRatioEstimator, TokenEstimator
from context_budget_sdk.core.types import (
    AllocationStrategy,
    ContextAvailability,
    ContextCategory,
    ContextPlan,
    QueryAnalysis,
)
from context_budget_sdk.guidance import should_include_examples
from context_budget_sdk.observability.event_bus import Event, EventBus


class ContextOptimizer(Protocol):
    def analyze_query(
        self,
        query: str,
        conversation_length: int = 0,
        available_memories: int = 0,
        available_sources: int = 0,
        has_attachments: bool = False,
    ) -> QueryAnalysis: ...

    def optimize_allocation(
        self,
        query: str,
        conversation_length: int = 0,
        available_memories: int = 0,
        available_sources: int = 0,
        has_attachments: bool = False,
    ) -> AllocationStrategy: ...

    def plan(
        self,
        query: str,
        conversation_length: int = 0,
        available_memories: int = 0,
        available_sources: int = 0,
        has_attachments: bool = False,
    ) -> ContextPlan: ...

    def should_compress_context(self, current_tokens: int) -> bool: ...

    def get_compression_recommendations(
        self, current_allocation: AllocationStrategy, target_reduction: int
    ) -> dict[ContextCategory, int]: ...


class DefaultContextOptimizer:
    """Default ContextOptimizer: classifier, allocator, limits and compression."""

    def __init__(
        self,
        config: RuntimeConfig | None = None,
        *,
        classifier: QueryClassifier | None = None,
        allocator: BudgetAllocator | None = None,
        compressor: ContextCompressor | None = None,
        token_estimator: TokenEstimator | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._cfg = config or RuntimeConfig()
        self._classifier = classifier or KeywordQueryClassifier(
            config=self._cfg.classifier, budget_config=self._cfg.budget
        )
        self._allocator = allocator or DefaultBudgetAllocator(
            config=self._cfg.budget,
            classifier=self._classifier,
            strict=self._cfg.strict_validation,
        )
        self._compressor = compressor or ContextCompressor(
            config=self._cfg.compression, budget_config=self._cfg.budget
        )
        self._tok = token_estimator or CharRatioEstimator()
        self._event_bus = event_bus

    def _emit(self, event_type: str, **payload) -> None:
        if self._event_bus is None or not self._cfg.observability.emit_events:
            return
        self._event_bus.emit(Event(event_type=event_type, payload=payload))

    def _analyze(
        self, query: str, context: ContextAvailability
    ) -> QueryAnalysis:
        analysis = self._classifier.analyze(query, context)
        self._emit(
            "QueryAnalyzed",
            complexity=analysis.complexity.value,
            reasoning_mode=analysis.reasoning_mode.value,
            requires_memory=analysis.requires_memory,
            requires_sources=analysis.requires_sources,
        )
        return analysis

    def _allocate(
        self, analysis: QueryAnalysis, context: ContextAvailability
    ) -> AllocationStrategy:
        strategy = self._allocator.allocate(analysis, context)
        self._emit("AllocationComputed", valid=strategy.validate(), **strategy.as_dict())
        return strategy

    def analyze_query(
        self,
        query: str,
        conversation_length: int = 0,
        available_memories: int = 0,
        available_sources: int = 0,
        has_attachments: bool = False,
    ) -> QueryAnalysis:
        context = ContextAvailability.of(
            conversation_length, available_memories, available_sources, has_attachments
        )
        return self._analyze(query, context)

    def optimize_allocation(
        self,
        query: str,
        conversation_length: int = 0,
        available_memories: int = 0,
        available_sources: int = 0,
        has_attachments: bool = False,
    ) -> AllocationStrategy:
        context = ContextAvailability.of(
            conversation_length, available_memories, available_sources, has_attachments
        )
        return self._allocate(self._analyze(query, context), context)

    def plan(
        self,
        query: str,
        conversation_length: int = 0,
        available_memories: int = 0,
        available_sources: int = 0,
        has_attachments: bool = False,
    ) -> ContextPlan:
        """Analysis, allocation and item limits for one request."""
        context = ContextAvailability.of(
            conversation_length, available_memories, available_sources, has_attachments
        )
        analysis = self._analyze(query, context)
        strategy = self._allocate(analysis, context)
        return ContextPlan(
            analysis=analysis,
            strategy=strategy,
            limits=derive_limits(strategy, analysis.complexity, self._cfg.limits),
            include_examples=should_include_examples(analysis.complexity),
        )

    # -- limits ---------------------------------------------------------------

    def calculate_memory_limit(
        self, token_budget: int, avg_memory_tokens: int | None = None
    ) -> int:
        cfg = self._cfg.limits
        if avg_memory_tokens is None:
            avg_memory_tokens = cfg.avg_memory_tokens
        return calculate_memory_limit(token_budget, avg_memory_tokens, cfg.memory_cap)

    def calculate_source_chunk_limit(
        self, token_budget: int, avg_chunk_tokens: int | None = None
    ) -> int:
        cfg = self._cfg.limits
        if avg_chunk_tokens is None:
            avg_chunk_tokens = cfg.avg_chunk_tokens
        return calculate_source_chunk_limit(token_budget, avg_chunk_tokens, cfg.chunk_cap)

    def calculate_message_limit(
        self, token_budget: int, avg_message_tokens: int | None = None
    ) -> int:
        cfg = self._cfg.limits
        if avg_message_tokens is None:
            avg_message_tokens = cfg.avg_message_tokens
        return calculate_message_limit(token_budget, avg_message_tokens, cfg.message_cap)

    # -- compression ------------------------------------------------------------

    def should_compress_context(self, current_tokens: int) -> bool:
        return self._compressor.should_compress_context(current_tokens)

    def get_compression_recommendations(
        self, current_allocation: AllocationStrategy, target_reduction: int
    ) -> dict[ContextCategory, int]:
        return self._compressor.get_compression_recommendations(
            current_allocation, target_reduction
        )

    def recommend_compression(
        self,
        current_allocation: AllocationStrategy,
        sections: Mapping[ContextCategory, str],
    ) -> dict[ContextCategory, int]:
        """Recommendations for assembled text that overflows the threshold."""
        current_tokens = self._tok.estimate_texts(sections.values())
        if not self.should_compress_context(current_tokens):
            return {}
        target = self._compressor.reduction_needed(current_tokens)
        recommendations = self.get_compression_recommendations(
            current_allocation, target
        )
        self._emit(
            "CompressionRecommended",
            current_tokens=current_tokens,
            target_reduction=target,
            recommendations={c.value: v for c, v in recommendations.items()},
        )
        return recommendations


def create_context_optimizer(
    config: RuntimeConfig | None = None,
    event_bus: EventBus | None = None,
) -> DefaultContextOptimizer:
    """One-line factory to create a ContextOptimizer with all default components."""
    return DefaultContextOptimizer(config=config, event_bus=event_bus)
