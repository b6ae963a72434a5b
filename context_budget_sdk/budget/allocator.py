"""BudgetAllocator: split a token budget across context categories.

The allocation runs as a chain of pure steps over an immutable
``AllocationSplit``:

1. base budget from the complexity tier
2. scale-up for the context that is actually available, capped at the
   safe input ceiling
3. reserve carve-out and the per-mode percentage template
4. reallocation of unused categories (memories, then sources, then
   attachments; each sees the result of the previous one)
5. system-instruction boost for complex and research queries

Every step is a module-level function so it can be exercised on its own.
"""

from __future__ import annotations

import logging
from typing import Protocol

from context_budget_sdk.analysis.classifier import (
    KeywordQueryClassifier,
    QueryClassifier,
)
from context_budget_sdk.config import AllocationTemplate, BudgetConfig
from context_budget_sdk.core.types import (
    AllocationSplit,
    AllocationStrategy,
    ContextAvailability,
    QueryAnalysis,
    QueryComplexity,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

def base_budget(complexity: QueryComplexity, config: BudgetConfig) -> int:
    return config.complexity_baselines[complexity]


def scale_budget(
    budget: int, context: ContextAvailability, config: BudgetConfig
) -> int:
    """Grow the budget when rich context is available; factors compound."""
    if context.has_memories:
        budget = int(budget * config.memory_multiplier)
    if context.has_sources:
        budget = int(budget * config.source_multiplier)
    if context.has_attachments:
        budget = int(budget * config.attachment_multiplier)
    if context.conversation_length > config.long_conversation_threshold:
        budget = int(budget * config.long_conversation_multiplier)
    return min(budget, config.max_safe_input_tokens)


def reserve_for(total_budget: int, config: BudgetConfig) -> int:
    return int(total_budget * config.reserve_ratio)


def initial_split(usable_budget: int, template: AllocationTemplate) -> AllocationSplit:
    return AllocationSplit(
        system=int(usable_budget * template.system),
        history=int(usable_budget * template.history),
        memories=int(usable_budget * template.memories),
        sources=int(usable_budget * template.sources),
        attachments=int(usable_budget * template.attachments),
    )


def reallocate_memories(split: AllocationSplit, analysis: QueryAnalysis) -> AllocationSplit:
    """Hand an unused memory share to history and sources, half each."""
    if analysis.requires_memory or split.memories == 0:
        return split
    to_sources = split.memories // 2
    return split.replace(
        history=split.history + split.memories - to_sources,
        sources=split.sources + to_sources,
        memories=0,
    )


def reallocate_sources(
    split: AllocationSplit,
    analysis: QueryAnalysis,
    context: ContextAvailability,
) -> AllocationSplit:
    """Hand an unused source share to history and memories, half each.

    With no memories available the memory half goes to history as well.
    """
    if analysis.requires_sources or split.sources == 0:
        return split
    to_memories = split.sources // 2 if context.has_memories else 0
    return split.replace(
        history=split.history + split.sources - to_memories,
        memories=split.memories + to_memories,
        sources=0,
    )


def reallocate_attachments(split: AllocationSplit, analysis: QueryAnalysis) -> AllocationSplit:
    if analysis.has_attachments or split.attachments == 0:
        return split
    return split.replace(
        history=split.history + split.attachments,
        attachments=0,
    )


def apply_complexity_boost(
    split: AllocationSplit,
    analysis: QueryAnalysis,
    usable_budget: int,
    config: BudgetConfig,
) -> AllocationSplit:
    """Move a slice of the usable budget into system instructions.

    Half the boost is drawn from memories and the rest from history, each
    floored at what the category holds; system gains exactly what was drawn.
    """
    if analysis.complexity not in config.boosted_complexities:
        return split
    boost = int(usable_budget * config.complexity_boost_ratio)
    from_memories = min(boost // 2, split.memories)
    from_history = min(boost - from_memories, split.history)
    if from_memories + from_history < boost:
        logger.debug(
            "Complexity boost reduced from %d to %d tokens",
            boost,
            from_memories + from_history,
        )
    return split.replace(
        system=split.system + from_memories + from_history,
        history=split.history - from_history,
        memories=split.memories - from_memories,
    )


# ---------------------------------------------------------------------------
# Allocator
# ---------------------------------------------------------------------------

class BudgetAllocator(Protocol):
    def allocate(
        self, analysis: QueryAnalysis, context: ContextAvailability
    ) -> AllocationStrategy: ...

    def optimize_allocation(
        self,
        query: str,
        conversation_length: int = 0,
        available_memories: int = 0,
        available_sources: int = 0,
        has_attachments: bool = False,
    ) -> AllocationStrategy: ...


class DefaultBudgetAllocator:
    """Allocates a token budget from a query analysis and available context."""

    def __init__(
        self,
        config: BudgetConfig | None = None,
        classifier: QueryClassifier | None = None,
        *,
        strict: bool = True,
    ) -> None:
        self._cfg = config or BudgetConfig()
        self._classifier = classifier or KeywordQueryClassifier(
            budget_config=self._cfg
        )
        self._strict = strict

    @property
    def config(self) -> BudgetConfig:
        return self._cfg

    def total_budget(
        self, analysis: QueryAnalysis, context: ContextAvailability
    ) -> int:
        return scale_budget(
            base_budget(analysis.complexity, self._cfg), context, self._cfg
        )

    def allocate(
        self, analysis: QueryAnalysis, context: ContextAvailability
    ) -> AllocationStrategy:
        total = self.total_budget(analysis, context)
        reserve = reserve_for(total, self._cfg)
        usable = total - reserve

        split = initial_split(usable, self._cfg.templates[analysis.reasoning_mode])
        split = reallocate_memories(split, analysis)
        split = reallocate_sources(split, analysis, context)
        split = reallocate_attachments(split, analysis)
        split = apply_complexity_boost(split, analysis, usable, self._cfg)

        strategy = AllocationStrategy.from_split(total, split, reserve)
        valid = strategy.validate()
        logger.debug(
            "Allocation for %s/%s: total=%d, system=%d, history=%d, "
            "memories=%d, sources=%d, attachments=%d, reserve=%d, valid=%s",
            analysis.complexity.value,
            analysis.reasoning_mode.value,
            strategy.total_budget,
            strategy.system_instructions,
            strategy.conversation_history,
            strategy.persona_memories,
            strategy.pdf_sources,
            strategy.attachments,
            strategy.reserve,
            valid,
        )
        if not valid:
            if self._strict:
                strategy.ensure_valid()
            logger.warning("Invalid allocation produced: %s", strategy.as_dict())
        return strategy

    def optimize_allocation(
        self,
        query: str,
        conversation_length: int = 0,
        available_memories: int = 0,
        available_sources: int = 0,
        has_attachments: bool = False,
    ) -> AllocationStrategy:
        context = ContextAvailability.of(
            conversation_length,
            available_memories,
            available_sources,
            has_attachments,
        )
        analysis = self._classifier.analyze(query, context)
        return self.allocate(analysis, context)
