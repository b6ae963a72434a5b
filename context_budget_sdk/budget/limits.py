"""Convert token allocations into item-count caps for the prompt assembler."""

from __future__ import annotations

from context_budget_sdk.config import LimitConfig
from context_budget_sdk.core.errors import ConfigurationError
from context_budget_sdk.core.types import (
    AllocationStrategy,
    ContextLimits,
    QueryComplexity,
)


def _items_for(token_budget: int, avg_item_tokens: int, cap: int) -> int:
    if avg_item_tokens <= 0:
        raise ConfigurationError(
            f"Average item size must be positive, got {avg_item_tokens}"
        )
    return min(max(token_budget, 0) // avg_item_tokens, cap)


def calculate_memory_limit(
    token_budget: int, avg_memory_tokens: int = 100, cap: int = 100
) -> int:
    return _items_for(token_budget, avg_memory_tokens, cap)


def calculate_source_chunk_limit(
    token_budget: int, avg_chunk_tokens: int = 500, cap: int = 30
) -> int:
    return _items_for(token_budget, avg_chunk_tokens, cap)


def calculate_message_limit(
    token_budget: int, avg_message_tokens: int = 100, cap: int = 200
) -> int:
    return _items_for(token_budget, avg_message_tokens, cap)


def retrieval_chunk_limit(
    complexity: QueryComplexity, config: LimitConfig | None = None
) -> int:
    """How many document chunks to fetch before the allocation is known."""
    cfg = config or LimitConfig()
    return cfg.retrieval_chunk_limits[complexity]


def derive_limits(
    strategy: AllocationStrategy,
    complexity: QueryComplexity,
    config: LimitConfig | None = None,
) -> ContextLimits:
    cfg = config or LimitConfig()
    return ContextLimits(
        memory_items=calculate_memory_limit(
            strategy.persona_memories, cfg.avg_memory_tokens, cfg.memory_cap
        ),
        source_chunks=calculate_source_chunk_limit(
            strategy.pdf_sources, cfg.avg_chunk_tokens, cfg.chunk_cap
        ),
        messages=calculate_message_limit(
            strategy.conversation_history, cfg.avg_message_tokens, cfg.message_cap
        ),
        retrieval_chunks=retrieval_chunk_limit(complexity, cfg),
    )
