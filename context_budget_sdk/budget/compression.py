"""Compression checks and recommendations for oversized context."""

from __future__ import annotations

from context_budget_sdk.config import BudgetConfig, CompressionConfig
from context_budget_sdk.core.types import AllocationStrategy, ContextCategory


class ContextCompressor:
    """Decides when assembled context is too large and what to shrink."""

    def __init__(
        self,
        config: CompressionConfig | None = None,
        budget_config: BudgetConfig | None = None,
    ) -> None:
        self._cfg = config or CompressionConfig()
        self._budget = budget_config or BudgetConfig()

    @property
    def threshold(self) -> float:
        return self._budget.max_safe_input_tokens * self._cfg.threshold_ratio

    def should_compress_context(self, current_tokens: int) -> bool:
        return current_tokens > self.threshold

    def reduction_needed(self, current_tokens: int) -> int:
        """Tokens above the compression threshold, or 0 when below it."""
        return max(int(current_tokens - self.threshold), 0)

    def get_compression_recommendations(
        self,
        current_allocation: AllocationStrategy,
        target_reduction: int,
    ) -> dict[ContextCategory, int]:
        """Greedy per-category cuts, least critical context first.

        Only categories that are non-empty and visited while reduction is
        still owed appear in the result; values are the new allocations.
        """
        recommendations: dict[ContextCategory, int] = {}
        remaining = target_reduction

        for category, max_ratio in self._cfg.steps:
            if remaining <= 0:
                break
            value = current_allocation.category_value(category)
            if value <= 0:
                continue
            reduction = min(remaining, int(value * max_ratio))
            recommendations[category] = value - reduction
            remaining -= reduction

        return recommendations
