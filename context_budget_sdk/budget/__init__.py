"""Budget allocation, item limits and compression."""

from context_budget_sdk.budget.allocator import BudgetAllocator, DefaultBudgetAllocator
from context_budget_sdk.budget.compression import ContextCompressor
from context_budget_sdk.budget.limits import (
    calculate_memory_limit,
    calculate_message_limit,
    calculate_source_chunk_limit,
    derive_limits,
    retrieval_chunk_limit,
)

__all__ = [
    "BudgetAllocator",
    "DefaultBudgetAllocator",
    "ContextCompressor",
    "calculate_memory_limit",
    "calculate_message_limit",
    "calculate_source_chunk_limit",
    "derive_limits",
    "retrieval_chunk_limit",
]
