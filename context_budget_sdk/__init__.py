"""Context Budget SDK: query classification and token budget allocation."""

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
)
from context_budget_sdk.config import (
    AllocationTemplate,
    BudgetConfig,
    ClassifierConfig,
    CompressionConfig,
    LimitConfig,
    ObservabilityConfig,
    RuntimeConfig,
)
from context_budget_sdk.core.errors import (
    AllocationInvariantError,
    ConfigurationError,
    ContextBudgetError,
)
from context_budget_sdk.core.types import (
    AllocationSplit,
    AllocationStrategy,
    ContextAvailability,
    ContextCategory,
    ContextLimits,
    ContextPlan,
    QueryAnalysis,
    QueryComplexity,
    ReasoningMode,
)
from context_budget_sdk.guidance import reasoning_framework, should_include_examples
from context_budget_sdk.optimizer import (
    ContextOptimizer,
    DefaultContextOptimizer,
    create_context_optimizer,
)

__all__ = [
    "AllocationInvariantError",
    "AllocationSplit",
    "AllocationStrategy",
    "AllocationTemplate",
    "BudgetAllocator",
    "BudgetConfig",
    "ClassifierConfig",
    "CompressionConfig",
    "ConfigurationError",
    "ContextAvailability",
    "ContextBudgetError",
    "ContextCategory",
    "ContextCompressor",
    "ContextLimits",
    "ContextOptimizer",
    "ContextPlan",
    "DefaultBudgetAllocator",
    "DefaultContextOptimizer",
    "KeywordQueryClassifier",
    "LimitConfig",
    "ObservabilityConfig",
    "QueryAnalysis",
    "QueryClassifier",
    "QueryComplexity",
    "ReasoningMode",
    "RuntimeConfig",
    "calculate_memory_limit",
    "calculate_message_limit",
    "calculate_source_chunk_limit",
    "create_context_optimizer",
    "reasoning_framework",
    "should_include_examples",
]
