"""Runtime configuration models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from context_budget_sdk.core.errors import ConfigurationError
from context_budget_sdk.core.types import (
    ContextCategory,
    QueryComplexity,
    ReasoningMode,
)


@dataclass(frozen=True)
class AllocationTemplate:
    """Share of the usable budget each category starts with."""

    system: float
    history: float
    memories: float
    sources: float
    attachments: float

    def __post_init__(self) -> None:
        ratios = (
            self.system,
            self.history,
            self.memories,
            self.sources,
            self.attachments,
        )
        if any(r < 0 for r in ratios):
            raise ConfigurationError(f"Negative ratio in template {self}")
        if not math.isclose(sum(ratios), 1.0, abs_tol=1e-9):
            raise ConfigurationError(
                f"Template ratios must sum to 1.0, got {sum(ratios):.4f}"
            )


DEFAULT_TEMPLATES: dict[ReasoningMode, AllocationTemplate] = {
    ReasoningMode.ANALYTICAL: AllocationTemplate(
        system=0.15, history=0.35, memories=0.25, sources=0.20, attachments=0.05
    ),
    ReasoningMode.CREATIVE: AllocationTemplate(
        system=0.20, history=0.40, memories=0.20, sources=0.10, attachments=0.10
    ),
    ReasoningMode.FACTUAL: AllocationTemplate(
        system=0.10, history=0.20, memories=0.30, sources=0.35, attachments=0.05
    ),
    ReasoningMode.EMOTIONAL: AllocationTemplate(
        system=0.15, history=0.45, memories=0.30, sources=0.05, attachments=0.05
    ),
    ReasoningMode.TECHNICAL: AllocationTemplate(
        system=0.15, history=0.35, memories=0.15, sources=0.25, attachments=0.10
    ),
    ReasoningMode.CONVERSATIONAL: AllocationTemplate(
        system=0.15, history=0.50, memories=0.20, sources=0.10, attachments=0.05
    ),
}


@dataclass
class BudgetConfig:
    context_window: int = 1_048_576
    max_safe_input_tokens: int = 800_000
    reserve_ratio: float = 0.10
    complexity_baselines: dict[QueryComplexity, int] = field(
        default_factory=lambda: {
            QueryComplexity.SIMPLE: 20_000,
            QueryComplexity.MODERATE: 50_000,
            QueryComplexity.COMPLEX: 100_000,
            QueryComplexity.RESEARCH: 200_000,
        }
    )
    memory_multiplier: float = 1.3
    source_multiplier: float = 1.4
    attachment_multiplier: float = 1.2
    long_conversation_multiplier: float = 1.2
    long_conversation_threshold: int = 50
    complexity_boost_ratio: float = 0.05
    boosted_complexities: frozenset[QueryComplexity] = frozenset(
        {QueryComplexity.COMPLEX, QueryComplexity.RESEARCH}
    )
    templates: dict[ReasoningMode, AllocationTemplate] = field(
        default_factory=lambda: dict(DEFAULT_TEMPLATES)
    )
    estimated_response_tokens: dict[QueryComplexity, int] = field(
        default_factory=lambda: {
            QueryComplexity.SIMPLE: 100,
            QueryComplexity.MODERATE: 500,
            QueryComplexity.COMPLEX: 2000,
            QueryComplexity.RESEARCH: 4000,
        }
    )
    multi_turn_threshold: int = 1

    def __post_init__(self) -> None:
        if self.max_safe_input_tokens > self.context_window:
            raise ConfigurationError(
                "max_safe_input_tokens cannot exceed the context window"
            )
        if not 0 <= self.reserve_ratio < 1:
            raise ConfigurationError("reserve_ratio must be in [0, 1)")
        missing = set(ReasoningMode) - set(self.templates)
        if missing:
            raise ConfigurationError(
                f"No allocation template for modes: {sorted(m.value for m in missing)}"
            )
        missing = set(QueryComplexity) - set(self.complexity_baselines)
        if missing:
            raise ConfigurationError(
                f"No baseline for complexities: {sorted(c.value for c in missing)}"
            )


@dataclass
class ClassifierConfig:
    greetings: frozenset[str] = frozenset(
        {"hi", "hello", "hey", "thanks", "ok", "yes", "no"}
    )
    simple_question_pattern: str = r"(what|who|when|where|why|how) (is|are|was|were) \w+"
    simple_max_words: int = 5
    research_min_words: int = 50
    complex_min_words: int = 20
    research_keywords: tuple[str, ...] = (
        "analyze",
        "compare",
        "research",
        "comprehensive",
        "detailed explanation",
    )
    complex_keywords: tuple[str, ...] = (
        "step by step",
        "how do i",
        "explain",
        "why does",
        "what's the difference",
    )
    # Priority order: the first group with a matching keyword wins.
    mode_keywords: tuple[tuple[ReasoningMode, tuple[str, ...]], ...] = (
        (ReasoningMode.TECHNICAL, ("code", "implement", "algorithm", "debug", "error")),
        (ReasoningMode.CREATIVE, ("brainstorm", "ideas for", "creative", "design", "imagine")),
        (ReasoningMode.FACTUAL, ("what is", "who is", "when did", "tell me about", "define")),
        (ReasoningMode.EMOTIONAL, ("feel", "worried", "anxious", "upset", "struggling")),
        (ReasoningMode.ANALYTICAL, ("analyze", "compare", "evaluate", "why", "how does")),
    )
    default_mode: ReasoningMode = ReasoningMode.CONVERSATIONAL
    memory_cues: tuple[str, ...] = (
        "remember",
        "you know",
        "we discussed",
        "last time",
        "before",
        "what do you know about me",
    )
    source_cues: tuple[str, ...] = (
        "according to",
        "based on",
        "in the document",
        "the file",
        "pdf",
        "source",
    )


@dataclass
class LimitConfig:
    avg_memory_tokens: int = 100
    memory_cap: int = 100
    avg_chunk_tokens: int = 500
    chunk_cap: int = 30
    avg_message_tokens: int = 100
    message_cap: int = 200
    retrieval_chunk_limits: dict[QueryComplexity, int] = field(
        default_factory=lambda: {
            QueryComplexity.SIMPLE: 3,
            QueryComplexity.MODERATE: 10,
            QueryComplexity.COMPLEX: 15,
            QueryComplexity.RESEARCH: 20,
        }
    )


@dataclass
class CompressionConfig:
    threshold_ratio: float = 0.8
    # Least critical context is compressed first.
    steps: tuple[tuple[ContextCategory, float], ...] = (
        (ContextCategory.ATTACHMENTS, 0.5),
        (ContextCategory.SOURCES, 0.3),
        (ContextCategory.MEMORIES, 0.3),
        (ContextCategory.HISTORY, 0.3),
        (ContextCategory.SYSTEM, 0.2),
    )


@dataclass
class ObservabilityConfig:
    emit_events: bool = True


@dataclass
class RuntimeConfig:
    budget: BudgetConfig = field(default_factory=BudgetConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    limits: LimitConfig = field(default_factory=LimitConfig)
    compression: CompressionConfig = field(default_factory=CompressionConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)
    strict_validation: bool = True
