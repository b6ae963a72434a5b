"""Core data types for query analysis and token allocation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum

from context_budget_sdk.core.errors import AllocationInvariantError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class QueryComplexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    RESEARCH = "research"


class ReasoningMode(str, Enum):
    ANALYTICAL = "analytical"
    CREATIVE = "creative"
    FACTUAL = "factual"
    EMOTIONAL = "emotional"
    TECHNICAL = "technical"
    CONVERSATIONAL = "conversational"


class ContextCategory(str, Enum):
    SYSTEM = "system"
    HISTORY = "history"
    MEMORIES = "memories"
    SOURCES = "sources"
    ATTACHMENTS = "attachments"


# ---------------------------------------------------------------------------
# Value records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QueryAnalysis:
    complexity: QueryComplexity
    reasoning_mode: ReasoningMode
    requires_memory: bool
    requires_sources: bool
    has_attachments: bool
    is_multi_turn: bool
    estimated_response_tokens: int


@dataclass(frozen=True)
class ContextAvailability:
    """Counts describing the context an external pipeline can supply."""

    conversation_length: int = 0
    available_memories: int = 0
    available_sources: int = 0
    has_attachments: bool = False

    @classmethod
    def of(
        cls,
        conversation_length: int | None = 0,
        available_memories: int | None = 0,
        available_sources: int | None = 0,
        has_attachments: bool | None = False,
    ) -> ContextAvailability:
        # Missing or negative counts mean "nothing available".
        return cls(
            conversation_length=max(conversation_length or 0, 0),
            available_memories=max(available_memories or 0, 0),
            available_sources=max(available_sources or 0, 0),
            has_attachments=bool(has_attachments),
        )

    @property
    def has_memories(self) -> bool:
        return self.available_memories > 0

    @property
    def has_sources(self) -> bool:
        return self.available_sources > 0


@dataclass(frozen=True)
class AllocationSplit:
    """Running five-way split of the usable budget.

    Each allocation step takes a split and returns a new one, so the order
    of steps and the effect of each can be inspected in isolation.
    """

    system: int
    history: int
    memories: int
    sources: int
    attachments: int

    @property
    def total(self) -> int:
        return (
            self.system
            + self.history
            + self.memories
            + self.sources
            + self.attachments
        )

    def replace(self, **changes: int) -> AllocationSplit:
        return replace(self, **changes)


@dataclass(frozen=True)
class AllocationStrategy:
    total_budget: int
    system_instructions: int
    conversation_history: int
    persona_memories: int
    pdf_sources: int
    attachments: int
    reserve: int

    @classmethod
    def from_split(
        cls, total_budget: int, split: AllocationSplit, reserve: int
    ) -> AllocationStrategy:
        return cls(
            total_budget=total_budget,
            system_instructions=split.system,
            conversation_history=split.history,
            persona_memories=split.memories,
            pdf_sources=split.sources,
            attachments=split.attachments,
            reserve=reserve,
        )

    @property
    def allocated(self) -> int:
        return (
            self.system_instructions
            + self.conversation_history
            + self.persona_memories
            + self.pdf_sources
            + self.attachments
            + self.reserve
        )

    def validate(self) -> bool:
        if any(getattr(self, f.name) < 0 for f in fields(self)):
            return False
        return self.allocated <= self.total_budget

    def ensure_valid(self) -> AllocationStrategy:
        if not self.validate():
            raise AllocationInvariantError(
                f"Allocation of {self.allocated} tokens is invalid for a "
                f"budget of {self.total_budget}: {self.as_dict()}"
            )
        return self

    def category_value(self, category: ContextCategory) -> int:
        return getattr(self, _CATEGORY_FIELDS[category])

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


_CATEGORY_FIELDS: dict[ContextCategory, str] = {
    ContextCategory.SYSTEM: "system_instructions",
    ContextCategory.HISTORY: "conversation_history",
    ContextCategory.MEMORIES: "persona_memories",
    ContextCategory.SOURCES: "pdf_sources",
    ContextCategory.ATTACHMENTS: "attachments",
}


@dataclass(frozen=True)
class ContextLimits:
    """Item-count caps the prompt assembler uses when selecting content."""

    memory_items: int
    source_chunks: int
    messages: int
    retrieval_chunks: int


@dataclass(frozen=True)
class ContextPlan:
    analysis: QueryAnalysis
    strategy: AllocationStrategy
    limits: ContextLimits
    include_examples: bool = False
