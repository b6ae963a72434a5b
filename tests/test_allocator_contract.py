"""Contract tests: allocation invariants across the whole input space."""

from __future__ import annotations

import itertools

import pytest

from context_budget_sdk.budget.allocator import DefaultBudgetAllocator
from context_budget_sdk.config import BudgetConfig
from context_budget_sdk.core.types import (
    ContextAvailability,
    QueryComplexity,
    ReasoningMode,
)

_CONTEXTS = [
    ContextAvailability.of(
        conversation_length=length,
        available_memories=memories,
        available_sources=sources,
        has_attachments=attachments,
    )
    for length, memories, sources, attachments in itertools.product(
        (0, 1, 60), (0, 8), (0, 2_500), (False, True)
    )
]


def _analyses(make_analysis, complexity, mode, context):
    for requires_memory, requires_sources in itertools.product((False, True), repeat=2):
        yield make_analysis(
            complexity=complexity,
            reasoning_mode=mode,
            requires_memory=requires_memory and context.has_memories,
            requires_sources=requires_sources and context.has_sources,
            has_attachments=context.has_attachments,
            is_multi_turn=context.conversation_length > 1,
        )


@pytest.mark.parametrize("complexity", list(QueryComplexity))
@pytest.mark.parametrize("mode", list(ReasoningMode))
def test_allocation_never_exceeds_budget(allocator, make_analysis, complexity, mode):
    for context in _CONTEXTS:
        for analysis in _analyses(make_analysis, complexity, mode, context):
            strategy = allocator.allocate(analysis, context)
            assert strategy.allocated <= strategy.total_budget
            assert strategy.total_budget <= allocator.config.max_safe_input_tokens
            assert strategy.validate()


@pytest.mark.parametrize("complexity", list(QueryComplexity))
@pytest.mark.parametrize("mode", list(ReasoningMode))
def test_allocation_never_negative(allocator, make_analysis, complexity, mode):
    for context in _CONTEXTS:
        for analysis in _analyses(make_analysis, complexity, mode, context):
            strategy = allocator.allocate(analysis, context)
            assert all(value >= 0 for value in strategy.as_dict().values())


@pytest.mark.parametrize("baseline", [1, 3, 7, 19, 40, 101])
@pytest.mark.parametrize("mode", list(ReasoningMode))
def test_tiny_budgets_stay_valid(make_analysis, baseline, mode):
    cfg = BudgetConfig(
        complexity_baselines={c: baseline for c in QueryComplexity},
    )
    allocator = DefaultBudgetAllocator(config=cfg)
    for complexity in (QueryComplexity.COMPLEX, QueryComplexity.RESEARCH):
        for context in _CONTEXTS:
            for analysis in _analyses(make_analysis, complexity, mode, context):
                strategy = allocator.allocate(analysis, context)
                assert strategy.validate(), strategy


def test_unused_categories_stay_empty(allocator, make_analysis):
    for complexity, mode in itertools.product(QueryComplexity, ReasoningMode):
        for context in _CONTEXTS:
            if context.has_memories:
                continue
            analysis = make_analysis(
                complexity=complexity,
                reasoning_mode=mode,
                has_attachments=context.has_attachments,
            )
            strategy = allocator.allocate(analysis, context)
            assert strategy.persona_memories == 0
            assert strategy.pdf_sources == 0
            if not context.has_attachments:
                assert strategy.attachments == 0


@pytest.mark.parametrize("mode", list(ReasoningMode))
def test_available_memories_share_unused_sources(allocator, make_analysis, mode):
    for context in _CONTEXTS:
        if not context.has_memories:
            continue
        analysis = make_analysis(reasoning_mode=mode)
        strategy = allocator.allocate(analysis, context)
        assert strategy.persona_memories > 0
        assert strategy.pdf_sources == 0
        assert strategy.validate()


@pytest.mark.parametrize(
    "query",
    [
        "hi",
        "remember what we discussed before?",
        "according to the source, explain the algorithm step by step",
        "I feel anxious about my comprehensive research report",
        " ".join(["lorem"] * 60),
    ],
)
def test_no_memories_means_no_memory_allocation(allocator, query):
    for length, sources, attachments in itertools.product((1, 80), (0, 900), (False, True)):
        strategy = allocator.optimize_allocation(
            query,
            conversation_length=length,
            available_memories=0,
            available_sources=sources,
            has_attachments=attachments,
        )
        assert strategy.persona_memories == 0
        assert strategy.validate()


def test_allocation_is_deterministic(allocator):
    args = ("compare these designs based on the pdf", 12, 3, 400, True)
    assert allocator.optimize_allocation(*args) == allocator.optimize_allocation(*args)
