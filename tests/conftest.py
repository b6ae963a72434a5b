"""Shared test fixtures."""

from __future__ import annotations

import pytest

from context_budget_sdk.analysis.classifier import KeywordQueryClassifier
from context_budget_sdk.budget.allocator import DefaultBudgetAllocator
from context_budget_sdk.budget.compression import ContextCompressor
from context_budget_sdk.core.types import (
    AllocationStrategy,
    QueryAnalysis,
    QueryComplexity,
    ReasoningMode,
)
from context_budget_sdk.observability.event_bus import InMemoryEventBus
from context_budget_sdk.optimizer import create_context_optimizer


@pytest.fixture
def classifier():
    return KeywordQueryClassifier()


@pytest.fixture
def allocator():
    return DefaultBudgetAllocator()


@pytest.fixture
def compressor():
    return ContextCompressor()


@pytest.fixture
def event_bus():
    return InMemoryEventBus()


@pytest.fixture
def optimizer(event_bus):
    return create_context_optimizer(event_bus=event_bus)


@pytest.fixture
def make_analysis():
    """Factory for QueryAnalysis records with neutral defaults."""

    def _make(**overrides) -> QueryAnalysis:
        fields = dict(
            complexity=QueryComplexity.MODERATE,
            reasoning_mode=ReasoningMode.CONVERSATIONAL,
            requires_memory=False,
            requires_sources=False,
            has_attachments=False,
            is_multi_turn=False,
            estimated_response_tokens=500,
        )
        fields.update(overrides)
        return QueryAnalysis(**fields)

    return _make


@pytest.fixture
def sample_strategy():
    return AllocationStrategy(
        total_budget=100_000,
        system_instructions=10_000,
        conversation_history=40_000,
        persona_memories=20_000,
        pdf_sources=10_000,
        attachments=8_000,
        reserve=10_000,
    )
