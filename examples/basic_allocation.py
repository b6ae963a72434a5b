"""
Basic token-budget allocation example
=====================================

Shows how a chat pipeline uses the Context Budget SDK before each model call:
- classify the user query (complexity tier + reasoning mode)
- compute the per-category token allocation
- turn the allocation into item limits for memory/source/history selection
- ask for compression recommendations when the assembled context is too big

Run:
    python examples/basic_allocation.py
"""

import logging

from context_budget_sdk import (
    ContextCategory,
    RuntimeConfig,
    create_context_optimizer,
    reasoning_framework,
)
from context_budget_sdk.observability.event_bus import InMemoryEventBus


# ---------------------------------------------------------------------------
# 1. Sample turns (counts would come from the memory and retrieval services)
# ---------------------------------------------------------------------------

TURNS = [
    dict(query="hi", conversation_length=1),
    dict(
        query="What do you know about me? Remember my travel plans?",
        conversation_length=8,
        available_memories=42,
    ),
    dict(
        query="According to the pdf, explain the rollout step by step",
        conversation_length=20,
        available_sources=6_000,
    ),
    dict(
        query="Compare these two designs and help me debug the error in the code",
        conversation_length=75,
        available_memories=10,
        available_sources=3_000,
        has_attachments=True,
    ),
]


# ---------------------------------------------------------------------------
# 2. Main flow
# ---------------------------------------------------------------------------

def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    event_bus = InMemoryEventBus()
    event_bus.on(
        "AllocationComputed",
        lambda e: print(f"  [event] total={e.payload['total_budget']} valid={e.payload['valid']}"),
    )
    optimizer = create_context_optimizer(config=RuntimeConfig(), event_bus=event_bus)

    for turn in TURNS:
        print(f"\n>>> {turn['query']}")
        plan = optimizer.plan(**turn)
        analysis, strategy, limits = plan.analysis, plan.strategy, plan.limits

        print(f"  complexity={analysis.complexity.value} mode={analysis.reasoning_mode.value}")
        print(
            f"  system={strategy.system_instructions} history={strategy.conversation_history} "
            f"memories={strategy.persona_memories} sources={strategy.pdf_sources} "
            f"attachments={strategy.attachments} reserve={strategy.reserve}"
        )
        print(
            f"  limits: {limits.memory_items} memories, {limits.source_chunks} chunks, "
            f"{limits.messages} messages (fetch {limits.retrieval_chunks} chunks)"
        )
        print(reasoning_framework(analysis.reasoning_mode).splitlines()[2])

    # -----------------------------------------------------------------------
    # 3. Oversized context: ask what to shrink
    # -----------------------------------------------------------------------
    plan = optimizer.plan(**TURNS[-1])
    sections = {
        ContextCategory.HISTORY: "x" * 2_000_000,
        ContextCategory.SOURCES: "y" * 800_000,
    }
    recommendations = optimizer.recommend_compression(plan.strategy, sections)
    print("\nCompression recommendations:")
    for category, value in recommendations.items():
        print(f"  {category.value}: {value}")


if __name__ == "__main__":
    main()
