"""Reasoning-framework guidance keyed on the detected reasoning mode."""

from __future__ import annotations

from context_budget_sdk.core.types import QueryComplexity, ReasoningMode

_FRAMEWORKS: dict[ReasoningMode, str] = {
    ReasoningMode.ANALYTICAL: (
        "**Analytical Reasoning Framework:**\n"
        "1. Identify the core question or problem\n"
        "2. Break down into component parts\n"
        "3. Analyze each part systematically\n"
        "4. Synthesize findings into coherent answer\n"
        "5. Consider implications and edge cases"
    ),
    ReasoningMode.CREATIVE: (
        "**Creative Thinking Framework:**\n"
        "1. Explore multiple perspectives and approaches\n"
        "2. Challenge conventional assumptions\n"
        "3. Generate diverse alternatives\n"
        "4. Combine ideas in novel ways\n"
        "5. Balance creativity with practical constraints"
    ),
    ReasoningMode.FACTUAL: (
        "**Factual Response Framework:**\n"
        "1. Identify factual claims being made\n"
        "2. Ground claims in memories or sources when available\n"
        "3. Clearly distinguish facts from inferences\n"
        "4. Cite specific sources or memories\n"
        "5. Acknowledge limitations in available information"
    ),
    ReasoningMode.EMOTIONAL: (
        "**Empathetic Response Framework:**\n"
        "1. Acknowledge the emotional context\n"
        "2. Validate feelings without judgment\n"
        "3. Provide supportive and constructive guidance\n"
        "4. Balance empathy with helpful advice\n"
        "5. Maintain appropriate boundaries"
    ),
    ReasoningMode.TECHNICAL: (
        "**Technical Problem-Solving Framework:**\n"
        "- Lead with the solution rather than announcing it\n"
        "- Present code directly when that is clearest\n"
        "- Explain inline with comments or briefly afterwards\n"
        "- Be precise but conversational\n"
        "- Show the working for math without a textbook tone"
    ),
    ReasoningMode.CONVERSATIONAL: (
        "**Conversational Response Framework:**\n"
        "1. Respond naturally and contextually\n"
        "2. Build on previous exchanges\n"
        "3. Maintain conversational flow\n"
        "4. Balance brevity with completeness\n"
        "5. Adapt tone to match the conversation"
    ),
}

_CHAIN_OF_THOUGHT = (
    "**Chain-of-Thought Mode Enabled:**\n"
    "When facing complex queries, show your reasoning process step-by-step.\n"
    "Think through the problem systematically before providing your final answer.\n"
    "You can use internal reasoning, but keep your final response concise and clear."
)

_EXAMPLE_COMPLEXITIES = frozenset(
    {QueryComplexity.MODERATE, QueryComplexity.COMPLEX, QueryComplexity.RESEARCH}
)


def reasoning_framework(mode: ReasoningMode, enable_thinking: bool = False) -> str:
    sections = ["# Reasoning Approach", _FRAMEWORKS[mode]]
    if enable_thinking:
        sections.append(_CHAIN_OF_THOUGHT)
    return "\n\n".join(sections)


def should_include_examples(complexity: QueryComplexity) -> bool:
    return complexity in _EXAMPLE_COMPLEXITIES
