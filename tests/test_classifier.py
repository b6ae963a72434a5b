"""Tests for KeywordQueryClassifier."""

from __future__ import annotations

import pytest

from context_budget_sdk.analysis.classifier import KeywordQueryClassifier
from context_budget_sdk.config import ClassifierConfig
from context_budget_sdk.core.types import (
    ContextAvailability,
    QueryComplexity,
    ReasoningMode,
)


# ---- Complexity ----

@pytest.mark.parametrize("query", ["hi", "Hello", "thanks", "ok", "no"])
def test_greetings_are_simple(classifier, query):
    assert classifier.classify_complexity(query) == QueryComplexity.SIMPLE


def test_short_definitional_question_is_simple(classifier):
    assert classifier.classify_complexity("what is python") == QueryComplexity.SIMPLE
    assert classifier.classify_complexity("Who were they") == QueryComplexity.SIMPLE


def test_short_question_must_match_whole_pattern(classifier):
    # Four words, but the pattern only allows one trailing word.
    assert classifier.classify_complexity("what is python used") == QueryComplexity.MODERATE


def test_long_text_without_keywords_is_research(classifier):
    query = " ".join(["lorem"] * 51)
    assert classifier.classify_complexity(query) == QueryComplexity.RESEARCH


def test_fifty_words_is_not_research(classifier):
    query = " ".join(["lorem"] * 50)
    assert classifier.classify_complexity(query) == QueryComplexity.COMPLEX


def test_research_keyword_is_research(classifier):
    assert classifier.classify_complexity("compare cats and dogs") == QueryComplexity.RESEARCH
    assert classifier.classify_complexity("Analyze this") == QueryComplexity.RESEARCH


def test_research_wins_over_complex_keyword(classifier):
    query = "explain and compare these two approaches"
    assert classifier.classify_complexity(query) == QueryComplexity.RESEARCH


def test_explain_is_complex(classifier):
    assert classifier.classify_complexity("explain how TCP works") == QueryComplexity.COMPLEX


def test_more_than_twenty_words_is_complex(classifier):
    query = " ".join(["lorem"] * 21)
    assert classifier.classify_complexity(query) == QueryComplexity.COMPLEX


def test_default_is_moderate(classifier):
    query = "the quick brown fox jumps over the lazy dog today"
    assert len(query.split()) == 10
    assert classifier.classify_complexity(query) == QueryComplexity.MODERATE


def test_empty_query_is_moderate(classifier):
    assert classifier.classify_complexity("") == QueryComplexity.MODERATE
    assert classifier.classify_complexity(None) == QueryComplexity.MODERATE


# ---- Reasoning mode ----

@pytest.mark.parametrize(
    "query,mode",
    [
        ("help me debug this code", ReasoningMode.TECHNICAL),
        ("brainstorm names for my cafe", ReasoningMode.CREATIVE),
        ("tell me about Rome", ReasoningMode.FACTUAL),
        ("I feel worried about exams", ReasoningMode.EMOTIONAL),
        ("why is the sky blue", ReasoningMode.ANALYTICAL),
        ("good morning friend", ReasoningMode.CONVERSATIONAL),
    ],
)
def test_reasoning_mode_detection(classifier, query, mode):
    assert classifier.detect_reasoning_mode(query) == mode


def test_reasoning_mode_priority_order(classifier):
    # "algorithm" (technical) outranks "design" (creative).
    assert classifier.detect_reasoning_mode("design an algorithm") == ReasoningMode.TECHNICAL


def test_empty_query_is_conversational(classifier):
    assert classifier.detect_reasoning_mode("") == ReasoningMode.CONVERSATIONAL


def test_keywords_are_injectable():
    cfg = ClassifierConfig(
        mode_keywords=((ReasoningMode.CREATIVE, ("poème",)),),
        research_keywords=("recherche",),
    )
    clf = KeywordQueryClassifier(config=cfg)
    assert clf.detect_reasoning_mode("écris un poème") == ReasoningMode.CREATIVE
    assert clf.detect_reasoning_mode("help me debug this code") == ReasoningMode.CONVERSATIONAL
    assert clf.classify_complexity("une recherche complète") == QueryComplexity.RESEARCH


# ---- Relevance cues ----

def test_requires_memory_needs_available_memories(classifier):
    query = "do you remember my dog?"
    assert classifier.requires_memory(query, ContextAvailability.of(available_memories=3))
    assert not classifier.requires_memory(query, ContextAvailability.of(available_memories=0))


def test_requires_memory_needs_cue(classifier):
    ctx = ContextAvailability.of(available_memories=3)
    assert not classifier.requires_memory("recommend a movie", ctx)


def test_requires_sources(classifier):
    ctx = ContextAvailability.of(available_sources=1200)
    assert classifier.requires_sources("according to the PDF, what changed?", ctx)
    assert not classifier.requires_sources("what changed?", ctx)
    assert not classifier.requires_sources(
        "according to the PDF", ContextAvailability.of(available_sources=0)
    )


# ---- analyze ----

def test_analyze_simple_greeting(classifier):
    analysis = classifier.analyze("hi", ContextAvailability.of(conversation_length=1))
    assert analysis.complexity == QueryComplexity.SIMPLE
    assert analysis.reasoning_mode == ReasoningMode.CONVERSATIONAL
    assert not analysis.requires_memory
    assert not analysis.requires_sources
    assert not analysis.has_attachments
    assert not analysis.is_multi_turn
    assert analysis.estimated_response_tokens == 100


def test_analyze_multi_turn_and_attachments(classifier):
    ctx = ContextAvailability.of(
        conversation_length=2, available_memories=4, has_attachments=True
    )
    analysis = classifier.analyze("what did we discussed last time about the code", ctx)
    assert analysis.is_multi_turn
    assert analysis.has_attachments
    assert analysis.requires_memory
    assert analysis.reasoning_mode == ReasoningMode.TECHNICAL


@pytest.mark.parametrize(
    "query,tokens",
    [
        ("hi", 100),
        ("the quick brown fox jumps", 500),
        ("explain how TCP works", 2000),
        ("compare cats and dogs", 4000),
    ],
)
def test_estimated_response_tokens(classifier, query, tokens):
    analysis = classifier.analyze(query, ContextAvailability())
    assert analysis.estimated_response_tokens == tokens
