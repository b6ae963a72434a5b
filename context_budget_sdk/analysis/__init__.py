"""Query analysis: complexity tiers and reasoning modes."""

from context_budget_sdk.analysis.classifier import (
    KeywordQueryClassifier,
    QueryClassifier,
)

__all__ = ["KeywordQueryClassifier", "QueryClassifier"]
