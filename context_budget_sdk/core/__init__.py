"""Core types, errors and estimators."""
