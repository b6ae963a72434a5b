"""Exception hierarchy for the Context Budget SDK."""


class ContextBudgetError(Exception):
    """SDK base exception."""


class ConfigurationError(ContextBudgetError):
    """Budget, template or limit configuration is inconsistent."""


class AllocationInvariantError(ContextBudgetError):
    """An allocation has a negative category or exceeds its total budget."""
