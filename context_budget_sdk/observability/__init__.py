"""Observability module: events emitted while budgeting."""

from context_budget_sdk.observability.event_bus import Event, EventBus, InMemoryEventBus

__all__ = ["Event", "EventBus", "InMemoryEventBus"]
