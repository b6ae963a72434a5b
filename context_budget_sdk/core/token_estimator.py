"""Token estimation utilities."""

from __future__ import annotations

from typing import Iterable, Protocol


class TokenEstimator(Protocol):
    def estimate_text(self, text: str) -> int: ...

    def estimate_texts(self, texts: Iterable[str]) -> int: ...


class CharRatioEstimator:
    """Fallback estimator: roughly four characters per token."""

    def __init__(self, chars_per_token: int = 4) -> None:
        self._chars_per_token = max(chars_per_token, 1)

    def estimate_text(self, text: str) -> int:
        if not text:
            return 0
        return len(text) // self._chars_per_token

    def estimate_texts(self, texts: Iterable[str]) -> int:
        return sum(self.estimate_text(t) for t in texts)
