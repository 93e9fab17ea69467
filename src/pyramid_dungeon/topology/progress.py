from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class GenerationProgress:
    """Pollable progress of one generation run.

    Only the generating thread writes to it; a loading screen may read
    ``message``, ``value`` and ``total`` at any time. Each pass contributes an
    equal share of ``total``.
    """

    def __init__(self, pass_count: int = 1) -> None:
        if pass_count < 1:
            raise ValueError("pass_count must be >= 1")
        self.pass_count = pass_count
        self.passes_completed = 0
        self.message = ""
        self.value = 0.0

    @property
    def total(self) -> float:
        share = (self.passes_completed + self.value) / self.pass_count
        return max(0.0, min(1.0, share))

    @property
    def done(self) -> bool:
        return self.passes_completed >= self.pass_count

    def begin_pass(self, message: str) -> None:
        self.message = message
        self.value = 0.0
        logger.debug("Generation pass started: %s", message)

    def set(self, value: float) -> None:
        self.value = max(0.0, min(1.0, float(value)))

    def end_pass(self) -> None:
        self.value = 0.0
        self.passes_completed = min(self.pass_count, self.passes_completed + 1)
