from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Protocol

"""Submission interface for save / upload operations.

Saving is simulated: nothing is persisted. The Submitter protocol keeps the
simulated implementation interchangeable with a real one and lets tests drive
the failure path.

A submit call is all-or-nothing: it either acknowledges every record or
raises SubmissionError and none are considered saved.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "Ack",
    "SimulatedSubmitter",
    "SubmissionError",
    "Submitter",
]


class SubmissionError(Exception):
    """Raised when a batch could not be submitted. Nothing in the batch is saved."""


@dataclass(frozen=True)
class Ack:
    """Acknowledgement of a fully accepted batch."""
    accepted: int
    submitted_at: datetime


class Submitter(Protocol):
    def submit(self, records: Sequence[Mapping[str, Any]]) -> Ack:
        ...


class SimulatedSubmitter:
    """Stand-in for a network call: sleeps, then acknowledges.

    Parameters
    ----------
    delay_seconds: artificial latency per call
    fail_with: optional hook returning an error message for a batch (or None
        to accept it); lets callers and tests simulate network failures
    sleep: injectable sleep function
    """

    def __init__(
        self,
        delay_seconds: float = 1.0,
        fail_with: Callable[[Sequence[Mapping[str, Any]]], str | None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.delay_seconds = delay_seconds
        self.fail_with = fail_with
        self._sleep = sleep
        self.calls = 0

    def submit(self, records: Sequence[Mapping[str, Any]]) -> Ack:
        self.calls += 1
        if self.delay_seconds > 0:
            self._sleep(self.delay_seconds)
        if self.fail_with is not None:
            reason = self.fail_with(records)
            if reason:
                logger.warning(f"simulated submission failed records={len(records)} reason={reason}")
                raise SubmissionError(reason)
        logger.debug(f"simulated submission accepted records={len(records)}")
        return Ack(accepted=len(records), submitted_at=datetime.now(UTC))
