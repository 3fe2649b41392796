"""Retries with jittered exponential backoff.

The work function reports terminal outcomes through a ``RetryContext``:
``done()`` on success, ``abort()`` on a non-retryable failure.  Returning
without calling either counts as a retryable failure.

Classes
-------
- Backoff             — immutable jittered exponential backoff policy
- RetryContext        — outcome handle passed to the work function
- RetryError          — base class for policy failures
- RetryAbortedError   — the work function called ``abort()``
- RetryExhaustedError — the attempt budget ran out
- InvalidPolicyError  — policy parameters are out of range
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable


class RetryError(Exception):
    """Base class for retry policy failures."""


class RetryAbortedError(RetryError):
    """Raised when the work function signals a non-retryable failure."""

    def __init__(self, attempt: int) -> None:
        self.attempt = attempt
        super().__init__(f"Aborted on attempt {attempt}.")


class RetryExhaustedError(RetryError):
    """Raised when the work function never succeeded within the budget."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Too many attempts ({attempts}).")


class InvalidPolicyError(ValueError):
    """Raised when a policy parameter falls outside its accepted interval."""


class RetryContext:
    """Outcome handle for a single ``Backoff.run`` call."""

    def __init__(self) -> None:
        self.is_done = False
        self.is_aborted = False

    def done(self) -> None:
        """Mark the work as complete; no further attempts are made."""
        self.is_done = True

    def abort(self) -> None:
        """Mark the work as failed with a non-retryable error."""
        self.is_aborted = True


WorkFn = Callable[[RetryContext], None]


@dataclass(frozen=True)
class Backoff:
    """Jittered exponential backoff policy.

    The parameters are immutable.  ``rng`` is the only mutable member and
    ``random.Random`` is safe to share between threads; pass a separate
    ``rng`` where reproducible jitter per instance matters.

    Parameters
    ----------
    base:
        Delay in seconds before the second attempt.
    growth:
        Multiplicative growth of the delay between successive attempts.
        Must be >= 1.
    jitter:
        Fractional amplitude of the uniform jitter applied to each sleep.
        Must be in [0, 1].
    sleep:
        Sleep function; overridden in tests.
    rng:
        Random source for jitter; overridden in tests.
    """

    base: float = 0.1
    growth: float = 2.0
    jitter: float = 0.2
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False, compare=False)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def validate(self) -> None:
        """Raise ``InvalidPolicyError`` if any parameter is out of range."""
        if self.base < 0:
            raise InvalidPolicyError(f"Base delay is negative: {self.base!r}")
        if self.growth < 1.0:
            raise InvalidPolicyError(f"Delay growth factor is less than 1: {self.growth!r}")
        if self.jitter < 0.0:
            raise InvalidPolicyError(f"Delay jitter amplitude is negative: {self.jitter!r}")
        if self.jitter > 1.0:
            raise InvalidPolicyError(
                f"Delay jitter amplitude is greater than 1: {self.jitter!r}"
            )

    def delay(self, attempt: int) -> float:
        """Return the unjittered delay in seconds after ``attempt`` (1-based)."""
        return self.base * self.growth ** (attempt - 1)

    def run(self, work: WorkFn, attempts: int) -> None:
        """Invoke ``work`` up to ``attempts`` times.

        Parameters
        ----------
        work:
            Callable receiving a ``RetryContext``.  Exceptions it raises
            propagate unchanged.
        attempts:
            Attempt budget; must be at least 1.

        Raises
        ------
        InvalidPolicyError
            If the policy or ``attempts`` is invalid.  ``work`` is not called.
        RetryAbortedError
            If ``work`` called ``abort()``.
        RetryExhaustedError
            If no attempt called ``done()``.
        """
        self.validate()
        if attempts < 1:
            raise InvalidPolicyError(f"Attempt budget must be at least 1: {attempts!r}")

        ctx = RetryContext()
        for attempt in range(1, attempts + 1):
            work(ctx)
            if ctx.is_done:
                return
            if ctx.is_aborted:
                raise RetryAbortedError(attempt)
            if attempt < attempts:
                factor = self.rng.uniform(1.0 - self.jitter, 1.0 + self.jitter)
                self.sleep(self.delay(attempt) * factor)
        raise RetryExhaustedError(attempts)
