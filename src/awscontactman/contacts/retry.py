"""Retry with exponential backoff for AWS calls.

Classes:
    RetryPolicy: Immutable retry configuration shared by a batch run
    RetryExecutor: Runs a single remote call with bounded exponential backoff
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from .classifier import ErrorClassifier, default_classifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration.

    Attributes:
        max_attempts: Total invocations allowed, including the first one
        base_delay: Delay in seconds before the second attempt
        max_delay: Upper bound in seconds for any single delay
    """

    max_attempts: int = 3
    base_delay: float = 0.1
    max_delay: float = 5.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must not be negative")

    @classmethod
    def from_milliseconds(
        cls, max_attempts: int = 3, base_delay_ms: int = 100, max_delay_ms: int = 5000
    ) -> "RetryPolicy":
        """Build a policy from millisecond delays."""
        return cls(
            max_attempts=max_attempts,
            base_delay=base_delay_ms / 1000.0,
            max_delay=max_delay_ms / 1000.0,
        )

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after failed attempt ``attempt`` (1-indexed)."""
        return min(self.base_delay * (2 ** (attempt - 1)), self.max_delay)


class RetryExecutor:
    """Executes remote calls, retrying throttling and availability errors.

    Non-transient failures (access denied, not found, anything unclassified)
    are re-raised on the first occurrence. Transient failures are retried
    until ``policy.max_attempts`` invocations have been made, after which the
    last exception is re-raised unchanged.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        classifier: Optional[ErrorClassifier] = None,
    ):
        """Initialize the retry executor.

        Args:
            policy: Retry policy (defaults to 3 attempts, 100ms base, 5s cap)
            classifier: Error classifier used to decide on retries
        """
        self.policy = policy or RetryPolicy()
        self.classifier = classifier or default_classifier
        self.last_attempts = 0

    async def execute(self, operation_name: str, operation: Callable[[], T]) -> T:
        """Run ``operation`` with retries.

        Args:
            operation_name: Name used in log messages
            operation: Zero-argument callable performing the remote call

        Returns:
            Result of the first successful invocation

        Raises:
            Exception: The last exception raised by ``operation``
        """
        attempt = 0
        while True:
            attempt += 1
            self.last_attempts = attempt
            try:
                return operation()
            except Exception as e:
                classification = self.classifier.classify(e)
                if not classification.is_transient or attempt >= self.policy.max_attempts:
                    raise

                delay = self.policy.delay_for(attempt)
                logger.warning(
                    f"{classification.kind.value} on {operation_name} "
                    f"(attempt {attempt}/{self.policy.max_attempts}), "
                    f"retrying in {delay * 1000:.0f}ms"
                )
                await asyncio.sleep(delay)
