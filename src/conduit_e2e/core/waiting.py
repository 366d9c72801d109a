"""
Wait Helpers

Poll-until-condition utilities used by every assertion and network wait.
Inspired by the Cypress retry-ability model, but explicit: callers pass the
timeout and interval instead of relying on hidden per-command retries.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from conduit_e2e.core.exceptions import ConditionTimeoutError

T = TypeVar("T")


def await_condition(
    predicate: Callable[[], T],
    timeout: float,
    interval: float,
    *,
    description: str = "condition",
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    ignore: tuple[type[BaseException], ...] = (),
) -> T:
    """
    Re-evaluate a predicate until it returns a truthy value.

    Args:
        predicate: Function called repeatedly; a truthy result ends the wait
        timeout: Maximum time to wait in seconds
        interval: Time between evaluations in seconds
        description: What is being waited for, used in the timeout error
        sleep: Pause function (the browser event pump in a live run)
        clock: Monotonic time source
        ignore: Exception types treated as a falsy result

    Returns:
        The first truthy result of predicate()

    Raises:
        ConditionTimeoutError: If the predicate never holds within timeout

    Example:
        # Wait for the token to appear in local storage
        token = await_condition(
            lambda: storage.get("jwt"),
            timeout=10.0,
            interval=0.1,
            description="token in local storage",
        )
    """
    deadline = clock() + timeout
    last_result: object = None

    while True:
        try:
            last_result = predicate()
        except ignore as e:
            last_result = e
        else:
            if last_result:
                return last_result  # type: ignore[return-value]

        remaining = deadline - clock()
        if remaining <= 0:
            break
        sleep(min(interval, remaining))

    raise ConditionTimeoutError(description, timeout, last_result)


@dataclass
class Waiter:
    """await_condition bound to a run's timeout, interval and event pump."""

    timeout: float
    interval: float
    sleep: Callable[[float], None] = time.sleep
    clock: Callable[[], float] = time.monotonic
    ignore: tuple[type[BaseException], ...] = field(default_factory=tuple)

    def until(
        self,
        predicate: Callable[[], T],
        description: str,
        timeout: float | None = None,
    ) -> T:
        return await_condition(
            predicate,
            self.timeout if timeout is None else timeout,
            self.interval,
            description=description,
            sleep=self.sleep,
            clock=self.clock,
            ignore=self.ignore,
        )

    def pause(self, seconds: float) -> None:
        """Fixed-duration wait through the same event pump."""
        deadline = self.clock() + seconds
        while (remaining := deadline - self.clock()) > 0:
            self.sleep(min(self.interval, remaining))
