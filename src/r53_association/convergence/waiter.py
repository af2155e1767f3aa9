"""Generic poll-until-target utility.

A refresh callable returns ``(result, state)``. States in ``pending`` keep the
loop going, a state in ``target`` ends it, and anything else is an
``UnexpectedStateError``. Exceptions raised by the refresh propagate unchanged.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from r53_association.config import WaitSettings
from r53_association.errors import ConvergenceTimeoutError, UnexpectedStateError

logger = logging.getLogger(__name__)

RefreshFunc = Callable[[], tuple[Any, str]]


@dataclass
class StateChangeConf:
    refresh: RefreshFunc
    pending: tuple[str, ...]
    target: tuple[str, ...]
    delay: float = 30.0
    timeout: float = 600.0
    min_interval: float = 2.0
    max_interval: float = 10.0
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    @classmethod
    def from_settings(
        cls,
        refresh: RefreshFunc,
        settings: WaitSettings,
        pending: Iterable[str] = ("PENDING",),
        target: Iterable[str] = ("INSYNC",),
        **overrides: Any,
    ) -> "StateChangeConf":
        return cls(
            refresh=refresh,
            pending=tuple(pending),
            target=tuple(target),
            delay=settings.delay_seconds,
            timeout=settings.timeout_seconds,
            min_interval=settings.min_interval_seconds,
            max_interval=settings.max_interval_seconds,
            **overrides,
        )

    def wait_for_state(self) -> Any:
        """Block until the refresh reports a target state.

        The first check happens after ``delay``. The deadline is measured from
        that first check. Consecutive checks are never closer than
        ``min_interval``; the spacing doubles up to ``max_interval``. No sleep
        extends past the deadline.
        """
        if self.delay > 0:
            logger.debug("Waiting %ss before first state check", self.delay)
            self.sleep(self.delay)

        started = self.clock()
        deadline = started + self.timeout
        interval = self.min_interval
        last_state = "INIT"
        checks = 0

        while True:
            if checks and self.clock() > deadline:
                raise ConvergenceTimeoutError(last_state, self.timeout, self.target)

            result, state = self.refresh()
            checks += 1
            logger.debug("State check %d returned %s", checks, state)

            if state in self.target:
                logger.debug(
                    "Reached %s after %d checks (%.1fs)", state, checks, self.clock() - started
                )
                return result
            if state not in self.pending:
                raise UnexpectedStateError(state, self.target)

            last_state = state
            remaining = deadline - self.clock()
            if remaining < self.min_interval:
                raise ConvergenceTimeoutError(last_state, self.timeout, self.target)
            self.sleep(min(interval, remaining))
            interval = min(max(interval * 2, self.min_interval), self.max_interval)
