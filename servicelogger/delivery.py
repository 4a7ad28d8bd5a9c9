"""Fan-out delivery of one service log to many clusters.

One task per target is started at once, without a concurrency cap; batches
are operator-supplied cluster lists and stay small. Every target yields
exactly one outcome, so a failing cluster never hides the result of another.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TextIO, TypeVar

from servicelogger.logging_config import get_logger

logger = get_logger(__name__)

NoticeT = TypeVar("NoticeT")

SUCCESS = "success"
FAILURE = "failure"


class ProgressIndicator(Protocol):
    """Anything with start/stop, e.g. `rich.live.Live`."""

    def start(self) -> None: ...

    def stop(self) -> None: ...


@dataclass(frozen=True)
class DeliveryOutcome:
    target_id: str
    error: str | None = None

    @classmethod
    def success(cls, target_id: str) -> "DeliveryOutcome":
        return cls(target_id)

    @classmethod
    def failure(cls, target_id: str, message: str) -> "DeliveryOutcome":
        return cls(target_id, message)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def status(self) -> str:
        return SUCCESS if self.succeeded else FAILURE

    def to_line(self) -> str:
        """Tab-separated `<target>\\t<status>[\\t<error>]`."""
        if self.succeeded:
            return f"{self.target_id}\t{SUCCESS}"
        return f"{self.target_id}\t{FAILURE}\t{self.error}"


@dataclass(frozen=True)
class BatchResult:
    outcomes: tuple[DeliveryOutcome, ...]

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def failures(self) -> tuple[DeliveryOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.succeeded)

    @property
    def all_succeeded(self) -> bool:
        return not self.failures


class Deliverer(Generic[NoticeT]):
    """Runs one batch: dispatch, barrier, indicator shutdown."""

    def __init__(
        self,
        post: Callable[[NoticeT, str], Awaitable[None]],
        *,
        indicator: ProgressIndicator | None = None,
        out: TextIO | None = None,
    ):
        """Initialize deliverer.

        Args:
            post: Delivery capability; raises on failure
            indicator: Progress indicator shown for the whole batch
            out: Stream for result lines (None means the current sys.stdout)
        """
        self._post = post
        self._indicator = indicator
        self._out = out

    async def _deliver_one(self, notice: NoticeT, target_id: str) -> DeliveryOutcome:
        try:
            await self._post(notice, target_id)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug("Delivery failed: target=%s", target_id, exc_info=True)
            outcome = DeliveryOutcome.failure(target_id, str(e) or type(e).__name__)
        else:
            logger.debug("Delivery succeeded: target=%s", target_id)
            outcome = DeliveryOutcome.success(target_id)

        # Single print per target; lines follow completion order.
        print(outcome.to_line(), file=self._out, flush=True)
        return outcome

    async def run(self, notice: NoticeT, targets: Sequence[str]) -> BatchResult:
        if not targets:
            raise ValueError("at least one target is required")

        logger.info("Delivering to %d target(s)", len(targets))
        if self._indicator is not None:
            self._indicator.start()
        try:
            outcomes = await asyncio.gather(*(self._deliver_one(notice, target_id) for target_id in targets))
        finally:
            if self._indicator is not None:
                self._indicator.stop()

        result = BatchResult(tuple(outcomes))
        logger.info("Delivery finished: total=%d failed=%d", len(result), len(result.failures))
        return result


async def deliver(
    notice: NoticeT,
    targets: Sequence[str],
    post: Callable[[NoticeT, str], Awaitable[None]],
    *,
    indicator: ProgressIndicator | None = None,
    out: TextIO | None = None,
) -> BatchResult:
    """Deliver `notice` to every target concurrently and collect outcomes.

    Outcomes are returned in submission order; result lines are printed as
    each delivery completes.

    Raises:
        ValueError: `targets` is empty.
    """
    return await Deliverer(post, indicator=indicator, out=out).run(notice, targets)
