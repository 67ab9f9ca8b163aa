from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .clients import ModelClient
from .errors import ComparisonError, ToleranceExceededError
from .prompt import Prompt
from .records import format_duration, persist_result

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_MS = 8000


@dataclass(frozen=True)
class ClientInvocation:
    label: str
    start_time: datetime
    end_time: datetime
    duration_ms: int
    response: Any = None
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ComparisonOutcome:
    direct: ClientInvocation
    framework: ClientInvocation
    time_difference_ms: int
    tolerance_ms: int
    within_tolerance: bool

    def check(self) -> None:
        if not self.within_tolerance:
            raise ToleranceExceededError(self.time_difference_ms, self.tolerance_ms)


def compare_durations(
    first_ms: int, second_ms: int, tolerance_ms: int = DEFAULT_TOLERANCE_MS
) -> tuple[int, bool]:
    difference = abs(first_ms - second_ms)
    return difference, difference <= tolerance_ms


async def timed_invoke(client: ModelClient, prompt: Prompt) -> ClientInvocation:
    """Run one client call and capture its timing and outcome.

    Failures are recorded on the invocation rather than raised so that a
    sibling call running alongside is never cancelled.
    """

    started_at = datetime.now(timezone.utc)
    start = time.perf_counter()
    response = None
    error = None
    try:
        response = await client.invoke(prompt)
    except Exception as exc:
        error = exc
    duration_ms = int((time.perf_counter() - start) * 1000)
    if error is not None:
        logger.warning("%s call failed after %dms: %r", client.label, duration_ms, error)
    return ClientInvocation(
        label=client.label,
        start_time=started_at,
        end_time=datetime.now(timezone.utc),
        duration_ms=duration_ms,
        response=response,
        error=error,
    )


def _persist(invocation: ClientInvocation, results_dir: Path | str) -> None:
    persist_result(
        invocation.label,
        invocation.duration_ms,
        invocation.response,
        results_dir,
        error=invocation.error,
    )


async def run_comparison(
    prompt: Prompt,
    direct: ModelClient,
    framework: ModelClient,
    results_dir: Path | str,
    tolerance_ms: int = DEFAULT_TOLERANCE_MS,
) -> ComparisonOutcome:
    """Call both clients concurrently with the same prompt and compare latency.

    Both calls are started together and awaited until each has settled. Both
    records are written before any failure is reported. If either side failed
    a :class:`ComparisonError` is raised and no judgment is made.
    """

    logger.info("Comparing %s vs %s", direct.label, framework.label)
    direct_inv, framework_inv = await asyncio.gather(
        timed_invoke(direct, prompt),
        timed_invoke(framework, prompt),
    )

    _persist(direct_inv, results_dir)
    _persist(framework_inv, results_dir)

    failures = [inv for inv in (direct_inv, framework_inv) if not inv.succeeded]
    if failures:
        raise ComparisonError(failures) from failures[0].error

    difference, within = compare_durations(
        direct_inv.duration_ms, framework_inv.duration_ms, tolerance_ms
    )
    logger.info(
        "%s duration: %s (%dms)",
        direct_inv.label,
        format_duration(direct_inv.duration_ms),
        direct_inv.duration_ms,
    )
    logger.info(
        "%s duration: %s (%dms)",
        framework_inv.label,
        format_duration(framework_inv.duration_ms),
        framework_inv.duration_ms,
    )
    logger.info("Time difference: %s (%dms)", format_duration(difference), difference)
    if not within:
        logger.warning("Time difference exceeds tolerance of %dms", tolerance_ms)

    return ComparisonOutcome(
        direct=direct_inv,
        framework=framework_inv,
        time_difference_ms=difference,
        tolerance_ms=tolerance_ms,
        within_tolerance=within,
    )


async def run_sequential(
    prompt: Prompt, direct: ModelClient, framework: ModelClient
) -> tuple[ClientInvocation, ClientInvocation]:
    """Diagnostic mode: call the clients one after another, logging errors."""

    logger.info("System instructions: %s", prompt.system_instructions)
    logger.info("User input: %s", prompt.user_input)
    results = []
    for client in (direct, framework):
        logger.info("--- Testing %s ---", client.label)
        invocation = await timed_invoke(client, prompt)
        if invocation.succeeded:
            logger.info(
                "%s completed in %s", client.label, format_duration(invocation.duration_ms)
            )
        else:
            logger.error("%s error: %s", client.label, invocation.error)
        results.append(invocation)
    return results[0], results[1]
