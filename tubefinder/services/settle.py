"""Wait-for-all join that keeps every outcome.

Unlike ``asyncio.gather`` without ``return_exceptions``, one failing awaitable
never short-circuits the others: each one settles into a Settled record.
"""

import asyncio
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Settled:
    value: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def settle_all(calls: Mapping[str, Awaitable[Any]]) -> dict[str, Settled]:
    """Run every awaitable concurrently and collect each result or exception by name."""
    names = list(calls)
    results = await asyncio.gather(*(calls[name] for name in names), return_exceptions=True)
    outcomes = {}
    for name, result in zip(names, results):
        if isinstance(result, Exception):
            outcomes[name] = Settled(error=result)
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes[name] = Settled(value=result)
    return outcomes


def successes(outcomes: Mapping[str, Settled]) -> dict[str, Any]:
    return {name: outcome.value for name, outcome in outcomes.items() if outcome.ok}


def failures(outcomes: Mapping[str, Settled]) -> dict[str, Exception]:
    return {name: outcome.error for name, outcome in outcomes.items() if not outcome.ok}


def all_failed(outcomes: Mapping[str, Settled]) -> bool:
    return all(not outcome.ok for outcome in outcomes.values())
