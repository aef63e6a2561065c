"""Settle-all fan-out helper.

``settle_all`` runs a batch of awaitables concurrently and waits until every
one of them has either returned or raised.  Results come back in input
order, with exceptions returned in place of values, so the caller decides
what a partial failure means.  Nothing is cancelled early: a fast failure
never cuts short a slower sibling that might still succeed.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Sequence, TypeVar

_T = TypeVar("_T")


async def settle_all(aws: Sequence[Awaitable[_T]]) -> list[_T | BaseException]:
    """Run *aws* concurrently and collect every outcome.

    Parameters
    ----------
    aws:
        Awaitable objects to execute concurrently.

    Returns
    -------
    list[_T | BaseException]
        One entry per input, in the same order as *aws*.  Failed
        awaitables contribute their exception instead of a value.
    """
    if not aws:
        return []
    return list(await asyncio.gather(*aws, return_exceptions=True))


def split_outcomes(
    keys: Sequence[str],
    outcomes: Sequence[_T | BaseException],
) -> tuple[list[tuple[str, _T]], list[tuple[str, BaseException]]]:
    """Partition ``settle_all`` outcomes into successes and failures.

    Both lists keep the order of *keys*.
    """
    successes: list[tuple[str, _T]] = []
    failures: list[tuple[str, BaseException]] = []
    for key, outcome in zip(keys, outcomes):
        if isinstance(outcome, BaseException):
            failures.append((key, outcome))
        else:
            successes.append((key, outcome))
    return successes, failures
