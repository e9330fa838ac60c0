from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter

# Named counters (in-process snapshot)
_NAMED = Counter()

GENERATIONS_TOTAL = PromCounter(
    "argumenter_generations_total",
    "Generation runs by outcome",
    ["outcome"],
)

STATEMENTS_TOTAL = PromCounter(
    "argumenter_statements_total",
    "Emitted statements by kind",
    ["kind"],
)


def reset_metrics() -> None:
    """
    Test helper: clears the in-process snapshot counters.
    Prometheus counters are monotonic and are left untouched.
    """
    _NAMED.clear()


def inc_named(name: str, value: int = 1) -> None:
    if not name:
        return
    _NAMED[name] += int(value)


def inc_generation(outcome: str) -> None:
    _NAMED[f"generations_{outcome}"] += 1
    GENERATIONS_TOTAL.labels(outcome=outcome).inc()


def inc_statement(kind: str) -> None:
    _NAMED[f"statements_{kind}"] += 1
    STATEMENTS_TOTAL.labels(kind=kind).inc()


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
