"""
Pricing and per-unit-of-work cost accumulation.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from articlelingo.core.models import CostRecord

logger = logging.getLogger(__name__)


def compute_cost(
    model: str,
    prompt_tokens: int,
    completion_tokens: int,
    pricing: dict[str, dict[str, float]],
) -> float:
    """
    Cost in USD of one call, from per-1K-token prices.

    Unknown models cost nothing (and are logged) rather than failing the call.
    """
    rates = pricing.get(model)
    if rates is None:
        logger.warning(f"No pricing configured for model {model}, recording zero cost")
        return 0.0

    cost = prompt_tokens / 1000 * rates.get("input", 0.0)
    cost += completion_tokens / 1000 * rates.get("output", 0.0)
    return round(cost, 6)


class CostAccumulator(BaseModel):
    """
    Cost of one unit of work (a field, an artifact, a batch).

    Passed explicitly through engine calls; callers merge child
    accumulators into their own.
    """

    total: float = 0.0
    records: list[CostRecord] = Field(default_factory=list)

    def add(self, record: CostRecord) -> None:
        self.records.append(record)
        self.total = round(self.total + record.amount, 6)

    def merge(self, other: CostAccumulator) -> CostAccumulator:
        for record in other.records:
            self.add(record)
        return self

    def __iadd__(self, other: CostAccumulator) -> CostAccumulator:
        return self.merge(other)

    @property
    def calls(self) -> int:
        return len(self.records)
