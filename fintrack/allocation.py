"""Salary allocation.

Splits a monthly income into fixed-percentage buckets: 40 % needs, 20 %
wants, 20 % savings, 10 % investments and 10 % credit/EMI. Amounts are not
rounded; display rounding is left to the renderer.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .catalog import ALLOCATION_BUCKETS
from .data_models import AllocationBucket, BucketDefinition
from .errors import ContractViolation
from .utils import Number, to_decimal

logger = logging.getLogger(__name__)


def split(
    income: Number, buckets: Sequence[BucketDefinition] = ALLOCATION_BUCKETS
) -> List[AllocationBucket]:
    """Return one ``AllocationBucket`` per bucket definition, in catalog order."""
    amount = to_decimal(income)
    if amount <= 0:
        raise ContractViolation("Income must be positive")
    result = [
        AllocationBucket(
            key=b.key,
            weight=b.weight,
            amount=amount * b.weight,
            label=b.label,
            description=b.description,
        )
        for b in buckets
    ]
    logger.debug("Split income %s into %d buckets", amount, len(result))
    return result
