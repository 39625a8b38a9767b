# charmarkov/core/distribution.py
"""
Probability normalization and inverse-CDF sampling over a ContextBucket.

Both functions walk the bucket in its fixed record order; the cumulative
values written by `calculate_probabilities` are only meaningful for that
order, and `sample` relies on it.
"""

from __future__ import annotations

import logging

from .context_bucket import ContextBucket
from .errors import EmptyBucketError, NotNormalizedError

logger = logging.getLogger(__name__)


def calculate_probabilities(bucket: ContextBucket) -> None:
    """
    Set `p` (relative frequency) and `cp` (running sum of p) on every record
    of `bucket`, in place. A bucket with no counts is left untouched.
    """
    total = bucket.total()
    if total == 0:
        logger.debug("skipping normalization of empty bucket")
        return

    cdf = 0.0
    for rec in bucket:
        rec.p = rec.count / total
        cdf += rec.p
        rec.cp = cdf
    # float accumulation can land a hair under 1.0 on the tail
    bucket.last().cp = 1.0


def sample(bucket: ContextBucket, r: float) -> str:
    """
    Return the character of the first record whose cp exceeds `r`.

    `r` is a uniform draw in [0, 1). If rounding leaves no record above it,
    the last record's character is returned.
    """
    if len(bucket) == 0:
        raise EmptyBucketError("cannot sample from an empty context bucket")

    for rec in bucket:
        if rec.cp is None:
            raise NotNormalizedError(f"record {rec.chr!r} has no cumulative probability")
        if rec.cp > r:
            return rec.chr
    return bucket.last().chr
