"""
==============================================================================
Code Classifier Module
==============================================================================

Statistical classification of the accepted frequency table.

Decision Rules:
--------------
1. One distinct code seen at least ``perfect_min_count`` times: "perfect",
   stop scanning.
2. Otherwise, with population stddev ``s`` and leading count ``max``:
   if ``s > min_spread`` and ``max >= perfect_min_count``, every code with
   ``count >= max - cluster_width * s`` is in the cluster.
   - Cluster of one: "single", stop scanning.
   - Otherwise cluster members are "cluster" and the rest are
     "garbage-<floor((max - count) / s)>".
3. Anything else is "waiting".

The result is a pure function of the table contents.

==============================================================================
"""

from __future__ import annotations

import logging
import math
from typing import List, Mapping, NamedTuple

import numpy as np

from scan_aggregator.schemas import ClassifiedEntry, EntryStatus, rank_key


# Module logger
logger = logging.getLogger(__name__)


class Classification(NamedTuple):
    """Ranked entries plus the stop decision derived from them."""
    entries: List[ClassifiedEntry]
    should_stop: bool


def rank_entries(entries: List[ClassifiedEntry]) -> List[ClassifiedEntry]:
    """Sort entries by count descending, ties by code ascending."""
    return sorted(entries, key=lambda e: rank_key(e.code, e.count))


def classify_codes(
    counts: Mapping[str, int],
    perfect_min_count: int = 6,
    min_spread: float = 1.0,
    cluster_width: float = 1.5,
) -> Classification:
    """
    Classify every distinct code of an accepted frequency table.

    Args:
        counts: Code -> observation count
        perfect_min_count: Count needed to converge
        min_spread: Stddev the counts must exceed before clustering
        cluster_width: Cluster width in stddev units

    Returns:
        Classification with ranked entries and the stop decision
    """
    if not counts:
        return Classification([], False)

    codes = list(counts)

    if len(codes) == 1:
        code = codes[0]
        count = counts[code]
        if count >= perfect_min_count:
            entry = ClassifiedEntry(code=code, count=count, status=EntryStatus.PERFECT.value)
            return Classification([entry], True)
        entry = ClassifiedEntry(code=code, count=count, status=EntryStatus.WAITING.value)
        return Classification([entry], False)

    # Canonical order: float summation must not depend on arrival order
    values = np.array(sorted(counts.values()), dtype=float)
    stddev = float(np.std(values))
    leading = int(values.max())

    if not (stddev > min_spread and leading >= perfect_min_count):
        entries = [
            ClassifiedEntry(code=code, count=counts[code], status=EntryStatus.WAITING.value)
            for code in codes
        ]
        return Classification(rank_entries(entries), False)

    cutoff = leading - cluster_width * stddev
    cluster = {code for code in codes if counts[code] >= cutoff}

    if len(cluster) == 1:
        status_of = {code: EntryStatus.SINGLE.value for code in cluster}
    else:
        status_of = {code: EntryStatus.CLUSTER.value for code in cluster}

    for code in codes:
        if code not in cluster:
            tier = math.floor((leading - counts[code]) / stddev)
            status_of[code] = EntryStatus.garbage(tier)

    entries = [
        ClassifiedEntry(code=code, count=counts[code], status=status_of[code])
        for code in codes
    ]

    logger.debug(
        f"Classified {len(codes)} codes: stddev={stddev:.3f}, "
        f"cutoff={cutoff:.3f}, cluster={sorted(cluster)}"
    )

    return Classification(rank_entries(entries), len(cluster) == 1)
