"""Balanced distribution of Gram-matrix blocks over several devices."""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from itertools import accumulate, groupby

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class Assignment:
    """Blocks given to one device.

    Block ``b`` consists of ``elems[offset[b]:offset[b + 1]]`` and occurs
    ``period[b]`` times in its equivalence class.
    """

    elems: list[int] = field(default_factory=list)
    offset: list[int] = field(default_factory=lambda: [0])
    period: list[int] = field(default_factory=list)


def _cost(size: int) -> int:
    return int(size**1.5)


def distribute_blocks(blocks, ndev: int) -> tuple[list[Assignment], np.ndarray]:
    """Share blocks out among ``ndev`` devices so their costs are balanced.

    ``blocks[0]`` holds equivalence classes of single elements; every other
    entry is an equivalence class of blocks whose first block is the
    representative. The input is not modified. Returns the per-device
    assignments and a table with one row ``(size, count, cost)`` per block
    size, the last row being the single elements.
    """
    if ndev < 1:
        raise ValueError("ndev must be positive")
    if not blocks:
        raise ValueError("blocks must at least hold the class of single elements")

    singles = blocks[0]
    groups = sorted(blocks[1:], key=lambda group: len(group[0]), reverse=True)
    if any(len(group[0]) == 0 for group in groups):
        raise ValueError("blocks must not be empty")

    rows = [
        (size, sum(1 for _ in run))
        for size, run in groupby(groups, key=lambda group: len(group[0]))
    ]
    rows.append((1, len(singles)))
    block_sizes = np.array(
        [(size, count, _cost(size) * count) for size, count in rows], dtype=np.int64
    ).reshape(-1, 3)
    logger.debug("block sizes:\n%s", block_sizes)

    heap = [(0, dev) for dev in range(ndev)]
    table = np.zeros((ndev, len(rows)), dtype=np.int64)
    for row, (size, mult) in enumerate(rows):
        cost = _cost(size)
        while mult > 0:
            current, dev = heapq.heappop(heap)
            if heap:
                assign = max(min(mult, (heap[0][0] - current) // cost), 1)
            else:
                assign = mult
            heapq.heappush(heap, (current + cost * assign, dev))
            table[dev, row] += assign
            mult -= assign
    for current, dev in sorted(heap, key=lambda item: item[1]):
        logger.debug("device %d: cost = %d", dev, current)

    group_counts = [count for _, count in rows[:-1]]
    heads = list(accumulate(group_counts, initial=0))[:-1]
    single_head = 0

    assignments = []
    for dev in range(ndev):
        assignment = Assignment()
        for row, head in enumerate(heads):
            taken = int(table[dev, row])
            for group in groups[head : head + taken]:
                assignment.elems.extend(group[0])
                assignment.period.append(len(group))
                assignment.offset.append(len(assignment.elems))
            heads[row] += taken
        taken = int(table[dev, -1])
        for cls in singles[single_head : single_head + taken]:
            assignment.elems.append(cls[0])
            assignment.period.append(len(cls))
            assignment.offset.append(len(assignment.elems))
        single_head += taken
        assignments.append(assignment)

    return assignments, block_sizes