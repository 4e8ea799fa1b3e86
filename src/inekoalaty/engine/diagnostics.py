"""Post-game diagnostics for inekoalaty.

This module computes summary statistics over a finished move sequence and
checks the Cauchy-Schwarz inequality (sum x)^2 <= n * sum x^2, which links
Alice's linear budget to Bazza's quadratic one.

Formulas:
- mean = sum(x) / n
- std  = sqrt(sum(x^2) / n - mean^2)       (population)
- CS   = lhs (sum x)^2, rhs n * sum(x^2), ratio lhs / (rhs + EPS)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from inekoalaty.parameters import EPS


@dataclass(frozen=True)
class CauchySchwarzCheck:
    """Cauchy-Schwarz comparison for a move sequence."""

    sum_x: float
    sum_x2: float
    lhs: float
    rhs: float
    ratio: float
    satisfied: bool


@dataclass(frozen=True)
class MoveStatistics:
    """Summary statistics of a move sequence.

    Alice's moves are the even indices (rounds 1, 3, ...), Bazza's the odd
    indices.
    """

    n: int
    sum_x: float
    sum_x2: float
    mean: float
    std: float
    max: float
    min: float
    alice_count: int
    alice_sum: float
    bazza_count: int
    bazza_sum: float
    cauchy_schwarz: CauchySchwarzCheck


def cauchy_schwarz(moves: Sequence[float]) -> CauchySchwarzCheck:
    """Compare (sum x)^2 against n * sum x^2.

    Examples:
        >>> cauchy_schwarz([1.0, 1.0]).ratio  # doctest: +ELLIPSIS
        0.99999999...
        >>> cauchy_schwarz([]).satisfied
        True
    """
    n = len(moves)
    if n == 0:
        return CauchySchwarzCheck(sum_x=0.0, sum_x2=0.0, lhs=0.0, rhs=0.0, ratio=0.0, satisfied=True)
    sum_x = sum(moves)
    sum_x2 = sum(x * x for x in moves)
    lhs = sum_x * sum_x
    rhs = n * sum_x2
    return CauchySchwarzCheck(
        sum_x=sum_x,
        sum_x2=sum_x2,
        lhs=lhs,
        rhs=rhs,
        ratio=lhs / (rhs + EPS),
        satisfied=lhs <= rhs + EPS,
    )


def summarize(moves: Sequence[float]) -> MoveStatistics:
    """Compute summary statistics for a move sequence.

    An empty sequence yields all-zero statistics.
    """
    n = len(moves)
    alice = moves[0::2]
    bazza = moves[1::2]
    cs = cauchy_schwarz(moves)
    if n == 0:
        mean = std = high = low = 0.0
    else:
        mean = cs.sum_x / n
        # Rounding can leave a tiny negative variance for constant sequences.
        std = math.sqrt(max(0.0, cs.sum_x2 / n - mean * mean))
        high = max(moves)
        low = min(moves)
    return MoveStatistics(
        n=n,
        sum_x=cs.sum_x,
        sum_x2=cs.sum_x2,
        mean=mean,
        std=std,
        max=high,
        min=low,
        alice_count=len(alice),
        alice_sum=sum(alice),
        bazza_count=len(bazza),
        bazza_sum=sum(bazza),
        cauchy_schwarz=cs,
    )
