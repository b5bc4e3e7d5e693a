import numpy as np

from typing import Sequence


def _merge_count(values: list[int], report: list[tuple[int, int]] | None) -> tuple[list[int], int]:
    """
    Sort values by merging sorted halves recursively,
    counting pairs which are taken out of order during merge.

    Time complexity: O(n*log(n)), plus O(K) when the K inverted pairs are reported.
    """
    if len(values) <= 1:
        return values, 0

    mid = len(values) // 2
    left, left_count = _merge_count(values[:mid], report)
    right, right_count = _merge_count(values[mid:], report)

    merged = []
    cross_count = 0
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] <= right[j]:
            merged.append(left[i])
            i += 1
        else:
            # right[j] is smaller than every element left in the left half
            cross_count += len(left) - i
            if report is not None:
                report.extend((v, right[j]) for v in left[i:])
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])

    return merged, left_count + right_count + cross_count


def count_inversions(ranks: Sequence[int]) -> int:
    """
    Number of index pairs i < j with ranks[i] > ranks[j].
    The input sequence is left untouched.
    """
    _, count = _merge_count(list(ranks), report=None)
    return count


def report_inversions(ranks: Sequence[int]) -> list[tuple[int, int]]:
    """
    All inverted pairs as (larger, smaller) value pairs.
    """
    inverted: list[tuple[int, int]] = []
    _merge_count(list(ranks), report=inverted)
    return inverted


class _FenwickTree:
    """
    Counts of the values 1..n inserted so far.
    """

    def __init__(self, n: int):
        self.n = n
        self.tree = [0] * (n + 1)

    def add(self, value: int):
        while value <= self.n:
            self.tree[value] += 1
            value += value & -value

    def prefix(self, value: int) -> int:
        # number of inserted values not greater than `value`
        total = 0
        while value > 0:
            total += self.tree[value]
            value -= value & -value
        return total

    def find(self, k: int) -> int:
        # k-th smallest inserted value, 1-based
        pos = 0
        step = 1 << self.n.bit_length()
        while step:
            if pos + step <= self.n and self.tree[pos + step] < k:
                pos += step
                k -= self.tree[pos]
            step >>= 1
        return pos + 1


def sample_inversions(ranks: Sequence[int], size: int, rng: np.random.Generator) -> list[tuple[int, int]]:
    """
    `size` inverted pairs drawn uniformly with replacement, as (larger, smaller) value pairs.
    `ranks` must be a permutation of 1..n. Returns an empty list if there are no inversions.

    Every position is drawn with the weight of the larger values standing before it,
    then one of those values is picked by its order among them.
    Time complexity: O((n + size)*log(n)).
    """
    n = len(ranks)
    tree = _FenwickTree(n)
    left_greater = np.zeros(n, dtype=np.int64)
    for j, r in enumerate(ranks):
        left_greater[j] = j - tree.prefix(r)
        tree.add(r)

    total = int(left_greater.sum())
    if total == 0 or size <= 0:
        return []

    positions = np.sort(rng.choice(n, size=size, p=left_greater / total))
    offsets = rng.integers(0, left_greater[positions])

    tree = _FenwickTree(n)
    sampled = []
    k = 0
    for j, r in enumerate(ranks):
        while k < size and positions[k] == j:
            # inserted values above r follow the prefix(r) ones not above it
            sampled.append((tree.find(tree.prefix(r) + int(offsets[k]) + 1), r))
            k += 1
        tree.add(r)
    return sampled
