"""Exact frequency table over an arbitrary discrete domain.

Counts live in an insertion-ordered dict of small mutable entries, so an
update bumps an integer in place instead of rebinding a new int object per
key. Insertion order decides ties in ``mode``/``modes`` and the iteration
order of ``domain``/``items``.
"""

from __future__ import annotations

import operator
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

import numpy as np
from scipy.stats import entropy as _shannon_entropy

from ..exceptions import InvalidArgumentError, UnsupportedOperationError


def _as_count(n) -> int:
    """Validate an occurrence count: a non-negative integer."""
    try:
        n = operator.index(n)
    except TypeError:
        raise InvalidArgumentError(f"n must be an integer, got {type(n).__name__}")
    if n < 0:
        raise InvalidArgumentError("n cannot be negative")
    return n


class _Entry:
    """Mutable count for one value."""

    __slots__ = ("count",)

    def __init__(self, count: int = 0):
        self.count = count

    def __repr__(self) -> str:
        return f"_Entry({self.count})"


class FrequencyTable:
    """Map-based histogram of values to integer counts.

    Parameters
    ----------
    data : iterable or FrequencyTable, optional
        Values to count once per occurrence, or another table whose counts
        are copied.

    Attributes
    ----------
    total_count : int
        Sum of all counts, maintained incrementally.
    """

    def __init__(self, data: Optional[Iterable[Hashable]] = None):
        self._counts: Dict[Hashable, _Entry] = {}
        self._total_count = 0

        if isinstance(data, FrequencyTable):
            for value, count in data.items():
                self.add(value, count)
        elif data is not None:
            self.add_all(data)

    @property
    def total_count(self) -> int:
        return self._total_count

    def add(self, value: Hashable, n: int = 1) -> None:
        """Add ``n`` occurrences of ``value``.

        Parameters
        ----------
        value : hashable
            Value to count.
        n : int
            Number of occurrences. Zero is a no-op.

        Raises
        ------
        InvalidArgumentError
            If ``n`` is negative or not an integer.
        """
        n = _as_count(n)
        if n == 0:
            return

        entry = self._counts.get(value)
        if entry is None:
            self._counts[value] = _Entry(n)
        else:
            entry.count += n
        self._total_count += n

    def add_all(self, values: Iterable[Hashable]) -> None:
        """Add one occurrence of each value, in iteration order."""
        for value in values:
            self.add(value, 1)

    def remove(self, value: Hashable, n: int = 1) -> None:
        """Remove up to ``n`` occurrences of ``value``.

        Removing more than is present drops the entry and only subtracts
        what was there from the total. Absent values are ignored.

        Raises
        ------
        InvalidArgumentError
            If ``n`` is negative or not an integer.
        """
        n = _as_count(n)
        if n == 0:
            return

        entry = self._counts.get(value)
        if entry is None:
            return

        if n >= entry.count:
            del self._counts[value]
            self._total_count -= entry.count
        else:
            entry.count -= n
            self._total_count -= n

    def count(self, value: Hashable) -> int:
        """Count of ``value``, 0 if absent."""
        entry = self._counts.get(value)
        return 0 if entry is None else entry.count

    def domain(self) -> List[Hashable]:
        """Values with a positive count, in first-insertion order."""
        return list(self._counts)

    @property
    def domain_size(self) -> int:
        return len(self._counts)

    def items(self) -> Iterator[Tuple[Hashable, int]]:
        """Iterate ``(value, count)`` pairs in domain order."""
        for value, entry in self._counts.items():
            yield value, entry.count

    def maximum_count(self) -> int:
        """Largest count in the table, 0 when empty."""
        return max((entry.count for entry in self._counts.values()), default=0)

    def mode(self) -> Optional[Hashable]:
        """First value (in domain order) with the maximum count.

        Returns
        -------
        hashable or None
            None when the table is empty.
        """
        best = None
        best_count = 0
        for value, entry in self._counts.items():
            if entry.count > best_count:
                best = value
                best_count = entry.count
        return best

    def modes(self) -> List[Hashable]:
        """All values with the maximum count, in domain order."""
        max_count = self.maximum_count()
        return [value for value, entry in self._counts.items()
                if entry.count == max_count]

    def mean(self) -> Any:
        """Not defined for an arbitrary value domain.

        See ``mean_count`` for the mean of the counts themselves.
        """
        raise UnsupportedOperationError("mean not supported for an arbitrary domain")

    def mean_count(self) -> float:
        """Mean count per distinct value, 0.0 when empty."""
        if not self._counts:
            return 0.0
        return self._total_count / len(self._counts)

    def fraction(self, value: Hashable) -> float:
        """Share of the total count held by ``value``, 0.0 when empty."""
        if self._total_count == 0:
            return 0.0
        return self.count(value) / self._total_count

    def entropy(self) -> float:
        """Shannon entropy of the empirical distribution, in bits.

        Returns
        -------
        float
            ``-sum(p * log2(p))`` over the domain, 0.0 for an empty table.
        """
        if self._total_count == 0:
            return 0.0
        counts = np.fromiter((entry.count for entry in self._counts.values()),
                             dtype=float, count=len(self._counts))
        return float(_shannon_entropy(counts, base=2))

    def probability_function(self) -> "ProbabilityMassFunction":
        """Snapshot of this table as a probability mass function.

        Later changes to this table do not affect the returned PMF.
        """
        return ProbabilityMassFunction(self)

    def sample(self, size: int = 1, rng: Optional[np.random.Generator] = None) -> List[Hashable]:
        """Draw values with probability proportional to their counts.

        Parameters
        ----------
        size : int
            Number of values to draw.
        rng : np.random.Generator, optional
            Random generator. A fresh default generator is used if None.

        Returns
        -------
        list
            Sampled values.
        """
        if size < 0:
            raise InvalidArgumentError("size cannot be negative")
        if self._total_count == 0:
            raise InvalidArgumentError("Cannot sample from an empty table")
        if rng is None:
            rng = np.random.default_rng()

        values = self.domain()
        counts = np.array([entry.count for entry in self._counts.values()], dtype=float)
        indices = rng.choice(len(values), size=size, p=counts / counts.sum())
        return [values[i] for i in indices]

    def copy(self) -> "FrequencyTable":
        """Copy of this table; ``total_count`` is copied, not recomputed."""
        result = type(self).__new__(type(self))
        result._counts = {value: _Entry(entry.count)
                          for value, entry in self._counts.items()}
        result._total_count = self._total_count
        return result

    __copy__ = copy

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, value: object) -> bool:
        return value in self._counts

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyTable):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return list(self.items()) == list(other.items())

    __hash__ = None

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(domain_size={len(self._counts)}, "
                f"total_count={self._total_count})")

    def __str__(self) -> str:
        lines = [f"Histogram has {len(self._counts)} domain objects and "
                 f"{self._total_count} total count:"]
        for value, count in self.items():
            lines.append(f"{value}: {count} ({self.fraction(value)})")
        return "\n".join(lines)


class ProbabilityMassFunction(FrequencyTable):
    """Frequency table read as a normalized probability mass function.

    Built as its own copy of the source counts, so it does not follow later
    changes to the table it came from.
    """

    def probability(self, value: Hashable) -> float:
        """``count(value) / total_count``, 0.0 for an empty table."""
        return self.fraction(value)

    def log_probability(self, value: Hashable) -> float:
        """Natural log of ``probability(value)``; -inf for absent values."""
        with np.errstate(divide="ignore"):
            return float(np.log(self.probability(value)))

    __call__ = probability

    def probability_function(self) -> "ProbabilityMassFunction":
        return self
