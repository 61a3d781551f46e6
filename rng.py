"""
Random number generator interface
Shared contract for deterministic 32-bit generators and their saved states
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np


class InvalidState(ValueError):
    """Raised when a snapshot cannot be restored into a generator"""


@dataclass(eq=False)
class Snapshot:
    """
    Saved generator state
    Field order (state, index, position) is the persisted order
    """

    state: np.ndarray
    index: int
    position: int

    def copy(self):
        """
        Independent copy of this snapshot
        :return: new Snapshot with its own state array
        """
        return Snapshot(np.array(self.state, copy=True), self.index, self.position)

    def __eq__(self, other):
        if not isinstance(other, Snapshot):
            return NotImplemented
        return (self.index == other.index
                and self.position == other.position
                and np.array_equal(self.state, other.state))


class RNG(ABC):
    """
    Deterministic 32-bit random number generator

    Instances are plain mutable objects without internal locking. Sharing one
    instance between threads needs external synchronization; use clone() to
    give each thread its own lineage instead.
    """

    @abstractmethod
    def seed(self, s):
        """Reinitialize the state from a 32-bit seed"""

    @abstractmethod
    def seed_default(self):
        """Reinitialize the state from the generator's default seed"""

    @abstractmethod
    def next_uint32(self):
        """Return the next value on [0, 0xFFFFFFFF]"""

    @abstractmethod
    def save_state(self):
        """Return an independent Snapshot of the current state"""

    @abstractmethod
    def restore_state(self, snapshot):
        """Overwrite the current state from a Snapshot (all-or-nothing)"""

    @abstractmethod
    def clone(self):
        """Return an independent generator with identical future output"""

    @property
    @abstractmethod
    def position(self):
        """Number of values drawn since the last seed (diagnostic only)"""

    def generate(self, n):
        """
        Draw n values
        :param n: number of values to draw
        :return: uint32 array of length n
        """
        if n < 0:
            raise ValueError(f"Cannot draw a negative number of values: {n}")
        return np.fromiter((self.next_uint32() for _ in range(n)),
                           dtype=np.uint32, count=n)

    def advance(self, n):
        """
        Draw and discard n values
        :param n: number of values to skip
        """
        if n < 0:
            raise ValueError(f"Cannot advance by a negative count: {n}")
        for _ in range(n):
            self.next_uint32()

    def __copy__(self):
        return self.clone()

    def __deepcopy__(self, memo):
        return self.clone()
