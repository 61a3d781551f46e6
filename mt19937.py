"""
MT19937 (Mersenne Twister) Implementation
Integer version with the 2002/1/26 initialization, default seed 4537
"""

import numpy as np

from rng import RNG, InvalidState, Snapshot


class MT19937(RNG):
    """
    Mersenne Twister MT19937 generator
    The state vector is a fixed (624,) uint32 array; uint32 arithmetic wraps
    """

    # MT19937 parameters
    W = 32  # word size (bits)
    N = 624  # degree of recurrence
    M = 397  # middle word offset
    R = 31  # separation point of one word
    A = MATRIX_A = 0x9908B0DF  # twist matrix parameter

    # Tempering parameters
    U = 11
    S = 7
    B = 0x9D2C5680
    T = 15
    C = 0xEFC60000
    L = 18

    LOWER_MASK = (1 << R) - 1  # 0x7FFFFFFF
    WORD_MASK = (1 << W) - 1  # 0xFFFFFFFF
    UPPER_MASK = (~LOWER_MASK) & WORD_MASK  # 0x80000000

    # 5489 is the published default; the target application seeds with 4537
    DEFAULT_SEED = 4537

    _MAG01 = np.array([0, MATRIX_A], dtype=np.uint32)

    def __init__(self, seed=DEFAULT_SEED):
        """
        Initialize MT19937 with a seed
        :param seed: initialization seed (default: 4537), or None to seed
                     lazily with the default on the first draw
        """
        self.mt = np.zeros(self.N, dtype=np.uint32)  # state vector
        self.index = self.N + 1  # N+1 means mt is not initialized
        self._position = 0
        if seed is not None:
            self.seed(seed)

    def seed(self, s):
        """
        Initialize the generator from a seed
        :param s: seed value, truncated to 32 bits
        """
        prev = int(s) & self.WORD_MASK
        words = [prev]
        for i in range(1, self.N):
            prev = (1812433253 * (prev ^ (prev >> 30)) + i) & self.WORD_MASK
            words.append(prev)
        self.mt = np.array(words, dtype=np.uint32)
        self.index = self.N
        self._position = 0

    def seed_default(self):
        self.seed(self.DEFAULT_SEED)

    def _twist(self):
        """
        Regenerate all N words of the state

        Word kk reads mt[kk + M] (old) for kk < N - M and mt[kk + M - N]
        (already regenerated) afterwards, so the wrapping range is processed
        in blocks of N - M whose sources all lie in earlier blocks.
        """
        N, M = self.N, self.M
        mt = self.mt
        upper = np.uint32(self.UPPER_MASK)
        lower = np.uint32(self.LOWER_MASK)

        y = (mt[:N - M] & upper) | (mt[1:N - M + 1] & lower)
        mt[:N - M] = mt[M:] ^ (y >> 1) ^ self._MAG01[y & 1]

        for start in range(N - M, N - 1, N - M):
            end = min(start + (N - M), N - 1)
            y = (mt[start:end] & upper) | (mt[start + 1:end + 1] & lower)
            mt[start:end] = mt[start + M - N:end + M - N] ^ (y >> 1) ^ self._MAG01[y & 1]

        y = (int(mt[N - 1]) & self.UPPER_MASK) | (int(mt[0]) & self.LOWER_MASK)
        mt[N - 1] = int(mt[M - 1]) ^ (y >> 1) ^ (self.MATRIX_A if y & 1 else 0)

        self.index = 0

    def _ensure_words(self):
        """Twist (seeding first if needed) when the current block is used up"""
        if self.index >= self.N:
            if self.index == self.N + 1:
                self.seed_default()
            self._twist()

    def next_uint32(self):
        """
        Extract a tempered value
        :return: 32-bit random number
        """
        self._ensure_words()

        y = int(self.mt[self.index])
        self.index += 1

        self._position += 1
        return temper(y)

    def generate(self, n):
        """
        Draw n values, tempering whole slices of the state at once
        :param n: number of values to draw
        :return: uint32 array of length n
        """
        if n < 0:
            raise ValueError(f"Cannot draw a negative number of values: {n}")

        out = np.empty(n, dtype=np.uint32)
        filled = 0
        while filled < n:
            self._ensure_words()
            take = min(n - filled, self.N - self.index)
            out[filled:filled + take] = temper_array(self.mt[self.index:self.index + take])
            self.index += take
            self._position += take
            filled += take
        return out

    def advance(self, n):
        """
        Skip n values without tempering them
        :param n: number of values to skip
        """
        if n < 0:
            raise ValueError(f"Cannot advance by a negative count: {n}")

        remaining = n
        while remaining:
            self._ensure_words()
            take = min(remaining, self.N - self.index)
            self.index += take
            self._position += take
            remaining -= take

    def save_state(self):
        """
        Get current internal state
        :return: Snapshot holding a copy of the state array
        """
        return Snapshot(self.mt.copy(), self.index, self._position)

    def restore_state(self, snapshot):
        """
        Set internal state from a snapshot
        :param snapshot: Snapshot taken from an MT19937
        :raises InvalidState: if the snapshot is malformed; nothing is changed
        """
        if not isinstance(snapshot, Snapshot):
            raise InvalidState(f"Expected a Snapshot, got {type(snapshot).__name__}")

        state = np.asarray(snapshot.state)
        if state.shape != (self.N,):
            raise InvalidState(f"State must have {self.N} elements, got shape {state.shape}")
        if state.dtype != np.uint32:
            if state.dtype.kind not in "iu":
                raise InvalidState(f"State words must be integers, got dtype {state.dtype}")
            if state.min() < 0 or state.max() > self.WORD_MASK:
                raise InvalidState("State words must fit in 32 bits")

        index = snapshot.index
        if not isinstance(index, (int, np.integer)) or not 0 <= index <= self.N + 1:
            raise InvalidState(f"Index must be an integer in [0, {self.N + 1}], got {index!r}")

        position = snapshot.position
        if not isinstance(position, (int, np.integer)) or position < 0:
            raise InvalidState(f"Position must be a non-negative integer, got {position!r}")

        self.mt = state.astype(np.uint32)
        self.index = int(index)
        self._position = int(position)

    def clone(self):
        other = type(self)(seed=None)
        other.restore_state(self.save_state())
        return other

    @property
    def position(self):
        return self._position


def temper(y):
    """
    Tempering function: transforms internal state to output
    :param y: internal state value
    :return: tempered output value
    """
    y ^= y >> MT19937.U
    y ^= (y << MT19937.S) & MT19937.B
    y ^= (y << MT19937.T) & MT19937.C
    y ^= y >> MT19937.L
    return y & MT19937.WORD_MASK


def temper_array(words):
    """
    Tempering applied element-wise; uint32 left shifts drop the high bits
    :param words: uint32 array of internal state values
    :return: uint32 array of tempered values
    """
    y = np.asarray(words, dtype=np.uint32)
    y = y ^ (y >> MT19937.U)
    y = y ^ ((y << MT19937.S) & np.uint32(MT19937.B))
    y = y ^ ((y << MT19937.T) & np.uint32(MT19937.C))
    y = y ^ (y >> MT19937.L)
    return y
