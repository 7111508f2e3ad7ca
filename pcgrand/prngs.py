import numpy as np

from pcgrand.numops import numpy_dtype
from pcgrand.seeds import PcgSeeder, default_seed

MASK64 = (1 << 64) - 1
MASK32 = (1 << 32) - 1


class PRNG:
    """
    Draw surface shared by every generator.

    Subclasses provide _next(), returning one native output of
    xtype_bits bits; everything else is built on top of it.
    """
    xtype_bits = None

    def _next(self):
        raise NotImplementedError

    def __iter__(self):
        return self

    def __next__(self):
        return self._next()

    def _bits(self, n):
        # Wider outputs are truncated, narrower ones are combined with the
        # first draw in the low bits.
        width = self.xtype_bits
        if width >= n:
            return self._next() & ((1 << n) - 1)
        result = 0
        shift = 0
        while shift < n:
            result |= self._next() << shift
            shift += width
        return result & ((1 << n) - 1)

    def next_u32(self):
        return self._bits(32)

    def next_u64(self):
        return self._bits(64)

    def fill_bytes(self, buf):
        """
        Fills a writable buffer (bytearray, memoryview, numpy array) in place
        with little endian native outputs. If the buffer length is not a
        multiple of the output size, the last draw only contributes its low
        order bytes.
        """
        view = memoryview(buf).cast('B')
        nbytes = self.xtype_bits // 8
        total = len(view)
        pos = 0
        while pos < total:
            chunk = self._next().to_bytes(nbytes, 'little')
            take = min(nbytes, total - pos)
            view[pos:pos + take] = chunk[:take]
            pos += take
        return buf

    def randbytes(self, n):
        output = bytearray(n)
        self.fill_bytes(output)
        return bytes(output)

    def random(self):
        """
        Float in [0, 1) built from the top 53 bits of a 64 bit draw.
        """
        return (self.next_u64() >> 11) * (1.0 / 9007199254740992.0)

    def randbelow(self, bound):
        """
        Unbiased integer in [0, bound), by rejecting the short range at the
        bottom of the draw.
        """
        if bound <= 0:
            raise ValueError("bound must be positive")
        if bound <= 1 << 32:
            nbits = 32
        elif bound <= 1 << 64:
            nbits = 64
        else:
            nbits = bound.bit_length()
        threshold = ((1 << nbits) - bound) % bound
        while True:
            r = self._bits(nbits)
            if r >= threshold:
                return r % bound

    def randint(self, a, b):
        # inclusive a..b
        if b < a:
            raise ValueError(f"empty range for randint({a}, {b})")
        return a + self.randbelow(b - a + 1)

    def random_raw(self, size):
        """
        Draws `size` native outputs into a numpy array.
        """
        dtype = numpy_dtype(self.xtype_bits)
        if dtype is object:
            out = np.empty(size, dtype=object)
            for i in range(size):
                out[i] = self._next()
            return out
        return np.fromiter((self._next() for _ in range(size)), dtype=dtype, count=size)


class Pcg32Basic(PRNG):
    """
    The minimal C implementation of PCG32, mostly useful to show how PCG works.

    The increment is forced odd on every step rather than when it is set, so
    streams 2k and 2k+1 produce the same sequence. The engine generators
    (Pcg32 and friends) should be preferred.
    """
    xtype_bits = 32

    def __init__(self, state=0, inc=0):
        self.state = state & MASK64
        self.inc = inc & MASK64

    @classmethod
    def from_seed(cls, seed_bytes):
        seeder = PcgSeeder(seed_bytes, 64)
        state = seeder.get()
        inc = seeder.get()
        return cls(state, inc)

    @classmethod
    def new_unseeded(cls):
        """
        Every generator created this way produces the same output.
        """
        return cls.from_seed(default_seed(64))

    def _next(self):
        oldstate = self.state
        # Update the state as an lcg
        self.state = (oldstate * 6364136223846793005 + (self.inc | 1)) & MASK64
        # Prepare the permutation on the output
        xorshifted = (((oldstate >> 18) ^ oldstate) >> 27) & MASK32
        rot = oldstate >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & MASK32

    def __repr__(self):
        return f"Pcg32Basic(state={self.state:#x}, inc={self.inc:#x})"
