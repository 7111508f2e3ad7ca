"""
Extended PCG generators.

An extended generator pairs an ordinary engine with an array of 2**k output
sized values. Each output is XORed with the array slot selected by the low k
bits of the freshly advanced state, and that slot is then incremented. Every
increment of a slot starts a new "epoch", which multiplies the period and
makes the generator k-dimensionally equidistributed.

Extended generators cannot jump ahead: the array contents depend on the
whole history of the engine.
"""
import logging
from enum import IntEnum

from pcgrand.config import MAX_EXT_SIZE, MIN_EXT_SIZE
from pcgrand.engine import Pcg32, Pcg32L, Pcg64
from pcgrand.errors import ExtensionSizeError, UnsupportedOperationError
from pcgrand.numops import wrapping_add, xor
from pcgrand.prngs import PRNG

logger = logging.getLogger(__name__)


class ExtSize(IntEnum):
    EXT2 = 2
    EXT4 = 4
    EXT8 = 8
    EXT16 = 16
    EXT32 = 32
    EXT64 = 64
    EXT128 = 128
    EXT256 = 256
    EXT512 = 512
    EXT1024 = 1024

    @property
    def bits(self):
        return self.value.bit_length() - 1


def ext_bits(ext_size):
    size = int(ext_size)
    if size < MIN_EXT_SIZE or size > MAX_EXT_SIZE or size & (size - 1):
        raise ExtensionSizeError(
            f"Extension size must be a power of two between {MIN_EXT_SIZE} "
            f"and {MAX_EXT_SIZE}, got {ext_size}"
        )
    return size.bit_length() - 1


class ExtPcg(PRNG):
    engine_type = None

    def __init__(self, pcg, ext_size=ExtSize.EXT32):
        self.ext_bits = ext_bits(ext_size)
        self.pcg = pcg
        self.xtype_bits = pcg.xtype_bits
        self._pick_mask = (1 << self.ext_bits) - 1

        # Create the starting extension array from the generator itself
        self.ext = [pcg._next() for _ in range(1 << self.ext_bits)]
        logger.debug("Extended %r with %d slots", pcg, len(self.ext))

    @classmethod
    def from_pcg(cls, pcg, ext_size=ExtSize.EXT32):
        """
        Wraps an existing generator at its current state. This consumes
        ext_size outputs to fill the extension array.
        """
        return cls(pcg, ext_size)

    @classmethod
    def _engine(cls, engine_type):
        engine_type = engine_type or cls.engine_type
        if engine_type is None:
            raise TypeError("No engine type given for the extended generator")
        return engine_type

    @classmethod
    def from_seed(cls, seed_bytes, ext_size=ExtSize.EXT32, engine_type=None):
        return cls(cls._engine(engine_type).from_seed(seed_bytes), ext_size)

    @classmethod
    def new_unseeded(cls, ext_size=ExtSize.EXT32, engine_type=None):
        """
        WARNING: every generator created this way produces the same output.
        """
        return cls(cls._engine(engine_type).new_unseeded(), ext_size)

    @classmethod
    def from_entropy(cls, ext_size=ExtSize.EXT32, engine_type=None):
        return cls(cls._engine(engine_type).from_entropy(), ext_size)

    @property
    def ext_size(self):
        return len(self.ext)

    def _next(self):
        raw = self.pcg._next()
        # Pick with the low bits of the *updated* state
        pick = self.pcg.state & self._pick_mask
        ext_val = self.ext[pick]
        self.ext[pick] = wrapping_add(ext_val, 1, self.xtype_bits)
        return xor(raw, ext_val, self.xtype_bits)

    def advance(self, delta):
        raise UnsupportedOperationError("Extended generators cannot jump ahead")

    def __repr__(self):
        return f"{type(self).__name__}({self.pcg!r}, ext_size={self.ext_size})"


class Pcg32Ext(ExtPcg):
    engine_type = Pcg32


class Pcg32LExt(ExtPcg):
    engine_type = Pcg32L


class Pcg64Ext(ExtPcg):
    engine_type = Pcg64
