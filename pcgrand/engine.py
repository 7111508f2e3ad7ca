"""
The generic PCG engine.

A generator is an LCG (state * multiplier + increment mod 2**W) whose state
is passed through an output permutation before it is returned. Concrete
generators are PcgEngine subclasses that fix the state width, output width,
stream strategy, multiplier and permutation; make_pcg() builds them.

Naming follows the C++ PCG library: OneseqXshRr6432 is a one-sequence
stream, xorshift/random-rotation output, 64 bits of state, 32 bit output.
"""
import logging
import os

from pcgrand.errors import UnknownAlgorithmError, WidthError
from pcgrand.multiplier import DefaultMultiplier, McgMultiplier
from pcgrand.numops import WIDTHS, check_width, mask, wrapping_add, wrapping_mul
from pcgrand.outputmix import DXsMMixin, XshRrMixin, XshRsMixin
from pcgrand.prngs import PRNG
from pcgrand.seeds import PcgSeeder, default_seed, seed_size
from pcgrand.stream import (
    NoSeqStream,
    OneSeqStream,
    SpecificSeqStream,
    UniqueSeqStream,
)

logger = logging.getLogger(__name__)


def lcg_jump(delta, mult, plus, bits):
    """
    Composes the affine step s -> s * mult + plus with itself `delta` times.
    Returns (acc_mult, acc_plus) so that the state after delta steps is
    state * acc_mult + acc_plus, all mod 2**bits.

    Runs in O(log delta) by binary doubling over the bits of delta.
    """
    delta &= mask(bits)
    acc_mult, acc_plus = 1, 0
    cur_mult, cur_plus = mult & mask(bits), plus & mask(bits)
    while delta > 0:
        if delta & 1:
            acc_mult = wrapping_mul(acc_mult, cur_mult, bits)
            acc_plus = wrapping_add(wrapping_mul(acc_plus, cur_mult, bits), cur_plus, bits)
        cur_plus = wrapping_mul(cur_mult + 1, cur_plus, bits)
        cur_mult = wrapping_mul(cur_mult, cur_mult, bits)
        delta >>= 1
    return acc_mult, acc_plus


class PcgEngine(PRNG):
    itype_bits = None
    xtype_bits = None
    stream_type = None
    multiplier_type = None
    output_type = None
    tag = None

    # Filled in by make_pcg()
    _multiplier = None
    _state_mask = None
    _output = None

    def __init__(self, state, stream=None):
        cls = type(self)
        if cls.itype_bits is None:
            raise TypeError(
                "PcgEngine is generic; use make_pcg() or a named generator such as Pcg32"
            )
        self._state = state & cls._state_mask
        self._stream = cls.stream_type.build(cls.itype_bits, stream)

    @classmethod
    def from_seed(cls, seed_bytes):
        """
        Builds a generator from 2 * sizeof(Itype) little endian bytes:
        the state, then the stream.
        """
        seeder = PcgSeeder(seed_bytes, cls.itype_bits)
        state = seeder.get()
        stream = seeder.get()
        return cls(state, stream)

    @classmethod
    def new_unseeded(cls):
        """
        WARNING: every generator created this way produces the same output.
        """
        return cls.from_seed(default_seed(cls.itype_bits))

    @classmethod
    def from_entropy(cls):
        logger.debug("Seeding %s from os.urandom", cls.__name__)
        return cls.from_seed(os.urandom(seed_size(cls.itype_bits)))

    @property
    def state(self):
        return self._state

    @property
    def increment(self):
        return self._stream.increment()

    @property
    def multiplier(self):
        return self._multiplier

    @property
    def stream(self):
        return self._stream

    def set_stream(self, stream_value):
        self._stream.set_stream(stream_value)

    def _next(self):
        # The output is computed from the state *before* it is advanced
        oldstate = self._state
        inc = self._stream.increment()
        bits = self.itype_bits
        self._state = wrapping_add(inc, wrapping_mul(oldstate, self._multiplier, bits), bits)
        return self._output(oldstate, inc, self._multiplier)

    def advance(self, delta):
        """
        Jumps ahead `delta` steps in O(log delta) time, exactly as if _next()
        had been called delta times. delta is taken mod 2**W, so a negative
        value steps backwards.
        """
        acc_mult, acc_plus = lcg_jump(
            delta, self._multiplier, self._stream.increment(), self.itype_bits
        )
        bits = self.itype_bits
        self._state = wrapping_add(wrapping_mul(acc_mult, self._state, bits), acc_plus, bits)

    def clone(self):
        cls = type(self)
        other = cls.__new__(cls)
        other._state = self._state
        other._stream = self._stream.clone()
        return other

    def __copy__(self):
        return self.clone()

    def __deepcopy__(self, memo):
        return self.clone()

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._state == other._state and self.increment == other.increment

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}(state={self._state:#x}, increment={self.increment:#x})"


def make_pcg(stream_type, output_type, itype_bits, xtype_bits,
             multiplier_type=None, name=None):
    """
    Creates a concrete PcgEngine subclass.
    The Mcg stream gets the MCG multiplier unless told otherwise.
    """
    check_width(itype_bits)
    check_width(xtype_bits)
    if xtype_bits > itype_bits:
        raise WidthError(
            f"Output width {xtype_bits} is wider than the state width {itype_bits}"
        )
    if multiplier_type is None:
        multiplier_type = McgMultiplier if stream_type is NoSeqStream else DefaultMultiplier

    tag = f"{stream_type.tag}{output_type.tag}{itype_bits}{xtype_bits}"
    name = name or tag
    attrs = {
        '__module__': __name__,
        '__qualname__': name,
        'itype_bits': itype_bits,
        'xtype_bits': xtype_bits,
        'stream_type': stream_type,
        'multiplier_type': multiplier_type,
        'output_type': output_type,
        'tag': tag,
        '_multiplier': multiplier_type.multiplier(itype_bits),
        '_state_mask': mask(itype_bits),
        '_output': staticmethod(output_type.bind(itype_bits, xtype_bits)),
    }
    return type(name, (PcgEngine,), attrs)


# Every stream/permutation combination for each output narrower than its state
PCG_REGISTRY = {}
for _stream_type in (OneSeqStream, UniqueSeqStream, SpecificSeqStream, NoSeqStream):
    for _output_type in (XshRsMixin, XshRrMixin, DXsMMixin):
        for _itype_bits in WIDTHS:
            for _xtype_bits in WIDTHS:
                if _xtype_bits < _itype_bits:
                    _cls = make_pcg(_stream_type, _output_type, _itype_bits, _xtype_bits)
                    PCG_REGISTRY[_cls.tag] = _cls
del _stream_type, _output_type, _itype_bits, _xtype_bits, _cls


def get_generator(tag):
    try:
        return PCG_REGISTRY[tag]
    except KeyError:
        raise UnknownAlgorithmError(f"Unknown PCG algorithm: {tag!r}") from None


OneseqXshRs6432 = PCG_REGISTRY['OneseqXshRs6432']
OneseqXshRr6432 = PCG_REGISTRY['OneseqXshRr6432']
UniqueXshRs6432 = PCG_REGISTRY['UniqueXshRs6432']
UniqueXshRr6432 = PCG_REGISTRY['UniqueXshRr6432']
SetseqXshRs6432 = PCG_REGISTRY['SetseqXshRs6432']
SetseqXshRr6432 = PCG_REGISTRY['SetseqXshRr6432']
McgXshRs6432 = PCG_REGISTRY['McgXshRs6432']
McgXshRr6432 = PCG_REGISTRY['McgXshRr6432']

OneseqXshRs12832 = PCG_REGISTRY['OneseqXshRs12832']
OneseqXshRr12832 = PCG_REGISTRY['OneseqXshRr12832']
UniqueXshRs12832 = PCG_REGISTRY['UniqueXshRs12832']
UniqueXshRr12832 = PCG_REGISTRY['UniqueXshRr12832']
SetseqXshRs12832 = PCG_REGISTRY['SetseqXshRs12832']
SetseqXshRr12832 = PCG_REGISTRY['SetseqXshRr12832']
McgXshRs12832 = PCG_REGISTRY['McgXshRs12832']
McgXshRr12832 = PCG_REGISTRY['McgXshRr12832']

OneseqXshRs12864 = PCG_REGISTRY['OneseqXshRs12864']
OneseqXshRr12864 = PCG_REGISTRY['OneseqXshRr12864']
UniqueXshRs12864 = PCG_REGISTRY['UniqueXshRs12864']
UniqueXshRr12864 = PCG_REGISTRY['UniqueXshRr12864']
SetseqXshRs12864 = PCG_REGISTRY['SetseqXshRs12864']
SetseqXshRr12864 = PCG_REGISTRY['SetseqXshRr12864']
McgXshRs12864 = PCG_REGISTRY['McgXshRs12864']
McgXshRr12864 = PCG_REGISTRY['McgXshRr12864']

SetseqDXsM6432 = PCG_REGISTRY['SetseqDXsM6432']
SetseqDXsM12864 = PCG_REGISTRY['SetseqDXsM12864']

# 64 bits of state, 32 bit output, selectable stream
Pcg32 = SetseqXshRr6432
Pcg32Oneseq = OneseqXshRr6432
Pcg32Unique = UniqueXshRr6432
# MCG with the cheaper shift permutation: faster, weaker
Pcg32Fast = McgXshRs6432

# 128 bits of state, 32 bit output: longer period
Pcg32L = SetseqXshRr12832
Pcg32LOneseq = OneseqXshRr12832
Pcg32LUnique = UniqueXshRr12832
Pcg32LFast = McgXshRs12832

Pcg64 = SetseqXshRr12864
Pcg64Oneseq = OneseqXshRr12864
Pcg64Unique = UniqueXshRr12864
Pcg64Fast = McgXshRs12864
Pcg64Dxsm = SetseqDXsM12864
