"""
Stream (increment) strategies for the PCG engine.

Every strategy is bound to the state width of its generator. Streams that
take part in the period (Oneseq, Setseq, Unique) always hand out an odd
increment. The Mcg strategy always returns zero, which turns the LCG into a
multiplicative generator with a shorter period.
"""
import itertools
import threading

from pcgrand.errors import StreamNotSettableError
from pcgrand.numops import check_width, mask

ONESEQ_INCREMENTS = {
    8: 77,
    16: 47989,
    32: 2_891_336_453,
    64: 1_442_695_040_888_963_407,
    128: (6_364_136_223_846_793_005 << 64) + 1_442_695_040_888_963_407,
}


class Stream:
    tag = None

    def __init__(self, bits):
        self.bits = check_width(bits)

    @classmethod
    def build(cls, bits, stream_value=None):
        """
        Creates the strategy from the stream half of a seed.
        Only settable streams use the value.
        """
        return cls(bits)

    def increment(self):
        raise NotImplementedError

    def set_stream(self, stream_value):
        raise StreamNotSettableError(
            f"Stream setting is not supported by {type(self).__name__}"
        )

    def clone(self):
        return type(self)(self.bits)

    def __repr__(self):
        return f"{type(self).__name__}(bits={self.bits}, increment={self.increment():#x})"


class OneSeqStream(Stream):
    """
    One fixed, known good sequence.
    """
    tag = 'Oneseq'

    def increment(self):
        return ONESEQ_INCREMENTS[self.bits]


class NoSeqStream(Stream):
    """
    No increment at all; only meant to be paired with McgMultiplier.
    """
    tag = 'Mcg'

    def increment(self):
        return 0


class SpecificSeqStream(Stream):
    """
    A stream that can be chosen by the caller. The low bit is always forced
    to 1 so the LCG keeps its full period. Until it is set, it behaves
    exactly like OneSeqStream.
    """
    tag = 'Setseq'

    def __init__(self, bits, stream_value=None):
        super().__init__(bits)
        self._inc = ONESEQ_INCREMENTS[self.bits]
        if stream_value is not None:
            self.set_stream(stream_value)

    @classmethod
    def build(cls, bits, stream_value=None):
        return cls(bits, stream_value)

    def increment(self):
        return self._inc

    def set_stream(self, stream_value):
        self._inc = (stream_value | 1) & mask(self.bits)

    def clone(self):
        other = type(self)(self.bits)
        other._inc = self._inc
        return other


# Process wide source of unique stream ids
_unique_ids = itertools.count()
_unique_lock = threading.Lock()


def next_unique_id():
    with _unique_lock:
        return next(_unique_ids)


class UniqueSeqStream(Stream):
    """
    Gives every instance its own stream without the caller picking one.

    The increment is derived from a process wide counter (or an id supplied
    by the caller), so two generators seeded identically still produce
    different sequences. Ids are handed out in construction order, which
    keeps a program's output reproducible from run to run as long as it
    creates its generators in the same order.
    """
    tag = 'Unique'

    def __init__(self, bits, instance_id=None):
        super().__init__(bits)
        if instance_id is None:
            instance_id = next_unique_id()
        self.instance_id = instance_id
        self._inc = ((instance_id << 1) | 1) & mask(self.bits)

    def increment(self):
        return self._inc

    def clone(self):
        # A copy is a new instance and therefore gets a new stream
        return type(self)(self.bits)


STREAM_TYPES = {
    cls.tag: cls
    for cls in (OneSeqStream, NoSeqStream, SpecificSeqStream, UniqueSeqStream)
}
