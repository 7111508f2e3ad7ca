"""
Many PCG32 generators stepped together with numpy.

Each lane is an independent SetseqXshRr6432 (Pcg32) generator with its own
state and stream. numpy uint64 arithmetic wraps mod 2**64 exactly like the
scalar engine, so lane i always produces what Pcg32 would for the same
state and stream.
"""
import numpy as np

from pcgrand.engine import Pcg32, lcg_jump
from pcgrand.multiplier import DefaultMultiplier
from pcgrand.outputmix import XshRrMixin

MULT = np.uint64(DefaultMultiplier.multiplier(64))

S18 = np.uint64(18)
S27 = np.uint64(27)
S59 = np.uint64(59)
U31 = np.uint32(31)
U32 = np.uint32(32)

_MASK64 = (1 << 64) - 1


def is_lane_compatible(cls):
    return (
        getattr(cls, "itype_bits", None) == 64
        and getattr(cls, "xtype_bits", None) == 32
        and getattr(cls, "output_type", None) is XshRrMixin
        and getattr(cls, "multiplier_type", None) is DefaultMultiplier
    )


class Pcg32Lanes:
    def __init__(self, states, streams):
        states = [int(s) & _MASK64 for s in states]
        incs = [(int(s) | 1) & _MASK64 for s in streams]
        if len(states) != len(incs):
            raise ValueError(
                f"Got {len(states)} states but {len(incs)} streams"
            )
        self.states = np.array(states, dtype=np.uint64)
        self.incs = np.array(incs, dtype=np.uint64)

    @classmethod
    def from_generators(cls, generators):
        """
        Lanes positioned where the given generators are. Only 64/32 XSH-RR
        generators with the default multiplier step the way a lane does.
        """
        generators = list(generators)
        for g in generators:
            if not is_lane_compatible(type(g)):
                raise TypeError(
                    f"{type(g).__name__} does not step like Pcg32 and cannot become a lane"
                )
        return cls([g.state for g in generators], [g.increment for g in generators])

    @classmethod
    def from_seed_range(cls, state, first_stream, n_lanes):
        """
        n_lanes generators sharing one state on consecutive odd streams.
        """
        streams = [(first_stream | 1) + 2 * i for i in range(n_lanes)]
        return cls([state] * n_lanes, streams)

    def __len__(self):
        return len(self.states)

    def lane(self, i):
        """
        A scalar Pcg32 positioned where lane i currently is.
        """
        return Pcg32(int(self.states[i]), int(self.incs[i]))

    def next_u32(self):
        old = self.states
        self.states = old * MULT + self.incs

        xorshifted = (((old >> S18) ^ old) >> S27).astype(np.uint32)
        rot = (old >> S59).astype(np.uint32)
        return (xorshifted >> rot) | (xorshifted << ((U32 - rot) & U31))

    def random_raw(self, size):
        """
        Returns a (size, lanes) array; column i is lane i's sequence.
        """
        out = np.empty((size, len(self)), dtype=np.uint32)
        for i in range(size):
            out[i] = self.next_u32()
        return out

    def advance(self, delta):
        # The additive part of the jump is linear in the increment, so one
        # jump computed for increment 1 serves every lane.
        acc_mult, acc_plus = lcg_jump(delta, int(MULT), 1, 64)
        self.states = self.states * np.uint64(acc_mult) + self.incs * np.uint64(acc_plus)
