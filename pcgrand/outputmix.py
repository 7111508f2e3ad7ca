"""
Output permutations for the PCG engine.

After the LCG state is advanced, the *previous* state is run through one of
these functions to produce the output. The permutation hides the linear
structure of the LCG; the low bits of an LCG are especially weak, so all of
them draw the output from the high bits of the state.

Each mixin's bind() precomputes the shift constants for one
(state width, output width) pair and returns a plain function
output(state, increment, multiplier) -> int.
"""
from pcgrand.errors import WidthError
from pcgrand.numops import check_width, rotate_right, shift_right, shrink, wrapping_mul, xor


def _check_pair(itype_bits, xtype_bits):
    check_width(itype_bits)
    check_width(xtype_bits)
    if xtype_bits > itype_bits:
        raise WidthError(
            f"Output width {xtype_bits} is wider than the state width {itype_bits}"
        )


class OutputMixin:
    tag = None

    @classmethod
    def bind(cls, itype_bits, xtype_bits):
        raise NotImplementedError

    @classmethod
    def output(cls, state, increment, multiplier, itype_bits, xtype_bits):
        """
        Convenience form of bind() for one-off calls.
        """
        return cls.bind(itype_bits, xtype_bits)(state, increment, multiplier)


class XshRsMixin(OutputMixin):
    """
    High xorshift followed by a random (state dependent) right shift.
    """
    tag = 'XshRs'

    @staticmethod
    def opbits(sparebits):
        if sparebits >= 64 + 5:
            return 5
        if sparebits >= 32 + 4:
            return 4
        if sparebits >= 16 + 3:
            return 3
        if sparebits >= 4 + 2:
            return 2
        if sparebits > 1:
            return 1
        return 0

    @classmethod
    def bind(cls, itype_bits, xtype_bits):
        _check_pair(itype_bits, xtype_bits)
        sparebits = itype_bits - xtype_bits
        opbits = cls.opbits(sparebits)
        opmask = (1 << opbits) - 1
        maxrandshift = opmask
        topspare = opbits
        bottomspare = sparebits - topspare
        xshift = topspare + (xtype_bits + maxrandshift) // 2
        base_shift = bottomspare - maxrandshift
        top_shift = itype_bits - opbits

        def output(state, increment, multiplier):
            if opbits:
                rshift = (state >> top_shift) & opmask
            else:
                rshift = 0
            state ^= shift_right(state, xshift, itype_bits)
            return shrink(state >> (base_shift + rshift), xtype_bits)

        return output


class XshRrMixin(OutputMixin):
    """
    High xorshift followed by a random rotation of the output.
    """
    tag = 'XshRr'

    @staticmethod
    def wanted_opbits(xtype_bits):
        if xtype_bits >= 128:
            return 7
        if xtype_bits >= 64:
            return 6
        if xtype_bits >= 32:
            return 5
        if xtype_bits >= 16:
            return 4
        return 3

    @classmethod
    def bind(cls, itype_bits, xtype_bits):
        _check_pair(itype_bits, xtype_bits)
        sparebits = itype_bits - xtype_bits
        wanted = cls.wanted_opbits(xtype_bits)
        opbits = min(sparebits, wanted)
        amplifier = wanted - opbits
        opmask = (1 << opbits) - 1
        topspare = opbits
        bottomspare = sparebits - topspare
        xshift = (topspare + xtype_bits) // 2
        top_shift = itype_bits - opbits

        def output(state, increment, multiplier):
            if opbits:
                rot = (state >> top_shift) & opmask
            else:
                rot = 0
            amprot = (rot << amplifier) & opmask
            state ^= shift_right(state, xshift, itype_bits)
            return rotate_right(shrink(state >> bottomspare, xtype_bits), amprot, xtype_bits)

        return output


class DXsMMixin(OutputMixin):
    """
    Double xorshift multiply. Mixes the high half of the state with the
    (forced odd) low half, using the LCG multiplier narrowed to the output
    width.
    """
    tag = 'DXsM'

    @classmethod
    def bind(cls, itype_bits, xtype_bits):
        _check_pair(itype_bits, xtype_bits)
        hi_shift = itype_bits - xtype_bits
        first_xshift = xtype_bits // 2
        second_xshift = 3 * xtype_bits // 4

        def output(state, increment, multiplier):
            hi = shrink(state >> hi_shift, xtype_bits)
            lo = shrink(state, xtype_bits) | 1
            hi = xor(hi, hi >> first_xshift, xtype_bits)
            hi = wrapping_mul(hi, shrink(multiplier, xtype_bits), xtype_bits)
            hi = xor(hi, hi >> second_xshift, xtype_bits)
            return wrapping_mul(hi, lo, xtype_bits)

        return output


OUTPUT_TYPES = {cls.tag: cls for cls in (XshRsMixin, XshRrMixin, DXsMMixin)}
