"""
Wrapping integer arithmetic for the fixed widths PCG works with.

Python integers never overflow, so every operation here masks its result
back to the requested width. That gives the same modular arithmetic over
2**bits that a fixed-width machine integer would, including 128 bits.
The engine step, jump-ahead, output permutations and extension arrays all
do their arithmetic through these functions.
"""
import numpy as np

from pcgrand.errors import WidthError

WIDTHS = (8, 16, 32, 64, 128)

_MASKS = {bits: (1 << bits) - 1 for bits in WIDTHS}

_DTYPES = {
    8: np.uint8,
    16: np.uint16,
    32: np.uint32,
    64: np.uint64,
    128: object,  # numpy has no 128 bit integer type
}


def check_width(bits):
    if bits not in _MASKS:
        raise WidthError(f"Unsupported integer width: {bits} (expected one of {WIDTHS})")
    return bits


def mask(bits):
    return _MASKS[check_width(bits)]


def byte_width(bits):
    return check_width(bits) // 8


def numpy_dtype(bits):
    """
    The numpy dtype able to hold a value of the given width.
    128 bit values fall back to Python ints in an object array.
    """
    return _DTYPES[check_width(bits)]


def wrapping_add(a, b, bits):
    return (a + b) & _MASKS[bits]


def wrapping_mul(a, b, bits):
    return (a * b) & _MASKS[bits]


def xor(a, b, bits):
    return (a ^ b) & _MASKS[bits]


def shift_left(x, n, bits):
    if n >= bits:
        return 0
    return (x << n) & _MASKS[bits]


def shift_right(x, n, bits):
    # Logical shift: values are always stored unsigned
    if n >= bits:
        return 0
    return (x & _MASKS[bits]) >> n


def rotate_right(x, n, bits):
    n %= bits
    return shift_right(x, n, bits) | shift_left(x, bits - n, bits)


def shrink(x, bits):
    """
    Narrows a value to a smaller width by keeping the low order bits.
    """
    return x & _MASKS[bits]
