"""
Seed codec: turns a byte buffer into the (state, stream) pair a generator
is built from.

Layout: sizeof(Itype) bytes of state followed by sizeof(Itype) bytes of
stream, little endian. A 128 bit value is stored as two little endian
64 bit words, high word first.
"""
from pcgrand.config import DEFAULT_SEEDS
from pcgrand.errors import SeedSizeError
from pcgrand.numops import byte_width, check_width, mask


def read_value(buf, bits):
    if bits == 128:
        top = int.from_bytes(buf[:8], 'little')
        bottom = int.from_bytes(buf[8:16], 'little')
        return (top << 64) | bottom
    return int.from_bytes(buf[:byte_width(bits)], 'little')


def write_value(value, bits):
    value &= mask(bits)
    if bits == 128:
        top = value >> 64
        bottom = value & 0xFFFFFFFFFFFFFFFF
        return top.to_bytes(8, 'little') + bottom.to_bytes(8, 'little')
    return value.to_bytes(byte_width(bits), 'little')


def seed_size(bits):
    return 2 * byte_width(bits)


class PcgSeeder:
    """
    Reads width sized fields out of a seed buffer in order.
    """

    def __init__(self, data, bits):
        self.bits = check_width(bits)
        self.data = bytes(data)
        self.pos = 0

    @classmethod
    def seed_with_stream(cls, state, stream, bits):
        return cls(encode_seed(state, stream, bits), bits)

    @classmethod
    def seed(cls, state, bits):
        return cls.seed_with_stream(state, 0, bits)

    def remaining(self):
        return len(self.data) - self.pos

    def get(self):
        size = byte_width(self.bits)
        if size > self.remaining():
            raise SeedSizeError(
                f"Not enough bytes left in the seed: need {size}, "
                f"have {self.remaining()} (a {self.bits} bit generator "
                f"expects {seed_size(self.bits)} seed bytes)"
            )
        value = read_value(self.data[self.pos:self.pos + size], self.bits)
        self.pos += size
        return value


def encode_seed(state, stream, bits):
    return write_value(state, bits) + write_value(stream, bits)


def decode_seed(buf, bits):
    seeder = PcgSeeder(buf, bits)
    state = seeder.get()
    stream = seeder.get()
    return state, stream


def default_seed(bits):
    """
    The fixed seed used by new_unseeded().
    """
    state, stream = DEFAULT_SEEDS[check_width(bits)]
    return encode_seed(state, stream, bits)
