"""
LCG multipliers, taken from the C++ implementation of PCG.
"""
from pcgrand.numops import check_width


class Multiplier:
    tag = None
    table = {}

    @classmethod
    def multiplier(cls, bits):
        return cls.table[check_width(bits)]


class DefaultMultiplier(Multiplier):
    """
    General purpose "good" multiplier for the full LCG.
    """
    tag = 'Default'
    table = {
        8: 141,
        16: 12829,
        32: 747_796_405,
        64: 6_364_136_223_846_793_005,
        # (2549297995355413924 << 64) + 4865540595714422341
        128: 47_026_247_687_942_121_848_144_207_491_837_523_525,
    }


class McgMultiplier(Multiplier):
    """
    Multiplier tuned for the zero increment (MCG) variant.
    """
    tag = 'Mcg'
    table = {
        8: 217,
        16: 62169,
        32: 277_803_737,
        64: 12_605_985_483_714_917_081,
        # (17766728186571221404 << 64) + 12605985483714917081
        128: 327_738_287_884_841_127_335_028_083_622_016_905_945,
    }
