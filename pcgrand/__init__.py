"""PCG family of pseudo-random number generators."""

from .engine import (
    PCG_REGISTRY,
    Pcg32,
    Pcg32Fast,
    Pcg32L,
    Pcg32LFast,
    Pcg32LOneseq,
    Pcg32LUnique,
    Pcg32Oneseq,
    Pcg32Unique,
    Pcg64,
    Pcg64Dxsm,
    Pcg64Fast,
    Pcg64Oneseq,
    Pcg64Unique,
    PcgEngine,
    get_generator,
    make_pcg,
)
from .errors import (
    ExtensionSizeError,
    PcgError,
    SeedSizeError,
    StateValidationError,
    StreamNotSettableError,
    UnknownAlgorithmError,
    UnsupportedOperationError,
    WidthError,
)
from .extension import ExtPcg, ExtSize, Pcg32Ext, Pcg32LExt, Pcg64Ext
from .prngs import PRNG, Pcg32Basic
from .seeds import PcgSeeder, decode_seed, encode_seed

__all__ = [
    "PCG_REGISTRY",
    "PRNG",
    "Pcg32",
    "Pcg32Basic",
    "Pcg32Ext",
    "Pcg32Fast",
    "Pcg32L",
    "Pcg32LExt",
    "Pcg32LFast",
    "Pcg32LOneseq",
    "Pcg32LUnique",
    "Pcg32Oneseq",
    "Pcg32Unique",
    "Pcg64",
    "Pcg64Dxsm",
    "Pcg64Ext",
    "Pcg64Fast",
    "Pcg64Oneseq",
    "Pcg64Unique",
    "PcgEngine",
    "PcgSeeder",
    "ExtPcg",
    "ExtSize",
    "ExtensionSizeError",
    "PcgError",
    "SeedSizeError",
    "StateValidationError",
    "StreamNotSettableError",
    "UnknownAlgorithmError",
    "UnsupportedOperationError",
    "WidthError",
    "decode_seed",
    "encode_seed",
    "get_generator",
    "make_pcg",
]
