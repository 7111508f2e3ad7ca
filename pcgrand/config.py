# Configuration for pcgrand

# Seeds used by new_unseeded(), as (state, stream) per state width.
# These values were chosen at random once and are public; they are NOT entropy.
DEFAULT_SEEDS = {
    8: (0xE1, 0xB3),
    16: (0xAA19, 0x4FD8),
    32: (0x308A_20A0, 0xD133_51F1),
    64: (0x1801_3CAD_3A48_3F72, 0x51DB_FCDA_0D6B_21D4),
    128: (0xECC1_C32B_E531_D51A_93DC_E189_F916_29F4,
          0xF1CB_2035_E14F_F74B_46EF_3505_C538_6547),
}

# Extension arrays must be a power of two between these sizes (inclusive)
MIN_EXT_SIZE = 2
MAX_EXT_SIZE = 1024

# Logging level used by the command line scripts
LOG_LEVEL = 'INFO'

# Number of draws timed per generator by run_benchmark.py
BENCH_DRAWS = 200_000

# Generators timed by run_benchmark.py (algorithm tags from PCG_REGISTRY)
BENCH_GENERATORS = [
    'SetseqXshRr6432',
    'OneseqXshRr6432',
    'McgXshRs6432',
    'SetseqXshRr12832',
    'SetseqXshRr12864',
    'SetseqDXsM12864',
]

# Equidistribution check: extension of 2**EQUIDIST_EXT_BITS slots,
# EQUIDIST_ROUNDS draws per slot
EQUIDIST_EXT_BITS = 5
EQUIDIST_ROUNDS = 10_000
