import math

import numpy as np

# Pre-compute bit count table for fast vectorized counting
BIT_COUNTS = np.array([bin(x).count('1') for x in range(256)], dtype=np.uint8)


def bit_balance(data):
    """
    Fraction of one bits in a byte string. A good generator stays close to 0.5.
    """
    arr = np.frombuffer(bytes(data), dtype=np.uint8)
    if len(arr) == 0:
        return 0.5
    ones = int(BIT_COUNTS[arr].sum(dtype=np.int64))
    return ones / (len(arr) * 8)


def byte_counts(data):
    arr = np.frombuffer(bytes(data), dtype=np.uint8)
    return np.bincount(arr, minlength=256)


def byte_entropy(data):
    """
    Shannon entropy of the byte histogram, in bits per byte (8.0 is ideal).
    """
    counts = byte_counts(data)
    total = counts.sum()
    if total == 0:
        return 0.0
    p = counts[counts > 0] / total
    return float(-(p * np.log2(p)).sum())


def chi_square(counts, expected=None):
    """
    Pearson chi-square statistic of observed bucket counts against a uniform
    (or the given) expectation. Returns (statistic, degrees_of_freedom).
    """
    observed = np.asarray(counts, dtype=np.float64)
    if expected is None:
        expected = np.full_like(observed, observed.sum() / len(observed))
    else:
        expected = np.asarray(expected, dtype=np.float64)
    stat = float(((observed - expected) ** 2 / expected).sum())
    return stat, len(observed) - 1


def chi_square_critical(dof, z=3.0):
    """
    Approximate upper critical value of the chi-square distribution, z standard
    deviations out (Wilson-Hilferty). z=3.0 is roughly p=0.00135.
    """
    k = 2.0 / (9.0 * dof)
    return dof * (1.0 - k + z * math.sqrt(k)) ** 3
