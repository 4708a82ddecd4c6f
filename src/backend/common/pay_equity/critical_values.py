from __future__ import annotations

from bisect import bisect_left
from types import MappingProxyType
from typing import Mapping

# Two-tailed Student's t critical values at the 0.05 significance level, keyed by degrees of freedom.
T_CRITICAL_VALUES_05: Mapping[int, float] = MappingProxyType(
    {
        1: 12.706,
        2: 4.303,
        3: 3.182,
        4: 2.776,
        5: 2.571,
        6: 2.447,
        7: 2.365,
        8: 2.306,
        9: 2.262,
        10: 2.228,
        11: 2.201,
        12: 2.179,
        13: 2.160,
        14: 2.145,
        15: 2.131,
        16: 2.120,
        17: 2.110,
        18: 2.101,
        19: 2.093,
        20: 2.086,
        21: 2.080,
        22: 2.074,
        23: 2.069,
        24: 2.064,
        25: 2.060,
        26: 2.056,
        27: 2.052,
        28: 2.048,
        29: 2.045,
        30: 2.042,
        40: 2.021,
        50: 2.009,
        60: 2.000,
        80: 1.990,
        100: 1.984,
        120: 1.980,
    }
)

ASYMPTOTIC_CRITICAL_VALUE = 1.960

_SORTED_DF = tuple(sorted(T_CRITICAL_VALUES_05))


def critical_value(df: float) -> float:
    """Two-tailed 0.05 critical value for `df` degrees of freedom.

    Listed df are returned as-is, df between listed entries are linearly
    interpolated, df above the table use the normal-distribution value and
    df below 1 use the df=1 entry.
    """
    if df > _SORTED_DF[-1]:
        return ASYMPTOTIC_CRITICAL_VALUE
    if df <= _SORTED_DF[0]:
        return T_CRITICAL_VALUES_05[_SORTED_DF[0]]

    idx = bisect_left(_SORTED_DF, df)
    upper_df = _SORTED_DF[idx]
    if upper_df == df:
        return T_CRITICAL_VALUES_05[upper_df]

    lower_df = _SORTED_DF[idx - 1]
    lower_value = T_CRITICAL_VALUES_05[lower_df]
    upper_value = T_CRITICAL_VALUES_05[upper_df]
    fraction = (df - lower_df) / (upper_df - lower_df)
    return lower_value + fraction * (upper_value - lower_value)
