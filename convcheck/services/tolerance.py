from __future__ import annotations

from convcheck.models.constants import DEFAULT_ABS_EPSILON, DEFAULT_REL_EPSILON


def equivalent(
    actual: float,
    expected: float,
    abs_eps: float = DEFAULT_ABS_EPSILON,
    rel_eps: float = DEFAULT_REL_EPSILON,
) -> bool:
    """Absolute OR relative closeness.

    Absolute tolerance alone fails on large displayed amounts and relative
    tolerance alone is unstable near zero, so either criterion is accepted.
    """
    if actual == expected:
        return True
    diff = abs(actual - expected)
    if diff < abs_eps:
        return True
    return diff / max(abs(actual), abs(expected)) < rel_eps
