import numpy as np
from typing import Callable, Optional

Generator = Callable[[], float]


def constant(value: float) -> Generator:
    """Always returns ``value``"""
    return lambda: value


def counter_sequence(modulus: int = 12, stride: int = 13) -> Generator:
    """Deterministic pseudo-random values in (0, 1)

    The k-th call returns ``(1 + (stride * k) % modulus) / stride``.
    Reproducible, not uniform, and independent of any numpy random state.
    """
    count = 0

    def generate() -> float:
        nonlocal count
        count += 1
        return (1.0 + (stride * count) % modulus) / stride

    return generate


def uniform(low: float = -1.0, high: float = 1.0, seed: Optional[int] = None) -> Generator:
    """Uniform values in [low, high)"""
    rng = np.random.default_rng(seed)
    return lambda: float(rng.uniform(low, high))


def he_normal(fan_in: int, seed: Optional[int] = None) -> Generator:
    """He initialization"""
    std = np.sqrt(2.0 / fan_in) if fan_in > 0 else 0.0
    rng = np.random.default_rng(seed)
    return lambda: float(rng.standard_normal() * std)


def xavier_uniform(fan_in: int, fan_out: int, seed: Optional[int] = None) -> Generator:
    """Xavier / Glorot uniform initialization"""
    fan = fan_in + fan_out
    limit = np.sqrt(6.0 / fan) if fan > 0 else 0.0
    return uniform(-limit, limit, seed)


def get_initializer(name: str, fan_in: int = 0, fan_out: int = 0,
                    seed: Optional[int] = None, value: float = 0.0) -> Generator:
    """Get weight generator by name"""
    if name == 'zeros':
        return constant(0.0)
    if name == 'constant':
        return constant(value)
    if name == 'counter':
        return counter_sequence()
    if name == 'uniform':
        return uniform(seed=seed)
    if name == 'he':
        return he_normal(fan_in, seed)
    if name == 'xavier':
        return xavier_uniform(fan_in, fan_out, seed)

    raise ValueError(f"Unknown initializer: {name}")
