from __future__ import annotations

"""
Posterior-predictive simulation for a single new wine.
"""

from typing import Iterable, Iterator

import numpy as np
import pandas as pd
from scipy.special import expit

from .chain import Chain


def _as_draws(chain) -> np.ndarray:
    draws = chain.to_array() if isinstance(chain, Chain) else np.asarray(chain, dtype=float)
    if draws.ndim != 2:
        raise ValueError(f"Chain must be 2-dimensional (draws x coefficients), got {draws.ndim}")
    return draws


def _retained(chain, x_new, burn_in: int) -> tuple[np.ndarray, np.ndarray]:
    draws = _as_draws(chain)
    x_arr = np.asarray(x_new, dtype=float)
    if x_arr.shape != (draws.shape[1],):
        raise ValueError(
            f"x_new must have length {draws.shape[1]} (intercept + covariates), got shape {x_arr.shape}"
        )
    if not np.all(np.isfinite(x_arr)):
        raise ValueError("x_new contains non-finite values")
    if not 0 <= burn_in < len(draws):
        raise ValueError(
            f"burn_in must be in [0, {len(draws)}) for a chain of {len(draws)} draws, got {burn_in}"
        )
    return draws[burn_in:], x_arr


def predictive_probabilities(chain, x_new, burn_in: int = 0) -> np.ndarray:
    """P(y=1 | beta, x_new) for every retained draw."""
    draws, x_arr = _retained(chain, x_new, burn_in)
    return expit(draws @ x_arr)


def _simulate(draws: np.ndarray, x_new: np.ndarray, rng: np.random.Generator) -> Iterator[int]:
    for beta in draws:
        p = expit(float(beta @ x_new))
        yield int(rng.random() < p)


def predict(chain, x_new, rng=None, burn_in: int = 0) -> Iterator[int]:
    """
    Lazily draw one Bernoulli outcome per retained chain sample.

    Inputs are validated before the generator is returned. rng may be a seed
    or a numpy Generator; passing the same seed yields the same sequence.
    """
    draws, x_arr = _retained(chain, x_new, burn_in)
    return _simulate(draws, x_arr, np.random.default_rng(rng))


def predictive_frequencies(draws: Iterable[int]) -> pd.Series:
    """Counts of 0 and 1 outcomes, both always present."""
    counts = pd.Series(list(draws), dtype=int).value_counts()
    return counts.reindex([0, 1], fill_value=0).astype(int)
