from __future__ import annotations

"""
Unnormalized log posterior for Bayesian logistic regression with an
independent zero-mean Gaussian prior on every coefficient.
"""

import numpy as np
from scipy.special import log_expit
from scipy.stats import norm

from .constants import PRIOR_SD


def log_likelihood(beta, X, y) -> float:
    """
    Bernoulli log-likelihood of y under P(y=1) = expit(X @ beta).

    Returns -inf when the linear predictor is not finite.
    """
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y)
    with np.errstate(over="ignore", invalid="ignore"):
        eta = X_arr @ np.asarray(beta, dtype=float)
    if not np.all(np.isfinite(eta)):
        return -np.inf

    # log P(y=0) comes from log_expit(-eta), never from log(1 - exp(logp))
    logp = log_expit(eta)
    logq = log_expit(-eta)
    positive = y_arr == 1
    return float(np.sum(logp[positive]) + np.sum(logq[~positive]))


def log_prior(beta, prior_sd: float = PRIOR_SD) -> float:
    """Sum of N(0, prior_sd) log densities over the coefficients."""
    if prior_sd <= 0:
        raise ValueError(f"prior_sd must be positive, got {prior_sd}")
    return float(np.sum(norm.logpdf(np.asarray(beta, dtype=float), loc=0.0, scale=prior_sd)))


def log_posterior(beta, X, y, prior_sd: float = PRIOR_SD) -> float:
    """
    Log-likelihood plus log-prior, up to the normalizing constant.

    Degenerate input (non-finite coefficients, overflowing linear predictor)
    yields -inf instead of NaN, so a sampler can reject it.
    """
    beta_arr = np.asarray(beta, dtype=float)
    if not np.all(np.isfinite(beta_arr)):
        return -np.inf

    value = log_likelihood(beta_arr, X, y) + log_prior(beta_arr, prior_sd)
    if not np.isfinite(value):
        return -np.inf
    return value
