"""
Bayesian logistic regression for wine quality, sampled with a hand-written
Metropolis-Hastings chain.

This package contains data preparation helpers, the maximum-likelihood seed,
the log posterior, the sampler and posterior-predictive simulation used by main.py.
"""

from .chain import Chain, SamplerState
from .constants import BURN_IN, N_SAMPLES, PRIOR_SD, PROPOSAL_SCALE, QUALITY_THRESHOLD
from .data_prep import build_design_matrix, build_new_observation, prepare_design_matrix
from .metrics import summarize_chain
from .mle import fit_mle, mle_standard_errors
from .posterior import log_likelihood, log_posterior, log_prior
from .predictive import predict, predictive_frequencies, predictive_probabilities
from .proposal import propose, proposal_covariance, proposal_factor, validate_covariance
from .sampler import MetropolisHastingsSampler, SamplerCorruptionError

__all__ = [
    "BURN_IN",
    "N_SAMPLES",
    "PRIOR_SD",
    "PROPOSAL_SCALE",
    "QUALITY_THRESHOLD",
    "Chain",
    "SamplerState",
    "build_design_matrix",
    "build_new_observation",
    "prepare_design_matrix",
    "summarize_chain",
    "fit_mle",
    "mle_standard_errors",
    "log_likelihood",
    "log_posterior",
    "log_prior",
    "predict",
    "predictive_frequencies",
    "predictive_probabilities",
    "propose",
    "proposal_covariance",
    "proposal_factor",
    "validate_covariance",
    "MetropolisHastingsSampler",
    "SamplerCorruptionError",
]
