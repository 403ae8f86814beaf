from __future__ import annotations

"""
Random-walk Metropolis-Hastings sampler for the logistic regression posterior.
"""

from typing import Callable

import numpy as np

from .chain import Chain, SamplerState
from .constants import N_SAMPLES, PRIOR_SD, PROPOSAL_SCALE, REPORT_EVERY
from .posterior import log_posterior
from .proposal import propose, proposal_covariance, proposal_factor, validate_covariance


class SamplerCorruptionError(RuntimeError):
    """The current chain state has a non-finite log posterior."""


class MetropolisHastingsSampler:
    """
    Metropolis-Hastings with a fixed multivariate-normal random-walk proposal.

    The proposal covariance is proposal_scale * (X^T X)^-1, computed once.
    The chain is seeded with an externally supplied vector (typically the MLE)
    and holds n_samples draws including that seed.
    """

    def __init__(
        self,
        n_samples: int = N_SAMPLES,
        prior_sd: float = PRIOR_SD,
        proposal_scale: float = PROPOSAL_SCALE,
        report_every: int = REPORT_EVERY,
        random_state: int | np.random.SeedSequence | np.random.Generator | None = None,
        verbose: bool = False,
    ):
        self.n_samples = n_samples
        self.prior_sd = prior_sd
        self.proposal_scale = proposal_scale
        self.report_every = report_every
        self.random_state = random_state
        self.verbose = verbose
        self.state_ = SamplerState.INITIALIZING
        self.chain_: Chain | None = None
        self.proposal_cov_: np.ndarray | None = None
        self.n_accepted_: int = 0
        self.n_iter_: int = 0
        self.cancelled_: bool = False

    def _validate(self, X, y, beta_init):
        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y)
        beta_arr = np.asarray(beta_init, dtype=float)

        if X_arr.ndim != 2:
            raise ValueError(f"X must be 2-dimensional, got {X_arr.ndim} dimension(s)")
        if y_arr.ndim != 1:
            raise ValueError(f"y must be 1-dimensional, got {y_arr.ndim} dimension(s)")
        if X_arr.shape[0] != y_arr.shape[0]:
            raise ValueError(
                f"X has {X_arr.shape[0]} rows but y has {y_arr.shape[0]} entries"
            )
        if not np.all(np.isin(y_arr, [0, 1])):
            raise ValueError("y must only contain 0/1 labels")
        if not np.all(np.isfinite(X_arr)):
            raise ValueError("X contains non-finite values")
        if self.n_samples < 2:
            raise ValueError(f"n_samples must be at least 2, got {self.n_samples}")
        if beta_arr.shape != (X_arr.shape[1],):
            raise ValueError(
                f"beta_init must have length {X_arr.shape[1]} (columns of X), "
                f"got shape {beta_arr.shape}"
            )
        if not np.all(np.isfinite(beta_arr)):
            raise ValueError("beta_init contains non-finite values")
        if self.prior_sd <= 0:
            raise ValueError(f"prior_sd must be positive, got {self.prior_sd}")
        return X_arr, y_arr.astype(int), beta_arr

    def sample(
        self,
        X,
        y,
        beta_init,
        proposal_cov=None,
        should_stop: Callable[[], bool] | None = None,
    ):
        """
        Run the chain. Returns self; results live in the trailing-underscore attributes.

        proposal_cov overrides the (X^T X)^-1 derived covariance; a supplied
        matrix only needs to be positive semi-definite. should_stop is polled
        once per iteration and ends the run early when it returns True.
        """
        if self.state_ is not SamplerState.INITIALIZING:
            raise RuntimeError("Sampler has already run; create a new instance to sample again.")

        X_arr, y_arr, beta_arr = self._validate(X, y, beta_init)
        dim = X_arr.shape[1]
        if proposal_cov is None:
            cov = proposal_covariance(X_arr, scale=self.proposal_scale)
        else:
            cov = validate_covariance(proposal_cov, dim, allow_singular=True)

        if not np.isfinite(log_posterior(beta_arr, X_arr, y_arr, self.prior_sd)):
            raise SamplerCorruptionError("Initial coefficients have a non-finite log posterior.")

        self.proposal_cov_ = cov
        factor = proposal_factor(cov)
        self.chain_ = Chain(self.n_samples, dim)
        self.chain_.append(beta_arr)
        self.n_accepted_ = 0
        self.n_iter_ = 0
        self.cancelled_ = False
        rng = np.random.default_rng(self.random_state)

        self.state_ = SamplerState.SAMPLING
        current = beta_arr
        for step in range(1, self.n_samples):
            if should_stop is not None and should_stop():
                self.cancelled_ = True
                if self.verbose:
                    print(f"[MH] cancelled at iter={step}")
                break

            beta_star = propose(current, factor, rng)
            new_post = log_posterior(beta_star, X_arr, y_arr, self.prior_sd)
            old_post = log_posterior(current, X_arr, y_arr, self.prior_sd)
            if not np.isfinite(old_post):
                raise SamplerCorruptionError(
                    f"Current state has a non-finite log posterior at iter={step}."
                )
            # 1 - U lies in (0, 1], so its log is finite
            log_u = np.log1p(-rng.random())

            if np.isfinite(new_post) and log_u <= new_post - old_post:
                current = beta_star
                self.n_accepted_ += 1
            self.chain_.append(current)
            self.n_iter_ = step

            if self.verbose and self.report_every and step % self.report_every == 0:
                print(f"[MH] iter={step}, acceptance={self.n_accepted_ / step:.3f}")

        self.chain_.freeze()
        self.state_ = SamplerState.DONE
        return self

    def _check_done(self):
        if self.state_ is not SamplerState.DONE or self.chain_ is None:
            raise RuntimeError("Sampler has not been run.")

    @property
    def samples_(self) -> np.ndarray:
        """Read-only (n_draws, P+1) array of the chain."""
        self._check_done()
        return self.chain_.to_array()

    @property
    def acceptance_rate_(self) -> float:
        self._check_done()
        n_proposals = len(self.chain_) - 1
        return self.n_accepted_ / n_proposals if n_proposals else float("nan")
