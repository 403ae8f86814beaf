from __future__ import annotations

"""
Symmetric multivariate-normal random-walk proposal for the MH sampler.
"""

import numpy as np

from .constants import PROPOSAL_SCALE


def validate_covariance(cov, dim: int, allow_singular: bool = False) -> np.ndarray:
    """
    Check that cov is a finite, symmetric (dim, dim) matrix.

    Positive definiteness is required unless allow_singular is set, in which
    case positive semi-definite matrices (the zero matrix included) pass.
    """
    cov_arr = np.asarray(cov, dtype=float)
    if cov_arr.shape != (dim, dim):
        raise ValueError(
            f"Proposal covariance must have shape ({dim}, {dim}), got {cov_arr.shape}"
        )
    if not np.all(np.isfinite(cov_arr)):
        raise ValueError("Proposal covariance contains non-finite entries")
    if not np.allclose(cov_arr, cov_arr.T):
        raise ValueError("Proposal covariance is not symmetric")

    if allow_singular:
        min_eig = float(np.linalg.eigvalsh(cov_arr).min())
        tol = 1e-10 * max(1.0, float(np.abs(cov_arr).max()))
        if min_eig < -tol:
            raise ValueError(
                f"Proposal covariance is not positive semi-definite (min eigenvalue {min_eig:.3e})"
            )
    else:
        try:
            np.linalg.cholesky(cov_arr)
        except np.linalg.LinAlgError as exc:
            raise ValueError("Proposal covariance is not positive definite") from exc
    return cov_arr


def proposal_covariance(X, scale: float = PROPOSAL_SCALE) -> np.ndarray:
    """Return scale * (X^T X)^-1, the fixed covariance of the random walk."""
    if scale <= 0:
        raise ValueError(f"Proposal scale must be positive, got {scale}")
    X_arr = np.asarray(X, dtype=float)
    gram = X_arr.T @ X_arr
    if np.linalg.matrix_rank(X_arr) < X_arr.shape[1]:
        raise ValueError("X^T X is singular; the design matrix is rank deficient")
    gram_inv = np.linalg.solve(gram, np.eye(gram.shape[0]))

    cov = scale * gram_inv
    cov = 0.5 * (cov + cov.T)
    return validate_covariance(cov, gram.shape[0])


def proposal_factor(cov) -> np.ndarray:
    """
    Return L with L @ L.T == cov, computed once per run.

    Cholesky for positive definite matrices; positive semi-definite ones (the
    zero matrix included) fall back to an eigendecomposition.
    """
    cov_arr = np.asarray(cov, dtype=float)
    try:
        return np.linalg.cholesky(cov_arr)
    except np.linalg.LinAlgError:
        eigvals, eigvecs = np.linalg.eigh(cov_arr)
        return eigvecs * np.sqrt(np.clip(eigvals, 0.0, None))


def propose(current, factor, rng: np.random.Generator) -> np.ndarray:
    """Draw one candidate from N(current, factor @ factor.T)."""
    current_arr = np.asarray(current, dtype=float)
    return current_arr + factor @ rng.standard_normal(current_arr.shape[0])
