from __future__ import annotations

"""
Frequentist maximum-likelihood fit that seeds the chain and provides the
reference lines for trace plots.
"""

import numpy as np
from scipy.special import expit
from sklearn.linear_model import LogisticRegression


def fit_mle(X, y, max_iter: int = 5000) -> np.ndarray:
    """
    Unpenalized logistic regression on a design matrix that already holds
    the intercept column. Returns the coefficient vector in column order.
    """
    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y, dtype=int)
    model = LogisticRegression(penalty=None, fit_intercept=False, max_iter=max_iter)
    model.fit(X_arr, y_arr)
    return model.coef_[0].copy()


def mle_standard_errors(X, beta) -> np.ndarray:
    """Wald standard errors from the inverse observed information (X^T W X)^-1."""
    X_arr = np.asarray(X, dtype=float)
    probs = expit(X_arr @ np.asarray(beta, dtype=float))
    weights = probs * (1.0 - probs)
    information = X_arr.T @ (X_arr * weights[:, None])
    if np.linalg.matrix_rank(information) < information.shape[0]:
        raise ValueError("Fisher information is singular; standard errors are undefined")
    cov = np.linalg.inv(information)
    return np.sqrt(np.diag(cov))
