from __future__ import annotations

"""
Figures for the sampler output: coefficient traces and the predictive bar chart.
"""

import math
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


def plot_traces(
    samples: np.ndarray,
    feature_names: list[str],
    filename: Path,
    mle: np.ndarray | None = None,
    burn_in: int = 0,
    ncols: int = 3,
):
    """One trace panel per coefficient, with the MLE as a horizontal line."""
    draws = np.asarray(samples, dtype=float)
    n_coef = draws.shape[1]
    nrows = math.ceil(n_coef / ncols)

    fig, axes = plt.subplots(nrows, ncols, figsize=(4 * ncols, 2.5 * nrows), squeeze=False)
    for idx, ax in enumerate(axes.flat):
        if idx >= n_coef:
            ax.axis("off")
            continue
        ax.plot(draws[:, idx], lw=0.5, color="steelblue")
        if mle is not None:
            ax.axhline(mle[idx], color="darkorange", lw=1.5, linestyle="--", label="MLE")
        if burn_in:
            ax.axvline(burn_in, color="grey", lw=1, linestyle=":")
        ax.set_title(feature_names[idx], fontsize=9)
        ax.set_xlabel("Iteration", fontsize=8)

    fig.suptitle("MH traces of the logistic regression coefficients")
    fig.tight_layout()
    fig.savefig(filename)
    plt.close(fig)


def plot_predictive_frequencies(freqs: pd.Series, filename: Path):
    """Bar chart of posterior-predictive draw counts for the new wine."""
    plt.figure(figsize=(6, 5))
    labels = [f"{'good' if k == 1 else 'not good'} ({k})" for k in freqs.index]
    plt.bar(labels, freqs.to_numpy(), color=["indianred", "seagreen"][: len(freqs)])
    plt.ylabel("Draws")
    plt.title("Posterior predictive draws for the new wine")
    plt.grid(axis="y", linestyle="--", alpha=0.7)
    plt.tight_layout()
    plt.savefig(filename)
    plt.close()
