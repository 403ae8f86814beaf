import sys
import os
from pathlib import Path

# Add parent directory to sys.path
sys.path.append(os.path.abspath(".."))

import numpy as np

from wine_mh import (
    BURN_IN,
    N_SAMPLES,
    MetropolisHastingsSampler,
    build_design_matrix,
    build_new_observation,
    fit_mle,
    predict,
    predictive_frequencies,
)
from wine_mh.plots import plot_predictive_frequencies, plot_traces

# Configuration
CSV_PATH = Path("../data/winequality-red.csv")
RANDOM_STATE = 42
# Covariates of the wine whose quality we simulate; the rest stay at their mean.
NEW_WINE = {"alcohol": 12.0, "volatile_acidity": 0.4, "sulphates": 0.75}


def run_traces_and_predictive():
    print("Sampling posterior for trace and predictive plots...")
    X, y, meta = build_design_matrix(CSV_PATH)
    sampler_seed, predict_seed = np.random.SeedSequence(RANDOM_STATE).spawn(2)
    mle = fit_mle(X, y)

    sampler = MetropolisHastingsSampler(n_samples=N_SAMPLES, random_state=sampler_seed)
    sampler.sample(X, y, mle)
    print(f"Acceptance rate: {sampler.acceptance_rate_:.3f}")

    plot_traces(sampler.samples_, list(X.columns), "mh_traces.png", mle=mle, burn_in=BURN_IN)

    x_new = build_new_observation(NEW_WINE, meta["means"], meta["stds"])
    freqs = predictive_frequencies(
        predict(sampler.chain_, x_new, rng=predict_seed, burn_in=BURN_IN)
    )
    plot_predictive_frequencies(freqs, "predictive_draws.png")


if __name__ == "__main__":
    run_traces_and_predictive()
    print("All plots generated successfully.")
