from __future__ import annotations

"""
CLI entrypoint: fit the MLE, run the Metropolis-Hastings chain on the wine data,
summarize the posterior and simulate the posterior predictive for a new wine.
"""

import argparse
from pathlib import Path

import numpy as np

from wine_mh import (
    BURN_IN,
    N_SAMPLES,
    PRIOR_SD,
    PROPOSAL_SCALE,
    QUALITY_THRESHOLD,
    MetropolisHastingsSampler,
    build_design_matrix,
    build_new_observation,
    fit_mle,
    mle_standard_errors,
    predict,
    predictive_frequencies,
    summarize_chain,
)
from wine_mh.constants import REPORT_EVERY
from wine_mh.data_prep import parse_new_wine


def split_random_state(random_state: int | None):
    """Independent seed streams for the sampler and the predictive draws."""
    sampler_seed, predict_seed = np.random.SeedSequence(random_state).spawn(2)
    return sampler_seed, predict_seed


def describe_data(meta: dict, threshold: float):
    """Print a short summary of dataset size and label balance."""
    print(f"Wines: {meta['num_rows']}, covariates: {meta['feature_count']}")
    print(f"Share with quality >= {threshold}: {meta['positive_rate']:.3f}")
    if meta["dropped_missing"]:
        print(f"Dropped rows with missing values: {meta['dropped_missing']}")


def build_arg_parser():
    """CLI parser with knobs for the data, the prior and the sampler."""
    parser = argparse.ArgumentParser(
        description="Bayesian logistic regression of wine quality with a custom MH sampler."
    )
    parser.add_argument("--csv-path", type=Path, default=Path("data/winequality-red.csv"))
    parser.add_argument("--sep", type=str, default=";", help="CSV field separator.")
    parser.add_argument("--threshold", type=float, default=QUALITY_THRESHOLD, help="Quality cut-off for a good wine.")
    parser.add_argument("--n-samples", type=int, default=N_SAMPLES, help="Chain length, including the MLE seed.")
    parser.add_argument("--burn-in", type=int, default=BURN_IN, help="Draws discarded before summaries.")
    parser.add_argument("--prior-sd", type=float, default=PRIOR_SD, help="Sd of the N(0, sd) coefficient prior.")
    parser.add_argument(
        "--proposal-scale",
        type=float,
        default=PROPOSAL_SCALE,
        help="Multiplier of (X^T X)^-1 for the random-walk covariance.",
    )
    parser.add_argument("--report-every", type=int, default=REPORT_EVERY, help="Progress print interval.")
    parser.add_argument("--random-state", type=int, default=42, help="Seed for proposals, acceptance and prediction.")
    parser.add_argument(
        "--new-wine",
        type=str,
        default="",
        help="Comma-separated name=value covariates of the wine to predict; others default to the mean.",
    )
    parser.add_argument("--plots-dir", type=Path, default=None, help="Write trace and predictive plots here.")
    parser.add_argument("--quiet", action="store_true", help="Silence sampler progress.")
    return parser


def run_posterior(args: argparse.Namespace):
    """MLE seed -> MH chain -> summary -> posterior predictive for the new wine."""
    X, y, meta = build_design_matrix(args.csv_path, threshold=args.threshold, sep=args.sep)
    describe_data(meta, args.threshold)
    feature_names = list(X.columns)

    sampler_seed, predict_seed = split_random_state(args.random_state)
    mle = fit_mle(X, y)
    mle_se = mle_standard_errors(X, mle)

    sampler = MetropolisHastingsSampler(
        n_samples=args.n_samples,
        prior_sd=args.prior_sd,
        proposal_scale=args.proposal_scale,
        report_every=args.report_every,
        random_state=sampler_seed,
        verbose=not args.quiet,
    )
    sampler.sample(X, y, mle)
    print(f"Acceptance rate: {sampler.acceptance_rate_:.3f} over {len(sampler.chain_) - 1} proposals")

    summary = summarize_chain(sampler.samples_, feature_names, burn_in=args.burn_in, mle=mle)
    summary["mle_se"] = mle_se
    print("\nPosterior summary (after burn-in):")
    print(summary.round(4).to_string())

    x_new = build_new_observation(parse_new_wine(args.new_wine), meta["means"], meta["stds"])
    draws = predict(sampler.chain_, x_new, rng=predict_seed, burn_in=args.burn_in)
    freqs = predictive_frequencies(draws)
    total = int(freqs.sum())
    print("\nPosterior predictive draws for the new wine:")
    print(f"  good (1): {freqs[1]} ({freqs[1] / total:.3f})")
    print(f"  not good (0): {freqs[0]} ({freqs[0] / total:.3f})")

    if args.plots_dir is not None:
        from wine_mh.plots import plot_predictive_frequencies, plot_traces

        args.plots_dir.mkdir(parents=True, exist_ok=True)
        plot_traces(
            sampler.samples_,
            feature_names,
            args.plots_dir / "traces.png",
            mle=mle,
            burn_in=args.burn_in,
        )
        plot_predictive_frequencies(freqs, args.plots_dir / "predictive.png")
        print(f"\nPlots written to {args.plots_dir}")


def main(args: argparse.Namespace | None = None):
    args = args or build_arg_parser().parse_args()
    run_posterior(args)


if __name__ == "__main__":
    main()
