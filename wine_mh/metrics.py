from __future__ import annotations

"""
Posterior summaries printed by the CLI next to the maximum-likelihood estimates.
"""

import numpy as np
import pandas as pd


def summarize_chain(
    samples: np.ndarray,
    feature_names: list[str],
    burn_in: int = 0,
    mle: np.ndarray | None = None,
) -> pd.DataFrame:
    """Mean, sd and central 95% interval per coefficient after burn-in."""
    draws = np.asarray(samples, dtype=float)
    if not 0 <= burn_in < len(draws):
        raise ValueError(f"burn_in must be in [0, {len(draws)}), got {burn_in}")
    kept = pd.DataFrame(draws[burn_in:], columns=feature_names)

    summary = pd.DataFrame(
        {
            "mean": kept.mean(),
            "sd": kept.std(ddof=1),
            "q2.5": kept.quantile(0.025),
            "q97.5": kept.quantile(0.975),
        }
    )
    if mle is not None:
        summary["mle"] = pd.Series(np.asarray(mle, dtype=float), index=feature_names)
    return summary
