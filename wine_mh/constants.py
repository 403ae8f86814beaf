"""
Named tunables and dataset column names shared by the sampler, the CLI and the plots.
"""

# Wine-quality covariates after name normalization (see data_prep._clean_name).
FEATURE_COLUMNS = [
    "fixed_acidity",
    "volatile_acidity",
    "citric_acid",
    "residual_sugar",
    "chlorides",
    "free_sulfur_dioxide",
    "total_sulfur_dioxide",
    "density",
    "ph",
    "sulphates",
    "alcohol",
]
TARGET_COLUMN = "quality"
INTERCEPT_NAME = "intercept"

# A wine is "good" when quality >= threshold.
QUALITY_THRESHOLD = 6.5

# Sampler configuration
N_SAMPLES = 10000
BURN_IN = 2000
PRIOR_SD = 10.0
PROPOSAL_SCALE = 0.5
REPORT_EVERY = 1000
