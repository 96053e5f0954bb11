"""
Survey-score correlation module.

Computes Pearson correlations between a target column (average SAT score)
and each survey-score column, using pairwise deletion: each pair of columns
uses every row where both values are present. Results are filtered to an
absolute threshold and reported with observation counts and p-values.
"""

import math
from dataclasses import dataclass
from pathlib import Path

import pandas as pd
from pyspark.sql import DataFrame
from pyspark.sql import functions as f
from scipy import stats

from ..utils.logger import get_logger
from .filtering import column_range

DEFAULT_THRESHOLD = 0.25


@dataclass(frozen=True)
class CorrelationEntry:
    """Correlation of one survey column against the target column."""

    variable: str
    coefficient: float
    n_obs: int
    p_value: float | None


def correlation_p_value(r: float, n: int) -> float | None:
    """
    Two-sided p-value for a Pearson coefficient under the null of no correlation.

    Args:
        r: Correlation coefficient
        n: Number of paired observations

    Returns:
        p-value, or None when fewer than three observations are available
    """
    if n < 3:
        return None
    if abs(r) >= 1.0:
        return 0.0

    dof = n - 2
    t_stat = r * math.sqrt(dof / (1.0 - r * r))
    return float(2.0 * stats.t.sf(abs(t_stat), dof))


def compute_target_correlations(
    df: DataFrame, target_column: str, columns: list[str]
) -> list[CorrelationEntry]:
    """
    Correlate the target column with each of the given columns.

    Every coefficient is computed in one aggregation pass. Columns are cast
    to double, so unparseable values count as missing. Undefined coefficients
    (constant columns or fewer than two complete pairs) are left out.

    Args:
        df: Joined DataFrame
        target_column: Column to correlate against
        columns: Columns to correlate with the target (the target itself is skipped)

    Returns:
        List of CorrelationEntry in the order of columns
    """
    logger = get_logger()

    for col in [target_column, *columns]:
        if col not in df.columns:
            raise ValueError(f"Column '{col}' not found in dataset")

    others = [col for col in columns if col != target_column]
    if not others:
        return []

    target = f.col(target_column).cast("double")
    aggregations = []
    for i, col in enumerate(others):
        value = f.col(col).cast("double")
        both_present = target.isNotNull() & value.isNotNull()
        aggregations.append(f.corr(target, value).alias(f"r_{i}"))
        aggregations.append(f.count(f.when(both_present, 1)).alias(f"n_{i}"))

    logger.info(f"Computing correlations of {target_column} with {len(others)} columns")
    row = df.agg(*aggregations).collect()[0]

    entries = []
    for i, col in enumerate(others):
        r = row[f"r_{i}"]
        n = int(row[f"n_{i}"])
        if r is None or math.isnan(r):
            logger.warning(f"  {col}: correlation undefined ({n} complete pairs), skipped")
            continue
        entries.append(CorrelationEntry(col, float(r), n, correlation_p_value(float(r), n)))

    return entries


def filter_correlations(
    entries: list[CorrelationEntry], threshold: float = DEFAULT_THRESHOLD
) -> list[CorrelationEntry]:
    """
    Keep entries whose absolute coefficient is strictly above the threshold.

    Args:
        entries: Correlation entries
        threshold: Absolute cutoff (default: 0.25)

    Returns:
        Filtered entries, strongest first
    """
    kept = [entry for entry in entries if abs(entry.coefficient) > threshold]
    return sorted(kept, key=lambda entry: abs(entry.coefficient), reverse=True)


def find_correlated_fields(
    df: DataFrame,
    target_column: str = "avg_sat_score",
    first_column: str = "saf_p_11",
    last_column: str = "aca_tot_11",
    threshold: float = DEFAULT_THRESHOLD,
) -> tuple[list[CorrelationEntry], list[CorrelationEntry]]:
    """
    Correlate the target with the survey-score column range and filter the result.

    Args:
        df: Joined DataFrame
        target_column: Column to correlate against
        first_column: First survey-score column (inclusive)
        last_column: Last survey-score column (inclusive)
        threshold: Absolute cutoff

    Returns:
        Tuple of (all entries, entries above the threshold)
    """
    logger = get_logger()

    score_columns = column_range(df.columns, first_column, last_column)
    entries = compute_target_correlations(df, target_column, score_columns)
    correlated = filter_correlations(entries, threshold)

    logger.info(
        f"{len(correlated)} of {len(entries)} survey fields have |r| > {threshold} "
        f"with {target_column}"
    )
    for entry in correlated:
        logger.info(f"  {entry.variable}: r={entry.coefficient:.4f} (n={entry.n_obs})")

    return entries, correlated


def correlations_to_frame(entries: list[CorrelationEntry]) -> pd.DataFrame:
    """Convert correlation entries to a pandas DataFrame."""
    return pd.DataFrame(
        [
            {
                "variable": entry.variable,
                "coefficient": entry.coefficient,
                "n_obs": entry.n_obs,
                "p_value": entry.p_value,
            }
            for entry in entries
        ],
        columns=["variable", "coefficient", "n_obs", "p_value"],
    )


def export_correlations(
    entries: list[CorrelationEntry],
    output_path: str = "reports/survey_correlations.csv",
) -> str:
    """
    Export correlation entries to CSV.

    Args:
        entries: Correlation entries
        output_path: Output file path

    Returns:
        Path to saved CSV file
    """
    logger = get_logger()

    full_path = Path(output_path)
    full_path.parent.mkdir(parents=True, exist_ok=True)

    correlations_to_frame(entries).to_csv(full_path, index=False)

    logger.info(f"Correlations exported to {output_path}")
    return str(full_path)


def print_correlation_report(
    entries: list[CorrelationEntry],
    target_column: str = "avg_sat_score",
    threshold: float = DEFAULT_THRESHOLD,
) -> None:
    """
    Print a formatted correlation report.

    Args:
        entries: Correlation entries (usually the filtered ones)
        target_column: Column the entries were correlated against
        threshold: Cutoff used to filter the entries
    """
    print("\n" + "=" * 70, flush=True)
    print(f"SURVEY FIELDS CORRELATED WITH {target_column} (|r| > {threshold})", flush=True)
    print("=" * 70, flush=True)

    if not entries:
        print("No survey field exceeds the threshold.", flush=True)
    for entry in entries:
        p_text = f"{entry.p_value:.6f}" if entry.p_value is not None else "n/a"
        print(
            f"{entry.variable:<14} r = {entry.coefficient:+.4f}   "
            f"n = {entry.n_obs:<6,} p = {p_text}",
            flush=True,
        )

    print("=" * 70 + "\n", flush=True)
