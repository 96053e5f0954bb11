"""
Basic statistical analysis module.

Provides summary statistics on Spark DataFrames.
"""

from typing import Any

from pyspark.sql import DataFrame
from pyspark.sql import functions as f

from ..utils.logger import get_logger


def get_column_statistics(df: DataFrame, column_name: str) -> dict[str, Any]:
    """
    Get comprehensive statistics for a column.

    Computes:
    - count: Number of non-null values
    - mean: Average value
    - stddev: Standard deviation
    - min: Minimum value
    - max: Maximum value
    - null_count: Number of null values

    Args:
        df: Spark DataFrame
        column_name: Name of column to analyze

    Returns:
        Dict[str, Any]: Dictionary containing statistics

    Raises:
        ValueError: If column doesn't exist in DataFrame
    """
    logger = get_logger()

    if column_name not in df.columns:
        raise ValueError(f"Column '{column_name}' not found in dataset")

    logger.info(f"Computing statistics for column: {column_name}")

    value = f.col(column_name).cast("double")
    stats = df.select(
        f.count(value).alias("count"),
        f.mean(value).alias("mean"),
        f.stddev(value).alias("stddev"),
        f.min(value).alias("min"),
        f.max(value).alias("max"),
        f.count(f.lit(1)).alias("total_rows"),
    ).collect()[0]

    total_rows = stats["total_rows"]
    null_count = total_rows - stats["count"]

    return {
        "column": column_name,
        "count": stats["count"],
        "mean": float(stats["mean"]) if stats["mean"] is not None else None,
        "stddev": float(stats["stddev"]) if stats["stddev"] is not None else None,
        "min": float(stats["min"]) if stats["min"] is not None else None,
        "max": float(stats["max"]) if stats["max"] is not None else None,
        "null_count": null_count,
        "total_rows": total_rows,
        "null_percentage": (null_count / total_rows * 100) if total_rows > 0 else 0,
    }


def print_statistics_report(stats: dict[str, Any]) -> None:
    """
    Print a formatted statistics report.

    Args:
        stats: Statistics dictionary from get_column_statistics()
    """
    print("\n" + "=" * 60)
    print(f"Statistics Report: {stats['column']}")
    print("=" * 60)
    print(f"Total Rows:        {stats['total_rows']:,}")
    print(f"Non-Null Count:    {stats['count']:,}")
    print(f"Null Count:        {stats['null_count']:,} ({stats['null_percentage']:.2f}%)")
    print("-" * 60)

    if stats["mean"] is not None:
        print(f"Mean:              {stats['mean']:.4f}")
    if stats["stddev"] is not None:
        print(f"Std Dev:           {stats['stddev']:.4f}")
    if stats["min"] is not None:
        print(f"Min:               {stats['min']:.4f}")
    if stats["max"] is not None:
        print(f"Max:               {stats['max']:.4f}")

    print("=" * 60 + "\n")
