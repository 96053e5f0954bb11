"""
Row filter and column projection module.

Restricts the general-education survey to high schools and projects the
contiguous survey column range (identifier through academic total).
"""

from pyspark.sql import DataFrame
from pyspark.sql import functions as f

from ..utils.logger import get_logger

HIGH_SCHOOL = "High School"


def column_range(columns: list[str], first_column: str, last_column: str) -> list[str]:
    """
    Select the columns between two boundary columns, inclusive, in declared order.

    Args:
        columns: Column names in declared order
        first_column: First column of the range
        last_column: Last column of the range

    Returns:
        List of column names from first_column through last_column

    Raises:
        ValueError: If a boundary is missing or the range is reversed
    """
    for col in (first_column, last_column):
        if col not in columns:
            raise ValueError(f"Column '{col}' not found in dataset")

    start = columns.index(first_column)
    end = columns.index(last_column)
    if end < start:
        raise ValueError(
            f"Column range is reversed: '{last_column}' comes before '{first_column}'"
        )

    return columns[start : end + 1]


def filter_school_type(
    df: DataFrame, column: str = "schooltype", school_type: str = HIGH_SCHOOL
) -> DataFrame:
    """
    Keep only rows whose school type equals the given literal.

    Args:
        df: Survey DataFrame
        column: Name of the school type column
        school_type: Value to keep (default: "High School")

    Returns:
        Filtered DataFrame
    """
    logger = get_logger()

    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found in dataset")

    logger.info(f"Filtering rows where {column} == '{school_type}'")
    filtered = df.filter(f.col(column) == f.lit(school_type))

    logger.info(f"  Rows kept: {filtered.count():,} of {df.count():,}")
    return filtered


def project_column_range(df: DataFrame, first_column: str, last_column: str) -> DataFrame:
    """
    Project a contiguous column range from a DataFrame.

    Args:
        df: Input DataFrame
        first_column: First column of the range (inclusive)
        last_column: Last column of the range (inclusive)

    Returns:
        DataFrame restricted to the column range
    """
    logger = get_logger()

    selected = column_range(df.columns, first_column, last_column)
    logger.info(f"Projecting {len(selected)} columns: {first_column} .. {last_column}")

    return df.select(*selected)
