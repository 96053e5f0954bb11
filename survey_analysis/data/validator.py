"""
Data validation module.

Provides validation functions for the delimited input files and for the
columns the pipeline relies on.
"""

import os
from pathlib import Path

from pyspark.sql import DataFrame
from pyspark.sql import functions as f

from ..utils.logger import get_logger


class DataValidator:
    """Validator for delimited input files and loaded tables."""

    def __init__(self) -> None:
        """Initialize the validator."""
        self.logger = get_logger()

    def validate_input_file(self, file_path: str) -> tuple[bool, str | None]:
        """
        Validate an input file before reading it.

        Args:
            file_path: Path to CSV/TSV file

        Returns:
            Tuple[bool, Optional[str]]: (is_valid, error_message)
        """
        path = Path(file_path)
        if not path.exists():
            return False, f"File not found: {file_path}"

        if not path.is_file():
            return False, f"Not a regular file: {file_path}"

        if not os.access(file_path, os.R_OK):
            return False, f"File not readable: {file_path}"

        if path.stat().st_size == 0:
            return False, f"File is empty: {file_path}"

        return True, None

    def validate_columns(
        self, df: DataFrame, required_columns: list[str], table_name: str = "table"
    ) -> tuple[bool, str | None]:
        """
        Check that every required column is present in a DataFrame.

        Args:
            df: Loaded Spark DataFrame
            required_columns: Column names that must exist
            table_name: Name used in the error message

        Returns:
            Tuple[bool, Optional[str]]: (is_valid, error_message)
        """
        missing_columns = [col for col in required_columns if col not in df.columns]
        if missing_columns:
            return False, f"Missing required columns in {table_name}: {missing_columns}"

        self.logger.info(f"Required columns verified for {table_name}: {required_columns}")
        return True, None

    def validate_unique_key(self, df: DataFrame, key_column: str) -> tuple[bool, str | None]:
        """
        Check that a key column holds no duplicated values.

        Args:
            df: Spark DataFrame
            key_column: Column expected to be unique

        Returns:
            Tuple[bool, Optional[str]]: (is_valid, error_message)
        """
        duplicates = find_duplicate_keys(df, key_column)
        if duplicates:
            preview = ", ".join(str(key) for key in duplicates[:10])
            more = f" (and {len(duplicates) - 10} more)" if len(duplicates) > 10 else ""
            return False, f"Duplicate values in key column '{key_column}': {preview}{more}"

        return True, None


def find_duplicate_keys(df: DataFrame, key_column: str) -> list:
    """
    List key values that occur more than once.

    Args:
        df: Spark DataFrame
        key_column: Column to inspect

    Returns:
        Sorted list of duplicated key values
    """
    if key_column not in df.columns:
        raise ValueError(f"Key column '{key_column}' not found in dataset")

    counts = df.groupBy(key_column).count()
    rows = counts.filter(f.col("count") > 1).select(key_column).collect()
    return sorted(row[key_column] for row in rows if row[key_column] is not None)

