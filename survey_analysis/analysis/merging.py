"""
Survey concatenation and school join module.

Stacks the general-education and District 75 surveys by column name, then
left-joins the result onto the school metrics table by school identifier.
"""

from typing import Any

from pyspark.sql import DataFrame
from pyspark.sql import functions as f

from ..data.validator import DataValidator
from ..utils.logger import get_logger

SURVEY_SUFFIX = "_survey"


def concat_surveys(
    first: DataFrame,
    second: DataFrame,
    source_column: str | None = None,
    source_labels: tuple[str, str] = ("general", "d75"),
) -> DataFrame:
    """
    Stack two survey tables, aligning columns by name.

    A column present in only one table becomes null in the other table's rows.

    Args:
        first: First survey table
        second: Second survey table
        source_column: If given, add a column recording which table each row came from
        source_labels: Labels written to source_column for first and second

    Returns:
        Concatenated DataFrame
    """
    logger = get_logger()

    only_first = [col for col in first.columns if col not in second.columns]
    only_second = [col for col in second.columns if col not in first.columns]
    if only_first or only_second:
        logger.info(
            f"Survey schemas differ; filling with nulls. "
            f"Only in first: {only_first}, only in second: {only_second}"
        )

    if source_column is not None:
        first = first.withColumn(source_column, f.lit(source_labels[0]))
        second = second.withColumn(source_column, f.lit(source_labels[1]))

    combined = first.unionByName(second, allowMissingColumns=True)

    logger.info(f"Concatenated surveys: {combined.count():,} rows, {len(combined.columns)} columns")
    return combined


def rename_key(df: DataFrame, source_key: str = "dbn", target_key: str = "DBN") -> DataFrame:
    """
    Rename the survey key column to match the school table's key column.

    Args:
        df: Survey DataFrame
        source_key: Current key column name
        target_key: Key column name on the school table

    Returns:
        DataFrame with the renamed key column
    """
    if source_key not in df.columns:
        raise ValueError(f"Key column '{source_key}' not found in dataset")
    if source_key == target_key:
        return df
    if target_key in df.columns:
        raise ValueError(f"Cannot rename '{source_key}': column '{target_key}' already exists")

    return df.withColumnRenamed(source_key, target_key)


def left_join_on_key(
    primary: DataFrame,
    secondary: DataFrame,
    key_column: str = "DBN",
    validate_unique: bool = True,
) -> DataFrame:
    """
    Left-join a secondary table onto the primary table by a key column.

    Every primary row is preserved; secondary columns are null where no key
    matches. Non-key columns present in both tables keep the primary name and
    the secondary copy gets a "_survey" suffix.

    Args:
        primary: School metrics table (source of truth)
        secondary: Concatenated survey table
        key_column: Join key present in both tables
        validate_unique: Raise on duplicated keys instead of expanding rows

    Returns:
        Joined DataFrame

    Raises:
        ValueError: If the key is missing or duplicated while validate_unique is set
    """
    logger = get_logger()
    validator = DataValidator()

    for name, table in (("primary", primary), ("secondary", secondary)):
        if key_column not in table.columns:
            raise ValueError(f"Key column '{key_column}' not found in {name} table")

        valid, error = validator.validate_unique_key(table, key_column)
        if not valid:
            if validate_unique:
                raise ValueError(f"Cannot join on {name} table: {error}")
            logger.warning(f"{error} in {name} table; join will repeat matching rows")

    overlapping = [
        col for col in secondary.columns if col != key_column and col in primary.columns
    ]
    for col in overlapping:
        logger.warning(f"Column '{col}' exists in both tables; renaming survey copy")
        secondary = secondary.withColumnRenamed(col, f"{col}{SURVEY_SUFFIX}")

    logger.info(f"Left-joining on {key_column}")
    joined = primary.join(secondary, on=key_column, how="left")

    logger.info(f"Joined table: {joined.count():,} rows, {len(joined.columns)} columns")
    return joined


def get_join_coverage(
    primary: DataFrame, secondary: DataFrame, key_column: str = "DBN"
) -> dict[str, Any]:
    """
    Count how many primary rows have a matching secondary key.

    Args:
        primary: School metrics table
        secondary: Survey table with the renamed key column
        key_column: Join key

    Returns:
        Dictionary with total, matched and unmatched counts and match percentage
    """
    total = primary.count()
    survey_keys = secondary.select(key_column).distinct()
    matched = primary.join(survey_keys, on=key_column, how="left_semi").count()

    return {
        "total_rows": total,
        "matched_rows": matched,
        "unmatched_rows": total - matched,
        "match_percentage": (matched / total * 100) if total > 0 else 0,
    }
