"""
Wide-to-long reshape module for survey scores.

Survey score columns are named ``<question>_<respondent>_<year>``, for
example ``saf_p_11`` (safety, parents, 2011) or ``aca_tot_11`` (academics,
all respondents). The joined table is unpivoted to one row per school and
score column, and each row is labelled with the decoded question code and
respondent type. Pre-aggregated totals are then dropped so that only real
respondent groups are compared.
"""

import re
from itertools import chain

from pyspark.sql import DataFrame
from pyspark.sql import functions as f

from ..utils.logger import get_logger
from .filtering import column_range

# Respondent infix -> respondent type ("to" is the truncated form of "tot")
RESPONDENT_TYPES = {
    "p": "parent",
    "t": "teacher",
    "s": "student",
    "tot": "total",
    "to": "total",
}

QUESTION_CODES = {
    "saf": "Safety and Respect",
    "com": "Communication",
    "eng": "Engagement",
    "aca": "Academic Expectations",
}

TOTAL = "total"

_FIELD_PATTERN = re.compile(r"^(?P<question>[a-z]{3})_(?P<respondent>[a-z]+)_(?P<year>\d{2})$")


def decode_survey_field(field_name: str) -> tuple[str, str]:
    """
    Decode a survey score column name into (question, respondent_type).

    Args:
        field_name: Column name such as "saf_t_11"

    Returns:
        Tuple of (question code, respondent type), e.g. ("saf", "teacher")

    Raises:
        ValueError: If the name doesn't follow the survey naming scheme or uses
            an unknown question code or respondent infix
    """
    match = _FIELD_PATTERN.match(field_name)
    if match is None:
        raise ValueError(f"Unrecognized survey field name: '{field_name}'")

    question = match.group("question")
    respondent = match.group("respondent")

    if question not in QUESTION_CODES:
        raise ValueError(f"Unknown question code '{question}' in field '{field_name}'")
    if respondent not in RESPONDENT_TYPES:
        raise ValueError(f"Unknown respondent infix '{respondent}' in field '{field_name}'")

    return question, RESPONDENT_TYPES[respondent]


def _literal_map(mapping: dict[str, str]):
    return f.create_map(*[f.lit(item) for item in chain(*mapping.items())])


def melt_survey_scores(
    df: DataFrame,
    key_column: str,
    score_columns: list[str],
    field_column: str = "field",
    value_column: str = "score",
) -> DataFrame:
    """
    Unpivot score columns to one row per key and score column.

    Args:
        df: Wide DataFrame
        key_column: Identifier column kept on every row
        score_columns: Columns to unpivot
        field_column: Name of the column holding the original column name
        value_column: Name of the column holding the score

    Returns:
        Long DataFrame with columns (key_column, field_column, value_column)
    """
    if key_column not in df.columns:
        raise ValueError(f"Column '{key_column}' not found in dataset")
    missing = [col for col in score_columns if col not in df.columns]
    if missing:
        raise ValueError(f"Columns not found in dataset: {missing}")

    # unpivot needs a single value type
    casted = df.select(
        f.col(key_column), *[f.col(col).cast("double").alias(col) for col in score_columns]
    )

    return casted.unpivot(
        ids=[key_column],
        values=score_columns,
        variableColumnName=field_column,
        valueColumnName=value_column,
    )


def reshape_survey_scores(
    df: DataFrame,
    key_column: str = "DBN",
    first_column: str = "saf_p_11",
    last_column: str = "aca_tot_11",
    drop_totals: bool = True,
) -> DataFrame:
    """
    Reshape the joined table to long form with question and respondent labels.

    Column names are decoded before any Spark job runs, so an unexpected
    column in the range fails immediately.

    Args:
        df: Joined DataFrame
        key_column: School identifier column
        first_column: First survey-score column (inclusive)
        last_column: Last survey-score column (inclusive)
        drop_totals: Drop rows whose respondent type is "total"

    Returns:
        DataFrame with columns (key, field, score, respondent_type, question)
    """
    logger = get_logger()

    score_columns = column_range(df.columns, first_column, last_column)
    decoded = {col: decode_survey_field(col) for col in score_columns}

    logger.info(f"Reshaping {len(score_columns)} survey columns to long form")

    long_df = melt_survey_scores(df, key_column, score_columns)
    respondent_map = _literal_map({col: respondent for col, (_, respondent) in decoded.items()})
    question_map = _literal_map({col: question for col, (question, _) in decoded.items()})

    long_df = long_df.withColumn("respondent_type", respondent_map[f.col("field")]).withColumn(
        "question", question_map[f.col("field")]
    )

    if drop_totals:
        long_df = long_df.filter(f.col("respondent_type") != f.lit(TOTAL))
        kept = sum(1 for _, respondent in decoded.values() if respondent != TOTAL)
        logger.info(f"  Dropped total scores; {kept} respondent-specific columns remain")

    return long_df
