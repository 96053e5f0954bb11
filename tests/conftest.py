"""
Shared fixtures for survey analysis tests.
"""

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402
from pyspark.sql import DataFrame, SparkSession  # noqa: E402

SCORE_COLUMNS = [
    "saf_p_11",
    "com_p_11",
    "eng_p_11",
    "aca_p_11",
    "saf_t_11",
    "com_t_11",
    "eng_t_11",
    "aca_t_11",
    "saf_s_11",
    "com_s_11",
    "eng_s_11",
    "aca_s_11",
    "saf_tot_11",
    "com_tot_11",
    "eng_tot_11",
    "aca_tot_11",
]


@pytest.fixture(scope="session")  # type: ignore[misc]
def spark() -> SparkSession:
    """Create a Spark session for testing."""
    return (
        SparkSession.builder.master("local[1]")
        .appName("test-survey-analysis")
        .config("spark.driver.memory", "1g")
        .config("spark.executor.memory", "1g")
        .config("spark.sql.shuffle.partitions", "1")
        .getOrCreate()
    )


def survey_row(dbn: str, base: float, school_type: str | None = None) -> tuple:
    """Build a survey row whose scores step up from base."""
    scores = tuple(round(base + i * 0.1, 1) for i in range(len(SCORE_COLUMNS)))
    if school_type is None:
        return (dbn, *scores)
    return (dbn, school_type, *scores)


def survey_schema(with_school_type: bool = False) -> str:
    """Spark DDL schema for a survey table."""
    columns = ["dbn STRING"]
    if with_school_type:
        columns.append("schooltype STRING")
    columns.extend(f"{col} DOUBLE" for col in SCORE_COLUMNS)
    return ", ".join(columns)


@pytest.fixture  # type: ignore[misc]
def general_survey(spark: SparkSession) -> DataFrame:
    """General-education survey with a mix of school types."""
    data = [
        survey_row("01M015", 8.0, "High School"),
        survey_row("01M019", 7.0, "Elementary School"),
        survey_row("01M448", 6.5, "High School"),
        survey_row("02M047", 5.5, "Middle School"),
    ]
    return spark.createDataFrame(data, schema=survey_schema(with_school_type=True))


@pytest.fixture  # type: ignore[misc]
def d75_survey(spark: SparkSession) -> DataFrame:
    """District 75 survey without a school type column."""
    data = [
        survey_row("75K004", 7.5),
        survey_row("75X012", 6.0),
    ]
    return spark.createDataFrame(data, schema=survey_schema())
