"""
Unit tests for survey concatenation and the school join.
"""

import pytest
from pyspark.sql import DataFrame, SparkSession
from pyspark.sql import functions as f

from survey_analysis.analysis.merging import (
    concat_surveys,
    get_join_coverage,
    left_join_on_key,
    rename_key,
)


@pytest.fixture  # type: ignore[misc]
def schools(spark: SparkSession) -> DataFrame:
    """School metrics table."""
    data = [
        ("01M015", "P.S. 015 Roberto Clemente", 1200.0),
        ("01M448", "University Neighborhood HS", 1100.0),
        ("02M296", "High School of Hospitality", 1050.0),
    ]
    return spark.createDataFrame(
        data, schema="DBN STRING, school_name STRING, avg_sat_score DOUBLE"
    )


class TestConcatSurveys:
    """Tests for vertical concatenation by column name."""

    def test_row_count_is_sum_of_inputs(
        self, general_survey: DataFrame, d75_survey: DataFrame
    ) -> None:
        """Concatenation keeps every row of both tables."""
        result = concat_surveys(general_survey, d75_survey)
        assert result.count() == general_survey.count() + d75_survey.count()

    def test_missing_columns_become_null(
        self, general_survey: DataFrame, d75_survey: DataFrame
    ) -> None:
        """Rows from a table lacking a column carry nulls in it."""
        result = concat_surveys(general_survey, d75_survey)

        d75_rows = result.filter(f.col("dbn").startswith("75")).collect()
        assert len(d75_rows) == 2
        assert all(row["schooltype"] is None for row in d75_rows)

    def test_aligns_by_name_not_position(self, spark: SparkSession) -> None:
        """Columns in a different order are matched by name."""
        a = spark.createDataFrame([("A1", 1.0, 2.0)], schema="dbn STRING, x DOUBLE, y DOUBLE")
        b = spark.createDataFrame([(4.0, 3.0, "B1")], schema="y DOUBLE, x DOUBLE, dbn STRING")

        rows = {row["dbn"]: row for row in concat_surveys(a, b).collect()}

        assert rows["B1"]["x"] == 3.0
        assert rows["B1"]["y"] == 4.0

    def test_round_trip_through_source_column(self, spark: SparkSession) -> None:
        """Filtering the concatenation back to the first source reproduces it."""
        a = spark.createDataFrame(
            [("A1", 1.0, 2.0), ("A2", 3.0, 4.0)], schema="dbn STRING, x DOUBLE, y DOUBLE"
        )
        b = spark.createDataFrame([("B1", 5.0, 6.0)], schema="dbn STRING, x DOUBLE, y DOUBLE")

        combined = concat_surveys(a, b, source_column="source", source_labels=("a", "b"))
        restored = combined.filter(f.col("source") == "a").drop("source")

        assert restored.columns == a.columns
        assert sorted(restored.collect()) == sorted(a.collect())


class TestRenameKey:
    """Tests for join key renaming."""

    def test_rename(self, d75_survey: DataFrame) -> None:
        """The survey key takes the school table's key name."""
        result = rename_key(d75_survey, "dbn", "DBN")
        assert "DBN" in result.columns
        assert "dbn" not in result.columns

    def test_missing_source_key_raises(self, d75_survey: DataFrame) -> None:
        """Renaming a nonexistent column is rejected."""
        with pytest.raises(ValueError, match="not found"):
            rename_key(d75_survey, "school_id", "DBN")


class TestLeftJoin:
    """Tests for the left join onto the school table."""

    def test_scenario_single_match(self, spark: SparkSession) -> None:
        """A matching survey row populates the school's survey fields."""
        schools = spark.createDataFrame(
            [("01M015", 1200.0)], schema="DBN STRING, avg_sat_score DOUBLE"
        )
        survey = spark.createDataFrame([("01M015", 8.5)], schema="DBN STRING, saf_p_11 DOUBLE")

        rows = left_join_on_key(schools, survey, "DBN").collect()

        assert len(rows) == 1
        assert rows[0]["DBN"] == "01M015"
        assert rows[0]["avg_sat_score"] == 1200.0
        assert rows[0]["saf_p_11"] == 8.5

    def test_every_school_is_preserved(
        self, schools: DataFrame, general_survey: DataFrame
    ) -> None:
        """Schools without survey rows remain, with null survey fields."""
        survey = rename_key(general_survey, "dbn", "DBN")
        joined = left_join_on_key(schools, survey, "DBN")

        school_keys = {row["DBN"] for row in schools.collect()}
        joined_rows = {row["DBN"]: row for row in joined.collect()}

        assert school_keys <= set(joined_rows)
        assert joined.count() == schools.count()
        assert joined_rows["02M296"]["saf_p_11"] is None

    def test_duplicate_survey_keys_raise(self, spark: SparkSession, schools: DataFrame) -> None:
        """Duplicated survey keys are rejected before joining."""
        survey = spark.createDataFrame(
            [("01M015", 8.5), ("01M015", 7.0)], schema="DBN STRING, saf_p_11 DOUBLE"
        )
        with pytest.raises(ValueError, match="01M015"):
            left_join_on_key(schools, survey, "DBN")

    def test_duplicate_school_keys_raise(self, spark: SparkSession, schools: DataFrame) -> None:
        """The school table must be uniquely keyed as well."""
        duplicated = schools.unionByName(schools.filter(f.col("DBN") == "01M448"))
        survey = spark.createDataFrame([("01M015", 8.5)], schema="DBN STRING, saf_p_11 DOUBLE")

        with pytest.raises(ValueError, match="primary") as excinfo:
            left_join_on_key(duplicated, survey, "DBN")

        assert "01M448" in str(excinfo.value)

    def test_duplicate_keys_expand_when_not_validated(
        self, spark: SparkSession, schools: DataFrame
    ) -> None:
        """Without validation, duplicated keys repeat the matching school row."""
        survey = spark.createDataFrame(
            [("01M015", 8.5), ("01M015", 7.0)], schema="DBN STRING, saf_p_11 DOUBLE"
        )
        joined = left_join_on_key(schools, survey, "DBN", validate_unique=False)

        assert joined.filter(f.col("DBN") == "01M015").count() == 2
        assert joined.count() == schools.count() + 1

    def test_overlapping_columns_are_suffixed(
        self, spark: SparkSession, schools: DataFrame
    ) -> None:
        """A survey column clashing with a school column gets a suffix."""
        survey = spark.createDataFrame(
            [("01M015", "Survey Name", 8.5)],
            schema="DBN STRING, school_name STRING, saf_p_11 DOUBLE",
        )
        joined = left_join_on_key(schools, survey, "DBN")

        row = joined.filter(f.col("DBN") == "01M015").collect()[0]
        assert row["school_name"] == "P.S. 015 Roberto Clemente"
        assert row["school_name_survey"] == "Survey Name"


class TestJoinCoverage:
    """Tests for join coverage counts."""

    def test_coverage_counts(self, schools: DataFrame, general_survey: DataFrame) -> None:
        """Matched and unmatched counts add up to the school count."""
        survey = rename_key(general_survey, "dbn", "DBN")
        coverage = get_join_coverage(schools, survey, "DBN")

        assert coverage["total_rows"] == 3
        assert coverage["matched_rows"] == 2
        assert coverage["unmatched_rows"] == 1
        assert coverage["match_percentage"] == pytest.approx(200 / 3)
