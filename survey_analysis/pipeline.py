"""
Survey analysis pipeline.

Runs the stages in order, each consuming the previous stage's output:
1. Load the school metrics table and both survey tables
2. Keep high schools and project the survey column range
3. Concatenate the surveys and left-join them onto the school table
4. Correlate survey scores with the target and reshape scores to long form
5. Render the scatter, box and bar charts
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pyspark.sql import DataFrame, SparkSession

from .analysis.basic_stats import get_column_statistics
from .analysis.correlation import CorrelationEntry, export_correlations, find_correlated_fields
from .analysis.filtering import filter_school_type, project_column_range
from .analysis.merging import concat_surveys, get_join_coverage, left_join_on_key, rename_key
from .analysis.reshape import reshape_survey_scores
from .config import AnalysisConfig, AppConfig
from .data.loader import SurveyDataLoader
from .utils.logger import get_logger
from .visualization.survey_viz import create_all_visualizations


@dataclass
class PipelineResult:
    """Intermediate and final tables produced by one pipeline run."""

    schools: DataFrame
    survey: DataFrame
    joined: DataFrame
    long_form: DataFrame
    coverage: dict[str, Any]
    target_statistics: dict[str, Any]
    correlations: list[CorrelationEntry]
    correlated: list[CorrelationEntry]
    outputs: dict[str, str] = field(default_factory=dict)


def prepare_survey(
    general_survey: DataFrame, d75_survey: DataFrame, analysis: AnalysisConfig
) -> DataFrame:
    """
    Filter, project, concatenate and re-key the two survey tables.

    Args:
        general_survey: General-education survey table
        d75_survey: District 75 survey table
        analysis: Analysis configuration

    Returns:
        Concatenated survey table keyed by the school table's key column
    """
    high_schools = filter_school_type(
        general_survey, analysis.SCHOOL_TYPE_COLUMN, analysis.SCHOOL_TYPE
    )
    general = project_column_range(
        high_schools, analysis.SURVEY_FIRST_COLUMN, analysis.SURVEY_LAST_COLUMN
    )
    d75 = project_column_range(
        d75_survey, analysis.SURVEY_FIRST_COLUMN, analysis.SURVEY_LAST_COLUMN
    )

    survey = concat_surveys(general, d75)
    return rename_key(survey, analysis.SURVEY_KEY_COLUMN, analysis.KEY_COLUMN)


def analyze(
    schools: DataFrame, survey: DataFrame, analysis: AnalysisConfig
) -> PipelineResult:
    """
    Join the survey onto the school table, then correlate and reshape.

    Args:
        schools: School metrics table
        survey: Prepared survey table from prepare_survey()
        analysis: Analysis configuration

    Returns:
        PipelineResult without rendered outputs
    """
    logger = get_logger()

    coverage = get_join_coverage(schools, survey, analysis.KEY_COLUMN)
    logger.info(
        f"Survey coverage: {coverage['matched_rows']:,} of {coverage['total_rows']:,} schools "
        f"({coverage['match_percentage']:.1f}%)"
    )

    joined = left_join_on_key(
        schools, survey, analysis.KEY_COLUMN, validate_unique=analysis.VALIDATE_UNIQUE_KEYS
    )
    target_statistics = get_column_statistics(joined, analysis.TARGET_COLUMN)

    correlations, correlated = find_correlated_fields(
        joined,
        target_column=analysis.TARGET_COLUMN,
        first_column=analysis.SCORE_FIRST_COLUMN,
        last_column=analysis.SCORE_LAST_COLUMN,
        threshold=analysis.CORRELATION_THRESHOLD,
    )

    long_form = reshape_survey_scores(
        joined,
        key_column=analysis.KEY_COLUMN,
        first_column=analysis.SCORE_FIRST_COLUMN,
        last_column=analysis.SCORE_LAST_COLUMN,
    )

    return PipelineResult(
        schools=schools,
        survey=survey,
        joined=joined,
        long_form=long_form,
        coverage=coverage,
        target_statistics=target_statistics,
        correlations=correlations,
        correlated=correlated,
    )


def render_outputs(result: PipelineResult, config: AppConfig) -> dict[str, str]:
    """
    Write the correlation CSV and every chart to the artifacts directory.

    Args:
        result: Result of analyze()
        config: Application configuration

    Returns:
        Dictionary mapping output names to file paths
    """
    analysis = config.analysis

    # Only the plotted columns are collected to the driver
    scatter_columns = [entry.variable for entry in result.correlated[: analysis.MAX_SCATTER_PLOTS]]
    joined_pdf = result.joined.select(
        analysis.KEY_COLUMN, analysis.TARGET_COLUMN, *scatter_columns
    ).toPandas()
    long_pdf = result.long_form.toPandas()

    outputs = {
        "correlations_csv": export_correlations(
            result.correlations,
            str(Path(config.get_artifact_path("reports")) / "survey_correlations.csv"),
        )
    }
    outputs.update(
        create_all_visualizations(
            joined_pdf,
            long_pdf,
            result.correlations,
            result.correlated,
            target_column=analysis.TARGET_COLUMN,
            threshold=analysis.CORRELATION_THRESHOLD,
            output_directory=config.get_artifact_path("visualizations"),
            max_scatter_plots=analysis.MAX_SCATTER_PLOTS,
            alpha=analysis.SCATTER_ALPHA,
        )
    )

    result.outputs = outputs
    return outputs


def run_pipeline(spark: SparkSession, config: AppConfig, render: bool = True) -> PipelineResult:
    """
    Run every stage of the survey analysis.

    Args:
        spark: Active Spark session
        config: Application configuration
        render: Whether to write charts and the correlation CSV

    Returns:
        PipelineResult with all intermediate tables
    """
    logger = get_logger()

    logger.info("-" * 70)
    logger.info("PHASE 1: Loading inputs")
    logger.info("-" * 70)
    loader = SurveyDataLoader(spark, config.data, config.analysis)
    schools, general_survey, d75_survey = loader.load_all(
        config.get_school_path(),
        config.get_survey_path("general"),
        config.get_survey_path("d75"),
    )

    logger.info("-" * 70)
    logger.info("PHASE 2: Filtering and merging surveys")
    logger.info("-" * 70)
    survey = prepare_survey(general_survey, d75_survey, config.analysis)

    logger.info("-" * 70)
    logger.info("PHASE 3: Correlation and reshape")
    logger.info("-" * 70)
    result = analyze(schools, survey, config.analysis)

    if render:
        logger.info("-" * 70)
        logger.info("PHASE 4: Visualization")
        logger.info("-" * 70)
        render_outputs(result, config)

    return result
