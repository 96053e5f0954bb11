"""
Configuration module for the Survey Analysis application.

Contains all configuration settings for data paths, Spark parameters,
and analysis options.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class DataConfig:
    """Configuration for data paths and files."""

    # Data directories
    DATA_DIR: str = "data"
    LOG_DIR: str = "artifacts/logs"
    ARTIFACT_DIR: str = "artifacts"

    # Pre-aggregated school metrics (comma separated)
    SCHOOL_FILE: str = "combined.csv"

    # Survey files mapping (tab separated)
    SURVEY_FILES: dict[str, str] = field(default_factory=dict)
    SURVEY_ENCODING: str = "windows-1252"

    def __post_init__(self) -> None:
        """Initialize survey files mapping after dataclass creation."""
        if not self.SURVEY_FILES:
            self.SURVEY_FILES = {
                "general": "survey_all.txt",
                "d75": "survey_d75.txt",
            }


def _get_spark_master() -> str:
    """Get Spark master URL, preferring the SPARK_MASTER environment variable."""
    return os.environ.get("SPARK_MASTER", "local[*]")


@dataclass
class SparkConfig:
    """Configuration for Spark session parameters."""

    DRIVER_MEMORY: str = "2g"
    EXECUTOR_MEMORY: str = "2g"

    # The datasets are a few thousand rows at most
    SQL_SHUFFLE_PARTITIONS: int = 4

    # Arrow speeds up toPandas() for plotting
    ARROW_ENABLED: bool = True

    MASTER: str = field(default_factory=_get_spark_master)
    APP_NAME: str = "SurveyAnalysis"


@dataclass
class AnalysisConfig:
    """Configuration for the filter, merge and correlation stages."""

    KEY_COLUMN: str = "DBN"
    SURVEY_KEY_COLUMN: str = "dbn"
    TARGET_COLUMN: str = "avg_sat_score"

    # Row filter applied to the general-education survey
    SCHOOL_TYPE_COLUMN: str = "schooltype"
    SCHOOL_TYPE: str = "High School"

    # Survey projection (inclusive, by column position)
    SURVEY_FIRST_COLUMN: str = "dbn"
    SURVEY_LAST_COLUMN: str = "aca_tot_11"

    # Score range used for correlation and reshaping (inclusive)
    SCORE_FIRST_COLUMN: str = "saf_p_11"
    SCORE_LAST_COLUMN: str = "aca_tot_11"

    CORRELATION_THRESHOLD: float = 0.25
    VALIDATE_UNIQUE_KEYS: bool = True

    # Visualization
    MAX_SCATTER_PLOTS: int = 4
    SCATTER_ALPHA: float = 0.5


@dataclass
class AppConfig:
    """Main application configuration combining all config sections."""

    data: DataConfig
    spark: SparkConfig
    analysis: AnalysisConfig

    def __init__(self) -> None:
        """Initialize all configuration sections."""
        self.data = DataConfig()
        self.spark = SparkConfig()
        self.analysis = AnalysisConfig()

    def get_school_path(self) -> str:
        """Get full path to the school metrics file."""
        return str(Path(self.data.DATA_DIR) / self.data.SCHOOL_FILE)

    def get_survey_path(self, survey_name: str) -> str:
        """Get full path to a survey file by its short name."""
        if survey_name not in self.data.SURVEY_FILES:
            raise ValueError(f"Unknown survey: {survey_name}")
        return str(Path(self.data.DATA_DIR) / self.data.SURVEY_FILES[survey_name])

    def get_artifact_path(self, artifact_type: str = "visualizations") -> str:
        """
        Get full path to an artifacts subdirectory (visualizations, reports, etc.).

        Args:
            artifact_type: Type of artifact (visualizations, reports, etc.)

        Returns:
            Full path to the artifact directory
        """
        return str(Path(self.data.ARTIFACT_DIR) / artifact_type)


# Global configuration instance cache
class _ConfigCache:  # noqa: N801
    """Cache for application configuration."""

    _instance: AppConfig | None = None

    @classmethod
    def get(cls) -> AppConfig:
        """Get or create the global configuration instance."""
        if cls._instance is None:
            cls._instance = AppConfig()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next get() builds a fresh one."""
        cls._instance = None


def get_config() -> AppConfig:
    """Get the global configuration instance (singleton pattern)."""
    return _ConfigCache.get()


def reset_config() -> None:
    """Discard the global configuration instance."""
    _ConfigCache.reset()


def load_config() -> AppConfig:
    """
    Load configuration from environment variables (if any) and return config instance.

    Environment variables can override default values:
    - SA_DATA_DIR: Override input data directory
    - SA_LOG_DIR: Override log directory
    - SA_ARTIFACT_DIR: Override artifact output directory
    - SA_SURVEY_ENCODING: Override survey file encoding
    - SA_TARGET_COLUMN: Override the column correlated against
    - SA_CORRELATION_THRESHOLD: Override the absolute correlation cutoff
    - SA_SPARK_DRIVER_MEMORY: Override Spark driver memory
    - SPARK_MASTER: Override Spark master URL

    Returns:
        AppConfig: The application configuration instance
    """
    config = get_config()

    if "SA_DATA_DIR" in os.environ:
        config.data.DATA_DIR = os.environ["SA_DATA_DIR"]

    if "SA_LOG_DIR" in os.environ:
        config.data.LOG_DIR = os.environ["SA_LOG_DIR"]

    if "SA_ARTIFACT_DIR" in os.environ:
        config.data.ARTIFACT_DIR = os.environ["SA_ARTIFACT_DIR"]

    if "SA_SURVEY_ENCODING" in os.environ:
        config.data.SURVEY_ENCODING = os.environ["SA_SURVEY_ENCODING"]

    if "SA_TARGET_COLUMN" in os.environ:
        config.analysis.TARGET_COLUMN = os.environ["SA_TARGET_COLUMN"]

    if "SA_CORRELATION_THRESHOLD" in os.environ:
        config.analysis.CORRELATION_THRESHOLD = float(os.environ["SA_CORRELATION_THRESHOLD"])

    if "SA_SPARK_DRIVER_MEMORY" in os.environ:
        config.spark.DRIVER_MEMORY = os.environ["SA_SPARK_DRIVER_MEMORY"]

    config.spark.MASTER = _get_spark_master()

    return config


# Convenience access to configuration
def get_data_config() -> DataConfig:
    """Get data configuration."""
    return get_config().data


def get_spark_config() -> SparkConfig:
    """Get Spark configuration."""
    return get_config().spark


def get_analysis_config() -> AnalysisConfig:
    """Get analysis configuration."""
    return get_config().analysis
