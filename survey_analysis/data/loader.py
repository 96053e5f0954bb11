"""
Input loader module.

Reads the school metrics CSV and the two tab-separated survey files into
Spark DataFrames with header-derived column names and inferred types.
"""

from pathlib import Path

from pyspark.sql import DataFrame, SparkSession

from ..config import AnalysisConfig, DataConfig
from ..utils.file_utils import get_file_size
from ..utils.logger import get_logger
from .validator import DataValidator


class SurveyDataLoader:
    """
    Loader for the school metrics and survey tables.

    Every file is validated before it is read and every table is checked for
    the columns later stages depend on. Any failure raises immediately.
    """

    def __init__(
        self,
        spark: SparkSession,
        data_config: DataConfig | None = None,
        analysis_config: AnalysisConfig | None = None,
    ):
        """
        Initialize the loader.

        Args:
            spark: Active Spark session
            data_config: Data configuration. If None, uses default config.
            analysis_config: Analysis configuration. If None, uses default config.
        """
        from ..config import get_analysis_config, get_data_config

        self.spark = spark
        self.data_config = data_config if data_config is not None else get_data_config()
        self.analysis_config = (
            analysis_config if analysis_config is not None else get_analysis_config()
        )
        self.validator = DataValidator()
        self.logger = get_logger()

    def _check_file(self, file_path: str) -> None:
        if not Path(file_path).exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        valid, error = self.validator.validate_input_file(file_path)
        if not valid:
            raise ValueError(error)
        self.logger.info(f"Reading {file_path} ({get_file_size(file_path)})")

    def _check_columns(self, df: DataFrame, required: list[str], table_name: str) -> None:
        valid, error = self.validator.validate_columns(df, required, table_name)
        if not valid:
            raise ValueError(error)

    def read_delimited(
        self, file_path: str, delimiter: str = ",", encoding: str = "utf-8"
    ) -> DataFrame:
        """
        Read a delimited text file with a header row.

        Args:
            file_path: Path to the file
            delimiter: Field separator
            encoding: Text encoding of the file

        Returns:
            DataFrame with inferred column types

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is unreadable or empty
        """
        self._check_file(file_path)

        df = self.spark.read.csv(
            file_path,
            sep=delimiter,
            header=True,
            inferSchema=True,
            encoding=encoding,
            mode="FAILFAST",
        )

        self.logger.info(f"  Loaded {df.count():,} rows, {len(df.columns)} columns")
        return df

    def load_school_metrics(self, file_path: str) -> DataFrame:
        """
        Load the pre-aggregated school metrics table.

        Args:
            file_path: Path to the comma-separated metrics file

        Returns:
            DataFrame with one row per school
        """
        df = self.read_delimited(file_path, delimiter=",")
        self._check_columns(
            df,
            [self.analysis_config.KEY_COLUMN, self.analysis_config.TARGET_COLUMN],
            "school metrics",
        )
        return df

    def load_survey(self, file_path: str, require_school_type: bool = False) -> DataFrame:
        """
        Load a tab-separated survey table.

        Args:
            file_path: Path to the survey file
            require_school_type: Whether the school type column must be present

        Returns:
            DataFrame with one row per surveyed school
        """
        df = self.read_delimited(
            file_path, delimiter="\t", encoding=self.data_config.SURVEY_ENCODING
        )

        required = [
            self.analysis_config.SURVEY_FIRST_COLUMN,
            self.analysis_config.SURVEY_LAST_COLUMN,
        ]
        if require_school_type:
            required.append(self.analysis_config.SCHOOL_TYPE_COLUMN)

        self._check_columns(df, required, f"survey {file_path}")
        return df

    def load_all(
        self, school_path: str, general_survey_path: str, d75_survey_path: str
    ) -> tuple[DataFrame, DataFrame, DataFrame]:
        """
        Load all three input tables.

        Args:
            school_path: Path to the school metrics CSV
            general_survey_path: Path to the general-education survey TSV
            d75_survey_path: Path to the District 75 survey TSV

        Returns:
            Tuple of (school metrics, general survey, District 75 survey)
        """
        schools = self.load_school_metrics(school_path)
        general_survey = self.load_survey(general_survey_path, require_school_type=True)
        d75_survey = self.load_survey(d75_survey_path)
        return schools, general_survey, d75_survey
