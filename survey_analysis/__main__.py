"""
Main application entry point for Survey Analysis.

This module orchestrates the complete workflow:
1. Initialize configuration and logging
2. Start Spark
3. Run the survey analysis pipeline and print its reports
"""

import sys
import warnings

from .analysis.basic_stats import print_statistics_report
from .analysis.correlation import print_correlation_report
from .config import load_config
from .data.spark_manager import SparkSessionManager
from .pipeline import run_pipeline
from .utils.file_utils import ensure_directory_exists
from .utils.logger import setup_logger


def main(target_column: str | None = None) -> None:
    """
    Main application entrypoint.

    Args:
        target_column: Column to correlate survey fields against.
            Defaults to the configured target (avg_sat_score).
    """
    # Suppress Java/Spark warnings for cleaner output
    warnings.filterwarnings("ignore")

    print("\n" + "=" * 70)
    print("NYC School Survey Analysis")
    print("=" * 70 + "\n", flush=True)

    config = load_config()
    if target_column is not None:
        config.analysis.TARGET_COLUMN = target_column

    logger = setup_logger(log_dir=config.data.LOG_DIR)

    logger.info("=" * 70)
    logger.info("Survey Analysis Application Started")
    logger.info("=" * 70)

    try:
        ensure_directory_exists(config.data.ARTIFACT_DIR)
        logger.info(f"Data directory: {config.data.DATA_DIR}")
        logger.info(f"Artifact directory: {config.data.ARTIFACT_DIR}")

        with SparkSessionManager(config.spark) as spark:
            logger.info("Spark session initialized")

            result = run_pipeline(spark, config)

            print_statistics_report(result.target_statistics)
            print_correlation_report(
                result.correlated,
                target_column=config.analysis.TARGET_COLUMN,
                threshold=config.analysis.CORRELATION_THRESHOLD,
            )

            print("✓ Outputs written:", flush=True)
            for name, path in result.outputs.items():
                print(f"  - {name}: {path}", flush=True)

    except KeyboardInterrupt:
        logger.info("\nApplication interrupted by user")
        print("\n\n⚠ Application interrupted by user")
        sys.exit(1)

    except Exception as e:  # noqa: BLE001
        logger.error("Application failed with error: %s", e, exc_info=True)
        print(f"\n✗ Error: {e}", flush=True)
        sys.exit(1)


if __name__ == "__main__":
    column = sys.argv[1] if len(sys.argv) > 1 else None
    main(target_column=column)
