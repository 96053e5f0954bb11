"""
Data module for loading inputs, validating them and managing Spark.
"""

from .loader import SurveyDataLoader
from .spark_manager import SparkSessionManager
from .validator import DataValidator

__all__ = [
    "SurveyDataLoader",
    "SparkSessionManager",
    "DataValidator",
]
