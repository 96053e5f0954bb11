"""
NYC School Survey Analysis Package

Joins NYC school survey results onto school SAT metrics using PySpark,
correlates perceived safety, engagement, communication and academics with
average SAT scores, and charts the results.
"""

__version__ = "0.1.0"
__author__ = "Survey Analysis Team"

# Package metadata
__all__ = ["config", "data", "analysis", "visualization", "utils", "pipeline"]
