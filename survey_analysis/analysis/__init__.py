"""
Analysis module for filtering, merging, correlating and reshaping survey data.
"""

from .basic_stats import get_column_statistics, print_statistics_report
from .correlation import (
    CorrelationEntry,
    compute_target_correlations,
    export_correlations,
    filter_correlations,
    find_correlated_fields,
    print_correlation_report,
)
from .filtering import column_range, filter_school_type, project_column_range
from .merging import concat_surveys, get_join_coverage, left_join_on_key, rename_key
from .reshape import decode_survey_field, reshape_survey_scores

__all__ = [
    "get_column_statistics",
    "print_statistics_report",
    "CorrelationEntry",
    "compute_target_correlations",
    "filter_correlations",
    "find_correlated_fields",
    "export_correlations",
    "print_correlation_report",
    "column_range",
    "filter_school_type",
    "project_column_range",
    "concat_surveys",
    "rename_key",
    "left_join_on_key",
    "get_join_coverage",
    "decode_survey_field",
    "reshape_survey_scores",
]
