"""
Visualization module for survey analysis charts.
"""

from .survey_viz import (
    create_all_visualizations,
    create_correlation_bar_chart,
    create_correlation_scatter_plots,
    create_response_box_plot,
)

__all__ = [
    "create_all_visualizations",
    "create_correlation_bar_chart",
    "create_correlation_scatter_plots",
    "create_response_box_plot",
]
