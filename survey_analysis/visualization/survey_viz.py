"""
Visualization module for the survey/SAT correlation analysis.

Provides functions to generate scatter plots of correlated survey fields
against the target score, a grouped box plot of survey scores by question
and respondent type, and a bar chart of all target correlations.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib import rcParams

from ..analysis.correlation import CorrelationEntry
from ..analysis.reshape import QUESTION_CODES
from ..utils.logger import get_logger

# Configure matplotlib for better-looking plots
rcParams["font.family"] = "DejaVu Sans"
rcParams["figure.figsize"] = (12, 6)
rcParams["axes.labelsize"] = 11
rcParams["xtick.labelsize"] = 10
rcParams["ytick.labelsize"] = 10
rcParams["legend.fontsize"] = 10

RESPONDENT_ORDER = ["parent", "teacher", "student"]


def _save_figure(fig: plt.Figure, output_path: str) -> str:
    full_path = Path(output_path)
    full_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(full_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return str(full_path)


def create_scatter_plot(
    df: pd.DataFrame,
    x_column: str,
    y_column: str = "avg_sat_score",
    alpha: float = 0.5,
    output_path: str = "scatter.png",
    title: str | None = None,
) -> str:
    """
    Create a scatter plot of one column against another on a plain background.

    Args:
        df: pandas DataFrame containing both columns
        x_column: Column on the x-axis
        y_column: Column on the y-axis (default: avg_sat_score)
        alpha: Point transparency
        output_path: Output file path
        title: Optional plot title

    Returns:
        Path to saved PNG file
    """
    logger = get_logger()

    for col in (x_column, y_column):
        if col not in df.columns:
            raise ValueError(f"Column '{col}' not found in plot data")

    with sns.axes_style("white"):
        fig, ax = plt.subplots(figsize=(8, 6))
        sns.scatterplot(data=df, x=x_column, y=y_column, alpha=alpha, edgecolor=None, ax=ax)
        sns.despine(ax=ax)

    ax.set_xlabel(x_column, fontsize=12, weight="bold")
    ax.set_ylabel(y_column, fontsize=12, weight="bold")
    if title:
        ax.set_title(title, fontsize=13, weight="bold", pad=15)

    path = _save_figure(fig, output_path)
    logger.info(f"Scatter plot saved to {path}")
    return path


def create_correlation_scatter_plots(
    df: pd.DataFrame,
    correlated: list[CorrelationEntry],
    target_column: str = "avg_sat_score",
    output_directory: str = "visualizations",
    max_plots: int = 4,
    alpha: float = 0.5,
) -> list[str]:
    """
    Create one scatter plot per correlated survey field against the target.

    Args:
        df: Joined table as pandas DataFrame
        correlated: Correlation entries above the threshold, strongest first
        target_column: Column on the y-axis
        output_directory: Directory for output files
        max_plots: Maximum number of plots to create
        alpha: Point transparency

    Returns:
        List of paths to saved PNG files
    """
    output_dir = Path(output_directory)
    paths = []

    for entry in correlated[:max_plots]:
        paths.append(
            create_scatter_plot(
                df,
                x_column=entry.variable,
                y_column=target_column,
                alpha=alpha,
                output_path=str(output_dir / f"scatter_{entry.variable}_vs_{target_column}.png"),
                title=f"{entry.variable} vs {target_column} (r = {entry.coefficient:.2f})",
            )
        )

    return paths


def create_response_box_plot(
    long_df: pd.DataFrame,
    output_path: str = "visualizations/survey_response_box_plot.png",
) -> str:
    """
    Create a box plot of survey scores grouped by question and respondent type.

    Args:
        long_df: Long-form survey table with question, respondent_type and score columns
        output_path: Output file path

    Returns:
        Path to saved PNG file
    """
    logger = get_logger()

    for col in ("question", "respondent_type", "score"):
        if col not in long_df.columns:
            raise ValueError(f"Column '{col}' not found in plot data")
    if long_df["score"].notna().sum() == 0:
        raise ValueError("No survey scores to plot")

    present_questions = set(long_df["question"].dropna())
    question_order = [code for code in QUESTION_CODES if code in present_questions]
    present_types = set(long_df["respondent_type"].dropna())
    hue_order = [kind for kind in RESPONDENT_ORDER if kind in present_types]

    fig, ax = plt.subplots(figsize=(12, 7))
    sns.boxplot(
        data=long_df,
        x="question",
        y="score",
        hue="respondent_type",
        order=question_order,
        hue_order=hue_order,
        palette="Set2",
        ax=ax,
    )

    ax.set_xticks(range(len(question_order)))
    ax.set_xticklabels([f"{code}\n{QUESTION_CODES[code]}" for code in question_order])
    ax.set_xlabel("Question", fontsize=12, weight="bold")
    ax.set_ylabel("Score", fontsize=12, weight="bold")
    ax.set_title(
        "Survey Scores by Question and Respondent Type",
        fontsize=13,
        weight="bold",
        pad=20,
    )
    ax.legend(title="Respondent Type", fontsize=10, title_fontsize=11)

    path = _save_figure(fig, output_path)
    logger.info(f"Box plot saved to {path}")
    return path


def create_correlation_bar_chart(
    entries: list[CorrelationEntry],
    target_column: str = "avg_sat_score",
    threshold: float = 0.25,
    output_path: str = "visualizations/survey_correlation_bar_chart.png",
) -> str:
    """
    Create a bar chart of every survey field's correlation with the target.

    Bars above the threshold are highlighted and the threshold is drawn as
    reference lines.

    Args:
        entries: All correlation entries (unfiltered)
        target_column: Column the entries were correlated against
        threshold: Absolute cutoff to mark
        output_path: Output file path

    Returns:
        Path to saved PNG file
    """
    logger = get_logger()

    fig, ax = plt.subplots(figsize=(12, 6))

    names = [entry.variable for entry in entries]
    values = [entry.coefficient for entry in entries]
    colors = ["#FF6B6B" if abs(value) > threshold else "#95A5A6" for value in values]

    x = np.arange(len(names))
    ax.bar(x, values, color=colors, edgecolor="black", linewidth=0.8)
    ax.axhline(threshold, color="black", linestyle="--", linewidth=1)
    ax.axhline(-threshold, color="black", linestyle="--", linewidth=1)
    ax.axhline(0, color="black", linewidth=0.8)

    ax.set_xlabel("Survey Field", fontsize=12, weight="bold")
    ax.set_ylabel("Pearson r", fontsize=12, weight="bold")
    ax.set_title(
        f"Correlation of Survey Fields with {target_column}\n(|r| > {threshold} highlighted)",
        fontsize=13,
        weight="bold",
        pad=20,
    )
    ax.set_xticks(x)
    ax.set_xticklabels(names, rotation=45, ha="right")

    path = _save_figure(fig, output_path)
    logger.info(f"Correlation bar chart saved to {path}")
    return path


def create_all_visualizations(
    joined_df: pd.DataFrame,
    long_df: pd.DataFrame,
    entries: list[CorrelationEntry],
    correlated: list[CorrelationEntry],
    target_column: str = "avg_sat_score",
    threshold: float = 0.25,
    output_directory: str = "visualizations",
    max_scatter_plots: int = 4,
    alpha: float = 0.5,
) -> dict[str, str]:
    """
    Generate all survey analysis visualizations.

    Args:
        joined_df: Joined table as pandas DataFrame
        long_df: Long-form survey table as pandas DataFrame
        entries: All correlation entries
        correlated: Correlation entries above the threshold
        target_column: Column correlated against
        threshold: Absolute correlation cutoff
        output_directory: Directory for output files
        max_scatter_plots: Maximum number of scatter plots
        alpha: Scatter point transparency

    Returns:
        Dictionary mapping visualization names to file paths
    """
    logger = get_logger()

    output_dir = Path(output_directory)
    output_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Generating survey analysis visualizations...")

    visualizations = {
        "correlation_bar_chart": create_correlation_bar_chart(
            entries,
            target_column=target_column,
            threshold=threshold,
            output_path=str(output_dir / "survey_correlation_bar_chart.png"),
        ),
        "response_box_plot": create_response_box_plot(
            long_df, output_path=str(output_dir / "survey_response_box_plot.png")
        ),
    }

    scatter_paths = create_correlation_scatter_plots(
        joined_df,
        correlated,
        target_column=target_column,
        output_directory=str(output_dir),
        max_plots=max_scatter_plots,
        alpha=alpha,
    )
    for entry, path in zip(correlated, scatter_paths):
        visualizations[f"scatter_{entry.variable}"] = path

    logger.info(f"Generated {len(visualizations)} visualizations")
    return visualizations
