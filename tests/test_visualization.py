"""
Unit tests for the survey visualization module.
"""

from pathlib import Path

import pandas as pd
import pytest

from survey_analysis.analysis.correlation import CorrelationEntry
from survey_analysis.visualization.survey_viz import (
    create_all_visualizations,
    create_correlation_bar_chart,
    create_correlation_scatter_plots,
    create_response_box_plot,
)


@pytest.fixture  # type: ignore[misc]
def joined_pdf() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "DBN": ["01M015", "01M448", "02M296", "75K004"],
            "avg_sat_score": [1200.0, 1100.0, 1050.0, 900.0],
            "saf_s_11": [8.0, 7.0, None, 5.0],
            "saf_t_11": [7.5, 7.0, None, 6.0],
            "aca_s_11": [8.1, 7.2, None, 6.5],
            "eng_s_11": [7.0, 6.5, None, 6.2],
            "com_s_11": [6.9, 6.4, None, 6.1],
        }
    )


@pytest.fixture  # type: ignore[misc]
def long_pdf() -> pd.DataFrame:
    rows = []
    for dbn, base in [("01M015", 8.0), ("01M448", 7.0), ("75K004", 5.0)]:
        for question in ["saf", "com", "eng", "aca"]:
            for infix, respondent in [("p", "parent"), ("t", "teacher"), ("s", "student")]:
                rows.append(
                    {
                        "DBN": dbn,
                        "field": f"{question}_{infix}_11",
                        "score": base,
                        "respondent_type": respondent,
                        "question": question,
                    }
                )
    return pd.DataFrame(rows)


@pytest.fixture  # type: ignore[misc]
def correlated() -> list[CorrelationEntry]:
    return [
        CorrelationEntry("saf_s_11", 0.99, 3, 0.01),
        CorrelationEntry("aca_s_11", 0.97, 3, 0.03),
        CorrelationEntry("saf_t_11", 0.95, 3, 0.05),
        CorrelationEntry("eng_s_11", 0.90, 3, 0.10),
        CorrelationEntry("com_s_11", 0.85, 3, 0.15),
    ]


class TestScatterPlots:
    """Tests for per-field scatter plots."""

    def test_at_most_max_plots(
        self, joined_pdf: pd.DataFrame, correlated: list[CorrelationEntry], tmp_path: Path
    ) -> None:
        """Only the strongest fields are plotted."""
        paths = create_correlation_scatter_plots(
            joined_pdf, correlated, output_directory=str(tmp_path), max_plots=4
        )

        assert len(paths) == 4
        assert all(Path(path).is_file() for path in paths)
        assert not any("com_s_11" in path for path in paths)

    def test_missing_column_raises(
        self, joined_pdf: pd.DataFrame, tmp_path: Path
    ) -> None:
        with pytest.raises(ValueError, match="rr_s"):
            create_correlation_scatter_plots(
                joined_pdf,
                [CorrelationEntry("rr_s", 0.5, 3, None)],
                output_directory=str(tmp_path),
            )


class TestBoxPlot:
    """Tests for the grouped box plot."""

    def test_box_plot_written(self, long_pdf: pd.DataFrame, tmp_path: Path) -> None:
        path = create_response_box_plot(long_pdf, str(tmp_path / "box.png"))
        assert Path(path).is_file()

    def test_requires_long_form_columns(self, joined_pdf: pd.DataFrame, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="question"):
            create_response_box_plot(joined_pdf, str(tmp_path / "box.png"))

    def test_empty_scores_raise(self, long_pdf: pd.DataFrame, tmp_path: Path) -> None:
        long_pdf["score"] = None
        with pytest.raises(ValueError, match="No survey scores"):
            create_response_box_plot(long_pdf, str(tmp_path / "box.png"))


class TestAllVisualizations:
    """Tests for the combined chart generation."""

    def test_bar_chart_written(self, correlated: list[CorrelationEntry], tmp_path: Path) -> None:
        path = create_correlation_bar_chart(correlated, output_path=str(tmp_path / "bar.png"))
        assert Path(path).is_file()

    def test_all_visualizations(
        self,
        joined_pdf: pd.DataFrame,
        long_pdf: pd.DataFrame,
        correlated: list[CorrelationEntry],
        tmp_path: Path,
    ) -> None:
        outputs = create_all_visualizations(
            joined_pdf,
            long_pdf,
            correlated,
            correlated,
            output_directory=str(tmp_path / "viz"),
            max_scatter_plots=2,
        )

        assert set(outputs) == {
            "correlation_bar_chart",
            "response_box_plot",
            "scatter_saf_s_11",
            "scatter_aca_s_11",
        }
        assert all(Path(path).is_file() for path in outputs.values())
