"""Performance-metrics aggregation.

This module rolls the unified report matrix up to one row per
(Date, Type, Campaign) and derives cost and conversion ratios with pandas.

Example:
    >>> rows = (PerformanceMetricsAggregator(report.unified_matrix())
    ...     .coerce_metrics()
    ...     .aggregate()
    ...     .add_ratios()
    ...     .to_rows())
"""

from typing import Any, Dict, List, Sequence

import pandas as pd
from loguru import logger

from adsreport.domain.rows import PerformanceMetricRow

GROUP_COLUMNS: Dict[str, str] = {
    "Date": "date",
    "Type": "type",
    "Campaing Name": "campaign",
}

# Unified column -> summed metric
METRIC_COLUMNS: Dict[str, str] = {
    "Amount Spent": "spend",
    "Impressions": "impressions",
    "Clicks (all)": "clicks",
    "Link Clicks": "link_clicks",
    "Landing Page views": "landing_page_views",
    "Add To Cart": "add_to_cart",
    "Initiated Checkout": "initiated_checkout",
    "Purchase": "purchases",
    "Purchase Conversion Value": "purchase_value",
    "Leads": "leads",
}

RATIO_PRECISION = 4


def safe_divide(numerator: pd.Series, denominator: pd.Series, scale: float = 1.0) -> pd.Series:
    """Element-wise ratio; 0 wherever the denominator is 0."""
    ratio = numerator / denominator.where(denominator != 0)
    return (ratio * scale).fillna(0.0)


class PerformanceMetricsAggregator:
    """Chainable aggregator over a unified header + rows matrix.

    Each method returns self; ``to_rows()`` / ``to_matrix()`` finish the chain.

    Attributes:
        df: The DataFrame being processed
    """

    def __init__(self, matrix: Sequence[Sequence[Any]]):
        """Initialize with a matrix whose first row is the unified header.

        Raises:
            ValueError: If a grouping or metric column is missing from the header
        """
        if not matrix:
            self.df = pd.DataFrame(columns=list(GROUP_COLUMNS) + list(METRIC_COLUMNS))
        else:
            header = list(matrix[0])
            missing = [c for c in list(GROUP_COLUMNS) + list(METRIC_COLUMNS) if c not in header]
            if missing:
                raise ValueError(f"Matrix is missing columns: {missing}")
            self.df = pd.DataFrame([list(r) for r in matrix[1:]], columns=header)
        logger.debug(f"PerformanceMetricsAggregator initialized with {len(self.df)} rows")

    def get_df(self) -> pd.DataFrame:
        return self.df

    def coerce_metrics(self) -> "PerformanceMetricsAggregator":
        """Convert metric columns to floats; unparseable values count as 0."""
        if self.df.empty:
            return self
        for column in METRIC_COLUMNS:
            self.df[column] = pd.to_numeric(self.df[column], errors="coerce").fillna(0.0)
        return self

    def aggregate(self) -> "PerformanceMetricsAggregator":
        """Sum metrics per (Date, Type, Campaign)."""
        columns = list(GROUP_COLUMNS) + list(METRIC_COLUMNS)
        if self.df.empty:
            self.df = pd.DataFrame(columns=list(GROUP_COLUMNS.values()) + list(METRIC_COLUMNS.values()))
            return self

        rows_before = len(self.df)
        grouped = (
            self.df[columns]
            .groupby(list(GROUP_COLUMNS), as_index=False, sort=True)
            .agg({column: "sum" for column in METRIC_COLUMNS})
        )
        self.df = grouped.rename(columns={**GROUP_COLUMNS, **METRIC_COLUMNS})
        logger.info(f"Aggregated performance metrics: {rows_before} rows -> {len(self.df)} groups")
        return self

    def add_ratios(self) -> "PerformanceMetricsAggregator":
        """Derive ROAS, ROI, CPA, CTR, CPC, CPM, conversion rate and cost per lead.

        CTR and conversion rate are percentages; CPM is per thousand impressions.
        """
        if self.df.empty:
            for name in ("roas", "roi", "cpa", "ctr", "cpc", "cpm", "conversion_rate", "cost_per_lead"):
                self.df[name] = pd.Series(dtype=float)
            return self

        df = self.df
        df["roas"] = safe_divide(df["purchase_value"], df["spend"])
        df["roi"] = safe_divide(df["purchase_value"] - df["spend"], df["spend"])
        df["cpa"] = safe_divide(df["spend"], df["purchases"])
        df["ctr"] = safe_divide(df["clicks"], df["impressions"], scale=100.0)
        df["cpc"] = safe_divide(df["spend"], df["clicks"])
        df["cpm"] = safe_divide(df["spend"], df["impressions"], scale=1000.0)
        df["conversion_rate"] = safe_divide(df["purchases"], df["clicks"], scale=100.0)
        df["cost_per_lead"] = safe_divide(df["spend"], df["leads"])
        return self

    def to_rows(self) -> List[PerformanceMetricRow]:
        rows = []
        numeric = [n for n in PerformanceMetricRow.attribute_names() if n not in GROUP_COLUMNS.values()]
        for record in self.df.to_dict("records"):
            rows.append(
                PerformanceMetricRow(
                    date=str(record["date"]),
                    type=str(record["type"]),
                    campaign=str(record["campaign"]),
                    **{name: round(float(record[name]), RATIO_PRECISION) for name in numeric},
                )
            )
        return rows

    def to_matrix(self) -> List[List[Any]]:
        return [PerformanceMetricRow.headers()] + [row.to_values() for row in self.to_rows()]


def build_performance_metrics(matrix: Sequence[Sequence[Any]]) -> List[List[Any]]:
    """Unified matrix -> performance-metrics matrix (header included)."""
    return (
        PerformanceMetricsAggregator(matrix)
        .coerce_metrics()
        .aggregate()
        .add_ratios()
        .to_matrix()
    )
