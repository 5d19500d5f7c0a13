"""
Product Performance Analysis Service

Runs one analysis of a product export:

    text -> rows -> header/columns -> ProductRecords -> segments -> AnalysisResult

Each call builds everything from scratch and returns a new immutable
AnalysisResult. Abort-class problems (empty file, no identifier column,
missing cost/revenue columns) raise AnalysisError; bad numeric cells only
degrade to 0.
"""
from pathlib import Path
from typing import List, Optional, Sequence, Union

from product_analyzer.config import Settings, get_settings
from product_analyzer.models.analysis import AnalysisResult, ThresholdMode
from product_analyzer.services.column_resolver import resolve_columns
from product_analyzer.services.csv_parser import parse_csv
from product_analyzer.services.segmentation import (
    SegmentationEngine,
    aggregate_dimension,
    build_records,
    weighted_impression_share,
)
from product_analyzer.utils.helpers import safe_divide
from product_analyzer.utils.logger import log


def resolve_threshold(
    mode: ThresholdMode,
    average_roas: float,
    target_roas_pct: Optional[float] = None,
) -> float:
    """
    ROAS threshold for segmentation.

    AUTO uses the account average. MANUAL converts a percentage target into a
    ratio (1000 -> 10.0).
    """
    if mode == ThresholdMode.MANUAL:
        if target_roas_pct is None:
            raise ValueError("Manual threshold mode requires a target ROAS percentage")
        return target_roas_pct / 100
    return average_roas


class AnalysisService:
    """
    Segmentation analysis of a product performance export.

    Usage:
        service = AnalysisService()
        result = service.analyze_text(csv_text, mode="manual", target_roas_pct=800)
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def analyze_file(
        self,
        path: Union[str, Path],
        mode: Union[ThresholdMode, str] = ThresholdMode.AUTO,
        target_roas_pct: Optional[float] = None,
        encoding: str = "utf-8-sig",
    ) -> AnalysisResult:
        """Read an export from disk and analyse it."""
        text = Path(path).read_text(encoding=encoding)
        log.info(f"Analysing {Path(path).name}")
        return self.analyze_text(text, mode, target_roas_pct)

    def analyze_text(
        self,
        text: str,
        mode: Union[ThresholdMode, str] = ThresholdMode.AUTO,
        target_roas_pct: Optional[float] = None,
    ) -> AnalysisResult:
        """Parse export text and analyse it."""
        return self.analyze_rows(parse_csv(text), mode, target_roas_pct)

    def analyze_rows(
        self,
        rows: Sequence[List[str]],
        mode: Union[ThresholdMode, str] = ThresholdMode.AUTO,
        target_roas_pct: Optional[float] = None,
    ) -> AnalysisResult:
        """
        Analyse already parsed rows.

        Raises:
            AnalysisError: the rows cannot be interpreted as a product export
        """
        mode = ThresholdMode(mode)
        if mode == ThresholdMode.MANUAL and target_roas_pct is None:
            target_roas_pct = self.settings.default_target_roas_pct

        columns = resolve_columns(rows, max_rows=self.settings.header_search_rows)
        log.info(f"Header found at row {columns.header_row}")

        products = build_records(rows, columns)
        skipped = len(rows) - columns.header_row - 1 - len(products)
        if skipped:
            log.debug(f"Skipped {skipped} rows without an identifier")

        total_cost = sum(p.cost for p in products)
        total_revenue = sum(p.conversion_value for p in products)
        average_roas = safe_divide(total_revenue, total_cost)

        threshold = resolve_threshold(mode, average_roas, target_roas_pct)
        log.info(
            f"Analysing {len(products)} products: "
            f"avg ROAS {average_roas:.2f}, threshold {threshold:.2f} ({mode.value})"
        )

        outcome = SegmentationEngine(threshold).run(products, total_cost, total_revenue)

        return AnalysisResult(
            total_products=len(products),
            total_cost=total_cost,
            total_revenue=total_revenue,
            average_roas=average_roas,
            average_impression_share=weighted_impression_share(products),
            threshold_roas=threshold,
            threshold_mode=mode,
            date_range_days=self.settings.report_period_days,
            segments=outcome.segments,
            brand_performance=aggregate_dimension(products, 'brand'),
            device_performance=aggregate_dimension(products, 'device'),
            potential_products=outcome.potential_products,
            overspending_products=outcome.overspending_products,
        )
