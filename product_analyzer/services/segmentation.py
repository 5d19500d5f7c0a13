"""
Aggregation & Segmentation Engine

Turns resolved export rows into ProductRecords, rolls them up per brand and
per device, and classifies every product into exactly one segment against a
ROAS threshold:

    1. revenue > 0 and ROAS >= threshold   -> TOP_PERFORMERS
    2. revenue > 0                         -> LOW_PERFORMERS
    3. clicks > 0                          -> ZERO_REVENUE
    4. impressions > 0                     -> IMPRESSION_ONLY
    5. anything else                       -> OTHER

The threshold is a plain number here; choosing between the average ROAS and
a manual target happens in the analysis service.
"""
from collections import defaultdict
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from product_analyzer.models.analysis import (
    DimensionMetrics,
    ProductRecord,
    SegmentMetrics,
    SegmentType,
)
from product_analyzer.services.column_resolver import ColumnMap, NOT_FOUND
from product_analyzer.services.number_parser import clean_number
from product_analyzer.utils.helpers import safe_divide

UNKNOWN = "Unknown"

_NUMERIC_FIELDS = (
    'clicks',
    'impressions',
    'cost',
    'conversions',
    'conversion_value',
    'search_impression_share',
)


def _cell(row: Sequence[str], idx: int) -> Optional[str]:
    if idx == NOT_FOUND or idx >= len(row):
        return None
    return row[idx]


def build_record(row: Sequence[str], columns: ColumnMap) -> Optional[ProductRecord]:
    """Build a ProductRecord from one data row, None if the row has no identifier."""
    product_id = _cell(row, columns.index('id'))
    if not product_id:
        return None

    values = {name: clean_number(_cell(row, columns.index(name))) for name in _NUMERIC_FIELDS}
    return ProductRecord(
        id=product_id,
        brand=_cell(row, columns.index('brand')) or UNKNOWN,
        device=_cell(row, columns.index('device')) or UNKNOWN,
        **values,
    )


def build_records(rows: Sequence[Sequence[str]], columns: ColumnMap) -> List[ProductRecord]:
    """Records for every row after the header, skipping rows without an identifier."""
    products = []
    for row in rows[columns.header_row + 1:]:
        record = build_record(row, columns)
        if record is not None:
            products.append(record)
    return products


def aggregate_dimension(products: Iterable[ProductRecord], attribute: str) -> Tuple[DimensionMetrics, ...]:
    """
    Roll products up by brand or device.

    Keys are the exact attribute strings. The result is sorted by cost,
    highest first.
    """
    totals: Dict[str, Dict[str, float]] = defaultdict(
        lambda: {'cost': 0.0, 'revenue': 0.0, 'clicks': 0.0, 'conversions': 0.0}
    )
    for p in products:
        bucket = totals[getattr(p, attribute)]
        bucket['cost'] += p.cost
        bucket['revenue'] += p.conversion_value
        bucket['clicks'] += p.clicks
        bucket['conversions'] += p.conversions

    metrics = [
        DimensionMetrics(
            name=name,
            cost=t['cost'],
            revenue=t['revenue'],
            clicks=t['clicks'],
            conversions=t['conversions'],
            roas=safe_divide(t['revenue'], t['cost']),
        )
        for name, t in totals.items()
    ]
    return tuple(sorted(metrics, key=lambda d: d.cost, reverse=True))


def weighted_impression_share(products: Iterable[ProductRecord]) -> float:
    """
    Impression-weighted average search impression share.

    Rows with zero impressions or a zero share are left out, so a reported
    0% share does not pull the average down.
    """
    weighted = 0.0
    impressions = 0.0
    for p in products:
        if p.impressions > 0 and p.search_impression_share > 0:
            weighted += p.search_impression_share * p.impressions
            impressions += p.impressions
    return safe_divide(weighted, impressions)


@dataclass(frozen=True)
class SegmentationOutcome:
    segments: Mapping[SegmentType, SegmentMetrics]
    potential_products: Tuple[ProductRecord, ...]
    overspending_products: Tuple[ProductRecord, ...]


class SegmentationEngine:
    """
    Classifies products against a fixed ROAS threshold.

    Usage:
        engine = SegmentationEngine(threshold=2.5)
        outcome = engine.run(products, total_cost, total_revenue)
    """

    # Search impression share bounds (0-100 scale)
    POTENTIAL_MAX_SHARE = 40.0  # efficient but under-exposed below this
    OVERSPENDING_MIN_SHARE = 50.0  # inefficient and over-exposed above this

    def __init__(self, threshold: float):
        self.threshold = threshold

    def classify(self, product: ProductRecord) -> SegmentType:
        if product.conversion_value > 0:
            if product.roas >= self.threshold:
                return SegmentType.TOP_PERFORMERS
            return SegmentType.LOW_PERFORMERS
        if product.clicks > 0:
            return SegmentType.ZERO_REVENUE
        if product.impressions > 0:
            return SegmentType.IMPRESSION_ONLY
        return SegmentType.OTHER

    def is_potential(self, product: ProductRecord) -> bool:
        """ROAS at or above threshold with a low, non-zero impression share."""
        share = product.search_impression_share
        return product.roas >= self.threshold and 0 < share < self.POTENTIAL_MAX_SHARE

    def is_overspending(self, product: ProductRecord) -> bool:
        """Spending below threshold ROAS while already highly visible."""
        return (
            product.cost > 0
            and product.roas < self.threshold
            and product.search_impression_share > self.OVERSPENDING_MIN_SHARE
        )

    def run(
        self,
        products: Sequence[ProductRecord],
        total_cost: float,
        total_revenue: float,
    ) -> SegmentationOutcome:
        """Classify every product and derive per-segment metrics and shortlists."""
        # Every segment is reported, even when empty
        totals = {
            seg_type: {'count': 0, 'cost': 0.0, 'revenue': 0.0, 'clicks': 0.0}
            for seg_type in SegmentType
        }
        potential = []
        overspending = []

        for p in products:
            bucket = totals[self.classify(p)]
            bucket['count'] += 1
            bucket['cost'] += p.cost
            bucket['revenue'] += p.conversion_value
            bucket['clicks'] += p.clicks

            if self.is_potential(p):
                potential.append(p)
            if self.is_overspending(p):
                overspending.append(p)

        segments = {
            seg_type: SegmentMetrics(
                type=seg_type,
                count=t['count'],
                total_cost=t['cost'],
                total_revenue=t['revenue'],
                total_clicks=t['clicks'],
                roas=safe_divide(t['revenue'], t['cost']),
                average_cpc=safe_divide(t['cost'], t['clicks']),
                cost_percentage=safe_divide(t['cost'], total_cost) * 100,
                revenue_percentage=safe_divide(t['revenue'], total_revenue) * 100,
            )
            for seg_type, t in totals.items()
        }

        return SegmentationOutcome(
            segments=MappingProxyType(segments),
            potential_products=tuple(sorted(potential, key=lambda p: p.conversion_value, reverse=True)),
            overspending_products=tuple(sorted(overspending, key=lambda p: p.cost, reverse=True)),
        )
