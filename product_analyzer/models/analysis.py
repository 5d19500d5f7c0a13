"""
Analysis result models

Immutable value objects produced by one analysis run. A new AnalysisResult is
built for every upload or threshold change; nothing here is updated in place.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from product_analyzer.utils.helpers import safe_divide


class SegmentType(str, Enum):
    """Mutually exclusive performance buckets, in classification priority order."""
    TOP_PERFORMERS = "top_performers"
    LOW_PERFORMERS = "low_performers"
    ZERO_REVENUE = "zero_revenue"
    IMPRESSION_ONLY = "impression_only"
    OTHER = "other"


class ThresholdMode(str, Enum):
    """How the TOP/LOW performer boundary is chosen."""
    AUTO = "auto"  # global average ROAS
    MANUAL = "manual"  # caller-supplied target ROAS


SEGMENT_LABELS = {
    SegmentType.TOP_PERFORMERS: "Top Products",
    SegmentType.LOW_PERFORMERS: "Low Performing Products",
    SegmentType.ZERO_REVENUE: "Zero Revenue Products",
    SegmentType.IMPRESSION_ONLY: "Impression Only Products",
    SegmentType.OTHER: "Uncategorized",
}

SEGMENT_DESCRIPTIONS = {
    SegmentType.TOP_PERFORMERS: "ROAS ≥ threshold. High efficiency.",
    SegmentType.LOW_PERFORMERS: "0 < ROAS < threshold. Generating revenue but inefficiently.",
    SegmentType.ZERO_REVENUE: "Clicks > 0 but no revenue. Budget wastage.",
    SegmentType.IMPRESSION_ONLY: "Impressions > 0 but 0 clicks. Visibility without traffic.",
    SegmentType.OTHER: "Data insufficient for categorization.",
}


@dataclass(frozen=True)
class ProductRecord:
    """One product row of the export"""
    id: str
    brand: str = "Unknown"
    device: str = "Unknown"
    clicks: float = 0.0
    impressions: float = 0.0
    cost: float = 0.0
    conversions: float = 0.0
    conversion_value: float = 0.0
    search_impression_share: float = 0.0  # 0-100 scale

    @property
    def roas(self) -> float:
        return safe_divide(self.conversion_value, self.cost)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "brand": self.brand,
            "device": self.device,
            "clicks": self.clicks,
            "impressions": self.impressions,
            "cost": self.cost,
            "conversions": self.conversions,
            "conversion_value": self.conversion_value,
            "search_impression_share": self.search_impression_share,
            "roas": self.roas,
        }


@dataclass(frozen=True)
class DimensionMetrics:
    """Brand or device rollup"""
    name: str
    cost: float = 0.0
    revenue: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    roas: float = 0.0

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "cost": self.cost,
            "revenue": self.revenue,
            "clicks": self.clicks,
            "conversions": self.conversions,
            "roas": self.roas,
        }


@dataclass(frozen=True)
class SegmentMetrics:
    type: SegmentType
    count: int = 0
    total_cost: float = 0.0
    total_revenue: float = 0.0
    total_clicks: float = 0.0
    roas: float = 0.0
    average_cpc: float = 0.0
    cost_percentage: float = 0.0
    revenue_percentage: float = 0.0

    @property
    def label(self) -> str:
        return SEGMENT_LABELS[self.type]

    def to_dict(self) -> Dict:
        return {
            "type": self.type.value,
            "label": self.label,
            "description": SEGMENT_DESCRIPTIONS[self.type],
            "count": self.count,
            "total_cost": self.total_cost,
            "total_revenue": self.total_revenue,
            "total_clicks": self.total_clicks,
            "roas": self.roas,
            "average_cpc": self.average_cpc,
            "cost_percentage": self.cost_percentage,
            "revenue_percentage": self.revenue_percentage,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Complete segmentation report for one export"""
    total_products: int
    total_cost: float
    total_revenue: float
    average_roas: float
    average_impression_share: float
    threshold_roas: float
    threshold_mode: ThresholdMode
    date_range_days: int
    segments: Mapping[SegmentType, SegmentMetrics] = field(default_factory=lambda: MappingProxyType({}))
    brand_performance: Tuple[DimensionMetrics, ...] = ()
    device_performance: Tuple[DimensionMetrics, ...] = ()
    potential_products: Tuple[ProductRecord, ...] = ()
    overspending_products: Tuple[ProductRecord, ...] = ()

    def to_dict(self) -> Dict:
        return {
            "total_products": self.total_products,
            "total_cost": self.total_cost,
            "total_revenue": self.total_revenue,
            "average_roas": self.average_roas,
            "average_impression_share": self.average_impression_share,
            "threshold": {
                "mode": self.threshold_mode.value,
                "roas": self.threshold_roas,
            },
            "date_range_days": self.date_range_days,
            "segments": {seg_type.value: seg.to_dict() for seg_type, seg in self.segments.items()},
            "brand_performance": [d.to_dict() for d in self.brand_performance],
            "device_performance": [d.to_dict() for d in self.device_performance],
            "potential_products": [p.to_dict() for p in self.potential_products],
            "overspending_products": [p.to_dict() for p in self.overspending_products],
        }
