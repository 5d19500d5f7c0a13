"""Analysis result models for the Product Performance Analyzer"""

from product_analyzer.models.analysis import (
    AnalysisResult,
    DimensionMetrics,
    ProductRecord,
    SegmentMetrics,
    SegmentType,
    ThresholdMode,
    SEGMENT_DESCRIPTIONS,
    SEGMENT_LABELS,
)

__all__ = [
    "AnalysisResult",
    "DimensionMetrics",
    "ProductRecord",
    "SegmentMetrics",
    "SegmentType",
    "ThresholdMode",
    "SEGMENT_DESCRIPTIONS",
    "SEGMENT_LABELS",
]
