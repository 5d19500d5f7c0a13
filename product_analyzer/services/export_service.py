"""
Opportunity list CSV export

Serialises the potential / overspending shortlists of an AnalysisResult for
download. The lists are exported in full; truncation is a display concern.
"""
import csv
import io
from typing import Iterable

from product_analyzer.models.analysis import AnalysisResult, ProductRecord

EXPORT_HEADERS = ['Item ID', 'Conversions', 'Cost', 'Revenue', 'Search Impr. Share', 'ROAS']

OPPORTUNITY_LISTS = {
    'potential': 'potential_products',
    'overspending': 'overspending_products',
}


def _plain_number(value: float) -> str:
    """3.0 -> "3", 2.5 -> "2.5" """
    return str(int(value)) if float(value).is_integer() else str(value)


def products_to_csv(products: Iterable[ProductRecord]) -> str:
    """CSV text with one line per product, header first."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for p in products:
        writer.writerow([
            p.id,
            _plain_number(p.conversions),
            f"{p.cost:.2f}",
            f"{p.conversion_value:.2f}",
            f"{p.search_impression_share:.2f}%",
            f"{p.roas * 100:.2f}%",
        ])
    return buffer.getvalue()


def export_opportunities(result: AnalysisResult, list_name: str) -> str:
    """
    Export one opportunity list ("potential" or "overspending") as CSV.

    Raises:
        ValueError: unknown list name
    """
    attribute = OPPORTUNITY_LISTS.get(list_name)
    if attribute is None:
        raise ValueError(f"Unknown opportunity list: {list_name}. Expected one of {', '.join(OPPORTUNITY_LISTS)}")
    return products_to_csv(getattr(result, attribute))
