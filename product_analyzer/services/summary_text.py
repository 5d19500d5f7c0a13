"""
Presentation text generator

Produces the ready-to-paste slide text summarising a segmentation report in
Czech, Slovak or English.
"""
from typing import Dict

from product_analyzer.models.analysis import AnalysisResult, SegmentType
from product_analyzer.utils.helpers import format_currency, format_number, safe_divide

_COUNT_GROUPING = {'cs': '\u00a0', 'sk': '\u00a0', 'en': ','}

SUMMARY_TEMPLATES = {
    'cs': (
        "V účtu vidíme velký potenciál v segmentaci produktů na základě jejich výkonu.\n"
        "Za posledních {days} dní si shoppingová síť na tržbách získala {total_revenue} s průměrným ROAS {average_roas}.\n"
        "\n"
        "Nicméně zmíněného průměrného ROASu {average_roas} dosahuje pouze {top_count} produktů ({top_count_pct} produktů).\n"
        "Tento segment produktů si dohromady získal {top_revenue} ({top_revenue_pct} veškerých tržeb).\n"
        "Zároveň do tohoto segmentu bylo investováno pouze {top_cost_pct} veškerého rozpočtu.\n"
        "\n"
        "V účtu také vidíme {no_revenue_count} produktů ({no_revenue_pct} ze všech produktů), které nepřinesly za posledních {days} dní žádné tržby.\n"
        "\n"
        "Shrnutí\n"
        "Pouze {top_cost_pct} investic jde do produktů, které přináší až {top_revenue_pct} tržeb.\n"
        "Naopak až {wasted_cost_pct} investic jde do produktů, které za posledních {days} dní nepřinesly žádné tržby."
    ),
    'sk': (
        "V účte vidíme veľký potenciál v segmentácii produktov na základe ich výkonu.\n"
        "Za posledných {days} dní si shoppingová sieť na tržbách získala {total_revenue} s priemerným ROAS {average_roas}.\n"
        "\n"
        "Avšak spomínaného priemerného ROASu {average_roas} dosahuje iba {top_count} produktov ({top_count_pct} produktov).\n"
        "Tento segment produktov si dohromady získal {top_revenue} ({top_revenue_pct} všetkých tržieb).\n"
        "Zároveň do tohto segmentu bolo investovaných iba {top_cost_pct} celkového rozpočtu.\n"
        "\n"
        "V účte tiež vidíme {no_revenue_count} produktov ({no_revenue_pct} zo všetkých produktov), ktoré nepriniesli za posledných {days} dní žiadne tržby.\n"
        "\n"
        "Zhrnutie\n"
        "Iba {top_cost_pct} investícií ide do produktov, ktoré prinášajú až {top_revenue_pct} tržieb.\n"
        "Naopak až {wasted_cost_pct} investícií ide do produktov, ktoré za posledných {days} dní nepriniesli žiadne tržby."
    ),
    'en': (
        "We see great potential in product segmentation based on performance.\n"
        "Over the last {days} days, the shopping network generated {total_revenue} in revenue with an average ROAS of {average_roas}.\n"
        "\n"
        "However, this average ROAS of {average_roas} is achieved by only {top_count} products ({top_count_pct} of products).\n"
        "This product segment generated a total of {top_revenue} ({top_revenue_pct} of total revenue).\n"
        "At the same time, only {top_cost_pct} of the total budget was invested in this segment.\n"
        "\n"
        "We also see {no_revenue_count} products ({no_revenue_pct} of all products) that generated no revenue over the last {days} days.\n"
        "\n"
        "Summary\n"
        "Only {top_cost_pct} of investment goes to products that generate {top_revenue_pct} of revenue.\n"
        "Conversely, {wasted_cost_pct} of investment goes to products that generated no revenue in the last {days} days."
    ),
}


def _pct(value: float) -> str:
    return f"{format_number(value, 0, group='')} %"


def summary_metrics(result: AnalysisResult) -> Dict[str, float]:
    """Raw figures behind the slide text."""
    top = result.segments[SegmentType.TOP_PERFORMERS]
    zero_revenue = result.segments[SegmentType.ZERO_REVENUE]
    impression_only = result.segments[SegmentType.IMPRESSION_ONLY]

    no_revenue_count = zero_revenue.count + impression_only.count
    return {
        'top_count': top.count,
        'top_count_pct': safe_divide(top.count, result.total_products) * 100,
        'top_revenue': top.total_revenue,
        'top_revenue_pct': top.revenue_percentage,
        'top_cost_pct': top.cost_percentage,
        'no_revenue_count': no_revenue_count,
        'no_revenue_pct': safe_divide(no_revenue_count, result.total_products) * 100,
        'wasted_cost_pct': zero_revenue.cost_percentage + impression_only.cost_percentage,
    }


def generate_summary_text(result: AnalysisResult, language: str = 'cs', currency: str = 'CZK') -> str:
    """
    Slide text for the report.

    Raises:
        ValueError: unsupported language or currency
    """
    language = language.lower()
    template = SUMMARY_TEMPLATES.get(language)
    if template is None:
        raise ValueError(f"Unsupported language: {language}. Expected one of {', '.join(SUMMARY_TEMPLATES)}")

    m = summary_metrics(result)
    group = _COUNT_GROUPING[language]
    return template.format(
        days=result.date_range_days if result.date_range_days else '__',
        total_revenue=format_currency(result.total_revenue, currency),
        average_roas=_pct(result.average_roas * 100),
        top_count=format_number(m['top_count'], 0, group=group),
        top_count_pct=_pct(m['top_count_pct']),
        top_revenue=format_currency(m['top_revenue'], currency),
        top_revenue_pct=_pct(m['top_revenue_pct']),
        top_cost_pct=_pct(m['top_cost_pct']),
        no_revenue_count=format_number(m['no_revenue_count'], 0, group=group),
        no_revenue_pct=_pct(m['no_revenue_pct']),
        wasted_cost_pct=_pct(m['wasted_cost_pct']),
    )
