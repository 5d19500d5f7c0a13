#!/usr/bin/env python3
"""
Product Export Analysis Script

Runs the segmentation analysis on an export file from disk.

Usage:
    python scripts/analyze_export.py exports/products.csv
    python scripts/analyze_export.py exports/products.csv --mode manual --target-roas-pct 800
    python scripts/analyze_export.py exports/products.csv --export potential > potential.csv
    python scripts/analyze_export.py exports/products.csv --summary en --currency EUR
"""
import sys
import json
import argparse
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from product_analyzer.exceptions import AnalysisError
from product_analyzer.models.analysis import ThresholdMode
from product_analyzer.services.analysis_service import AnalysisService
from product_analyzer.services.export_service import OPPORTUNITY_LISTS, export_opportunities
from product_analyzer.services.summary_text import SUMMARY_TEMPLATES, generate_summary_text
from product_analyzer.utils.helpers import CURRENCY_CONFIG
from product_analyzer.utils.logger import log, setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Segment products of an ad performance export')
    parser.add_argument('file', help='Export file (CSV)')
    parser.add_argument('--mode', choices=[m.value for m in ThresholdMode], default=ThresholdMode.AUTO.value,
                        help='auto = average ROAS threshold, manual = --target-roas-pct')
    parser.add_argument('--target-roas-pct', type=float, default=None,
                        help='Manual ROAS target in percent (1000 = ROAS 10)')
    parser.add_argument('--encoding', default='utf-8-sig', help='File encoding')
    parser.add_argument('--export', choices=list(OPPORTUNITY_LISTS), help='Print an opportunity list as CSV')
    parser.add_argument('--summary', choices=list(SUMMARY_TEMPLATES), help='Print slide text in this language')
    parser.add_argument('--currency', choices=list(CURRENCY_CONFIG), default='CZK', help='Display currency')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(sys.stderr)  # keep stdout for the report

    service = AnalysisService()
    try:
        result = service.analyze_file(args.file, args.mode, args.target_roas_pct, encoding=args.encoding)
    except AnalysisError as e:
        log.error(f"Analysis failed: {e}")
        return 1

    if args.export:
        sys.stdout.write(export_opportunities(result, args.export))
    elif args.summary:
        print(generate_summary_text(result, language=args.summary, currency=args.currency))
    else:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
