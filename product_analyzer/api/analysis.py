"""
Product Performance Analysis API

Upload a product export and get the segmentation report, the opportunity
lists as CSV, or the presentation text. Nothing is stored: every request
carries the file and is analysed from scratch.
"""
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import Response

from product_analyzer.config import get_settings
from product_analyzer.exceptions import AnalysisError
from product_analyzer.models.analysis import AnalysisResult, ThresholdMode
from product_analyzer.services.analysis_service import AnalysisService
from product_analyzer.services.export_service import OPPORTUNITY_LISTS, export_opportunities
from product_analyzer.services.summary_text import generate_summary_text
from product_analyzer.utils.logger import log

router = APIRouter(prefix="/analysis", tags=["analysis"])


def decode_export(content: bytes) -> str:
    """Decode upload bytes: UTF-8 (with or without BOM), else Windows-1250."""
    try:
        return content.decode('utf-8-sig')  # Handle BOM from Excel exports
    except UnicodeDecodeError:
        # Older Czech Google Ads / Excel exports
        return content.decode('cp1250', errors='replace')


async def _read_upload(file: UploadFile) -> str:
    settings = get_settings()
    content = await file.read()
    limit = settings.max_upload_mb * 1024 * 1024
    if len(content) > limit:
        raise HTTPException(status_code=413, detail=f"File exceeds {settings.max_upload_mb} MB upload limit")
    return decode_export(content)


def _analyze(text: str, mode: ThresholdMode, target_roas_pct: Optional[float]) -> AnalysisResult:
    return AnalysisService().analyze_text(text, mode=mode, target_roas_pct=target_roas_pct)


@router.post("/upload")
async def upload_export(
    file: UploadFile = File(..., description="Product performance export (CSV)"),
    mode: ThresholdMode = Query(ThresholdMode.AUTO, description="auto = average ROAS, manual = target_roas_pct"),
    target_roas_pct: Optional[float] = Query(None, ge=0, description="Manual ROAS target in percent (1000 = ROAS 10)"),
):
    """
    Analyse a product export.

    Expected export (leading report-title rows are fine):
    ```
    Item ID,Brand,Device,Clicks,Impr.,Cost,Conversions,Conv. value,Search impr. share
    SKU-1,Acme,Mobile,10,100,"1.234,56",2,"3.000,00",< 10%
    ```
    """
    text = await _read_upload(file)
    try:
        result = _analyze(text, mode, target_roas_pct)
    except AnalysisError as e:
        log.warning(f"Analysis of {file.filename} failed: {e}")
        return {"success": False, "error": str(e)}

    return {"success": True, "data": result.to_dict()}


@router.post("/export/{list_name}")
async def export_opportunity_list(
    list_name: str,
    file: UploadFile = File(..., description="Product performance export (CSV)"),
    mode: ThresholdMode = Query(ThresholdMode.AUTO),
    target_roas_pct: Optional[float] = Query(None, ge=0),
):
    """Download the potential or overspending product list as CSV."""
    if list_name not in OPPORTUNITY_LISTS:
        raise HTTPException(status_code=404, detail=f"Unknown opportunity list: {list_name}")

    text = await _read_upload(file)
    try:
        result = _analyze(text, mode, target_roas_pct)
    except AnalysisError as e:
        log.warning(f"Export of {file.filename} failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return Response(
        content=export_opportunities(result, list_name),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{list_name}_products.csv"'},
    )


@router.post("/summary-text")
async def summary_text(
    file: UploadFile = File(..., description="Product performance export (CSV)"),
    mode: ThresholdMode = Query(ThresholdMode.AUTO),
    target_roas_pct: Optional[float] = Query(None, ge=0),
    language: str = Query("cs", description="cs, sk or en"),
    currency: Optional[str] = Query(None, description="CZK, EUR or USD"),
):
    """Presentation-ready summary text of the segmentation."""
    currency = currency or get_settings().default_currency
    text = await _read_upload(file)
    try:
        result = _analyze(text, mode, target_roas_pct)
        summary = generate_summary_text(result, language=language, currency=currency)
    except AnalysisError as e:
        log.warning(f"Summary of {file.filename} failed: {e}")
        return {"success": False, "error": str(e)}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "success": True,
        "data": {
            "language": language.lower(),
            "currency": currency.upper(),
            "text": summary,
        }
    }
