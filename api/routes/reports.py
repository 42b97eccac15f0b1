# api/routes/reports.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import FileResponse, JSONResponse
from loguru import logger

from reports import ReportComposer, ReportRequest, TableLayoutError
from ..services.finance import FinanceService, FinanceStats, TIME_RANGE_LABELS
from ..state import get_composer, get_finance

router = APIRouter(prefix="/reports", tags=["reports"])

TIME_RANGE_PATTERN = "^(" + "|".join(TIME_RANGE_LABELS) + ")$"
DOCTOR_ID_PATTERN = r"^[\w.-]+$"  # ends up inside the report file name


# ---------- helpers ----------

def _render(composer: ReportComposer, request: ReportRequest):
    """Run the composer and answer with the file, or with a JSON error the dashboard can toast."""
    try:
        composer.generate_report(request)
    except TableLayoutError as e:
        logger.warning(f"Report '{request.file_name}' rejected: {e}")
        return JSONResponse(status_code=422, content={"error": f"layout_error: {e}"})
    except OSError as e:
        logger.exception(f"Report '{request.file_name}' failed")
        return JSONResponse(status_code=500, content={"error": f"report_error: {e}"})
    return FileResponse(
        composer.output_path(request),
        media_type="application/pdf",
        filename=request.file_name,
    )


# ---------- generic ----------

@router.post("/pdf")
def create_report(payload: ReportRequest, composer: ReportComposer = Depends(get_composer)):
    """
    Build a PDF from a caller-supplied report.
    {
      "title": "Reporte Financiero",
      "subtitle": "Periodo: Este Mes",
      "sections": [{"title": "Ingresos", "columns": ["Fecha", "Monto"], "data": [["2024-05-01", "$120.00"]]}],
      "fileName": "reporte.pdf"
    }
    """
    return _render(composer, payload)


@router.get("/files/{file_name}")
def download_report(file_name: str, composer: ReportComposer = Depends(get_composer)):
    path = composer.output_dir / file_name
    if path.name != file_name or not path.is_file():
        return JSONResponse(status_code=404, content={"error": f"report not found: {file_name}"})
    return FileResponse(path, media_type="application/pdf", filename=file_name)


# ---------- finance ----------

@router.get("/finance/summary", response_model=FinanceStats)
def finance_summary(
    time_range: str = Query("month", pattern=TIME_RANGE_PATTERN),
    finance: FinanceService = Depends(get_finance),
):
    return finance.admin_stats(time_range)


@router.post("/finance")
def finance_report(
    time_range: str = Query("month", pattern=TIME_RANGE_PATTERN),
    finance: FinanceService = Depends(get_finance),
    composer: ReportComposer = Depends(get_composer),
):
    return _render(composer, finance.admin_report(time_range))


@router.post("/doctors/{doctor_id}/finance")
def doctor_finance_report(
    doctor_id: str = Path(..., pattern=DOCTOR_ID_PATTERN),
    time_range: str = Query("month", pattern=TIME_RANGE_PATTERN),
    finance: FinanceService = Depends(get_finance),
    composer: ReportComposer = Depends(get_composer),
):
    return _render(composer, finance.doctor_report(doctor_id, time_range))
