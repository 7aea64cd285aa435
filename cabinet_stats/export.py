"""
Spreadsheet and PDF export.

The spreadsheet carries the record list as-is: one row per record, one column
per record field, in store order. The PDF is a one-page copy of the summary
cards.
"""
from __future__ import annotations

import io
from datetime import date
from typing import Optional, Sequence

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from cabinet_stats.aggregate import Summary
from cabinet_stats.log import get_logger
from cabinet_stats.models import RECORD_FIELDS, CabinetRecord

log = get_logger(__name__)

EXPORT_FORMATS = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv",
}
SHEET_NAME = "Cabinet statistics"


class ExportError(RuntimeError):
    pass


def format_money(x: float, currency: str = "₽") -> str:
    if pd.isna(x):
        return f"0 {currency}"
    return "{:,.0f} {}".format(float(x), currency).replace(",", " ")


def records_frame(records: Sequence[CabinetRecord]) -> pd.DataFrame:
    df = pd.DataFrame([r.to_dict() for r in records], columns=RECORD_FIELDS)
    if not df.empty:
        df["date"] = pd.to_datetime(df["date"]).dt.strftime("%Y-%m-%d")
    return df


def export_filename(today: Optional[date] = None, ext: str = "xlsx") -> str:
    today = today or date.today()
    return f"statistics_{today.isoformat()}.{ext}"


def excel_bytes(records: Sequence[CabinetRecord], sheet_name: str = SHEET_NAME) -> bytes:
    df = records_frame(records)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        wb = writer.book
        ws = writer.sheets[sheet_name]
        money_fmt = wb.add_format({"num_format": "#,##0.00"})
        ws.set_column(0, 0, 38)
        ws.set_column(1, 3, 18)
        ws.set_column(4, 6, 16, money_fmt)
        ws.set_column(7, 9, 14)
    return output.getvalue()


def csv_bytes(records: Sequence[CabinetRecord]) -> bytes:
    return records_frame(records).to_csv(index=False).encode("utf-8")


def export_bytes(records: Sequence[CabinetRecord], fmt: str = "xlsx") -> bytes:
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unsupported export format: {fmt!r}")
    try:
        data = excel_bytes(records) if fmt == "xlsx" else csv_bytes(records)
    except Exception as e:
        log.exception("export failed", extra={"format": fmt})
        raise ExportError(f"Could not build {fmt} export: {e}") from e
    log.info("export produced", extra={"format": fmt, "rows": len(records), "bytes": len(data)})
    return data


def pdf_summary_bytes(
    summary: Summary,
    title: str = "Cabinet Statistics",
    currency: str = "₽",
    generated_on: Optional[date] = None,
) -> bytes:
    generated_on = generated_on or date.today()
    lines = {
        "Total revenue": format_money(summary.total_revenue, currency),
        "Average daily revenue": format_money(summary.average_daily_revenue, currency),
        "Total balance": format_money(summary.total_balance, currency),
        "Total deals": str(summary.total_deals),
        "Cabinets": str(summary.record_count),
    }
    buffer = io.BytesIO()
    try:
        c = canvas.Canvas(buffer, pagesize=A4)
        width, height = A4
        c.setFont("Helvetica-Bold", 18); c.drawString(20*mm, height - 25*mm, title)
        c.setFont("Helvetica", 11); y = height - 35*mm
        for k, v in lines.items():
            # built-in Type1 fonts have no glyph for the ruble sign
            c.drawString(20*mm, y, f"{k}: {v}".replace("₽", "RUB")); y -= 8*mm
        c.setFont("Helvetica-Oblique", 9)
        c.drawString(20*mm, 15*mm, f"Generated {generated_on.isoformat()} • {title}")
        c.showPage(); c.save()
    except Exception as e:
        log.exception("pdf summary failed")
        raise ExportError(f"Could not build PDF summary: {e}") from e
    return buffer.getvalue()


__all__ = [
    "EXPORT_FORMATS",
    "SHEET_NAME",
    "ExportError",
    "format_money",
    "records_frame",
    "export_filename",
    "excel_bytes",
    "csv_bytes",
    "export_bytes",
    "pdf_summary_bytes",
]
