"""PDF item report, rendered with reportlab.

Sections:
  1. Header
  2. Summary (optional, AI or local)
  3. Item details table
  4. Inspection notes (when present)
  5. Footer with generation time
"""

import io
import logging
from datetime import datetime
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from schemas.items import ITEM_TYPE_LABELS

logger = logging.getLogger(__name__)

SLATE_900 = colors.HexColor("#212529")
SLATE_500 = colors.HexColor("#646464")
SLATE_300 = colors.HexColor("#969696")
ACCENT = colors.HexColor("#1d4ed8")
LIGHT_BG = colors.HexColor("#f8fafc")


def _build_styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ReportTitle", parent=base["Title"], fontSize=20, textColor=SLATE_900, spaceAfter=2),
        "subtitle": ParagraphStyle("ReportSubtitle", parent=base["Normal"], fontSize=11, textColor=SLATE_500, spaceAfter=12),
        "h2": ParagraphStyle("SectionH2", parent=base["Heading2"], fontSize=14, textColor=SLATE_900, spaceBefore=12, spaceAfter=6),
        "body": ParagraphStyle("Body", parent=base["Normal"], fontSize=10, textColor=SLATE_500, leading=14),
        "footer": ParagraphStyle("Footer", parent=base["Normal"], fontSize=8, textColor=SLATE_300),
    }


def _fmt_date(d) -> str:
    return d.strftime("%d %b %Y") if d else "Not inspected"


def _paragraphs(text: str, style: ParagraphStyle) -> list:
    return [Paragraph(escape(line), style) for line in text.splitlines() if line.strip()]


def _details_table(item) -> Table:
    rows = [
        ["Item ID", str(item.id)],
        ["Type", ITEM_TYPE_LABELS.get(item.item_type, item.item_type)],
        ["Vendor", item.vendor_name],
        ["Supply Date", _fmt_date(item.supply_date)],
        ["Warranty Period", f"{item.warranty_period} months"],
        ["Warranty Expiry", _fmt_date(item.warranty_expiry_date)],
        ["Last Inspection", _fmt_date(item.last_inspection_date)],
        ["Condition", (item.condition_status or "good").capitalize()],
    ]
    t = Table(rows, colWidths=[1.8 * inch, 4.6 * inch])
    style_cmds = [
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("TEXTCOLOR", (0, 0), (0, -1), SLATE_500),
        ("TEXTCOLOR", (1, 0), (1, -1), SLATE_900),
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#e2e8f0")),
    ]
    for i in range(len(rows)):
        if i % 2 == 1:
            style_cmds.append(("BACKGROUND", (0, i), (-1, i), LIGHT_BG))
    t.setStyle(TableStyle(style_cmds))
    return t


def generate_item_report_pdf(item, now: datetime, summary: Optional[str] = None) -> bytes:
    """Render the report for one item and return the PDF bytes."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        title=f"Item Report {item.id}",
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
        leftMargin=0.7 * inch,
        rightMargin=0.7 * inch,
    )
    styles = _build_styles()
    story: list = []

    story.append(Paragraph("RailVision - Item Report", styles["title"]))
    story.append(Paragraph("Indian Railways", styles["subtitle"]))
    story.append(HRFlowable(width="100%", thickness=2, color=ACCENT, spaceAfter=8))

    if summary:
        story.append(Paragraph("AI Summary", styles["h2"]))
        story.extend(_paragraphs(summary, styles["body"]))

    story.append(Paragraph("Item Details", styles["h2"]))
    story.append(_details_table(item))

    if item.inspection_notes:
        story.append(Paragraph("Inspection Notes", styles["h2"]))
        story.extend(_paragraphs(item.inspection_notes, styles["body"]))

    story.append(Spacer(1, 24))
    story.append(Paragraph(f"Generated on {now.strftime('%d %b %Y %H:%M %Z').strip()}", styles["footer"]))
    story.append(Paragraph("RailVision - AI-based QR Code Marking System", styles["footer"]))

    doc.build(story)
    logger.debug("Rendered report for item %s (%d bytes)", item.id, buf.tell())
    return buf.getvalue()
