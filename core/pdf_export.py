from __future__ import annotations
import logging
from typing import List, Optional

from reportlab.lib.pagesizes import LETTER
from reportlab.lib import colors
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet

from core.calculators import clamp_min, clamp_range
from core.formatting import bps, money, pct, signed_money
from core.models import ComparisonInput, ComparisonResult, GrossMode, Structure
from core.presets import DISCLAIMER
from core.rules import RuleResult, has_blocking

logger = logging.getLogger(__name__)

TABLE_STYLE = TableStyle([('BACKGROUND',(0,0),(-1,0), colors.lightgrey),('BOX',(0,0),(-1,-1),1,colors.black),('INNERGRID',(0,0),(-1,-1),0.5,colors.grey)])


def _input_rows(inp: ComparisonInput, result: ComparisonResult) -> list[list]:
    rows = [["Inputs", ""]]
    rows.append(["Average loan amount", money(clamp_min(inp.avg_loan_amount))])
    rows.append(["Loans per month", f"{clamp_min(inp.loans_per_month):g}"])
    if inp.gross_mode is GrossMode.BPS:
        rows.append(["Gross commission", bps(clamp_min(inp.gross_bps))])
    else:
        rows.append(["Gross commission", f"{money(clamp_min(inp.gross_dollar))} per loan"])
    rows.append(["Gross per loan", money(result.gross_per_loan)])
    if inp.structure is Structure.BPS:
        rows.append(["Current payout", bps(clamp_min(inp.current_payout_bps))])
    else:
        rows.append(["Current split", pct(clamp_range(inp.current_split_pct, 0.0, 100.0))])
    rows.append(["Current per-file fee", money(clamp_min(inp.current_per_file_fee))])
    rows.append(["Flat fee per file", money(result.target_flat_fee)])
    return rows


def build_comparison_pdf(out, branding: dict, inputs: ComparisonInput, result: ComparisonResult, warnings: List[RuleResult], override_reason: Optional[str] = None):
    """Write a one-page comparison summary to ``out`` (a path or binary file object).

    Critical warnings block the export unless ``override_reason`` is given;
    the reason is printed on the page.
    """
    if has_blocking(warnings) and not (override_reason or "").strip():
        raise ValueError("override_reason required when critical warnings exist")

    styles = getSampleStyleSheet()
    doc = SimpleDocTemplate(out, pagesize=LETTER, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = []
    title = branding.get("title","Compensation Plan Comparison")
    story += [Paragraph(f"<b>{title}</b>", styles['Title']), Spacer(1,6)]
    if branding.get("name"): story.append(Paragraph(f"Prepared for: {branding['name']}  |  NMLS: {branding.get('nmls','')}", styles['Normal']))
    if branding.get("contact"): story.append(Paragraph(f"Contact: {branding['contact']}", styles['Normal']))
    story += [Spacer(1, 12)]

    t = Table(_input_rows(inputs, result), hAlign='LEFT', colWidths=[200, 320])
    t.setStyle(TABLE_STYLE)
    story += [t, Spacer(1, 12)]

    rows = [["Plan", "Per Loan", "Monthly", "Annual", "Basis"]]
    for plan, s in (("Current", result.current), ("Flat Fee", result.target)):
        rows.append([plan, money(s.per_loan), money(s.monthly), money(s.annual), Paragraph(s.note, styles['Normal'])])
    t = Table(rows, hAlign='LEFT', colWidths=[60, 70, 70, 80, 260])
    t.setStyle(TABLE_STYLE)
    story += [Paragraph("<b>Take-Home by Plan</b>", styles['Heading3']), Spacer(1,6), t, Spacer(1,12)]
    story += [Paragraph(f"<b>Annual difference (flat fee minus current): {signed_money(result.delta_annual)}</b>", styles['Normal']), Spacer(1, 12)]

    if warnings:
        w_rows = [["Code","Severity","Message"]]+[[w.code, w.severity, Paragraph(w.message, styles['Normal'])] for w in warnings]
        t = Table(w_rows, hAlign='LEFT', colWidths=[170, 60, 290])
        t.setStyle(TABLE_STYLE)
        story += [Paragraph("<b>Warnings</b>", styles['Heading3']), Spacer(1,6), t, Spacer(1,12)]
    if override_reason:
        story += [Paragraph(f"Override Reason: {override_reason}", styles['Normal']), Spacer(1, 12)]
    story += [Spacer(1, 12), Paragraph(f"<font size=8>{DISCLAIMER}</font>", styles['Normal'])]
    doc.build(story)
    logger.info("built comparison pdf with %d warning(s)", len(warnings))
