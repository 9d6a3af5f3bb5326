# app/rendering/note_pdf.py
from io import BytesIO
from xml.sax.saxutils import escape as xml_escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.rendering.note_document import NoteDocument

ACCENT = colors.HexColor("#f97316")
MUTED = colors.HexColor("#666666")
RISK = colors.HexColor("#dc2626")


def _as_paragraph(text: str, style):
    t = (text or "").strip()
    if not t:
        return None
    safe = xml_escape(t).replace("\n\n", "<br/><br/>").replace("\n", "<br/>")
    return Paragraph(safe, style)


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name="PracticeName", parent=styles["Heading2"], fontName="Helvetica-Bold", spaceAfter=2,
    ))
    styles.add(ParagraphStyle(
        name="Muted", parent=styles["BodyText"], fontSize=9, leading=11, textColor=MUTED,
    ))
    styles.add(ParagraphStyle(
        name="NoteTitle", parent=styles["Heading3"], textColor=ACCENT, spaceBefore=12,
    ))
    styles.add(ParagraphStyle(
        name="RiskTitle", parent=styles["BodyText"], fontName="Helvetica-Bold", textColor=RISK,
    ))
    styles.add(ParagraphStyle(
        name="Signature", parent=styles["BodyText"], fontName="Helvetica-Oblique", fontSize=16, leading=20,
    ))
    return styles


def _header_table(document: NoteDocument, styles, width: float) -> Table:
    left = [
        f"<b>Client:</b> {xml_escape(document.patient_name)}",
        f"<b>DOB:</b> {xml_escape(document.patient_dob)}",
        f"<b>Provider:</b> {xml_escape(document.provider)}",
    ]
    if document.provider_license:
        left.append(f"<b>License:</b> {xml_escape(document.provider_license)}")

    appointment = [f"<b>Appointment:</b> {xml_escape(document.session_type)} appointment on {xml_escape(document.session_date)}"]
    if document.time_range:
        duration = f", {document.duration} min" if document.duration else ""
        appointment.append(xml_escape(document.time_range + duration))
    if document.billing_line:
        appointment.append(f"Billing code: {xml_escape(document.billing_line)}")
    if document.diagnoses:
        appointment.append("<b>Diagnosis:</b>")
        appointment.extend(xml_escape(line) for line in document.diagnoses)

    table = Table(
        [[Paragraph("<br/>".join(left), styles["BodyText"]), Paragraph("<br/>".join(appointment), styles["BodyText"])]],
        colWidths=[width * 0.45, width * 0.55],
    )
    table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("LINEBELOW", (0, 0), (-1, -1), 0.5, colors.lightgrey),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
    ]))
    return table


def _signature_table(document: NoteDocument, styles, width: float) -> Table:
    left = [Paragraph(xml_escape(document.signature_name or " "), styles["Signature"]),
            Paragraph(xml_escape(document.provider), styles["BodyText"])]
    if document.provider_license:
        left.append(Paragraph(f"License: {xml_escape(document.provider_license)}", styles["Muted"]))

    if document.is_signed:
        lines = [document.signature_date or "", document.signature_time or ""]
        if document.signer_ip:
            lines.append(f"IP: {document.signer_ip}")
        right = Paragraph("<b>Electronically Signed</b><br/>" + "<br/>".join(xml_escape(l) for l in lines), styles["Muted"])
    else:
        right = Paragraph("<b>Not Yet Signed</b>", styles["Muted"])

    table = Table([[left, right]], colWidths=[width * 0.6, width * 0.4])
    table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("ALIGN", (1, 0), (1, 0), "RIGHT"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("LINEABOVE", (0, 0), (0, 0), 0.5, colors.black),
    ]))
    return table


def render_note_pdf(document: NoteDocument) -> bytes:
    """Single-note PDF (US Letter)."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=LETTER,
        rightMargin=54,
        leftMargin=54,
        topMargin=54,
        bottomMargin=54,
        title=f"{document.title} - {document.patient_name}",
    )
    styles = _styles()

    story = [Paragraph(xml_escape(document.practice_name), styles["PracticeName"])]
    for line in (document.practice_address, document.practice_phone):
        if line:
            story.append(Paragraph(xml_escape(line), styles["Muted"]))
    story.append(Spacer(1, 12))
    story.append(_header_table(document, styles, doc.width))
    story.append(Paragraph(xml_escape(document.title), styles["NoteTitle"]))

    for section in document.sections:
        if section.header:
            story.append(Paragraph(f"<b>{xml_escape(section.header)}:</b>", styles["BodyText"]))
        body = _as_paragraph(section.body, styles["BodyText"])
        if body is not None:
            story.append(body)
        story.append(Spacer(1, 6))

    if document.risk:
        story.append(Spacer(1, 6))
        story.append(Paragraph("Risk Assessment:", styles["RiskTitle"]))
        story.append(Paragraph(xml_escape(document.risk_line), styles["BodyText"]))

    story.append(Spacer(1, 30))
    story.append(_signature_table(document, styles, doc.width))
    story.append(Spacer(1, 24))
    if document.footer:
        story.append(Paragraph(xml_escape(document.footer), styles["Muted"]))

    doc.build(story)
    return buffer.getvalue()
