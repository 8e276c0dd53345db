import io
from typing import List

from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from fitlog.domain.ShoppingList import ShoppingEntry


def generate_shopping_list_pdf(entries: List[ShoppingEntry], title: str = "Shopping List") -> bytes:
    """Render the shopping list as a two-column PDF table: checkbox / item."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(title, styles["Title"]),
        Spacer(1, 16),
    ]

    data = [["", "Item"]]
    for entry in entries:
        data.append(["[x]" if entry.is_checked else "[ ]", entry.item_name])
    if len(data) == 1:
        data.append(["", "Nothing to buy"])

    table = Table(data, repeatRows=1, colWidths=[40, 480])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#f97316")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (0,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
