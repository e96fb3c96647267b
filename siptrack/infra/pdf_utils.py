import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

_HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#0891B2")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("ALIGN", (0, 0), (-1, -1), "CENTER"),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 11),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
]


def _trend_text(trend: dict) -> str:
    if trend["direction"] == "stable":
        return "stable"
    arrow = "+" if trend["direction"] == "up" else "-"
    verdict = "good" if trend["favorable"] else "bad"
    return f"{arrow}{trend['percent_change']:.1f}% ({verdict})"


def _table(data):
    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(_HEADER_STYLE))
    return table


def generate_dashboard_pdf(dashboard: dict, user_id: str = "") -> bytes:
    """Render the dashboard payload as a PDF: totals with trends, spending by period, mood vs drinking."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20)
    styles = getSampleStyleSheet()
    title = "SipTrack Report" + (f" - {user_id}" if user_id else "")
    elements = [
        Paragraph(title, styles["Title"]),
        Paragraph(f"Generated {dashboard['generated_at']}", styles["Normal"]),
        Spacer(1, 16),
    ]

    totals, trends = dashboard["totals"], dashboard["trends"]
    elements.append(_table([
        ["Metric", "Lifetime", "Last 7 days vs previous 7"],
        ["Drinks", str(totals["drinks"]), _trend_text(trends["drinks"])],
        ["Spent", f"${totals['spent']:.2f}", _trend_text(trends["spent"])],
        ["Calories", f"{totals['calories']:,}", _trend_text(trends["calories"])],
        ["Est. weight gain", f"{totals['weight_gain_lbs']:.2f} lbs", _trend_text(trends["weight_gain"])],
    ]))
    elements.append(Spacer(1, 16))

    spending = dashboard["charts"]["spending"]
    if spending:
        elements.append(Paragraph(f"Spending ({dashboard['period']})", styles["Heading2"]))
        elements.append(_table([["Period", "Spent"]] + [[p["name"], f"${p['spending']:.2f}"] for p in spending]))
    else:
        elements.append(Paragraph("No drinks logged yet.", styles["Normal"]))
    elements.append(Spacer(1, 16))

    corr = dashboard["correlation"]
    elements.append(Paragraph("Mood vs drinking", styles["Heading2"]))
    if corr["days_analyzed"]:
        elements.append(_table([
            ["Drinking days", "Dry days", "Difference", "Days analyzed"],
            [f"{corr['average_mood_with_drinks']:.2f}", f"{corr['average_mood_without_drinks']:.2f}",
             f"{corr['correlation_strength']:+.2f}", str(corr["days_analyzed"])],
        ]))
    else:
        elements.append(Paragraph("No mood entries yet.", styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
