# footprint_engine/report.py

import json
from datetime import datetime, timezone
from io import BytesIO

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .constants import CATEGORY_COLORS, TIER_BANDS

SUBTOTAL_LABEL = "Subtotal (before multipliers)"
TOTAL_LABEL = "Total"

DISCLAIMER = (
    "Demo estimate only. Coefficients are illustrative and must not be used "
    "for official reporting."
)


def format_number(value, digits: int = 2) -> str:
    """Thousands grouping, at most `digits` fractional digits, no trailing zeros."""
    text = f"{float(value):,.{digits}f}"
    if digits > 0:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def tier_band_caption(le="≤", gt=">") -> str:
    parts = []
    for upper_bound, code, _ in TIER_BANDS[:-1]:
        parts.append(f"{code}{le}{format_number(upper_bound)}")
    last_bound = TIER_BANDS[-2][0]
    parts.append(f"{TIER_BANDS[-1][1]}{gt}{format_number(last_bound)}")
    return ", ".join(parts)


def breakdown_dataframe(run: dict) -> pd.DataFrame:
    fp = run["footprint"]
    rows = [{"Category": b["name"], "tCO2e/yr": float(b["value"])} for b in fp["breakdown"]]
    df = pd.DataFrame(rows)

    subtotal = float(fp["subtotal"])
    if subtotal > 0:
        df["Share (%)"] = df["tCO2e/yr"] / subtotal * 100.0
    else:
        df["Share (%)"] = 0.0
    df["Color"] = df["Category"].map(CATEGORY_COLORS)

    summary_rows = pd.DataFrame([
        {
            "Category": SUBTOTAL_LABEL,
            "tCO2e/yr": subtotal,
            "Share (%)": 100.0 if subtotal > 0 else 0.0,
            "Color": "",
        },
        {
            # after practice and survey multipliers; matches the headline total
            "Category": TOTAL_LABEL,
            "tCO2e/yr": float(fp["total"]),
            "Share (%)": None,
            "Color": "",
        },
    ])
    return pd.concat([df, summary_rows], ignore_index=True)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8")


def to_json_text(run: dict) -> str:
    return json.dumps(run, ensure_ascii=False, indent=2, sort_keys=True)


# -------------------------------
# PDF BUILDER
# -------------------------------
TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
    ("FONTSIZE", (0, 0), (-1, -1), 10),
    ("PADDING", (0, 0), (-1, -1), 6),
])


def build_footprint_pdf_bytes(run: dict) -> bytes:
    styles = getSampleStyleSheet()
    story = []

    fp = run["footprint"]
    walking = run["walking"]
    now_utc = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")

    story.append(Paragraph("Osaek Trail - Household Carbon Footprint", styles["Title"]))
    story.append(Spacer(1, 10))
    story.append(Paragraph(f"Generated: {now_utc}", styles["Normal"]))
    story.append(Paragraph(f"Engine version: {run['engine_version']}", styles["Normal"]))
    story.append(Spacer(1, 12))

    kpi_data = [
        ["Indicator", "Value"],
        ["Household total (tCO2e/yr)", format_number(fp["total"])],
        ["Per person (tCO2e/person/yr)", format_number(fp["per_person"])],
        ["Tier", f"{fp['tier']['code']} ({fp['tier']['label']})"],
        ["Survey bonus", f"+{run['survey']['bonus']}"],
        ["Practice multiplier", format_number(fp["practice_multiplier"], 4)],
        ["Bonus multiplier", format_number(fp["bonus_multiplier"], 4)],
    ]
    t = Table(kpi_data, hAlign="LEFT", colWidths=[240, 250])
    t.setStyle(TABLE_STYLE)
    story.append(t)
    story.append(Spacer(1, 12))

    story.append(Paragraph("Breakdown by category", styles["Heading2"]))
    story.append(Spacer(1, 6))

    df = breakdown_dataframe(run)
    table_data = [["Category", "tCO2e/yr", "Share (%)"]]
    for _, row in df.iterrows():
        share = "" if pd.isna(row["Share (%)"]) else format_number(row["Share (%)"], 1)
        table_data.append([row["Category"], format_number(row["tCO2e/yr"]), share])
    t2 = Table(table_data, hAlign="LEFT", colWidths=[200, 120, 100], repeatRows=1)
    t2.setStyle(TABLE_STYLE)
    t2.setStyle(TableStyle([("ALIGN", (1, 1), (-1, -1), "RIGHT")]))
    story.append(t2)
    story.append(Spacer(1, 12))

    story.append(Paragraph("Today's walk", styles["Heading2"]))
    story.append(Paragraph(
        f"Walking {format_number(walking['walked_km_today'])} km instead of driving avoided about "
        f"{format_number(walking['avoided_kg'])} kg CO2 "
        f"(assumes {walking['per_km_car_kg']} kgCO2/km for an average car).",
        styles["Normal"],
    ))
    story.append(Spacer(1, 12))
    story.append(Paragraph(f"Tier bands (tCO2e per person): {tier_band_caption(le=' up to ', gt=' above ')}", styles["Normal"]))
    story.append(Paragraph(DISCLAIMER, styles["Normal"]))

    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        title="Osaek Trail Carbon Footprint",
        leftMargin=24,
        rightMargin=24,
        topMargin=24,
        bottomMargin=24,
    )
    doc.build(story)
    return buf.getvalue()


def compare_breakdowns(current: dict, alternative: dict) -> pd.DataFrame:
    rows = []
    for cur, alt in zip(current["footprint"]["breakdown"], alternative["footprint"]["breakdown"]):
        rows.append({
            "Category": cur["name"],
            "Current": float(cur["value"]),
            "Alternative": float(alt["value"]),
        })
    df = pd.DataFrame(rows)
    df["Delta"] = df["Alternative"] - df["Current"]
    return df
