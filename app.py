import streamlit as st
import logging
from datetime import datetime, timezone

import plotly.express as px

# -------------------------------
# ENGINE IMPORT
# -------------------------------
try:
    from footprint_engine import FOOTPRINT_ENGINE_VERSION, InputError, run_footprint, score_survey
    from footprint_engine.audit import make_audit_record, make_run_record, records_to_jsonl
    from footprint_engine.constants import (
        CATEGORY_COLORS,
        DEFAULT_HOUSEHOLD,
        DEFAULT_SURVEY,
        DIET_LABELS,
        ENERGY_LABELS,
        FLIGHT_LABELS,
        LIFESTYLE_LABELS,
        PEOPLE_MAX,
        PEOPLE_MIN,
        PRACTICE_LABELS,
        SURVEY_REASONS,
        SURVEY_SATISFACTION,
        TRANSPORT_LABELS,
        WALK_KM_MAX,
        WALK_KM_STEP,
    )
    from footprint_engine.report import (
        DISCLAIMER,
        breakdown_dataframe,
        build_footprint_pdf_bytes,
        format_number,
        tier_band_caption,
        to_csv_bytes,
        to_json_text,
    )
except Exception as e:
    st.error("Footprint engine could not be loaded.")
    st.code(str(e))
    st.stop()

logger = logging.getLogger("footprint_app")

YES_NO = ["Yes", "No"]


# -------------------------------
# SESSION STATE
# -------------------------------
if "step" not in st.session_state:
    st.session_state["step"] = 1
if "calculated" not in st.session_state:
    st.session_state["calculated"] = False
if "audit_records" not in st.session_state:
    st.session_state["audit_records"] = []
if "household" not in st.session_state:
    st.session_state["household"] = dict(DEFAULT_HOUSEHOLD)
if "survey" not in st.session_state:
    st.session_state["survey"] = dict(DEFAULT_SURVEY)

# Streamlit drops widget state on other pages; re-seed from the persisted dicts
for key in PRACTICE_LABELS:
    if f"practice_{key}" not in st.session_state:
        st.session_state[f"practice_{key}"] = key in st.session_state["household"]["practices"]

SURVEY_WIDGETS = {
    "survey_knows": ("knows_trail", lambda v: "Yes" if v else "No"),
    "survey_walked": ("has_walked_trail", lambda v: "Yes" if v else "No"),
    "survey_reasons": ("reasons", list),
    "survey_satisfaction": ("satisfaction", list),
}
for widget_key, (field, to_widget) in SURVEY_WIDGETS.items():
    if widget_key not in st.session_state:
        st.session_state[widget_key] = to_widget(st.session_state["survey"][field])


def mark_dirty():
    st.session_state["calculated"] = False


def clear_practices():
    for key in PRACTICE_LABELS:
        st.session_state[f"practice_{key}"] = False
    mark_dirty()


def sync_survey():
    st.session_state["survey"].update({
        "knows_trail": st.session_state["survey_knows"] == "Yes",
        "has_walked_trail": st.session_state["survey_walked"] == "Yes",
        "reasons": list(st.session_state["survey_reasons"]),
        "satisfaction": list(st.session_state["survey_satisfaction"]),
    })


def go_to_calculator():
    st.session_state["step"] = 2
    st.session_state["audit_records"].append(
        make_audit_record("SURVEY_SUBMITTED", payload=dict(st.session_state["survey"]))
    )


def show_results():
    st.session_state["calculated"] = True
    st.session_state["log_next_run"] = True


def radio_choice(label, options: dict, key, current):
    keys = list(options)
    return st.radio(
        label,
        keys,
        index=keys.index(current),
        format_func=lambda k: options[k],
        horizontal=True,
        key=key,
        on_change=mark_dirty,
    )


# -------------------------------
# UI
# -------------------------------
st.set_page_config(page_title="Osaek Trail Footprint", layout="wide")

# -------------------------------
# STEP 1: SURVEY
# -------------------------------
if st.session_state["step"] == 1:
    st.title("Osaek Trail Survey")
    st.caption(f"Engine version: {FOOTPRINT_ENGINE_VERSION}")

    survey = st.session_state["survey"]

    st.radio("1. I know the Osaek trail", YES_NO, horizontal=True, key="survey_knows", on_change=sync_survey)
    st.radio(
        "2. I have walked the Osaek trail myself", YES_NO,
        horizontal=True, key="survey_walked", on_change=sync_survey,
    )
    st.multiselect(
        "3. Why did you walk the trail? (multiple choice)", SURVEY_REASONS,
        key="survey_reasons", on_change=sync_survey,
    )
    st.multiselect(
        "4. What did you enjoy most on the trail?", SURVEY_SATISFACTION,
        key="survey_satisfaction", on_change=sync_survey,
    )

    bonus = score_survey(survey["knows_trail"], survey["has_walked_trail"])

    st.divider()
    c1, c2 = st.columns([2, 1])
    c1.markdown(f"**Current bonus: +{bonus} points (max 4)**")
    c2.button("Next (calculate my footprint)", type="primary", use_container_width=True, on_click=go_to_calculator)
    st.stop()

# -------------------------------
# STEP 2: CALCULATOR
# -------------------------------
st.title("Osaek Trail Carbon Footprint Calculator")
st.caption("Survey complete. Estimate your household's annual emissions below. (booth demo)")

hh = st.session_state["household"]
left, right = st.columns(2)

with left:
    hh["people"] = st.slider(
        "Household members", PEOPLE_MIN, PEOPLE_MAX, int(hh["people"]), step=1, key="people", on_change=mark_dirty
    )
    hh["transport_mode"] = radio_choice("Main way of getting around", TRANSPORT_LABELS, "transport", hh["transport_mode"])
    hh["diet"] = radio_choice("Diet", DIET_LABELS, "diet", hh["diet"])
    hh["energy_saving"] = radio_choice("How much energy do you save?", ENERGY_LABELS, "energy", hh["energy_saving"])
    hh["lifestyle_spending"] = radio_choice(
        "Spending habits", LIFESTYLE_LABELS, "lifestyle", hh["lifestyle_spending"]
    )
    hh["annual_flights"] = radio_choice("Flights per year", FLIGHT_LABELS, "flights", hh["annual_flights"])
    hh["walked_km_today"] = st.slider(
        "Distance I walked today (km)", 0.0, WALK_KM_MAX, float(hh["walked_km_today"]),
        step=WALK_KM_STEP, key="walk_km", on_change=mark_dirty,
    )

    st.markdown("**Everyday practices (multiple choice)**")
    cols = st.columns(3)
    for i, (key, label) in enumerate(PRACTICE_LABELS.items()):
        cols[i % 3].checkbox(label, key=f"practice_{key}", on_change=mark_dirty)
    hh["practices"] = [key for key in PRACTICE_LABELS if st.session_state[f"practice_{key}"]]

    b1, b2 = st.columns(2)
    b1.button("Clear practices", on_click=clear_practices, use_container_width=True)
    b2.button("Show results", type="primary", on_click=show_results, use_container_width=True)

with right:
    if not st.session_state["calculated"]:
        st.info("Press 'Show results' when you have finished your selections.")
        st.stop()

    try:
        run = run_footprint(hh, st.session_state["survey"])
    except InputError as e:
        logger.warning("rejected input: %s", e)
        st.error(f"Invalid input: {e}")
        st.stop()

    if st.session_state.pop("log_next_run", False):
        st.session_state["audit_records"].append(make_run_record(run))

    fp = run["footprint"]
    k1, k2 = st.columns(2)
    k1.metric("Estimated annual total (household, tCO2e/yr)", format_number(fp["total"]))
    k2.metric("Per person (tCO2e/person/yr)", format_number(fp["per_person"]))

    t1, t2 = st.columns([1, 3])
    t1.markdown(f"## {fp['tier']['code']}")
    t2.markdown(f"**Tier: {fp['tier']['label']}**")
    t2.caption(f"Demo bands ({tier_band_caption()})")

    df = breakdown_dataframe(run)
    df_pie = df[df["Category"].isin(CATEGORY_COLORS)]
    fig = px.pie(
        df_pie,
        names="Category",
        values="tCO2e/yr",
        color="Category",
        color_discrete_map=CATEGORY_COLORS,
        hole=0.4,
    )
    fig.update_traces(hovertemplate="%{label}: %{value:,.2f} tCO2e<extra></extra>")
    fig.update_layout(height=320, margin=dict(l=10, r=10, t=10, b=10))
    st.plotly_chart(fig, use_container_width=True)

    walking = run["walking"]
    st.success(
        f"You walked {format_number(walking['walked_km_today'])} km today and avoided about "
        f"{format_number(walking['avoided_kg'])} kg CO2 compared with driving!"
    )
    st.caption(f"Assumes an average car emits {walking['per_km_car_kg']} kgCO2/km.")

    st.button("Choose again", on_click=mark_dirty)

    # -------------------------------
    # EXPORTS
    # -------------------------------
    st.divider()
    st.subheader("Download")
    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    st.dataframe(df.drop(columns=["Color"]), use_container_width=True, hide_index=True)

    d1, d2, d3 = st.columns(3)
    d1.download_button(
        "⬇️ CSV",
        data=to_csv_bytes(df),
        file_name=f"osaek_footprint_{ts}.csv",
        mime="text/csv",
        use_container_width=True,
    )
    d2.download_button(
        "⬇️ JSON",
        data=to_json_text(run).encode("utf-8"),
        file_name=f"osaek_footprint_v{FOOTPRINT_ENGINE_VERSION}_{ts}.json",
        mime="application/json",
        use_container_width=True,
    )
    d3.download_button(
        "⬇️ PDF",
        data=build_footprint_pdf_bytes(run),
        file_name=f"osaek_footprint_{ts}.pdf",
        mime="application/pdf",
        use_container_width=True,
    )

    with st.expander("Audit log (this session only)"):
        records = st.session_state["audit_records"]
        st.download_button(
            "⬇️ Download audit log (runs.jsonl)",
            data=records_to_jsonl(records).encode("utf-8"),
            file_name="runs.jsonl",
            mime="application/jsonl",
            use_container_width=True,
        )
        if records:
            st.json(records[-1])

    st.caption(DISCLAIMER)
