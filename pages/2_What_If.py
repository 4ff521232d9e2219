import plotly.graph_objects as go
import streamlit as st

from footprint_engine import InputError, run_footprint
from footprint_engine.constants import (
    DEFAULT_HOUSEHOLD,
    DIET_LABELS,
    ENERGY_LABELS,
    FLIGHT_LABELS,
    LIFESTYLE_LABELS,
    PRACTICE_LABELS,
    TRANSPORT_LABELS,
)
from footprint_engine.report import compare_breakdowns, format_number


# =========================
# Page
# =========================
st.set_page_config(page_title="Osaek Trail | What-if", layout="wide")
st.title("What-if: compare another lifestyle")
st.caption("Your current selections from the calculator against an alternative. Nothing is saved.")


# =========================
# Helpers
# =========================
def select_choice(label, options: dict, current):
    keys = list(options)
    return st.sidebar.selectbox(label, keys, index=keys.index(current), format_func=lambda k: options[k])


# =========================
# Current selections
# =========================
current_hh = dict(st.session_state.get("household", DEFAULT_HOUSEHOLD))
survey = st.session_state.get("survey")

st.sidebar.header("Alternative")
alt_hh = dict(current_hh)
alt_hh["transport_mode"] = select_choice("Switch transport to", TRANSPORT_LABELS, current_hh["transport_mode"])
alt_hh["diet"] = select_choice("Switch diet to", DIET_LABELS, current_hh["diet"])
alt_hh["energy_saving"] = select_choice("Energy saving", ENERGY_LABELS, current_hh["energy_saving"])
alt_hh["lifestyle_spending"] = select_choice("Spending habits", LIFESTYLE_LABELS, current_hh["lifestyle_spending"])
alt_hh["annual_flights"] = select_choice("Flights per year", FLIGHT_LABELS, current_hh["annual_flights"])
alt_hh["practices"] = st.sidebar.multiselect(
    "Practices",
    list(PRACTICE_LABELS),
    default=list(current_hh["practices"]),
    format_func=lambda k: PRACTICE_LABELS[k],
)

try:
    current = run_footprint(current_hh, survey)
    alternative = run_footprint(alt_hh, survey)
except InputError as e:
    st.error(f"Invalid input: {e}")
    st.stop()

cur_total = current["footprint"]["total"]
alt_total = alternative["footprint"]["total"]
delta = alt_total - cur_total

m1, m2, m3 = st.columns(3)
m1.metric("Current total (tCO2e/yr)", format_number(cur_total))
m2.metric("Alternative total (tCO2e/yr)", format_number(alt_total), delta=format_number(delta), delta_color="inverse")
m3.metric(
    "Alternative tier",
    alternative["footprint"]["tier"]["code"],
    help=alternative["footprint"]["tier"]["label"],
)

df = compare_breakdowns(current, alternative)

fig = go.Figure()
fig.add_trace(go.Bar(name="Current", x=df["Category"], y=df["Current"], marker_color="#9E9E9E"))
fig.add_trace(go.Bar(name="Alternative", x=df["Category"], y=df["Alternative"], marker_color="#2E7D5B"))
fig.update_layout(barmode="group", height=360, margin=dict(l=10, r=10, t=10, b=10), yaxis_title="tCO2e/yr")
st.plotly_chart(fig, use_container_width=True)

st.dataframe(df, use_container_width=True, hide_index=True)

if delta < 0:
    st.success(f"The alternative would cut about {format_number(-delta)} tCO2e per year.")
elif delta > 0:
    st.warning(f"The alternative would add about {format_number(delta)} tCO2e per year.")
else:
    st.info("No change.")

st.caption(
    "Category values are before the practice and survey multipliers; totals include them."
)
