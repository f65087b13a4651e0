import streamlit as st
import pandas as pd

from flight_budget.analyze import analyze_export
from flight_budget.budget import AircraftAllocation, AircraftRate, BudgetInputs, allocate_hours, estimate_budget
from flight_budget.requirements import CERTIFICATE_NAMES

# -----------------------------
# Streamlit page setup
# -----------------------------
st.set_page_config(page_title="Flight Budget", layout="wide")
st.title("✈️ Flight Budget — Logbook & Certification Progress")
st.write("Upload a ForeFlight logbook export, pick a certificate, and see what is left to fly and what it costs.")


# -----------------------------
# Sidebar: certificate + rates
# -----------------------------
with st.sidebar:
    st.header("Settings")

    cert_labels = {"": "(none)", **CERTIFICATE_NAMES}
    cert = st.selectbox("Target certificate", options=list(cert_labels), format_func=cert_labels.get, index=0)

    st.divider()
    st.header("Aircraft rate")
    rate_type = st.radio("Rate type", options=["wet", "dry"], horizontal=True)
    if rate_type == "wet":
        rate = AircraftRate(rate_type="wet", wet_rate=st.number_input("Wet rate ($/hr)", value=180.0, step=5.0))
    else:
        rate = AircraftRate(
            rate_type="dry",
            dry_rate=st.number_input("Dry rate ($/hr)", value=140.0, step=5.0),
            fuel_price=st.number_input("Fuel price ($/gal)", value=6.5, step=0.1),
            fuel_burn=st.number_input("Fuel burn (gal/hr)", value=8.0, step=0.5),
        )
    instructor_rate = st.number_input("Instructor rate ($/hr)", value=70.0, step=5.0)
    ground_hours = st.number_input("Ground instruction (hrs)", value=0.0, step=1.0)
    family_hours = st.number_input("Personal flying (hrs)", value=0.0, step=1.0)

    st.divider()
    st.header("Other costs")
    exams = st.number_input("Exams, medical, checkride ($)", value=0.0, step=50.0)
    gear = st.number_input("Headset, books, bag ($)", value=0.0, step=50.0)
    subscriptions = st.number_input("Subscriptions ($)", value=0.0, step=10.0)
    contingency_percent = st.number_input("Contingency (%)", value=10.0, step=1.0)
    lessons_per_week = st.number_input("Lessons per week", value=2.0, step=0.5, min_value=0.5)


# -----------------------------
# Upload
# -----------------------------
uploaded = st.file_uploader("Upload ForeFlight CSV", type=["csv"])

if uploaded is None:
    st.info("Upload a logbook export to begin (ForeFlight: More > Logbook > Export).")
    st.stop()

uploaded.seek(0)
result, err = analyze_export(uploaded.read(), certificate=cert or None)

if err or result is None:
    st.error(err or "Analysis failed (no result returned).")
    st.stop()

st.success(result.summary)


# -----------------------------
# Logbook totals
# -----------------------------
hours = result.hours
col1, col2, col3, col4 = st.columns(4)
col1.metric("Total time", f"{hours.total_time:.1f}")
col2.metric("PIC", f"{hours.pic_time:.1f}")
col3.metric("PIC XC", f"{hours.pic_xc:.1f}")
col4.metric("Dual received", f"{hours.dual_received:.1f}")

col1, col2, col3, col4 = st.columns(4)
col1.metric("Instrument (total)", f"{hours.instrument_total:.1f}")
col2.metric("Simulator instrument", f"{hours.sim_instrument_time:.1f}", help="20 hrs max creditable")
col3.metric("Instrument dual (airplane)", f"{hours.instrument_dual_airplane:.1f}")
col4.metric("Instrument, last 2 months", f"{hours.recent_instrument:.1f}")


# -----------------------------
# Requirements
# -----------------------------
evaluation = result.evaluation
if evaluation is not None:
    st.subheader(f"{CERTIFICATE_NAMES[evaluation.certificate]} requirements")
    for r in evaluation.results:
        if r.is_special:
            st.write(f"**{r.name}**: special flight requirement: {'Completed' if r.completed else 'Not completed'}")
        else:
            st.write(f"**{r.name}**: {r.current:.1f} / {r.required:g} hrs ({r.needed:.1f} hrs needed)")
        if r.breakdown:
            st.caption(
                f"({r.breakdown['batdTime']:.1f} BATD hours included) "
                f"({r.breakdown['simInstrumentTime']:.1f} total simulator hours included)"
            )
        st.progress(r.percent / 100)


# -----------------------------
# Aircraft
# -----------------------------
st.subheader("Aircraft in this logbook")
df_aircraft = pd.DataFrame(
    [
        {
            "registration": a.aircraft_id,
            "type": a.aircraft_type,
            "year": a.year,
            "simulator": a.is_simulator,
            "hours logged": round(a.total_time, 1),
        }
        for a in result.aircraft
    ]
)
st.dataframe(df_aircraft, use_container_width=True)


# -----------------------------
# Budget
# -----------------------------
aircraft_ids = [a.aircraft_id for a in result.aircraft if not a.is_simulator] or ["(aircraft)"]
allocations = allocate_hours(
    evaluation,
    [AircraftAllocation(aircraft_id=aircraft_ids[0], rate=rate, family_hours=family_hours)],
)
estimate = estimate_budget(
    BudgetInputs(
        allocations=allocations,
        ground_hours=ground_hours,
        instructor_rate=instructor_rate,
        medical=exams,
        headset=gear,
        foreflight=subscriptions,
        contingency_percent=contingency_percent,
        lessons_per_week=lessons_per_week,
    )
)

st.subheader("Budget")
col1, col2, col3 = st.columns(3)
col1.metric("Total", f"${estimate.total:,.2f}")
col2.metric("Time to complete", f"~ {estimate.months_to_complete} months")
col3.metric("Monthly budget", f"${estimate.monthly_budget:,.2f}")
st.json(
    {
        "dual hours": estimate.dual_hours,
        "solo hours": estimate.solo_hours,
        "flight training": round(estimate.flight_training, 2),
        "personal flying": round(estimate.family_flying, 2),
        "gear": estimate.gear,
        "exams": estimate.exams,
        "subscriptions": estimate.subscriptions,
        "contingency": round(estimate.contingency, 2),
    }
)
