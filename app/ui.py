import streamlit as st
import pandas as pd

from app.actions import run_mutation
from core.export import flights_to_csv
from core.filters import airline_options, critical_alerts, filter_flights
from core.generate import AIRLINES, AIRPORTS, new_manual_flight
from core.kpis import airline_delay_series, average_delay, compute_stats, status_distribution
from core.preprocess import flights_to_frame
from core.schema import ALL, FLIGHT_STATUSES, FilterSpec, ON_TIME, DELAYED
from core.store import FlightStore, JsonFileStorage, DEFAULT_STORE_PATH
from core.visualize import plot_airline_delays, plot_status_distribution

# --- Page Configuration ---
st.set_page_config(
    page_title="SkyOps Flight Dashboard",
    page_icon="✈️",
    layout="wide",
    initial_sidebar_state="expanded",
)

TABLE_PAGE_SIZE = 10

# --- Helper Functions ---

@st.cache_resource
def get_store(path):
    """One store per server process, hydrated on first use."""
    return FlightStore(JsonFileStorage(path))


def flight_table(flights):
    df = flights_to_frame(flights)
    return df[['flight_number', 'airline', 'route', 'departure_time', 'status', 'delay_minutes', 'predicted_risk']]


# --- Data Loading ---
store = get_store(DEFAULT_STORE_PATH)
flights = store.list()

if not store.persistent:
    st.warning(f"Storage is unavailable ({store.last_error}). Changes will not survive a restart.")


# --- Sidebar Navigation ---
st.sidebar.title("Navigation")
page = st.sidebar.radio("Go to", ["Dashboard", "Flights", "Admin"])

# --- Main App ---

if page == "Dashboard":
    st.title("✈️ Flight Operations Overview")
    st.markdown("Live status of the mock flight schedule.")

    stats = compute_stats(flights)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Flights", stats.total_flights)
    col2.metric("On-Time Performance", f"{stats.on_time_performance}%")
    col3.metric("Delays", stats.total_delays)
    col4.metric("Cancellations", stats.total_cancellations)

    col1, col2, col3 = st.columns(3)
    col1.metric("Avg Delay", f"{average_delay(flights)}m")
    col2.metric("Most Active Airport", stats.most_active_airport)
    col3.metric("Most Delayed Airline", stats.most_delayed_airline)

    st.header("Visual Analysis")
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(plot_airline_delays(airline_delay_series(flights)), use_container_width=True)
    with col2:
        st.plotly_chart(plot_status_distribution(status_distribution(flights)), use_container_width=True)

    st.subheader("Critical Alerts (Delays > 60m)")
    alerts = critical_alerts(flights)
    if alerts:
        st.dataframe(flight_table(alerts), hide_index=True)
    else:
        st.success("No flights are delayed by more than an hour.")


elif page == "Flights":
    st.title("🛫 Flight Records")

    col1, col2, col3 = st.columns(3)
    with col1:
        search_term = st.text_input("Search flight or airport", "")
    with col2:
        status = st.selectbox("Status", [ALL] + list(FLIGHT_STATUSES))
    with col3:
        airline = st.selectbox("Airline", airline_options(flights))

    filtered = filter_flights(flights, FilterSpec(search_term=search_term, status=status, airline=airline))

    if filtered:
        st.dataframe(flight_table(filtered[:TABLE_PAGE_SIZE]), hide_index=True)
    else:
        st.info("No flights match the current filters.")
    st.caption(f"Showing {min(len(filtered), TABLE_PAGE_SIZE)} of {len(filtered)} flights")

    if filtered:
        to_delete = st.selectbox(
            "Delete a flight",
            [f.id for f in filtered],
            format_func=lambda fid: next(f"{f.flight_number} ({f.id})" for f in filtered if f.id == fid),
        )
        if st.button("Delete"):
            if run_mutation(store.delete, to_delete):
                st.rerun()


elif page == "Admin":
    st.title("🛠️ Admin Control Center")

    col1, col2 = st.columns(2)
    with col1:
        st.download_button("Export CSV", flights_to_csv(flights), file_name="flight_data.csv", mime="text/csv")
    with col2:
        confirm = st.checkbox("I want to replace all flights with random defaults")
        if st.button("Reset Data", disabled=not confirm):
            if run_mutation(store.reset):
                st.rerun()

    st.subheader("Add Flight")
    with st.form("add_flight"):
        col1, col2, col3 = st.columns(3)
        with col1:
            airline = st.selectbox("Airline", AIRLINES)
            flight_number = st.text_input("Flight Number", "XX999")
        with col2:
            departure = st.selectbox("From", AIRPORTS, index=1)
            arrival = st.selectbox("To", AIRPORTS, index=2)
        with col3:
            status = st.selectbox("Status", list(FLIGHT_STATUSES))
            delay = st.number_input("Delay (minutes)", min_value=0, value=0, step=5)
        submitted = st.form_submit_button("Save Flight")

    if submitted:
        if status == DELAYED and delay <= 0:
            st.error("A delayed flight needs a delay greater than zero.")
        else:
            try:
                record = new_manual_flight(airline, departure, arrival, status=status or ON_TIME,
                                           delay_minutes=int(delay), flight_number=flight_number or 'XX999')
            except ValueError as e:
                st.error(f"Invalid flight: {e}")
            else:
                if run_mutation(store.add, record):
                    st.rerun()

    st.subheader("Current Records")
    st.dataframe(pd.DataFrame([f.to_dict() for f in flights[:TABLE_PAGE_SIZE]]), hide_index=True)
