from core.kpis import airline_delay_series, status_distribution
from core.visualize import plot_airline_delays, plot_status_distribution, save_dashboard_plots
from conftest import make_flight


def flights():
    return [
        make_flight(flight_id="A"),
        make_flight(flight_id="B", airline="Delta", status="Delayed", delay_minutes=20),
        make_flight(flight_id="C", status="Cancelled"),
    ]


def test_airline_delay_bar_chart():
    fig = plot_airline_delays(airline_delay_series(flights()))
    assert list(fig.data[0].x) == ["Delta"]
    assert list(fig.data[0].y) == [1]


def test_status_pie_uses_bucket_colors():
    fig = plot_status_distribution(status_distribution(flights()))
    assert list(fig.data[0].labels) == ["On-Time", "Delayed", "Cancelled"]
    assert list(fig.data[0].values) == [1, 1, 1]
    assert list(fig.data[0].marker.colors) == ["#4ade80", "#f87171", "#94a3b8"]


def test_save_dashboard_plots(tmp_path):
    plots_dir = tmp_path / "plots"
    save_dashboard_plots(flights(), str(plots_dir))
    assert (plots_dir / "airline_delays.html").exists()
    assert (plots_dir / "status_distribution.html").exists()
