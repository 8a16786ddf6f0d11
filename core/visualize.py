import os

import plotly.graph_objects as go

from core.kpis import airline_delay_series, status_distribution


def plot_airline_delays(points: list, output_path: str = None) -> go.Figure:
    """
    Creates a bar chart of delayed flights per airline.

    Args:
        points: ChartPoint list from `airline_delay_series`.
        output_path: If given, the figure is also saved there as HTML.
    """
    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=[p.name for p in points],
        y=[p.value for p in points],
        name='Delayed Flights',
        marker_color='#60a5fa'
    ))

    fig.update_layout(
        title_text='<b>Delays by Airline</b>',
        xaxis_title='Airline',
        yaxis_title='Delayed Flights',
        template='plotly_dark'
    )

    if output_path:
        fig.write_html(output_path)
        print(f"Saved airline delay plot to {output_path}")
    return fig


def plot_status_distribution(points: list, output_path: str = None) -> go.Figure:
    """
    Creates a donut chart of flight status shares.

    Args:
        points: ChartPoint list from `status_distribution`.
        output_path: If given, the figure is also saved there as HTML.
    """
    fig = go.Figure(go.Pie(
        labels=[p.name for p in points],
        values=[p.value for p in points],
        marker=dict(colors=[p.color for p in points]),
        hole=0.6,
        sort=False
    ))

    fig.update_layout(
        title_text='<b>Flight Status Distribution</b>',
        legend=dict(orientation="h", yanchor="bottom", y=-0.2, xanchor="center", x=0.5),
        template='plotly_dark'
    )

    if output_path:
        fig.write_html(output_path)
        print(f"Saved status distribution plot to {output_path}")
    return fig


def save_dashboard_plots(flights: list, plots_dir: str):
    """Writes both dashboard charts for `flights` as HTML files into `plots_dir`."""
    if not os.path.exists(plots_dir):
        os.makedirs(plots_dir)

    plot_airline_delays(airline_delay_series(flights), os.path.join(plots_dir, 'airline_delays.html'))
    plot_status_distribution(status_distribution(flights), os.path.join(plots_dir, 'status_distribution.html'))
