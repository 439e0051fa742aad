import plotly.graph_objects as go

from grampredict.schemas.forecast import ForecastSeries

SERIES_NAME = "Predicted Person-Days"


def build_forecast_chart(series: ForecastSeries) -> go.Figure:
    """Builds the combined bar and line chart for a forecast, keyed by month label."""
    months = [p.month for p in series]
    predicted = [p.predicted for p in series]

    fig = go.Figure()
    fig.add_trace(go.Bar(x=months, y=predicted, name=SERIES_NAME))
    fig.add_trace(
        go.Scatter(
            x=months,
            y=predicted,
            mode="lines+markers",
            name="Trend",
            line={"shape": "spline", "width": 2},
            marker={"size": 8},
        )
    )
    fig.update_layout(
        xaxis_title="Month",
        yaxis_title="Person-Days",
        legend={"orientation": "h"},
        margin={"l": 40, "r": 20, "t": 30, "b": 40},
    )
    return fig
