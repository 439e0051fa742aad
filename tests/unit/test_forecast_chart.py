from grampredict.schemas.forecast import ForecastPoint
from grampredict.services.forecast_chart import build_forecast_chart

def test_chart_has_bar_and_line_keyed_by_month():
    series = [ForecastPoint(month="Jun 2025", predicted=9000), ForecastPoint(month="Jul 2025", predicted=9500)]
    fig = build_forecast_chart(series)

    kinds = [trace.type for trace in fig.data]
    assert kinds == ["bar", "scatter"]
    for trace in fig.data:
        assert list(trace.x) == ["Jun 2025", "Jul 2025"]
        assert list(trace.y) == [9000, 9500]
    assert fig.data[0].name == "Predicted Person-Days"

def test_empty_chart_renders():
    fig = build_forecast_chart([])
    assert len(fig.data) == 2
    assert fig.to_json()
