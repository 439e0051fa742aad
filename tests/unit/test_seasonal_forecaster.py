import asyncio

import numpy as np
import pandas as pd
import pytest
from prophet import Prophet

from grampredict.core.errors import ForecastError, InsufficientHistoryError, ValidationError
from grampredict.schemas.forecast import ForecastRequest
from grampredict.services.seasonal_forecaster import SeasonalForecaster


def monsoon_history(months=36):
    ds = pd.date_range("2021-01-01", periods=months, freq="MS")
    base = 5000 + 2500 * ds.month.isin([6, 7, 8])
    return pd.DataFrame({"ds": ds, "y": np.asarray(base, dtype=float)})


def test_insufficient_history():
    forecaster = SeasonalForecaster(lambda request: monsoon_history(1))
    with pytest.raises(InsufficientHistoryError):
        asyncio.run(forecaster.generate(ForecastRequest(district_id="d1", horizon_months=3)))

def test_invalid_request_does_not_load_history():
    loaded = []
    forecaster = SeasonalForecaster(lambda request: loaded.append(request) or monsoon_history())
    with pytest.raises(ValidationError):
        asyncio.run(forecaster.generate(ForecastRequest(district_id="d1", horizon_months=7)))
    assert loaded == []

def test_forecast_continues_after_history():
    forecaster = SeasonalForecaster(lambda request: monsoon_history(36))
    series = asyncio.run(forecaster.generate(ForecastRequest(district_id="d1", horizon_months=6)))

    assert [p.month for p in series] == ["Jan 2024", "Feb 2024", "Mar 2024", "Apr 2024", "May 2024", "Jun 2024"]
    assert all(p.predicted >= 0 for p in series)
    assert series[-1].predicted > series[0].predicted

def test_prediction_failure_is_forecast_error(monkeypatch):
    def broken_future(self, *args, **kwargs):
        raise RuntimeError("no future dates")

    monkeypatch.setattr(Prophet, "fit", lambda self, df, **kwargs: self)
    monkeypatch.setattr(Prophet, "make_future_dataframe", broken_future)
    forecaster = SeasonalForecaster(lambda request: monsoon_history(12))
    with pytest.raises(ForecastError) as exc:
        asyncio.run(forecaster.generate(ForecastRequest(district_id="d1", horizon_months=3)))
    assert "no future dates" in exc.value.message
