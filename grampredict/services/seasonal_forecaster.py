import asyncio
import logging
from typing import Callable

import pandas as pd
from prophet import Prophet

from grampredict.core.errors import ForecastError, InsufficientHistoryError
from grampredict.crud.demand import MONTH_LABEL_FORMAT
from grampredict.schemas.forecast import ForecastPoint, ForecastRequest, ForecastSeries
from grampredict.services.request_builder import validate_request

logger = logging.getLogger(__name__)

MIN_HISTORY_MONTHS = 2

HistoryLoader = Callable[[ForecastRequest], pd.DataFrame]

class SeasonalForecaster:
    """Forecasts person-days by fitting Prophet to the stored monthly history.

    Unlike the language-model gateway, the output is a function of the data:
    the same history and horizon give the same series.
    """
    backend_name = "prophet"

    def __init__(self, load_history: HistoryLoader):
        self.load_history = load_history

    def _fit_and_predict(self, history: pd.DataFrame, periods: int) -> pd.DataFrame:
        model = Prophet(yearly_seasonality=True, weekly_seasonality=False, daily_seasonality=False)
        try:
            model.fit(history[["ds", "y"]])
            future = model.make_future_dataframe(periods=periods, freq="MS", include_history=False)
            return model.predict(future)
        except Exception as e:
            raise ForecastError(f"Error fitting seasonal model: {str(e)}")

    async def generate(self, request: ForecastRequest) -> ForecastSeries:
        """Generates a forecast series from the district's reported history.

        This method performs a multi-step process:
        1. Loads the monthly aggregated person-days for the district/block.
        2. Fits a Prophet model with yearly seasonality.
        3. Predicts the requested number of month starts after the last observation.
        4. Clips negative predictions to zero and labels months like "Jan 2025".

        Args:
            request (ForecastRequest): District, block and horizon to forecast.

        Returns:
            ForecastSeries: Exactly `request.horizon_months` non-negative points.

        Raises:
            ValidationError: If the request is invalid.
            InsufficientHistoryError: If fewer than two months of history exist.
            ForecastError: If the model fails to fit or predict.
        """
        validate_request(request)
        history = self.load_history(request)
        if len(history) < MIN_HISTORY_MONTHS:
            raise InsufficientHistoryError(
                f"Not enough history for district {request.district_id}, block {request.block_name} "
                f"(requires at least {MIN_HISTORY_MONTHS} months, found {len(history)})"
            )

        logger.info(
            "Fitting seasonal model on %d months for district %s, block %s",
            len(history), request.district_id, request.block_name,
        )
        loop = asyncio.get_running_loop()
        forecast = await loop.run_in_executor(
            None, lambda: self._fit_and_predict(history, request.horizon_months)
        )

        return [
            ForecastPoint(month=ds.strftime(MONTH_LABEL_FORMAT), predicted=float(round(max(yhat, 0.0))))
            for ds, yhat in zip(forecast["ds"], forecast["yhat"])
        ]
