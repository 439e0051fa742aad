import enum
import logging
from typing import Awaitable, Callable, Optional

from grampredict.core.errors import ForecastError, ValidationError
from grampredict.schemas.forecast import DEFAULT_HORIZON, ForecastRequest, ForecastSeries
from grampredict.services.forecast_export import export_csv
from grampredict.services.request_builder import build_forecast_request

logger = logging.getLogger(__name__)

Generator = Callable[[ForecastRequest], Awaitable[ForecastSeries]]

class ViewState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ForecastView:
    """Holds the forecast panel's state for one dashboard view.

    Every fetch is tagged with an increasing sequence number. When filters
    change quickly, several fetches can be in flight at once; only the reply
    to the most recent one is applied, and older replies are dropped when
    they arrive. Superseded calls are not cancelled.

    Attributes:
        state (ViewState): Idle, Loading, Ready or Failed.
        series (ForecastSeries): The last successfully applied forecast.
        notification (Optional[str]): Message for the transient error toast.
    """

    def __init__(self, generate: Generator, horizon_months: int = DEFAULT_HORIZON):
        self.generate = generate
        self.horizon_months = horizon_months
        self.state = ViewState.IDLE
        self.series: ForecastSeries = []
        self.notification: Optional[str] = None
        self._seq = 0
        self._latest = 0

    def begin(self) -> int:
        self._seq += 1
        self._latest = self._seq
        self.state = ViewState.LOADING
        self.notification = None
        return self._seq

    def is_current(self, seq: int) -> bool:
        return seq == self._latest

    def resolve(self, seq: int, series: ForecastSeries) -> bool:
        if not self.is_current(seq):
            logger.debug("Dropping stale forecast reply #%d (latest is #%d)", seq, self._latest)
            return False
        self.series = list(series)
        self.state = ViewState.READY
        return True

    def fail(self, seq: int, message: str) -> bool:
        if not self.is_current(seq):
            logger.debug("Dropping stale forecast failure #%d (latest is #%d)", seq, self._latest)
            return False
        self.state = ViewState.FAILED
        self.notification = message or "Failed to generate forecast"
        return True

    async def fetch(self, district_id: Optional[str], block_name: Optional[str] = None, horizon_months: Optional[int] = None) -> bool:
        """Requests a forecast for the given filters and applies the reply.

        A missing district or invalid horizon leaves the state untouched and
        makes no call; the reason is kept in `notification`.

        Returns:
            bool: True if this fetch's reply (success or failure) was applied,
                  False if it was refused or arrived after a newer fetch started.
        """
        if horizon_months is not None:
            self.horizon_months = horizon_months
        try:
            request = build_forecast_request(district_id, block_name, self.horizon_months)
        except ValidationError as e:
            self.notification = e.message
            return False

        seq = self.begin()
        try:
            series = await self.generate(request)
        except ForecastError as e:
            return self.fail(seq, e.message)
        except Exception:
            logger.exception("Unexpected error generating forecast for district %s", request.district_id)
            return self.fail(seq, "Failed to generate forecast")
        return self.resolve(seq, series)

    def export(self) -> Optional[str]:
        """CSV text for the current series, or None if there is nothing to export."""
        return export_csv(self.series)
