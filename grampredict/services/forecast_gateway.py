"""
Forecast generation through a generative-text backend.

The model is asked to invent plausible monthly person-days figures; nothing
here is fitted to stored history, so two identical requests can return
different numbers. `SeasonalForecaster` offers a history-driven backend with
the same `generate()` interface.
"""

import json
import logging
import math
import re
from typing import Dict, List, Optional

from grampredict.core.config import settings
from grampredict.core.errors import ForecastError, ParseError, UpstreamError
from grampredict.schemas.forecast import ForecastPoint, ForecastRequest, ForecastSeries
from grampredict.services.llm_provider_service import LLMProviderService, llm_service
from grampredict.services.request_builder import validate_request

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a time series forecasting expert. Generate realistic MGNREGA person-days "
    "forecasts based on historical patterns. Return only valid JSON."
)

USER_PROMPT_TEMPLATE = (
    "Generate {months} months of MGNREGA person-days forecast for district {district}, "
    "block {block}. Base predictions on seasonal patterns (higher in monsoon Jun-Aug). "
    'Return JSON format: {{"forecast": [{{"month": "Jan 2025", "predicted": 6500}}, ...]}}'
)

# An opening fence with an optional language tag, or a closing fence.
_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*[ \t]*\r?\n?")


def build_prompt(request: ForecastRequest) -> List[Dict[str, str]]:
    """Builds the chat messages for a forecast request."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": USER_PROMPT_TEMPLATE.format(
                months=request.horizon_months,
                district=request.district_id,
                block=request.block_name,
            ),
        },
    ]


def strip_code_fences(text: str) -> str:
    """Removes Markdown code fences around a model reply and trims whitespace.

    Handles "```json" and bare "```" openers and "```" closers in any
    combination. Text without fences is returned trimmed but otherwise
    unchanged, so applying this twice is the same as applying it once.
    """
    return _FENCE_RE.sub("", text).strip()


def parse_forecast(text: str, horizon_months: Optional[int] = None) -> ForecastSeries:
    """Parses a model reply into a forecast series.

    The whole reply is rejected on the first problem; no points are salvaged.

    Args:
        text (str): The raw reply, possibly wrapped in code fences.
        horizon_months (Optional[int]): If given, the exact number of points required.

    Returns:
        ForecastSeries: The parsed points in the order the model returned them.

    Raises:
        ParseError: If the reply is not JSON, lacks a `forecast` list, contains
                    an entry without a month label or with a non-numeric or
                    negative prediction, or has the wrong number of points.
    """
    if not isinstance(text, str):
        raise ParseError("Forecast response was empty")

    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ParseError(f"Forecast response is not valid JSON: {e.msg}")
    except RecursionError:
        raise ParseError("Forecast response is nested too deeply")

    if not isinstance(payload, dict) or "forecast" not in payload:
        raise ParseError("Forecast response is missing the 'forecast' key")
    entries = payload["forecast"]
    if not isinstance(entries, list):
        raise ParseError("Forecast response 'forecast' is not a list")

    series: ForecastSeries = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ParseError(f"Forecast entry {i} is not an object")
        month = entry.get("month")
        if not isinstance(month, str) or not month.strip():
            raise ParseError(f"Forecast entry {i} has no month label")
        predicted = entry.get("predicted")
        if isinstance(predicted, bool) or not isinstance(predicted, (int, float)):
            raise ParseError(f"Forecast entry {i} ({month}) has a non-numeric prediction")
        try:
            predicted = float(predicted)
        except OverflowError:
            raise ParseError(f"Forecast entry {i} ({month}) has an out-of-range prediction")
        if not math.isfinite(predicted):
            raise ParseError(f"Forecast entry {i} ({month}) has a non-numeric prediction")
        if predicted < 0:
            raise ParseError(f"Forecast entry {i} ({month}) has a negative prediction")
        series.append(ForecastPoint(month=month.strip(), predicted=predicted))

    if horizon_months is not None and len(series) != horizon_months:
        raise ParseError(f"Expected {horizon_months} forecast months, got {len(series)}")
    return series


class ForecastGateway:
    backend_name = "llm"

    def __init__(self, llm: Optional[LLMProviderService] = None, temperature: Optional[float] = None):
        self.llm = llm or llm_service
        self.temperature = settings.FORECAST_TEMPERATURE if temperature is None else temperature

    async def generate(self, request: ForecastRequest) -> ForecastSeries:
        """Generates a forecast series with a single call to the language model.

        Args:
            request (ForecastRequest): District, block and horizon to forecast.

        Returns:
            ForecastSeries: Exactly `request.horizon_months` non-negative points.

        Raises:
            ValidationError: If the request itself is invalid; nothing is sent.
            UpstreamError: If the model could not be reached or answered with an error.
            ParseError: If the reply is not a usable forecast.
        """
        validate_request(request)
        logger.info(
            "Requesting %s-month forecast for district %s, block %s",
            request.horizon_months, request.district_id, request.block_name,
        )
        try:
            text = await self.llm.complete(build_prompt(request), temperature=self.temperature)
        except ForecastError:
            raise
        except Exception as e:
            raise UpstreamError(f"Forecast backend failed: {e}") from e

        try:
            return parse_forecast(text, request.horizon_months)
        except ParseError as e:
            logger.warning("Unusable forecast reply for district %s: %s", request.district_id, e.message)
            raise


forecast_gateway = ForecastGateway()
