from typing import Optional

from grampredict.core.errors import ValidationError
from grampredict.schemas.forecast import ALL_BLOCKS, DEFAULT_HORIZON, HORIZON_CHOICES, ForecastRequest


def normalize_block(block_name: Optional[str]) -> str:
    """Maps "no block selected" to the aggregate sentinel the prompt needs."""
    if block_name is None:
        return ALL_BLOCKS
    block_name = block_name.strip()
    return block_name or ALL_BLOCKS


def validate_request(request: ForecastRequest) -> ForecastRequest:
    """Checks the constraints every forecast backend relies on.

    Raises:
        ValidationError: If the district is missing or the horizon is not one
                         of the offered choices.
    """
    if not request.district_id or not request.district_id.strip():
        raise ValidationError("Select a district before requesting a forecast")
    if request.horizon_months not in HORIZON_CHOICES:
        choices = ", ".join(str(m) for m in HORIZON_CHOICES)
        raise ValidationError(f"Forecast horizon must be one of {choices} months, got {request.horizon_months}")
    return request


def build_forecast_request(
    district_id: Optional[str],
    block_name: Optional[str] = None,
    horizon_months: int = DEFAULT_HORIZON,
) -> ForecastRequest:
    """Builds a forecast request from the dashboard's current filter selections.

    Args:
        district_id (Optional[str]): The selected district's identifier.
        block_name (Optional[str]): The selected block; None, "" and "All" all
                                    mean the district aggregate.
        horizon_months (int): How many months ahead to forecast.

    Returns:
        ForecastRequest: A validated, immutable request.

    Raises:
        ValidationError: If no district is selected or the horizon is not allowed.
                         No request is issued in that case.
    """
    request = ForecastRequest(
        district_id=(district_id or "").strip(),
        block_name=normalize_block(block_name),
        horizon_months=horizon_months,
    )
    return validate_request(request)
