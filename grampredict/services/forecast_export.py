import csv
import io
import time
from pathlib import Path
from typing import Optional, Union

from grampredict.schemas.forecast import ForecastSeries

CSV_HEADER = ("Month", "Predicted Person-Days")


def format_predicted(value: float) -> str:
    """Writes whole numbers without a trailing ".0" and everything else as-is."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def export_csv(series: ForecastSeries) -> Optional[str]:
    """Serializes a forecast series as comma-separated text with a header row.

    Args:
        series (ForecastSeries): The points to export.

    Returns:
        Optional[str]: The CSV text without a trailing newline, or None when
                       the series is empty.
    """
    if not series:
        return None
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for point in series:
        writer.writerow([point.month, format_predicted(point.predicted)])
    return buffer.getvalue().rstrip("\n")


def export_filename(district_id: str, timestamp_ms: Optional[int] = None) -> str:
    """Names an export like `forecast-<districtId>-<unixTimestampMillis>.csv`."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"forecast-{district_id}-{timestamp_ms}.csv"


def save_export(series: ForecastSeries, district_id: str, directory: Union[str, Path]) -> Optional[Path]:
    """Writes the export to `directory` and returns its path.

    Nothing is written, and None is returned, when the series is empty.
    """
    content = export_csv(series)
    if content is None:
        return None
    path = Path(directory) / export_filename(district_id)
    path.write_text(content, encoding="utf-8")
    return path
