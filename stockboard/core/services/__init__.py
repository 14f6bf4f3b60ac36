"""Services built on the dataset store."""

from stockboard.core.services.charts import (
    TIME_RANGE_DAYS,
    MovingAveragePoint,
    PredictionSummary,
    days_for_range,
    moving_average,
    prediction_summary,
    price_domain,
)
from stockboard.core.services.quotes import (
    POPULAR_STOCKS,
    convert_to_number,
    format_large_number,
    format_percentage,
    load_stock_quotes,
)
from stockboard.core.services.upload import (
    ConfirmCallback,
    DatasetUploader,
    UploadMode,
    UploadResult,
    UploadStatus,
)

__all__ = [
    "ConfirmCallback",
    "DatasetUploader",
    "MovingAveragePoint",
    "POPULAR_STOCKS",
    "PredictionSummary",
    "TIME_RANGE_DAYS",
    "UploadMode",
    "UploadResult",
    "UploadStatus",
    "convert_to_number",
    "days_for_range",
    "format_large_number",
    "format_percentage",
    "load_stock_quotes",
    "moving_average",
    "prediction_summary",
    "price_domain",
]
