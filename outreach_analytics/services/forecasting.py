"""
Trend and forecast engine for weekly outreach series.

Fits an ordinary-least-squares line to a series against its index
(0..n-1), labels its direction, extrapolates future periods and computes a
confidence interval around the historical mean.

Key Functions:
- linear_regression: OLS fit returning slope, intercept, r2 and direction
- trend_direction: Canonical up/down/stable label for a fit
- predict_future: Straight-line extrapolation, floored at 0
- confidence_interval: Interval around the historical mean
- forecast: Extrapolated points with bounds from the historical interval

Regression (x = 0..n-1):
- xMean = (n - 1) / 2, yMean = mean(series)
- ssXY = sum((x - xMean) * (y - yMean))
- ssXX = sum((x - xMean)^2), ssYY = sum((y - yMean)^2)
- slope = ssXY / ssXX, intercept = yMean - slope * xMean
- r2 = ssXY^2 / (ssXX * ssYY)

Direction:
A trend is "stable" when |slope| < stable_slope OR r2 < min_r2 (defaults 0.5
and 0.3). Otherwise it is "up" or "down" by the sign of the slope.

Interval:
margin = z * std / sqrt(n), where std is the population standard deviation
(ddof=0). Forecast bounds reuse this historical margin; they describe the
spread of history, not the uncertainty of the extrapolation.
"""

import math
from typing import List, Optional, Sequence

import numpy as np

from outreach_analytics.models import (
    ConfidenceInterval,
    ForecastPoint,
    TrendDirection,
    TrendModel,
)


# =============================================================================
# Constants
# =============================================================================

# Below this slope magnitude (percentage points per period) a trend is stable
STABLE_SLOPE_THRESHOLD: float = 0.5

# Below this goodness of fit a trend is stable regardless of slope
MIN_R2_FOR_DIRECTION: float = 0.3

# Two-sided z scores by confidence level
Z_SCORE_95: float = 1.96
Z_SCORE_99: float = 2.576
Z_SCORE_DEFAULT: float = 1.645

DEFAULT_CONFIDENCE: float = 0.95
DEFAULT_FORECAST_PERIODS: int = 4


def z_score_for(confidence: float) -> float:
    """z for 0.95 and 0.99; every other level falls back to the 90% z."""
    if math.isclose(confidence, 0.95):
        return Z_SCORE_95
    if math.isclose(confidence, 0.99):
        return Z_SCORE_99
    return Z_SCORE_DEFAULT


def _as_array(series: Sequence[float]) -> np.ndarray:
    return np.asarray(list(series), dtype=np.float64)


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(value) for value in values)


# =============================================================================
# Regression
# =============================================================================


def trend_direction(
    slope: float,
    r2: float,
    stable_slope: float = STABLE_SLOPE_THRESHOLD,
    min_r2: float = MIN_R2_FOR_DIRECTION,
) -> TrendDirection:
    """
    Label a fitted trend.

    Args:
        slope: Fitted slope.
        r2: Coefficient of determination of the fit.
        stable_slope: Slope magnitude under which the trend is stable.
        min_r2: Fit quality under which the trend is stable.

    Returns:
        TrendDirection.STABLE, UP or DOWN.
    """
    if abs(slope) < stable_slope or r2 < min_r2:
        return TrendDirection.STABLE
    return TrendDirection.UP if slope > 0 else TrendDirection.DOWN


def linear_regression(
    series: Sequence[float],
    stable_slope: float = STABLE_SLOPE_THRESHOLD,
    min_r2: float = MIN_R2_FOR_DIRECTION,
) -> TrendModel:
    """
    Ordinary least squares of the series against its index.

    Args:
        series: Values in chronological order (e.g. weekly acceptance rates).
        stable_slope: Threshold forwarded to trend_direction().
        min_r2: Threshold forwarded to trend_direction().

    Returns:
        TrendModel with slope, intercept, r2 and direction.

    Edge Cases:
        - Fewer than 2 points: slope 0, intercept series[0] (or 0), r2 0
        - Constant series: slope 0, r2 0
        - Sums that overflow: the degenerate model (0, 0, 0, stable)
        - r2 is always within [0, 1]

    Example:
        >>> model = linear_regression([10, 12, 14, 16])
        >>> model.slope, model.intercept, model.r2
        (2.0, 10.0, 1.0)
    """
    values = _as_array(series)
    n = len(values)

    if n < 2:
        intercept = float(values[0]) if n == 1 else 0.0
        return TrendModel(slope=0.0, intercept=intercept, r2=0.0, direction=TrendDirection.STABLE)

    x = np.arange(n, dtype=np.float64)
    x_dev = x - (n - 1) / 2
    y_mean = float(np.mean(values))
    y_dev = values - y_mean

    ss_xy = float(np.sum(x_dev * y_dev))
    ss_xx = float(np.sum(x_dev * x_dev))
    ss_yy = float(np.sum(y_dev * y_dev))

    slope = ss_xy / ss_xx if ss_xx != 0 else 0.0
    intercept = y_mean - slope * (n - 1) / 2
    r2 = (ss_xy * ss_xy) / (ss_xx * ss_yy) if ss_xx != 0 and ss_yy != 0 else 0.0
    if not _all_finite(slope, intercept, r2):
        return TrendModel()
    # Floating-point noise can push a perfect fit just past 1
    r2 = min(max(r2, 0.0), 1.0)

    return TrendModel(
        slope=slope,
        intercept=intercept,
        r2=r2,
        direction=trend_direction(slope, r2, stable_slope, min_r2),
    )


def predict_future(
    series: Sequence[float],
    periods: int = DEFAULT_FORECAST_PERIODS,
    model: Optional[TrendModel] = None,
) -> List[float]:
    """
    Extrapolate the fitted line for future periods.

    Value i (0-based) is max(0, slope * (n + i) + intercept), so the first
    prediction is at index n, right after the last observation.

    Args:
        series: Historical values.
        periods: Number of periods to predict; 0 or less returns [].
        model: Pre-fitted model for the series, to avoid refitting.
    """
    if periods <= 0:
        return []
    model = model or linear_regression(series)
    n = len(series)
    x = np.arange(n, n + periods, dtype=np.float64)
    predictions = np.maximum(0.0, model.slope * x + model.intercept)
    return [float(value) if math.isfinite(value) else 0.0 for value in predictions]


# =============================================================================
# Confidence Interval
# =============================================================================


def confidence_interval(
    series: Sequence[float],
    confidence: float = DEFAULT_CONFIDENCE,
) -> ConfidenceInterval:
    """
    Interval around the historical mean.

    Args:
        series: Historical values.
        confidence: 0.95 or 0.99; other levels use z=1.645.

    Returns:
        ConfidenceInterval(lower, upper, mean). An empty series, or one whose
        sums overflow, gives all 0.
    """
    values = _as_array(series)
    n = len(values)
    if n == 0:
        return ConfidenceInterval()

    mean_val = float(np.mean(values))
    std_val = float(np.std(values))  # Population std (ddof=0)
    margin = z_score_for(confidence) * std_val / math.sqrt(n)
    if not _all_finite(mean_val, margin):
        return ConfidenceInterval()

    return ConfidenceInterval(lower=mean_val - margin, upper=mean_val + margin, mean=mean_val)


def forecast(
    series: Sequence[float],
    periods: int = DEFAULT_FORECAST_PERIODS,
    confidence: float = DEFAULT_CONFIDENCE,
    model: Optional[TrendModel] = None,
) -> List[ForecastPoint]:
    """
    Forecast points with bounds.

    Each point is predictedValue +/- the historical interval half-width, with
    lowerBound floored at 0.

    Args:
        series: Historical values.
        periods: Number of future periods.
        confidence: Confidence level of the historical interval.
        model: Pre-fitted model for the series.

    Returns:
        One ForecastPoint per period, numbered from 1.
    """
    predictions = predict_future(series, periods, model)
    if not predictions:
        return []

    interval = confidence_interval(series, confidence)
    margin = interval.upper - interval.mean

    return [
        ForecastPoint(
            period=index,
            predictedValue=value,
            lowerBound=max(0.0, value - margin),
            upperBound=value + margin,
        )
        for index, value in enumerate(predictions, start=1)
    ]
