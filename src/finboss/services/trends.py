"""Pure helpers for trend bucketing and spending forecasts."""

from collections import OrderedDict
from datetime import date, timedelta
from statistics import fmean, pstdev
from typing import Iterable

FORECAST_HISTORY_MONTHS = 3


def bucket_label(day: date, group_by: str) -> str:
    """Label of the bucket containing ``day``.

    Weeks are ISO weeks labelled by their Monday.
    """
    if group_by == "month":
        return day.strftime("%Y-%m")
    if group_by == "week":
        return (day - timedelta(days=day.weekday())).isoformat()
    return day.isoformat()


def roll_up(rows: Iterable[tuple[date, str, float]], group_by: str) -> list[dict]:
    """Fold per-day, per-type sums into income/expense/balance buckets.

    ``rows`` must be ordered by day; buckets come out in the same order and
    only buckets containing at least one transaction are returned.
    """
    buckets: OrderedDict[str, dict] = OrderedDict()
    for day, txn_type, total in rows:
        label = bucket_label(day, group_by)
        bucket = buckets.setdefault(label, {"date": label, "income": 0.0, "expense": 0.0})
        bucket[txn_type] += total

    result = []
    for bucket in buckets.values():
        bucket["income"] = round(bucket["income"], 2)
        bucket["expense"] = round(bucket["expense"], 2)
        bucket["balance"] = round(bucket["income"] - bucket["expense"], 2)
        result.append(bucket)
    return result


def monthly_totals(rows: Iterable[tuple[date, str, float]]) -> dict[str, float]:
    """Sum per-day rows into ``{YYYY-MM: total}``."""
    totals: dict[str, float] = {}
    for day, _txn_type, total in rows:
        label = bucket_label(day, "month")
        totals[label] = totals.get(label, 0.0) + total
    return totals


def confidence_score(observed: list[float]) -> int:
    """0-100 score; grows with months observed and with month-to-month stability."""
    if not observed:
        return 0
    mean = fmean(observed)
    if mean <= 0:
        return 0
    coverage = min(len(observed) / FORECAST_HISTORY_MONTHS, 1.0)
    stability = max(0.0, 1.0 - pstdev(observed) / mean)
    return round(coverage * stability * 100)


def project(observed: list[float], months: int) -> dict:
    """Forecast spending for ``months`` from the observed monthly totals."""
    if not observed:
        return {
            "historical_average": 0.0,
            "projected_spending": 0.0,
            "confidence": 0,
            "months": months,
        }
    average = fmean(observed)
    return {
        "historical_average": round(average, 2),
        "projected_spending": round(average * months, 2),
        "confidence": confidence_score(observed),
        "months": months,
    }
