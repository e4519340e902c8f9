"""Business rules and chart summaries layered on top of the metric collections."""

from collections.abc import Sequence

from . import settings
from .schemas import (
    CategoryMetric,
    CategoryShare,
    CategorySummary,
    ConsumptionSummary,
    ConsumptionTrendPoint,
    ItemMaster,
    ItemOption,
    MonthlyConsumption,
    MSLComplianceSummary,
    MSLStatus,
    MSLTrendPoint,
)


# --- Stock Level Rules ---


def evaluate_stock_level(stock: float, msl: float) -> str:
    """'Low', 'Optimal' or 'High' depending on how far stock sits from the MSL."""
    ratio = stock / msl
    if ratio < settings.MSL_LOW_RATIO:
        return "Low"
    if ratio > settings.MSL_EXCESS_RATIO:
        return "High"
    return "Optimal"


def evaluate_msl_status(stock: float, msl: float) -> MSLStatus:
    ratio = stock / msl
    if ratio < settings.MSL_LOW_RATIO:
        return MSLStatus(status="Below", threshold=settings.MSL_LOW_RATIO)
    if ratio > settings.MSL_EXCESS_RATIO:
        return MSLStatus(status="Excess", threshold=settings.MSL_EXCESS_RATIO)
    return MSLStatus(status="Optimal", threshold=1)


def summarize_msl_compliance(points: Sequence[MSLTrendPoint]) -> MSLComplianceSummary:
    """
    Status counts for an MSL trend line. The current status is the one of
    the last point; an empty trend counts as fully compliant.
    """
    statuses = [evaluate_msl_status(point.stock, point.msl).status for point in points]
    days_below = statuses.count("Below")
    days_excess = statuses.count("Excess")
    compliance_pct = (
        (len(statuses) - days_below) / len(statuses) * 100 if statuses else 100.0
    )

    return MSLComplianceSummary(
        current_status=statuses[-1] if statuses else "Optimal",
        days_below=days_below,
        days_excess=days_excess,
        compliance_pct=compliance_pct,
        data_points=len(statuses),
    )


# --- Turnover Rules ---


def evaluate_turnover(itr: float) -> str:
    if itr < settings.ITR_LOW_THRESHOLD:
        return "Low"
    if itr > settings.ITR_HIGH_THRESHOLD:
        return "High"
    return "Optimal"


# --- Chart Summaries ---


def summarize_consumption(points: Sequence[ConsumptionTrendPoint]) -> ConsumptionSummary:
    """
    Collapses (already filtered) consumption points into monthly totals and
    compares the latest month against the monthly average.
    """
    totals: dict[str, float] = {}
    for point in points:
        totals[point.month] = totals.get(point.month, 0.0) + point.consumption

    monthly_totals = [
        MonthlyConsumption(month=month, total_usage=usage)
        for month, usage in totals.items()
    ]
    total_consumption = sum(totals.values())
    monthly_average = total_consumption / len(totals) if totals else 0.0
    latest = monthly_totals[-1].total_usage if monthly_totals else 0.0
    trend_pct = (
        (latest - monthly_average) / monthly_average * 100 if monthly_average > 0 else 0.0
    )

    return ConsumptionSummary(
        monthly_totals=monthly_totals,
        total_consumption=total_consumption,
        monthly_average=monthly_average,
        latest_month_consumption=latest,
        trend_pct=trend_pct,
    )


def summarize_categories(
    metrics: Sequence[CategoryMetric], selected_category: str = ""
) -> CategorySummary:
    total_stock_value = sum(metric.stock_value for metric in metrics)
    total_items = sum(metric.total_items for metric in metrics)

    shares = [
        CategoryShare(
            category=metric.category,
            stock_value=metric.stock_value,
            item_count=metric.total_items,
            consumption=metric.consumption_rate,
            share_pct=(
                metric.stock_value / total_stock_value * 100 if total_stock_value else 0.0
            ),
            is_selected=selected_category == metric.category,
        )
        for metric in metrics
    ]

    return CategorySummary(
        total_stock_value=total_stock_value,
        total_items=total_items,
        categories=shares,
    )


# --- Filter Options ---


def category_options(item_master: Sequence[ItemMaster]) -> list[str]:
    """Distinct categories in the order they first appear."""
    return list(dict.fromkeys(item.category for item in item_master))


def item_options(item_master: Sequence[ItemMaster]) -> list[ItemOption]:
    return [ItemOption(id=item.item_id, name=item.item_name) for item in item_master]


def resolve_item_name(item_master: Sequence[ItemMaster], item_id: str) -> str:
    """Display name for an item, or '' when the item is not in the master."""
    for item in item_master:
        if item.item_id == item_id:
            return item.item_name
    return ""
