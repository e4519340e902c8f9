"""
Aggregations that turn normalized daily records into the metric
collections behind each dashboard view.

Every function here is pure: it never mutates its input, keeps no state
between calls and returns freshly built lists, so callers can recompute
on every filter change.
"""

import logging
from collections.abc import Sequence

from . import utils
from .schemas import (
    CategoryMetric,
    ConsumptionTrendPoint,
    DashboardData,
    ITRMetric,
    ItemMaster,
    MSLTrendPoint,
    RawRecord,
)

logger = logging.getLogger(__name__)


def _sorted_by_date(records: Sequence[RawRecord]) -> list[RawRecord]:
    # ISO dates sort chronologically as plain strings; sorted() is stable.
    return sorted(records, key=lambda record: record.date)


def _first_record_by_item(records: Sequence[RawRecord]) -> dict[str, RawRecord]:
    """Index of the first record for each item_id, in the order given."""
    first_seen: dict[str, RawRecord] = {}
    for record in records:
        first_seen.setdefault(record.item_id, record)
    return first_seen


def calculate_average_stock(opening_stock: float, closing_stock: float) -> float:
    return (opening_stock + closing_stock) / 2


def calculate_itr(total_consumption: float, average_inventory: float) -> float:
    return 0.0 if average_inventory == 0 else total_consumption / average_inventory


def project_msl_trends(records: Sequence[RawRecord]) -> list[MSLTrendPoint]:
    """One point per record, in input order. Duplicates are kept."""
    return [
        MSLTrendPoint(
            item_id=record.item_id,
            date=record.date,
            stock=record.closing_stock,
            msl=record.msl,
        )
        for record in records
    ]


def aggregate_consumption_trends(
    records: Sequence[RawRecord],
) -> list[ConsumptionTrendPoint]:
    """
    Sums clamped daily consumption into one point per (month, item).

    Category and ABC class come from the first record of the item in the
    original, unsorted input, not from the month being aggregated.
    """
    monthly_usage: dict[str, dict[str, float]] = {}

    # 1. Bucket daily usage by month, then by item
    for record in _sorted_by_date(records):
        items_in_month = monthly_usage.setdefault(utils.month_key(record.date), {})
        usage = max(0.0, record.consumption)
        items_in_month[record.item_id] = items_in_month.get(record.item_id, 0.0) + usage

    # 2. Flatten, resolving metadata against dataset order
    item_details = _first_record_by_item(records)
    trends = []
    for month, items in monthly_usage.items():
        for item_id, usage in items.items():
            details = item_details.get(item_id)
            if details is None:
                continue
            trends.append(
                ConsumptionTrendPoint(
                    item_id=item_id,
                    category=details.category,
                    abc_class=details.abc_class,
                    month=month,
                    consumption=usage,
                )
            )

    return sorted(trends, key=lambda trend: trend.month)


def rollup_by_category(records: Sequence[RawRecord]) -> list[CategoryMetric]:
    category_stats: dict[str, CategoryMetric] = {}

    for record in records:
        stats = category_stats.get(record.category)
        if stats is None:
            stats = category_stats[record.category] = CategoryMetric(
                category=record.category
            )
        stats.total_items += 1
        stats.stock_value += record.closing_stock * record.unit_price
        stats.consumption_rate += record.consumption

    return list(category_stats.values())


def compute_itr_metrics(records: Sequence[RawRecord]) -> list[ITRMetric]:
    """
    Per-item inventory turnover over the full record history.

    Consumption is summed as reported (no clamping). Item name, category
    and ABC class are taken from the earliest-dated record of each item.
    """
    item_data: dict[str, dict] = {}

    for record in _sorted_by_date(records):
        current = item_data.get(record.item_id)
        if current is None:
            item_data[record.item_id] = {
                "total_consumption": record.consumption,
                "stock_levels": [
                    calculate_average_stock(record.opening_stock, record.closing_stock)
                ],
                "item_name": record.item_name,
                "category": record.category,
                "abc_class": record.abc_class,
            }
        else:
            current["total_consumption"] += record.consumption
            current["stock_levels"].append(
                calculate_average_stock(record.opening_stock, record.closing_stock)
            )

    metrics = []
    for item_id, data in item_data.items():
        data_points = len(data["stock_levels"])
        average_inventory = (
            sum(data["stock_levels"]) / data_points if data_points > 0 else 0.0
        )
        total_consumption = data["total_consumption"]

        metrics.append(
            ITRMetric(
                item_id=item_id,
                item_name=data["item_name"],
                category=data["category"],
                abc_class=data["abc_class"],
                itr=calculate_itr(total_consumption, average_inventory),
                average_inventory=average_inventory,
                monthly_consumption=total_consumption / (data_points or 1),
                data_points=data_points,
            )
        )

    return metrics


def build_dashboard_data(
    item_master: Sequence[ItemMaster], records: Sequence[RawRecord]
) -> DashboardData:
    """Computes all four metric collections from already-normalized inputs."""
    msl_trends = project_msl_trends(records)
    consumption_trends = aggregate_consumption_trends(records)
    category_metrics = rollup_by_category(records)
    itr_metrics = compute_itr_metrics(records)

    logger.info(
        f"Computed {len(msl_trends)} MSL points, {len(consumption_trends)} consumption points, "
        f"{len(category_metrics)} categories and {len(itr_metrics)} ITR metrics."
    )

    return DashboardData(
        item_master=list(item_master),
        records=list(records),
        msl_trends=msl_trends,
        consumption_trends=consumption_trends,
        category_metrics=category_metrics,
        itr_metrics=itr_metrics,
    )
