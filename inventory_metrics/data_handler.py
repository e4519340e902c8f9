import json
import logging
import pandas as pd
import requests
from pathlib import Path
from typing import Any, Optional

from . import settings
from . import utils
from .errors import LoadFailure
from .schemas import DashboardData

logger = logging.getLogger(__name__)

# Metric collections written to disk, in output order.
METRIC_COLLECTIONS = [
    "msl_trends",
    "consumption_trends",
    "category_metrics",
    "itr_metrics",
]


def fetch_json(url: str) -> Any:
    """GETs a JSON document. Raises LoadFailure, naming the cause, on any failure."""
    try:
        response = requests.get(url, timeout=settings.FETCH_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error fetching {url}: {e}")
        raise LoadFailure(url, f"request failed: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        logger.error(f"❌ Response from {url} is not valid JSON: {e}")
        raise LoadFailure(url, f"invalid JSON: {e}") from e


def load_document(source: str | Path) -> list[dict]:
    """Loads one input document (local path or http(s) URL) as a list of records."""
    if utils.is_url(str(source)):
        document = fetch_json(str(source))
    else:
        document = utils.load_json(Path(source))

    if not isinstance(document, list):
        raise LoadFailure(
            str(source), f"expected a JSON array, got {type(document).__name__}"
        )

    logger.info(f"  > Loaded {len(document)} entries from {source}")
    return document


def load_inputs(
    item_master_source: str | Path | None = None,
    inventory_source: str | Path | None = None,
) -> tuple[list[dict], list[dict]]:
    """
    Loads the item master and the daily inventory documents.
    Both must succeed; the first failure is raised as LoadFailure.
    """
    item_master = load_document(item_master_source or settings.ITEM_MASTER_SOURCE)
    inventory = load_document(inventory_source or settings.INVENTORY_DATA_SOURCE)
    return item_master, inventory


def metrics_to_frame(data: DashboardData, collection: str) -> pd.DataFrame:
    rows = [item.model_dump(by_alias=True) for item in getattr(data, collection)]
    return pd.DataFrame(rows)


def save_outputs(data: DashboardData, output_dir: Optional[Path] = None) -> list[Path]:
    """Saves each metric collection to CSV and conditionally all of them to JSON, with dated filenames."""
    output_dir = output_dir or settings.OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()
    written = []

    for collection in METRIC_COLLECTIONS:
        csv_path = (
            output_dir / f"{settings.OUTPUT_FILENAME_BASE}_{collection}_{date_suffix}.csv"
        )
        metrics_to_frame(data, collection).to_csv(csv_path, index=False)
        logger.info(f"✅ {collection} saved to: {csv_path}")
        written.append(csv_path)

    if settings.SAVE_JSON_OUTPUT:
        json_path = output_dir / f"{settings.OUTPUT_FILENAME_BASE}_{date_suffix}.json"
        json_data = {
            collection: [
                item.model_dump(mode="json", by_alias=True)
                for item in getattr(data, collection)
            ]
            for collection in METRIC_COLLECTIONS
        }
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(json_data, f, indent=2)
        logger.info(f"✅ JSON output saved to: {json_path}")
        written.append(json_path)
    else:
        logger.info("INFO: Skipping JSON file save as per configuration.")

    return written
