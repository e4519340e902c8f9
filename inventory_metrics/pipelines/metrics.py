import logging
from pathlib import Path
from typing import Optional

from inventory_metrics import data_handler, metrics, normalizer
from inventory_metrics.pipeline import DataPipeline
from inventory_metrics.schemas import DashboardData

logger = logging.getLogger(__name__)

PREVIEW_ROWS = 10


class MetricsPipeline(DataPipeline):
    def __init__(
        self,
        item_master_source: str | Path | None = None,
        inventory_source: str | Path | None = None,
        output_dir: Optional[Path] = None,
        test_mode: bool = False,
    ):
        super().__init__("inventory metrics", test_mode=test_mode)
        self.item_master_source = item_master_source
        self.inventory_source = inventory_source
        self.output_dir = output_dir

    def extract(self) -> tuple[list[dict], list[dict]]:
        logger.info("--- Loading Item Master and Inventory Data ---")
        return data_handler.load_inputs(self.item_master_source, self.inventory_source)

    def transform(self, raw_data: tuple[list[dict], list[dict]]) -> DashboardData:
        raw_item_master, raw_records = raw_data

        logger.info("Validating data against schema...")
        item_master = normalizer.normalize_item_master(raw_item_master)
        records = normalizer.normalize_records(raw_records)
        logger.info(
            f"✅ Data validation successful ({len(item_master)} items, {len(records)} records)."
        )

        logger.info("\n--- Calculating Metrics ---")
        return metrics.build_dashboard_data(item_master, records)

    def load(self, result: DashboardData):
        for collection in data_handler.METRIC_COLLECTIONS:
            df = data_handler.metrics_to_frame(result, collection)
            logger.info(f"\n--- {collection} ({len(df)} rows) ---")
            if not df.empty:
                logger.info(df.head(PREVIEW_ROWS).to_string())

        if self.test_mode:
            logger.info("🧪 Test Mode: Skipping output files.")
            return

        data_handler.save_outputs(result, self.output_dir)
