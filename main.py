import sys

from inventory_metrics.logger import setup_logger
from inventory_metrics.pipelines.metrics import MetricsPipeline


def run_process() -> int:
    """Main orchestration function: load both documents, compute metrics, save outputs."""
    logger = setup_logger()
    logger.info("--- Starting Inventory Metrics Process ---")

    data = MetricsPipeline().run()
    if data is None:
        logger.error("❌ Failed to load inventory data. No metrics were produced.")
        return 1

    logger.info("\n--- Process Finished Successfully ---")
    return 0


if __name__ == "__main__":
    sys.exit(run_process())
