import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from .errors import InventoryMetricsError

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for metric pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern; a failure in
    extract or transform stops the run before anything is loaded.
    """

    def __init__(self, report_type: str, test_mode: bool = False):
        self.report_type = report_type
        self.test_mode = test_mode

    def run(self) -> Optional[Any]:
        """
        Orchestrates the pipeline execution.
        Returns the transformed data, or None when loading or validation failed.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        try:
            # --- 1. EXTRACT ---
            raw_data = self.extract()

            # --- 2. TRANSFORM ---
            result = self.transform(raw_data)
        except InventoryMetricsError as e:
            logger.error(f"❌ {self.report_type.capitalize()} pipeline failed: {e}")
            return None

        # --- 3. LOAD ---
        self.load(result)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return result

    @abstractmethod
    def extract(self) -> Any:
        """
        Responsible for obtaining every raw input the run needs.
        Raises LoadFailure when any of them is unavailable.
        """
        pass

    @abstractmethod
    def transform(self, raw_data: Any) -> Any:
        """
        Responsible for validation and metric computation.
        Raises MalformedRecord on the first invalid row.
        """
        pass

    @abstractmethod
    def load(self, result: Any):
        """Hands the computed result to its outputs."""
        pass
