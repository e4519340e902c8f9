import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "data")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Input Sources ---
# Either a local path or an http(s) URL pointing at a JSON array.
ITEM_MASTER_SOURCE = os.getenv("ITEM_MASTER_SOURCE") or str(INPUT_DIR / "item_master.json")
INVENTORY_DATA_SOURCE = os.getenv("INVENTORY_DATA_SOURCE") or str(
    INPUT_DIR / "inventory_data.json"
)
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "15"))

# --- Output Configuration ---
OUTPUT_FILENAME_BASE = os.getenv("OUTPUT_FILENAME_BASE", "inventory_metrics")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Shared Business Logic ---
# Stock-to-MSL ratios used to classify a stock level.
MSL_LOW_RATIO = 0.9
MSL_EXCESS_RATIO = 1.5

# Inventory turnover bands.
ITR_LOW_THRESHOLD = 1.0
ITR_HIGH_THRESHOLD = 3.0

ABC_CLASSES = ["A", "B", "C"]
