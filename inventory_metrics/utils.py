import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from .errors import LoadFailure

logger = logging.getLogger(__name__)


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def month_key(iso_date: str) -> str:
    """'2024-01-05' -> '2024-01'."""
    return iso_date[:7]


def is_url(source: str) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def load_json(file_path: Path) -> Any:
    """
    A JSON loader with an encoding fallback, mirroring how exported
    documents tend to arrive:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which can decode any byte sequence.
    Raises LoadFailure, naming the cause, when the document cannot be read.
    """
    try:
        return json.loads(file_path.read_text(encoding="utf-8-sig"))

    except UnicodeDecodeError:
        logger.info(
            f"INFO: UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return json.loads(file_path.read_text(encoding="latin-1"))
        except ValueError as e_latin1:
            logger.error(
                f"ERROR: Could not parse {file_path.name} even with latin-1. Reason: {e_latin1}"
            )
            raise LoadFailure(str(file_path), f"invalid JSON: {e_latin1}") from e_latin1

    except FileNotFoundError as e:
        logger.error(f"ERROR: Document not found at {file_path}.")
        raise LoadFailure(str(file_path), "file not found") from e

    except ValueError as e:
        logger.error(f"ERROR: Could not parse {file_path.name}. Reason: {e}")
        raise LoadFailure(str(file_path), f"invalid JSON: {e}") from e

    except OSError as e:
        logger.error(f"ERROR: Could not read {file_path.name}. Reason: {e}")
        raise LoadFailure(str(file_path), str(e)) from e
