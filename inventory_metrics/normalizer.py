import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, TypeVar
from pydantic import BaseModel, ValidationError

from .errors import MalformedRecord
from .schemas import ItemMaster, RawRecord

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _to_malformed(error: ValidationError, index: Optional[int]) -> MalformedRecord:
    """Reports the first failing field of a pydantic error."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "<record>"
    return MalformedRecord(field, first["msg"], index=index)


def _validate(model: type[ModelT], raw: Any, index: Optional[int]) -> ModelT:
    if not isinstance(raw, Mapping):
        raise MalformedRecord(
            "<record>", f"expected a mapping, got {type(raw).__name__}", index=index
        )
    try:
        return model.model_validate(dict(raw))
    except ValidationError as e:
        raise _to_malformed(e, index) from e


def normalize_record(raw: Mapping[str, Any], index: Optional[int] = None) -> RawRecord:
    """Validates one decoded daily record. Raises MalformedRecord on the first bad field."""
    return _validate(RawRecord, raw, index)


def normalize_records(raws: Iterable[Mapping[str, Any]]) -> list[RawRecord]:
    """
    Validates a whole batch of daily records.
    The first malformed row aborts the batch; a partial dataset would
    silently skew every rollup built from it.
    """
    records = [normalize_record(raw, index=i) for i, raw in enumerate(raws)]
    logger.debug(f"Normalized {len(records)} inventory records.")
    return records


def normalize_item_master(raws: Iterable[Mapping[str, Any]]) -> list[ItemMaster]:
    items = [_validate(ItemMaster, raw, i) for i, raw in enumerate(raws)]
    logger.debug(f"Normalized {len(items)} item master entries.")
    return items
