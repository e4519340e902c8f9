from datetime import date
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

AbcClass = Literal["A", "B", "C"]


# --- Input Contracts ---


class RawRecord(BaseModel):
    """
    Defines the data contract for one item's stock state on one date,
    as it appears in the daily inventory document.
    Validation is strict: a number sent as a string is rejected, not cast.
    """

    item_id: str = Field(..., alias="Item ID", min_length=1)
    date: str = Field(..., alias="Date", pattern=r"^\d{4}-\d{2}-\d{2}$")
    opening_stock: float = Field(..., ge=0, alias="Opening Stock")
    consumption: float = Field(..., alias="Consumption")
    incoming: float = Field(..., alias="Incoming")
    closing_stock: float = Field(..., ge=0, alias="Closing Stock")
    units: Optional[str] = Field(default=None, alias="Units")
    item_name: str = Field(..., alias="Item Name")
    category: str = Field(..., alias="Category")
    unit_price: float = Field(..., ge=0, alias="Unit Price")
    abc_class: AbcClass = Field(..., alias="ABC Class")
    msl: float = Field(..., gt=0, alias="MSL")

    class Config:
        # Accept both the document labels and attribute names; records are
        # never mutated once ingested.
        populate_by_name = True
        strict = True
        frozen = True

    @field_validator("date")
    @classmethod
    def _must_be_calendar_date(cls, value: str) -> str:
        try:
            date.fromisoformat(value)
        except ValueError:
            raise ValueError("is not a valid calendar date")
        return value


class ItemMaster(BaseModel):
    """Static per-item metadata. item_id joins it to the daily records."""

    item_id: str = Field(..., alias="Item ID", min_length=1)
    item_name: str = Field(..., alias="Item Name")
    category: str = Field(..., alias="Category")
    abc_class: AbcClass = Field(..., alias="ABC Class")
    msl: float = Field(..., gt=0, alias="MSL")
    unit_price: float = Field(..., ge=0, alias="Unit Price")

    class Config:
        populate_by_name = True
        strict = True
        frozen = True


# --- Derived Metrics ---


class MSLTrendPoint(BaseModel):
    item_id: str = Field(..., alias="itemId")
    date: str
    stock: float
    msl: float

    class Config:
        populate_by_name = True


class ConsumptionTrendPoint(BaseModel):
    item_id: str = Field(..., alias="itemId")
    category: str
    abc_class: str = Field(..., alias="abcClass")
    month: str
    consumption: float

    class Config:
        populate_by_name = True


class CategoryMetric(BaseModel):
    """totalItems counts rows, so an item with N daily records adds N."""

    category: str
    total_items: int = Field(default=0, alias="totalItems")
    stock_value: float = Field(default=0.0, alias="stockValue")
    consumption_rate: float = Field(default=0.0, alias="consumptionRate")

    class Config:
        populate_by_name = True


class ITRMetric(BaseModel):
    """
    Inventory turnover for one item over every record observed for it.
    monthly_consumption is the average consumption per record.
    """

    item_id: str = Field(..., alias="itemId")
    item_name: str = Field(..., alias="itemName")
    category: str
    abc_class: str = Field(..., alias="abcClass")
    itr: float
    average_inventory: float = Field(..., alias="averageInventory")
    monthly_consumption: float = Field(..., alias="monthlyConsumption")
    data_points: int = Field(..., alias="dataPoints")

    class Config:
        populate_by_name = True


class DashboardData(BaseModel):
    """Everything handed to the presentation layer after a successful load."""

    item_master: list[ItemMaster]
    records: list[RawRecord]
    msl_trends: list[MSLTrendPoint]
    consumption_trends: list[ConsumptionTrendPoint]
    category_metrics: list[CategoryMetric]
    itr_metrics: list[ITRMetric]


# --- Presentation Contracts ---


class FilterState(BaseModel):
    """Filter criteria chosen in the UI. Empty strings and None mean "all"."""

    item_name: str = ""
    category: str = ""
    abc_class: str = ""
    item_id: str = ""
    date_range: tuple[Optional[date], Optional[date]] = (None, None)


class ItemOption(BaseModel):
    id: str
    name: str


class MSLStatus(BaseModel):
    status: Literal["Below", "Optimal", "Excess"]
    threshold: float


class MSLComplianceSummary(BaseModel):
    current_status: str
    days_below: int
    days_excess: int
    compliance_pct: float
    data_points: int


class MonthlyConsumption(BaseModel):
    month: str
    total_usage: float


class ConsumptionSummary(BaseModel):
    monthly_totals: list[MonthlyConsumption]
    total_consumption: float
    monthly_average: float
    latest_month_consumption: float
    trend_pct: float


class CategoryShare(BaseModel):
    category: str
    stock_value: float
    item_count: int
    consumption: float
    share_pct: float
    is_selected: bool


class CategorySummary(BaseModel):
    total_stock_value: float
    total_items: int
    categories: list[CategoryShare]
