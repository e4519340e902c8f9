"""
Pytest configuration and shared fixtures for all tests
Centralized mock documents and record factories
"""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from inventory_metrics.normalizer import normalize_item_master, normalize_records


# ===== RAW DOCUMENT FACTORIES =====

@pytest.fixture
def make_raw_record():
    """
    Returns a factory building one raw daily record as it appears in the
    decoded inventory document. Keyword overrides use the document labels.
    """
    def _make(**overrides):
        raw = {
            "Item ID": "I1",
            "Date": "2024-01-05",
            "Opening Stock": 100,
            "Consumption": 20,
            "Incoming": 0,
            "Closing Stock": 80,
            "Units": "pcs",
            "Item Name": "Item 1",
            "Category": "X",
            "Unit Price": 5,
            "ABC Class": "A",
            "MSL": 80,
        }
        raw.update(overrides)
        return raw
    return _make


@pytest.fixture
def raw_item_master():
    return [
        {"Item ID": "I1", "Item Name": "Item 1", "Category": "X", "ABC Class": "A", "MSL": 80, "Unit Price": 5},
        {"Item ID": "I2", "Item Name": "Item 2", "Category": "Y", "ABC Class": "B", "MSL": 40, "Unit Price": 2},
        {"Item ID": "I10", "Item Name": "Item 10", "Category": "X", "ABC Class": "C", "MSL": 10, "Unit Price": 1},
    ]


@pytest.fixture
def scenario_raw_records(make_raw_record):
    """The two-record I1 scenario: one record in January, one in February."""
    return [
        make_raw_record(),
        make_raw_record(**{
            "Date": "2024-02-10",
            "Opening Stock": 80,
            "Closing Stock": 60,
        }),
    ]


@pytest.fixture
def mixed_raw_records(make_raw_record):
    """
    Several items across two categories with:
    - Records out of chronological order
    - A negative (noisy) consumption value
    - Two records for one item on the same month
    """
    return [
        make_raw_record(**{"Item ID": "I2", "Date": "2024-02-01", "Item Name": "Item 2",
                           "Category": "Y", "ABC Class": "B", "Consumption": 5,
                           "Opening Stock": 40, "Closing Stock": 35, "Unit Price": 2}),
        make_raw_record(),
        make_raw_record(**{"Item ID": "I10", "Date": "2024-01-20", "Item Name": "Item 10",
                           "ABC Class": "C", "Consumption": -4,
                           "Opening Stock": 10, "Closing Stock": 14, "Unit Price": 1}),
        make_raw_record(**{"Date": "2024-01-25", "Opening Stock": 80, "Closing Stock": 70,
                           "Consumption": 10}),
        make_raw_record(**{"Item ID": "I2", "Date": "2024-01-15", "Item Name": "Item 2",
                           "Category": "Y", "ABC Class": "B", "Consumption": 3,
                           "Opening Stock": 43, "Closing Stock": 40, "Unit Price": 2}),
    ]


# ===== NORMALIZED FIXTURES =====

@pytest.fixture
def scenario_records(scenario_raw_records):
    return normalize_records(scenario_raw_records)


@pytest.fixture
def mixed_records(mixed_raw_records):
    return normalize_records(mixed_raw_records)


@pytest.fixture
def item_master(raw_item_master):
    return normalize_item_master(raw_item_master)
