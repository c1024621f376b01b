import pytest


@pytest.fixture
def regional_sales():
    """Long-form monthly revenue broken out by region."""
    return [
        {"region": "North", "month": "Jan 2024", "revenue": 10},
        {"region": "South", "month": "Jan 2024", "revenue": 5},
        {"region": "North", "month": "Feb 2024", "revenue": 7},
    ]
