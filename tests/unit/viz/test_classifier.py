from viz.classifier import (
    GEOGRAPHY_KEYWORDS,
    KeywordFamily,
    classify_column,
    classify_columns,
    name_matches,
)


class TestClassifyColumns:
    """Tests for per-column classification of a sample record."""

    def test_empty_sample(self):
        assert classify_columns({}) == []
        assert classify_columns(None) == []

    def test_families_and_numeric_flags(self):
        sample = {"region": "North", "month": "Jan 2024", "revenue": 10, "product_name": "A"}
        profiles = {p.name: p for p in classify_columns(sample)}

        assert list(profiles) == ["region", "month", "revenue", "product_name"]
        assert profiles["region"].families == {KeywordFamily.GEOGRAPHY}
        assert not profiles["region"].is_numeric
        assert profiles["month"].has(KeywordFamily.TIME)
        assert profiles["revenue"].has(KeywordFamily.METRIC)
        assert profiles["revenue"].is_numeric
        assert profiles["product_name"].families == {KeywordFamily.PRODUCT}

    def test_formatted_numbers_are_numeric(self):
        assert classify_column("amount", "RM 1,200").is_numeric
        assert not classify_column("amount", "n/a").is_numeric

    def test_multiple_families_are_kept(self):
        """A column may match several families; resolution decides later."""
        profile = classify_column("sales_date", "2024-01")
        assert profile.families == {KeywordFamily.TIME, KeywordFamily.METRIC}

    def test_metric_rank_follows_priority(self):
        assert classify_column("revenue_rm", 1).metric_rank == 0
        assert classify_column("Revenue", 1).metric_rank == 1
        # "sales" outranks "total" and "total_sales"
        assert classify_column("total_sales", 1).metric_rank == 4
        assert classify_column("order_count", 1).metric_rank == 9
        assert classify_column("margin", 1).metric_rank is None

    def test_geography_partial_matches(self):
        assert name_matches("Branch_Name", GEOGRAPHY_KEYWORDS)
        assert name_matches("store_location", GEOGRAPHY_KEYWORDS)
        assert not name_matches("branch_id", GEOGRAPHY_KEYWORDS)
        assert not name_matches(None, GEOGRAPHY_KEYWORDS)
