from viz.ordering import distinct_values, order_axis_values, sort_rows_by_axis


class TestOrderAxisValues:
    """Tests for x-axis domain ordering."""

    def test_months_sort_chronologically(self):
        values = ["Feb 2024", "Jan 2024", "Mar 2024"]
        assert order_axis_values(values) == ["Jan 2024", "Feb 2024", "Mar 2024"]
        assert order_axis_values(values, "month") == ["Jan 2024", "Feb 2024", "Mar 2024"]

    def test_mixed_formats_share_one_timeline(self):
        values = ["2024-02", "Jan 2024", "12/2023"]
        assert order_axis_values(values, "period") == ["12/2023", "Jan 2024", "2024-02"]

    def test_unparseable_values_sort_last(self):
        values = ["Total", "Feb 2024", "Jan 2024", "Other"]
        assert order_axis_values(values, "month") == ["Jan 2024", "Feb 2024", "Other", "Total"]

    def test_non_time_axis_is_lexical(self):
        assert order_axis_values(["South", "North", "East"], "region") == [
            "East",
            "North",
            "South",
        ]

    def test_mostly_text_axis_ignores_stray_years(self):
        assert order_axis_values(["b", "2024", "a"], "label") == ["2024", "a", "b"]

    def test_duplicates_collapse_in_first_seen_order(self):
        assert distinct_values(["B", "A", "B"]) == ["B", "A"]
        assert order_axis_values(["B", "A", "B"], "label") == ["A", "B"]

    def test_equal_keys_keep_first_seen_order(self):
        assert order_axis_values(["2024-01", "Jan 2024"], "month") == ["2024-01", "Jan 2024"]
        assert order_axis_values(["Jan 2024", "2024-01"], "month") == ["Jan 2024", "2024-01"]

    def test_empty(self):
        assert order_axis_values([], "month") == []


class TestSortRowsByAxis:
    """Tests for single-series row ordering."""

    def test_rows_follow_axis_order(self):
        rows = [
            {"month": "Mar 2024", "sales": 3},
            {"month": "Jan 2024", "sales": 1},
            {"month": "Feb 2024", "sales": 2},
        ]
        ordered = sort_rows_by_axis(rows, "month")
        assert [row["sales"] for row in ordered] == [1, 2, 3]
        assert rows[0]["month"] == "Mar 2024"

    def test_rows_with_same_x_stay_in_place(self):
        rows = [
            {"region": "South", "n": 1},
            {"region": "North", "n": 2},
            {"region": "South", "n": 3},
        ]
        assert [row["n"] for row in sort_rows_by_axis(rows, "region")] == [2, 1, 3]

    def test_missing_axis_values(self):
        rows = [{"region": "North", "n": 1}, {"n": 2}]
        assert [row["n"] for row in sort_rows_by_axis(rows, "region")] == [2, 1]

    def test_mixed_case_labels_collate_like_a_dictionary(self):
        """Case does not split the alphabet; lowercase precedes uppercase on ties."""
        values = ["banana", "Apple", "apple", "Cherry"]
        assert order_axis_values(values, "label") == ["apple", "Apple", "banana", "Cherry"]

    def test_accents_sort_with_their_base_letter(self):
        values = ["Zebra", "éclair", "ecru", "eclair"]
        assert order_axis_values(values, "label") == ["eclair", "éclair", "ecru", "Zebra"]

    def test_non_record_rows_are_dropped(self):
        rows = [{"label": "b"}, None, "stray", {"label": "a"}]
        assert sort_rows_by_axis(rows, "label") == [{"label": "a"}, {"label": "b"}]
