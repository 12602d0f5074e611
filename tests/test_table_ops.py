"""Unit tests for table concatenation and the block filters."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from xgen_doc2rows import TableProcessor, concat_tables, filter_all_blocks, filter_first_block


SAMPLE = [
    ["X", "1"],
    ["HEADER", "2"],
    ["a", "3"],
    ["b", "4"],
    ["", "5"],
    ["c", "6"],
]


# ===========================================================================
# concat_tables tests
# ===========================================================================


class TestConcatTables:

    def test_appends_rows_in_order(self):
        a = [["1"], ["2"]]
        b = [["3", "x"], []]
        result = concat_tables(a, b)
        assert result == [["1"], ["2"], ["3", "x"], []]
        assert len(result) == len(a) + len(b)

    def test_empty_tables(self):
        assert concat_tables([], []) == []
        assert concat_tables([["a"]], []) == [["a"]]
        assert concat_tables([], [["b"]]) == [["b"]]

    def test_inputs_not_mutated(self):
        a = [["1"]]
        b = [["2"]]
        result = concat_tables(a, b)
        result.append(["3"])
        assert a == [["1"]]
        assert b == [["2"]]

    def test_no_deduplication(self):
        assert concat_tables([["a"]], [["a"]]) == [["a"], ["a"]]


# ===========================================================================
# filter_first_block tests
# ===========================================================================


class TestFilterFirstBlock:

    def test_case_insensitive_inclusive_block(self):
        assert filter_first_block("header", SAMPLE) == [
            ["HEADER", "2"],
            ["a", "3"],
            ["b", "4"],
        ]

    def test_substring_match(self):
        rows = [["total header row"], ["a"], [""]]
        assert filter_first_block("HEADER", rows) == [["total header row"], ["a"]]

    def test_last_match_wins(self):
        rows = [["Header"], ["a"], [""], ["header again"], ["b"], ["c"]]
        assert filter_first_block("header", rows) == [["header again"], ["b"], ["c"]]

    def test_no_match_starts_at_top(self):
        assert filter_first_block("missing", SAMPLE) == [
            ["X", "1"],
            ["HEADER", "2"],
            ["a", "3"],
            ["b", "4"],
        ]

    def test_row_without_cells_terminates(self):
        rows = [["header"], ["a"], [], ["b"]]
        assert filter_first_block("header", rows) == [["header"], ["a"]]

    def test_whitespace_is_not_empty(self):
        rows = [["header"], [" "], ["a"], [""]]
        assert filter_first_block("header", rows) == [["header"], [" "], ["a"]]

    def test_runs_to_end_of_table(self):
        rows = [["header"], ["a"], ["b"]]
        assert filter_first_block("header", rows) == rows

    def test_empty_table(self):
        assert filter_first_block("header", []) == []

    def test_matching_row_with_empty_leading_cell_never_matches(self):
        rows = [["", "header"], ["a"]]
        assert filter_first_block("header", rows) == []


# ===========================================================================
# filter_all_blocks tests
# ===========================================================================


class TestFilterAllBlocks:

    def test_blocks_after_each_match_are_flattened(self):
        rows = [
            ["Section A"],
            ["a1", "1"],
            ["a2", "2"],
            [""],
            ["noise"],
            ["section B"],
            ["b1", "3"],
            [],
            ["b-tail"],
        ]
        assert filter_all_blocks("section", rows) == [
            ["a1", "1"],
            ["a2", "2"],
            ["b1", "3"],
        ]

    def test_match_row_excluded(self):
        assert filter_all_blocks("header", SAMPLE) == [["a", "3"], ["b", "4"]]

    def test_no_match_returns_empty(self):
        assert filter_all_blocks("missing", SAMPLE) == []

    def test_adjacent_matches_overlap(self):
        rows = [["hdr 1"], ["hdr 2"], ["x"], [""]]
        # the block after "hdr 1" includes "hdr 2" itself
        assert filter_all_blocks("hdr", rows) == [["hdr 2"], ["x"], ["x"]]

    def test_match_on_last_row(self):
        assert filter_all_blocks("end", [["a"], ["END"]]) == []


class TestProcessorTableOps:

    def test_static_wrappers(self):
        assert TableProcessor.concat_tables([["a"]], [["b"]]) == [["a"], ["b"]]
        assert TableProcessor.filter_first_block("header", SAMPLE)[0] == ["HEADER", "2"]
        assert TableProcessor.filter_all_blocks("header", SAMPLE) == [["a", "3"], ["b", "4"]]
