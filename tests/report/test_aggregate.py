"""Tests for the report table entry points."""

import math

import pytest

pytestmark = pytest.mark.unit

from milo.report.aggregate import (
    canonical_labels,
    extract_labelled_chunks,
    extract_pivot_chunks,
    extract_sorted_chunks,
    extract_stats_chunk,
    extract_sum_chunk,
)
from milo.samples import OutputVal, SampleOrder

AB15_ID = "ns-ag05-131-ab15.tif"
BA51_ID = "ns-ag05-132-ba51.tif"


def header_names(chunk):
    return [name for name, _, _ in chunk.headers]


class TestCanonicalLabels:

    def test_five_sample_frame(self, make_file):
        assert canonical_labels([make_file(AB15_ID)]) == SampleOrder.AB15.labels()

    def test_any_long_file_switches_frame(self, make_file):
        files = [make_file(AB15_ID), make_file("ns-ag05-133-ba101.tif", 20)]
        assert canonical_labels(files) == SampleOrder.AB110.labels()

    def test_empty_batch(self):
        assert canonical_labels([]) == SampleOrder.AB15.labels()


class TestLabelledChunks:

    def test_one_chunk_per_file(self, make_file):
        chunks = extract_labelled_chunks([make_file(AB15_ID), make_file(BA51_ID)])
        assert len(chunks) == 2
        assert header_names(chunks[0]) == ["Sample", "FileID", "GridIdx", "Area1", "Area2", "%Area2"]
        assert chunks[0].headers[-1] == ("%Area2", 1, False)

    def test_export_order_with_own_labels(self, make_file):
        chunk = extract_labelled_chunks([make_file(BA51_ID, 3)])[0]
        assert chunk.rows == [
            ["5b", BA51_ID, 0, 100, 50, 0.0],
            ["5a", BA51_ID, 1, 101, 51, 1.0],
            ["4b", BA51_ID, 2, 102, 52, 2.0],
        ]

    def test_records_past_labels(self, make_file):
        chunk = extract_labelled_chunks([make_file(AB15_ID, 11)])[0]
        assert len(chunk.rows) == 11
        assert chunk.rows[10][0] == "???"

    def test_unknown_file(self, make_file):
        chunk = extract_labelled_chunks([make_file("ns-ag05.tif", 2)])[0]
        assert [row[0] for row in chunk.rows] == ["??", "??"]


class TestSortedChunks:

    def test_grouped_by_ordering_in_declaration_order(self, make_file):
        files = [make_file(BA51_ID), make_file(AB15_ID), make_file("ns-ag05-133-ab15.tif")]
        chunks = extract_sorted_chunks(files)

        assert len(chunks) == 2
        ab15, ba51 = chunks
        assert ab15.width == 1 + 4 * 2
        assert ba51.width == 1 + 4
        assert ab15.rows[-1] == ["FileID", "", "", AB15_ID, "", "", "", "ns-ag05-133-ab15.tif", ""]
        assert ba51.rows[-1] == ["FileID", "", "", BA51_ID, ""]

    def test_headers(self, make_file):
        chunk = extract_sorted_chunks([make_file(AB15_ID)])[0]
        assert chunk.headers == [
            ("Sample", 0, False),
            ("", 0, False),
            ("Area1", 0, False),
            ("Area2", 0, False),
            ("%Area2", 1, False),
        ]

    def test_rows_are_canonical(self, make_file):
        ab15, ba51 = extract_sorted_chunks([make_file(AB15_ID), make_file(BA51_ID)])
        assert ab15.rows[0] == ["1a", "", 100, 50, 0.0]
        # BA51 exports 5b first, so its last record is 1a
        assert ba51.rows[0] == ["1a", "", 109, 59, 9.0]
        assert ba51.rows[9] == ["5b", "", 100, 50, 0.0]

    def test_overflow_rows_padded(self, make_file):
        chunk = extract_sorted_chunks([make_file(AB15_ID), make_file("ns-ag05-133-ab15.tif", 12)])[0]
        # 10 labels, 2 overflow rows, trailer
        assert len(chunk.rows) == 13
        assert chunk.rows[10] == ["??"] * 5 + ["", 110, 60, 10.0]
        assert chunk.rows[11] == ["??"] * 5 + ["", 111, 61, 11.0]

    def test_short_file_leaves_rows_short(self, make_file):
        chunk = extract_sorted_chunks([make_file(AB15_ID, 2)])[0]
        assert chunk.rows[1] == ["1b", "", 101, 51, 1.0]
        assert chunk.rows[2] == ["2a"]

    def test_two_and_five_records_keep_columns(self, make_file):
        files = [make_file(AB15_ID, 2), make_file("ns-ag05-133-ab15.tif", 5)]
        chunk = extract_sorted_chunks(files)[0]
        assert chunk.rows[2] == ["2a"] + ["??"] * 4 + ["", 102, 52, 2.0]

    def test_unknown_files_get_their_own_table(self, make_file):
        chunks = extract_sorted_chunks([make_file("ns-ag05.tif"), make_file(AB15_ID)])
        assert [c.rows[-1][3] for c in chunks] == [AB15_ID, "ns-ag05.tif"]


class TestPivotChunks:

    def test_default_quantities(self, make_file):
        chunks = extract_pivot_chunks([make_file(AB15_ID), make_file(BA51_ID)])
        assert [c.headers[1] for c in chunks] == [
            ("%Area2", 1, False),
            ("Area1", 1, False),
            ("Area2", 1, False),
        ]
        percent, area1, area2 = chunks
        assert percent.rows[0] == ["1a", 0.0, 9.0]
        assert area1.rows[0] == ["1a", 100, 109]
        assert area2.rows[9] == ["5b", 59, 50]
        assert area1.rows[-1] == ["FileID", AB15_ID, BA51_ID]

    def test_selected_quantity(self, make_file):
        chunks = extract_pivot_chunks([make_file(AB15_ID)], ["kernel_area"])
        assert len(chunks) == 1
        assert header_names(chunks[0]) == ["Sample", "Area1"]

    def test_overflow_row_padding(self, make_file):
        files = [make_file(AB15_ID, 2), make_file(BA51_ID, 2), make_file("ns-ag05-133-ab15.tif", 11)]
        chunk = extract_pivot_chunks(files, [OutputVal.KERNEL_AREA])[0]
        assert chunk.rows[10] == ["??", "??", "??", 110]

    def test_two_and_five_records_keep_columns(self, make_file):
        files = [make_file(AB15_ID, 2), make_file("ns-ag05-133-ab15.tif", 5)]
        chunk = extract_pivot_chunks(files, [OutputVal.KERNEL_AREA])[0]
        assert chunk.rows[1] == ["1b", 101, 101]
        assert chunk.rows[2] == ["2a", "??", 102]
        assert chunk.rows[3] == ["2b", "??", 103]
        assert chunk.rows[4] == ["3a", "??", 104]
        assert chunk.rows[5] == ["3b"]

    def test_long_frame(self, make_file):
        files = [make_file("ns-ag05-133-ab110.tif", 20)]
        chunk = extract_pivot_chunks(files, [OutputVal.PERCENT_AREA])[0]
        assert len(chunk.rows) == 21
        assert chunk.rows[19] == ["10b", 19.0]


class TestSumChunk:

    def test_headers_follow_quantity(self, make_file):
        chunk = extract_sum_chunk([make_file(AB15_ID)], OutputVal.KERNEL_AREA)
        assert chunk.headers == [
            ("Sample", 0, False),
            ("Area1", 1, False),
            ("", 0, False),
            ("Avg", 1, False),
            ("Std", 2, False),
            ("CV", 2, True),
        ]

    def test_row_statistics(self, make_file):
        files = [make_file(AB15_ID, percents=[10.0, 20.0]), make_file(AB15_ID, percents=[30.0, 40.0])]
        chunk = extract_sum_chunk(files, OutputVal.PERCENT_AREA)
        assert chunk.rows[0] == ["1a", 10.0, 30.0, "", 20.0, 10.0, 0.5]
        assert chunk.rows[1] == ["1b", 20.0, 40.0, "", 30.0, 10.0, pytest.approx(1 / 3)]

    def test_values_are_floats(self, make_file):
        chunk = extract_sum_chunk([make_file(AB15_ID, 1)], "endosperm_area")
        assert chunk.rows[0][1] == 50.0
        assert isinstance(chunk.rows[0][1], float)

    def test_rows_without_data_get_nan(self, make_file):
        chunk = extract_sum_chunk([make_file(AB15_ID, 2)], OutputVal.PERCENT_AREA)
        row = chunk.rows[2]
        assert row[:3] == ["2a", "??", ""]
        assert all(math.isnan(v) for v in row[3:])

    def test_placeholders_skipped(self, make_file):
        files = [make_file(AB15_ID, 2), make_file(AB15_ID, percents=[float(i) for i in range(11)])]
        chunk = extract_sum_chunk(files, OutputVal.PERCENT_AREA)
        assert chunk.rows[10] == ["??", "??", 10.0, "", 10.0, 0.0, 0.0]

    def test_two_and_five_records_keep_columns(self, make_file):
        files = [make_file(AB15_ID, 2), make_file("ns-ag05-133-ab15.tif", 5)]
        chunk = extract_sum_chunk(files, OutputVal.KERNEL_AREA)
        assert chunk.rows[1] == ["1b", 101.0, 101.0, "", 101.0, 0.0, 0.0]
        for row_idx in (2, 3, 4):
            value = 100.0 + row_idx
            assert chunk.rows[row_idx][1:] == ["??", value, "", value, 0.0, 0.0]
        # Rows neither file reached still line up under Avg, Std and CV
        assert chunk.rows[5][:4] == ["3b", "??", "??", ""]
        assert len(chunk.rows[5]) == 7

    def test_no_trailer(self, make_file):
        chunk = extract_sum_chunk([make_file(AB15_ID)], OutputVal.PERCENT_AREA)
        assert len(chunk.rows) == 10


class TestStatsChunk:

    @pytest.fixture
    def chunk(self, make_file):
        files = [
            make_file(AB15_ID, percents=[10.0, 20.0, 30.0]),
            # Reversed into canonical order: 20, 30, 40
            make_file(BA51_ID, percents=[40.0, 30.0, 20.0]),
        ]
        return extract_stats_chunk(files, OutputVal.PERCENT_AREA)

    def test_headers(self, chunk):
        assert header_names(chunk) == [
            "Sample", "Avg", "Std", "CV", "",
            "Split Diff", "Split Std", "Split Avg", "Split CV",
        ]
        assert all(decimals == 1 for _, decimals, _ in chunk.headers)
        assert [name for name, _, pct in chunk.headers if pct] == ["CV", "Split CV"]

    def test_labels_carry_sample_id(self, chunk):
        assert [row[0] for row in chunk.rows[:4]] == ["ag05-1a", "ag05-1b", "ag05-2a", "ag05-2b"]

    def test_a_row_with_split(self, chunk):
        label, mean, sd, cv, blank, diff, split_sd, split_mean, split_cv = chunk.rows[0]
        assert (mean, sd, blank) == (15.0, 5.0, "")
        assert cv == pytest.approx(1 / 3)
        assert (diff, split_sd, split_mean) == (10.0, 5.0, 20.0)
        assert split_cv == pytest.approx(0.25)

    def test_b_row_without_split(self, chunk):
        assert chunk.rows[1] == ["ag05-1b", 25.0, 5.0, 0.2, ""]

    def test_a_row_without_partner_is_blank(self, chunk):
        row = chunk.rows[2]
        assert row[1:5] == [35.0, 5.0, pytest.approx(1 / 7), ""]
        assert row[5:] == ["", "", "", ""]

    def test_positions_without_data(self, chunk):
        assert chunk.rows[3] == ["ag05-2b"]
        assert len(chunk.rows) == 10

    def test_no_sample_id(self, make_file):
        chunk = extract_stats_chunk([make_file("foo-ab15", 2), make_file("bar-ba51", 2)], "percent_area")
        assert chunk.rows[0][0] == "1a"

    def test_missing_positions_count_as_minus_one(self, make_file):
        files = [make_file(AB15_ID, 2), make_file(BA51_ID, percents=[4.0, 3.0, 2.0, 1.0])]
        chunk = extract_stats_chunk(files, OutputVal.PERCENT_AREA)
        # Positions 2 and 3 hold [-1.0, 3.0] and [-1.0, 4.0]
        assert chunk.rows[2][1:5] == [1.0, 2.0, 2.0, ""]
        assert chunk.rows[3][1:4] == [1.5, 2.5, pytest.approx(5 / 3)]
        assert chunk.rows[2][5:] == [0.5, 0.25, 1.25, 0.2]

    def test_overflow_positions(self, make_file):
        chunk = extract_stats_chunk([make_file(AB15_ID, percents=[1.0] * 11)], OutputVal.PERCENT_AREA)
        assert chunk.rows[10][0] == "??"
        assert chunk.rows[10][1:5] == [1.0, 0.0, 0.0, ""]
        assert chunk.rows[10][5:] == ["", "", "", ""]
