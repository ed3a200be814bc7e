"""
Unit tests for the Layout Oracle adapter (single-barrier measurement).
"""

import pytest

from slide_layout.core.models import Box, ContainerBounds, Rect
from slide_layout.engine import LayoutOracleError, Measurement, measure


class TestMeasure:

    def test_measure_when_tree_then_all_staging_precedes_single_barrier(
        self, flow_oracle, board, fixed_box, bounds
    ):
        # Arrange
        root = board([
            fixed_box("card", children=[fixed_box("f1", 10, 10)], child_group_style="row"),
            fixed_box("other"),
        ])

        # Act
        measure(flow_oracle, root, bounds)

        # Assert
        kinds = flow_oracle.call_kinds()
        barrier = kinds.index("compute")
        assert kinds.count("compute") == 1
        assert all(k in ("create", "append") for k in kinds[:barrier])
        assert all(k == "rect" for k in kinds[barrier + 1:-1])
        assert kinds[-1] == "release"

    def test_measure_when_wrapped_row_then_reads_oracle_rects(
        self, flow_oracle, board, fixed_box, bounds
    ):
        root = board([fixed_box(f"s{i}") for i in range(6)])

        result = measure(flow_oracle, root, bounds)

        assert isinstance(result, Measurement)
        assert len(result) == 7
        assert result["board"] == Rect(-10000, -10000, 300, 200)
        assert result["s1"] == Rect(-9940, -10000, 50, 50)
        # Sixth box wraps: 5 * 50 + 4 * 10 = 290, next would end at 350
        assert result["s5"] == Rect(-10000, -9940, 50, 50)

    def test_measure_when_child_group_then_wrapper_rect_kept_apart(
        self, flow_oracle, board, fixed_box, bounds
    ):
        card = fixed_box("card", 200, 150, style="column pad=10",
                         children=[fixed_box("f1", 30, 30)], child_group_style="row top=40")

        result = measure(flow_oracle, board([card]), bounds)

        assert "card" in result
        assert result.wrapper_ids == frozenset({"card"})
        assert result.wrapper_rect("card") == Rect(-9990, -9950, 30, 30)
        assert result.wrapper_rect("f1") is None

    @pytest.mark.parametrize("width,height", [(0, 200), (300, 0), (-1, -1)])
    def test_measure_when_degenerate_container_then_empty_without_oracle(
        self, flow_oracle, board, fixed_box, width, height
    ):
        result = measure(flow_oracle, board([fixed_box("a")]), ContainerBounds(width, height))

        assert len(result) == 0
        assert flow_oracle.calls == []

    def test_measure_when_duplicate_ids_then_last_write_wins(
        self, flow_oracle, board, fixed_box, bounds
    ):
        root = board([fixed_box("dup", 50, 50), fixed_box("dup", 70, 30)])

        result = measure(flow_oracle, root, bounds)

        assert len(result) == 2
        assert result["dup"] == Rect(-9940, -10000, 70, 30)

    def test_measure_when_oracle_fails_then_error_propagates_and_staging_released(
        self, flow_oracle, board, bounds
    ):
        root = board([Box("broken", style="fail")])

        with pytest.raises(LayoutOracleError, match="Refused style"):
            measure(flow_oracle, root, bounds)

        assert len(flow_oracle.released) == 1
        assert "rect" not in flow_oracle.call_kinds()

    def test_measure_when_staging_refused_then_partial_tree_released(
        self, refusing_oracle, board, fixed_box, bounds
    ):
        # Arrange
        root = board([fixed_box("a"), fixed_box("b"), Box("broken", style="fail")])

        # Act
        with pytest.raises(LayoutOracleError, match="Refused style"):
            measure(refusing_oracle, root, bounds)

        # Assert
        assert refusing_oracle.call_kinds().count("create") == 3
        assert "compute" not in refusing_oracle.call_kinds()
        assert len(refusing_oracle.released) == 1
        released_root = refusing_oracle.released[0]
        assert len(released_root.children) == 2

    def test_measure_when_nested_staging_refused_then_wrapper_reachable_from_root(
        self, refusing_oracle, board, fixed_box, bounds
    ):
        card = fixed_box(
            "card", children=[fixed_box("ok", 10, 10), fixed_box("bad", 10, 10, style="fail")],
            child_group_style="row",
        )

        with pytest.raises(LayoutOracleError):
            measure(refusing_oracle, board([card]), bounds)

        released_root = refusing_oracle.released[0]
        staged_card = released_root.children[0]
        wrapper = staged_card.children[0]
        assert [child.style for child in wrapper.children] == [""]

    def test_measure_when_root_refused_then_nothing_to_release(
        self, refusing_oracle, fixed_box, bounds
    ):
        root = Box("board", style="fail", children=(fixed_box("a"),))

        with pytest.raises(LayoutOracleError):
            measure(refusing_oracle, root, bounds)

        assert refusing_oracle.released == []
