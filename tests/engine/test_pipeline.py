"""
Tests for the layout_boxes() entry point.
"""

import logging

import pytest

from slide_layout.core.models import Box, ContainerBounds, Offset
from slide_layout.engine import (
    LayoutConfig,
    LayoutOracleError,
    TimingLog,
    layout_boxes,
)


class TestLayoutBoxes:

    def test_layout_when_simple_row_then_top_level_boxes_returned(self, flow_oracle, board, fixed_box, bounds):
        # Arrange
        root = board([fixed_box("a"), fixed_box("b"), Box("c")])

        # Act
        result = layout_boxes(flow_oracle, root, bounds)

        # Assert
        assert not result.is_empty
        assert [(b.id, b.x, b.y) for b in result.boxes] == [("a", 0, 0), ("b", 60, 0), ("c", 120, 0)]
        assert result.bounds == bounds
        assert result.warnings == []
        assert result.content_height == 50
        assert flow_oracle.compute_count == 1

    def test_layout_when_child_groups_then_offsets_reported(self, flow_oracle, board, fixed_box, bounds):
        card = fixed_box(
            "card", 200, 150, style="column pad=10",
            children=[fixed_box("a", 30, 30)], child_group_style="row top=40",
        )

        result = layout_boxes(flow_oracle, board([card]), bounds)

        assert result.child_group_offsets == {"card": Offset(10, 50)}
        assert [(c.x, c.y) for c in result.boxes[0].children] == [(10, 50)]

    @pytest.mark.parametrize("width,height", [(0, 200), (300, 0), (-5, 10)])
    def test_layout_when_degenerate_container_then_empty_without_oracle(
        self, flow_oracle, board, fixed_box, width, height
    ):
        result = layout_boxes(flow_oracle, board([fixed_box("a")]), ContainerBounds(width, height))

        assert result.is_empty
        assert result.boxes == ()
        assert result.content_height == 0.0
        assert flow_oracle.calls == []

    def test_layout_when_oracle_fails_then_error_propagates(self, flow_oracle, board, fixed_box, bounds):
        root = board([fixed_box("a", style="fail")])

        with pytest.raises(LayoutOracleError):
            layout_boxes(flow_oracle, root, bounds)
        assert len(flow_oracle.released) == 1


class TestOverflow:

    def test_layout_when_box_overflows_then_warning(self, flow_oracle, board, fixed_box, caplog):
        root = board([fixed_box("wide", 150, 150)])

        with caplog.at_level(logging.WARNING, logger="slide_layout.engine.pipeline"):
            result = layout_boxes(flow_oracle, root, ContainerBounds(100, 100))

        assert len(result.warnings) == 1
        assert "'wide'" in result.warnings[0]
        assert "overflows" in result.warnings[0]
        assert "overflows" in caplog.text

    def test_layout_when_overflow_warnings_disabled_then_quiet(self, flow_oracle, board, fixed_box):
        root = board([fixed_box("wide", 150, 150)])

        result = layout_boxes(
            flow_oracle, root, ContainerBounds(100, 100), LayoutConfig(warn_on_overflow=False)
        )

        assert result.warnings == []

    def test_layout_when_grow_to_fit_then_remeasured_once(self, flow_oracle, board, fixed_box):
        # Six 50px boxes wrap into two rows, bottom edge at 110
        root = board([fixed_box(f"s{i}") for i in range(6)])
        timing = TimingLog()

        result = layout_boxes(
            flow_oracle, root, ContainerBounds(300, 100),
            LayoutConfig(grow_to_fit=True), timing=timing,
        )

        assert result.bounds == ContainerBounds(300, 130)
        assert result.warnings == []
        assert result.content_height == 110
        assert flow_oracle.compute_count == 2
        assert timing.count("stage_and_measure") == 2

    def test_layout_when_grow_to_fit_and_content_fits_then_single_pass(self, flow_oracle, board, fixed_box, bounds):
        result = layout_boxes(flow_oracle, board([fixed_box("a")]), bounds, LayoutConfig(grow_to_fit=True))

        assert result.bounds == bounds
        assert flow_oracle.compute_count == 1


class TestInstrumentation:

    def test_layout_when_timing_log_given_then_phases_recorded(self, flow_oracle, board, fixed_box, bounds):
        timing = TimingLog()

        layout_boxes(flow_oracle, board([fixed_box("a")]), bounds, timing=timing)

        assert timing.count("stage_and_measure") == 1
        assert timing.count("normalize") == 1
        assert timing.total("normalize") >= 0.0

    def test_layout_when_debug_dir_then_overlay_written(self, flow_oracle, board, fixed_box, bounds, tmp_path):
        config = LayoutConfig(debug_overlay_dir=tmp_path / "debug")

        layout_boxes(flow_oracle, board([fixed_box("a")]), bounds, config)

        assert (tmp_path / "debug" / "board_layout.png").exists()

    def test_layout_when_root_id_has_slash_then_overlay_inside_debug_dir(
        self, flow_oracle, fixed_box, bounds, tmp_path
    ):
        root = Box("deck/1", style="row", children=(fixed_box("a"),))

        layout_boxes(flow_oracle, root, bounds, LayoutConfig(debug_overlay_dir=tmp_path / "debug"))

        assert (tmp_path / "debug" / "deck-1_layout.png").exists()
