"""Tests for the snapping, spacing and alignment engine."""

import pytest

from conftest import Box, make_frame

from frameplanner.constraints.alignment import (
    AlignmentConstraint,
    AlignType,
    align_frames,
    apply_updates,
)
from frameplanner.constraints.engine import SnapEngine, resolve_drag
from frameplanner.constraints.geometry import Rect, edges_of
from frameplanner.constraints.snapping import find_snap_guides, get_snap_targets
from frameplanner.constraints.spacing import find_spacing_guides
from frameplanner.dsl.schema import Wall
from frameplanner.engine.positioned import (
    ObjectEdges,
    PositionUpdate,
    SnapTarget,
    SnapTargets,
)


# ============================================================================
# Geometry Tests
# ============================================================================

class TestGeometry:
    """Tests for edge extraction."""

    def test_edges_of_frame(self) -> None:
        """Test left/center/right and top/center/bottom."""
        edges = edges_of(make_frame("f1", 10, 20, 40, 30))
        assert edges.vertical == [10, 30, 50]
        assert edges.horizontal == [20, 35, 50]

    def test_edges_of_zero_size(self) -> None:
        """Test degenerate boxes are accepted."""
        edges = edges_of(Box("z", 5, 7, 0, 0))
        assert edges.vertical == [5, 5, 5]
        assert edges.horizontal == [7, 7, 7]

    def test_rect_from_object(self) -> None:
        rect = Rect.from_object(make_frame("f1", 10, 20, 40, 30))
        assert (rect.left, rect.right, rect.top, rect.bottom) == (10, 50, 20, 50)
        assert (rect.center_x, rect.center_y) == (30, 35)


# ============================================================================
# Snap Target Tests
# ============================================================================

class TestSnapTargets:
    """Tests for get_snap_targets."""

    def test_wall_targets_only(self) -> None:
        """Test an empty wall yields its edges and center per axis."""
        targets = get_snap_targets([], 300, 250)
        assert targets.vertical == [
            SnapTarget(0, "edge"),
            SnapTarget(300, "edge"),
            SnapTarget(150, "center"),
        ]
        assert targets.horizontal == [
            SnapTarget(0, "edge"),
            SnapTarget(250, "edge"),
            SnapTarget(125, "center"),
        ]

    def test_frame_targets_appended_in_order(self) -> None:
        """Test frame edges follow the wall targets: left, right, center."""
        targets = get_snap_targets([make_frame("f1", 10, 20, 40, 30)], 300, 250)
        assert targets.vertical[3:] == [
            SnapTarget(10, "edge"),
            SnapTarget(50, "edge"),
            SnapTarget(30, "center"),
        ]
        assert targets.horizontal[3:] == [
            SnapTarget(20, "edge"),
            SnapTarget(50, "edge"),
            SnapTarget(35, "center"),
        ]

    def test_exclude_id(self) -> None:
        """Test the excluded frame contributes no targets."""
        frames = [
            make_frame("f1", 10, 20, 40, 30),
            make_frame("f2", 100, 100, 50, 40),
        ]
        targets = get_snap_targets(frames, 300, 250, exclude_id="f1")

        v_positions = [t.position for t in targets.vertical]
        h_positions = [t.position for t in targets.horizontal]
        assert v_positions == [0, 300, 150, 100, 150, 125]
        assert h_positions == [0, 250, 125, 100, 140, 120]

    def test_duplicates_kept(self) -> None:
        """Test identical frames produce duplicate targets."""
        frames = [make_frame("f1", 10, 10, 20, 20), make_frame("f2", 10, 10, 20, 20)]
        targets = get_snap_targets(frames, 300, 250)
        assert len(targets.vertical) == 9
        assert [t.position for t in targets.vertical].count(10) == 2


# ============================================================================
# Snap Guide Tests
# ============================================================================

class TestSnapGuides:
    """Tests for find_snap_guides."""

    def test_center_snaps_to_wall_center(self) -> None:
        """Test a frame centered 2cm off the wall center gets one V guide."""
        moving = make_frame("m", 128, 10, 40, 30)
        targets = get_snap_targets([], 300, 250)
        guides = find_snap_guides(targets, edges_of(moving), 5)

        assert len(guides) == 1
        guide = guides[0]
        assert guide.orientation == "V"
        assert guide.type == "center"
        assert guide.position == 150
        assert guide.snap_offset == 2

    def test_distance_at_threshold_does_not_snap(self) -> None:
        """Test matches must be strictly closer than the threshold."""
        moving = make_frame("m", 125, 10, 40, 30)
        targets = get_snap_targets([], 300, 250)
        assert find_snap_guides(targets, edges_of(moving), 5) == []

    def test_both_axes(self) -> None:
        """Test independent V and H guides, vertical first."""
        other = make_frame("o", 10, 100, 40, 30)
        moving = make_frame("m", 52, 103, 40, 30)
        targets = get_snap_targets([other], 300, 250)
        guides = find_snap_guides(targets, edges_of(moving), 5)

        assert [g.orientation for g in guides] == ["V", "H"]
        assert guides[0].position == 50
        assert guides[0].snap_offset == -2
        assert guides[1].position == 100
        assert guides[1].snap_offset == -3

    def test_tie_first_target_wins(self) -> None:
        """Test equidistant targets resolve to the first in iteration order."""
        targets = SnapTargets(
            vertical=[SnapTarget(10, "edge"), SnapTarget(14, "center")],
            horizontal=[],
        )
        edges = ObjectEdges(vertical=[12, 100, 200], horizontal=[])
        guides = find_snap_guides(targets, edges, 5)

        assert len(guides) == 1
        assert guides[0].position == 10
        assert guides[0].type == "edge"
        assert guides[0].snap_offset == -2

    def test_tie_first_edge_wins(self) -> None:
        """Test equidistant edges resolve to the first edge."""
        targets = SnapTargets(vertical=[SnapTarget(14, "edge")], horizontal=[])
        edges = ObjectEdges(vertical=[12, 16, 200], horizontal=[])
        guides = find_snap_guides(targets, edges, 5)
        assert guides[0].snap_offset == 2

    def test_closest_match_wins_over_earlier(self) -> None:
        targets = SnapTargets(
            vertical=[SnapTarget(10, "edge"), SnapTarget(12.5, "edge")],
            horizontal=[],
        )
        edges = ObjectEdges(vertical=[13, 100, 200], horizontal=[])
        guides = find_snap_guides(targets, edges, 5)
        assert guides[0].position == 12.5

    def test_applying_offset_aligns_edge(self) -> None:
        """Test raw coordinate + offset puts the matched edge on the guide."""
        other = make_frame("o", 10, 100, 40, 30)
        moving = make_frame("m", 53.3, 200, 40, 30)
        targets = get_snap_targets([other], 300, 250)
        guides = find_snap_guides(targets, edges_of(moving), 5)

        v = guides[0]
        snapped = moving.moved_to(moving.x + v.snap_offset, moving.y)
        assert v.position == 50
        assert snapped.x == pytest.approx(v.position)

    def test_zero_threshold_disables(self) -> None:
        moving = make_frame("m", 130, 110, 40, 30)
        targets = get_snap_targets([], 300, 250)
        assert find_snap_guides(targets, edges_of(moving), 0) == []


# ============================================================================
# Spacing Guide Tests
# ============================================================================

@pytest.fixture
def gap_pair() -> list:
    """Two frames side by side with a 20cm gap (10..50 and 70..110)."""
    return [make_frame("a", 10, 0, 40, 30), make_frame("b", 70, 0, 40, 30)]


class TestSpacingGuides:
    """Tests for find_spacing_guides."""

    def test_no_other_frames(self) -> None:
        assert find_spacing_guides([], make_frame("m", 0, 0, 10, 10), 5) == []

    def test_continue_after_left_neighbour(self, gap_pair: list) -> None:
        """Test moving left edge ~gap past the left neighbour's right edge."""
        moving = make_frame("m", 71, 100, 40, 30)
        guides = find_spacing_guides(gap_pair, moving, 5)

        assert len(guides) == 1
        guide = guides[0]
        assert guide.orientation == "H"
        assert guide.gap == 20
        assert guide.snap_offset == -1

        existing, matched = guide.segments
        assert (existing.start, existing.end, existing.cross) == (50, 70, 15)
        assert (matched.start, matched.end, matched.cross) == (50, 70, 65)

        # Offset reproduces the original gap exactly
        assert (moving.x + guide.snap_offset) - 50 == guide.gap

    def test_continue_before_right_neighbour(self, gap_pair: list) -> None:
        """Test moving right edge ~gap before the right neighbour's left edge."""
        moving = make_frame("m", 11, 100, 40, 30)
        guides = find_spacing_guides(gap_pair, moving, 5)

        assert len(guides) == 1
        guide = guides[0]
        assert guide.orientation == "H"
        assert guide.snap_offset == -1

        matched = guide.segments[1]
        assert (matched.start, matched.end) == (50, 70)
        assert matched.cross == (115 + 15) / 2
        assert 70 - (moving.x + guide.snap_offset + moving.width) == guide.gap

    def test_vertical_gap(self) -> None:
        """Test the vertical mirror uses top/bottom and center_x for ticks."""
        others = [make_frame("a", 0, 10, 40, 30), make_frame("b", 0, 60, 40, 30)]
        moving = make_frame("m", 200, 62, 40, 30)
        guides = find_spacing_guides(others, moving, 5)

        assert len(guides) == 1
        guide = guides[0]
        assert guide.orientation == "V"
        assert guide.gap == 20
        assert guide.snap_offset == -2
        assert guide.segments[0].cross == 20
        assert guide.segments[1].cross == (220 + 20) / 2

    def test_vertical_gap_above_lower_neighbour(self) -> None:
        """Test moving bottom edge ~gap above the lower neighbour's top edge."""
        others = [make_frame("a", 0, 100, 40, 30), make_frame("b", 0, 150, 40, 30)]
        moving = make_frame("m", 200, 98, 40, 30)
        guides = find_spacing_guides(others, moving, 5)

        assert len(guides) == 1
        guide = guides[0]
        assert guide.orientation == "V"
        assert guide.gap == 20
        assert guide.snap_offset == 2

        existing, matched = guide.segments
        assert (existing.start, existing.end, existing.cross) == (130, 150, 20)
        assert (matched.start, matched.end, matched.cross) == (130, 150, 120)
        assert 150 - (moving.y + guide.snap_offset + moving.height) == guide.gap

    def test_overlapping_moving_frame_ignored(self, gap_pair: list) -> None:
        """Test a non-positive raw gap never matches, even with a wide threshold."""
        moving = make_frame("m", 45, 100, 40, 30)
        assert find_spacing_guides(gap_pair, moving, 100) == []

    def test_touching_neighbours_form_no_gap(self) -> None:
        others = [make_frame("a", 0, 0, 40, 30), make_frame("b", 40, 0, 40, 30)]
        moving = make_frame("m", 81, 0, 40, 30)
        assert find_spacing_guides(others, moving, 5) == []

    def test_multiple_guides_per_axis(self, gap_pair: list) -> None:
        """Test several gap sequences can match at once."""
        others = gap_pair + [make_frame("c", 130, 0, 40, 30)]
        moving = make_frame("m", 71, 100, 40, 30)
        guides = find_spacing_guides(others, moving, 5)

        assert len(guides) == 2
        assert all(g.orientation == "H" for g in guides)
        assert [g.snap_offset for g in guides] == [-1, -1]

    def test_zero_threshold(self, gap_pair: list) -> None:
        moving = make_frame("m", 70, 100, 40, 30)
        assert find_spacing_guides(gap_pair, moving, 0) == []

    def test_unsorted_input(self, gap_pair: list) -> None:
        moving = make_frame("m", 71, 100, 40, 30)
        forward = find_spacing_guides(gap_pair, moving, 5)
        backward = find_spacing_guides(list(reversed(gap_pair)), moving, 5)
        assert forward == backward


# ============================================================================
# Alignment Tests
# ============================================================================

class TestAlignment:
    """Tests for align_frames simple alignments."""

    def test_align_top(self) -> None:
        """Test every moved frame lands on min(y); frames already there are skipped."""
        frames = [
            make_frame("a", 0, 10, 20, 20),
            make_frame("b", 50, 20, 20, 30),
            make_frame("c", 100, 10, 20, 40),
        ]
        updates = align_frames(frames, ["a", "b", "c"], AlignType.TOP)
        assert updates == [PositionUpdate(id="b", x=50, y=10)]

    def test_align_bottom(self) -> None:
        frames = [make_frame("a", 0, 0, 20, 30), make_frame("b", 50, 10, 20, 40)]
        updates = align_frames(frames, ["a", "b"], "bottom")
        assert updates == [PositionUpdate(id="a", x=0, y=20)]

    def test_align_center_v(self) -> None:
        """Test vertical centers move to their mean."""
        frames = [make_frame("a", 0, 0, 20, 20), make_frame("b", 50, 20, 20, 20)]
        updates = align_frames(frames, ["a", "b"], AlignType.CENTER_V)
        assert updates == [
            PositionUpdate(id="a", x=0, y=10),
            PositionUpdate(id="b", x=50, y=10),
        ]

    def test_align_left(self) -> None:
        frames = [make_frame("a", 30, 0, 20, 20), make_frame("b", 10, 50, 40, 20)]
        updates = align_frames(frames, ["a", "b"], AlignType.LEFT)
        assert updates == [PositionUpdate(id="a", x=10, y=0)]

    def test_align_right(self) -> None:
        frames = [make_frame("a", 30, 0, 20, 20), make_frame("b", 10, 50, 60, 20)]
        updates = align_frames(frames, ["a", "b"], AlignType.RIGHT)
        assert updates == [PositionUpdate(id="a", x=50, y=0)]

    def test_align_center_h(self) -> None:
        frames = [make_frame("a", 0, 0, 20, 20), make_frame("b", 40, 50, 40, 20)]
        updates = align_frames(frames, ["a", "b"], AlignType.CENTER_H)
        # centers 10 and 60 -> 35
        assert updates == [
            PositionUpdate(id="a", x=25, y=0),
            PositionUpdate(id="b", x=15, y=50),
        ]

    def test_requires_two_selected(self, row_of_frames: list) -> None:
        assert align_frames(row_of_frames, ["a"], AlignType.TOP) == []
        assert align_frames(row_of_frames, [], AlignType.LEFT) == []

    def test_unknown_ids_ignored(self, row_of_frames: list) -> None:
        """Test only ids present in the object list count toward the selection."""
        assert align_frames(row_of_frames, ["a", "zzz"], AlignType.TOP) == []

    def test_store_order_preserved(self, row_of_frames: list) -> None:
        """Test output follows object order, not selection order."""
        updates = align_frames(row_of_frames, ["c", "b", "a"], AlignType.LEFT)
        assert [u.id for u in updates] == ["b", "c"]

    def test_unknown_operation(self, row_of_frames: list) -> None:
        with pytest.raises(ValueError):
            align_frames(row_of_frames, ["a", "b"], "diagonal")

    def test_degenerate_sizes_pass_through(self) -> None:
        boxes = [Box("a", 0, 0, 0, 0), Box("b", 10, 10, -4, 0)]
        updates = align_frames(boxes, ["a", "b"], AlignType.RIGHT)
        # rights are 0 and 6; only "a" moves
        assert updates == [PositionUpdate(id="a", x=6, y=0)]

    def test_alignment_constraint_directly(self, row_of_frames: list) -> None:
        updates = AlignmentConstraint(row_of_frames, AlignType.TOP).apply()
        assert {u.id for u in updates} == {"b", "c"}
        assert all(u.y == 20 for u in updates)


class TestDistribution:
    """Tests for equal-gap distribution."""

    def test_distribute_h(self, row_of_frames: list) -> None:
        """Test outer frames stay; the middle one lands at first.x + width + gap."""
        updates = align_frames(row_of_frames, ["a", "b", "c"], AlignType.DISTRIBUTE_H)
        assert updates == [PositionUpdate(id="b", x=70, y=40)]

    def test_distribute_h_sorts_by_x(self, row_of_frames: list) -> None:
        shuffled = [row_of_frames[2], row_of_frames[0], row_of_frames[1]]
        updates = align_frames(shuffled, ["a", "b", "c"], AlignType.DISTRIBUTE_H)
        assert updates == [PositionUpdate(id="b", x=70, y=40)]

    def test_distribute_requires_three(self, row_of_frames: list) -> None:
        assert align_frames(row_of_frames, ["a", "b"], AlignType.DISTRIBUTE_H) == []
        assert align_frames(row_of_frames, ["a", "b"], AlignType.DISTRIBUTE_V) == []

    def test_distribute_v(self) -> None:
        frames = [
            make_frame("a", 0, 0, 10, 10),
            make_frame("b", 0, 15, 10, 10),
            make_frame("c", 0, 50, 10, 10),
        ]
        updates = align_frames(frames, ["a", "b", "c"], AlignType.DISTRIBUTE_V)
        assert updates == [PositionUpdate(id="b", x=0, y=25)]

    def test_negative_gap_preserved(self) -> None:
        """Test overlapping output is returned unclamped."""
        frames = [
            make_frame("a", 0, 0, 50, 10),
            make_frame("b", 10, 0, 50, 10),
            make_frame("c", 30, 0, 50, 10),
        ]
        updates = align_frames(frames, ["a", "b", "c"], AlignType.DISTRIBUTE_H)
        # gap = (80 - 150) / 2 = -35
        assert updates == [PositionUpdate(id="b", x=15, y=0)]

    def test_distribute_h_wall_center(self, wall: Wall) -> None:
        """Test widths 40/30/50 on a 300 wall: gap 45, x = 45, 130, 205."""
        frames = [
            make_frame("a", 0, 0, 40, 30),
            make_frame("b", 100, 0, 30, 30),
            make_frame("c", 200, 0, 50, 30),
        ]
        updates = align_frames(
            frames, ["a", "b", "c"], AlignType.DISTRIBUTE_H_WALL_CENTER, wall
        )
        assert [(u.id, u.x) for u in updates] == [("a", 45), ("b", 130), ("c", 205)]

    def test_wall_center_single_frame(self, wall: Wall) -> None:
        frames = [make_frame("a", 0, 0, 40, 50)]
        updates = align_frames(frames, ["a"], AlignType.DISTRIBUTE_V_WALL_CENTER, wall)
        assert updates == [PositionUpdate(id="a", x=0, y=100)]

    def test_wall_center_requires_bounds(self, row_of_frames: list) -> None:
        assert align_frames(row_of_frames, ["a", "b", "c"], AlignType.DISTRIBUTE_H_WALL_CENTER) == []

    def test_wall_center_requires_selection(self, wall: Wall) -> None:
        assert align_frames([], [], AlignType.DISTRIBUTE_V_WALL_CENTER, wall) == []

    def test_apply_updates(self, row_of_frames: list) -> None:
        positions = apply_updates(
            row_of_frames,
            [PositionUpdate("b", 70, 40), PositionUpdate("gone", 1, 1)],
        )
        assert positions == {"a": (10, 20), "b": (70, 40), "c": (120, 30)}


# ============================================================================
# Drag Engine Tests
# ============================================================================

class TestSnapEngine:
    """Tests for drag resolution."""

    @pytest.fixture
    def frames(self) -> list:
        return [make_frame("o", 10, 100, 40, 30), make_frame("m", 200, 200, 40, 30)]

    def test_snaps_both_axes(self, frames: list) -> None:
        result = resolve_drag(frames, "m", 52, 103, 300, 250, threshold=5)
        assert (result.x, result.y) == (50, 100)
        assert result.snapped
        assert [g.orientation for g in result.guides] == ["V", "H"]

    def test_moving_frame_not_a_target(self, frames: list) -> None:
        """Test the dragged frame's stored position does not attract it."""
        result = resolve_drag(frames, "m", 202, 240, 300, 250, threshold=5)
        assert result.x == 202

    def test_snap_disabled(self, frames: list) -> None:
        engine = SnapEngine(300, 250)
        result = engine.resolve_drag(frames, "m", 52, 103, snap_enabled=False)
        assert (result.x, result.y) == (52, 103)
        assert not result.snapped

    def test_unknown_frame(self, frames: list) -> None:
        result = resolve_drag(frames, "nope", 52, 103, 300, 250)
        assert (result.x, result.y) == (52, 103)
        assert result.guides == []

    def test_view_scale_shrinks_threshold(self, frames: list) -> None:
        """Test a 3cm miss snaps at scale 1 but not at scale 2."""
        engine = SnapEngine(300, 250, snap_threshold=5)
        assert engine.threshold_for_scale(2) == 2.5

        result = engine.resolve_drag(frames, "m", 53, 203, view_scale=2)
        assert result.x == 53

    def test_spacing_guides_reported(self) -> None:
        frames = [
            make_frame("a", 10, 0, 40, 30),
            make_frame("b", 70, 0, 40, 30),
            make_frame("m", 200, 150, 40, 30),
        ]
        result = resolve_drag(frames, "m", 71, 150, 300, 250, threshold=5)
        assert result.x == 70
        assert [g.orientation for g in result.spacing_guides] == ["H"]
