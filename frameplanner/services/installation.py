"""Installation guide: where to drill for each frame."""

from dataclasses import dataclass
from typing import Iterable

from frameplanner.dsl.schema import Frame, Unit, Wall
from frameplanner.engine.units import format_dimension


@dataclass
class DrillPosition:
    """Hanging point of a frame, measured from the wall's top-left corner."""

    frame_id: str
    label: str
    x: float
    y: float
    frame_width: float
    frame_height: float


def drill_positions(frames: Iterable[Frame]) -> list[DrillPosition]:
    """Drill point per frame: horizontally centered, ``hanging_offset`` below the top."""
    return [
        DrillPosition(
            frame_id=f.id,
            label=f.label or f"Frame {f.id[:6]}",
            x=f.x + f.width / 2,
            y=f.y + f.hanging_offset,
            frame_width=f.width,
            frame_height=f.height,
        )
        for f in frames
    ]


def installation_guide_text(
    wall: Wall,
    frames: Iterable[Frame],
    unit: Unit | str = Unit.CM,
) -> str:
    """Plain-text installation guide in the given display unit."""
    unit = Unit(unit).value
    positions = drill_positions(frames)

    lines = [
        "INSTALLATION GUIDE",
        "==================",
        "",
        f"Wall: {format_dimension(wall.width, unit)} x {format_dimension(wall.height, unit)}",
        "Measurements from top-left corner of wall",
        "",
    ]

    if not positions:
        lines.append("No frames placed.")
        return "\n".join(lines)

    for i, p in enumerate(positions, start=1):
        lines.append(f"{i}. {p.label}")
        lines.append(
            f"   Frame size: {format_dimension(p.frame_width, unit)}"
            f" x {format_dimension(p.frame_height, unit)}"
        )
        lines.append(
            f"   Drill at: X = {format_dimension(p.x, unit)},"
            f" Y = {format_dimension(p.y, unit)}"
        )
        lines.append("")

    return "\n".join(lines)
