# targets.py
"""Where the mapped coordinate goes."""
from typing import Protocol, Tuple

Vec3 = Tuple[float, float, float]


class TargetSink(Protocol):
    def get_position(self) -> Vec3: ...

    def set_position(self, position: Vec3) -> None: ...


class PointTarget:
    """In-memory target holding the last applied position."""

    def __init__(self, position: Vec3 = (0.0, 0.0, 0.0)):
        self.position: Vec3 = tuple(position)  # type: ignore[assignment]

    def get_position(self) -> Vec3:
        return self.position

    def set_position(self, position: Vec3) -> None:
        self.position = tuple(position)  # type: ignore[assignment]

    def __repr__(self) -> str:
        x, y, z = self.position
        return f"<PointTarget ({x:.3f}, {y:.3f}, {z:.3f})>"
