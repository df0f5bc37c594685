"""Input events and hit-test results for the edit session."""

from dataclasses import dataclass
from enum import Enum, IntEnum

from glyphsmith.core.geometry import HandleSide
from glyphsmith.domain import NodeRef, Point

MIN_ZOOM = 0.1
MAX_ZOOM = 10.0


class MouseButton(IntEnum):
    """Pointer buttons, numbered like DOM MouseEvent.button."""

    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event in screen coordinates.

    Attributes:
        x: Screen X position
        y: Screen Y position
        button: Pressed button
        shift: Additive-selection modifier held
        pan_modifier: Pan modifier held (pans with any tool)
    """

    x: float
    y: float
    button: MouseButton = MouseButton.LEFT
    shift: bool = False
    pan_modifier: bool = False


class HitKind(Enum):
    """What lies under the pointer."""

    CANVAS = "canvas"
    PATH = "path"
    NODE = "node"
    HANDLE_IN = "handle_in"
    HANDLE_OUT = "handle_out"


@dataclass(frozen=True)
class Hit:
    """Result of a hit test.

    Attributes:
        kind: Kind of element hit
        path_id: Owning path for PATH, NODE and HANDLE hits
        index: Node index for NODE and HANDLE hits
    """

    kind: HitKind
    path_id: str | None = None
    index: int | None = None

    @property
    def node_ref(self) -> NodeRef | None:
        if self.path_id is None or self.index is None:
            return None
        return NodeRef(self.path_id, self.index)

    @property
    def handle_side(self) -> HandleSide | None:
        if self.kind is HitKind.HANDLE_IN:
            return HandleSide.IN
        if self.kind is HitKind.HANDLE_OUT:
            return HandleSide.OUT
        return None


CANVAS_HIT = Hit(HitKind.CANVAS)


@dataclass
class ViewTransform:
    """Screen <-> world mapping: screen = world * k + (x, y)."""

    x: float = 0.0
    y: float = 0.0
    k: float = 1.0

    def to_world(self, sx: float, sy: float) -> Point:
        return Point((sx - self.x) / self.k, (sy - self.y) / self.k)

    def pan(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy

    def zoom_at(self, factor: float, sx: float, sy: float) -> None:
        """Zoom by a factor keeping the world point under (sx, sy) fixed."""
        world = self.to_world(sx, sy)
        self.k = max(MIN_ZOOM, min(MAX_ZOOM, self.k * factor))
        self.x = sx - world.x * self.k
        self.y = sy - world.y * self.k
