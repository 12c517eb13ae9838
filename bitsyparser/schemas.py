"""
Pydantic schemas for the Bitsy world model.

All data structures produced by the parser and consumed by the encoders are
defined here.

Design Philosophy:
- One model per record kind, sharing the ``Resource`` base (id + name)
- Tiles, sprites and items form a closed family discriminated by ``kind``
- Cross references (a sprite's dialogue, a room's palette) are plain id
  strings resolved by lookup, never nested models
- Empty strings mean "absent" for optional references, matching the wire
  format where an absent field is simply not written
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .colors import RGB
from .config import Config
from .dialect import PALETTE_INDEX_DEFAULTS, DialectFlags, split_version
from .keywords import TRANSPARENT, ObjectKind

FRAME_SIZE = 8
FRAME_CELLS = FRAME_SIZE * FRAME_SIZE
ROOM_SIZE = 16

# One 8x8 bitmap in row-major order: cell index = row * 8 + column
Frame = Annotated[List[bool], Field(min_length=FRAME_CELLS, max_length=FRAME_CELLS)]

# Palette index override for an object's background, or "*" for transparent
BackgroundOverride = Union[int, Literal["*"]]


def blank_frame() -> List[bool]:
    return [False] * FRAME_CELLS


def blank_grid(fill: str = "0") -> List[List[str]]:
    return [[fill] * ROOM_SIZE for _ in range(ROOM_SIZE)]


# ============================================================================
# Shared shapes
# ============================================================================


class Resource(BaseModel):
    """Fields every record carries."""

    id: str = Field(..., description="Unique within its own collection")
    name: str = Field("", description="Optional display name")


class Position(BaseModel):
    """A location inside a room."""

    room: str
    x: int
    y: int


class Placement(BaseModel):
    """An item or ending placed on a room's grid."""

    id: str
    x: int
    y: int


class Exit(BaseModel):
    """A room exit leading to a position in another (or the same) room.

    ``transition`` and ``dialogue_id`` are independently optional. When both
    are set, ``dialogue_first`` records that DLG was written before FX.
    """

    x: int
    y: int
    destination: Position
    transition: str = Field("", description="Transition effect id (FX)")
    dialogue_id: str = Field("", description="Dialogue shown on exit (DLG)")
    dialogue_first: bool = False


# ============================================================================
# Drawable objects
# ============================================================================


class GameObject(Resource):
    """Base for tiles, sprites and items."""

    graphic: List[Frame] = Field(..., min_length=1, description="Animation frames")
    background: BackgroundOverride = Field(
        0, description="Background palette override (BGC); 0 means none"
    )

    @property
    def transparent(self) -> bool:
        return self.background == TRANSPARENT


class Tile(GameObject):
    kind: Literal[ObjectKind.TILE] = ObjectKind.TILE
    palette: int = PALETTE_INDEX_DEFAULTS[ObjectKind.TILE]
    wall: bool = False


class Sprite(GameObject):
    kind: Literal[ObjectKind.SPRITE] = ObjectKind.SPRITE
    palette: int = PALETTE_INDEX_DEFAULTS[ObjectKind.SPRITE]
    dialogue_id: str = ""
    position: Optional[Position] = None
    blip: str = ""


class Item(GameObject):
    kind: Literal[ObjectKind.ITEM] = ObjectKind.ITEM
    palette: int = PALETTE_INDEX_DEFAULTS[ObjectKind.ITEM]
    dialogue_id: str = ""
    blip: str = ""


AnyObject = Annotated[Union[Tile, Sprite, Item], Field(discriminator="kind")]


# ============================================================================
# Other records
# ============================================================================


class Palette(Resource):
    """Ordered list of colors. The first three are background, tile, sprite."""

    colors: List[RGB] = Field(default_factory=list)
    # Per color: written as a single packed integer instead of "r,g,b".
    # Empty when no color of the palette was packed.
    packed: List[bool] = Field(default_factory=list)

    def is_packed(self, index: int) -> bool:
        return index < len(self.packed) and self.packed[index]

    @property
    def background(self) -> Optional[RGB]:
        return self.colors[0] if len(self.colors) > 0 else None

    @property
    def tile(self) -> Optional[RGB]:
        return self.colors[1] if len(self.colors) > 1 else None

    @property
    def sprite(self) -> Optional[RGB]:
        return self.colors[2] if len(self.colors) > 2 else None


class Room(Resource):
    """A 16x16 screen of tile references plus placed content."""

    tiles: List[List[str]] = Field(
        default_factory=blank_grid,
        min_length=ROOM_SIZE,
        max_length=ROOM_SIZE,
        description="16 rows of tile ids ('0' is empty)",
    )
    # Wall tile ids listed on the room itself (older save files), one entry
    # per WAL line
    walls: List[List[str]] = Field(default_factory=list)
    items: List[Placement] = Field(default_factory=list)
    exits: List[Exit] = Field(default_factory=list)
    endings: List[Placement] = Field(default_factory=list)
    palette: str = ""
    avatar: str = Field("", description="Sprite drawn as the avatar in this room (AVA)")
    tune: str = ""

    @property
    def wall_ids(self) -> List[str]:
        """Every legacy wall id, flattened across WAL lines."""
        return [wall for line in self.walls for wall in line if wall]


class Dialogue(Resource):
    """Raw dialogue script; a single line or a triple-quoted block."""

    script: str = ""

    @property
    def multiline(self) -> bool:
        return "\n" in self.script


class Ending(Resource):
    script: str = ""

    @property
    def multiline(self) -> bool:
        return "\n" in self.script


class Variable(Resource):
    value: str = ""


class Tune(Resource):
    """Opaque tune payload, kept line for line."""

    lines: List[str] = Field(default_factory=list)


# ============================================================================
# World
# ============================================================================


class World(BaseModel):
    """A complete game: header metadata plus nine id-keyed collections.

    Collections are plain dicts; insertion order is the emission order.
    """

    title: str = ""
    version: str = ""
    major: int = 0
    minor: int = 0
    room_format: int = 1
    dlg_compat: int = 0
    txt_mode: int = 0

    palettes: Dict[str, Palette] = Field(default_factory=dict)
    rooms: Dict[str, Room] = Field(default_factory=dict)
    tiles: Dict[str, Tile] = Field(default_factory=dict)
    sprites: Dict[str, Sprite] = Field(default_factory=dict)
    items: Dict[str, Item] = Field(default_factory=dict)
    dialogues: Dict[str, Dialogue] = Field(default_factory=dict)
    endings: Dict[str, Ending] = Field(default_factory=dict)
    variables: Dict[str, Variable] = Field(default_factory=dict)
    tunes: Dict[str, Tune] = Field(default_factory=dict)

    @classmethod
    def new(cls, title: str = "", version: Optional[str] = None) -> "World":
        """Create an empty world stamped with a version (Config.DEFAULT_VERSION)."""
        version = version or Config.DEFAULT_VERSION
        major, minor = split_version(version)
        return cls(title=title, version=version, major=major, minor=minor)

    @property
    def flags(self) -> DialectFlags:
        return DialectFlags(
            major=self.major,
            minor=self.minor,
            room_format=self.room_format,
            dlg_compat=self.dlg_compat,
            txt_mode=self.txt_mode,
        )

    def to_lines(self) -> List[str]:
        from .encoders import encode_world

        return encode_world(self)

    def to_string(self) -> str:
        """Serialize to save-file text, ending with a single newline."""
        return "\n".join(self.to_lines()) + "\n"

    def record_count(self) -> int:
        return sum(
            len(collection)
            for collection in (
                self.palettes,
                self.rooms,
                self.tiles,
                self.sprites,
                self.items,
                self.dialogues,
                self.endings,
                self.variables,
                self.tunes,
            )
        )

