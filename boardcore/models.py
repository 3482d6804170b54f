"""
Pydantic models shared by the topology engine and the game-state pipeline.

Snapshots and game records use the persisted field names of the record
format (``_version``, ``_results``, ``from``) as aliases, so
``model_dump(by_alias=True)`` and ``model_validate`` speak the wire format
while Python code uses plain attribute names.
"""

from enum import Enum, IntEnum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class Direction(str, Enum):
    """Compass-style direction labels shared by all grid families."""
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


class CycleDirection(str, Enum):
    """Travel directions around a pit/cycle board."""
    CW = "CW"
    CCW = "CCW"


class Completeness(IntEnum):
    """How complete a validated move is.

    PARTIAL means the input is a legal prefix that still needs more;
    EXTENDABLE means it could be submitted as is but may be extended.
    """
    PARTIAL = -1
    EXTENDABLE = 0
    FULL = 1


class Person(BaseModel):
    """Someone involved in a game's creation"""
    type: Optional[str] = None
    name: str
    urls: List[str] = Field(default_factory=list)


class Variant(BaseModel):
    """A supported variant; variants sharing a ``group`` are exclusive."""
    uid: str
    name: Optional[str] = None
    description: Optional[str] = None
    group: Optional[str] = None


class GameInfo(BaseModel):
    """Static description of a concrete game engine"""
    name: str
    uid: str
    version: str
    playercounts: List[int]
    description: Optional[str] = None
    urls: List[str] = Field(default_factory=list)
    people: List[Person] = Field(default_factory=list)
    variants: List[Variant] = Field(default_factory=list)
    flags: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    def variant(self, uid: str) -> Optional[Variant]:
        for rec in self.variants:
            if rec.uid == uid:
                return rec
        return None


# =============================================================================
# Move results: one tagged record per atomic change
# =============================================================================


class PlaceResult(BaseModel):
    type: Literal["place"] = "place"
    what: Optional[str] = None
    where: Optional[str] = None


class CaptureResult(BaseModel):
    type: Literal["capture"] = "capture"
    what: Optional[str] = None
    where: Optional[str] = None


class MovePieceResult(BaseModel):
    type: Literal["move"] = "move"
    from_cell: str = Field(alias="from")
    to: str
    what: Optional[str] = None

    class Config:
        populate_by_name = True


class BlockResult(BaseModel):
    type: Literal["block"] = "block"
    where: str


class PassResult(BaseModel):
    type: Literal["pass"] = "pass"


class ResignedResult(BaseModel):
    type: Literal["resigned"] = "resigned"
    player: int


class EOGResult(BaseModel):
    type: Literal["eog"] = "eog"


class WinnersResult(BaseModel):
    type: Literal["winners"] = "winners"
    players: List[int]


class KomiResult(BaseModel):
    type: Literal["komi"] = "komi"
    value: int


class ButtonResult(BaseModel):
    type: Literal["button"] = "button"


MoveResult = Annotated[
    Union[
        PlaceResult,
        CaptureResult,
        MovePieceResult,
        BlockResult,
        PassResult,
        ResignedResult,
        EOGResult,
        WinnersResult,
        KomiResult,
        ButtonResult,
    ],
    Field(discriminator="type"),
]


# =============================================================================
# Validation verdicts
# =============================================================================


class ValidationResult(BaseModel):
    """Verdict returned by ``validate_move``.

    ``complete`` is a :class:`Completeness` value or ``None`` when it does
    not apply (invalid input). ``canrender`` tells a front end whether a
    partial move can already be previewed.
    """
    valid: bool = False
    message: str = ""
    complete: Optional[int] = None
    canrender: Optional[bool] = None


class ClickResult(ValidationResult):
    """Verdict for a click, carrying the candidate move string"""
    move: str = ""


class PlayerScores(BaseModel):
    """A named row of per-player scores"""
    name: str
    scores: List[float]


# =============================================================================
# Snapshots and records
# =============================================================================


class Snapshot(BaseModel):
    """One ply of game history.

    Concrete games subclass this to narrow ``board`` and add auxiliary
    scalars. Snapshots are frozen once pushed onto the stack.
    """
    version: str = Field(alias="_version")
    results: List[MoveResult] = Field(default_factory=list, alias="_results")
    currplayer: int
    board: Dict[str, Any] = Field(default_factory=dict)
    lastmove: Optional[str] = None

    class Config:
        populate_by_name = True
        frozen = True


class GameRecord(BaseModel):
    """Top-level game record exchanged with collaborators"""
    game: str
    numplayers: int
    variants: List[str] = Field(default_factory=list)
    gameover: bool = False
    winner: List[int] = Field(default_factory=list)
    stack: List[Snapshot]

    class Config:
        populate_by_name = True
