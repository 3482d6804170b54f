"""Amazons on a 10x10 board.

Each player has four queens. A turn moves one queen like a chess queen and
then shoots an arrow, also like a queen, from where it landed. The arrow's
cell is removed from the board for the rest of the game. Queens and arrows
cannot cross arrows or other queens. The last player able to move wins.

Move grammar: ``from-to/block``. ``from`` and ``from-to`` are accepted as
partial moves for click-driven entry.
"""

from __future__ import annotations

import logging
import re
from typing import ClassVar, Dict, List, Optional

from ..errors import StructuralError
from ..game_base import GameBase
from ..graphs import ALL_DIRECTIONS, BoardType, RectGrid, build_graph
from ..messages import format_message, register_messages
from ..models import (
    BlockResult,
    ClickResult,
    Completeness,
    GameInfo,
    GameRecord,
    MovePieceResult,
    Person,
    Snapshot,
    ValidationResult,
)

logger = logging.getLogger(__name__)

__all__ = ["AmazonsGame"]

BOARD_SIZE = 10
BLOCK = 0

_SEPARATORS = re.compile(r"[-/]")

register_messages("amazons", {
    "POTENTIAL_MOVE": "Select where the queen should move.",
    "POTENTIAL_BLOCK": "Select where the arrow should land.",
    "STRAIGHTLINE": "Queens and arrows must travel in a straight line.",
    "MALFORMED": "Moves look like 'from-to/block'.",
})


class AmazonsSnapshot(Snapshot):
    board: Dict[str, int] = {}


class AmazonsRecord(GameRecord):
    stack: List[AmazonsSnapshot]


class AmazonsGame(GameBase):
    gameinfo: ClassVar[GameInfo] = GameInfo(
        name="Amazons",
        uid="amazons",
        version="20211005",
        playercounts=[2],
        description=(
            "Move one of your queens, then shoot an arrow from its new square. "
            "The last player able to move wins."
        ),
        urls=["https://en.wikipedia.org/wiki/Amazons_%28game%29"],
        people=[Person(type="designer", name="Walter Zamkauskas")],
        flags=["multistep"],
    )
    snapshot_model = AmazonsSnapshot
    record_model = AmazonsRecord

    grid = RectGrid(BOARD_SIZE, BOARD_SIZE)

    def initial_board(self) -> dict[str, int]:
        return {
            "d10": 2, "g10": 2, "a7": 2, "j7": 2,
            "a4": 1, "j4": 1, "d1": 1, "g1": 1,
        }

    def build_graph(self):
        return build_graph(BoardType.SQUARE, width=BOARD_SIZE, height=BOARD_SIZE)

    def _prepare_graph(self) -> None:
        # Arrows prune the graph, so every load starts from a fresh board.
        self.graph = self.build_graph()
        for cell, contents in self.board.items():
            if contents == BLOCK:
                self.graph.drop_node(cell)

    def _label(self, x: int, y: int) -> str:
        return self.graph.coords_to_algebraic(x, y)

    def _ray(self, cell: str, direction: str) -> list[str]:
        x, y = self.graph.algebraic_to_coords(cell)
        return [self._label(*pt) for pt in self.grid.ray(x, y, direction)]

    def moves(self, player: Optional[int] = None) -> list[str]:
        if self.gameover:
            return []
        if player is None:
            player = self.currplayer
        queens = [cell for cell, contents in self.board.items() if contents == player]
        steps: list[tuple[str, str]] = []
        for frm in queens:
            for direction in ALL_DIRECTIONS:
                for to in self._ray(frm, direction):
                    if to in self.board:
                        break
                    steps.append((frm, to))
        moves: list[str] = []
        for frm, to in steps:
            for direction in ALL_DIRECTIONS:
                for block in self._ray(to, direction):
                    if block in self.board and block != frm:
                        break
                    moves.append(f"{frm}-{to}/{block}")
        return moves

    def _clear_line(self, frm: str, to: str, ignore: Optional[str] = None) -> Optional[str]:
        """First obstruction between two cells on a line, or None.

        Returns ``""`` when the cells are not on a common line.
        """
        x1, y1 = self.graph.algebraic_to_coords(frm)
        x2, y2 = self.graph.algebraic_to_coords(to)
        direction = RectGrid.bearing(x1, y1, x2, y2)
        if direction is None:
            return ""
        ray = self._ray(frm, direction)
        if to not in ray:
            return ""
        for cell in ray:
            if cell == to:
                break
            if cell in self.board and cell != ignore:
                return cell
        return None

    def _validate(self, m: str) -> ValidationResult:
        result = ValidationResult(valid=False, message=format_message("_general.DEFAULT_HANDLER"))
        if m == "":
            result.valid = True
            result.complete = Completeness.PARTIAL
            result.canrender = False
            result.message = format_message("_general.EMPTYSTRING")
            return result

        parts = _SEPARATORS.split(m)
        if len(parts) > 3 or any(p == "" for p in parts):
            result.message = format_message("amazons.MALFORMED")
            return result
        for cell in parts:
            try:
                self.graph.algebraic_to_coords(cell)
            except StructuralError:
                result.message = format_message("_general.INVALIDCELL", cell=cell)
                return result

        frm = parts[0]
        to = parts[1] if len(parts) > 1 else None
        block = parts[2] if len(parts) > 2 else None

        if frm not in self.board or self.board[frm] == BLOCK:
            result.message = format_message("_general.NONEXISTENT", where=frm)
            return result
        if self.board[frm] != self.currplayer:
            result.message = format_message("_general.UNCONTROLLED")
            return result
        if to is None:
            result.valid = True
            result.complete = Completeness.PARTIAL
            result.canrender = False
            result.message = format_message("amazons.POTENTIAL_MOVE")
            return result

        if to in self.board:
            result.message = format_message("_general.OCCUPIED", where=to)
            return result
        obstruction = self._clear_line(frm, to)
        if obstruction == "":
            result.message = format_message("amazons.STRAIGHTLINE")
            return result
        if obstruction is not None:
            result.message = format_message(
                "_general.OBSTRUCTED", from_cell=frm, to=to, obstruction=obstruction
            )
            return result
        if block is None:
            result.valid = True
            result.complete = Completeness.PARTIAL
            result.canrender = True
            result.message = format_message("amazons.POTENTIAL_BLOCK")
            return result

        # The queen has left its square, so the arrow may land there or pass it.
        if block in self.board and block != frm:
            result.message = format_message("_general.OCCUPIED", where=block)
            return result
        obstruction = self._clear_line(to, block, ignore=frm)
        if obstruction == "":
            result.message = format_message("amazons.STRAIGHTLINE")
            return result
        if obstruction is not None:
            result.message = format_message(
                "_general.OBSTRUCTED", from_cell=to, to=block, obstruction=obstruction
            )
            return result

        result.valid = True
        result.complete = Completeness.FULL
        result.canrender = True
        result.message = format_message("_general.VALID_MOVE")
        return result

    def _click(self, move: str, row: int, col: int, piece: Optional[str]) -> ClickResult:
        cell = self._label(col, row)
        if move == "":
            if cell not in self.board:
                return ClickResult(move="", message="")
            newmove = cell
        else:
            parts = _SEPARATORS.split(move)
            if len(parts) == 1:
                newmove = f"{parts[0]}-{cell}"
            elif len(parts) == 2:
                newmove = f"{parts[0]}-{parts[1]}/{cell}"
            else:
                newmove = move
        return self._click_verdict(newmove, "")

    def _apply_partial(self, m: str, verdict: ValidationResult) -> None:
        parts = _SEPARATORS.split(m)
        if len(parts) < 2:
            return
        frm, to = parts[0], parts[1]
        del self.board[frm]
        self.board[to] = self.currplayer
        self.results.append(MovePieceResult(from_cell=frm, to=to))

    def _apply(self, m: str) -> None:
        frm, to, block = _SEPARATORS.split(m)
        del self.board[frm]
        self.board[to] = self.currplayer
        self.board[block] = BLOCK
        self.graph.drop_node(block)
        self.results.append(MovePieceResult(from_cell=frm, to=to))
        self.results.append(BlockResult(where=block))

    def check_eog(self) -> AmazonsGame:
        if not self.moves():
            self._declare_winners([self.next_player()])
        return self

    def find_pieces(self) -> list[str]:
        return [cell for cell, contents in self.board.items() if contents != BLOCK]

    def are_isolated(self) -> bool:
        """True once no queen can reach any enemy queen."""
        pieces = self.find_pieces()
        for i, frm in enumerate(pieces):
            for to in pieces[i + 1:]:
                if self.board[frm] == self.board[to]:
                    continue
                if self.graph.path(frm, to) is not None:
                    return False
        return True

    def territory(self) -> tuple[int, int]:
        """Empty cells reachable by each player's queens."""
        counted: dict[int, set[str]] = {1: set(), 2: set()}
        for start in self.find_pieces():
            owner = self.board[start]
            frontier = [start]
            visited: set[str] = set()
            while frontier:
                cell = frontier.pop()
                if cell in visited:
                    continue
                visited.add(cell)
                for adj in self.graph.neighbours(cell):
                    if adj not in self.board:
                        counted[owner].add(adj)
                        frontier.append(adj)
        return len(counted[1]), len(counted[2])
