"""Cephalopod: area control by capturing with dice.

Players take turns placing dice on an empty cell of a 5x5 board. A die
normally enters showing 1, but if two or more occupied neighbours (of either
colour) sum to at most 6, the player must capture instead: the chosen dice
leave the board and the placed die shows their sum. The game ends when the
board is full; whoever owns more dice wins. Draws cannot happen.

Move grammar: ``cell`` for a plain placement, ``cell=capt+capt[+...]`` for
a capture. The order of captured cells does not matter.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import ClassVar, Dict, List, Optional, Tuple

from ..errors import InvariantViolation
from ..game_base import GameBase
from ..graphs import BoardType, build_graph
from ..messages import format_message, register_messages
from ..models import (
    CaptureResult,
    ClickResult,
    Completeness,
    GameInfo,
    GameRecord,
    Person,
    PlaceResult,
    Snapshot,
    ValidationResult,
    Variant,
)

logger = logging.getLogger(__name__)

__all__ = ["CephalopodGame"]

MAX_SUM = 6

register_messages("ceph", {
    "INITIAL_INSTRUCTIONS": "Click an empty cell to place a die there.",
    "MUST_CAPTURE": "A capture is available at {cell}; choose at least two neighbouring dice to capture.",
    "NOT_ADJACENT": "{cell} is not an occupied neighbour of {where}.",
    "DUPLICATE": "{cell} may only be captured once.",
    "TOO_HIGH": "The captured dice sum to {total}, which is more than 6.",
    "NO_PAIR": "{cell} cannot be part of any capture at {where}.",
    "PARTIAL_CAPTURE": "Choose at least one more die to capture.",
    "EXTENDABLE": "This capture is valid, but more dice could be added to it.",
})


class CephalopodSnapshot(Snapshot):
    board: Dict[str, Tuple[int, int]] = {}


class CephalopodRecord(GameRecord):
    stack: List[CephalopodSnapshot]


class CephalopodGame(GameBase):
    gameinfo: ClassVar[GameInfo] = GameInfo(
        name="Cephalopod",
        uid="ceph",
        version="20211113",
        playercounts=[2],
        description=(
            "A two-player game of area control by capture using dice. The game "
            "ends when the board has been completely filled. Draws are not possible."
        ),
        urls=["http://www.marksteeregames.com/Cephalopod_rules.pdf"],
        people=[
            Person(type="designer", name="Mark Steere", urls=["http://www.marksteeregames.com/"]),
        ],
        variants=[
            Variant(
                uid="snub",
                name="Board: Snub Square",
                group="board",
                description="A hybrid orthogonal/hexagonal board shape.",
            ),
        ],
        flags=["scores"],
    )
    snapshot_model = CephalopodSnapshot
    record_model = CephalopodRecord

    def build_graph(self):
        if "snub" in self.variants:
            return build_graph(BoardType.SNUB_SQUARE, width=5, height=5)
        return build_graph(BoardType.SQUARE_ORTH, width=5, height=5)

    def captures(self, cell: str) -> list[tuple[str, ...]]:
        """Every legal capture set at the empty ``cell``, in neighbour order."""
        occupied = [n for n in self.graph.neighbours(cell) if n in self.board]
        found: list[tuple[str, ...]] = []
        for size in range(2, len(occupied) + 1):
            for combo in combinations(occupied, size):
                if sum(self.board[c][1] for c in combo) <= MAX_SUM:
                    found.append(combo)
        return found

    def moves(self, player: Optional[int] = None) -> list[str]:
        if self.gameover:
            return []
        moves: list[str] = []
        for cell in self.graph.cells():
            if cell in self.board:
                continue
            caps = self.captures(cell)
            if caps:
                moves.extend(f"{cell}={'+'.join(combo)}" for combo in caps)
            else:
                moves.append(cell)
        return moves

    @staticmethod
    def _split(m: str) -> tuple[str, list[str]]:
        cell, _, rest = m.partition("=")
        return cell, [c for c in rest.split("+") if c]

    def _is_legal(self, m: str) -> bool:
        cell, caps = self._split(m)
        key = (cell, frozenset(caps))
        return any(
            (c, frozenset(k)) == key for c, k in (self._split(mv) for mv in self.moves())
        )

    def _validate(self, m: str) -> ValidationResult:
        result = ValidationResult(valid=False, message=format_message("_general.DEFAULT_HANDLER"))
        if m == "":
            result.valid = True
            result.complete = Completeness.PARTIAL
            result.canrender = False
            result.message = format_message("ceph.INITIAL_INSTRUCTIONS")
            return result

        cell, caps = self._split(m)
        if cell not in self.graph:
            result.message = format_message("_general.INVALIDCELL", cell=cell)
            return result
        if cell in self.board:
            result.message = format_message("_general.OCCUPIED", where=cell)
            return result

        possible = self.captures(cell)
        if not caps:
            if possible:
                result.valid = True
                result.complete = Completeness.PARTIAL
                result.canrender = False
                result.message = format_message("ceph.MUST_CAPTURE", cell=cell)
                return result
            result.valid = True
            result.complete = Completeness.FULL
            result.canrender = True
            result.message = format_message("_general.VALID_MOVE")
            return result

        neighbours = set(self.graph.neighbours(cell))
        seen: set[str] = set()
        for cap in caps:
            if cap not in self.graph:
                result.message = format_message("_general.INVALIDCELL", cell=cap)
                return result
            if cap not in neighbours or cap not in self.board:
                result.message = format_message("ceph.NOT_ADJACENT", cell=cap, where=cell)
                return result
            if cap in seen:
                result.message = format_message("ceph.DUPLICATE", cell=cap)
                return result
            seen.add(cap)

        total = sum(self.board[c][1] for c in caps)
        if total > MAX_SUM:
            result.message = format_message("ceph.TOO_HIGH", total=total)
            return result

        if len(caps) == 1:
            if any(caps[0] in combo for combo in possible):
                result.valid = True
                result.complete = Completeness.PARTIAL
                result.canrender = False
                result.message = format_message("ceph.PARTIAL_CAPTURE")
            else:
                result.message = format_message("ceph.NO_PAIR", cell=caps[0], where=cell)
            return result

        result.valid = True
        result.canrender = True
        if any(seen < set(combo) for combo in possible):
            result.complete = Completeness.EXTENDABLE
            result.message = format_message("ceph.EXTENDABLE")
        else:
            result.complete = Completeness.FULL
            result.message = format_message("_general.VALID_MOVE")
        return result

    def _click(self, move: str, row: int, col: int, piece: Optional[str]) -> ClickResult:
        cell = self.graph.coords_to_algebraic(col, row)
        if move == "":
            newmove = "" if cell in self.board else cell
        elif cell not in self.board:
            # Clicking an empty cell starts the move over.
            newmove = cell
        else:
            prev, _, rest = move.partition("=")
            newmove = f"{prev}={rest}+{cell}" if rest else f"{prev}={cell}"
        return self._click_verdict(newmove, move)

    def _apply(self, m: str) -> None:
        cell, caps = self._split(m)
        if not caps:
            self.board[cell] = (self.currplayer, 1)
            self.results.append(PlaceResult(what="1", where=cell))
            return
        total = sum(self.board[c][1] for c in caps)
        self.board[cell] = (self.currplayer, total)
        self.results.append(PlaceResult(what=str(total), where=cell))
        for cap in caps:
            _, value = self.board.pop(cap)
            self.results.append(CaptureResult(what=str(value), where=cap))

    def check_eog(self) -> CephalopodGame:
        if len(self.board) < len(self.graph):
            return self
        score1 = self.get_player_score(1)
        score2 = self.get_player_score(2)
        if score1 == score2:
            raise InvariantViolation(
                "Cephalopod cannot end in a draw",
                context={"scores": [score1, score2]},
            )
        self._declare_winners([1] if score1 > score2 else [2])
        return self

    def get_player_score(self, player: int) -> int:
        return sum(1 for owner, _ in self.board.values() if owner == player)
