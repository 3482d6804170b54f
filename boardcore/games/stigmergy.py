"""Stigmergy: area control by line-of-sight influence on a hex-hex board.

The first ply sets the komi: player 1 enters an integer, which player 2
receives as a bonus. The second ply is a forced pass by player 2. After
that players alternately place a stone on an empty cell or capture an enemy
stone.

A player controls a cell when the number of their stones visible from it
(the first stone along each of the six lines, if it is theirs) reaches
``floor(degree / 2) + 1``. Stones may not be placed on empty cells the
opponent controls, and enemy stones may be captured only on cells the mover
controls. With a positive odd komi, either player may once take the half-point
button instead of moving. Passing is allowed only when no free cell remains.
Two consecutive passes end the game and the higher score wins; equal scores
share the win.
"""

from __future__ import annotations

import logging
import re
from typing import ClassVar, Dict, List, Optional

from ..errors import StateError
from ..game_base import GameBase
from ..graphs import HEX_DIRECTIONS, BoardType, build_graph
from ..messages import format_message, register_messages
from ..models import (
    ButtonResult,
    CaptureResult,
    ClickResult,
    Completeness,
    GameInfo,
    GameRecord,
    KomiResult,
    PassResult,
    Person,
    PlaceResult,
    PlayerScores,
    Snapshot,
    ValidationResult,
    Variant,
)

logger = logging.getLogger(__name__)

__all__ = ["StigmergyGame"]

DEFAULT_SIZE = 8
BUTTON_VALUE = 0.5

_KOMI_RE = re.compile(r"^-?\d+$")
_SIZE_RE = re.compile(r"\d+")

register_messages("stigmergy", {
    "INITIAL_SETUP": "Choose the komi that the second player will receive.",
    "INVALIDKOMI": "The komi must be a whole number.",
    "KOMI_CHOICE": "Pass to accept the komi; the pie rule lets you swap sides instead.",
    "INITIAL_INSTRUCTIONS": "Place a stone on an empty cell, or capture an enemy stone you control.",
    "INITIAL_INSTRUCTIONS_BUTTON": "Place a stone, capture an enemy stone you control, or take the button.",
    "INVALIDPASS": "You may only pass when no free cell remains.",
    "INVALIDBUTTON": "The button is not available.",
    "OWN_PIECE": "{cell} already holds your stone.",
    "INSUFFICIENT_LOS": "You do not have enough lines of sight to capture {cell}.",
    "OPPONENT_CONTROL": "Your opponent controls {cell}.",
})


class StigmergySnapshot(Snapshot):
    board: Dict[str, int] = {}
    scores: List[int] = [0, 0]
    buttontaker: Optional[int] = None
    komi: Optional[int] = None


class StigmergyRecord(GameRecord):
    stack: List[StigmergySnapshot]


class StigmergyGame(GameBase):
    gameinfo: ClassVar[GameInfo] = GameInfo(
        name="Stigmergy",
        uid="stigmergy",
        version="20240524",
        playercounts=[2],
        description=(
            "Claim territory on a hexagonal board through lines of sight; "
            "capture enemy stones on cells you control."
        ),
        urls=["https://boardgamegeek.com/boardgame/333767/stigmergy"],
        people=[
            Person(
                type="designer",
                name="Steve Metzger",
                urls=["https://boardgamegeek.com/boardgamedesigner/11879/steve-metzger"],
            ),
            Person(
                type="designer",
                name="Luis Bolaños Mures",
                urls=["https://boardgamegeek.com/boardgamedesigner/47001/luis-bolanos-mures"],
            ),
        ],
        variants=[
            Variant(uid="size-7", group="board"),
            Variant(uid="size-9", group="board"),
            Variant(uid="size-10", group="board"),
        ],
        flags=["experimental", "pie-even", "scores", "automove"],
    )
    snapshot_model = StigmergySnapshot
    record_model = StigmergyRecord

    def _setup(self) -> None:
        self.scores: list[int] = [0, 0]
        self.buttontaker: Optional[int] = None
        self.komi: Optional[int] = None
        self.board_size = self._board_size()

    def _board_size(self) -> int:
        for variant in self.variants:
            if variant.startswith("size-"):
                match = _SIZE_RE.search(variant)
                if match is None:
                    raise StateError(f"Could not determine the board size from '{variant}'")
                return int(match.group(0))
        return DEFAULT_SIZE

    def build_graph(self):
        return build_graph(
            BoardType.HEX_TRI, minwidth=self.board_size, maxwidth=self.board_size * 2 - 1
        )

    def _initial_extra(self) -> dict:
        return {"scores": [0, 0]}

    def _restore(self, snapshot: StigmergySnapshot) -> None:
        super()._restore(snapshot)
        self.scores = list(snapshot.scores)
        self.buttontaker = snapshot.buttontaker
        self.komi = snapshot.komi

    def _extra_state(self) -> dict:
        return {
            "scores": list(self.scores),
            "buttontaker": self.buttontaker,
            "komi": self.komi,
        }

    # ------------------------------------------------------------------
    # Influence
    # ------------------------------------------------------------------

    def los_target(self, cell: str) -> int:
        return self.graph.degree(cell) // 2 + 1

    def los_count(self, cell: str, player: int) -> int:
        """Lines from ``cell`` whose first stone belongs to ``player``."""
        count = 0
        for direction in HEX_DIRECTIONS:
            for seen in self.graph.ray_cells(cell, direction):
                if seen in self.board:
                    if self.board[seen] == player:
                        count += 1
                    break
        return count

    def cell_owner(self, cell: str) -> Optional[int]:
        if cell in self.board:
            return self.board[cell]
        target = self.los_target(cell)
        if self.los_count(cell, 1) >= target:
            return 1
        if self.los_count(cell, 2) >= target:
            return 2
        return None

    def threatened_pieces(self) -> set[str]:
        """Stones the opponent could capture on their next turn."""
        threatened: set[str] = set()
        for cell, owner in self.board.items():
            if self.los_count(cell, self.next_player(owner)) >= self.los_target(cell):
                threatened.add(cell)
        return threatened

    def is_button_active(self) -> bool:
        if self.buttontaker is not None or self.komi is None:
            return False
        return self.komi > 0 and self.komi % 2 == 1

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def moves(self, player: Optional[int] = None) -> list[str]:
        if self.gameover:
            return []
        if player is None:
            player = self.currplayer
        if self.ply == 0:
            return []
        if self.ply == 1:
            return ["pass"]

        other = self.next_player(player)
        moves: list[str] = []
        free = False
        for cell in self.graph.cells():
            target = self.los_target(cell)
            mine = self.los_count(cell, player)
            theirs = self.los_count(cell, other)
            if cell in self.board:
                if self.board[cell] == other and mine >= target:
                    moves.append(cell)
            else:
                if theirs < target:
                    moves.append(cell)
                if mine < target and theirs < target:
                    free = True
        if self.is_button_active():
            moves.append("button")
        elif not free:
            moves.append("pass")
        return moves

    def _is_legal(self, m: str) -> bool:
        if self.ply == 0:
            return _KOMI_RE.match(m) is not None
        return super()._is_legal(m)

    def _instructions(self) -> str:
        if self.is_button_active():
            return format_message("stigmergy.INITIAL_INSTRUCTIONS_BUTTON")
        return format_message("stigmergy.INITIAL_INSTRUCTIONS")

    def _validate(self, m: str) -> ValidationResult:
        result = ValidationResult(valid=False, message=format_message("_general.DEFAULT_HANDLER"))

        if self.ply == 0:
            if m == "":
                result.valid = True
                result.complete = Completeness.PARTIAL
                result.message = format_message("stigmergy.INITIAL_SETUP")
            elif _KOMI_RE.match(m):
                result.valid = True
                result.complete = Completeness.EXTENDABLE
                result.message = format_message("stigmergy.INITIAL_SETUP")
            else:
                result.message = format_message("stigmergy.INVALIDKOMI")
            return result

        if m == "":
            result.valid = True
            result.complete = Completeness.PARTIAL
            if self.ply == 1:
                result.message = format_message("stigmergy.KOMI_CHOICE")
            else:
                result.message = self._instructions()
            return result

        if m == "pass":
            if "pass" in self.moves():
                result.valid = True
                result.complete = Completeness.FULL
                result.message = format_message("_general.VALID_MOVE")
            else:
                result.message = format_message("stigmergy.INVALIDPASS")
            return result

        if m == "button":
            if self.ply > 1 and self.is_button_active():
                result.valid = True
                result.complete = Completeness.FULL
                result.message = format_message("_general.VALID_MOVE")
            else:
                result.message = format_message("stigmergy.INVALIDBUTTON")
            return result

        if m not in self.graph:
            result.message = format_message("_general.INVALIDCELL", cell=m)
            return result

        if self.board.get(m) == self.currplayer:
            result.message = format_message("stigmergy.OWN_PIECE", cell=m)
            return result

        target = self.los_target(m)
        if m in self.board:
            if self.los_count(m, self.currplayer) < target:
                result.message = format_message("stigmergy.INSUFFICIENT_LOS", cell=m)
                return result
        elif self.los_count(m, self.next_player()) >= target:
            result.message = format_message("stigmergy.OPPONENT_CONTROL", cell=m)
            return result

        result.valid = True
        result.complete = Completeness.FULL
        result.canrender = True
        result.message = format_message("_general.VALID_MOVE")
        return result

    def _click(self, move: str, row: int, col: int, piece: Optional[str]) -> ClickResult:
        if self.ply < 2:
            return ClickResult(**self.validate_move("").model_dump(), move="")
        newmove = self.graph.coords_to_algebraic(col, row)
        return self._click_verdict(newmove, move)

    def _apply(self, m: str) -> None:
        if self.ply == 0:
            self.komi = int(m)
            self.results.append(KomiResult(value=self.komi))
        elif m == "pass":
            self.results.append(PassResult())
        elif m == "button":
            self.buttontaker = self.currplayer
            self.results.append(ButtonResult())
        else:
            if m in self.board:
                self.results.append(CaptureResult(where=m))
            else:
                self.results.append(PlaceResult(where=m))
            self.board[m] = self.currplayer

    def _update_derived(self) -> None:
        scores = [0, 0]
        for cell in self.graph.cells():
            owner = self.cell_owner(cell)
            if owner is not None:
                scores[owner - 1] += 1
        self.scores = scores

    def check_eog(self) -> StigmergyGame:
        if self.lastmove == "pass" and self.stack[-1].lastmove == "pass":
            score1 = self.get_player_score(1)
            score2 = self.get_player_score(2)
            if score1 > score2:
                winners = [1]
            elif score2 > score1:
                winners = [2]
            else:
                winners = [1, 2]
            self._declare_winners(winners)
        return self

    # ------------------------------------------------------------------
    # Scores
    # ------------------------------------------------------------------

    def piece_count(self, player: int) -> int:
        return sum(1 for owner in self.board.values() if owner == player)

    def get_player_score(self, player: int) -> float:
        score: float = self.scores[player - 1]
        if self.buttontaker == player:
            score += BUTTON_VALUE
        if player == 2 and self.komi is not None:
            score += self.komi
        return score

    def get_players_scores(self) -> list[PlayerScores]:
        rows = super().get_players_scores()
        rows.append(PlayerScores(
            name="Pieces",
            scores=[self.piece_count(p) for p in range(1, self.numplayers + 1)],
        ))
        return rows
