"""Game-state stack and move pipeline shared by every game engine.

A game is a stack of immutable :class:`~boardcore.models.Snapshot` records,
one per ply, plus a working copy of the currently loaded snapshot. Concrete
engines describe themselves with a :class:`~boardcore.models.GameInfo` and
implement a handful of hooks; :class:`GameBase` owns the rest:

1. terminal check
2. normalisation (lower-case, all whitespace removed)
3. validation (unless ``trusted``)
4. partial preview, when ``partial`` and the verdict is incomplete
5. the legal-move failsafe (unless ``trusted``)
6. effects, results, ``lastmove``, player rotation, derived state,
   end-of-game check, snapshot push

Moves are accepted only while the head of the stack is loaded. After
``load(i)`` for a historical ``i`` the game is a read-only view until
``load()`` returns to the head, so the stack stays linear and append-only.

Usage:
    from boardcore.games import get_game

    game = get_game("ceph")()
    game.move("c3")
    text = game.serialize()
    again = get_game("ceph")(text)
    assert again.fingerprint() == game.fingerprint()
"""

from __future__ import annotations

import logging
import random
import re
from collections.abc import Mapping
from typing import Any, ClassVar, Optional

from .config import DEBUG_ENGINE
from .errors import (
    FailsafeError,
    GameOverError,
    StateError,
    ValidationFailure,
)
from .messages import format_message
from .models import (
    ClickResult,
    Completeness,
    EOGResult,
    GameInfo,
    GameRecord,
    PlayerScores,
    ResignedResult,
    Snapshot,
    ValidationResult,
    WinnersResult,
)
from . import serialization

logger = logging.getLogger(__name__)

__all__ = ["GameBase", "normalise_move"]

_WHITESPACE = re.compile(r"\s+")


def normalise_move(m: str) -> str:
    """Lower-case ``m`` and strip every whitespace character."""
    return _WHITESPACE.sub("", m.lower())


class GameBase:
    """Abstract base for a turn-based game engine.

    Subclasses must define ``gameinfo``, ``snapshot_model`` and
    ``record_model`` and implement ``initial_board``, ``build_graph``,
    ``moves``, ``_validate``, ``_apply`` and ``check_eog``. Games with
    extra per-ply scalars override ``_restore`` and ``_extra_state``.
    """

    gameinfo: ClassVar[GameInfo]
    snapshot_model: ClassVar[type[Snapshot]] = Snapshot
    record_model: ClassVar[type[GameRecord]] = GameRecord

    def __init__(
        self,
        state: str | bytes | Mapping[str, Any] | GameRecord | None = None,
        variants: Optional[list[str]] = None,
    ):
        self.numplayers: int = self.gameinfo.playercounts[0]
        self.currplayer: int = 1
        self.board: dict[str, Any] = {}
        self.lastmove: Optional[str] = None
        self.graph = None
        self.gameover = False
        self.winner: list[int] = []
        self.variants: list[str] = []
        self.results: list[Any] = []
        self._view = 0
        self._previewing = False

        if state is None:
            self.variants = self._accept_variants(variants or [])
            self._setup()
            self.stack: list[Snapshot] = [self.initial_state()]
        else:
            record = self._coerce_record(state)
            self.numplayers = record.numplayers
            self.gameover = record.gameover
            self.winner = list(record.winner)
            self.variants = list(record.variants)
            self.stack = list(record.stack)
            if not self.stack:
                raise StateError(f"The {self.gameinfo.name} record has an empty stack")
            self._setup()
        self.load()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _accept_variants(self, variants: list[str]) -> list[str]:
        accepted: list[str] = []
        groups: set[str] = set()
        for uid in variants:
            rec = self.gameinfo.variant(uid)
            if rec is None:
                raise StateError(
                    f"The {self.gameinfo.name} engine has no variant '{uid}'",
                    context={"known": [v.uid for v in self.gameinfo.variants]},
                )
            if rec.group is not None:
                if rec.group in groups:
                    logger.warning(
                        "Ignoring variant %s: group %s already chosen", uid, rec.group
                    )
                    continue
                groups.add(rec.group)
            accepted.append(uid)
        return accepted

    def _coerce_record(self, state: Any) -> GameRecord:
        if isinstance(state, (str, bytes)):
            state = serialization.decode(state)
        if isinstance(state, GameRecord):
            if isinstance(state, self.record_model):
                record = state
            else:
                record = self.record_model.model_validate(state.model_dump(by_alias=True))
        elif isinstance(state, Mapping):
            game = state.get("game")
            if game != self.gameinfo.uid:
                raise StateError(
                    f"The {self.gameinfo.name} engine cannot process a game of '{game}'"
                )
            record = self.record_model.model_validate(dict(state))
        else:
            raise StateError(f"Cannot load a game from {type(state).__name__}")
        if record.game != self.gameinfo.uid:
            raise StateError(
                f"The {self.gameinfo.name} engine cannot process a game of '{record.game}'"
            )
        return record

    def _setup(self) -> None:
        """Called once variants are known, before the first ``load``."""

    def initial_state(self) -> Snapshot:
        return self.snapshot_model(
            version=self.gameinfo.version,
            results=[],
            currplayer=1,
            board=self.initial_board(),
            **self._initial_extra(),
        )

    def initial_board(self) -> dict[str, Any]:
        return {}

    def _initial_extra(self) -> dict[str, Any]:
        return {}

    def build_graph(self):
        raise NotImplementedError

    def _prepare_graph(self) -> None:
        if self.graph is None:
            self.graph = self.build_graph()

    # ------------------------------------------------------------------
    # Stack
    # ------------------------------------------------------------------

    @property
    def ply(self) -> int:
        """Number of plies played to reach the loaded snapshot."""
        return self._view

    @property
    def at_head(self) -> bool:
        return self._view == len(self.stack) - 1

    def load(self, idx: int = -1) -> GameBase:
        """Make snapshot ``idx`` the working state; negative counts from the end."""
        if idx < 0:
            idx += len(self.stack)
        if idx < 0 or idx >= len(self.stack):
            raise StateError(
                "Could not load the requested state from the stack",
                context={"index": idx, "size": len(self.stack)},
            )
        self._view = idx
        self._previewing = False
        self._restore(self.stack[idx])
        self._prepare_graph()
        return self

    def _restore(self, snapshot: Snapshot) -> None:
        self.currplayer = snapshot.currplayer
        self.board = dict(snapshot.board)
        self.lastmove = snapshot.lastmove
        self.results = list(snapshot.results)

    def _extra_state(self) -> dict[str, Any]:
        return {}

    def move_state(self) -> Snapshot:
        return self.snapshot_model(
            version=self.gameinfo.version,
            results=list(self.results),
            currplayer=self.currplayer,
            board=dict(self.board),
            lastmove=self.lastmove,
            **self._extra_state(),
        )

    def save_state(self) -> None:
        self.stack.append(self.move_state())
        self._view = len(self.stack) - 1

    def _require_head(self) -> None:
        if self._previewing:
            raise StateError("A partial move is being previewed; call load() first")
        if not self.at_head:
            raise StateError(
                "Moves can only be made from the latest state",
                context={"loaded": self._view, "head": len(self.stack) - 1},
            )

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def moves(self, player: Optional[int] = None) -> list[str]:
        raise NotImplementedError

    def validate_move(self, m: str) -> ValidationResult:
        """Judge ``m`` against the loaded state without changing it."""
        return self._validate(normalise_move(m))

    def _validate(self, m: str) -> ValidationResult:
        raise NotImplementedError

    def _is_legal(self, m: str) -> bool:
        return m in self.moves()

    def _apply(self, m: str) -> None:
        raise NotImplementedError

    def _apply_partial(self, m: str, verdict: ValidationResult) -> None:
        """Preview effects of an incomplete move; nothing by default."""

    def _update_derived(self) -> None:
        """Recompute state derived from the board after each move."""

    def check_eog(self) -> GameBase:
        raise NotImplementedError

    def _click(self, move: str, row: int, col: int, piece: Optional[str]) -> ClickResult:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def next_player(self, player: Optional[int] = None) -> int:
        if player is None:
            player = self.currplayer
        return player % self.numplayers + 1

    def move(self, m: str, *, partial: bool = False, trusted: bool = False) -> GameBase:
        if self.gameover:
            raise GameOverError(format_message("_general.GAMEOVER"))
        self._require_head()

        m = normalise_move(m)
        verdict: Optional[ValidationResult] = None
        if not trusted:
            verdict = self.validate_move(m)
            if not verdict.valid:
                raise ValidationFailure(verdict.message, move=m, completeness=verdict.complete)

        if partial:
            if verdict is None:
                verdict = self.validate_move(m)
            if verdict.complete is None or verdict.complete < Completeness.EXTENDABLE:
                if DEBUG_ENGINE:
                    logger.debug("Previewing partial move %r", m)
                self.results = []
                self._apply_partial(m, verdict)
                self._previewing = True
                return self

        if not trusted and not self._is_legal(m):
            raise FailsafeError(format_message("_general.FAILSAFE", move=m), move=m)

        self.results = []
        self._apply(m)
        if DEBUG_ENGINE:
            logger.debug("Applied %r for player %d: %s", m, self.currplayer, self.results)

        self.lastmove = m
        self.currplayer = self.next_player()
        self._update_derived()
        self.check_eog()
        self.save_state()

        logger.debug("%s ply %d: %s", self.gameinfo.uid, self._view, m)
        if self.gameover:
            logger.info("%s game over, winners %s", self.gameinfo.uid, self.winner)
        return self

    def _declare_winners(self, winners: list[int]) -> None:
        self.gameover = True
        self.winner = list(winners)
        self.results.append(EOGResult())
        self.results.append(WinnersResult(players=list(self.winner)))

    def resign(self, player: int) -> GameBase:
        if self.gameover:
            raise GameOverError(format_message("_general.GAMEOVER"))
        self._require_head()
        if not 1 <= player <= self.numplayers:
            raise StateError(f"There is no player {player}")
        self.results = [ResignedResult(player=player)]
        self._declare_winners([p for p in range(1, self.numplayers + 1) if p != player])
        self.save_state()
        logger.info("%s: player %d resigned", self.gameinfo.uid, player)
        return self

    def random_move(self, rng: Optional[random.Random] = None) -> str:
        """A uniformly chosen legal move, or ``""`` when there is none."""
        moves = self.moves()
        if not moves:
            return ""
        return (rng or random.Random()).choice(moves)

    def handle_click(
        self, move: str, row: int, col: int, piece: Optional[str] = None
    ) -> ClickResult:
        """Extend ``move`` with a click at ``(row, col)``. Never raises."""
        try:
            return self._click(move, row, col, piece)
        except Exception as e:
            logger.info("Could not process click at (%s, %s) on %r: %s", row, col, move, e)
            return ClickResult(
                move=move,
                valid=False,
                message=format_message(
                    "_general.GENERIC", move=move, row=row, col=col, emessage=str(e)
                ),
            )

    def _click_verdict(self, newmove: str, fallback: str) -> ClickResult:
        verdict = self.validate_move(newmove)
        return ClickResult(
            **verdict.model_dump(),
            move=newmove if verdict.valid else fallback,
        )

    # ------------------------------------------------------------------
    # Scores
    # ------------------------------------------------------------------

    def get_player_score(self, player: int) -> float:
        raise NotImplementedError(f"{self.gameinfo.name} does not keep scores")

    def get_players_scores(self) -> list[PlayerScores]:
        return [
            PlayerScores(
                name="Scores",
                scores=[self.get_player_score(p) for p in range(1, self.numplayers + 1)],
            )
        ]

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def state(self) -> GameRecord:
        return self.record_model(
            game=self.gameinfo.uid,
            numplayers=self.numplayers,
            variants=list(self.variants),
            gameover=self.gameover,
            winner=list(self.winner),
            stack=list(self.stack),
        )

    def serialize(self) -> str:
        return serialization.encode(self.state())

    def fingerprint(self) -> str:
        return serialization.fingerprint(self.state())

    def clone(self) -> GameBase:
        return type(self)(self.serialize())

    def move_history(self) -> list[list[str]]:
        """Moves grouped into rounds of one move per player."""
        history: list[list[str]] = []
        current: list[str] = []
        for snapshot in self.stack[1:]:
            if snapshot.lastmove is None:
                continue
            current.append(snapshot.lastmove)
            if len(current) == self.numplayers:
                history.append(current)
                current = []
        if current:
            history.append(current)
        return history

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(ply={self._view}, currplayer={self.currplayer}, "
            f"gameover={self.gameover})"
        )
