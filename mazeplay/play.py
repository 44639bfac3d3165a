"""Play a maze in the terminal.

Commands (one per line):

    w a s d          move up, left, down, right (several letters move several times)
    j X Y            jump back to a cell you already visited
    path             toggle the visited path
    splits           toggle split-offs (visited cells with a choice of direction)
    stats            toggle live move and jump counts
    answer           replay the solution (after finishing)
    solution         toggle the solution overlay (after finishing)
    new              generate a new maze
    q                quit
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from typing import Iterable, Optional, Sequence, TextIO, Union

from .config import add_config_arguments, config_from_args
from .errors import InvalidConfiguration
from .navigator import Direction, NavigationStats, Navigator
from .render import DisplayOptions, render_text
from .session import MazeSession

MOVE_KEYS = set("wasd")
TOGGLES = {"path": "path", "splits": "splits", "stats": "stats", "solution": "answer"}


def format_stats(stats: NavigationStats) -> str:
    """Stats as strict JSON; an infinite accuracy is written as ``"infinite"``."""

    payload = stats.to_dict()
    accuracy = payload["accuracy_percent"]
    if accuracy is not None and math.isinf(accuracy):
        payload["accuracy_percent"] = "infinite"
    return json.dumps(payload, indent=2, allow_nan=False)


class TerminalGame:
    def __init__(self, session: MazeSession, out: TextIO = sys.stdout) -> None:
        self.session = session
        self.options = DisplayOptions()
        self.out = out
        if not session.ready:
            session.new_maze()

    @property
    def navigator(self) -> Navigator:
        return self.session.navigator

    def say(self, message: str) -> None:
        print(message, file=self.out)

    def draw(self) -> None:
        navigator = self.navigator
        answer = navigator.solution.path if self.options.show_answer else None
        self.say(
            render_text(
                navigator.grid,
                player=navigator.position,
                answer=answer,
                show_path=self.options.show_path,
                show_splits=self.options.show_splits,
            )
        )
        if self.options.show_stats:
            self.say(f"Moves: {navigator.move_count}  Jumps: {navigator.jump_count}")

    def run(self, lines: Iterable[str]) -> None:
        self.draw()
        for line in lines:
            if not self.handle(line):
                break
            self.draw()

    def handle(self, command: str) -> bool:
        """Apply one command line; returns ``False`` when the player quits."""

        words = command.split()
        if not words:
            return True
        head = words[0].lower()
        if head in ("q", "quit", "exit"):
            self.session.cancel_playback()
            return False
        if head in ("help", "?"):
            self.say(__doc__.strip())
        elif head in ("j", "jump"):
            self._jump(words[1:])
        elif head in TOGGLES:
            self._toggle(TOGGLES[head])
        elif head == "answer":
            self._replay()
        elif head == "new":
            self.session.new_maze()
            self.options.show_answer = False
            self.say("New maze generated!")
        elif set(head) <= MOVE_KEYS:
            for key in head:
                if not self._move(key):
                    break
        else:
            try:
                direction = Direction.from_key(head)
            except ValueError:
                self.say(f"Unknown command {head!r}; type 'help' for the list")
            else:
                self._move(direction)
        return True

    def _move(self, key: Union[Direction, str]) -> bool:
        transition = self.navigator.move(key)
        if not transition.accepted:
            self.say(transition.reason)
            return False
        if transition.finished:
            self.say("Congratulations! You have solved the maze!")
            self.say(format_stats(self.navigator.stats()))
            return False
        return True

    def _jump(self, args: Sequence[str]) -> None:
        try:
            x, y = (int(value) for value in args)
        except ValueError:
            self.say("Usage: j X Y")
            return
        transition = self.navigator.jump_to(x, y)
        if not transition.accepted:
            self.say(transition.reason)

    def _toggle(self, name: str) -> None:
        if name == "answer" and self.navigator.position is not None:
            self.say("Finish the maze first!")
            return
        state = self.options.toggle(name)
        self.say(f"{name}: {'on' if state else 'off'}")

    def _replay(self) -> None:
        if self.navigator.position is not None:
            self.say("Finish the maze first!")
            return
        playback = self.session.play_answer()
        shown = []
        for coord in playback.ticks():
            shown.append(coord)
            self.say(f"{coord[0]} {coord[1]}")
        self.say(render_text(self.navigator.grid, answer=shown))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solve a maze in the terminal with W/A/S/D")
    add_config_arguments(parser)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    try:
        args.config = config_from_args(args)
    except InvalidConfiguration as exc:
        parser.error(str(exc))
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    game = TerminalGame(MazeSession(args.config))
    try:
        game.run(sys.stdin)
    except KeyboardInterrupt:
        game.session.cancel_playback()


if __name__ == "__main__":
    main()
