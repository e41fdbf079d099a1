"""Watch mode: re-verify exercises whenever their files change."""

from __future__ import annotations

import enum
import itertools
import os
import queue
import subprocess
import sys
import threading
from pathlib import Path
from typing import IO, Iterable, Sequence

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .exercise import Exercise
from .verify import ExerciseFailed, verify

POLL_SECONDS = 1.0
DEBOUNCE_SECONDS = 1.0

RESET_TERMINAL = "\x1bc"

HELP_TEXT = """Commands available to you in watch mode:
  hint   - prints the current exercise's hint
  clear  - clears the screen
  quit   - quits watch mode
  !<cmd> - executes a command, like `!rustc --explain E0381`
  help   - displays this help message

Watch mode automatically re-evaluates the current exercise
when you edit a file's contents."""


class WatchStatus(enum.Enum):
    """How watch mode ended."""

    FINISHED = "finished"
    UNFINISHED = "unfinished"


class WatchShell:
    """Interactive commands read from standard input while watching."""

    def __init__(self, hint: str | None = None, stream: IO[str] | None = None) -> None:
        self.hint = hint
        self.should_quit = threading.Event()
        self._stream = stream

    def handle(self, line: str) -> None:
        """Carry out one command line."""
        command = line.strip()
        if command == "hint":
            if self.hint is not None:
                print(self.hint)
        elif command == "clear":
            print("\x1b[2J\x1b[1;1H")
        elif command == "quit":
            self.should_quit.set()
            print("Bye!")
        elif command == "help":
            print(HELP_TEXT)
        elif command.startswith("!"):
            self._execute(command[1:])
        else:
            print(f"unknown command: {command}")

    def _execute(self, cmd: str) -> None:
        parts = cmd.split()
        if not parts:
            print("no command provided")
            return
        try:
            subprocess.run(parts)
        except OSError as err:
            print(f"failed to execute command `{cmd}`: {err}")

    def _loop(self) -> None:
        stream = self._stream if self._stream is not None else sys.stdin
        while True:
            try:
                line = stream.readline()
            except (OSError, ValueError) as err:
                print(f"error reading command: {err}")
                return
            if not line:
                return
            self.handle(line)

    def start(self) -> threading.Thread:
        """Read commands on a background thread."""
        print(
            "Welcome to watch mode! You can type 'help' to get an overview "
            "of the commands you can use here."
        )
        thread = threading.Thread(target=self._loop, daemon=True)
        thread.start()
        return thread


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, changes: queue.Queue[Path]) -> None:
        super().__init__()
        self._changes = changes

    def _record(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._changes.put(Path(os.fsdecode(event.src_path)))

    def on_created(self, event: FileSystemEvent) -> None:
        self._record(event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._record(event)


def _clear_screen(stream: IO[str] | None = None) -> None:
    """Reset the terminal with an ANSI escape sequence."""
    out = stream if stream is not None else sys.stdout
    out.write(RESET_TERMINAL + "\n")
    out.flush()


def _ends_with(path: Path, suffix: str | os.PathLike[str]) -> bool:
    tail = [part for part in Path(suffix).parts if part != "."]
    return bool(tail) and list(path.parts[-len(tail):]) == tail


def _collect(changes: queue.Queue[Path]) -> list[Path]:
    try:
        first = changes.get(timeout=POLL_SECONDS)
    except queue.Empty:
        return []
    collected = [first]
    while True:
        try:
            collected.append(changes.get(timeout=DEBOUNCE_SECONDS))
        except queue.Empty:
            return list(dict.fromkeys(collected))


def _recheck(
    changed: Path,
    exercises: Sequence[Exercise],
    shell: WatchShell,
    verbose: bool,
    success_hints: bool,
) -> bool:
    if changed.suffix != ".rs" or not changed.exists():
        return False
    filepath = changed.resolve()
    current = next((e for e in exercises if _ends_with(filepath, e.path)), None)
    others = (
        e for e in exercises if not e.looks_done() and not _ends_with(filepath, e.path)
    )
    pending: Iterable[Exercise] = itertools.chain(
        [current] if current is not None else [], others
    )
    num_done = sum(1 for e in exercises if e.looks_done())
    _clear_screen()
    try:
        verify(pending, (num_done, len(exercises)), verbose, success_hints)
    except ExerciseFailed as failed:
        shell.hint = failed.exercise.hint
        return False
    return True


def watch(
    exercises: Sequence[Exercise], verbose: bool = False, success_hints: bool = False
) -> WatchStatus:
    """Verify all exercises, then re-verify on every change below ./exercises."""
    changes: queue.Queue[Path] = queue.Queue()
    observer = Observer()
    observer.schedule(_ChangeHandler(changes), "./exercises", recursive=True)
    observer.start()
    try:
        _clear_screen()
        try:
            verify(exercises, (0, len(exercises)), verbose, success_hints)
        except ExerciseFailed as failed:
            shell = WatchShell(failed.exercise.hint)
        else:
            return WatchStatus.FINISHED
        shell.start()
        while not shell.should_quit.is_set():
            for changed in _collect(changes):
                if _recheck(changed, exercises, shell, verbose, success_hints):
                    return WatchStatus.FINISHED
        return WatchStatus.UNFINISHED
    finally:
        observer.stop()
        observer.join()