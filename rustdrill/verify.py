"""Checking exercises in order and reporting their progress."""

from __future__ import annotations

import os
from typing import Iterable

from rich.console import Console
from rich.status import Status
from rich.text import Text

from .exercise import (
    CompiledExercise,
    CompileError,
    Exercise,
    ExerciseOutput,
    Mode,
    RunError,
)
from .ui import success, warn

BAR_WIDTH = 60
SEPARATOR = "===================="


class ExerciseFailed(Exception):
    """An exercise did not compile, run, pass its tests or is still pending."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(f"{exercise} did not pass")
        self.exercise = exercise


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def _spinner(message: str) -> Status:
    return Console(stderr=True).status(message)


def _progress_line(position: int, total: int, percentage: float) -> Text:
    filled = min(position, total) * BAR_WIDTH // total if total > 0 else BAR_WIDTH
    head = ">" if filled < BAR_WIDTH else ""
    empty = BAR_WIDTH - filled - len(head)
    return Text.assemble(
        "Progress: [",
        ("#" * filled, "green"),
        (head + "-" * empty, "red"),
        f"] {position}/{total} ({percentage:.1f} %)",
    )


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int],
    verbose: bool = False,
    success_hints: bool = False,
) -> None:
    """Check each exercise in turn; raise ExerciseFailed at the first one that fails."""
    done, total = progress
    percentage = done / total * 100.0 if total else 100.0
    console = _console()
    console.print(_progress_line(done, total, percentage))
    for exercise in exercises:
        match exercise.mode:
            case Mode.TEST:
                passed = _compile_and_test(exercise, True, verbose, success_hints)
            case Mode.COMPILE:
                passed = _compile_and_run_interactively(exercise, success_hints)
            case Mode.CLIPPY:
                passed = _compile_only(exercise, success_hints)
            case _:
                raise ValueError(f"unknown mode {exercise.mode!r}")
        if not passed:
            raise ExerciseFailed(exercise)
        if total:
            percentage += 100.0 / total
        done += 1
        console.print(_progress_line(done, total, percentage))


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run an exercise's test harness without asking for completion."""
    _compile_and_test(exercise, False, verbose, False)


def _compile(exercise: Exercise, message: str) -> CompiledExercise:
    with _spinner(message):
        try:
            return exercise.compile()
        except CompileError as err:
            output = err.output
    warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
    print(output.stderr)
    raise ExerciseFailed(exercise)


def _run(compiled: CompiledExercise, message: str) -> tuple[ExerciseOutput, bool]:
    with _spinner(message):
        try:
            return compiled.run(), True
        except RunError as err:
            return err.output, False


def _compile_only(exercise: Exercise, success_hints: bool) -> bool:
    _compile(exercise, f"Compiling {exercise}...").close()
    return completion_report(exercise, None, success_hints)


def _compile_and_run_interactively(exercise: Exercise, success_hints: bool) -> bool:
    with _compile(exercise, f"Compiling {exercise}...") as compiled:
        output, ok = _run(compiled, f"Running {exercise}...")
    if not ok:
        warn(f"Ran {exercise} with errors")
        print(output.stdout)
        print(output.stderr)
        raise ExerciseFailed(exercise)
    return completion_report(exercise, output.stdout, success_hints)


def _compile_and_test(
    exercise: Exercise, interactive: bool, verbose: bool, success_hints: bool
) -> bool:
    message = f"Testing {exercise}..."
    with _compile(exercise, message) as compiled:
        output, ok = _run(compiled, message)
    if not ok:
        warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
        print(output.stdout)
        raise ExerciseFailed(exercise)
    if verbose:
        print(output.stdout)
    if interactive:
        return completion_report(exercise, None, success_hints)
    return True


def completion_report(
    exercise: Exercise, output: str | None = None, success_hints: bool = False
) -> bool:
    """Return True if the exercise is done; otherwise print how to finish it and return False."""
    context = exercise.pending_context()
    if context is None:
        return True

    verb = {Mode.COMPILE: "ran", Mode.TEST: "tested", Mode.CLIPPY: "compiled"}[exercise.mode]
    success(f"Successfully {verb} {exercise}!")

    no_emoji = "NO_EMOJI" in os.environ
    if no_emoji:
        clippy_message = "The code is compiling, and Clippy is happy!"
    else:
        clippy_message = "The code is compiling, and 📎 Clippy 📎 is happy!"
    message = {
        Mode.COMPILE: "The code is compiling!",
        Mode.TEST: "The code is compiling, and the tests pass!",
        Mode.CLIPPY: clippy_message,
    }[exercise.mode]

    console = _console()
    separator = Text(SEPARATOR, style="bold")
    print()
    print(f"~*~ {message} ~*~" if no_emoji else f"🎉 🎉  {message} 🎉 🎉")
    print()

    if output is not None:
        print("Output:")
        console.print(separator)
        print(output)
        console.print(separator)
        print()
    if success_hints:
        print("Hints:")
        console.print(separator)
        print(exercise.hint)
        console.print(separator)
        print()

    print("You can keep working on this exercise,")
    console.print(
        Text.assemble(
            "or jump into the next one by removing the ",
            ("`I AM NOT DONE`", "bold"),
            " comment:",
        )
    )
    print()
    for context_line in context:
        console.print(
            Text.assemble(
                (f"{context_line.number:>2}", "bold blue"),
                " ",
                ("|", "blue"),
                "  ",
                Text(context_line.line, style="bold" if context_line.important else ""),
            )
        )
    return False