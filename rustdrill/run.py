"""Running a single exercise and resetting it."""

from __future__ import annotations

import subprocess

from rich.console import Console
from rich.status import Status

from .exercise import CompileError, Exercise, Mode, RunError
from .ui import success, warn
from .verify import ExerciseFailed, test


def _spinner(message: str) -> Status:
    return Console(stderr=True).status(message)


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run one exercise; raise ExerciseFailed if it fails."""
    if exercise.mode is Mode.TEST:
        test(exercise, verbose)
    else:
        _compile_and_run(exercise)


def reset(exercise: Exercise) -> subprocess.Popen:
    """Start "git stash" on the exercise file and return the process."""
    return subprocess.Popen(["git", "stash", "--", str(exercise.path)])


def _compile_and_run(exercise: Exercise) -> None:
    with _spinner(f"Compiling {exercise}..."):
        try:
            compiled = exercise.compile()
        except CompileError as err:
            failure = err.output
        else:
            failure = None
    if failure is not None:
        warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
        print(failure.stderr)
        raise ExerciseFailed(exercise)

    with compiled, _spinner(f"Running {exercise}..."):
        try:
            output = compiled.run()
            ok = True
        except RunError as err:
            output = err.output
            ok = False

    print(output.stdout)
    if ok:
        success(f"Successfully ran {exercise}")
        return
    print(output.stderr)
    warn(f"Ran {exercise} with errors")
    raise ExerciseFailed(exercise)