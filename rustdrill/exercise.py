"""Exercise definitions, compilation and completion state."""

from __future__ import annotations

import enum
import os
import re
import subprocess
import threading
import tomllib
import weakref
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

RUSTC_COLOR_ARGS = ("--color", "always")
RUSTC_EDITION_ARGS = ("--edition", "2021")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/clippy/Cargo.toml"


def _temp_file() -> str:
    return f"./temp_{os.getpid()}_{threading.get_ident()}"


def _remove(path: str) -> None:
    try:
        Path(path).unlink(missing_ok=True)
    except OSError:
        pass


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _capture(args: list[str], failure: str) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(args, capture_output=True)
    except OSError as err:
        raise RuntimeError(failure) from err


def _lines(source: str) -> list[str]:
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


class Mode(enum.Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass(frozen=True)
class ContextLine:
    """A source line shown around the pending marker."""

    line: str
    number: int
    important: bool


@dataclass(frozen=True)
class ExerciseOutput:
    """Captured output of a compiler or an exercise binary."""

    stdout: str
    stderr: str


class CompileError(Exception):
    """The exercise failed to compile."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__(output.stderr)
        self.output = output


class RunError(Exception):
    """The compiled exercise exited unsuccessfully."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__(output.stderr)
        self.output = output


class CompiledExercise:
    """A compiled exercise binary, removed when closed."""

    def __init__(self, exercise: Exercise, binary: str) -> None:
        self.exercise = exercise
        self.binary = binary
        self._finalizer = weakref.finalize(self, _remove, binary)

    def run(self) -> ExerciseOutput:
        """Run the binary; raise RunError if it fails."""
        return self.exercise._run(self.binary)

    def close(self) -> None:
        """Delete the compiled binary."""
        self._finalizer()

    def __enter__(self) -> CompiledExercise:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class Exercise:
    """One exercise as listed in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Exercise:
        try:
            return cls(
                name=str(data["name"]),
                path=Path(data["path"]),
                mode=Mode(data["mode"]),
                hint=str(data["hint"]),
            )
        except KeyError as err:
            raise ValueError(f"exercise entry is missing {err.args[0]!r}") from err

    def __str__(self) -> str:
        return str(self.path)

    def _write_clippy_manifest(self) -> None:
        manifest = (
            "[package]\n"
            f'name = "{self.name}"\n'
            'version = "0.0.1"\n'
            'edition = "2021"\n'
            "[[bin]]\n"
            f'name = "{self.name}"\n'
            f'path = "{self.name}.rs"'
        )
        if "NO_EMOJI" in os.environ:
            failure = "Failed to write Clippy Cargo.toml file."
        else:
            failure = "Failed to write 📎 Clippy 📎 Cargo.toml file."
        try:
            Path(CLIPPY_CARGO_TOML_PATH).write_text(manifest, encoding="utf-8")
        except OSError as err:
            raise RuntimeError(failure) from err

    def _invoke_compiler(self, binary: str) -> subprocess.CompletedProcess:
        source = str(self.path)
        rustc_flags = [*RUSTC_COLOR_ARGS, *RUSTC_EDITION_ARGS]
        failure = "Failed to run 'compile' command."
        match self.mode:
            case Mode.COMPILE:
                return _capture(["rustc", source, "-o", binary, *rustc_flags], failure)
            case Mode.TEST:
                return _capture(
                    ["rustc", "--test", source, "-o", binary, *rustc_flags], failure
                )
            case Mode.CLIPPY:
                self._write_clippy_manifest()
                # Build a binary too so clippy exercises can be run afterwards.
                _capture(
                    ["rustc", source, "-o", binary, *rustc_flags], "Failed to compile!"
                )
                # A clean is needed for clippy to report every lint.
                _capture(
                    ["cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH,
                     *RUSTC_COLOR_ARGS],
                    "Failed to run 'cargo clean'",
                )
                return _capture(
                    ["cargo", "clippy", "--manifest-path", CLIPPY_CARGO_TOML_PATH,
                     *RUSTC_COLOR_ARGS,
                     "--", "-D", "warnings", "-D", "clippy::float_cmp"],
                    failure,
                )
        raise ValueError(f"unknown mode {self.mode!r}")

    def compile(self) -> CompiledExercise:
        """Compile the exercise; raise CompileError on failure."""
        binary = _temp_file()
        result = self._invoke_compiler(binary)
        if result.returncode == 0:
            return CompiledExercise(self, binary)
        _remove(binary)
        raise CompileError(ExerciseOutput(_decode(result.stdout), _decode(result.stderr)))

    def _run(self, binary: str) -> ExerciseOutput:
        args = [binary]
        if self.mode is Mode.TEST:
            args.append("--show-output")
        result = _capture(args, "Failed to run 'run' command")
        output = ExerciseOutput(_decode(result.stdout), _decode(result.stderr))
        if result.returncode != 0:
            raise RunError(output)
        return output

    def pending_context(self) -> list[ContextLine] | None:
        """Lines around the "I AM NOT DONE" marker, or None when done."""
        source = self.path.read_text(encoding="utf-8")
        if not I_AM_DONE_REGEX.search(source):
            return None
        lines = _lines(source)
        matched = next(
            (i for i, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)), None
        )
        if matched is None:
            raise RuntimeError("pending marker spans several lines")
        start = max(matched - CONTEXT, 0)
        return [
            ContextLine(line=line, number=i + 1, important=i == matched)
            for i, line in enumerate(lines[start:matched + CONTEXT + 1], start)
        ]

    def looks_done(self) -> bool:
        """True when the source no longer carries the pending marker."""
        return self.pending_context() is None


def load_exercises(path: str | os.PathLike[str] = "info.toml") -> list[Exercise]:
    """Read the exercise list from an info.toml file."""
    with open(path, "rb") as handle:
        data = tomllib.load(handle)
    return [Exercise.from_dict(entry) for entry in data.get("exercises", [])]