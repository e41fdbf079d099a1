import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from rustdrill.exercise import (
    CompileError,
    ContextLine,
    Exercise,
    ExerciseOutput,
    Mode,
    RunError,
    load_exercises,
)

PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
FINISHED = "// fake_exercise\n\nfn main() {\n\n}\n"


def _done(returncode=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess([], returncode, stdout=stdout, stderr=stderr)


def _exercise(tmp_path, text, mode=Mode.COMPILE, name="pending_exercise"):
    path = tmp_path / f"{name}.rs"
    path.write_text(text)
    return Exercise(name=name, path=path, mode=mode, hint="")


def test_pending_state(tmp_path):
    exercise = _exercise(tmp_path, PENDING)
    assert exercise.pending_context() == [
        ContextLine("// fake_exercise", 1, False),
        ContextLine("", 2, False),
        ContextLine("// I AM NOT DONE", 3, True),
        ContextLine("", 4, False),
        ContextLine("fn main() {", 5, False),
    ]
    assert exercise.looks_done() is False


def test_finished_exercise(tmp_path):
    exercise = _exercise(tmp_path, FINISHED, name="finished_exercise")
    assert exercise.pending_context() is None
    assert exercise.looks_done() is True


def test_marker_on_first_line(tmp_path):
    exercise = _exercise(tmp_path, "// I AM NOT DONE\n\n#[test]\nfn it_works() {}\n")
    assert exercise.pending_context() == [
        ContextLine("// I AM NOT DONE", 1, True),
        ContextLine("", 2, False),
        ContextLine("#[test]", 3, False),
    ]


def test_indented_triple_slash_marker(tmp_path):
    exercise = _exercise(tmp_path, "fn x() {}\n    ///  I   AM NOT DONE\n")
    context = exercise.pending_context()
    assert [line.important for line in context] == [False, True]


def test_other_comment_is_done(tmp_path):
    assert _exercise(tmp_path, "// I AM DONE\nfn main() {}\n").looks_done()


def test_str_is_path():
    exercise = Exercise("x", Path("exercises/x.rs"), Mode.COMPILE, "")
    assert str(exercise) == str(Path("exercises/x.rs"))


def test_from_dict_and_invalid_mode():
    exercise = Exercise.from_dict(
        {"name": "intro1", "path": "exercises/intro/intro1.rs", "mode": "test", "hint": "h"}
    )
    assert exercise.mode is Mode.TEST
    assert exercise.path == Path("exercises/intro/intro1.rs")
    with pytest.raises(ValueError):
        Exercise.from_dict({"name": "a", "path": "a.rs", "mode": "bogus", "hint": ""})
    with pytest.raises(ValueError):
        Exercise.from_dict({"name": "a", "path": "a.rs", "mode": "test"})


def test_load_exercises(tmp_path):
    info = tmp_path / "info.toml"
    info.write_text(
        '[[exercises]]\nname = "compSuccess"\npath = "compSuccess.rs"\n'
        'mode = "compile"\nhint = ""\n\n'
        '[[exercises]]\nname = "testSuccess"\npath = "testSuccess.rs"\n'
        'mode = "test"\nhint = "Hello!"\n'
    )
    exercises = load_exercises(info)
    assert [e.name for e in exercises] == ["compSuccess", "testSuccess"]
    assert [e.mode for e in exercises] == [Mode.COMPILE, Mode.TEST]
    assert exercises[1].hint == "Hello!"


def test_compile_invokes_rustc(tmp_path):
    exercise = _exercise(tmp_path, FINISHED)
    with patch("rustdrill.exercise.subprocess.run", return_value=_done()) as run:
        compiled = exercise.compile()
    args = run.call_args.args[0]
    assert args[:2] == ["rustc", str(exercise.path)]
    assert args[args.index("-o") + 1] == compiled.binary
    assert "--edition" in args and "2021" in args
    compiled.close()


def test_test_mode_compiles_harness_and_runs_with_output(tmp_path):
    exercise = _exercise(tmp_path, FINISHED, mode=Mode.TEST)
    responses = [_done(), _done(stdout=b"THIS TEST TOO SHALL PASS\n")]
    with patch("rustdrill.exercise.subprocess.run", side_effect=responses) as run:
        with exercise.compile() as compiled:
            out = compiled.run()
    assert run.call_args_list[0].args[0][:2] == ["rustc", "--test"]
    assert run.call_args_list[1].args[0] == [compiled.binary, "--show-output"]
    assert "THIS TEST TOO SHALL PASS" in out.stdout


def test_compile_failure(tmp_path):
    exercise = _exercise(tmp_path, FINISHED)
    failing = _done(returncode=1, stderr=b"error[E0425]")
    with patch("rustdrill.exercise.subprocess.run", return_value=failing):
        with pytest.raises(CompileError) as info:
            exercise.compile()
    assert info.value.output == ExerciseOutput("", "error[E0425]")


def test_run_failure(tmp_path):
    exercise = _exercise(tmp_path, FINISHED)
    responses = [_done(), _done(returncode=101, stdout=b"out", stderr=b"panicked")]
    with patch("rustdrill.exercise.subprocess.run", side_effect=responses):
        with exercise.compile() as compiled:
            with pytest.raises(RunError) as info:
                compiled.run()
    assert info.value.output == ExerciseOutput("out", "panicked")


def test_close_removes_binary(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = _exercise(tmp_path, FINISHED)
    with patch("rustdrill.exercise.subprocess.run", return_value=_done()):
        compiled = exercise.compile()
    Path(compiled.binary).write_text("")
    compiled.close()
    assert not Path(compiled.binary).exists()


def test_missing_compiler(tmp_path):
    exercise = _exercise(tmp_path, FINISHED)
    with patch("rustdrill.exercise.subprocess.run", side_effect=FileNotFoundError):
        with pytest.raises(RuntimeError):
            exercise.compile()


def test_clippy_writes_manifest_and_runs_cargo(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "exercises" / "clippy").mkdir(parents=True)
    exercise = _exercise(tmp_path, FINISHED, mode=Mode.CLIPPY, name="clippy1")
    with patch("rustdrill.exercise.subprocess.run", return_value=_done()) as run:
        exercise.compile().close()
    manifest = (tmp_path / "exercises" / "clippy" / "Cargo.toml").read_text()
    assert 'name = "clippy1"' in manifest
    assert 'path = "clippy1.rs"' in manifest
    commands = [call.args[0][:2] for call in run.call_args_list]
    assert commands == [["rustc", str(exercise.path)], ["cargo", "clean"], ["cargo", "clippy"]]
    assert run.call_args_list[-1].args[0][-4:] == ["-D", "warnings", "-D", "clippy::float_cmp"]