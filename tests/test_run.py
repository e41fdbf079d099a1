import os
import sys
from pathlib import Path

import pytest

from rustdrill.exercise import Exercise, Mode
from rustdrill.run import reset, run
from rustdrill.verify import ExerciseFailed

FAKE_RUSTC_BODY = r'''
import os
import sys

args = sys.argv[1:]
out = args[args.index("-o") + 1]
source = next(arg for arg in args if arg.endswith(".rs"))
with open(source, encoding="utf-8") as handle:
    text = handle.read()
if "COMPILE_ERROR" in text:
    sys.stderr.write("error: expected expression\n")
    sys.exit(1)
code = 1 if "RUN_FAIL" in text else 0
with open(out, "w", encoding="utf-8") as handle:
    handle.write(
        "#!/bin/sh\necho 'THIS TEST TOO SHALL PASS'\necho 'program stderr' >&2\nexit %d\n" % code
    )
os.chmod(out, 0o755)
'''

FAKE_GIT_BODY = r'''
import sys

with open("git-args.txt", "w", encoding="utf-8") as handle:
    handle.write(" ".join(sys.argv[1:]))
'''

DONE = "fn main() {\n}\n"
PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
COMPILE_FAILURE = "fn main() {\n    let\n}\n// COMPILE_ERROR\n"
RUN_FAILURE = "fn main() {\n}\n// RUN_FAIL\n"


def install_tool(bindir: Path, name: str, body: str) -> None:
    tool = bindir / name
    tool.write_text("#!" + sys.executable + "\n" + body, encoding="utf-8")
    tool.chmod(0o755)


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    bindir = tmp_path / "bin"
    bindir.mkdir()
    install_tool(bindir, "rustc", FAKE_RUSTC_BODY)
    install_tool(bindir, "git", FAKE_GIT_BODY)
    monkeypatch.setenv("PATH", f"{bindir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv("NO_EMOJI", "1")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def make_exercise(root: Path, name: str, body: str, mode=Mode.COMPILE):
    path = root / f"{name}.rs"
    path.write_text(body, encoding="utf-8")
    return Exercise(name=name, path=path, mode=mode, hint="Hello!")


def test_run_compile_success(workspace, capsys):
    exercise = make_exercise(workspace, "compSuccess", DONE)
    assert run(exercise) is None
    out = capsys.readouterr().out
    assert "THIS TEST TOO SHALL PASS" in out
    assert f"Successfully ran {exercise}" in out
    assert not list(workspace.glob("temp_*"))


def test_run_compile_failure(workspace, capsys):
    exercise = make_exercise(workspace, "compFailure", COMPILE_FAILURE)
    with pytest.raises(ExerciseFailed) as info:
        run(exercise)
    assert info.value.exercise is exercise
    out = capsys.readouterr().out
    assert f"Compilation of {exercise} failed!" in out
    assert "error: expected expression" in out


def test_run_execution_failure(workspace, capsys):
    exercise = make_exercise(workspace, "runFailure", RUN_FAILURE)
    with pytest.raises(ExerciseFailed):
        run(exercise)
    out = capsys.readouterr().out
    assert "program stderr" in out
    assert f"Ran {exercise} with errors" in out
    assert not list(workspace.glob("temp_*"))


def test_run_compile_exercise_does_not_prompt(workspace, capsys):
    exercise = make_exercise(workspace, "pending_exercise", PENDING)
    run(exercise)
    assert "I AM NOT DONE" not in capsys.readouterr().out


def test_run_test_exercise_does_not_prompt(workspace, capsys):
    exercise = make_exercise(workspace, "pending_test_exercise", PENDING, Mode.TEST)
    run(exercise)
    assert "I AM NOT DONE" not in capsys.readouterr().out


def test_run_test_with_output(workspace, capsys):
    exercise = make_exercise(workspace, "testSuccess", DONE, Mode.TEST)
    run(exercise, verbose=True)
    assert "THIS TEST TOO SHALL PASS" in capsys.readouterr().out


def test_run_test_without_output(workspace, capsys):
    exercise = make_exercise(workspace, "testSuccess", DONE, Mode.TEST)
    run(exercise, verbose=False)
    assert "THIS TEST TOO SHALL PASS" not in capsys.readouterr().out


def test_run_test_not_passed(workspace, capsys):
    exercise = make_exercise(workspace, "testNotPassed", RUN_FAILURE, Mode.TEST)
    with pytest.raises(ExerciseFailed) as info:
        run(exercise)
    assert info.value.exercise is exercise


def test_run_clippy_mode_compiles_and_runs(workspace, capsys):
    exercise = make_exercise(workspace, "clippy1", DONE, Mode.CLIPPY)
    run(exercise)
    assert f"Successfully ran {exercise}" in capsys.readouterr().out


def test_reset_stashes_exercise(workspace):
    exercise = make_exercise(workspace, "intro1", DONE)
    process = reset(exercise)
    assert process.wait(timeout=30) == 0
    recorded = (workspace / "git-args.txt").read_text(encoding="utf-8")
    assert recorded == f"stash -- {exercise.path}"


def test_reset_without_git_raises(tmp_path, monkeypatch):
    empty = tmp_path / "empty"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    exercise = make_exercise(tmp_path, "intro1", DONE)
    with pytest.raises(OSError):
        reset(exercise)