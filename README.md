# rustdrill

A command-line runner for small Rust exercises. It compiles, tests or lints
each exercise with the Rust toolchain, tells you what went wrong, and keeps
track of which exercises you have finished.

Each exercise is a single `.rs` file with a deliberate problem in it: a
compile error, a failing test or a lint that Clippy rejects. Fix it, and when
you are happy with the result, remove the `// I AM NOT DONE` comment to move
on to the next exercise. An exercise counts as done as soon as that marker is
gone from its file.

## Requirements

- Python 3.11 or later
- A Rust toolchain with `rustc` on your `PATH` (and `cargo` with Clippy for
  the Clippy exercises)
- `git`, if you want to reset an exercise

## Installation

```
pip install rustdrill
```

## Usage

Run the tool from a directory that holds `info.toml` and an `exercises/`
folder. Anywhere else, and when `rustc --version` cannot be run, it prints a
message and exits with status 1 (only `-v` works everywhere).

```
rustdrill                 # welcome text and an introduction
rustdrill watch           # verify in order, re-checking whenever a file changes
rustdrill verify          # verify every exercise in the listed order
rustdrill run NAME        # compile and run (or test) a single exercise
rustdrill run next        # run the first exercise that is not done yet
rustdrill hint NAME       # print the hint for an exercise
rustdrill reset NAME      # discard your changes to an exercise (git stash)
rustdrill list            # table of exercises with their status
rustdrill lsp             # write rust-project.json for rust-analyzer
rustdrill -v              # print the version
```

`--nocapture` before the subcommand shows the output of test exercises:

```
rustdrill --nocapture run tests1
```

`run`, `verify`, `hint` and `reset` exit with status 1 when the exercise is
unknown or does not pass; usage errors, such as a missing exercise name, also
exit with status 1.

### How exercises are checked

- `compile`: built with `rustc --edition 2021`, then the binary is run.
- `test`: built with `rustc --test`, then the test harness is run with
  `--show-output`.
- `clippy`: `exercises/clippy/Cargo.toml` is written for the exercise, then
  `cargo clean` and `cargo clippy -- -D warnings -D clippy::float_cmp` are run.

Compiled binaries are written as `./temp_<pid>_<thread>` and deleted once the
exercise has run.

### Watch mode

`rustdrill watch` stops at the first exercise that fails or is still marked
as not done, and waits for `.rs` files below `./exercises` to be created or
modified. It then re-checks the changed exercise first, followed by the
remaining pending ones. While it runs you can type:

| command  | effect                                        |
|----------|-----------------------------------------------|
| `hint`   | print the current exercise's hint             |
| `clear`  | clear the screen                              |
| `quit`   | leave watch mode                              |
| `!<cmd>` | run a command, e.g. `!rustc --explain E0381`  |
| `help`   | show the list of commands                     |

`rustdrill watch --success-hints` also prints each exercise's hint once it
compiles.

### Listing exercises

```
rustdrill list --paths            # only paths
rustdrill list --names            # only names
rustdrill list --filter iter,str  # names or paths containing any pattern
rustdrill list --unsolved         # only pending exercises
rustdrill list --solved           # only finished exercises
```

The list ends with a progress line such as
`Progress: You completed 12 / 80 exercises (15.0 %).`

### rust-analyzer

`rustdrill lsp` writes `rust-project.json` with one crate per `.rs` file
below `exercises/`. The standard library sources are taken from
`RUST_SRC_PATH` if it is set, and otherwise found through
`rustc --print sysroot`.

### Environment

Set `NO_EMOJI` to any value to print plain symbols instead of emoji.

## The exercise list

`info.toml` lists the exercises in order. Every entry has a `name`, a `path`,
a `mode` (`compile`, `test` or `clippy`) and a `hint`:

```toml
[[exercises]]
name = "intro1"
path = "exercises/intro/intro1.rs"
mode = "compile"
hint = "No hints this time ;)"
```

## What the package does not include

The package is the runner only. It does not ship any exercise files or an
`info.toml`; you need a directory that provides them.

## Using the package from Python

The runner is also usable as a library:

```python
from rustdrill.exercise import load_exercises
from rustdrill.verify import ExerciseFailed, verify

exercises = load_exercises("info.toml")
pending = [e.name for e in exercises if not e.looks_done()]

try:
    verify(exercises, (0, len(exercises)), verbose=False, success_hints=False)
except ExerciseFailed as failure:
    print("stuck on", failure.exercise.name)
```

- `rustdrill.exercise`: `Exercise`, `Mode`, `load_exercises`, and
  `Exercise.compile()`, which returns a `CompiledExercise` (a context manager
  whose `run()` raises `RunError` on failure) or raises `CompileError`.
- `rustdrill.verify`: `verify`, `test` and `completion_report`.
- `rustdrill.run`: `run` and `reset`.
- `rustdrill.watch`: `watch`, `WatchShell` and `WatchStatus`.
- `rustdrill.project`: `RustAnalyzerProject` and `Crate`.
- `rustdrill.cli`: `main`, `find_exercise`, `list_lines` and `rustc_exists`.

The `rustdrill.drills` package holds reference solutions to several of the
exercises written as ordinary Python: `conversions`, `errors`, `iterators`,
`baskets`, `quizzes` and `basics`.