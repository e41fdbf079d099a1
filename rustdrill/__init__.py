"""Runner for small Rust exercises: compiles, tests and lints them and tracks progress."""

__version__ = "5.5.1"