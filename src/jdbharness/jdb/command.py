"""jdb command lines and the reply expectations attached to them."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass(frozen=True)
class JdbCommand:
    """A command line for jdb plus how its reply should be awaited.

    Attributes:
        cmd: Text sent to jdb stdin (without line separator).
        allow_simple_prompt: Accept the bare ``"> "`` prompt as the end of
            the reply. jdb prints it before the debuggee VM is started and
            while the debuggee is running.
        allow_exit: Tolerate jdb exiting while the reply is awaited.
    """

    cmd: str
    allow_simple_prompt: bool = False
    allow_exit: bool = False

    def exit_allowed(self) -> JdbCommand:
        return dataclasses.replace(self, allow_exit=True)

    def reply_is_simple_prompt(self) -> JdbCommand:
        return dataclasses.replace(self, allow_simple_prompt=True)

    def __str__(self) -> str:
        return self.cmd

    # ------------------------------------------------------------------
    # VM lifecycle
    # ------------------------------------------------------------------

    @classmethod
    def run(cls, *args: str) -> JdbCommand:
        return cls(" ".join(("run", *args))).reply_is_simple_prompt()

    @classmethod
    def cont(cls) -> JdbCommand:
        return cls("cont")

    @classmethod
    def quit(cls) -> JdbCommand:
        return cls("quit").exit_allowed()

    # ------------------------------------------------------------------
    # Breakpoints and exceptions
    # ------------------------------------------------------------------

    @classmethod
    def stop_at(cls, target_class: str, line: int) -> JdbCommand:
        return cls(f"stop at {target_class}:{line}").reply_is_simple_prompt()

    @classmethod
    def stop_in(cls, target_class: str, method: str) -> JdbCommand:
        return cls(f"stop in {target_class}.{method}").reply_is_simple_prompt()

    @classmethod
    def clear(cls, location: str = "") -> JdbCommand:
        return cls(f"clear {location}".rstrip())

    @classmethod
    def catch(cls, exception_class: str, caught: bool = True, uncaught: bool = True) -> JdbCommand:
        return cls(
            f"catch {_exception_mode(caught, uncaught)}{exception_class}"
        ).reply_is_simple_prompt()

    @classmethod
    def ignore(cls, exception_class: str, caught: bool = True, uncaught: bool = True) -> JdbCommand:
        return cls(f"ignore {_exception_mode(caught, uncaught)}{exception_class}")

    @classmethod
    def watch(cls, target_class: str, field: str, access: bool = False) -> JdbCommand:
        kind = "access " if access else ""
        return cls(f"watch {kind}{target_class}.{field}")

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    @classmethod
    def step(cls) -> JdbCommand:
        return cls("step")

    @classmethod
    def step_up(cls) -> JdbCommand:
        return cls("step up")

    @classmethod
    def next(cls) -> JdbCommand:
        return cls("next")

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @classmethod
    def where(cls, thread_id: str = "") -> JdbCommand:
        return cls(f"where {thread_id}".rstrip())

    @classmethod
    def threads(cls) -> JdbCommand:
        return cls("threads")

    @classmethod
    def thread(cls, thread_id: int) -> JdbCommand:
        return cls(f"thread {thread_id}")

    @classmethod
    def locals(cls) -> JdbCommand:
        return cls("locals")

    @classmethod
    def print_(cls, expression: str) -> JdbCommand:
        return cls(f"print {expression}")

    @classmethod
    def dump(cls, expression: str) -> JdbCommand:
        return cls(f"dump {expression}")

    @classmethod
    def eval_(cls, expression: str) -> JdbCommand:
        return cls(f"eval {expression}")

    @classmethod
    def set_(cls, lhs: str, expression: str) -> JdbCommand:
        return cls(f"set {lhs} = {expression}")

    @classmethod
    def methods(cls, target_class: str) -> JdbCommand:
        return cls(f"methods {target_class}")

    @classmethod
    def fields(cls, target_class: str) -> JdbCommand:
        return cls(f"fields {target_class}")

    @classmethod
    def trace_methods(cls, thread_id: str = "") -> JdbCommand:
        return cls(f"trace methods {thread_id}".rstrip())


def _exception_mode(caught: bool, uncaught: bool) -> str:
    if caught and uncaught:
        return ""
    if caught:
        return "caught "
    if uncaught:
        return "uncaught "
    raise ValueError("at least one of caught/uncaught must be set")
