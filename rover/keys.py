"""Key routing: decoded key tokens to the browser's closed command set."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from .input import read_key
from .terminal import terminal_size


class Mode(enum.Enum):
    FLOW = "Flow"
    COMMAND = "Command"

    def toggled(self) -> Mode:
        return Mode.COMMAND if self is Mode.FLOW else Mode.FLOW


class Command(enum.Enum):
    MOVE_UP = "move-up"
    MOVE_DOWN = "move-down"
    ACTIVATE = "activate"
    ASCEND = "ascend"
    TOGGLE_MODE = "toggle-mode"
    QUIT = "quit"
    RESIZE = "resize"


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a command.

    ``modes`` restricts the binding to the listed modes; empty means all.
    """

    combos: tuple[str, ...]
    command: Command
    modes: frozenset[Mode] = frozenset()


def strip_mouse_coordinates(key: str) -> str:
    """``MOUSE_WHEEL_UP:12:3`` -> ``MOUSE_WHEEL_UP``; other keys unchanged."""
    if key.startswith("MOUSE_"):
        return key.split(":", 1)[0]
    return key


class KeyRegistry:
    """Small key-dispatch table with a key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else strip_mouse_coordinates
        self._bindings: dict[str, list[KeyBinding]] = {}

    def register(self, *bindings: KeyBinding) -> KeyRegistry:
        for binding in bindings:
            for combo in binding.combos:
                self._bindings.setdefault(self._normalize(combo), []).append(binding)
        return self

    def route(self, key: str, mode: Mode) -> Command | None:
        for binding in self._bindings.get(self._normalize(key), ()):
            if not binding.modes or mode in binding.modes:
                return binding.command
        return None


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("j", "J", "DOWN", "MOUSE_WHEEL_DOWN"), Command.MOVE_DOWN),
    KeyBinding(("k", "K", "UP", "MOUSE_WHEEL_UP"), Command.MOVE_UP),
    KeyBinding(("ENTER_CR", "ENTER_LF", "CTRL_K"), Command.ACTIVATE),
    KeyBinding(("ESC",), Command.ASCEND),
    KeyBinding(("CTRL_Q",), Command.QUIT),
    KeyBinding(("CTRL_T",), Command.TOGGLE_MODE),
    KeyBinding(("CTRL_C",), Command.TOGGLE_MODE, frozenset({Mode.FLOW})),
    KeyBinding(("CTRL_F",), Command.TOGGLE_MODE, frozenset({Mode.COMMAND})),
)


def default_registry() -> KeyRegistry:
    return KeyRegistry().register(*DEFAULT_BINDINGS)


def route_key(key: str, mode: Mode) -> Command | None:
    return _DEFAULT_REGISTRY.route(key, mode)


_DEFAULT_REGISTRY = default_registry()


@dataclass(frozen=True)
class InputEvent:
    command: Command
    size: tuple[int, int] | None = None


class InputRouter:
    """Blocks for the next routed command; the loop's only suspension point.

    Wakes every ``poll_ms`` to compare the terminal size, so a resize shows
    up as a ``RESIZE`` event even while no key is pressed.
    """

    def __init__(
        self,
        stdin_fd: int,
        *,
        poll_ms: int = 120,
        registry: KeyRegistry | None = None,
        read: Callable[..., str] = read_key,
        size: Callable[[], tuple[int, int]] = terminal_size,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.poll_ms = poll_ms
        self.registry = registry if registry is not None else _DEFAULT_REGISTRY
        self._read = read
        self._size = size
        self.last_size = size()
        self._skip_next_lf = False

    def next_event(self, mode: Mode) -> InputEvent:
        while True:
            current_size = self._size()
            if current_size != self.last_size:
                self.last_size = current_size
                return InputEvent(Command.RESIZE, size=current_size)

            key = self._read(self.stdin_fd, timeout_ms=self.poll_ms)
            if key == "":
                continue
            # Terminals may send CR LF for one Enter press.
            if self._skip_next_lf and key == "ENTER_LF":
                self._skip_next_lf = False
                continue
            self._skip_next_lf = key == "ENTER_CR"

            command = self.registry.route(key, mode)
            if command is not None:
                return InputEvent(command)


__all__ = [
    "Mode",
    "Command",
    "KeyBinding",
    "KeyRegistry",
    "DEFAULT_BINDINGS",
    "default_registry",
    "route_key",
    "InputEvent",
    "InputRouter",
]
