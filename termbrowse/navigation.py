"""Browser navigation state and the command interpreter that mutates it.

``Navigator.apply`` is the single entry point: it receives decoded commands,
never raw bytes, and talks to the filesystem only through the listing and
file-operation providers it was built with.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .ansi import printable_name
from .fs import PARENT_MARKER, FileOperationsProvider, ListingProvider
from .input import Command

logger = logging.getLogger(__name__)

ROOT = Path(".")


class DirectoryStack:
    """Path segments descended into from a fixed root."""

    def __init__(self, root: Path = ROOT, segments: list[str] | None = None) -> None:
        self.root = root
        self.segments: list[str] = list(segments or [])

    def __len__(self) -> int:
        return len(self.segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectoryStack):
            return NotImplemented
        return self.root == other.root and self.segments == other.segments

    def __repr__(self) -> str:
        return f"DirectoryStack({self.root!r}, {self.segments!r})"

    def push(self, name: str) -> None:
        self.segments.append(name)

    def pop(self) -> str | None:
        if not self.segments:
            return None
        return self.segments.pop()

    def copy(self) -> DirectoryStack:
        return DirectoryStack(self.root, self.segments)

    def resolve(self) -> Path:
        """Return the filesystem path for the current stack."""
        return self.root.joinpath(*self.segments)

    def join(self, name: str) -> Path:
        return self.resolve() / name

    def display(self) -> str:
        """Return the path shown in the header: ``./`` at the root, else ``./a/b``."""
        root = str(self.root)
        if not self.segments:
            return root + os.sep
        return os.path.join(root, *(printable_name(segment) for segment in self.segments))


@dataclass(frozen=True)
class StatusMessage:
    """Transient inline message shown until the next command."""

    text: str
    is_error: bool = False


@dataclass
class MovePicker:
    """Directory-only chooser for a move destination."""

    name: str
    source: DirectoryStack
    stack: DirectoryStack
    entries: list[str] = field(default_factory=list)
    selection: int = 0

    @property
    def in_source_directory(self) -> bool:
        return self.stack == self.source


@dataclass
class BrowserState:
    stack: DirectoryStack = field(default_factory=DirectoryStack)
    listing: list[str] = field(default_factory=list)
    selection: int = 0
    status: StatusMessage | None = None
    picker: MovePicker | None = None

    def selected_name(self) -> str | None:
        if not self.listing:
            return None
        return self.listing[self.selection]


def clamp_selection(selection: int, count: int) -> int:
    """Clamp ``selection`` into ``[0, max(1, count) - 1]``."""
    return max(0, min(selection, max(1, count) - 1))


def validate_entry_name(name: str) -> str | None:
    """Return why ``name`` cannot be used as a new entry name, or ``None``."""
    if name in {".", ".."}:
        return f"'{name}' is not a valid name"
    separators = [sep for sep in (os.sep, os.altsep, "/") if sep]
    if any(sep in name for sep in separators):
        return "names cannot contain path separators"
    if "\x00" in name:
        return "names cannot contain NUL characters"
    return None


class Navigator:
    """Apply logical commands to browser state.

    ``prompt_line`` asks the user for one line of text and returns it, or
    ``None`` when the prompt was cancelled. The runtime supplies a version
    that suspends raw mode around a canonical read.
    """

    def __init__(
        self,
        lister: ListingProvider,
        file_ops: FileOperationsProvider,
        *,
        root: Path = ROOT,
        prompt_line: Callable[[str], str | None] | None = None,
    ) -> None:
        self.lister = lister
        self.file_ops = file_ops
        self.prompt_line = prompt_line
        self.state = BrowserState(stack=DirectoryStack(root))
        self._browse_handlers: dict[Command, Callable[[], bool]] = {
            Command.MOVE_UP: self.move_up,
            Command.MOVE_DOWN: self.move_down,
            Command.OPEN: self.open_selected,
            Command.BACK: self.go_back,
            Command.RENAME: self.rename_selected,
            Command.MOVE: self.start_move,
            Command.QUIT: self.quit,
            Command.NOOP: self._noop,
        }
        self._picker_handlers: dict[Command, Callable[[], bool]] = {
            Command.MOVE_UP: lambda: self._move_picker_selection(-1),
            Command.MOVE_DOWN: lambda: self._move_picker_selection(1),
            Command.OPEN: self._picker_open,
            Command.BACK: self.cancel_move,
            Command.RENAME: self._noop,
            Command.MOVE: self.confirm_move,
            Command.QUIT: self.quit,
            Command.NOOP: self._noop,
        }
        self.refresh()

    @property
    def current_path(self) -> Path:
        return self.state.stack.resolve()

    def refresh(self) -> None:
        """Reload the listing for the current path and re-clamp the selection."""
        self.state.listing = self.lister.list(self.current_path)
        self.state.selection = clamp_selection(self.state.selection, len(self.state.listing))

    def apply(self, command: Command) -> bool:
        """Apply one command; return ``False`` when the session should end."""
        self.state.status = None
        if self.state.picker is not None:
            return self._picker_handlers[command]()
        return self._browse_handlers[command]()

    def _noop(self) -> bool:
        return True

    def move_up(self) -> bool:
        if self.state.selection > 0:
            self.state.selection -= 1
        return True

    def move_down(self) -> bool:
        if self.state.selection < len(self.state.listing) - 1:
            self.state.selection += 1
        return True

    def open_selected(self) -> bool:
        name = self.state.selected_name()
        if name is None:
            return True
        if not self.lister.is_directory(self.state.stack.join(name)):
            return True
        self.state.stack.push(name)
        self.state.selection = 0
        self.refresh()
        logger.debug("opened %s", self.current_path)
        return True

    def go_back(self) -> bool:
        if self.state.stack.pop() is None:
            return True
        self.state.selection = 0
        self.refresh()
        return True

    def quit(self) -> bool:
        return False

    def rename_selected(self) -> bool:
        old_name = self.state.selected_name()
        if old_name is None or self.prompt_line is None:
            return True

        reply = self.prompt_line(f"Rename '{printable_name(old_name)}' to: ")
        new_name = (reply or "").strip()
        if not new_name or new_name == old_name:
            return True

        problem = validate_entry_name(new_name)
        if problem is not None:
            self.state.status = StatusMessage(f"Rename failed: {problem}", is_error=True)
            return True

        result = self.file_ops.rename(self.state.stack.join(old_name), self.state.stack.join(new_name))
        if not result.ok:
            logger.info("rename of %s refused: %s", old_name, result.reason)
            self.state.status = StatusMessage(f"Rename failed: {result.reason}", is_error=True)
            return True

        self.refresh()
        self.state.status = StatusMessage(
            f"Renamed '{printable_name(old_name)}' to '{printable_name(new_name)}'"
        )
        return True

    def start_move(self) -> bool:
        name = self.state.selected_name()
        if name is None:
            return True
        picker = MovePicker(name=name, source=self.state.stack.copy(), stack=self.state.stack.copy())
        self.state.picker = picker
        self._reload_picker()
        return True

    def cancel_move(self) -> bool:
        self.state.picker = None
        return True

    def _reload_picker(self) -> None:
        picker = self.state.picker
        if picker is None:
            return
        exclude = picker.name if picker.in_source_directory else None
        picker.entries = self.lister.list_directories_only(picker.stack.resolve(), exclude=exclude)
        picker.selection = clamp_selection(picker.selection, len(picker.entries))

    def _move_picker_selection(self, delta: int) -> bool:
        picker = self.state.picker
        if picker is not None:
            picker.selection = clamp_selection(picker.selection + delta, len(picker.entries))
        return True

    def _picker_open(self) -> bool:
        picker = self.state.picker
        if picker is None or not picker.entries:
            return True
        target = picker.entries[picker.selection]
        if target == PARENT_MARKER:
            if picker.stack.pop() is None:
                return True
        elif self.lister.is_directory(picker.stack.join(target)):
            picker.stack.push(target)
        else:
            return True
        picker.selection = 0
        self._reload_picker()
        return True

    def confirm_move(self) -> bool:
        picker = self.state.picker
        if picker is None:
            return True
        if picker.in_source_directory:
            self.state.picker = None
            self.state.status = StatusMessage(f"'{printable_name(picker.name)}' is already in {picker.stack.display()}")
            return True

        result = self.file_ops.move(picker.source.join(picker.name), picker.stack.resolve())
        if not result.ok:
            logger.info("move of %s refused: %s", picker.name, result.reason)
            self.state.status = StatusMessage(f"Move failed: {result.reason}", is_error=True)
            return True

        self.state.picker = None
        self.refresh()
        self.state.status = StatusMessage(f"Moved '{printable_name(picker.name)}' to {picker.stack.display()}")
        return True
