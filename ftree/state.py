from __future__ import annotations

from dataclasses import dataclass, field

from .tree import TreeSnapshot


@dataclass(frozen=True)
class OperationBuffer:
    """Pending operation as shown in the operation bar.

    ``label`` is the operation's display text (for example ``"move"``) and
    ``takes_input`` marks operations that read a name from the input buffer.
    """

    label: str = ""
    takes_input: bool = False

    def repr(self) -> str:
        return self.label

    def is_input(self) -> bool:
        return self.takes_input


@dataclass
class ViewState:
    """Read-only controller snapshot handed to the renderer each frame."""

    tree: TreeSnapshot
    operation: OperationBuffer = field(default_factory=OperationBuffer)
    input_text: str = ""
    error_text: str = ""
    help_visible: bool = False
