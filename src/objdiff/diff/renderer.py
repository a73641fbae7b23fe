"""
Change set renderer.

Supports colored terminal output and JSON.
"""

import json
from io import StringIO
from typing import Any, Tuple

from ..core.value import UNDEFINED
from .changes import Change, ChangeSet, ChangeType

_TYPE_ORDER = {change_type: index for index, change_type in enumerate(ChangeType)}


class DiffRenderer:
    """
    Renders change sets in various formats.
    """

    def __init__(self, color: bool = True):
        """
        Initialize the renderer.

        Args:
            color: Whether to use colored output (terminal)
        """
        self.color = color

    def render_terminal(self, changes: ChangeSet) -> str:
        """
        Render a change set for terminal output.

        Args:
            changes: The ChangeSet to render

        Returns:
            Formatted string for terminal display
        """
        output = StringIO()

        output.write("=" * 60 + "\n")
        output.write("OBJECT DIFF REPORT\n")
        output.write("=" * 60 + "\n\n")

        if not changes:
            output.write("No changes.\n")
            return output.getvalue()

        summary = changes.summary()
        added = summary[ChangeType.OBJECT_ADD.value] + summary[ChangeType.ARRAY_ADD.value]
        removed = summary[ChangeType.OBJECT_REMOVE.value] + summary[ChangeType.ARRAY_REMOVE.value]
        modified = summary[ChangeType.OBJECT_MODIFY.value]

        output.write(f"Changes: {len(changes)} across {len(changes.paths())} field(s)\n")
        output.write(f"{self._color(f'+{added}', 'green')} added, ")
        output.write(f"{self._color(f'-{removed}', 'red')} removed, ")
        output.write(f"{self._color(f'~{modified}', 'yellow')} modified\n\n")

        output.write("-" * 40 + "\n")
        output.write("DETAILED CHANGES\n")
        output.write("-" * 40 + "\n")

        for change in sorted(changes, key=self._sort_key):
            output.write(self.render_change(change) + "\n")

        output.write("=" * 60 + "\n")

        return output.getvalue()

    def render_change(self, change: Change) -> str:
        """Render a single change as one line."""
        path = change.dotted_path
        change_type = change.change_type

        if change_type == ChangeType.OBJECT_ADD:
            return f"{self._color('+', 'green')} {path}: {self._format(change.curr)}"
        if change_type == ChangeType.OBJECT_REMOVE:
            return f"{self._color('-', 'red')} {path}: {self._format(change.prev)}"
        if change_type == ChangeType.OBJECT_MODIFY:
            return (
                f"{self._color('~', 'yellow')} {path}: "
                f"{self._format(change.prev)} -> {self._format(change.curr)}"
            )
        if change_type == ChangeType.ARRAY_ADD:
            return f"{self._color('+[]', 'green')} {path}: {self._format(change.value)}"
        return f"{self._color('-[]', 'red')} {path}: {self._format(change.value)}"

    def render_json(self, changes: ChangeSet, indent: int = 2) -> str:
        """
        Render a change set as JSON.

        Args:
            changes: The ChangeSet to render
            indent: Indentation width

        Returns:
            JSON array of change objects
        """
        return json.dumps(changes.to_list(), indent=indent, default=str, ensure_ascii=False)

    @staticmethod
    def _sort_key(change: Change) -> Tuple[Tuple[str, ...], int, str]:
        payload = change.value if change.value is not UNDEFINED else change.curr
        return change.path, _TYPE_ORDER[change.change_type], repr(payload)

    @staticmethod
    def _format(value: Any) -> str:
        if value is UNDEFINED:
            return "undefined"
        return json.dumps(value, default=str, ensure_ascii=False)

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color to text."""
        if not self.color:
            return text

        colors = {
            "red": "\033[91m",
            "green": "\033[92m",
            "yellow": "\033[93m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"
