"""Modal screen for displaying the full JSON of one value."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer, Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from dumpview.ingest.value_tree import Value, ValueKind


class ValueDetailModal(ModalScreen[None]):
    """A modal screen that shows a value untruncated."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("space", "close", "Close", show=False),
        Binding("enter", "close", "Close", show=False),
    ]

    CSS = """
    ValueDetailModal {
        align: center middle;
    }

    ValueDetailModal > Vertical {
        width: 80%;
        height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    ValueDetailModal .modal-header {
        dock: top;
        height: auto;
        padding: 0 1;
        background: $primary;
        color: $text;
        text-style: bold;
    }

    ValueDetailModal .content-container {
        height: 1fr;
        padding: 1 1;
        background: $surface-darken-1;
    }

    ValueDetailModal .value-content {
        width: 100%;
        height: auto;
    }

    ValueDetailModal .close-hint {
        dock: bottom;
        height: auto;
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        title: str,
        value: Value,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the modal.

        Args:
            title: Label of the tree node the value came from.
            value: The value to show in full.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.value_title = title
        self.value = value

    def formatted_value(self) -> str:
        # Strings are shown raw, everything else as indented JSON
        if self.value.kind is ValueKind.STRING:
            return str(self.value.scalar)
        return self.value.to_json_text(indent=2)

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.value_title, classes="modal-header", markup=False)
            with ScrollableContainer(classes="content-container"):
                yield Static(self.formatted_value(), classes="value-content", markup=False)
            yield Label("Press [ESC] to close", classes="close-hint", markup=False)

    def action_close(self) -> None:
        """Close the modal."""
        self.dismiss(None)
