from textual.app import App, ComposeResult
from textual.widgets import Footer, Input, Static, TextArea
from textual.containers import Vertical, VerticalScroll
from textual.binding import Binding
from textual.message import Message
from rich.text import Text
from ..engine import EncoderEngine
from ..utils.state import EncoderState
from ..utils.highlighter import highlight_encoding

# User Palette
C_BG = "#EBEEEE"
C_TEXT = "#191A1A"
C_ACCENT1 = "#45d3ee" # Cyan
C_ACCENT2 = "#9FBFC5" # Muted Blue
C_ACCENT4 = "#fecd91" # Orange

class ResultLine(Static): pass
class HistoryScroll(VerticalScroll): BINDINGS = []

class EncoderApp(App):
    """Interactive encoder: each submitted line is one independent run."""

    CSS = f"""
    Screen {{
        background: {C_BG};
        color: {C_TEXT};
    }}

    #main-layout {{ height: 1fr; width: 100%; }}

    #history-outer {{
        height: 1fr;
        width: 100%;
        border: solid {C_ACCENT2};
        margin: 0 1;
    }}

    #error-view {{ color: #a80000; display: none; height: 12; margin: 0 1; }}

    #asm-input {{ margin: 0 1; border: tall {C_ACCENT1}; }}

    ResultLine {{ width: 100%; height: 1; }}
    ResultLine.empty {{ color: {C_ACCENT4}; }}

    Footer {{ background: {C_TEXT}; color: {C_ACCENT1}; }}
    """

    BINDINGS = [
        Binding("escape", "quit", "Quit", show=True),
        Binding("ctrl+l", "clear", "Clear", show=True, priority=True),
    ]

    class StateUpdated(Message):
        def __init__(self, state: EncoderState) -> None:
            super().__init__()
            self.state = state

    def __init__(self, engine: EncoderEngine | None = None):
        super().__init__()
        self.engine = engine if engine is not None else EncoderEngine()
        self.engine.on_update_callback = lambda state: self.post_message(self.StateUpdated(state))
        self._count = 0

    def compose(self) -> ComposeResult:
        with Vertical(id="main-layout"):
            yield Vertical(HistoryScroll(id="history"), id="history-outer")
            yield TextArea(id="error-view", read_only=True)
            yield Input(placeholder="Input assembly instruction", id="asm-input")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#asm-input", Input).focus()

    def on_input_submitted(self, message: Input.Submitted) -> None:
        message.input.value = ""
        self.engine.encode(message.value)

    def _render_state(self, state: EncoderState) -> Text:
        if state.encoding is not None and state.encoding.hex_bytes:
            return highlight_encoding(state.instruction, state.encoding.hex_bytes, state.encoding.mnemonic)
        if state.lines:
            return Text(f"{state.instruction:<32}{state.lines[0]}")
        return Text(f"{state.instruction:<32}(no instruction at offset 0)")

    def on_encoder_app_state_updated(self, message: StateUpdated) -> None:
        state = message.state
        error_view = self.query_one("#error-view", TextArea)
        if state.has_errors:
            error_view.display = True
            error_view.text = state.error_text
            return

        error_view.display = False
        self._count += 1
        line = ResultLine(self._render_state(state), id=f"result-{self._count}")
        if not state.lines:
            line.add_class("empty")
        history = self.query_one("#history", HistoryScroll)
        history.mount(line)
        line.scroll_visible()

    def action_clear(self) -> None:
        self.query_one("#history", HistoryScroll).query(ResultLine).remove()
        self.query_one("#error-view", TextArea).display = False

def run_tui(engine: EncoderEngine | None = None):
    app = EncoderApp(engine)
    app.run()
