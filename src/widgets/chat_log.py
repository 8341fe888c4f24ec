"""
Scrollable transcript of the chat turns.
"""
from rich.text import Text
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Static

from core.domain import TurnChanged

THINKING_PLACEHOLDER = "thinking..."


class TurnView(Static):
    """One question and its answer as it streams in."""

    def __init__(self, turn_id: int, **kwargs) -> None:
        super().__init__(id=f"turn-{turn_id}", classes="turn", **kwargs)
        self.turn_id = turn_id
        self.status = "pending"
        self.answer = ""
        self.thinking = True

    def show(self, ev: TurnChanged) -> None:
        self.status = ev["status"]
        self.answer = ev["text"]
        self.thinking = self.status == "pending"

        body = Text.assemble(("user: ", "dim"), ev["question"], "\n")
        if self.thinking:
            body.append(THINKING_PLACEHOLDER, style="dim italic")
        elif self.status == "failed":
            body.append(self.answer, style="bold red")
        else:
            body.append(self.answer)
        self.update(body)


class ChatLog(VerticalScroll):
    class Scrolled(Message):
        def __init__(self, offset: float, extent: float) -> None:
            super().__init__()
            self.offset = offset
            self.extent = extent

    def on_mount(self) -> None:
        self.watch(self, "scroll_y", self._on_scroll_y, init=False)

    def _on_scroll_y(self, offset: float) -> None:
        self.post_message(self.Scrolled(offset, self.max_scroll_y))

    async def upsert_turn(self, ev: TurnChanged) -> TurnView:
        try:
            view = self.query_one(f"#turn-{ev['turn_id']}", TurnView)
        except NoMatches:
            view = TurnView(ev["turn_id"])
            await self.mount(view)
        view.show(ev)
        return view

    def follow(self) -> None:
        """Jump to the bottom once pending layout has settled."""
        self.call_after_refresh(self.scroll_end, animate=False)
