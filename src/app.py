"""
Streaming chat client
"""

import asyncio
import logging
import sys
from typing import Optional

from textual import work
from textual.app import App, ComposeResult

from core.config import Settings, configure_logging
from core.orchestrator import Orchestrator
from models import Turn
from widgets import InputArea, ChatLog

logger = logging.getLogger(__name__)


class ChatApp(App):
    CSS = """
#chat_log {
    height: 1fr;
}
.turn {
    margin-bottom: 1;
}
    """

    def __init__(
        self,
        orchestrator: Optional[Orchestrator] = None,
        settings: Optional[Settings] = None,
        initial_question: Optional[str] = None,
    ):
        """Initialize the chat application with default state."""
        super().__init__()
        self.initial_question = initial_question
        self.orchestrator = orchestrator or Orchestrator(asyncio.Queue(), settings or Settings.from_env())
        self.event_q = self.orchestrator.events_q

    def compose(self) -> ComposeResult:
        """
        Create the main UI layout.
        """
        yield ChatLog(id="chat_log")
        yield InputArea(id="input_text", placeholder="Ask a question")

    async def on_mount(self) -> None:
        self.set_focus(self.query_one('#input_text', InputArea))
        self._pump()

        if self.initial_question:
            self._ask(self.initial_question)

    async def on_unmount(self) -> None:
        await self.orchestrator.aclose()

    async def on_input_area_submit(self, message: InputArea.Submit) -> None:
        """
        Creates a new conversation turn and starts streaming its answer.
        """
        self._ask(message.value)

    def _ask(self, question: str) -> None:
        turn = self.orchestrator.submit(question)
        self.run_infer(turn)

    def on_chat_log_scrolled(self, message: ChatLog.Scrolled) -> None:
        self.orchestrator.scroll_observed(message.offset, message.extent)

    @work(group='infer')
    async def run_infer(self, turn: Turn):
        """
        Stream the answer for one turn. Turns run side by side.
        """
        await self.orchestrator.run(turn)

    @work(exclusive=True, group='pump')
    async def _pump(self):
        """
        Event processing loop.

        Event types handled:
        - 'turn_changed': a turn's text or status changed
        - 'scroll_to': the viewport should follow the newest content
        """
        chat_log = self.query_one("#chat_log", ChatLog)

        while True:
            ev = await self.event_q.get()
            type = ev.get("type", '')

            if type == "turn_changed":
                await chat_log.upsert_turn(ev)
            elif type == "scroll_to":
                chat_log.follow()


def main():
    settings = Settings.from_env()
    configure_logging(settings)
    logger.info('connecting to %s%s', settings.api_url, settings.chat_path)
    question = " ".join(sys.argv[1:]).strip()
    app = ChatApp(settings=settings, initial_question=question or None)
    app.run()


if __name__ == "__main__":
    main()
