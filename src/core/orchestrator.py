import asyncio
import logging
from contextlib import aclosing
from typing import Optional

import httpx

from core.config import Settings
from core.domain import Notification, StreamEvent
from core.registry import TurnRegistry
from core.scroll import AutoScrollController
from core.stream_adapter import adapt_chunks
from models import Turn

logger = logging.getLogger(__name__)

API_KEY_MISSING = 'API key not configured. Please set API_KEY environment variable.'


class Orchestrator:
    """
    Drives every turn of a chat session from its streamed HTTP response.

    Turn and scroll changes are pushed onto ``events_q`` as notifications for
    the UI to render. Everything runs on one event loop; each turn's stream
    only ever touches that turn.
    """

    def __init__(
        self,
        events_q: asyncio.Queue,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.events_q = events_q
        self.settings = settings or Settings()
        self.registry = TurnRegistry()
        self.scroll = AutoScrollController(
            self.settings.follow_distance, self.settings.release_distance
        )
        self.client = client or httpx.AsyncClient(
            base_url=self.settings.api_url,
            timeout=httpx.Timeout(self.settings.connect_timeout, read=None),
        )

    def _emit(self, ev: Notification):
        self.events_q.put_nowait(ev)

    def _emit_turn(self, turn: Turn):
        self._emit({
            'type': 'turn_changed',
            'turn_id': turn.turn_id,
            'question': turn.question,
            'text': turn.display_text,
            'status': turn.status.value,
        })

    def _emit_scroll(self, follow: bool):
        if follow:
            # last observed bottom; None until the viewport reports one
            self._emit({'type': 'scroll_to', 'offset': self.scroll.state.last_known_extent})

    def submit(self, question: str) -> Turn:
        """
        Register a new turn for ``question``. The caller starts it with ``run``.
        """
        turn = self.registry.create_turn(question)
        self._emit_turn(turn)
        self._emit_scroll(self.scroll.content_grew(self.registry.has_active()))
        return turn

    def scroll_observed(self, offset: float, extent: float):
        streaming = self.registry.has_active()
        self._emit_scroll(self.scroll.observe(offset, extent, streaming))

    def _apply(self, turn: Turn, ev: StreamEvent):
        if not turn.apply(ev):
            return
        self._emit_turn(turn)
        if ev['type'] == 'error':
            logger.warning('turn %d error event: %s', turn.turn_id, ev['message'])
        else:
            streaming = self.registry.has_active() or ev['type'] == 'final'
            self._emit_scroll(self.scroll.content_grew(streaming))

    def _fail(self, turn: Turn, message: str):
        if turn.fail(message):
            logger.warning('turn %d failed: %s', turn.turn_id, message)
            self._emit_turn(turn)

    async def run(self, turn: Turn):
        """
        Stream the answer for ``turn`` until it reaches a terminal state.
        """
        if not self.settings.api_key:
            self._fail(turn, API_KEY_MISSING)
            return

        headers = {'X-API-Key': self.settings.api_key}
        payload = {'message': turn.question}

        try:
            async with self.client.stream(
                'POST', self.settings.chat_path, json=payload, headers=headers
            ) as response:
                logger.info('turn %d stream opened: status=%d', turn.turn_id, response.status_code)

                if response.status_code != 200:
                    self._fail(turn, f'Error: {response.status_code}')
                    return

                async with aclosing(adapt_chunks(response.aiter_text())) as events:
                    async for ev in events:
                        self._apply(turn, ev)
                        if turn.is_terminal:
                            # leaving the block closes the connection
                            break
        except httpx.HTTPError as exc:
            self._fail(turn, f'Failed to connect: {exc}')
            return

        if turn.finish():
            self._emit_turn(turn)
        logger.info('turn %d finished: %s', turn.turn_id, turn.status.value)

    async def aclose(self):
        await self.client.aclose()
