import asyncio

import httpx
import pytest

from app import ChatApp
from core.config import Settings
from core.orchestrator import Orchestrator
from widgets import ChatLog, InputArea, TurnView


async def _body():
    for chunk in (b'{"token":"Buy "}\n{"tok', b'en":"TON."}\n', b'{"response":"Buy TON.","done":true}\n'):
        yield chunk


def handler(request: httpx.Request) -> httpx.Response:
    if b'fail' in request.content:
        return httpx.Response(200, content=b'{"error":"model unavailable"}\n')
    return httpx.Response(200, content=_body())


def make_app(initial_question=None):
    settings = Settings(api_url='http://chat.test', api_key='secret')
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=settings.api_url)
    orchestrator = Orchestrator(asyncio.Queue(), settings, client=client)
    return ChatApp(orchestrator=orchestrator, initial_question=initial_question)


async def _wait_for_terminal(pilot, app, count):
    for _ in range(100):
        await pilot.pause(0.02)
        views = list(app.query(TurnView))
        if len(views) == count and all(v.status in ('complete', 'failed') for v in views):
            return views
    raise AssertionError('turns did not finish')


@pytest.mark.asyncio
async def test_submitted_questions_render_in_order():
    app = make_app()
    async with app.run_test() as pilot:
        input_area = app.query_one(InputArea)
        input_area.post_message(InputArea.Submit("Advise me a token to buy"))
        input_area.post_message(InputArea.Submit("please fail"))

        views = await _wait_for_terminal(pilot, app, 2)

    assert [v.turn_id for v in views] == [1, 2]
    assert (views[0].status, views[0].answer) == ('complete', 'Buy TON.')
    assert (views[1].status, views[1].answer) == ('failed', 'model unavailable')


@pytest.mark.asyncio
async def test_initial_question_is_asked_on_start():
    app = make_app(initial_question="Advise me a token to buy")
    async with app.run_test() as pilot:
        views = await _wait_for_terminal(pilot, app, 1)

    assert views[0].turn_id == 1
    assert (views[0].status, views[0].answer) == ('complete', 'Buy TON.')
    assert [t.question for t in app.orchestrator.registry.turns()] == ["Advise me a token to buy"]


@pytest.mark.asyncio
async def test_thinking_placeholder_only_while_pending():
    app = make_app()
    async with app.run_test():
        chat_log = app.query_one(ChatLog)
        ev = {'type': 'turn_changed', 'turn_id': 7, 'question': 'q', 'text': '', 'status': 'pending'}
        view = await chat_log.upsert_turn(ev)
        assert view.thinking

        view = await chat_log.upsert_turn(dict(ev, status='streaming'))
        assert not view.thinking
        assert view.answer == ''
