
import json
import logging
from typing import Any, AsyncIterator, Mapping, Optional

from core.domain import ErrorEvent, FinalEvent, StreamEvent, TokenEvent
from core.reassembler import ChunkReassembler

logger = logging.getLogger(__name__)


def _extract_final(data: Mapping[str, Any]) -> Optional[FinalEvent]:
    text = data.get('response')
    if isinstance(text, str) and data.get('done') is True:
        return {'type': 'final', 'text': text}
    return None


def _extract_token(data: Mapping[str, Any]) -> Optional[TokenEvent]:
    text = data.get('token')
    if isinstance(text, str):
        return {'type': 'token', 'text': text}
    return None


def _extract_error(data: Mapping[str, Any]) -> Optional[ErrorEvent]:
    message = data.get('error')
    if isinstance(message, str):
        return {'type': 'error', 'message': message}
    return None


def decode_record(line: str) -> Optional[StreamEvent]:
    """
    Decode one wire record into a StreamEvent, or None when it carries no event.

    A completed ``response`` wins over ``token`` and ``error`` in the same record.
    """
    try:
        data = json.loads(line)
    except (ValueError, RecursionError):
        # ValueError covers JSONDecodeError and oversized integer literals
        logger.debug('skipping undecodable record: %.100s', line)
        return None

    if not isinstance(data, dict):
        logger.debug('skipping non-object record: %.100s', line)
        return None

    event = _extract_final(data) or _extract_token(data) or _extract_error(data)
    if event is None:
        logger.debug('skipping record without event fields: %.100s', line)
    return event


async def adapt_chunks(chunks: AsyncIterator[str]) -> AsyncIterator[StreamEvent]:
    """
    Turn the raw text chunks of a response body into StreamEvents, in order.
    """
    reassembler = ChunkReassembler()
    async for chunk in chunks:
        for line in reassembler.feed(chunk):
            event = decode_record(line)
            if event is not None:
                yield event

    tail = reassembler.flush()
    if tail is not None:
        event = decode_record(tail)
        if event is not None:
            yield event
