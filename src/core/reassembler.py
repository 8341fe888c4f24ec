from typing import Optional


class ChunkReassembler:
    """
    Rebuilds newline-terminated records from arbitrarily split text chunks.

    The trailing fragment after the last newline is carried over to the next
    ``feed`` call. Blank lines are dropped.
    """

    def __init__(self) -> None:
        self._buffer = ''

    def feed(self, chunk: str) -> list[str]:
        self._buffer += chunk
        *lines, self._buffer = self._buffer.split('\n')
        return [line for line in lines if line.strip()]

    def flush(self) -> Optional[str]:
        """Return the unterminated tail record, if any, and reset."""
        tail, self._buffer = self._buffer, ''
        return tail if tail.strip() else None
