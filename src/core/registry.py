from models import Turn


class TurnRegistry:
    """
    Append-only, ordered record of the turns in one chat session.

    Insertion order is display order. Turns are never removed, reordered or
    retried; a failed turn stays failed and the user asks again.
    """

    def __init__(self) -> None:
        self._turns: list[Turn] = []
        self.next_turn_id = 1

    def create_turn(self, question: str) -> Turn:
        turn = Turn(turn_id=self.next_turn_id, question=question)
        self.next_turn_id += 1
        self._turns.append(turn)
        return turn

    def turns(self) -> tuple[Turn, ...]:
        """Snapshot of the turns in order; later appends are not reflected."""
        return tuple(self._turns)

    def has_active(self) -> bool:
        return any(not turn.is_terminal for turn in self._turns)
