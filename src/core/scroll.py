"""
Auto-follow policy for the chat viewport.
"""
from dataclasses import dataclass
from typing import Optional

FOLLOW_DISTANCE = 50.0
RELEASE_DISTANCE = 100.0


@dataclass
class ScrollState:
    auto_follow: bool = True
    last_known_distance_from_bottom: float = 0.0
    last_known_extent: Optional[float] = None


class AutoScrollController:
    """
    Decides when the viewport should jump to the bottom.

    Following turns on within ``follow_distance`` of the bottom and off beyond
    ``release_distance``; in between the previous decision holds. Methods return
    True when the viewport should move to the bottom.
    """

    def __init__(
        self,
        follow_distance: float = FOLLOW_DISTANCE,
        release_distance: float = RELEASE_DISTANCE,
        state: Optional[ScrollState] = None,
    ) -> None:
        if follow_distance > release_distance:
            raise ValueError('follow_distance must not exceed release_distance')
        self.follow_distance = follow_distance
        self.release_distance = release_distance
        self.state = state or ScrollState()

    @property
    def auto_follow(self) -> bool:
        return self.state.auto_follow

    def observe(self, offset: float, extent: float, streaming: bool = False) -> bool:
        """
        Record a scroll position. ``extent`` is the maximum scroll offset.
        """
        if extent <= 0:
            # content fits in the viewport
            return False

        distance = extent - offset
        self.state.last_known_distance_from_bottom = distance
        self.state.last_known_extent = extent

        if distance < self.follow_distance:
            if not self.state.auto_follow or streaming:
                self.state.auto_follow = True
                return streaming
        elif distance > self.release_distance:
            self.state.auto_follow = False
        return False

    def content_grew(self, streaming: bool) -> bool:
        """
        New content was applied; ``streaming`` is whether it came from a live turn.
        """
        return self.state.auto_follow and streaming
