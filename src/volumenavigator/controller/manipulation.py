"""
Grab / idle state of a pointer gesture on the gimbal.

Only one gesture can be active: a second grab while grabbed is ignored, and
moves or releases while idle are no-ops.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging
from typing import Optional

from volumenavigator.model.gimbal import HandleId

logger = logging.getLogger(__name__)

Cursor = tuple[float, float]


class GrabMode(Enum):
    TRANSLATE = auto()
    ROTATE = auto()


@dataclass
class GrabState:
    """Lives between a pointer-down on a handle and the matching pointer-up."""
    handle: HandleId
    start_cursor: Cursor
    last_cursor: Cursor

    @property
    def mode(self) -> GrabMode:
        return GrabMode.TRANSLATE if self.handle is HandleId.TRANSLATE else GrabMode.ROTATE

    @property
    def axis_index(self) -> Optional[int]:
        return self.handle.axis_index


class ManipulationStateMachine:
    def __init__(self) -> None:
        self._grab: Optional[GrabState] = None

    @property
    def grab_state(self) -> Optional[GrabState]:
        return self._grab

    @property
    def is_grabbed(self) -> bool:
        return self._grab is not None

    @property
    def mode(self) -> Optional[GrabMode]:
        return None if self._grab is None else self._grab.mode

    def grab(self, handle: HandleId, cursor: Cursor) -> bool:
        """Idle -> Grabbed. Returns False (and changes nothing) when already grabbed."""
        if self._grab is not None:
            logger.debug(f"Ignoring grab of {handle.value}, {self._grab.handle.value} is active.")
            return False
        self._grab = GrabState(handle=handle, start_cursor=cursor, last_cursor=cursor)
        logger.info(f"Grabbed {handle.value}.")
        return True

    def move(self, cursor: Cursor) -> Optional[tuple[Cursor, Cursor]]:
        """Grabbed -> Grabbed. Returns (previous, current) cursors, None while idle."""
        if self._grab is None:
            return None
        previous = self._grab.last_cursor
        self._grab.last_cursor = cursor
        return previous, cursor

    def release(self) -> Optional[GrabState]:
        """Grabbed -> Idle. Returns the finished grab, None while idle."""
        grab, self._grab = self._grab, None
        if grab is not None:
            logger.info(f"Released {grab.handle.value}.")
        return grab
