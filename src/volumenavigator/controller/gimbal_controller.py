"""
Gimbal Controller
=================
Interprets 2D pointer input against the gimbal handles and converts it into
plane mutations on the `VolumeNavigator`.

Pointer-down on a handle starts a grab and turns camera navigation off,
pointer-move translates along the plane normal or rotates around a ring axis,
pointer-up turns navigation back on, recenters the gimbal on the new polygon
and commits the change.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from volumenavigator.controller.collaborator import ViewCollaborator
from volumenavigator.controller.manipulation import Cursor, GrabMode, ManipulationStateMachine
from volumenavigator.model.geometry_utils import signed_angle
from volumenavigator.model.gimbal import HandleId

if TYPE_CHECKING:
    from volumenavigator.controller.navigator import VolumeNavigator

logger = logging.getLogger(__name__)

SCREEN_NORMAL = np.array([0.0, 0.0, 1.0])


class GimbalController:
    def __init__(self, navigator: VolumeNavigator, view: ViewCollaborator) -> None:
        self.navigator = navigator
        self.view = view

    @property
    def state(self) -> ManipulationStateMachine:
        return self.navigator.manipulation

    # ------------------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------------------

    def pointer_down(self, pointer: Cursor) -> bool:
        """Returns True when a grab started and the event should not reach the camera."""
        if self.state.is_grabbed or not self.navigator.handles_visible:
            return False
        handle = self.pick(pointer)
        if handle is None:
            return False
        if not self.state.grab(handle, pointer):
            return False
        self.view.set_navigation_enabled(False)
        return True

    def pointer_move(self, pointer: Cursor) -> bool:
        """Returns True when the plane moved."""
        cursors = self.state.move(pointer)
        if cursors is None:
            return False
        previous, current = cursors
        grab = self.state.grab_state

        if grab.mode is GrabMode.TRANSLATE:
            distance = self.translation_distance(previous, current)
            if distance == 0.0:
                return False
            delta = distance * self.navigator.plane.normal()
            self.navigator.plane.translate(delta)
            self.navigator.gimbal.translate(delta)
        else:
            angle = self.rotation_angle(grab.handle, previous, current)
            if angle == 0.0:
                return False
            axis = self.navigator.gimbal.ring_normal(grab.handle)
            self.navigator.plane.rotate_about_axis(axis, angle, pivot=self.navigator.gimbal.center)
            self.navigator.gimbal.rotate(axis, angle)

        self.navigator.refresh(commit=False)
        return True

    def pointer_up(self, pointer: Optional[Cursor] = None) -> bool:
        """Returns True when a grab ended. Releasing while idle does nothing."""
        grab = self.state.release()
        if grab is None:
            return False
        self.view.set_navigation_enabled(True)
        self.navigator.recenter_gimbal()
        self.navigator.commit()
        logger.info(f"Committed plane {self.navigator.get_plane_equation()}.")
        return True

    # ------------------------------------------------------------------------------
    # Gesture math
    # ------------------------------------------------------------------------------

    def pick(self, pointer: Cursor) -> Optional[HandleId]:
        """Nearest gimbal handle under the pointer, other actors are ignored."""
        for hit in sorted(self.view.cast_ray(pointer), key=lambda h: h.distance):
            handle = HandleId.parse(hit.handle_id)
            if handle is not None:
                return handle
        return None

    def translation_distance(self, previous: Cursor, current: Cursor) -> float:
        """
        Signed distance along the plane normal for a pointer delta.

        The gimbal center and the point one normal-length away are projected to view
        space, their difference is the on-screen image of +normal. Projecting the
        pointer delta on it (dot / squared norm) gives world units.
        """
        center = self.navigator.gimbal.center
        if center is None:
            return 0.0
        normal = self.navigator.plane.normal()
        c2 = np.asarray(self.view.project_to_screen(center), dtype=np.float64)
        n2 = np.asarray(self.view.project_to_screen(center + normal), dtype=np.float64)
        screen_normal = n2 - c2
        sq_norm = float(np.dot(screen_normal, screen_normal))

        delta = np.subtract(current, previous, dtype=np.float64)
        magnitude = float(np.linalg.norm(delta))
        # normal seen end-on: no usable screen direction
        if sq_norm == 0.0 or magnitude == 0.0:
            return 0.0
        return float(np.dot(delta / magnitude, screen_normal)) / sq_norm * magnitude

    def screen_angle(self, previous: Cursor, current: Cursor) -> float:
        """Signed angle between previous->center and current->center, in view space."""
        center = self.navigator.gimbal.center
        if center is None:
            return 0.0
        c2 = np.asarray(self.view.project_to_screen(center), dtype=np.float64)
        return signed_angle(
            c2 - np.asarray(previous, dtype=np.float64),
            c2 - np.asarray(current, dtype=np.float64),
            SCREEN_NORMAL,
        )

    def rotation_angle(self, handle: HandleId, previous: Cursor, current: Cursor) -> float:
        """
        Screen angle corrected for the side the ring is seen from: when the ring
        normal faces the camera the sign is inverted so the ring follows the pointer.
        """
        angle = self.screen_angle(previous, current)
        center = self.navigator.gimbal.center
        if angle == 0.0 or center is None:
            return angle
        view_direction = center - np.asarray(self.view.camera_position(), dtype=np.float64)
        if float(np.dot(self.navigator.gimbal.ring_normal(handle), view_direction)) < 0.0:
            angle = -angle
        return angle
