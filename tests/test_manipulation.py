from volumenavigator.controller.manipulation import GrabMode, ManipulationStateMachine
from volumenavigator.model.gimbal import HandleId


def test_starts_idle():
    sm = ManipulationStateMachine()
    assert not sm.is_grabbed
    assert sm.mode is None
    assert sm.move((1.0, 2.0)) is None
    assert sm.release() is None


def test_grab_move_release_cycle():
    sm = ManipulationStateMachine()
    assert sm.grab(HandleId.ROTATE_Y, (10.0, 10.0))
    assert sm.mode is GrabMode.ROTATE
    assert sm.grab_state.axis_index == 1

    assert sm.move((12.0, 10.0)) == ((10.0, 10.0), (12.0, 10.0))
    assert sm.move((15.0, 11.0)) == ((12.0, 10.0), (15.0, 11.0))

    grab = sm.release()
    assert grab.handle is HandleId.ROTATE_Y
    assert grab.start_cursor == (10.0, 10.0)
    assert grab.last_cursor == (15.0, 11.0)
    assert not sm.is_grabbed


def test_second_grab_is_ignored_while_grabbed():
    sm = ManipulationStateMachine()
    assert sm.grab(HandleId.TRANSLATE, (0.0, 0.0))
    assert not sm.grab(HandleId.ROTATE_X, (5.0, 5.0))
    assert sm.mode is GrabMode.TRANSLATE
    assert sm.grab_state.axis_index is None


def test_handle_id_parse():
    assert HandleId.parse("gimbal_ring_z") is HandleId.ROTATE_Z
    assert HandleId.parse("outer_box") is None
