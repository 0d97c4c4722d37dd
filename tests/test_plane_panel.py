import pytest

from volumenavigator.view.panels.plane_panel import PlanePanel


@pytest.fixture
def panel(cube_navigator):
    return PlanePanel(cube_navigator)


@pytest.fixture
def commits(cube_navigator):
    snapshots = []
    cube_navigator.plane_committed.connect(snapshots.append)
    return snapshots


def test_panel_shows_plane_information(panel):
    assert panel.lbl_equation.text() == "0x + 0y + 1z + -50 = 0"
    assert panel.lbl_normal.text() == "(0 ; 0 ; 1)"
    assert panel.lbl_point.text() == "(50 ; 50 ; 50)"


def test_translation_steps_commit_each_change(cube_navigator, panel, commits):
    spin = panel._spins["trans_z"]
    spin.setValue(10.0)
    assert cube_navigator.get_plane_point() == [50.0, 50.0, 60.0]
    assert len(commits) == 1

    # arrow click / wheel step
    spin.stepBy(1)
    assert cube_navigator.get_plane_point() == [50.0, 50.0, 61.0]
    assert len(commits) == 2
    assert commits[-1].point == (50.0, 50.0, 61.0)
    assert panel.lbl_point.text() == "(50 ; 50 ; 61)"

    spin.setValue(0.0)
    assert cube_navigator.get_plane_point() == [50.0, 50.0, 50.0]
    assert len(commits) == 3


def test_rotation_steps_apply_the_difference(cube_navigator, panel, commits):
    spin = panel._spins["rot_x"]
    spin.setValue(45.0)
    spin.setValue(90.0)
    assert len(commits) == 2
    assert cube_navigator.get_plane_normal() == pytest.approx([0.0, -1.0, 0.0], abs=1e-12)
    assert panel.lbl_normal.text() == "(0 ; -1 ; 0)"


def test_action_buttons(cube_navigator, panel):
    assert panel.actions_box.isHidden()
    clicked = []
    cube_navigator.add_action("Export", lambda: clicked.append(True))
    panel.rebuild_actions()

    assert [b.text() for b in panel._action_buttons] == ["Export"]
    panel._action_buttons[0].click()
    assert clicked == [True]
