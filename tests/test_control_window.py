from PyQt5 import QtWidgets

from starfield.control.control_window import ControlWindow
from starfield.control.particles_tab import ParticlesTab
from starfield.control.system_tab import SystemTab
from starfield.control.widgets import mk_info, mk_reset


class FakeView:
    def __init__(self):
        self.pushed = []

    def set_params(self, payload):
        self.pushed.append(payload)


class FakeViewWindow:
    def __init__(self):
        self.view = FakeView()
        self.transparent = None

    def set_transparent(self, enabled):
        self.transparent = enabled


def test_particles_tab_emits_pool_and_appearance(qapp):
    tab = ParticlesTab()
    received = []
    tab.changed.connect(received.append)
    tab.sp_min.setValue(500)
    delta = received[-1]
    assert delta["pool"]["minCount"] == 500
    assert delta["pool"]["maxCount"] >= 500
    assert set(delta) == {"pool", "appearance"}


def test_control_window_pushes_merged_state(qapp):
    view_win = FakeViewWindow()
    window = ControlWindow(QtWidgets.QApplication.primaryScreen(), view_win)
    window.tab_system.chk_transparent.setChecked(False)
    assert view_win.transparent is False
    payload = view_win.view.pushed[-1]
    assert payload["system"]["transparent"] is False
    assert payload["pool"]["areaPerParticle"] == 15000
    window.close()


def test_sync_from_does_not_push(qapp):
    view_win = FakeViewWindow()
    window = ControlWindow(QtWidgets.QApplication.primaryScreen(), view_win)
    window.sync_from({"system": {"frameIntervalMs": 33, "transparent": False}})
    assert view_win.view.pushed == []
    assert window.tab_system.sp_interval.value() == 33
    assert not window.tab_system.chk_transparent.isChecked()
    window.close()


def test_system_tab_collect(qapp):
    tab = SystemTab()
    values = tab.collect()
    assert values["motion"]["maxDt"] == 0.05
    assert values["system"]["frameIntervalMs"] == 16


def test_sync_from_updates_particles_tab(qapp):
    view_win = FakeViewWindow()
    window = ControlWindow(QtWidgets.QApplication.primaryScreen(), view_win)
    window.sync_from({"pool": {"minCount": 120, "maxCount": 400}, "appearance": {"trailAlpha": 0.3}})
    assert view_win.view.pushed == []
    assert window.tab_particles.sp_min.value() == 120
    assert window.tab_particles.sp_max.value() == 400
    assert window.tab_particles.sp_trail.value() == 0.3
    assert window.tab_particles.sp_area.value() == 15000
    window.close()


def test_info_and_reset_buttons(qapp):
    calls = []
    reset = mk_reset(lambda: calls.append("reset"))
    reset.click()
    assert calls == ["reset"]
    info = mk_info("aide")
    assert info.toolTip() == "aide"
    assert info.width() == 20
