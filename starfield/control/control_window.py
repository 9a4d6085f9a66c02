import copy
from PyQt5 import QtWidgets, QtCore, QtGui
from .config import DEFAULTS
from .particles_tab import ParticlesTab
from .system_tab import SystemTab

class ControlWindow(QtWidgets.QMainWindow):
    def __init__(self, screen: QtGui.QScreen, view_win):
        super().__init__(None)
        self.setWindowTitle("Starfield — Contrôle")
        self.view_win = view_win
        self.tabs = QtWidgets.QTabWidget()
        self.tab_particles = ParticlesTab()
        self.tab_system = SystemTab()
        for t in (self.tab_particles, self.tab_system):
            t.changed.connect(self.on_delta)
        self.tabs.addTab(self.tab_particles, "Particules")
        self.tabs.addTab(self.tab_system, "Système")
        self.setCentralWidget(self.tabs)
        self.resize(460, 360)
        geo = screen.availableGeometry()
        self.move(geo.x()+(geo.width()-self.width())//2, geo.y()+(geo.height()-self.height())//2)
        self.setWindowFlag(QtCore.Qt.WindowStaysOnTopHint, True)
        self.state = copy.deepcopy(DEFAULTS)
    def on_delta(self, delta: dict):
        for k, v in delta.items():
            if isinstance(v, dict):
                self.state.setdefault(k, {}).update(v)
            else:
                self.state[k] = v
        try:
            self.view_win.set_transparent(bool(self.state.get("system",{}).get("transparent", True)))
        except Exception:
            pass
        self.push_params()
    def push_params(self):
        view = getattr(self.view_win, "view", None)
        if view is not None:
            view.set_params(copy.deepcopy(self.state))
    def sync_from(self, params: dict):
        """Adopt ``params`` (e.g. from the command line) without pushing them back."""
        for k, v in params.items():
            if isinstance(v, dict):
                self.state.setdefault(k, {}).update(v)
        self.tab_particles.set_defaults(self.state)
        self.tab_system.set_defaults(self.state)
