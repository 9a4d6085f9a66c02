
from PyQt5 import QtWidgets, QtCore
from .widgets import row, double_spin, int_spin
from .config import DEFAULTS, TOOLTIPS

class SystemTab(QtWidgets.QWidget):
    changed = QtCore.pyqtSignal(dict)
    def __init__(self):
        super().__init__()
        m = DEFAULTS["motion"]; d = DEFAULTS["system"]
        fl = QtWidgets.QFormLayout(self)
        self.sp_speed = double_spin(0.0, 5.0, 0.05, m["speedScale"])
        self.sp_pointer = double_spin(0.0, 200.0, 1.0, m["pointerStrength"], decimals=1)
        self.sp_maxDt = double_spin(0.005, 0.05, 0.005, m["maxDt"], decimals=3)
        self.sp_interval = int_spin(1, 1000, d["frameIntervalMs"])
        self.chk_transparent = QtWidgets.QCheckBox(); self.chk_transparent.setChecked(d["transparent"])
        row(fl, "Vitesse", self.sp_speed, TOOLTIPS["motion.speedScale"], lambda: self.sp_speed.setValue(m["speedScale"]))
        row(fl, "Attraction pointeur", self.sp_pointer, TOOLTIPS["motion.pointerStrength"], lambda: self.sp_pointer.setValue(m["pointerStrength"]))
        row(fl, "Pas de temps max (s)", self.sp_maxDt, TOOLTIPS["motion.maxDt"], lambda: self.sp_maxDt.setValue(m["maxDt"]))
        row(fl, "Intervalle image (ms)", self.sp_interval, TOOLTIPS["system.frameIntervalMs"], lambda: self.sp_interval.setValue(d["frameIntervalMs"]))
        row(fl, "Fenêtre transparente", self.chk_transparent, TOOLTIPS["system.transparent"], lambda: self.chk_transparent.setChecked(d["transparent"]))
        for w in (self.sp_speed, self.sp_pointer, self.sp_maxDt, self.sp_interval):
            w.valueChanged.connect(self.emit_delta)
        self.chk_transparent.stateChanged.connect(self.emit_delta)
    def collect(self):
        return dict(
            motion=dict(speedScale=self.sp_speed.value(), pointerStrength=self.sp_pointer.value(), maxDt=self.sp_maxDt.value()),
            system=dict(frameIntervalMs=self.sp_interval.value(), transparent=self.chk_transparent.isChecked()),
        )
    def emit_delta(self, *a): self.changed.emit(self.collect())
    def set_defaults(self, cfg):
        cfg = cfg or {}
        m = cfg.get("motion", {}); s = cfg.get("system", {})
        with QtCore.QSignalBlocker(self.sp_speed):
            self.sp_speed.setValue(float(m.get("speedScale", DEFAULTS["motion"]["speedScale"])))
        with QtCore.QSignalBlocker(self.sp_pointer):
            self.sp_pointer.setValue(float(m.get("pointerStrength", DEFAULTS["motion"]["pointerStrength"])))
        with QtCore.QSignalBlocker(self.sp_maxDt):
            self.sp_maxDt.setValue(float(m.get("maxDt", DEFAULTS["motion"]["maxDt"])))
        with QtCore.QSignalBlocker(self.sp_interval):
            self.sp_interval.setValue(int(s.get("frameIntervalMs", DEFAULTS["system"]["frameIntervalMs"])))
        with QtCore.QSignalBlocker(self.chk_transparent):
            self.chk_transparent.setChecked(bool(s.get("transparent", DEFAULTS["system"]["transparent"])))
