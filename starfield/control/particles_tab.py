from PyQt5 import QtWidgets, QtCore
from .widgets import row, double_spin, int_spin
from .config import DEFAULTS, TOOLTIPS

class ParticlesTab(QtWidgets.QWidget):
    changed = QtCore.pyqtSignal(dict)
    def __init__(self):
        super().__init__()
        p = DEFAULTS["pool"]; a = DEFAULTS["appearance"]
        fl = QtWidgets.QFormLayout(self)
        self.sp_area = int_spin(2000, 200000, p["areaPerParticle"]); self.sp_area.setSingleStep(500)
        self.sp_min = int_spin(0, 5000, p["minCount"])
        self.sp_max = int_spin(1, 20000, p["maxCount"])
        self.sp_highlight = double_spin(0.0, 1.0, 0.005, a["highlightChance"], decimals=3)
        self.sp_flare = double_spin(0.0, 1.0, 0.01, a["flareChance"])
        self.sp_trail = double_spin(0.0, 1.0, 0.01, a["trailAlpha"])
        row(fl, "Surface par étoile", self.sp_area, TOOLTIPS["pool.areaPerParticle"], lambda: self.sp_area.setValue(p["areaPerParticle"]))
        row(fl, "Étoiles min", self.sp_min, TOOLTIPS["pool.minCount"], lambda: self.sp_min.setValue(p["minCount"]))
        row(fl, "Étoiles max", self.sp_max, TOOLTIPS["pool.maxCount"], lambda: self.sp_max.setValue(p["maxCount"]))
        row(fl, "Part d’étoiles dorées", self.sp_highlight, TOOLTIPS["appearance.highlightChance"], lambda: self.sp_highlight.setValue(a["highlightChance"]))
        row(fl, "Éclat doré / image", self.sp_flare, TOOLTIPS["appearance.flareChance"], lambda: self.sp_flare.setValue(a["flareChance"]))
        row(fl, "Voile de traînée", self.sp_trail, TOOLTIPS["appearance.trailAlpha"], lambda: self.sp_trail.setValue(a["trailAlpha"]))
        for w in (self.sp_area, self.sp_min, self.sp_max, self.sp_highlight, self.sp_flare, self.sp_trail):
            w.valueChanged.connect(self.emit_delta)
    def collect(self):
        lo = self.sp_min.value(); hi = max(lo, self.sp_max.value())
        return dict(
            pool=dict(areaPerParticle=self.sp_area.value(), minCount=lo, maxCount=hi),
            appearance=dict(highlightChance=self.sp_highlight.value(), flareChance=self.sp_flare.value(), trailAlpha=self.sp_trail.value()),
        )
    def emit_delta(self, *a): self.changed.emit(self.collect())
    def set_defaults(self, cfg):
        cfg = cfg or {}
        p = cfg.get("pool", {}); a = cfg.get("appearance", {})
        dp = DEFAULTS["pool"]; da = DEFAULTS["appearance"]
        for spin, values, fallback, key, cast in (
            (self.sp_area, p, dp, "areaPerParticle", int),
            (self.sp_min, p, dp, "minCount", int),
            (self.sp_max, p, dp, "maxCount", int),
            (self.sp_highlight, a, da, "highlightChance", float),
            (self.sp_flare, a, da, "flareChance", float),
            (self.sp_trail, a, da, "trailAlpha", float),
        ):
            with QtCore.QSignalBlocker(spin):
                spin.setValue(cast(values.get(key, fallback[key])))
