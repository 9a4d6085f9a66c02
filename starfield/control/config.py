DEFAULTS = dict(
    pool=dict(areaPerParticle=15000, minCount=80, maxCount=1000),
    motion=dict(speedScale=0.65, pointerStrength=30.0, maxDt=0.05),
    appearance=dict(highlightChance=0.055, flareChance=0.04, trailAlpha=0.12),
    system=dict(frameIntervalMs=16, transparent=True, canvasName="dc-canvas"),
)

TOOLTIPS = {
    "pool.areaPerParticle": "Surface (en unités logiques²) couverte par une étoile. Plus petit = plus dense.",
    "pool.minCount": "Nombre minimal d’étoiles, même sur une petite fenêtre.",
    "pool.maxCount": "Nombre maximal d’étoiles, même sur un très grand écran.",
    "motion.speedScale": "Multiplie la vitesse d’avancée à travers le champ d’étoiles.",
    "motion.pointerStrength": "Intensité avec laquelle les étoiles proches suivent le pointeur.",
    "motion.maxDt": "Pas de temps maximal par image, évite les sauts après une pause.",
    "appearance.highlightChance": "Proportion des nouvelles étoiles pouvant scintiller en doré.",
    "appearance.flareChance": "Probabilité, à chaque image, qu’une étoile dorée s’illumine.",
    "appearance.trailAlpha": "Opacité du voile sombre peint avant les étoiles.",
    "system.frameIntervalMs": "Intervalle entre deux images (ms). 16 ≈ 60 images/s.",
    "system.transparent": "Laisse voir le bureau derrière la fenêtre.",
    "system.canvasName": "Nom d’objet du widget hôte qui reçoit le champ d’étoiles.",
}
