import os, sys
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
os.environ.setdefault('QT_QPA_PLATFORM','offscreen')
from starfield.scheduler import FrameScheduler, StarfieldContext

# Fake 60 Hz clock so the run is reproducible
clock = {'now': 0.0}
engine = FrameScheduler(StarfieldContext.seeded(1234), clock=lambda: clock['now'])
engine.resize(1920, 1080, 2.0)
engine.pointer.move(1700, 200)

w, h = engine.surface.width, engine.surface.height
flares = 0
outside = 0
for frame in range(600):
    clock['now'] += 16.7
    if frame == 300:
        # simulate a resize to a smaller window mid-run
        engine.resize(800, 600, 1.0)
        w, h = engine.surface.width, engine.surface.height
    items = engine.tick()
    flares += sum(1 for it in items if it.role == 'flare')
    outside += sum(1 for p in engine.pool if not (-30 <= p.x <= w + 30 and -30 <= p.y <= h + 30))

print('Total frames:', engine.frames)
print('Pool size:', len(engine.pool), '(target', engine.target_count(), ')')
print('Surface:', engine.surface.width, 'x', engine.surface.height, 'backing', engine.surface.backing_size())
print('Flares drawn:', flares)
print('Particles outside wrap margin:', outside)
print('Sample particles:', [engine.pool[i] for i in range(3)])
