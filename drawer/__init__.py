"""Drawer - pens tracing procedurally generated, rotating 3D shapes.

```python
from drawer import Orchestrator, RasterSurface

surface = RasterSurface(2000, 2000)
drawer = Orchestrator(surface=surface, seed=7)
for frame in range(600):
    drawer.tick(frame * 1000 / 60)
drawer.export("drawing.png")
```
"""

from .world import WorldState
from .orchestrator import Orchestrator, PendingSwitch
from .render.surface import RasterSurface, RenderSurface

__version__ = "0.1.0"

__all__ = [
    "WorldState",
    "Orchestrator",
    "PendingSwitch",
    "RasterSurface",
    "RenderSurface",
]
