"""Generation module - shape skeletons, sampling and colour.

```python
from drawer.generation import ShapeKind, generate, sample

skeleton = generate(ShapeKind.TORUS, radius=200)
point = sample(0.25, skeleton, rotation_angle=0.3, center_x=1000, center_y=1000)
```
"""

from .shapes import (
    SKELETON_SIZE,
    SHAPE_GENERATORS,
    ControlPoint,
    ShapeKind,
    Skeleton,
    generate,
    next_kind,
    random_radius,
)
from .sampler import SkeletonSample, safe_sample, sample
from .palette import (
    DEFAULT_COLOR_SCHEMES,
    LINE_CAPS,
    ColorScheme,
    StrokeStyle,
    copy_schemes,
    hsl_to_rgb,
)

__all__ = [
    # Shapes
    "SKELETON_SIZE",
    "SHAPE_GENERATORS",
    "ControlPoint",
    "ShapeKind",
    "Skeleton",
    "generate",
    "next_kind",
    "random_radius",
    # Sampler
    "SkeletonSample",
    "safe_sample",
    "sample",
    # Palette
    "DEFAULT_COLOR_SCHEMES",
    "LINE_CAPS",
    "ColorScheme",
    "StrokeStyle",
    "copy_schemes",
    "hsl_to_rgb",
]
