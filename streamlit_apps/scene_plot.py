import math
import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from typing import Optional, Tuple

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from matplotlib import image as mpimg

from orbitscene.animation.frame import FrameState
from orbitscene.config import TrackerConfig

MIN_SCENE_EXTENT = 3.0  # half-width of the visible cube, in body radii
EXTENT_MARGIN = 1.2
SATELLITE_COLOR = "#ff0000"
STALE_COLOR = "#8a8a8a"
SUN_POSITION = dict(x=5000, y=3000, z=5000)


def load_texture(path: str) -> np.ndarray:
    """
    Read an equirectangular Earth image as a 2D grayscale array in [0, 1].
    Row 0 is the north pole, column 0 is longitude 0.
    """
    img = mpimg.imread(path)
    img = np.asarray(img, dtype=float)
    if img.max() > 1.0:
        img = img / 255.0
    if img.ndim == 3:
        img = img[..., :3].mean(axis=2)
    return img


def earth_mesh(rotation: float, segments: int = 32,
               texture: Optional[np.ndarray] = None) -> Tuple[np.ndarray, ...]:
    """
    Unit sphere rotated by ``rotation`` radians about the polar (z) axis.
    Returns x, y, z and the per-vertex surface colour.
    """
    u, v = np.mgrid[0:2*np.pi:complex(0, segments + 1), 0:np.pi:complex(0, segments + 1)]
    x = np.cos(u + rotation) * np.sin(v)
    y = np.sin(u + rotation) * np.sin(v)
    z = np.cos(v)

    if texture is not None:
        rows = np.clip((v / np.pi * (texture.shape[0] - 1)).astype(int), 0, texture.shape[0] - 1)
        cols = np.clip((u / (2*np.pi) * (texture.shape[1] - 1)).astype(int), 0, texture.shape[1] - 1)
        color = texture[rows, cols]
    else:
        # Latitude shading with longitude bands so the spin is visible
        color = 0.5 * np.cos(v) + 0.25 * np.sin(4 * u) * np.sin(v)
    return x, y, z, color


def star_field(count: int, radius: float, seed: int = 7) -> np.ndarray:
    """``count`` points spread uniformly over a shell of ``radius``."""
    rng = np.random.default_rng(seed)
    pts = rng.normal(size=(count, 3))
    norms = np.linalg.norm(pts, axis=1, keepdims=True)
    norms[norms == 0] = 1.0
    return pts / norms * radius


def scene_extent(positions: np.ndarray, minimum: float = MIN_SCENE_EXTENT,
                 margin: float = EXTENT_MARGIN) -> float:
    """
    Half-width of the scene cube that keeps every known position inside it,
    rounded up to whole body radii so the view does not jitter between frames.
    """
    radii = np.linalg.norm(positions, axis=1) if len(positions) else np.empty(0)
    radii = radii[np.isfinite(radii)]
    if radii.size == 0:
        return minimum
    return max(minimum, float(math.ceil(radii.max() * margin)))


def status_table(state: FrameState) -> pd.DataFrame:
    """One row per tracked object with its epoch and latest propagation status."""
    rows = []
    for obj, result in zip(state.objects, state.last_results):
        if result is None:
            status = "pending"
        elif result.ok:
            status = "ok"
        else:
            status = result.reason
        rows.append({
            "name": obj.name,
            "epoch (UTC)": obj.epoch.strftime("%Y-%m-%d %H:%M:%S"),
            "status": status,
        })
    return pd.DataFrame(rows, columns=["name", "epoch (UTC)", "status"])


def build_scene_figure(state: FrameState, config: Optional[TrackerConfig] = None,
                       texture: Optional[np.ndarray] = None,
                       extent: Optional[float] = None) -> go.Figure:
    """
    Plot the Earth, a star backdrop and every tracked object at its
    current position from ``state``. Returns a Plotly Figure object.
    """
    config = config or TrackerConfig()
    if extent is None:
        extent = scene_extent(state.positions)
    fig = go.Figure()

    # Earth Sphere
    x, y, z, color = earth_mesh(state.earth_rotation, texture=texture)
    fig.add_trace(go.Surface(
        x=x, y=y, z=z,
        surfacecolor=color,
        colorscale="Greys" if texture is not None else "Blues",
        showscale=False,
        name="Earth",
        hoverinfo="skip",
        lighting=dict(ambient=0.2, diffuse=0.9, specular=0.1, roughness=0.8),
        lightposition=SUN_POSITION,
    ))

    # Stars
    stars = star_field(config.star_count, extent)
    fig.add_trace(go.Scatter3d(
        x=stars[:, 0], y=stars[:, 1], z=stars[:, 2],
        mode="markers",
        name="Stars",
        marker=dict(size=1.5, color="white", opacity=0.6),
        hoverinfo="skip",
        showlegend=False,
    ))

    # Tracked objects
    pts = state.positions
    colors = [STALE_COLOR if s else SATELLITE_COLOR for s in state.stale]
    names = [obj.name for obj in state.objects]
    fig.add_trace(go.Scatter3d(
        x=pts[:, 0], y=pts[:, 1], z=pts[:, 2],
        mode="markers",
        name="Satellites",
        text=names,
        hovertemplate="%{text}<extra></extra>",
        marker=dict(size=3, color=colors),
    ))

    axis = dict(range=[-extent, extent], visible=False, showbackground=False)
    fig.update_layout(
        scene=dict(
            xaxis=axis,
            yaxis=axis,
            zaxis=axis,
            aspectmode="cube",
            bgcolor="#000",
            dragmode="orbit",
            camera=dict(eye=dict(x=1.2, y=0.0, z=0.35)),
        ),
        paper_bgcolor="#000",
        font=dict(color="white"),
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
        height=700,
        # keeps the user's camera between frame updates
        uirevision="orbit-scene",
    )

    return fig
