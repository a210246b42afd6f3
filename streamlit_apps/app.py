# streamlit_apps/app.py
"""
Orbit Scene – live satellite positions around a rotating Earth

Features:
- Live element-set catalog from CelesTrak (cached between reruns)
- Catalog parsing with configurable tracked-object limit and year pivot
- SGP4 propagation of every tracked object once per refresh
- 3D Plotly scene (Earth, stars, satellites) with orbit controls
"""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone

import requests
import streamlit as st

# --- Make repo importable (so we can import orbitscene.* and scene_plot) ---
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_DIR not in sys.path:
    sys.path.append(BASE_DIR)

from orbitscene.animation.frame import FrameClock, FrameState, advance_frame
from orbitscene.config import TrackerConfig
from orbitscene.data.tle import fetch_tle_text, parse_catalog
from orbitscene.logging_config import configure_logging

# scene_plot.py must live in the same folder as this file
from scene_plot import build_scene_figure, load_texture, status_table  # type: ignore

GROUPS = ["starlink", "stations", "active", "gps-ops", "oneweb", "weather", "visual"]


# -------------------------------------------------------------------
# UTILITIES
# -------------------------------------------------------------------

@st.cache_data(show_spinner=False, ttl=TrackerConfig.from_env().cache_ttl_s)
def cached_catalog(url: str, timeout: float) -> str:
    return fetch_tle_text(url, timeout=timeout)


@st.cache_resource(show_spinner=False)
def cached_texture(path: str):
    return load_texture(path)


def sidebar_config(base: TrackerConfig) -> TrackerConfig:
    with st.sidebar:
        st.markdown("### 🛰️ Catalog")
        group = st.selectbox(
            "CelesTrak group",
            options=GROUPS if base.group in GROUPS else [base.group] + GROUPS,
            index=GROUPS.index(base.group) if base.group in GROUPS else 0,
        )
        max_tracked = st.slider(
            "Objects to track",
            min_value=1,
            max_value=500,
            value=min(max(base.max_tracked, 1), 500),
            help="Rendering cost grows with every tracked object.",
        )

        st.markdown("---")
        st.markdown("### ⚙️ Scene Options")
        refresh = st.select_slider(
            "Refresh interval (seconds)",
            options=[0.5, 1.0, 2.0, 5.0],
            value=base.refresh_interval_s if base.refresh_interval_s in (0.5, 1.0, 2.0, 5.0) else 1.0,
        )
        pivot = st.number_input(
            "Two-digit year pivot",
            min_value=0,
            max_value=99,
            value=base.century_pivot,
            help="Epoch years below this map to 20xx, the rest to 19xx.",
        )
    return base.with_overrides(
        group=group,
        max_tracked=int(max_tracked),
        refresh_interval_s=float(refresh),
        century_pivot=int(pivot),
    )


def load_state(config: TrackerConfig) -> FrameState:
    """Fetch and parse the catalog, reusing session state while the inputs are unchanged."""
    key = (config.catalog_query_url(), config.max_tracked, config.century_pivot)
    if st.session_state.get("state_key") != key:
        text = cached_catalog(config.catalog_query_url(), config.request_timeout_s)
        objects = parse_catalog(text, max_tracked=config.max_tracked,
                                century_pivot=config.century_pivot)
        st.session_state.frame_state = FrameState.from_objects(objects)
        st.session_state.frame_clock = FrameClock()
        st.session_state.state_key = key
    return st.session_state.frame_state


# -------------------------------------------------------------------
# STREAMLIT APP
# -------------------------------------------------------------------

def main():
    st.set_page_config(
        page_title="Orbit Scene",
        page_icon="🛰️",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    configure_logging()

    config = sidebar_config(TrackerConfig.from_env())

    try:
        with st.spinner(f"Fetching {config.group} element sets..."):
            state = load_state(config)
    except requests.RequestException as e:
        st.error(f"Could not fetch the element-set catalog: {e}")
        st.stop()
    except ValueError as e:
        st.error(f"Could not parse the element-set catalog: {e}")
        st.stop()

    texture = None
    if config.earth_texture:
        try:
            texture = cached_texture(config.earth_texture)
        except OSError as e:
            st.warning(f"Earth texture unavailable ({e}); using plain shading.")

    st.markdown(f"#### {len(state.objects)} objects from `{config.group}`")

    @st.fragment(run_every=config.refresh_interval_s)
    def scene():
        delta = st.session_state.frame_clock.tick()
        advance_frame(state, datetime.now(timezone.utc), delta, config)
        fig = build_scene_figure(state, config, texture=texture)
        st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})
        st.caption(f"{int((~state.stale).sum())} live · {int(state.stale.sum())} stale")
        # fragments cannot write to the sidebar, so the table refreshes here
        st.markdown("### 🔎 Tracked Objects")
        st.dataframe(status_table(state), use_container_width=True, height=320)

    scene()


if __name__ == "__main__":
    main()
