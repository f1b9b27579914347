"""Sundial — Streamlit app showing today's sun as an analog dial."""

import logging
import time

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv
from streamlit_autorefresh import st_autorefresh
from streamlit_js_eval import get_geolocation

load_dotenv()

from sundial.compute import (  # noqa: E402
    OracleError,
    SkyfieldOracle,
    local_event_times,
    render,
)
from sundial.config import Settings  # noqa: E402
from sundial.models import Coordinate, Waiting  # noqa: E402
from sundial.renderers.svg_2d import render_svg_html  # noqa: E402

settings = Settings.from_env()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Sundial",
    page_icon="☀",
    layout="centered",
    initial_sidebar_state="collapsed",
)

st.markdown(
    """
    <style>
    /* Hide streamlit_js_eval invisible iframe */
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    .overlay-box {
        color: #e8d5a3;
        padding: 1.2rem 1.6rem;
        text-align: center;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Session state initialization ---
if "location" not in st.session_state:
    st.session_state.location = None
if "location_notice" not in st.session_state:
    st.session_state.location_notice = None
if "geo_seq" not in st.session_state:
    st.session_state.geo_seq = 0


@st.cache_resource
def _get_oracle() -> SkyfieldOracle:
    return SkyfieldOracle(settings.data_dir, settings.ephemeris)


# --- Clock tick: rerun the whole script at a fixed cadence ---
st_autorefresh(interval=settings.tick_ms, key="sundial_tick")

# --- Location: ask the browser until it answers with coordinates ---
if st.session_state.location is None:
    payload = get_geolocation(component_key=f"sundial_geo_{st.session_state.geo_seq}")
    coordinate = Coordinate.from_geolocation(payload)
    if coordinate is not None:
        st.session_state.location = coordinate
        st.session_state.location_notice = None
        logger.info(
            "Browser location %.4f, %.4f", coordinate.lat, coordinate.lng
        )
    elif isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        message = str(payload["error"].get("message") or "location unavailable")
        st.session_state.location_notice = message
        logger.warning("Browser geolocation failed: %s", message)

location: Coordinate | None = st.session_state.location
now_ms = time.time() * 1000.0

try:
    oracle = _get_oracle()
    times = None
    if location is not None:
        times = oracle.times(now_ms, location.lat, location.lng)
    result = render(now_ms, location, oracle, times=times)
except OracleError as e:
    logger.error("Sundial render failed: %s", e)
    st.markdown(
        f"<div class='overlay-box' style='color:#ff9999;'>{e}</div>",
        unsafe_allow_html=True,
    )
    st.stop()

if isinstance(result, Waiting):
    notice = st.session_state.location_notice
    text = result.message if notice is None else f"{result.message} ({notice})"
    st.markdown(f"<div class='overlay-box'>{text}</div>", unsafe_allow_html=True)
    if notice is not None and st.button("Retry location"):
        st.session_state.geo_seq += 1
        st.session_state.location_notice = None
        st.rerun()
else:
    assert location is not None and times is not None
    labels = local_event_times(location, times)
    caption = (
        f"dawn {labels['dawn']} · noon {labels['solar_noon']} · dusk {labels['dusk']}"
    )
    components.html(render_svg_html(result, caption=caption), height=640, scrolling=False)
