"""RRA Turret & Combat Log Dashboard.

Interactive dashboard built with Streamlit and Plotly.  Provides the
turret hit-chance calculator with presets, hit-chance curves over
transversal speed and distance, the maximum-transversal inverse, and
combat-log upload with aggregated statistics.

Launch with::

    streamlit run dashboard/app.py
"""

from __future__ import annotations

import math

import numpy as np
import plotly.graph_objects as go
import streamlit as st

from rra_engine import __version__
from rra_engine.config import load_presets
from rra_engine.core.hit_model import (
    InverseParameters,
    TurretParameters,
    calculate_hit_chance,
    calculate_max_transversal,
    hit_chance_curve,
    range_curve,
)
from rra_engine.core.presets import apply_ammo
from rra_engine.log_parsing.frames import (
    damage_timeline,
    events_to_frame,
    weapons_to_frame,
)
from rra_engine.log_parsing.parser import parse_log_content
from rra_engine.log_parsing.stats import calculate_stats

_CURVE_POINTS: int = 200
_TARGET_CHANCES: list[float] = [0.9, 0.75, 0.5, 0.25]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _decode_upload(data: bytes) -> str:
    """Decode an uploaded log, preferring the client's UTF-16LE encoding."""
    if data.startswith(b"\xff\xfe") or (len(data) > 1 and data[1:2] == b"\x00"):
        return data.decode("utf-16-le", errors="replace")
    return data.decode("utf-8", errors="replace")


def _format_speed(value: float) -> str:
    return f"{value:,.0f} m/s" if math.isfinite(value) else "unbounded"


# ---------------------------------------------------------------------------
# Streamlit app
# ---------------------------------------------------------------------------


def main() -> None:  # noqa: C901
    """Entry point for the Streamlit dashboard."""
    st.set_page_config(page_title="RRA Turret Calculator", layout="wide")
    st.title("RRA Turret & Combat Log Dashboard")

    catalog = load_presets()

    # ── Sidebar ──────────────────────────────────────────────────────────
    st.sidebar.header("Turret")

    turret_name: str = st.sidebar.selectbox(
        "Turret preset", options=[t.name for t in catalog.turrets], index=3
    )
    ammo_name: str = st.sidebar.selectbox(
        "Ammunition", options=[a.name for a in catalog.ammo_types], index=1
    )
    turret = apply_ammo(catalog.turret(turret_name), catalog.ammo(ammo_name))

    st.sidebar.header("Target")
    signature_name: str = st.sidebar.selectbox(
        "Hull class", options=[s.name for s in catalog.signatures], index=2
    )
    signature = catalog.signature(signature_name)

    distance: float = st.sidebar.slider(
        "Distance (m)",
        min_value=500,
        max_value=int(2 * (turret.optimal + turret.falloff)),
        value=int(turret.optimal),
        step=500,
    )
    transversal: float = st.sidebar.slider(
        "Transversal (m/s)", min_value=0, max_value=3000, value=300, step=10
    )

    st.sidebar.markdown("---")
    st.sidebar.caption(
        f"Tracking {turret.tracking:.4f} rad/s · optimal {turret.optimal:,.0f} m · "
        f"falloff {turret.falloff:,.0f} m · signature {signature.radius:.0f} m"
    )

    # ── Section 1: Hit chance ────────────────────────────────────────────
    st.header("1 -- Hit Chance")

    result = calculate_hit_chance(
        TurretParameters(
            transversal=float(transversal),
            distance=float(distance),
            tracking_speed=turret.tracking,
            signature_radius=signature.radius,
            optimal_range=turret.optimal,
            falloff=turret.falloff,
        )
    )

    col_h1, col_h2, col_h3, col_h4 = st.columns(4)
    col_h1.metric("Hit chance", f"{result.hit_chance_percent:.1f}%")
    col_h2.metric("Angular velocity", f"{result.angular_velocity_mrad:.2f} mrad/s")
    col_h3.metric("Expected damage", f"{result.expected_damage_modifier:.3f}x")
    col_h4.metric(
        "Range band",
        "optimal" if result.is_in_optimal else (
            "falloff" if result.is_in_falloff else "beyond falloff"
        ),
    )

    col_v, col_d = st.columns(2)

    speeds = np.linspace(0.0, 3000.0, _CURVE_POINTS)
    with col_v:
        chances = hit_chance_curve(
            speeds,
            float(distance),
            turret.tracking,
            signature.radius,
            turret.optimal,
            turret.falloff,
        )
        fig_v = go.Figure(go.Scatter(x=speeds, y=chances * 100.0, mode="lines"))
        fig_v.add_vline(x=transversal, line_dash="dash", line_color="#e10600")
        fig_v.update_layout(
            title="Hit chance vs transversal",
            xaxis_title="Transversal (m/s)",
            yaxis_title="Hit chance (%)",
            height=380,
        )
        st.plotly_chart(fig_v, use_container_width=True)

    distances = np.linspace(500.0, 2.0 * (turret.optimal + turret.falloff), _CURVE_POINTS)
    with col_d:
        chances_d = range_curve(
            distances,
            float(transversal),
            turret.tracking,
            signature.radius,
            turret.optimal,
            turret.falloff,
        )
        fig_d = go.Figure(go.Scatter(x=distances, y=chances_d * 100.0, mode="lines"))
        fig_d.add_vline(x=turret.optimal, line_dash="dot", line_color="#1e1e1e")
        fig_d.add_vline(
            x=turret.optimal + turret.falloff, line_dash="dot", line_color="#ffa500"
        )
        fig_d.update_layout(
            title="Hit chance vs distance",
            xaxis_title="Distance (m)",
            yaxis_title="Hit chance (%)",
            height=380,
        )
        st.plotly_chart(fig_d, use_container_width=True)

    # ── Section 2: Max transversal ───────────────────────────────────────
    st.header("2 -- Maximum Transversal")

    cols = st.columns(len(_TARGET_CHANCES))
    for col, target in zip(cols, _TARGET_CHANCES):
        max_v = calculate_max_transversal(
            InverseParameters(
                target_hit_chance=target,
                distance=float(distance),
                tracking_speed=turret.tracking,
                signature_radius=signature.radius,
                optimal_range=turret.optimal,
                falloff=turret.falloff,
            )
        )
        col.metric(f"{target:.0%} hit chance", _format_speed(max_v))

    # ── Section 3: Combat log ────────────────────────────────────────────
    st.header("3 -- Combat Log")

    upload = st.file_uploader("Upload a game log (.txt)", type=["txt"])
    if upload is None:
        st.info("Upload a combat log to see damage and hit statistics.")
        return

    events = parse_log_content(_decode_upload(upload.getvalue()))
    stats = calculate_stats(events)

    if not events:
        st.warning("No combat events found in this log.")
        return

    col_s1, col_s2, col_s3, col_s4 = st.columns(4)
    col_s1.metric("Damage dealt", f"{stats.total_damage_dealt:,}")
    col_s2.metric("Damage received", f"{stats.total_damage_received:,}")
    col_s3.metric("Hit rate", f"{stats.hit_rate:.1f}%")
    col_s4.metric("DPS", f"{stats.dps:.1f}" if stats.dps is not None else "n/a")

    col_w, col_q = st.columns(2)

    with col_w:
        weapons = weapons_to_frame(stats)
        if weapons.empty:
            st.write("No weapon names in this log.")
        else:
            fig_w = go.Figure(
                go.Bar(
                    x=weapons["damage"],
                    y=weapons.index,
                    orientation="h",
                    marker_color="#e10600",
                )
            )
            fig_w.update_layout(
                title="Damage by weapon",
                yaxis=dict(autorange="reversed"),
                height=380,
                margin=dict(l=160),
            )
            st.plotly_chart(fig_w, use_container_width=True)

    with col_q:
        qualities = sorted(stats.hit_qualities.items(), key=lambda x: x[1], reverse=True)
        fig_q = go.Figure(
            go.Bar(
                x=[q[0] for q in qualities],
                y=[q[1] for q in qualities],
                marker_color="#1e1e1e",
            )
        )
        fig_q.update_layout(title="Hit quality", height=380)
        st.plotly_chart(fig_q, use_container_width=True)

    timeline = damage_timeline(events, freq="10s")
    if not timeline.empty:
        fig_t = go.Figure()
        fig_t.add_trace(
            go.Scatter(x=timeline.index, y=timeline["damage_dealt"], name="Dealt")
        )
        fig_t.add_trace(
            go.Scatter(x=timeline.index, y=timeline["damage_received"], name="Received")
        )
        fig_t.update_layout(title="Damage per 10 s", height=350)
        st.plotly_chart(fig_t, use_container_width=True)

    st.subheader("Events")
    st.dataframe(events_to_frame(events), use_container_width=True)

    # ── Footer ───────────────────────────────────────────────────────────
    st.markdown("---")
    st.caption(f"RRA Turret Engine v{__version__}")


if __name__ == "__main__":
    main()
