"""Sidebar controls and state normalization helpers."""

from __future__ import annotations

from typing import Any

import streamlit as st

from deposit_advisor.calculations.advisor import MIN_BENEFIT


def coerce_min_benefit(value: Any, default: float = MIN_BENEFIT) -> float:
    """Return a usable non-negative benefit threshold from widget/session state."""
    try:
        out = float(value)
    except (TypeError, ValueError):
        return default
    if out != out or out < 0.0:
        return default
    return out


def render_global_controls(default_path: str) -> dict[str, Any]:
    """Render fixed sidebar controls and return normalized UI state."""
    with st.sidebar:
        st.subheader('Controls')
        input_path = st.text_input(
            'Workbook path',
            value=st.session_state.get('global_input_path', default_path),
            key='global_input_path',
        )
        min_benefit = st.number_input(
            'Minimum benefit',
            min_value=0.0,
            value=coerce_min_benefit(st.session_state.get('global_min_benefit', MIN_BENEFIT)),
            step=5.0,
            key='global_min_benefit',
        )
        if st.button('Reload Workbook', key='global_reload_workbook'):
            st.cache_data.clear()
            st.rerun()

    return {
        'input_path': input_path,
        'min_benefit': coerce_min_benefit(min_benefit),
    }
