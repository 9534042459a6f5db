"""Summary card renderer for portfolio KPIs."""

from __future__ import annotations

import streamlit as st


def render_summary_cards(
    total_amount: float,
    weighted_rate: float,
    monthly_earn: float,
    active_deposits: int,
    title: str = 'Portfolio',
) -> None:
    """Render top-level KPI cards."""
    st.subheader(title)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric('Sum', f'{total_amount / 1000.0:,.2f}k')
    c2.metric('Average Rate', f'{weighted_rate * 100.0:.2f}%')
    c3.metric('Monthly Earn', f'{monthly_earn / 1000.0:,.2f}k')
    c4.metric('Active Deposits', f'{active_deposits:,d}')
