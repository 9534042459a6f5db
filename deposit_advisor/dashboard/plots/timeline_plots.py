"""Deposit duration timeline centred on today."""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from deposit_advisor.calculations.timeline import TIMELINE_COLUMNS
from deposit_advisor.dashboard.components.formatting import apply_plot_layout_hygiene, style_numeric_table
from deposit_advisor.utils.date_utils import to_timestamp

TIMELINE_WINDOW_DAYS = 365


def timeline_window(as_of: pd.Timestamp) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Visible x-range with ``as_of`` in the middle."""
    t = to_timestamp(as_of)
    half = pd.Timedelta(days=TIMELINE_WINDOW_DAYS / 2.0)
    return t - half, t + half


def build_timeline_figure(frame: pd.DataFrame, as_of: pd.Timestamp) -> go.Figure:
    """Horizontal bar per deposit from open to close date, with a today marker."""
    t = to_timestamp(as_of)
    plot_df = frame.copy()
    plot_df['label'] = plot_df['bank'].astype(str) + " '" + plot_df['name'].astype(str) + "'"
    plot_df['status'] = plot_df['is_expired'].map({True: 'Expired', False: 'Active'})

    fig = px.timeline(
        plot_df,
        x_start='date_open',
        x_end='date_close',
        y='label',
        color='status',
        color_discrete_map={'Active': '#7b3fa0', 'Expired': '#d62728'},
        hover_data={
            'amount': ':,.0f',
            'rate': ':.2%',
            'days_to_close': True,
            'earned_to_date': ':,.0f',
            'earned_at_maturity': ':,.0f',
        },
    )
    fig.update_yaxes(autorange='reversed', title=None)
    x0, x1 = timeline_window(t)
    fig.update_xaxes(range=[x0, x1], title=None)
    fig.add_shape(
        type='line',
        x0=t,
        x1=t,
        y0=0,
        y1=1,
        yref='paper',
        line=dict(color='#1f77b4', width=2, dash='dot'),
    )
    fig.add_annotation(x=t, y=1, yref='paper', text='Today', showarrow=False, yanchor='bottom')
    fig.update_layout(title='Deposit Timeline')
    return apply_plot_layout_hygiene(fig)


def render_timeline_chart(frame: pd.DataFrame, as_of: pd.Timestamp) -> None:
    st.subheader('Timeline')
    if frame.empty:
        st.info('No active deposits to display.')
        return
    st.plotly_chart(build_timeline_figure(frame, as_of), use_container_width=True)
    table = frame[[c for c in TIMELINE_COLUMNS if c not in ('date_open', 'date_close')]]
    st.dataframe(style_numeric_table(table), use_container_width=True)
