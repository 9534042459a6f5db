"""Shared dashboard formatting helpers."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from deposit_advisor.calculations.advisor import Suggestion


def format_suggestion_line(s: Suggestion) -> str:
    """One-line human readable description of a suggestion."""
    return (
        f"Reopen deposit '{s.deposit_name}' ({s.amount / 1000.0:.0f}k) from {s.source_bank} to {s.target_bank} "
        f'from {s.source_rate * 100.0:.2f}% to {s.target_rate * 100.0:.2f}% '
        f'for extra earn {s.net_benefit:.2f} (including transfer commission {s.commission_amount:.2f})'
    )


def style_numeric_table(
    df: pd.DataFrame,
    *,
    percent_cols: set[str] | None = None,
) -> pd.io.formats.style.Styler | pd.DataFrame:
    """Apply consistent numeric formatting across dashboard tables.

    Rate columns are shown as percentages, day counts as integers.
    """
    if df.empty:
        return df
    percent_cols = percent_cols or set()
    formats: dict[str, str] = {}
    for col in df.columns:
        if pd.api.types.is_bool_dtype(df[col]) or not pd.api.types.is_numeric_dtype(df[col]):
            continue
        name = str(col).lower()
        if col in percent_cols or 'rate' in name:
            formats[col] = '{:,.2%}'
        elif 'days' in name:
            formats[col] = '{:,.0f}'
        else:
            formats[col] = '{:,.2f}'
    if not formats:
        return df
    return df.style.format(formats, na_rep='-')


def apply_plot_layout_hygiene(fig: go.Figure) -> go.Figure:
    """Apply consistent spacing so legends and axis titles do not overlap."""
    fig.update_layout(
        margin=dict(t=72, r=48, b=64, l=48),
        legend=dict(
            orientation='h',
            yanchor='top',
            y=-0.16,
            xanchor='left',
            x=0.0,
            bgcolor='rgba(0,0,0,0)',
        ),
    )
    fig.update_xaxes(automargin=True, title_standoff=14)
    fig.update_yaxes(automargin=True, title_standoff=12)
    return fig
