"""Streamlit app entrypoint for the deposit advisor dashboard."""

from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pandas as pd
import streamlit as st

from deposit_advisor.calculations.advisor import (
    NO_SUGGESTIONS_MESSAGE,
    DataConsistencyError,
    suggest_reallocations,
    suggestions_frame,
)
from deposit_advisor.calculations.staleness import age_days, data_age, expired_deposits, is_data_outdated
from deposit_advisor.calculations.timeline import deposit_timeline_frame, portfolio_summary
from deposit_advisor.dashboard.components.controls import render_global_controls
from deposit_advisor.dashboard.components.formatting import format_suggestion_line, style_numeric_table
from deposit_advisor.dashboard.components.summary_cards import render_summary_cards
from deposit_advisor.dashboard.plots.timeline_plots import render_timeline_chart
from deposit_advisor.data.loader import load_portfolio
from deposit_advisor.models.portfolio import Portfolio
from deposit_advisor.utils.date_utils import local_now

DEFAULT_INPUT_PATH = PROJECT_ROOT / 'data.xlsx'


@st.cache_data
def _load(path: str) -> Portfolio:
    return load_portfolio(path)


def _render_staleness(path: str, portfolio: Portfolio, now: pd.Timestamp) -> None:
    age = data_age(path, now)
    if is_data_outdated(age):
        st.warning(f'Data outdated. Last update {age_days(age)} days ago.')
    expired = expired_deposits(portfolio.active_deposits(), now)
    if expired:
        names = ', '.join(f"'{d.name}'" for d in expired)
        st.warning(f'Expired deposits have been found: {names}')


def _render_suggestions(portfolio: Portfolio, now: pd.Timestamp, min_benefit: float) -> None:
    st.subheader('Suggestions')
    try:
        suggestions = suggest_reallocations(
            portfolio.active_deposits(),
            portfolio.banks,
            as_of=now,
            min_benefit=min_benefit,
        )
    except DataConsistencyError as exc:
        st.error(f'Inconsistent input data: {exc}')
        return
    if not suggestions:
        st.success(NO_SUGGESTIONS_MESSAGE)
        return
    for s in suggestions:
        st.markdown(f'- {format_suggestion_line(s)}')
    st.dataframe(style_numeric_table(suggestions_frame(suggestions)), use_container_width=True)


def main() -> None:
    st.set_page_config(page_title='Deposit Advisor', layout='wide')
    st.title('Bank Deposit Advisor')

    ui = render_global_controls(str(DEFAULT_INPUT_PATH))
    input_path = ui['input_path']

    try:
        portfolio = _load(input_path)
    except Exception as exc:
        st.error(f'Failed to load workbook at `{input_path}`: {exc}')
        st.stop()

    now = local_now()
    active = portfolio.active_deposits()

    _render_staleness(input_path, portfolio, now)

    summary = portfolio_summary(active, now)
    render_summary_cards(
        total_amount=summary['total_amount'],
        weighted_rate=summary['weighted_rate'],
        monthly_earn=summary['monthly_earn'],
        active_deposits=len(active),
    )

    timeline_tab, suggestions_tab = st.tabs(['Timeline', 'Suggestions'])
    with timeline_tab:
        render_timeline_chart(deposit_timeline_frame(active, now), now)
    with suggestions_tab:
        _render_suggestions(portfolio, now, ui['min_benefit'])


if __name__ == '__main__':
    main()
