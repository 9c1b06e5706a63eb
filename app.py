from matharena.logging_setup import setup_logging

setup_logging()

import matharena.bootstrap_env  # sets env/secrets; logs through the handler above
import streamlit as st

from matharena.data.filters import ParticipantFilters, serialize_filters
from matharena.session import ParticipantSession
from matharena.ui.components.formatting import format_number, format_timestamp
from matharena.ui.layout import setup_page, sidebar_filters_ui
from matharena.ui.pages import participants

SESSION_KEY = "ma_session"


def get_session() -> ParticipantSession:
    """One session object per browser session; the dataset is loaded on first use."""
    session = st.session_state.get(SESSION_KEY)
    if session is None:
        session = ParticipantSession()
        st.session_state[SESSION_KEY] = session
    if not session.loaded:
        with st.spinner("Se încarcă participanții…"):
            session.load()
    return session


def _active_filter_summary(filters: ParticipantFilters, total_rows: int) -> None:
    badges = []
    if filters.search:
        badges.append(f"Căutare: “{filters.search}”")
    if filters.category:
        badges.append(f"Categorie: {filters.category}")

    summary_text = "Filtre active: " + " | ".join(badges) if badges else "Filtre active: toți participanții"
    st.markdown(f"**{summary_text}**")
    st.caption(f"Se afișează {format_number(total_rows, 0)} participanți.")


def main() -> None:
    setup_page()
    st.title("MathArena 2025 – Participanți")

    session = get_session()
    filters = sidebar_filters_ui()
    view = session.refresh(filters)
    st.session_state["ma_active_filters"] = serialize_filters(filters)

    if not view.error:
        _active_filter_summary(filters, view.stats.total)
        latest = session.latest_timestamp()
        if latest is not None:
            st.caption(f"Ultima actualizare: {format_timestamp(latest)}")

    participants.render(view, session.filtered)


if __name__ == "__main__":
    main()
