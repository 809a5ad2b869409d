"""
UI layer
Purpose: Streamlit-only glue. Renders the transcript and the input box, and
delegates every turn to the controller. Keeps UI concerns (layout/state
widgets) separate from business logic so logic can be unit tested without
Streamlit.
"""

import streamlit as st

from therapist.controller import TherapistSessionController
from therapist.persistence.session_store import (
    FileStorage,
    KeyValueSessionStore,
    new_session_id,
    session_key,
)
from therapist.services.completion import CompletionClient
from therapist.services.enricher import ReplyEnricher
from therapist.settings import build_llm_client, configure_logging, load_settings


# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="Therapist Chat",
    page_icon="🧠",
    layout="centered",
)

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
st_session.setdefault("settings", None)
st_session.setdefault("controller", None)
st_session.setdefault("session_id", None)

if st_session.settings is None:
    st_session.settings = load_settings()
    configure_logging(st_session.settings.log_level)
settings = st_session.settings

# Each browser session owns its own history key.
if st_session.session_id is None:
    st_session.session_id = new_session_id()


# ---------------------------
# Helpers
# ---------------------------
def get_controller():
    """Return the controller object."""
    return st_session.get("controller")


def init_controller(api_key: str) -> TherapistSessionController:
    """Wire provider, storage and enricher into a fresh controller."""
    llm = build_llm_client(settings.provider, api_key)
    completion = CompletionClient(llm, settings.llm_settings())
    store = KeyValueSessionStore(
        FileStorage(settings.storage_dir), key=session_key(st_session.session_id)
    )
    return TherapistSessionController(completion, store, enricher=ReplyEnricher())


# ---------------------------
# Sidebar
# ---------------------------
with st.sidebar:
    st.markdown("# Settings")
    api_key = settings.api_key
    if not api_key:
        st.markdown(f"## {settings.provider.title()} API Key Required")
        api_key = st.text_input("API key", type="password")
        if not api_key:
            st.warning("Please enter your API key in the sidebar to continue.")
            st.stop()

    if get_controller() is None:
        try:
            st_session.controller = init_controller(api_key)
        except RuntimeError as e:
            st.error(f"Client init failed: {e}")
            st.stop()

    controller = get_controller()
    st.caption(f"Model: **{settings.model}**")
    st.caption(
        f"Tokens used: {controller.tokens_in} in / {controller.tokens_out} out"
    )


# ---------------------------
# Chat
# ---------------------------
st.title("Therapist Chat")

transcript = st.container(height=500, border=True)
with transcript:
    for msg in controller.get_history():
        with st.chat_message(msg.role.value):
            st.markdown(msg.content)

raw = st.chat_input("Type your message...", disabled=controller.is_busy())
if raw is not None:
    text = raw.strip()
    if text:
        with transcript:
            with st.chat_message("user"):
                st.markdown(text)
        try:
            with st.spinner("Typing..."):
                controller.send(text)
        except (ValueError, RuntimeError) as e:
            st.toast(str(e), icon="⚠️")
        st.rerun()
