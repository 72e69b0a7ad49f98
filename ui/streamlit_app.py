# Role: Streamlit chat console for the ArkWork Agent.
# - The backend is stateless: the full message list, intent and profile are sent every turn.
# - Sidebar holds the intent selector and the optional profile fields.

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import requests
import streamlit as st

BACKEND_URL = os.getenv("ARKWORK_BACKEND_URL", "http://127.0.0.1:4000")

INTENT_LABELS = {
    "news": "Berita",
    "jobs": "Rekomendasi Kerja",
    "consult": "Konsultasi",
}


# ----------------------------
# Session helpers
# ----------------------------
def ensure_session() -> None:
    if "messages" not in st.session_state:
        st.session_state["messages"] = []
    if "busy" not in st.session_state:
        st.session_state["busy"] = False
    if "intent" not in st.session_state:
        st.session_state["intent"] = "news"


# ----------------------------
# Backend calls
# ----------------------------
def send_to_backend(messages: List[Dict[str, str]], intent: str, profile: Optional[Dict[str, Any]]) -> str:
    body: Dict[str, Any] = {"messages": messages, "intent": intent}
    if profile:
        body["profile"] = profile

    resp = requests.post(f"{BACKEND_URL}/api/chat", json=body, timeout=60)
    payload = resp.json()
    if resp.status_code != 200:
        # Key line: show the stable error code, not a traceback.
        code = payload.get("error", "ERROR")
        return f"[{code}] {payload.get('message') or payload.get('details') or ''}".strip()
    return payload["answer"]


def fetch_health() -> Optional[Dict[str, Any]]:
    try:
        r = requests.get(f"{BACKEND_URL}/api/chat", timeout=10)
        if r.status_code != 200:
            return None
        return r.json()
    except requests.RequestException:
        return None


# ----------------------------
# Sidebar
# ----------------------------
def render_sidebar() -> Optional[Dict[str, Any]]:
    st.sidebar.title("ArkWork Agent")

    if st.sidebar.button("New chat", use_container_width=True, disabled=st.session_state["busy"]):
        st.session_state["messages"] = []
        st.rerun()

    st.session_state["intent"] = st.sidebar.radio(
        "Mode",
        options=list(INTENT_LABELS),
        format_func=lambda k: INTENT_LABELS[k],
        index=list(INTENT_LABELS).index(st.session_state["intent"]),
    )

    st.sidebar.divider()
    st.sidebar.subheader("Profil (opsional)")
    name = st.sidebar.text_input("Nama")
    role = st.sidebar.text_input("Role saat ini")
    skills = st.sidebar.text_input("Skills")
    location = st.sidebar.text_input("Lokasi")
    interests = st.sidebar.text_input("Minat")
    years = st.sidebar.number_input("Pengalaman (tahun)", min_value=0, max_value=60, value=0)

    profile: Dict[str, Any] = {
        k: v.strip()
        for k, v in {
            "name": name,
            "role": role,
            "skills": skills,
            "location": location,
            "interests": interests,
        }.items()
        if v and v.strip()
    }
    if years:
        profile["experienceYears"] = years

    st.sidebar.divider()
    health = fetch_health()
    if health is None:
        st.sidebar.error(f"Backend unreachable at {BACKEND_URL}")
    else:
        st.sidebar.caption(f"model: {health.get('model')} · key: {'yes' if health.get('hasKey') else 'no'}")

    return profile or None


# ----------------------------
# Chat
# ----------------------------
def render_chat() -> None:
    for msg in st.session_state["messages"]:
        with st.chat_message(msg["role"]):
            st.write(msg["content"])


# ----------------------------
# Main
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="ArkWork Agent", layout="wide")

    st.title("ArkWork Agent")
    st.caption("Berita migas, rekomendasi kerja, dan konsultasi karier energi.")

    ensure_session()
    profile = render_sidebar()
    render_chat()

    user_input = st.chat_input("Tanya seputar migas atau karier...", disabled=st.session_state["busy"])
    if not user_input:
        return

    # Echo user message immediately
    st.session_state["messages"].append({"role": "user", "content": user_input})
    with st.chat_message("user"):
        st.write(user_input)

    st.session_state["busy"] = True
    try:
        with st.spinner("Thinking..."):
            assistant_text = send_to_backend(
                st.session_state["messages"], st.session_state["intent"], profile
            )

        st.session_state["messages"].append({"role": "assistant", "content": assistant_text})
        with st.chat_message("assistant"):
            st.write(assistant_text)

    except (requests.RequestException, ValueError):
        msg = f"Backend tidak bisa dihubungi. Pastikan API berjalan di {BACKEND_URL}."
        st.session_state["messages"].pop()
        with st.chat_message("assistant"):
            st.error(msg)
    finally:
        st.session_state["busy"] = False


if __name__ == "__main__":
    main()
