import html

import streamlit as st
from utils.api import APIClient, error_message
from utils.formatters import author_name, format_timestamp
from config import API_URL, BOARD_REFRESH_SECONDS

api = APIClient(API_URL)


@st.fragment(run_every=BOARD_REFRESH_SECONDS)
def _message_list():
    result = api.list_board_messages()
    if result["status"] != 200:
        st.error(error_message(result, "Não foi possível carregar as mensagens."))
        return

    messages = result["data"] or []
    if not messages:
        st.info("Nenhuma mensagem ainda. Seja o primeiro a escrever!")
        return

    own_id = st.session_state.get("user_id")
    for message in messages:
        css = "chat-user" if message["user_id"] == own_id else "chat-ai"
        st.markdown(
            f"""
            <div class="chat-author">{html.escape(author_name(message['user_email']))}
                · {format_timestamp(message.get('created_at'))}</div>
            <div class="chat-bubble {css}">{html.escape(message['text'])}</div>
            """,
            unsafe_allow_html=True,
        )


def render():
    st.title("Bate-Papo")

    _message_list()

    with st.form("board_form", clear_on_submit=True):
        text = st.text_area("Mensagem", height=80)
        submitted = st.form_submit_button("Enviar")

    if submitted:
        if not text.strip():
            st.warning("Escreva uma mensagem.")
        else:
            result = api.post_board_message(text)
            if result["status"] == 201:
                st.rerun()
            else:
                st.error(error_message(result, "Falha ao enviar a mensagem."))
