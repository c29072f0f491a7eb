import streamlit as st
from utils.api import APIClient, error_message
from config import API_URL

api = APIClient(API_URL)

FALLBACK_GREETING = (
    "Olá! Eu sou Barudex, o assistente virtual da Barudan do Brasil. "
    "Como posso te ajudar hoje?"
)
ERROR_TEXT = "Desculpe, ocorreu um erro. Por favor, tente novamente."


def _messages() -> list[dict]:
    if not st.session_state.get("assistant_messages"):
        result = api.get_greeting()
        text = result["data"]["text"] if result["status"] == 200 else FALLBACK_GREETING
        st.session_state["assistant_messages"] = [{"sender": "ai", "text": text}]
    return st.session_state["assistant_messages"]


def _ask(messages: list[dict], prompt: str, curiosity: bool = False):
    # history is what was on screen before this prompt
    history = list(messages)
    messages.append({"sender": "user", "text": prompt})
    with st.spinner("Barudex está pensando..."):
        if curiosity:
            result = api.ask_curiosity(history)
        else:
            result = api.send_chat(prompt, history)

    if result["status"] == 200:
        messages.append({"sender": "ai", "text": result["data"]["text"]})
    else:
        messages.append({"sender": "error", "text": error_message(result, ERROR_TEXT)})


def render():
    st.title("Pesquise com Barudex")

    messages = _messages()

    for message in messages:
        if message["sender"] == "user":
            with st.chat_message("user"):
                st.write(message["text"])
        elif message["sender"] == "error":
            with st.chat_message("assistant"):
                st.error(message["text"])
        else:
            with st.chat_message("assistant"):
                st.write(message["text"])

    col1, col2 = st.columns([3, 1])
    with col1:
        if st.button("Curiosidade sobre bordado", use_container_width=True):
            _ask(messages, "Me fale um fato interessante sobre bordado.", curiosity=True)
            st.rerun()
    with col2:
        if st.button("Limpar", use_container_width=True):
            st.session_state["assistant_messages"] = []
            st.rerun()

    prompt = st.chat_input("Pergunte algo ao Barudex...")
    if prompt:
        _ask(messages, prompt)
        st.rerun()
