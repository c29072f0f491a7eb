# views/login.py

import streamlit as st
from utils.api import APIClient, error_message
from config import API_URL

api = APIClient(API_URL)


def _start_session(token_data: dict):
    st.session_state.token = token_data["access_token"]
    st.session_state.user_id = token_data.get("user_id")
    st.session_state.user_email = token_data.get("email")
    st.session_state["is_authenticated"] = True
    st.session_state["nav_page"] = "Início"


def render():
    st.title("Barudan do Brasil")
    st.caption("Acesse com seu e-mail corporativo. No primeiro acesso a conta é criada.")

    tab1, tab2 = st.tabs(["Entrar", "Cadastrar"])

    with tab1:
        with st.form("login_form"):
            email = st.text_input("E-mail")
            password = st.text_input("Senha", type="password")
            submitted = st.form_submit_button("Entrar", use_container_width=True)

            if submitted:
                if not email or not password:
                    st.warning("Informe e-mail e senha.")
                else:
                    result = api.sign_in(email, password)
                    if result["status"] == 200:
                        _start_session(result["data"])
                        if result["data"].get("created"):
                            st.session_state["flash"] = "Conta criada com sucesso!"
                        st.rerun()
                    else:
                        st.error(f"Falha ao entrar: {error_message(result, 'Credenciais inválidas')}")

    with tab2:
        with st.form("register_form"):
            email = st.text_input("E-mail", key="reg_email")
            new_password = st.text_input("Senha", type="password", key="reg_password")
            confirm_password = st.text_input("Confirmar senha", type="password")
            submitted = st.form_submit_button("Cadastrar", use_container_width=True)

            if submitted:
                if not all([email, new_password, confirm_password]):
                    st.warning("Preencha todos os campos.")
                elif new_password != confirm_password:
                    st.error("As senhas não coincidem.")
                else:
                    result = api.register(email, new_password, confirm_password)
                    if result["status"] in [200, 201]:
                        st.success("Cadastro realizado! Faça login na aba Entrar.")
                    else:
                        st.error(f"Falha no cadastro: {error_message(result, 'Erro no cadastro')}")
