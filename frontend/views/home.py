import streamlit as st

FEATURES = [
    ("Modelos e Preços", "Consulte os modelos de máquinas e seus preços."),
    ("Catálogo", "Linhas, agulhas e outros suprimentos."),
    ("Pesquise com Barudex", "Tire dúvidas com o assistente virtual."),
    ("Bate-Papo", "Mural de mensagens da equipe."),
    ("Taxa JPY/BRL", "Defina a taxa de referência do iene."),
    ("Gerar Pedido", "Preencha um pedido e gere o PDF."),
    ("Meus Pedidos", "Pedidos salvos, PDF e exclusão."),
]


def render():
    email = st.session_state.get("user_email") or ""
    st.title("Barudan do Brasil")
    if email:
        st.caption(f"Conectado como {email}")

    for title, description in FEATURES:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(f"**{title}**  \n{description}")
        with col2:
            if st.button("Abrir", key=f"home_{title}", use_container_width=True):
                st.session_state["nav_override"] = title
                st.rerun()
