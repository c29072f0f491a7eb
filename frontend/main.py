import streamlit as st
from streamlit_option_menu import option_menu
from views import login, home, models, catalog, assistant, board, exchange_rate, order, my_orders
from utils.styles import inject_styles
from config import APP_NAME, NAV_PAGES, NAV_ICONS

PAGES = {
    "Início": home,
    "Modelos e Preços": models,
    "Catálogo": catalog,
    "Pesquise com Barudex": assistant,
    "Bate-Papo": board,
    "Taxa JPY/BRL": exchange_rate,
    "Gerar Pedido": order,
    "Meus Pedidos": my_orders,
}


def init_session():
    defaults = {
        "is_authenticated": False,
        "user_id": None,
        "user_email": None,
        "token": None,
        "theme": "light",
        "nav_page": "Início",
        "nav_override": None,
        "assistant_messages": [],
        "draft_order": None,
        "viewing_order": None,
        "flash": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def logout():
    # Sign-out only drops the token held by this session
    for key in list(st.session_state.keys()):
        if key != "theme":
            del st.session_state[key]
    init_session()
    st.rerun()


def main():
    st.set_page_config(page_title=APP_NAME, layout="wide")
    init_session()
    inject_styles(st.session_state["theme"])

    if not st.session_state["is_authenticated"]:
        login.render()
        st.stop()

    # --- Programmatic navigation (home buttons, opening an order)
    nav_override = st.session_state.get("nav_override")
    if nav_override:
        st.session_state["nav_page"] = nav_override
        st.session_state["nav_override"] = None
        # new key forces the menu widget to pick up the new index
        st.session_state["nav_key"] = st.session_state.get("nav_key", 0) + 1
        st.rerun()

    with st.sidebar:
        current_page = st.session_state.get("nav_page", "Início")
        try:
            default_index = NAV_PAGES.index(current_page)
        except ValueError:
            default_index = 0

        page_selected = option_menu(
            menu_title=APP_NAME,
            options=NAV_PAGES,
            icons=NAV_ICONS,
            default_index=default_index,
            key=f"main_nav_{st.session_state.get('nav_key', 0)}",
        )

        if page_selected != current_page:
            st.session_state["nav_page"] = page_selected
            # leaving the order page ends view mode
            st.session_state["viewing_order"] = None
            st.rerun()

        st.divider()
        dark = st.toggle("Tema escuro", value=st.session_state["theme"] == "dark")
        theme = "dark" if dark else "light"
        if theme != st.session_state["theme"]:
            st.session_state["theme"] = theme
            st.rerun()

        if st.button("Sair", use_container_width=True):
            logout()

    flash = st.session_state.get("flash")
    if flash:
        st.success(flash)
        st.session_state["flash"] = None

    page = st.session_state.get("nav_page", "Início")
    PAGES.get(page, home).render()


if __name__ == "__main__":
    main()
