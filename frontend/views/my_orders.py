import streamlit as st
from utils.api import APIClient, error_message
from utils.formatters import format_date, format_timestamp
from config import API_URL

api = APIClient(API_URL)


def _open(order: dict):
    st.session_state["viewing_order"] = order
    st.session_state["nav_override"] = "Gerar Pedido"
    st.rerun()


def _delete_all_section(has_orders: bool):
    with st.expander("Excluir todos os pedidos"):
        st.warning(
            "Isso excluirá TODOS os seus pedidos e reiniciará a contagem de "
            "numeração para 1387. Esta ação é irreversível."
        )
        confirmed = st.checkbox("Tenho certeza")
        if st.button("Excluir tudo", disabled=not (confirmed and has_orders), type="primary"):
            result = api.delete_all_orders()
            if result["status"] == 200:
                st.success("Todos os pedidos foram excluídos e o contador foi reiniciado com sucesso.")
                st.rerun()
            else:
                st.error(error_message(result, "Falha ao excluir todos os pedidos."))


def render():
    st.title("Meus Pedidos")

    result = api.list_orders()
    if result["status"] != 200:
        st.error(error_message(result, "Não foi possível carregar os pedidos."))
        return

    orders = result["data"] or []
    if not orders:
        st.info("Nenhum pedido salvo ainda.")

    for order in orders:
        with st.container(border=True):
            col1, col2, col3 = st.columns([4, 1, 1])
            with col1:
                st.markdown(f"**Pedido Nº: {order.get('order_number') or 'N/A'}**")
                st.caption(
                    f"{order.get('client_company_name') or 'Cliente não informado'} · "
                    f"{format_date(order.get('order_date'))} · "
                    f"criado em {format_timestamp(order.get('created_at'))}"
                )
            with col2:
                if st.button("Abrir", key=f"open_{order['id']}", use_container_width=True):
                    _open(order)
            with col3:
                if st.button("Excluir", key=f"delete_{order['id']}", use_container_width=True):
                    deleted = api.delete_order(order["id"])
                    if deleted["status"] == 204:
                        st.rerun()
                    else:
                        st.error(error_message(deleted, "Falha ao excluir o pedido."))

    st.divider()
    _delete_all_section(bool(orders))
