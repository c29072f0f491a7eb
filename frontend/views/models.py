import streamlit as st
from utils.api import APIClient, error_message
from utils.formatters import format_rate, price_status_color
from config import API_URL

api = APIClient(API_URL)


def render():
    st.title("Modelos e Preços")

    types_result = api.list_product_types()
    if types_result["status"] != 200:
        st.error(error_message(types_result, "Não foi possível carregar os tipos de produto."))
        return

    product_types = types_result["data"] or []
    product_type = st.radio("Tipo de produto", product_types, horizontal=True)
    if not product_type:
        return

    result = api.get_models(product_type)
    if result["status"] != 200:
        st.error(error_message(result, "Não foi possível carregar os modelos."))
        return

    data = result["data"]
    if data.get("reference_rate"):
        st.caption(f"Taxa de referência JPY/BRL: {format_rate(data['reference_rate'])}")
    elif any(m.get("price_status") == "rate_missing" for m in data["models"]):
        st.warning("Defina a taxa na página 'Taxa JPY/BRL'.")

    for model in data["models"]:
        color = price_status_color(model["price_status"])
        st.markdown(
            f"""
            <div class="portal-card">
                <div class="portal-card-title">{model['name']}</div>
                <div class="portal-card-meta">{model['type']}</div>
                <div class="portal-price" style="color: {color};">{model['price']}</div>
            </div>
            """,
            unsafe_allow_html=True,
        )
        with st.expander("Detalhes"):
            st.text(model["description"])
