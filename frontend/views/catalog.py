import streamlit as st
from utils.api import APIClient, error_message
from config import API_URL

api = APIClient(API_URL)

COLUMNS = 3


def render():
    st.title("Catálogo")

    result = api.list_supplies()
    if result["status"] != 200:
        st.error(error_message(result, "Não foi possível carregar o catálogo."))
        return

    supplies = result["data"] or []
    for start in range(0, len(supplies), COLUMNS):
        cols = st.columns(COLUMNS)
        for col, item in zip(cols, supplies[start:start + COLUMNS]):
            with col:
                st.image(item["image"], use_container_width=True)
                st.markdown(f"**{item['name']}**  \n{item['price']}")
