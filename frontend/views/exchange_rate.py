import pandas as pd
import streamlit as st
from utils.api import APIClient, error_message
from utils.formatters import comparison_color, format_rate, format_timestamp
from config import API_URL

api = APIClient(API_URL)


def _reference_section():
    result = api.get_reference_rate()
    reference = result["data"] if result["status"] == 200 else None

    st.subheader("Taxa de referência")
    if reference:
        st.metric("JPY → BRL", format_rate(reference["current_rate"]))
        st.caption(
            f"Atualizada por {reference['last_updated_by']} em "
            f"{format_timestamp(reference.get('last_updated_at'))}"
        )
    else:
        st.info("Nenhuma taxa de referência definida.")

    with st.form("reference_rate_form"):
        rate = st.number_input(
            "Nova taxa (BRL por 1 JPY)",
            min_value=0.0,
            value=float(reference["current_rate"]) if reference else 0.0,
            step=0.0001,
            format="%.4f",
        )
        submitted = st.form_submit_button("Salvar taxa")

    if submitted:
        if rate <= 0:
            st.error("A taxa deve ser um número maior que zero.")
        else:
            update = api.set_reference_rate(rate)
            if update["status"] == 200:
                st.success("Taxa de referência salva!")
                st.rerun()
            else:
                st.error(error_message(update, "Falha ao salvar a taxa."))


def _live_section():
    st.subheader("Cotação atual")
    if not st.button("Buscar cotação atual"):
        return

    with st.spinner("Buscando cotação..."):
        result = api.get_live_rate()
    if result["status"] != 200:
        st.error(error_message(result, "Ocorreu um erro ao buscar a cotação atual."))
        return

    live = result["data"]
    st.metric("Mercado JPY → BRL", format_rate(live["rate"]))
    comparison = live.get("comparison")
    if comparison:
        color = comparison_color(comparison["status"])
        st.markdown(
            f"<span style='color: {color};'>{comparison['message']}</span>",
            unsafe_allow_html=True,
        )


def _history_section():
    st.subheader("Histórico")
    result = api.get_rate_history()
    if result["status"] != 200:
        st.error(error_message(result, "Não foi possível carregar o histórico."))
        return

    entries = result["data"] or []
    if not entries:
        st.caption("Sem alterações registradas.")
        return

    df = pd.DataFrame([
        {
            "Taxa": format_rate(e["rate"]),
            "Alterada por": e["updated_by"],
            "Data": format_timestamp(e.get("updated_at")),
        }
        for e in entries
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)


def render():
    st.title("Taxa JPY/BRL")
    _reference_section()
    st.divider()
    _live_section()
    st.divider()
    _history_section()
