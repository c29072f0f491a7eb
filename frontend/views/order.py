import streamlit as st
from utils.api import APIClient, error_message
from utils.formatters import order_pdf_filename, today_iso
from config import API_URL

api = APIClient(API_URL)

LETTERHEAD = [
    "Av. Gomes Freire, 574 - Centro Rio de Janeiro - RJ - Cep: 20231-015",
    "Tel.: (21) 2506-0050 - Fax: (21) 2506-0070",
    "Website: www.barudan.com.br - E-mail: sac@barudan.com.br",
    "CNPJ: 40.375.636/0001-32 - Inscrição Estadual: 84.369.381",
]

ORDER_FIELDS = [
    "order_number", "order_date", "seller_name", "sale_type",
    "client_company_name", "client_cnpj", "client_state_registration",
    "client_address", "client_district", "client_zip_code", "client_city",
    "client_state", "client_phone", "client_email", "client_contact",
    "carrier", "product_quantity", "product_description", "total_value", "notes",
]


def empty_order() -> dict:
    order = {field: "" for field in ORDER_FIELDS}
    order["order_date"] = today_iso()
    order["product_quantity"] = "1"
    return order


def _load_number(order: dict):
    """Reserve a number the first time the form is shown."""
    if order["order_number"]:
        return
    order["order_number"] = "Carregando..."
    result = api.next_order_number()
    if result["status"] == 200:
        order["order_number"] = result["data"]["order_number"]
    else:
        order["order_number"] = "ERRO!"
        st.error(error_message(result, "Falha ao obter o número do próximo pedido."))


def _form(order: dict, readonly: bool) -> tuple[dict, bool]:
    values = dict(order)
    with st.form("order_form"):
        head_left, head_right = st.columns([3, 2])
        with head_left:
            st.markdown("**Barudan do Brasil Com. e Ind. Ltda.**")
            st.caption("  \n".join(LETTERHEAD))
        with head_right:
            c1, c2 = st.columns(2)
            c1.text_input("Nº Pedido", value=order["order_number"], disabled=True)
            values["order_date"] = c2.text_input("Data", value=order["order_date"], disabled=readonly)
            values["seller_name"] = st.text_input("Vendedor", value=order["seller_name"], disabled=readonly)
            values["sale_type"] = st.text_input("Tipo de Venda", value=order["sale_type"], disabled=readonly)

        st.subheader("Dados do Cliente")
        values["client_company_name"] = st.text_input(
            "Razão Social", value=order["client_company_name"], disabled=readonly)
        c1, c2, c3 = st.columns(3)
        values["client_cnpj"] = c1.text_input("CNPJ", value=order["client_cnpj"], max_chars=18, disabled=readonly)
        values["client_state_registration"] = c2.text_input(
            "Inscrição Estadual", value=order["client_state_registration"], disabled=readonly)
        values["client_phone"] = c3.text_input(
            "Telefone", value=order["client_phone"], max_chars=20, disabled=readonly)
        values["client_address"] = st.text_input("Endereço", value=order["client_address"], disabled=readonly)
        c1, c2 = st.columns(2)
        values["client_district"] = c1.text_input("Bairro", value=order["client_district"], disabled=readonly)
        values["client_city"] = c2.text_input("Cidade", value=order["client_city"], disabled=readonly)
        c1, c2, c3 = st.columns([2, 1, 3])
        values["client_zip_code"] = c1.text_input(
            "CEP", value=order["client_zip_code"], max_chars=9, disabled=readonly)
        values["client_state"] = c2.text_input("UF", value=order["client_state"], max_chars=2, disabled=readonly)
        values["client_contact"] = c3.text_input(
            "Contato (A/C)", value=order["client_contact"], disabled=readonly)
        values["client_email"] = st.text_input("E-mail", value=order["client_email"], disabled=readonly)

        st.subheader("Produto / Observações")
        values["product_quantity"] = st.text_input(
            "Quantidade", value=order["product_quantity"], disabled=readonly)
        values["product_description"] = st.text_area(
            "Descrição do Produto", value=order["product_description"], disabled=readonly)
        values["notes"] = st.text_area("Observação Geral", value=order["notes"], disabled=readonly)

        st.subheader("Condições Comerciais")
        values["total_value"] = st.text_input("Valor Total (R$)", value=order["total_value"], disabled=readonly)

        st.subheader("Transporte")
        values["carrier"] = st.text_input("Transportadora", value=order["carrier"], disabled=readonly)

        label = "Baixar PDF Novamente" if readonly else "Salvar e Gerar PDF"
        submitted = st.form_submit_button(label, use_container_width=True)

    return values, submitted


def _offer_download(pdf: bytes, order_number: str):
    st.download_button(
        "Baixar PDF",
        data=pdf,
        file_name=order_pdf_filename(order_number),
        mime="application/pdf",
        use_container_width=True,
    )


def _render_view_mode(order: dict):
    st.title("Detalhes do Pedido")
    if st.button("← Voltar para Meus Pedidos"):
        st.session_state["viewing_order"] = None
        st.session_state["nav_override"] = "Meus Pedidos"
        st.rerun()

    _, submitted = _form(order, readonly=True)
    if submitted:
        result = api.get_order_pdf(order["id"])
        if result["status"] == 200:
            _offer_download(result["data"], order["order_number"])
        else:
            st.error(error_message(result, "Ocorreu um erro ao gerar o PDF."))


def render():
    viewing = st.session_state.get("viewing_order")
    if viewing:
        _render_view_mode(viewing)
        return

    st.title("Gerar Pedido")
    if st.session_state.get("draft_order") is None:
        st.session_state["draft_order"] = empty_order()
    order = st.session_state["draft_order"]
    _load_number(order)

    values, submitted = _form(order, readonly=False)
    if not submitted:
        return

    if values["order_number"] in ("Carregando...", "ERRO!"):
        values["order_number"] = ""

    with st.spinner("Processando..."):
        saved = api.create_order(values)
    if saved["status"] != 201:
        st.error(error_message(saved, "Falha ao salvar o pedido."))
        return

    pdf = api.get_order_pdf(saved["data"]["id"])
    st.session_state["draft_order"] = None
    if pdf["status"] == 200:
        st.success("Pedido salvo e PDF gerado com sucesso!")
        _offer_download(pdf["data"], saved["data"]["order_number"])
    else:
        st.warning("Pedido salvo, mas o PDF não pôde ser gerado.")
