"""
Order models for sales_db.orders.
"""
from pydantic import BaseModel

# Order numbers start here; the counter is reset to STARTING_ORDER_NUMBER - 1
STARTING_ORDER_NUMBER = 1387

# Values the order form shows while no number is available
PLACEHOLDER_ORDER_NUMBERS = ("Carregando...", "ERRO!")


class OrderFields(BaseModel):
    """Editable fields of the purchase order form."""
    order_number: str = ""
    order_date: str = ""
    seller_name: str = ""
    sale_type: str = ""
    client_company_name: str = ""
    client_cnpj: str = ""
    client_state_registration: str = ""
    client_address: str = ""
    client_district: str = ""
    client_zip_code: str = ""
    client_city: str = ""
    client_state: str = ""
    client_phone: str = ""
    client_email: str = ""
    client_contact: str = ""
    carrier: str = ""
    product_quantity: str = "1"
    product_description: str = ""
    total_value: str = ""
    notes: str = ""
