import os

API_URL = os.getenv("API_URL", "http://localhost:8000")

APP_NAME = "Barudan do Brasil"

# Seconds between board refreshes while the board page is open
BOARD_REFRESH_SECONDS = 5

NAV_PAGES = [
    "Início",
    "Modelos e Preços",
    "Catálogo",
    "Pesquise com Barudex",
    "Bate-Papo",
    "Taxa JPY/BRL",
    "Gerar Pedido",
    "Meus Pedidos",
]

NAV_ICONS = [
    "house",
    "gear-wide-connected",
    "grid",
    "robot",
    "chat-dots",
    "currency-exchange",
    "file-earmark-text",
    "clock-history",
]
