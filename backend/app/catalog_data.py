"""
Static product and price catalog.

Machines with a ``jpy_price`` are priced from the reference JPY/BRL rate;
the others show their fixed ``price`` text. Product types keep the order in
which the catalog presents them.
"""

MACHINES: dict[str, list[dict]] = {
    "01 Cabeça": [
        {
            "name": "BEKT-S1501CA II",
            "type": "Industrial (Elite Jr)",
            "price": "Consulte-nos",
            "jpy_price": 2560000,
            "description": (
                "Máquina de um cabeçote com 15 agulhas, ideal para peças fechadas e bonés prontos.\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 250x400mm\n"
                "• Valor de Referência: ¥2.560.000 (Iene)"
            ),
        },
        {
            "name": "BEKT-S1501CBIII",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 2850000,
            "description": (
                "Máquina de um cabeçote com 15 agulhas, ideal para peças fechadas e bonés prontos.\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 360x500mm\n"
                "• Valor de Referência: ¥2.850.000 (Iene)"
            ),
        },
        {
            "name": "BEKT-S1501CBIII (B32)",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 3380000,
            "description": (
                "Equipada com dispositivo de Lantejoula SIMPLES (LF).\n\n"
                "• Área de Bordado: 360x500mm\n"
                "• Valor de Referência: ¥3.380.000 (Iene)"
            ),
        },
        {
            "name": "BEKT-S1501CBIII (B33)",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 4000000,
            "description": (
                "Equipada com dispositivo de Lantejoula DUPLO (LF+RH).\n\n"
                "• Área de Bordado: 360x500mm\n"
                "• Valor de Referência: ¥4.000.000 (Iene)"
            ),
        },
        {
            "name": "BEKT-S1501CBIII (B42)",
            "type": "Industrial",
            "price": "Consulte",
            "jpy_price": 3500000,
            "description": (
                "Equipada com dispositivo de Lantejoula GEMINADA SIMPLES.\n\n"
                "• Área de Bordado: 360x500mm\n"
                "• Valor de Referência: ¥3.500.000 (Iene)"
            ),
        },
        {
            "name": "BEKT-S1501CBIII (B43)",
            "type": "Industrial",
            "price": "Consulte",
            "jpy_price": 3700000,
            "description": (
                "Equipada com dispositivo de Lantejoula GEMINADA DUPLO.\n\n"
                "• Área de Bordado: 360x500mm\n"
                "• Valor de Referência: ¥3.700.000 (Iene)"
            ),
        },
        {
            "name": "BEKT-S1501CBIII - Campo Estendido",
            "type": "Industrial",
            "price": "Consulte",
            "jpy_price": 3960000,
            "description": (
                "Máquina de um cabeçote com 15 agulhas e campo estendido.\n\n"
                "• Velocidade Máxima: 1.000 PPM\n"
                "• Área de Bordado: 360x1200mm\n"
                "• Valor de Referência: ¥3.960.000 (Iene)"
            ),
        },
    ],
    "02 Cabeças": [
        {
            "name": "Modelo 2C-A",
            "type": "Industrial",
            "price": "R$ 25.000,00",
            "description": "Máquina de 2 cabeças para pequenas produções.",
        },
        {
            "name": "Modelo 2C-B",
            "type": "Industrial",
            "price": "R$ 28.500,00",
            "description": "Modelo avançado de 2 cabeças com painel touch.",
        },
    ],
    "04 Cabeças": [
        {
            "name": "BEKY Y904 HII",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 7720000,
            "description": (
                "quatro cabeçotes, 9 ag., de ponte, 1200 ppm c/ lubrificação SEMIautomática das lançadeiras\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 450x350mm\n"
                "• Valor de Referência: ¥7.720.000 (Iene)"
            ),
        },
        {
            "name": "BEKY Y904 HII - Campo Estendido",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 8100000,
            "description": (
                "Campo extendido 1200 ppm c/ lubrificação SEMIautomática das lançadeiras\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 600x350mm\n"
                "• Valor de Referência: ¥8.100.000 (Iene)"
            ),
        },
        {
            "name": "BEKY Y904 HII (Y39)",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 8800000,
            "description": (
                "C/ lantejoulas MULTICOLORIDA 1200 ppm c/ lubrificação SEMIautomática das lançadeiras\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 450x350mm\n"
                "• Valor de Referência: ¥8.800.000 (Iene)"
            ),
        },
        {
            "name": "BEKY Y904 HII (Y49)",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 9350000,
            "description": (
                "Lantej Multicolorida GEMINADA 1200 ppm c/ lubrificação SEMIautomática das lançadeiras\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 450x350mm\n"
                "• Valor de Referência: ¥9.350.000 (Iene)"
            ),
        },
    ],
    "06 Cabeças": [
        {
            "name": "BEKY Y906 HII",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 8800000,
            "description": (
                "seis cabeçotes, 9 ag., de ponte, 1200 ppm c/ lubrificação SEMIautomática das lançadeiras\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 450x350mm\n"
                "• Valor de Referência: ¥8.800.000 (Iene)"
            ),
        },
        {
            "name": "BEKY Y906 HII - Campo Estendido",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 9180000,
            "description": (
                "Campo extendido 1200 ppm c/ lubrificação SEMIautomática das lançadeiras\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 600x350mm\n"
                "• Valor de Referência: ¥9.180.000 (Iene)"
            ),
        },
        {
            "name": "BEKY Y906 HII (Y39)",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 9880000,
            "description": (
                "C/ lantejoulas MULTICOLORIDA 1200 ppm c/ lubrificação SEMIautomática das lançadeiras\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 450x350mm\n"
                "• Valor de Referência: ¥9.880.000 (Iene)"
            ),
        },
        {
            "name": "BEKY Y906 HII (Y49)",
            "type": "Industrial",
            "price": "Consulte-nos",
            "jpy_price": 10430000,
            "description": (
                "Lantej Multicolorida GEMINADA 1200 ppm c/ lubrificação SEMIautomática das lançadeiras\n\n"
                "• Velocidade Máxima: 1.200 PPM\n"
                "• Área de Bordado: 450x350mm\n"
                "• Valor de Referência: ¥10.430.000 (Iene)"
            ),
        },
    ],
    "08 Cabeças": [
        {
            "name": "Modelo 8C-Max",
            "type": "Industrial",
            "price": "R$ 65.000,00",
            "description": "Para grandes volumes de produção, robusta e confiável.",
        },
    ],
    "12 Cabeças": [
        {
            "name": "Modelo 12C-Ultra",
            "type": "Industrial",
            "price": "R$ 90.000,00",
            "description": "Performance máxima para a indústria de bordados.",
        },
    ],
    "Drop-Table": [
        {
            "name": "Mesa de Lantejoula DT-100",
            "type": "Acessório",
            "price": "R$ 15.000,00",
            "description": "Dispositivo para aplicação de lantejoulas em máquinas de mesa.",
        },
    ],
    "Acessórios": [
        {
            "name": "Kit de Agulhas Groz-Beckert",
            "type": "Consumível",
            "price": "R$ 150,00",
            "description": "Caixa com 100 agulhas de alta qualidade para diversos tecidos.",
        },
        {
            "name": "Bastidor Magnético 15x15cm",
            "type": "Acessório",
            "price": "R$ 450,00",
            "description": "Facilita a fixação de tecidos difíceis.",
        },
    ],
}

SUPPLIES: list[dict] = [
    {
        "name": "Linha de Bordar Ricamare",
        "price": "R$ 15,00",
        "image": "https://i.ibb.co/6gYCFyN/linha-ricamare.jpg",
    },
    {
        "name": "Agulhas Groz-Beckert",
        "price": "R$ 150,00",
        "image": "https://i.ibb.co/pwns0yV/agulha-groz-beckert.jpg",
    },
    {
        "name": "Entretela Rasgável",
        "price": "R$ 80,00",
        "image": "https://i.ibb.co/fDbk3G6/entretela-rasgavel.jpg",
    },
    {
        "name": "Óleo Singer",
        "price": "R$ 12,00",
        "image": "https://i.ibb.co/hK7dYgR/oleo-singer.jpg",
    },
    {
        "name": "Bastidor Magnético",
        "price": "R$ 450,00",
        "image": "https://i.ibb.co/zNcz7z0/bastidor-magnetico.jpg",
    },
    {
        "name": "Tesoura de Arremate",
        "price": "R$ 25,00",
        "image": "https://i.ibb.co/R9m4HjX/tesoura-arremate.jpg",
    },
]

# Letterhead printed on every order PDF
COMPANY_LETTERHEAD = {
    "name": "Barudan do Brasil Com. e Ind. Ltda.",
    "lines": [
        "Av. Gomes Freire, 574 - Centro Rio de Janeiro - RJ - Cep: 20231-015",
        "Tel.: (21) 2506-0050 - Fax: (21) 2506-0070",
        "Website: www.barudan.com.br - E-mail: sac@barudan.com.br",
        "CNPJ: 40.375.636/0001-32 - Inscrição Estadual: 84.369.381",
    ],
}
