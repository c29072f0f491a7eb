"""
Global styles for the portal UI, in a light and a dark theme.
"""

THEMES = {
    "light": {
        "bg_primary": "#f3f4f6",
        "bg_card": "#ffffff",
        "border": "#e5e7eb",
        "text_primary": "#111827",
        "text_secondary": "#4b5563",
        "accent_blue": "#2563eb",
        "bubble_user": "#2563eb",
        "bubble_ai": "#e5e7eb",
        "bubble_error": "#fee2e2",
    },
    "dark": {
        "bg_primary": "#111827",
        "bg_card": "#1f2937",
        "border": "#374151",
        "text_primary": "#f9fafb",
        "text_secondary": "#9ca3af",
        "accent_blue": "#3b82f6",
        "bubble_user": "#2563eb",
        "bubble_ai": "#374151",
        "bubble_error": "#7f1d1d",
    },
}


def get_colors(theme: str) -> dict:
    return THEMES.get(theme, THEMES["light"])


def get_global_css(theme: str = "light") -> str:
    """Return global CSS for the given theme."""
    c = get_colors(theme)
    user_text = "#ffffff"
    return f"""
    <style>
        .stApp {{
            background: {c['bg_primary']};
            color: {c['text_primary']};
        }}

        .portal-card {{
            background: {c['bg_card']};
            border: 1px solid {c['border']};
            border-radius: 12px;
            padding: 16px;
            margin-bottom: 12px;
        }}

        .portal-card-title {{
            color: {c['text_primary']};
            font-size: 16px;
            font-weight: 600;
            margin-bottom: 4px;
        }}

        .portal-card-meta {{
            color: {c['text_secondary']};
            font-size: 12px;
            margin-bottom: 8px;
        }}

        .portal-price {{
            font-size: 20px;
            font-weight: 700;
        }}

        .chat-bubble {{
            border-radius: 16px;
            padding: 8px 14px;
            margin: 4px 0;
            max-width: 80%;
            white-space: pre-wrap;
        }}

        .chat-user {{
            background: {c['bubble_user']};
            color: {user_text};
            margin-left: auto;
        }}

        .chat-ai {{
            background: {c['bubble_ai']};
            color: {c['text_primary']};
        }}

        .chat-error {{
            background: {c['bubble_error']};
            color: {c['text_primary']};
        }}

        .chat-author {{
            color: {c['text_secondary']};
            font-size: 11px;
        }}
    </style>
    """


def inject_styles(theme: str = "light"):
    """Inject global styles into the Streamlit app."""
    import streamlit as st
    st.markdown(get_global_css(theme), unsafe_allow_html=True)
