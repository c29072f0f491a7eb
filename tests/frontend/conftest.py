"""
Frontend test fixtures and mocks.

Mocks Streamlit session_state and HTTP responses for isolated testing.
"""
import pytest
from unittest.mock import MagicMock, patch


class MockSessionState(dict):
    """Mock st.session_state that behaves like both dict and attribute access."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Default state
        self.update({
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
        })

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"'SessionState' has no attribute '{name}'")

    def __setattr__(self, name, value):
        self[name] = value


@pytest.fixture
def mock_session_state():
    """Provide a mock session state for testing."""
    return MockSessionState()


@pytest.fixture
def authenticated_session_state():
    """Provide an authenticated mock session state."""
    state = MockSessionState()
    state.update({
        "is_authenticated": True,
        "user_id": "user-123",
        "user_email": "vendedor@barudan.com.br",
        "token": "test-jwt-token",
    })
    return state


@pytest.fixture
def api_client(authenticated_session_state):
    """APIClient whose Streamlit session holds a token."""
    from frontend.utils import api

    with patch.object(api, "st", MagicMock(session_state=authenticated_session_state)):
        yield api.APIClient("http://backend:8000")


def make_response(status_code: int = 200, json_data=None, content: bytes = b""):
    """Build a fake requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.content = content
    if json_data is None:
        resp.text = content.decode("latin-1") if content else ""
        resp.json.side_effect = ValueError("No JSON")
    else:
        resp.text = "json"
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def fake_response():
    """Factory for fake requests.Response objects."""
    return make_response
