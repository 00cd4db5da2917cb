import pytest
from pydantic import ValidationError

from config import request_timeout
from errors import AuthorizationError, ConfigError, MalformedResponseError, NetworkError
from models import AUTH_TABS, DASHBOARD_TABS, BookPanel, Interaction, Placeholder, Section, Session, View


def test_interaction_rating_bounds():
    assert Interaction(book_id=1, rating=5).rating == 5
    with pytest.raises(ValidationError):
        Interaction(book_id=1, rating=6)


def test_interaction_accepts_wire_alias():
    assert Interaction.model_validate({"bookId": 9, "liked": True}).book_id == 9


def test_session_authentication_flag():
    assert Session("T1").is_authenticated
    assert not Session().is_authenticated
    assert not Session("").is_authenticated


def test_every_view_has_one_section():
    assert {v.section for v in View} == {Section.AUTH, Section.DASHBOARD}
    assert View.DASHBOARD_ADD_BOOK.tab == "add-book"


def test_tab_lists_cover_each_section():
    assert all(v.section is Section.AUTH for v in AUTH_TABS)
    assert all(v.section is Section.DASHBOARD for v in DASHBOARD_TABS)
    assert set(AUTH_TABS) | set(DASHBOARD_TABS) == set(View)


def test_panel_switches_between_books_and_placeholder():
    empty = Placeholder("Nothing")
    panel = BookPanel()

    panel.show_books([], empty)
    assert panel.placeholder == empty

    panel.show_placeholder(Placeholder("Loading"))
    assert panel.books == []
    assert panel.placeholder.title == "Loading"


def test_error_hierarchy():
    assert issubclass(MalformedResponseError, NetworkError)
    err = AuthorizationError(403, text="forbidden")
    assert err.to_dict()["error_code"] == "AUTHORIZATION_ERROR"
    assert err.details["status_code"] == 403


@pytest.mark.parametrize("raw, expected", [("", None), ("  ", None), ("2.5", 2.5)])
def test_request_timeout_parsing(raw, expected):
    assert request_timeout(raw) == expected


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_invalid_request_timeout(raw):
    with pytest.raises(ConfigError):
        request_timeout(raw)
