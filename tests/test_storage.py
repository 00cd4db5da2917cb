from unittest.mock import Mock

from models import Session
from storage import CookieStorage, SessionStore

from conftest import DictStorage


def test_save_and_load_round_trip():
    store = SessionStore(DictStorage())

    store.save(Session("T1", "a@b.com"))

    assert store.load() == Session("T1", "a@b.com")


def test_missing_email_still_restores_token():
    store = SessionStore(DictStorage({"authToken": "T1"}))

    assert store.load() == Session("T1", None)


def test_non_string_email_is_dropped():
    store = SessionStore(DictStorage({"authToken": "T1", "userEmail": {"bad": 1}}))

    assert store.load().email is None


def test_clear_removes_both_keys():
    storage = DictStorage({"authToken": "T1", "userEmail": "a@b.com", "other": "keep"})

    SessionStore(storage).clear()

    assert storage.data == {"other": "keep"}


def test_cookie_storage_uses_unique_widget_keys():
    manager = Mock()
    cookies = CookieStorage(manager, ttl_days=1)

    cookies.set("authToken", "T1")
    cookies.set("userEmail", "a@b.com")

    keys = [c.kwargs["key"] for c in manager.set.call_args_list]
    assert keys == ["set-authToken", "set-userEmail"]
    assert manager.set.call_args_list[0].args == ("authToken", "T1")
    assert manager.set.call_args_list[0].kwargs["expires_at"] is not None


def test_cookie_storage_skips_deleting_absent_cookie():
    manager = Mock()
    manager.get.return_value = None

    CookieStorage(manager).delete("authToken")

    manager.delete.assert_not_called()


def test_cookie_storage_deletes_present_cookie():
    manager = Mock()
    manager.get.return_value = "T1"

    CookieStorage(manager).delete("authToken")

    manager.delete.assert_called_once_with("authToken", key="delete-authToken")
