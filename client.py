"""HTTP client for the book catalog backend."""

from typing import Dict, List, Optional
from urllib.parse import quote

import requests
from pydantic import TypeAdapter, ValidationError

from errors import AuthorizationError, BackendError, MalformedResponseError, NetworkError
from log import get_logger
from models import Book, BookId, Interaction, LoginResponse, Session

logger = get_logger(__name__)

_BOOK_LIST = TypeAdapter(List[Book])


class BookCatalogClient:
    """Thin wrapper over the REST endpoints.

    Every call has three outcomes: a decoded result, a ``BackendError``
    (``AuthorizationError`` for 401/403), or a ``NetworkError`` when the
    request never completed or returned an unusable body.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    # Auth --------------------------------------------------------------------
    def signup(self, name: str, email: str, password: str) -> str:
        resp = self._request("POST", "/auth/signup", json={"name": name, "email": email, "password": password})
        return resp.text

    def login(self, email: str, password: str) -> str:
        resp = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._decode(resp, LoginResponse.model_validate).token

    # Books -------------------------------------------------------------------
    def search_books(self, session: Session, title: str = "") -> List[Book]:
        resp = self._request("GET", "/books/search", session=session, params={"title": title or ""})
        return self._decode(resp, _BOOK_LIST.validate_python)

    def get_book(self, session: Session, book_id: BookId) -> Book:
        resp = self._request("GET", f"/books/{quote(str(book_id), safe='')}", session=session)
        return self._decode(resp, Book.model_validate)

    def books_by_genre(self, session: Session, genre: str) -> List[Book]:
        resp = self._request("GET", f"/books/genre/{quote(genre, safe='')}", session=session)
        return self._decode(resp, _BOOK_LIST.validate_python)

    def add_book(self, session: Session, title: str, author: str, genre: str) -> None:
        self._request(
            "POST",
            "/books/add",
            session=session,
            json={"title": title, "author": author, "genre": genre},
        )

    # Interactions & recommendations -----------------------------------------
    def add_interaction(self, session: Session, interaction: Interaction) -> None:
        self._request("POST", "/interactions/add", session=session, json=interaction.to_payload())

    def top_recommendations(self, session: Session) -> List[Book]:
        resp = self._request("GET", "/recommendations/top", session=session)
        return self._decode(resp, _BOOK_LIST.validate_python)

    # Plumbing ----------------------------------------------------------------
    def _headers(self, session: Optional[Session]) -> Dict[str, str]:
        if session is None:
            return {}
        return {"Authorization": f"Bearer {session.token}"}

    def _request(self, method: str, path: str, session: Optional[Session] = None, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, path)
        try:
            resp = self.http.request(method, url, headers=self._headers(session), timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            error = NetworkError(f"Request to {path} failed: {exc}", url=url)
            logger.warning("%s %s: %s", method, path, error.to_dict())
            raise error from exc
        if resp.status_code in (401, 403):
            error = AuthorizationError(resp.status_code, text=resp.text, url=url)
        elif not resp.ok:
            error = BackendError(f"{method} {path} returned {resp.status_code}", resp.status_code, text=resp.text, url=url)
        else:
            return resp
        logger.warning("%s %s: %s", method, path, error.to_dict())
        raise error

    def _decode(self, resp: requests.Response, parse):
        try:
            return parse(resp.json())
        except (ValueError, ValidationError) as exc:
            # requests raises a ValueError subclass for non-JSON bodies.
            error = MalformedResponseError(f"Response body could not be decoded: {exc}", url=resp.url)
            logger.warning("Unexpected body: %s", error.to_dict())
            raise error from exc
