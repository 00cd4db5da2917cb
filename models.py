"""Typed shapes exchanged with the backend and held by the controller."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# The catalog contract uses integer ids; some deployments emit UUID strings.
BookId = Union[int, str]


# --- Backend DTOs ---------------------------------------------------------------


class Book(BaseModel):
    """A catalog entry as returned by search, genre and recommendation calls."""

    model_config = ConfigDict(populate_by_name=True)

    id: BookId
    title: str = ""
    author: str = ""
    genre: str = ""
    # External/average rating, when the backend knows one.
    rating: Optional[float] = None
    published_on: Optional[date] = Field(default=None, alias="publishedOn")

    @field_validator("title", "author", "genre", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value


class LoginResponse(BaseModel):
    token: str


class Interaction(BaseModel):
    """A like or a 1-5 rating recorded against a book. Sent, never stored."""

    model_config = ConfigDict(populate_by_name=True)

    book_id: BookId = Field(alias="bookId")
    liked: Optional[bool] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Client-side state ----------------------------------------------------------


@dataclass(frozen=True)
class Session:
    token: Optional[str] = None
    email: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return isinstance(self.token, str) and bool(self.token)


class Section(str, Enum):
    AUTH = "auth"
    DASHBOARD = "dashboard"


class View(str, Enum):
    """Every visible combination of section and tab; exactly one is active."""

    AUTH_LOGIN = "auth:login"
    AUTH_SIGNUP = "auth:signup"
    DASHBOARD_BOOKS = "dashboard:books"
    DASHBOARD_ADD_BOOK = "dashboard:add-book"
    DASHBOARD_RECOMMENDATIONS = "dashboard:recommendations"

    @property
    def section(self) -> Section:
        return Section(self.value.split(":", 1)[0])

    @property
    def tab(self) -> str:
        return self.value.split(":", 1)[1]


AUTH_TABS = [View.AUTH_LOGIN, View.AUTH_SIGNUP]
DASHBOARD_TABS = [View.DASHBOARD_BOOKS, View.DASHBOARD_ADD_BOOK, View.DASHBOARD_RECOMMENDATIONS]


class MessageTarget(str, Enum):
    AUTH = "auth-message"
    DASHBOARD = "dashboard-message"
    ADD_BOOK = "add-book-message"


class MessageKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Message:
    text: str
    kind: MessageKind


@dataclass(frozen=True)
class Placeholder:
    title: str
    body: str = ""


@dataclass
class BookPanel:
    """A rendered book collection, or the placeholder shown instead of it."""

    books: List[Book] = field(default_factory=list)
    placeholder: Optional[Placeholder] = None

    def show_books(self, books: List[Book], empty: Placeholder) -> None:
        self.books = list(books)
        self.placeholder = None if books else empty

    def show_placeholder(self, placeholder: Placeholder) -> None:
        self.books = []
        self.placeholder = placeholder


@dataclass
class LoginForm:
    email: str = ""
    # Bumped on every clear so widgets keyed by it start empty.
    revision: int = 0

    def clear(self) -> None:
        self.email = ""
        self.revision += 1


@dataclass
class BookForm:
    title: str = ""
    author: str = ""
    genre: str = ""
    revision: int = 0

    def clear(self) -> None:
        self.title = ""
        self.author = ""
        self.genre = ""
        self.revision += 1
