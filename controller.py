"""Session and view-state controller.

Owns the Session and the active View, dispatches backend calls and maps their
outcomes to view transitions, messages and placeholders. It has no Streamlit
dependency; ``views.py`` renders whatever state it holds.
"""

from typing import Dict, Optional, Union

from config import (
    ADD_BOOK_REDIRECT_DELAY,
    DETAILS_HINT_DELAY,
    FLASH_CLEAR_DELAY,
    SIGNUP_REDIRECT_DELAY,
)
from client import BookCatalogClient
from errors import AuthorizationError, BackendError, NetworkError
from log import get_logger
from models import (
    Book,
    BookForm,
    BookId,
    BookPanel,
    Interaction,
    LoginForm,
    Message,
    MessageKind,
    MessageTarget,
    Placeholder,
    Section,
    Session,
    View,
)
from scheduler import Scheduler
from storage import SessionStore

logger = get_logger(__name__)

NETWORK_ERROR = "Network error. Please try again."
SHORT_NETWORK_ERROR = "Network error."
SESSION_EXPIRED = "Session expired. Please login again."
SIGNUP_OK = "Account created successfully! Please login."
SIGNUP_FAILED = "Signup failed. Please try again."
LOGIN_FAILED = "Invalid credentials. Please try again."
BOOKS_FAILED = "Failed to load books."
BOOK_ADDED = "Book added successfully!"
ADD_BOOK_FAILED = "Failed to add book."
LIKED = "Book liked! ❤️"
LIKE_FAILED = "Failed to like book."
RATE_FAILED = "Failed to rate book."
DETAILS_HINT = 'Click "Like" or select a rating to interact with this book!'
DETAILS_FAILED = "Failed to load book details."

NO_BOOKS = Placeholder("No books found", "Try adding some books or search with different keywords.")
LOADING_RECOMMENDATIONS = Placeholder("", "Loading recommendations...")
NO_RECOMMENDATIONS = Placeholder(
    "No recommendations yet", "Like or rate some books to get personalized recommendations!"
)
RECOMMENDATIONS_FAILED = Placeholder("Could not load recommendations", "Please try again later.")
RECOMMENDATIONS_NETWORK = Placeholder("Network error", "Please check your connection and try again.")


def rated_message(rating: int) -> str:
    return f"Rated {rating} stars! ⭐"


class Controller:
    def __init__(self, client: BookCatalogClient, store: SessionStore, scheduler: Scheduler):
        self.client = client
        self.store = store
        self.scheduler = scheduler
        self.session = Session()
        self.view = View.AUTH_LOGIN
        self.messages: Dict[MessageTarget, Message] = {}
        self.books = BookPanel()
        self.recommendations = BookPanel()
        self.selected_book: Optional[Book] = None
        self.search_query = ""
        self.login_form = LoginForm()
        self.book_form = BookForm()
        # Cleared once the user logs in or out; the cookie cache may lag behind.
        self._resumable = True

    # Lifecycle ---------------------------------------------------------------
    def initialize(self) -> None:
        """Enter the dashboard if a session was persisted, else the login tab."""
        self._resumable = True
        if not self.resume():
            self._enter_auth()

    def resume(self) -> bool:
        """Pick up a persisted session without touching the view otherwise."""
        if self.session.is_authenticated:
            return True
        if not self._resumable:
            return False
        session = self.store.load()
        if not session.is_authenticated:
            return False
        logger.info("Restored session for %s", session.email or "unknown user")
        self.session = session
        self._enter_dashboard()
        self.list_books()
        return True

    def tick(self) -> int:
        return self.scheduler.run_due()

    # View state --------------------------------------------------------------
    def show_auth_tab(self, view: View) -> None:
        self._move_within(Section.AUTH, view)
        self.clear_message(MessageTarget.AUTH)

    def show_dashboard_tab(self, view: View) -> None:
        self._move_within(Section.DASHBOARD, view)
        self.clear_message(MessageTarget.DASHBOARD)

    def _move_within(self, section: Section, view: View) -> None:
        if view.section is not section or self.view.section is not section:
            raise ValueError(f"Cannot move from {self.view.value} to {view.value}")
        self.view = view

    def _enter_auth(self) -> None:
        logger.info("View -> %s", View.AUTH_LOGIN.value)
        self.view = View.AUTH_LOGIN

    def _enter_dashboard(self) -> None:
        logger.info("View -> %s", View.DASHBOARD_BOOKS.value)
        self.view = View.DASHBOARD_BOOKS

    # Messages ----------------------------------------------------------------
    def show_message(self, target: MessageTarget, text: str, kind: MessageKind) -> None:
        self.messages[target] = Message(text, kind)

    def clear_message(self, target: MessageTarget) -> None:
        self.messages.pop(target, None)

    def message(self, target: MessageTarget) -> Optional[Message]:
        return self.messages.get(target)

    def _flash(self, target: MessageTarget, text: str, delay: float) -> None:
        self.show_message(target, text, MessageKind.SUCCESS)
        flashed = self.messages[target]
        self.scheduler.call_later(delay, lambda: self._clear_if_unchanged(target, flashed))

    def _clear_if_unchanged(self, target: MessageTarget, flashed: Message) -> None:
        # A later message owns the slot; leave it alone.
        if self.messages.get(target) is flashed:
            self.clear_message(target)

    # Auth --------------------------------------------------------------------
    def submit_signup(self, name: str, email: str, password: str) -> None:
        try:
            self.client.signup(name, email, password)
        except BackendError as exc:
            self.show_message(MessageTarget.AUTH, exc.text or SIGNUP_FAILED, MessageKind.ERROR)
            return
        except NetworkError:
            self.show_message(MessageTarget.AUTH, NETWORK_ERROR, MessageKind.ERROR)
            return
        self.show_message(MessageTarget.AUTH, SIGNUP_OK, MessageKind.SUCCESS)
        self.scheduler.call_later(SIGNUP_REDIRECT_DELAY, self._signup_redirect)

    def _signup_redirect(self) -> None:
        if self.view.section is Section.AUTH:
            self.show_auth_tab(View.AUTH_LOGIN)

    def submit_login(self, email: str, password: str) -> None:
        self.login_form.email = email
        try:
            token = self.client.login(email, password)
        except BackendError as exc:
            self.show_message(MessageTarget.AUTH, exc.text or LOGIN_FAILED, MessageKind.ERROR)
            return
        except NetworkError:
            self.show_message(MessageTarget.AUTH, NETWORK_ERROR, MessageKind.ERROR)
            return
        self._resumable = False
        self.session = Session(token=token, email=email)
        self.store.save(self.session)
        logger.info("Logged in as %s", email)
        self._enter_dashboard()
        self.list_books()

    def logout(self) -> None:
        self._resumable = False
        self.session = Session()
        self.store.clear()
        self.scheduler.cancel_all()
        self.login_form.clear()
        self._reset_dashboard()
        self._enter_auth()

    def _reset_dashboard(self) -> None:
        self.books = BookPanel()
        self.recommendations = BookPanel()
        self.selected_book = None
        self.search_query = ""
        self.book_form.clear()
        self.clear_message(MessageTarget.DASHBOARD)
        self.clear_message(MessageTarget.ADD_BOOK)

    def _expire_session(self) -> None:
        logger.info("Authorization rejected; logging out")
        self.logout()
        self.show_message(MessageTarget.AUTH, SESSION_EXPIRED, MessageKind.ERROR)

    # Books -------------------------------------------------------------------
    def list_books(self, query: Optional[str] = None) -> None:
        if query is not None:
            self.search_query = query
        self._load_books(lambda: self.client.search_books(self.session, self.search_query))

    def browse_genre(self, genre: str) -> None:
        self._load_books(lambda: self.client.books_by_genre(self.session, genre))

    def _load_books(self, fetch) -> None:
        try:
            books = fetch()
        except AuthorizationError:
            self._expire_session()
            return
        except BackendError:
            self.show_message(MessageTarget.DASHBOARD, BOOKS_FAILED, MessageKind.ERROR)
            return
        except NetworkError:
            self.show_message(MessageTarget.DASHBOARD, NETWORK_ERROR, MessageKind.ERROR)
            return
        self.books.show_books(books, NO_BOOKS)

    def add_book(self, title: str, author: str, genre: str) -> None:
        self.book_form.title, self.book_form.author, self.book_form.genre = title, author, genre
        try:
            self.client.add_book(self.session, title, author, genre)
        except AuthorizationError:
            self._expire_session()
            return
        except BackendError as exc:
            self.show_message(MessageTarget.ADD_BOOK, exc.text or ADD_BOOK_FAILED, MessageKind.ERROR)
            return
        except NetworkError:
            self.show_message(MessageTarget.ADD_BOOK, NETWORK_ERROR, MessageKind.ERROR)
            return
        self.show_message(MessageTarget.ADD_BOOK, BOOK_ADDED, MessageKind.SUCCESS)
        self.book_form.clear()
        self.scheduler.call_later(ADD_BOOK_REDIRECT_DELAY, self._after_book_added)

    def _after_book_added(self) -> None:
        if self.view.section is not Section.DASHBOARD:
            return
        self.show_dashboard_tab(View.DASHBOARD_BOOKS)
        self.list_books()

    def show_book_details(self, book_id: BookId) -> None:
        self._flash(MessageTarget.DASHBOARD, DETAILS_HINT, DETAILS_HINT_DELAY)
        try:
            self.selected_book = self.client.get_book(self.session, book_id)
        except AuthorizationError:
            self._expire_session()
        except BackendError:
            self.show_message(MessageTarget.DASHBOARD, DETAILS_FAILED, MessageKind.ERROR)
        except NetworkError:
            self.show_message(MessageTarget.DASHBOARD, NETWORK_ERROR, MessageKind.ERROR)

    def close_book_details(self) -> None:
        self.selected_book = None

    # Interactions ------------------------------------------------------------
    def record_like(self, book_id: BookId) -> None:
        if self._send_interaction(Interaction(book_id=book_id, liked=True), LIKE_FAILED):
            self._flash(MessageTarget.DASHBOARD, LIKED, FLASH_CLEAR_DELAY)

    def record_rating(self, book_id: BookId, rating: Union[int, str, None]) -> None:
        if rating is None or rating == "":
            return
        try:
            stars = int(rating)
            interaction = Interaction(book_id=book_id, rating=stars)
        except ValueError:
            # Also covers pydantic's ValidationError for values outside 1-5.
            self.show_message(MessageTarget.DASHBOARD, RATE_FAILED, MessageKind.ERROR)
            return
        if self._send_interaction(interaction, RATE_FAILED):
            self._flash(MessageTarget.DASHBOARD, rated_message(stars), FLASH_CLEAR_DELAY)

    def _send_interaction(self, interaction: Interaction, failure: str) -> bool:
        try:
            self.client.add_interaction(self.session, interaction)
        except BackendError:
            self.show_message(MessageTarget.DASHBOARD, failure, MessageKind.ERROR)
            return False
        except NetworkError:
            self.show_message(MessageTarget.DASHBOARD, SHORT_NETWORK_ERROR, MessageKind.ERROR)
            return False
        return True

    # Recommendations ---------------------------------------------------------
    def load_recommendations(self) -> None:
        self.recommendations.show_placeholder(LOADING_RECOMMENDATIONS)
        try:
            books = self.client.top_recommendations(self.session)
        except AuthorizationError:
            self._expire_session()
            return
        except BackendError:
            self.recommendations.show_placeholder(RECOMMENDATIONS_FAILED)
            return
        except NetworkError:
            self.recommendations.show_placeholder(RECOMMENDATIONS_NETWORK)
            return
        self.recommendations.show_books(books, NO_RECOMMENDATIONS)
