"""Streamlit rendering of the controller's state.

Nothing here decides what happens next; widgets forward user actions to the
controller and draw whatever view, messages and panels it holds.
"""

import html
from typing import Optional

import streamlit as st

from config import APP_NAME, DEFAULT_THEME
from controller import LOADING_RECOMMENDATIONS, Controller
from models import (
    AUTH_TABS,
    Book,
    BookPanel,
    DASHBOARD_TABS,
    MessageKind,
    MessageTarget,
    Placeholder,
    View,
)

TAB_LABELS = {
    View.AUTH_LOGIN: "Login",
    View.AUTH_SIGNUP: "Sign up",
    View.DASHBOARD_BOOKS: "📚 Books",
    View.DASHBOARD_ADD_BOOK: "➕ Add Book",
    View.DASHBOARD_RECOMMENDATIONS: "✨ Recommendations",
}
RATING_OPTIONS = ["", "1", "2", "3", "4", "5"]


# --- Markup helpers -------------------------------------------------------------


def book_card_html(book: Book) -> str:
    """Card markup for a book; every backend field is escaped."""
    extras = []
    if book.rating is not None:
        extras.append(f"{book.rating:.1f}⭐")
    if book.published_on:
        extras.append(f"Published {book.published_on.isoformat()}")
    footer = f"<div class='card-footer'>{html.escape(' · '.join(extras))}</div>" if extras else ""
    return (
        "<div class='book-card'>"
        f"<div class='card-title'>{html.escape(book.title)}</div>"
        f"<div class='card-sub'>by {html.escape(book.author)}</div>"
        f"<span class='pill'>{html.escape(book.genre)}</span>"
        f"{footer}"
        "</div>"
    )


def placeholder_html(placeholder: Placeholder) -> str:
    title = f"<h3>{html.escape(placeholder.title)}</h3>" if placeholder.title else ""
    body = f"<p>{html.escape(placeholder.body)}</p>" if placeholder.body else ""
    return f"<div class='empty-state'>{title}{body}</div>"


def apply_base_style(accent: str) -> None:
    st.markdown(
        f"""
        <style>
        .stApp {{
            background: {DEFAULT_THEME["bg_gradient"]};
            color: #e5e7eb;
        }}
        div.stButton > button[kind="primary"] {{
            background: {accent};
            border: none;
        }}
        div[data-testid="stForm"] {{
            background: rgba(17, 24, 39, 0.4);
            border-radius: 12px;
            border: 1px solid rgba(255, 255, 255, 0.06);
        }}
        .book-card {{
            background: rgba(17, 24, 39, 0.65);
            border: 1px solid rgba(255,255,255,0.08);
            border-radius: 12px;
            padding: 0.75rem 0.9rem;
            margin-bottom: 0.4rem;
        }}
        .card-title {{ font-weight: 700; font-size: 1.05rem; }}
        .card-sub {{ color: #cbd5e1; font-size: 0.85rem; margin: 0.15rem 0 0.35rem; }}
        .card-footer {{ color: #9ca3af; font-size: 0.75rem; margin-top: 0.35rem; }}
        .pill {{
            display: inline-flex;
            padding: 0.2rem 0.55rem;
            background: rgba(255,255,255,0.08);
            border-radius: 999px;
            font-size: 0.8rem;
        }}
        .empty-state {{
            text-align: center;
            padding: 2rem 1rem;
            color: rgba(255,255,255,0.7);
            border: 2px dashed rgba(255,255,255,0.15);
            border-radius: 12px;
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )


# --- Shared pieces --------------------------------------------------------------


def render_message(controller: Controller, target: MessageTarget) -> None:
    message = controller.message(target)
    if not message:
        return
    if message.kind is MessageKind.SUCCESS:
        st.success(message.text)
    else:
        st.error(message.text)


def render_tab_bar(controller: Controller, tabs, on_select) -> None:
    cols = st.columns(len(tabs))
    for col, view in zip(cols, tabs):
        with col:
            st.button(
                TAB_LABELS[view],
                key=f"tab-{view.tab}",
                type="primary" if controller.view is view else "secondary",
                on_click=on_select,
                args=(view,),
                use_container_width=True,
            )


def render_panel(controller: Controller, panel: BookPanel, prefix: str, actions: bool) -> None:
    if panel.placeholder:
        st.markdown(placeholder_html(panel.placeholder), unsafe_allow_html=True)
        return
    for book in panel.books:
        render_book(controller, book, prefix, actions)


def render_book(controller: Controller, book: Book, prefix: str, actions: bool) -> None:
    st.markdown(book_card_html(book), unsafe_allow_html=True)
    if not actions:
        return
    col_like, col_rate, col_detail = st.columns([1, 1, 1])
    with col_like:
        st.button("❤️ Like", key=f"{prefix}-like-{book.id}", on_click=controller.record_like, args=(book.id,))
    with col_rate:
        rate_key = f"{prefix}-rate-{book.id}"
        st.selectbox(
            "Rate",
            RATING_OPTIONS,
            key=rate_key,
            format_func=lambda v: "⭐" * int(v) if v else "Rate",
            label_visibility="collapsed",
            on_change=lambda: controller.record_rating(book.id, st.session_state.get(rate_key)),
        )
    with col_detail:
        st.button("Details", key=f"{prefix}-detail-{book.id}", on_click=controller.show_book_details, args=(book.id,))


# --- Auth section ---------------------------------------------------------------


def render_auth(controller: Controller) -> None:
    st.title(f"📚 {APP_NAME}")
    st.caption("Find books, rate what you read, and get recommendations.")
    render_tab_bar(controller, AUTH_TABS, controller.show_auth_tab)
    render_message(controller, MessageTarget.AUTH)
    if controller.view is View.AUTH_LOGIN:
        render_login(controller)
    else:
        render_signup(controller)


def render_login(controller: Controller) -> None:
    form = controller.login_form
    with st.form("login"):
        email = st.text_input("Email", value=form.email, key=f"login-email-{form.revision}").strip()
        password = st.text_input("Password", type="password", key=f"login-password-{form.revision}")
        submitted = st.form_submit_button("Log in")
        if submitted and not (email and password):
            st.warning("Please enter your email and password.")
        elif submitted:
            controller.submit_login(email, password)
            st.rerun()


def render_signup(controller: Controller) -> None:
    with st.form("signup"):
        name = st.text_input("Name")
        email = st.text_input("Email").strip()
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Create account")
        if submitted and not (name.strip() and email and password):
            st.warning("Please fill in every field.")
        elif submitted:
            controller.submit_signup(name, email, password)
            st.rerun()


# --- Dashboard ------------------------------------------------------------------


def render_dashboard(controller: Controller) -> None:
    with st.sidebar:
        st.markdown(f"### {APP_NAME}")
        if controller.session.email:
            st.caption(f"Signed in as `{controller.session.email}`")
        st.button("Log out", on_click=controller.logout)

    render_tab_bar(controller, DASHBOARD_TABS, controller.show_dashboard_tab)
    render_message(controller, MessageTarget.DASHBOARD)

    if controller.view is View.DASHBOARD_BOOKS:
        render_books(controller)
    elif controller.view is View.DASHBOARD_ADD_BOOK:
        render_add_book(controller)
    elif controller.view is View.DASHBOARD_RECOMMENDATIONS:
        render_recommendations(controller)


def render_books(controller: Controller) -> None:
    # A form so that Enter in the search box triggers the search.
    with st.form("search"):
        col_query, col_go = st.columns([4, 1])
        with col_query:
            query = st.text_input(
                "Search by title",
                value=controller.search_query,
                placeholder="Search by title...",
                label_visibility="collapsed",
            )
        with col_go:
            submitted = st.form_submit_button("Search", use_container_width=True)
        if submitted:
            controller.list_books(query)
            st.rerun()

    with st.expander("Browse by genre"):
        with st.form("genre"):
            genre = st.text_input("Genre")
            if st.form_submit_button("Browse") and genre.strip():
                controller.browse_genre(genre.strip())
                st.rerun()

    render_book_details(controller.selected_book, controller)
    render_panel(controller, controller.books, "books", actions=True)


def render_book_details(book: Optional[Book], controller: Controller) -> None:
    if book is None:
        return
    with st.container(border=True):
        st.markdown(book_card_html(book), unsafe_allow_html=True)
        st.button("Close", key="close-details", on_click=controller.close_book_details)


def render_add_book(controller: Controller) -> None:
    form = controller.book_form
    render_message(controller, MessageTarget.ADD_BOOK)
    with st.form("add-book"):
        title = st.text_input("Title", value=form.title, key=f"book-title-{form.revision}")
        author = st.text_input("Author", value=form.author, key=f"book-author-{form.revision}")
        genre = st.text_input("Genre", value=form.genre, key=f"book-genre-{form.revision}")
        submitted = st.form_submit_button("Add Book")
        if submitted:
            if not (title.strip() and author.strip() and genre.strip()):
                st.warning("Please fill in title, author and genre.")
            else:
                controller.add_book(title, author, genre)
                st.rerun()


def render_recommendations(controller: Controller) -> None:
    clicked = st.button("Get Recommendations", type="primary")
    slot = st.container()
    if clicked:
        with slot:
            # The call blocks the run; draw the loading state before it starts.
            loading = st.empty()
            loading.markdown(placeholder_html(LOADING_RECOMMENDATIONS), unsafe_allow_html=True)
        controller.load_recommendations()
        st.rerun()
    with slot:
        render_panel(controller, controller.recommendations, "recs", actions=False)
