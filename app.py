import time

import streamlit as st
import extra_streamlit_components as stx

from client import BookCatalogClient
from config import API_BASE, APP_NAME, DEFAULT_THEME, request_timeout
from controller import Controller
from log import get_logger
from models import Section
from scheduler import Scheduler
from storage import CookieStorage, SessionStore
from views import apply_base_style, render_auth, render_dashboard

logger = get_logger(__name__)


def get_cookie_manager() -> stx.CookieManager:
    """Create or reuse a CookieManager; do not cache to avoid widget-in-cache warning."""
    if "cookie_manager" not in st.session_state:
        st.session_state["cookie_manager"] = stx.CookieManager(key="bookrec_cookies")
    return st.session_state["cookie_manager"]


def get_controller(cookie_manager: stx.CookieManager) -> Controller:
    """One controller per browser session, holding its view state between reruns."""
    if "controller" not in st.session_state:
        client = BookCatalogClient(API_BASE, timeout=request_timeout())
        store = SessionStore(CookieStorage(cookie_manager))
        st.session_state["controller"] = Controller(client, store, Scheduler())
        logger.info("New browser session against %s", API_BASE)
    return st.session_state["controller"]


# --- Main ----------------------------------------------------------------------


def main() -> None:
    st.set_page_config(page_title=APP_NAME, page_icon="📚", layout="wide")
    cookie_manager = get_cookie_manager()
    controller = get_controller(cookie_manager)

    if not st.session_state.get("initialized"):
        controller.initialize()
        st.session_state["initialized"] = True
    elif controller.view.section is Section.AUTH:
        # Cookies only arrive once the cookie component has rendered.
        controller.resume()
    controller.tick()

    apply_base_style(DEFAULT_THEME["accent"])
    if controller.view.section is Section.DASHBOARD:
        render_dashboard(controller)
    else:
        render_auth(controller)

    delay = controller.scheduler.next_delay()
    if delay is not None:
        # Stand-in for browser timers: wait for the next due callback, then redraw.
        time.sleep(delay)
        st.rerun()


if __name__ == "__main__":
    main()
