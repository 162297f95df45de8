# app/main.py

import streamlit as st
from streamlit_cookies_manager import EncryptedCookieManager
from app.services.config import COOKIE_PASSWORD
from app.services.session import SessionContext
from app.ui.login import login_page
from app.ui.discover import discover_page
from app.ui.profile import profile_page


st.set_page_config(page_title="Movie Discovery", layout="wide")

cookies = EncryptedCookieManager(prefix="movies/", password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def get_session():
    # one SessionContext per browser session, backed by the cookie jar
    if "session" not in st.session_state:
        st.session_state["session"] = SessionContext(storage=cookies)
    return st.session_state["session"]


def main_page(session):
    st.sidebar.markdown(f"## 👋 {session.user['username']}")

    if st.sidebar.button("🍿 영화 탐색"):
        st.session_state["page"] = "discover"
    if st.sidebar.button("👤 내 프로필"):
        st.session_state["page"] = "profile"
    if st.sidebar.button("🔓 로그아웃"):
        session.logout()
        st.session_state.clear()
        st.rerun()

    page = st.session_state.get("page", "discover")
    if page == "profile":
        profile_page(session)
    else:
        discover_page(session)


session = get_session()
if not session.initialized:
    with st.spinner("세션 확인 중..."):
        session.initialize()

if session.is_authenticated and "favorites" not in session.user:
    # login/register only return public fields
    session.refresh_user()

if session.is_authenticated:
    main_page(session)
else:
    login_page(session)
