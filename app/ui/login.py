# app/ui/login.py

import streamlit as st


def login_page(session):
    st.title("🎬 로그인")

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form(session)
    else:
        show_login_form(session)


def show_login_form(session):
    with st.form("login_form"):
        email = st.text_input("이메일")
        password = st.text_input("비밀번호", type="password")
        submitted = st.form_submit_button("로그인")

    if submitted:
        with st.spinner("로그인 중..."):
            result = session.login(email, password)
            if result.get("error"):
                st.error(f"❌ 로그인 실패: {result['error']}")
            else:
                st.success("✅ 로그인 성공!")
                st.rerun()

    if st.button("회원가입"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form(session):
    st.subheader("📝 회원가입")

    with st.form("register_form"):
        username = st.text_input("사용자 이름")
        email = st.text_input("이메일")
        password = st.text_input("비밀번호", type="password")
        submitted = st.form_submit_button("가입하기")

    if submitted:
        with st.spinner("회원가입 처리 중..."):
            result = session.register(username, email, password)
            if result.get("error"):
                st.error(f"❌ 실패: {result['error']}")
            else:
                st.session_state["show_register"] = False
                st.success("🎉 회원가입 성공!")
                st.rerun()

    if st.button("← 로그인으로 돌아가기"):
        st.session_state["show_register"] = False
        st.rerun()
