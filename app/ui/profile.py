# app/ui/profile.py

import streamlit as st
from app.services import api


def profile_page(session):
    user = session.user or {}
    token = session.token

    st.markdown(f"# 👤 {user.get('username', '')}")
    st.caption(user.get("email", ""))

    tabs = st.tabs(["❤️ 즐겨찾기", "📺 워치리스트", "⭐ 평점", "👥 팔로우"])

    with tabs[0]:
        movie_list(user.get("favorites", []), key_prefix="fav")
    with tabs[1]:
        movie_list(user.get("watchlist", []), key_prefix="watch")
    with tabs[2]:
        ratings = user.get("ratings", [])
        if not ratings:
            st.info("아직 평가한 영화가 없습니다.")
        for r in ratings:
            movie = api.get_movie(r["movie_id"])
            title = movie.get("title", f"#{r['movie_id']}") if not movie.get("error") else f"#{r['movie_id']}"
            st.write(f"{'⭐' * r['score']}  {title}")
    with tabs[3]:
        follow_section(session, token, user)


def movie_list(movie_ids, key_prefix):
    if not movie_ids:
        st.info("비어 있습니다.")
        return
    for movie_id in movie_ids:
        movie = api.get_movie(movie_id)
        if movie.get("error"):
            st.write(f"#{movie_id}")
            continue
        if st.button(movie.get("title", str(movie_id)), key=f"{key_prefix}_{movie_id}"):
            st.session_state["selected_movie"] = movie_id
            st.session_state["page"] = "discover"
            st.rerun()


def follow_section(session, token, user):
    following = api.get_following(token, user.get("id"))
    followers = api.get_followers(token, user.get("id"))

    cols = st.columns(2)
    with cols[0]:
        st.markdown("### 팔로잉")
        if isinstance(following, dict) and following.get("error"):
            st.error(following["error"])
        else:
            for other in following:
                c = st.columns([4, 1])
                c[0].write(other["username"])
                if c[1].button("언팔로우", key=f"unfollow_{other['id']}"):
                    result = api.unfollow_user(token, other["id"])
                    if result.get("error"):
                        st.error(result["error"])
                    else:
                        session.refresh_user()
                        st.rerun()
    with cols[1]:
        st.markdown("### 팔로워")
        if isinstance(followers, dict) and followers.get("error"):
            st.error(followers["error"])
        else:
            for other in followers:
                st.write(other["username"])

    with st.form("follow_form"):
        target = st.number_input("팔로우할 사용자 ID", min_value=1, step=1)
        submitted = st.form_submit_button("팔로우")
    if submitted:
        result = api.follow_user(token, int(target))
        if result.get("error"):
            st.error(result["error"])
        else:
            session.refresh_user()
            st.success(f"✅ {result['username']}님을 팔로우합니다.")
