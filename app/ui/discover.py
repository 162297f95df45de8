# app/ui/discover.py

import streamlit as st
from app.services import api, tmdb
from app.services.tmdb import pick_trailer, youtube_url, poster_url


def discover_page(session):
    st.markdown("# 🍿 영화 탐색")

    query = st.text_input("영화 검색", key="search_query")
    if query:
        listing = api.search_movies(query)
        heading = f"🔍 '{query}' 검색 결과"
    else:
        listing = api.trending_movies()
        heading = "🔥 이번 주 트렌딩"

    if listing.get("error"):
        st.error(listing["error"])
        return

    selected = st.session_state.get("selected_movie")
    if selected:
        movie_detail(session, selected)
        st.divider()

    st.markdown(f"### {heading}")
    movie_grid(listing.get("results", []), key_prefix="list")


def movie_grid(movies, key_prefix):
    if not movies:
        st.info("결과가 없습니다.")
        return

    cols = st.columns(4)
    for i, movie in enumerate(movies):
        with cols[i % 4]:
            poster = poster_url(movie.get("poster_path"), size="w342")
            if poster:
                st.image(poster)
            title = movie.get("title") or movie.get("name", "")
            if st.button(title, key=f"{key_prefix}_{movie['id']}"):
                st.session_state["selected_movie"] = movie["id"]
                st.rerun()


def movie_detail(session, movie_id):
    movie = api.get_movie(movie_id)
    if movie.get("error"):
        st.error(movie["error"])
        return

    cols = st.columns([1, 2])
    with cols[0]:
        poster = poster_url(movie.get("poster_path"))
        if poster:
            st.image(poster)
    with cols[1]:
        st.markdown(f"## {movie.get('title', '')}")
        st.caption(f"{movie.get('release_date', '')} · ⭐ {movie.get('vote_average', '-')}")
        st.write(movie.get("overview", ""))
        movie_actions(session, movie_id)

    trailer = pick_trailer(tmdb.videos(movie_id))
    url = youtube_url(trailer)
    if url:
        with st.expander("▶️ 예고편"):
            st.video(url)

    recs = tmdb.recommendations(movie_id)
    if not recs.get("error") and recs.get("results"):
        st.markdown("### 👍 추천 영화")
        movie_grid(recs["results"][:8], key_prefix=f"rec_{movie_id}")


def movie_actions(session, movie_id):
    user = session.user or {}
    token = session.token
    favorites = user.get("favorites", [])
    watchlist = user.get("watchlist", [])
    current = next((r["score"] for r in user.get("ratings", []) if r["movie_id"] == movie_id), None)

    cols = st.columns(2)
    with cols[0]:
        if movie_id in favorites:
            if st.button("💔 즐겨찾기 해제", key=f"unfav_{movie_id}"):
                handle(session, api.remove_favorite(token, movie_id))
        elif st.button("❤️ 즐겨찾기", key=f"fav_{movie_id}"):
            handle(session, api.add_favorite(token, movie_id))
    with cols[1]:
        if movie_id in watchlist:
            if st.button("➖ 워치리스트 제거", key=f"unwatch_{movie_id}"):
                handle(session, api.remove_from_watchlist(token, movie_id))
        elif st.button("➕ 워치리스트", key=f"watch_{movie_id}"):
            handle(session, api.add_to_watchlist(token, movie_id))

    score = st.select_slider("평점", options=[1, 2, 3, 4, 5], value=current or 3, key=f"score_{movie_id}")
    if st.button("평점 저장", key=f"rate_{movie_id}"):
        handle(session, api.rate_movie(token, movie_id, score))


def handle(session, result):
    if result.get("error"):
        st.error(result["error"])
        return
    session.refresh_user()
    st.rerun()
