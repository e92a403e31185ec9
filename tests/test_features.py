"""Screen-level state containers driven against a mocked backend."""
from __future__ import annotations

import asyncio
import json

import httpx
from conftest import Backend, build_app, json_response


def _forum_backend() -> Backend:
    backend = Backend()
    backend.routes.update(
        {
            "GET /forums/f1": json_response(200, {"id": "f1", "ownerId": "u9", "title": "Terror"}),
            "GET /forums/f1/posts": json_response(
                200,
                [
                    {
                        "id": "p1",
                        "authorId": "u9",
                        "content": "Hola",
                        "reactions": None,
                        "authorDisplayName": "Luis",
                        "authorPhotoURL": "https://img/l.png",
                        "commentsCount": 2,
                    }
                ],
            ),
            "POST /forums/f1/posts": json_response(201, {"id": "p2", "authorId": "me", "content": "Nuevo post"}),
            "POST /forums/f1/posts/p1/reactions": json_response(200, {"message": "ok"}),
            "POST /forums/f1/posts/p1/comments": json_response(201, {"id": "c1", "authorId": "me", "content": "ok"}),
        }
    )
    return backend


def test_forum_empty_post_is_rejected_locally() -> None:
    backend = _forum_backend()
    app = build_app(backend)
    forum = app.forum_details("f1")

    created = asyncio.run(forum.create_post("   "))

    assert created is False
    assert forum.error == "El contenido del post no puede estar vacío"
    assert backend.requests == []


def test_forum_post_lifecycle() -> None:
    backend = _forum_backend()
    app = build_app(backend)
    forum = app.forum_details("f1")

    async def scenario() -> None:
        await app.session.login_with_firebase_token("firebase-token")
        await forum.load()
        assert await forum.create_post("  Nuevo post  ")
        assert await forum.add_reaction("p1", "🔥")
        assert await forum.create_comment("p1", "Buenísimo")
        assert not await forum.create_comment("p1", "")

    asyncio.run(scenario())

    assert forum.forum is not None and forum.forum.title == "Terror"
    assert [post.id for post in forum.posts] == ["p2", "p1"]
    assert forum.posts[0].author_display_name == "Yo"
    assert forum.posts[0].comments_count == 0
    assert forum.posts[1].reactions == {"me": "🔥"}
    assert forum.posts[1].comments_count == 3
    assert forum.posts[1].author_photo_url == "https://img/l.png"
    assert forum.error == "El comentario no puede estar vacío"
    post_bodies = [
        json.loads(request.content)
        for request in backend.requests
        if request.method == "POST" and request.url.path == "/forums/f1/posts"
    ]
    assert post_bodies == [{"content": "Nuevo post"}]


def test_forum_failed_reaction_leaves_state_untouched() -> None:
    backend = _forum_backend()
    backend.routes["POST /forums/f1/posts/p1/reactions"] = json_response(500, {"message": "boom"})
    app = build_app(backend)
    forum = app.forum_details("f1")

    async def scenario() -> bool:
        await app.session.login_with_firebase_token("firebase-token")
        await forum.load()
        return await forum.add_reaction("p1", "😂")

    assert asyncio.run(scenario()) is False
    assert forum.posts[0].reactions == {}
    assert forum.error == "Error al agregar reacción. Intenta de nuevo."


def test_top_rated_posters_fall_back_on_timeout() -> None:
    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return json_response(200, [])

    backend = Backend()
    backend.routes["GET /tmdb/posters/top-rated"] = slow  # type: ignore[assignment]
    app = build_app(backend, posters_timeout=0.05)
    posters = app.top_rated_posters()

    assert asyncio.run(posters.load()) == []
    assert posters.error is not None
    assert posters.is_loading is False


def test_top_rated_posters_fall_back_on_error() -> None:
    backend = Backend()
    backend.routes["GET /tmdb/posters/top-rated"] = json_response(503, {"message": "Servicio no disponible"})
    posters = build_app(backend).top_rated_posters()

    assert asyncio.run(posters.load()) == []
    assert posters.error == "Servicio no disponible"


def test_user_search_debounces_and_ignores_short_queries() -> None:
    backend = Backend()
    backend.routes["GET /users"] = json_response(200, [{"id": "u2", "displayName": "Lucía"}])
    search = build_app(backend).user_search()

    async def scenario() -> None:
        search.set_query("l")
        await search.flush()
        assert backend.requests == []
        search.set_query("lu")
        search.set_query("luc")
        await asyncio.sleep(0.05)
        await search.flush()

    asyncio.run(scenario())
    assert [request.url.params["q"] for request in backend.requests] == ["luc"]
    assert [user.display_name for user in search.users] == ["Lucía"]
    assert search.has_searched


def test_user_search_failure_sets_message() -> None:
    backend = Backend()
    backend.routes["GET /users"] = json_response(500, {"message": "boom"})
    search = build_app(backend).user_search()

    asyncio.run(search.search("lucia"))

    assert search.users == []
    assert search.error == "No se pudieron buscar los perfiles. Intenta nuevamente."


def _log(log_id: str) -> dict[str, object]:
    return {"id": log_id, "userId": "me", "tmdbId": 1, "mediaType": "movie", "rating": 3}


def test_diary_pagination_and_delete() -> None:
    backend = Backend()
    backend.routes.update(
        {
            "GET /media-logs/my-logs": lambda request: json_response(
                200, [_log(f"l{n}") for n in range(min(int(request.url.params["limit"]), 3))]
            ),
            "GET /media-logs/stats/me": json_response(200, {"totalViews": 3, "averageRating": 3.0}),
            "DELETE /media-logs/l1": json_response(200, {"message": "Eliminado"}),
        }
    )
    diary = build_app(backend).diary()
    async def scenario() -> None:
        await diary.load()
        await diary.load_more()
        assert await diary.delete_log("l1")

    asyncio.run(scenario())
    assert diary.limit == 20
    assert diary.has_more is False
    assert diary.stats is not None and diary.stats.total_views == 3
    assert [log.id for log in diary.logs] == ["l0", "l2"]
    assert backend.paths("GET").count("/media-logs/my-logs") == 1


def test_diary_failed_load_more_keeps_page_size() -> None:
    backend = Backend()
    backend.routes.update(
        {
            "GET /media-logs/my-logs": json_response(200, [_log(f"l{n}") for n in range(20)]),
            "GET /media-logs/stats/me": json_response(200, {"totalViews": 20}),
        }
    )
    diary = build_app(backend).diary()

    async def scenario() -> None:
        await diary.load()
        assert diary.has_more is True
        backend.routes["GET /media-logs/my-logs"] = json_response(500, {"message": "boom"})
        await diary.load_more()

    asyncio.run(scenario())
    assert diary.limit == 20
    assert diary.error == "Error al cargar el diario"
    assert len(diary.logs) == 20
    assert [request.url.params["limit"] for request in backend.requests if request.url.path.endswith("my-logs")] == [
        "20",
        "40",
    ]


def test_write_review_validates_before_posting() -> None:
    backend = Backend()
    backend.routes["POST /media-logs"] = json_response(201, _log("l9"))
    review = build_app(backend).write_review()

    async def scenario() -> tuple[bool, bool]:
        rejected = await review.submit({"tmdbId": 1, "mediaType": "movie", "hadSeenBefore": False, "review": "corta"})
        accepted = await review.submit(
            {"tmdbId": 1, "mediaType": "movie", "hadSeenBefore": True, "rating": 4, "review": "Una película enorme"}
        )
        return rejected, accepted

    rejected, accepted = asyncio.run(scenario())
    assert rejected is False
    assert accepted is True
    assert len(backend.requests) == 1
    body = json.loads(backend.requests[0].content)
    assert body["reviewLang"] == "es"
    assert body["rating"] == 4


def test_user_profile_follow_toggle_updates_counts() -> None:
    backend = Backend()
    backend.routes.update(
        {
            "GET /users/u2/profile": json_response(
                200,
                {"user": {"displayName": "Luis", "followersCount": 4}, "stats": {"followersCount": 4}},
            ),
            "GET /users/me/following/u2": json_response(200, {"isFollowing": False}),
            "POST /users/follow/u2": json_response(200, {"message": "ok"}),
        }
    )
    app = build_app(backend)
    profile = app.user_profile("u2")

    async def scenario() -> None:
        await app.session.login_with_firebase_token("firebase-token")
        await profile.load()
        await profile.toggle_follow()
        await app.session.flush_refresh()

    asyncio.run(scenario())
    assert profile.is_following is True
    assert profile.user is not None and profile.user.followers_count == 5
    assert backend.paths("GET").count("/auth/me") == 1


def test_movie_details_secondary_failures_are_quiet() -> None:
    backend = Backend()
    backend.routes.update(
        {
            "GET /tmdb/movies/550": json_response(200, {"id": 550, "title": "Fight Club", "posterPath": None}),
            "GET /tmdb/movies/550/credits": json_response(500, {"message": "boom"}),
            "GET /tmdb/movies/550/watch/providers": json_response(500, {"message": "boom"}),
            "GET /users/me/favorites": json_response(200, [{"tmdbId": 550, "mediaType": "movie"}]),
            "GET /media-logs/my-logs/550/movie": json_response(200, [_log("l1")]),
        }
    )
    details = build_app(backend).movie_details(550)

    asyncio.run(details.load())

    assert details.error is None
    assert details.details is not None and details.details.title == "Fight Club"
    assert details.credits is None
    assert details.is_favorite is True
    assert details.user_rating == 3
