"""Composition root wiring storage, transport, services and session for one app run."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from .clients.api_client import ApiClient
from .clients.firestore_listener import FirestoreSourceFactory, ListenerFactory, get_firestore_client
from .config import Settings, get_settings
from .events import EventEmitter
from .features import (
    AddToListState,
    DiaryState,
    EditLogState,
    FollowListState,
    ForumDetailsState,
    ForumSearchState,
    HomeMoviesState,
    ListDetailsState,
    ListSearchState,
    LogDetailsState,
    MatchesState,
    MovieDetailsState,
    MovieSearchState,
    SessionManager,
    TopRatedPostersState,
    UserForumsState,
    UserListsState,
    UserProfileState,
    UserSearchState,
    UserSettingsState,
    WriteReviewState,
)
from .features.follow_list import FollowListKind
from .security import build_vault
from .services import (
    AuthService,
    ChatsService,
    ForumsService,
    ListsService,
    MatchesService,
    MediaCacheService,
    MediaLogsService,
    TmdbService,
    UsersService,
)
from .storage import StorageBackend, TokenStore, select_storage_backend
from .sync import ChatListSync, ChatMessagesSync

logger = logging.getLogger(__name__)


def firestore_source_factory(settings: Settings | None = None) -> FirestoreSourceFactory:
    """Listener sources backed by the default Firebase app configured from ``settings``."""

    return FirestoreSourceFactory(get_firestore_client(settings or get_settings()))


@dataclass(slots=True)
class Application:
    settings: Settings
    events: EventEmitter
    token_store: TokenStore
    api: ApiClient
    auth: AuthService
    users: UsersService
    media_logs: MediaLogsService
    media_cache: MediaCacheService
    matches: MatchesService
    chats: ChatsService
    forums: ForumsService
    lists: ListsService
    tmdb: TmdbService
    session: SessionManager
    source_factory: ListenerFactory | None = field(default=None)

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        storage: StorageBackend | None = None,
        source_factory: ListenerFactory | None = None,
    ) -> "Application":
        settings = settings or get_settings()
        backend = storage if storage is not None else select_storage_backend(settings.storage_path)
        token_store = TokenStore(backend, vault=build_vault(settings.vault_key))
        events = EventEmitter()
        api = ApiClient(
            settings.api_base_url,
            token_store=token_store,
            events=events,
            timeout=settings.api_timeout,
            transport=transport,
            log_traffic=settings.log_api_traffic,
        )
        auth = AuthService(api)
        session = SessionManager(
            auth_service=auth,
            token_store=token_store,
            events=events,
            refresh_delay=settings.refresh_debounce,
        )
        logger.info("CineMatch client ready for %s (persistent storage: %s)", settings.api_base_url, backend.persistent)
        return cls(
            settings=settings,
            events=events,
            token_store=token_store,
            api=api,
            auth=auth,
            users=UsersService(api),
            media_logs=MediaLogsService(api),
            media_cache=MediaCacheService(api),
            matches=MatchesService(api),
            chats=ChatsService(api),
            forums=ForumsService(api),
            lists=ListsService(api),
            tmdb=TmdbService(api),
            session=session,
            source_factory=source_factory,
        )

    def _sources(self) -> ListenerFactory:
        if self.source_factory is None:
            self.source_factory = firestore_source_factory(self.settings)
        return self.source_factory

    def chat_messages(self, chat_id: str) -> ChatMessagesSync:
        return ChatMessagesSync(
            chat_id,
            chats_service=self.chats,
            source_factory=self._sources(),
            page_size=self.settings.chat_page_size,
        )

    def chat_list(self, user_id: str) -> ChatListSync:
        return ChatListSync(
            user_id,
            chats_service=self.chats,
            source_factory=self._sources(),
            limit=self.settings.chat_list_limit,
        )

    def forum_details(self, forum_id: str) -> ForumDetailsState:
        return ForumDetailsState(forum_id, forums_service=self.forums, session=self.session)

    def movie_details(self, movie_id: int) -> MovieDetailsState:
        return MovieDetailsState(
            movie_id,
            tmdb_service=self.tmdb,
            users_service=self.users,
            media_logs_service=self.media_logs,
        )

    def top_rated_posters(self) -> TopRatedPostersState:
        return TopRatedPostersState(tmdb_service=self.tmdb, timeout=self.settings.posters_timeout)

    def user_search(self) -> UserSearchState:
        return UserSearchState(users_service=self.users, delay=self.settings.search_debounce)

    def diary(self) -> DiaryState:
        return DiaryState(media_logs_service=self.media_logs)

    def user_profile(self, user_id: str) -> UserProfileState:
        return UserProfileState(user_id, users_service=self.users, session=self.session)

    def write_review(self) -> WriteReviewState:
        return WriteReviewState(media_logs_service=self.media_logs)

    def home_movies(self) -> HomeMoviesState:
        return HomeMoviesState(tmdb_service=self.tmdb)

    def movie_search(self) -> MovieSearchState:
        return MovieSearchState(tmdb_service=self.tmdb, delay=self.settings.movie_search_debounce)

    def forum_search(self) -> ForumSearchState:
        return ForumSearchState(forums_service=self.forums, delay=self.settings.search_debounce)

    def list_search(self) -> ListSearchState:
        return ListSearchState(lists_service=self.lists, delay=self.settings.search_debounce)

    def potential_matches(
        self, max_days_ago: int = 10, min_rating: float | None = 2.5, limit: int = 20
    ) -> MatchesState:
        return MatchesState(
            matches_service=self.matches, max_days_ago=max_days_ago, min_rating=min_rating, limit=limit
        )

    def user_lists(self) -> UserListsState:
        return UserListsState(lists_service=self.lists)

    def list_details(self, list_id: str) -> ListDetailsState:
        return ListDetailsState(list_id, lists_service=self.lists)

    def add_to_list(self) -> AddToListState:
        return AddToListState(lists_service=self.lists)

    def follow_list(self, kind: FollowListKind, user_id: str, limit: int = 50) -> FollowListState:
        return FollowListState(kind, user_id, users_service=self.users, limit=limit)

    def user_forums(self) -> UserForumsState:
        return UserForumsState(forums_service=self.forums, session=self.session)

    def log_details(self, log_id: str) -> LogDetailsState:
        return LogDetailsState(log_id, media_logs_service=self.media_logs)

    def edit_log(self) -> EditLogState:
        return EditLogState(media_logs_service=self.media_logs)

    def user_settings(self) -> UserSettingsState:
        return UserSettingsState(users_service=self.users, session=self.session)

    async def aclose(self) -> None:
        self.session.close()
        self.events.clear()
        await self.api.aclose()

    async def __aenter__(self) -> "Application":
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()


__all__ = ["Application", "firestore_source_factory"]
