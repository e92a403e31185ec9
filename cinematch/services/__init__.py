"""Per-resource wrappers around the CineMatch backend REST API."""
from .auth_service import AuthService
from .base import BaseService
from .chats_service import ChatsService
from .forums_service import ForumsService
from .lists_service import ListsService
from .matches_service import MatchesService
from .media_cache_service import MediaCacheService
from .media_logs_service import MediaLogsService
from .tmdb_service import TmdbConfigService, TmdbMovieService, TmdbService, TmdbTVService
from .users_service import UsersService

__all__ = [
    "AuthService",
    "BaseService",
    "ChatsService",
    "ForumsService",
    "ListsService",
    "MatchesService",
    "MediaCacheService",
    "MediaLogsService",
    "TmdbConfigService",
    "TmdbMovieService",
    "TmdbService",
    "TmdbTVService",
    "UsersService",
]
