"""Pydantic models for backend payloads."""
from .base import ApiModel, MediaType, MessageResponse, Reactions, Timestamp
from .chat import AddReactionRequest, Chat, ChatSummary, CreateChatRequest, Message, MessageKind, SendMessageRequest
from .forum import (
    Comment,
    CommentWithAuthor,
    ContentRequest,
    CreateForumRequest,
    Forum,
    ForumSummary,
    Post,
    PostWithAuthor,
    UpdateForumRequest,
)
from .lists import (
    AddListItemRequest,
    CreateListRequest,
    ListCover,
    ListItem,
    ListSearchPage,
    MediaList,
    MediaListWithOwner,
    UpdateListItemRequest,
    UpdateListRequest,
)
from .matches import MatchesResponse, PotentialMatch
from .media import (
    CacheStats,
    HybridResponse,
    LogMediaViewRequest,
    MediaCache,
    MediaLog,
    Paginated,
    TmdbCredits,
    TmdbGenres,
    TmdbMovie,
    TmdbMovieDetails,
    TmdbTVShow,
    TmdbTVShowDetails,
    TmdbWatchProviders,
    TopRatedPoster,
    UpdateMediaLogRequest,
    UserMediaStats,
)
from .reviews import FriendActivityReview, MediaDetailsWithReviews, ReviewLike, UserReview, parse_review_like
from .users import (
    AddFavoriteRequest,
    AuthResponse,
    AuthUser,
    CreateUserRequest,
    FavoriteItem,
    FollowEntry,
    ProfileStats,
    UpdateUserRequest,
    User,
    UserProfile,
    UserSettings,
)

__all__ = [
    "ApiModel",
    "MediaType",
    "MessageResponse",
    "Timestamp",
    "Reactions",
    "AddReactionRequest",
    "Chat",
    "ChatSummary",
    "CreateChatRequest",
    "Message",
    "MessageKind",
    "SendMessageRequest",
    "Comment",
    "CommentWithAuthor",
    "ContentRequest",
    "CreateForumRequest",
    "Forum",
    "ForumSummary",
    "Post",
    "PostWithAuthor",
    "UpdateForumRequest",
    "AddListItemRequest",
    "CreateListRequest",
    "ListCover",
    "ListItem",
    "ListSearchPage",
    "MediaList",
    "MediaListWithOwner",
    "UpdateListItemRequest",
    "UpdateListRequest",
    "MatchesResponse",
    "PotentialMatch",
    "CacheStats",
    "HybridResponse",
    "LogMediaViewRequest",
    "MediaCache",
    "MediaLog",
    "Paginated",
    "TmdbCredits",
    "TmdbGenres",
    "TmdbMovie",
    "TmdbMovieDetails",
    "TmdbTVShow",
    "TmdbTVShowDetails",
    "TmdbWatchProviders",
    "TopRatedPoster",
    "UpdateMediaLogRequest",
    "UserMediaStats",
    "FriendActivityReview",
    "MediaDetailsWithReviews",
    "ReviewLike",
    "UserReview",
    "parse_review_like",
    "AddFavoriteRequest",
    "AuthResponse",
    "AuthUser",
    "CreateUserRequest",
    "FavoriteItem",
    "FollowEntry",
    "ProfileStats",
    "UpdateUserRequest",
    "User",
    "UserProfile",
    "UserSettings",
]
