"""Screen-level state containers built on the services and syncs."""
from .debounce import Debouncer
from .diary import DiaryState
from .follow_list import FollowListState
from .forum_details import ForumDetailsState
from .home_movies import HomeMoviesState
from .lists import AddToListState, ListDetailsState, UserListsState
from .log_details import EditLogState, LogDetailsState
from .matches import MatchesState
from .movie_details import MovieDetailsState
from .search import DebouncedSearch, ForumSearchState, ListSearchState, MovieSearchState
from .session import SessionManager
from .settings import UserSettingsState
from .top_rated_posters import TopRatedPostersState
from .user_forums import UserForumsState
from .user_profile import UserProfileState
from .user_search import UserSearchState
from .write_review import WriteReviewState

__all__ = [
    "AddToListState",
    "DebouncedSearch",
    "Debouncer",
    "DiaryState",
    "EditLogState",
    "FollowListState",
    "ForumDetailsState",
    "ForumSearchState",
    "HomeMoviesState",
    "ListDetailsState",
    "ListSearchState",
    "LogDetailsState",
    "MatchesState",
    "MovieDetailsState",
    "MovieSearchState",
    "SessionManager",
    "TopRatedPostersState",
    "UserForumsState",
    "UserListsState",
    "UserProfileState",
    "UserSearchState",
    "UserSettingsState",
    "WriteReviewState",
]
