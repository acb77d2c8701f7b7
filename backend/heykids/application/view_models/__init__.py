from heykids.application.view_models.load_state import LoadState
from heykids.application.view_models.memory import MemoryViewModel
from heykids.application.view_models.movie_list import MovieListViewModel
from heykids.application.view_models.watchlist import WatchlistSortOrder, WatchlistViewModel

__all__ = [
    "LoadState",
    "MemoryViewModel",
    "MovieListViewModel",
    "WatchlistSortOrder",
    "WatchlistViewModel",
]
