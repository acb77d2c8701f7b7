from .discussion_service import DiscussionQuestionService
from .memory_service import MemoryService
from .movie_service import MovieService
from .save_result import SaveResult

__all__ = ["DiscussionQuestionService", "MemoryService", "MovieService", "SaveResult"]
