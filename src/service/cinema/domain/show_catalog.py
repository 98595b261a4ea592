from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.show_entity import Show


class IShowCatalog(ABC):
    """Read-only movies and shows, populated once at startup."""

    @abstractmethod
    def get_movie(self, movie_id: str) -> Optional[Movie]:
        pass

    @abstractmethod
    def get_show(self, show_id: str) -> Optional[Show]:
        pass

    @abstractmethod
    def all_movies(self) -> List[Movie]:
        pass

    @abstractmethod
    def all_shows(self) -> List[Show]:
        pass
