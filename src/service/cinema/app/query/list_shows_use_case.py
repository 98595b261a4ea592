from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.show_catalog import IShowCatalog


class ListShowsUseCase:
    def __init__(self, show_catalog: IShowCatalog) -> None:
        self.show_catalog = show_catalog

    @classmethod
    @inject
    def depends(
        cls, show_catalog: IShowCatalog = Depends(Provide[Container.show_catalog])
    ) -> Self:
        return cls(show_catalog=show_catalog)

    @Logger.io
    def list_shows(self, *, movie_id: Optional[str] = None) -> List[Show]:
        """All shows in start-time order, optionally narrowed to one movie."""
        shows = self.show_catalog.all_shows()
        if movie_id is not None:
            wanted = movie_id.strip().upper()
            shows = [show for show in shows if show.movie.id == wanted]
        return sorted(shows, key=lambda show: (show.start_time, show.id))
