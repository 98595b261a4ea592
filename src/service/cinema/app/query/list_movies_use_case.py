from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.show_catalog import IShowCatalog


class ListMoviesUseCase:
    def __init__(self, show_catalog: IShowCatalog) -> None:
        self.show_catalog = show_catalog

    @classmethod
    @inject
    def depends(
        cls, show_catalog: IShowCatalog = Depends(Provide[Container.show_catalog])
    ) -> Self:
        return cls(show_catalog=show_catalog)

    def list_movies(self) -> List[Movie]:
        return self.show_catalog.all_movies()
