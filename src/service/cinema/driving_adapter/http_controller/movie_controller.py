from typing import List

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.list_movies_use_case import ListMoviesUseCase
from src.service.cinema.driving_adapter.http_controller.schema.show_schema import MovieResponse


router = APIRouter()


@router.get('', response_model=List[MovieResponse])
@Logger.io
def list_movies(
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> List[MovieResponse]:
    return [MovieResponse.from_entity(movie) for movie in use_case.list_movies()]
