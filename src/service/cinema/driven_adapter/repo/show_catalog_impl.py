from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional

from src.platform.config.catalog_config import MOVIES, SHOWS, MovieConfig, ShowConfig
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.seat_map_entity import SeatMap
from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.show_catalog import IShowCatalog


class ShowCatalogImpl(IShowCatalog):
    """In-memory catalog. Movies and shows never change after construction."""

    def __init__(self, *, movies: Iterable[Movie], shows: Iterable[Show]) -> None:
        self._movies: Dict[str, Movie] = {movie.id: movie for movie in movies}
        self._shows: Dict[str, Show] = {}
        for show in shows:
            if show.movie.id not in self._movies:
                raise ValueError(f'Show {show.id} references unknown movie {show.movie.id}')
            if show.id in self._shows:
                raise ValueError(f'Duplicate show id: {show.id}')
            self._shows[show.id] = show

    @classmethod
    def from_config(
        cls,
        *,
        rows: int,
        cols: int,
        today: Optional[date] = None,
        movie_configs: Iterable[MovieConfig] = MOVIES,
        show_configs: Iterable[ShowConfig] = SHOWS,
    ) -> 'ShowCatalogImpl':
        """Build the catalog with start times relative to today, each show with a fresh rows x cols map."""
        today = today or date.today()
        movies = {
            config['id']: Movie(
                id=config['id'],
                title=config['title'],
                language=config['language'],
                duration_minutes=config['duration_minutes'],
                genre=config['genre'],
            )
            for config in movie_configs
        }
        shows = []
        for config in show_configs:
            movie = movies.get(config['movie_id'])
            if movie is None:
                raise ValueError(
                    f'Show {config["id"]} references unknown movie {config["movie_id"]}'
                )
            start_day = today + timedelta(days=config['day_offset'])
            shows.append(
                Show(
                    id=config['id'],
                    movie=movie,
                    start_time=datetime.combine(start_day, time(config['hour'], config['minute'])),
                    screen=config['screen'],
                    price_per_seat=config['price'],
                    seat_map=SeatMap.grid(rows=rows, cols=cols),
                )
            )

        catalog = cls(movies=movies.values(), shows=shows)
        Logger.base.info(
            f'[CATALOG] Loaded {len(catalog._movies)} movies and {len(catalog._shows)} shows '
            f'({rows}x{cols} seats each)'
        )
        return catalog

    def get_movie(self, movie_id: str) -> Optional[Movie]:
        return self._movies.get(movie_id)

    def get_show(self, show_id: str) -> Optional[Show]:
        return self._shows.get(show_id)

    def all_movies(self) -> List[Movie]:
        return list(self._movies.values())

    def all_shows(self) -> List[Show]:
        return list(self._shows.values())
