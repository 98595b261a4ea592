from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.reservation_errors import UnknownShowError
from src.service.cinema.domain.show_catalog import IShowCatalog


class GetShowUseCase:
    def __init__(self, show_catalog: IShowCatalog) -> None:
        self.show_catalog = show_catalog

    @classmethod
    @inject
    def depends(
        cls, show_catalog: IShowCatalog = Depends(Provide[Container.show_catalog])
    ) -> Self:
        return cls(show_catalog=show_catalog)

    @Logger.io
    def get_by_id(self, *, show_id: str) -> Show:
        show = self.show_catalog.get_show(show_id.strip().upper())
        if show is None:
            Logger.base.warning(f'[GET_SHOW] Show {show_id} not found')
            raise UnknownShowError(show_id)
        return show
