"""
ContainerType Service
"""
import logging
from typing import Any, List

from logitrack.core.cached import cached
from logitrack.core.exceptions import AlreadyExistsError, ErrorCode, ValidationException
from logitrack.core.invalidation import invalidate_entity
from logitrack.models.container_type import ContainerType, DEFAULT_CONTAINER_TYPES
from logitrack.repository.interfaces.container_type_repository_interface import IContainerTypeRepository
from logitrack.services.interfaces.container_type_service_interface import IContainerTypeService

logger = logging.getLogger(__name__)


class ContainerTypeService(IContainerTypeService):
    """Lista controllata dei tipi di container"""

    def __init__(self, container_type_repository: IContainerTypeRepository):
        self._container_type_repository = container_type_repository

    @cached("container_types:list", preset="container_types")
    async def list_container_types(self) -> List[str]:
        return self._container_type_repository.list_names()

    async def create_container_type(self, name: str) -> str:
        name = (name or "").strip()
        await self.validate_business_rules(name)
        if self._container_type_repository.exists(name):
            raise AlreadyExistsError(
                f"Container type '{name}' already exists",
                entity_type="ContainerType",
                entity_id=name
            )
        self._container_type_repository.create(ContainerType(name=name))
        await invalidate_entity("container_type")
        return name

    async def ensure_defaults(self) -> int:
        inserted = self._container_type_repository.seed_defaults(DEFAULT_CONTAINER_TYPES)
        if inserted:
            logger.info(f"Inseriti {inserted} tipi di container predefiniti")
            await invalidate_entity("container_type")
        return inserted

    async def validate_container_type(self, name: str) -> None:
        if not name or not self._container_type_repository.exists(name):
            raise ValidationException(
                f"Invalid container type '{name}'",
                ErrorCode.INVALID_CONTAINER_TYPE,
                {"field": "container_type", "value": name}
            )

    async def validate_business_rules(self, data: Any) -> None:
        if not data:
            raise ValidationException(
                "Container type name is required",
                ErrorCode.REQUIRED_FIELD_MISSING,
                {"field": "name"}
            )
