"""
ContainerType Router
"""
from typing import List

from fastapi import APIRouter, Depends, status

from logitrack.schemas.container_type_schema import ContainerTypeResponseSchema, ContainerTypeSchema
from logitrack.services.core.wrap import check_authentication
from logitrack.services.interfaces.container_type_service_interface import IContainerTypeService
from logitrack.services.routers.auth_service import authorize, db_dependency, get_current_user

router = APIRouter(
    prefix="/api/v1/container-types",
    tags=["ContainerType"],
)


def get_container_type_service(db: db_dependency) -> IContainerTypeService:
    from logitrack.core.container_config import get_configured_container
    return get_configured_container().resolve_with_session(IContainerTypeService, db)


@router.get("/", status_code=status.HTTP_200_OK, response_model=List[ContainerTypeResponseSchema])
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_all_container_types(
    user: dict = Depends(get_current_user),
    container_type_service: IContainerTypeService = Depends(get_container_type_service)
):
    """Tipi di container ammessi nel form ordine"""
    names = await container_type_service.list_container_types()
    return [{"name": name} for name in names]


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=ContainerTypeResponseSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN'], permissions_required=['C'])
async def create_container_type(
    container_type: ContainerTypeSchema,
    user: dict = Depends(get_current_user),
    container_type_service: IContainerTypeService = Depends(get_container_type_service)
):
    name = await container_type_service.create_container_type(container_type.name)
    return {"name": name}
