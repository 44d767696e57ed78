"""
Configurazione del container di dependency injection
"""
from logitrack.core.container import container
from logitrack.core.settings import get_app_settings
from logitrack.repository.interfaces.supplier_repository_interface import ISupplierRepository
from logitrack.repository.supplier_repository import SupplierRepository
from logitrack.repository.interfaces.carrier_repository_interface import ICarrierRepository
from logitrack.repository.carrier_repository import CarrierRepository
from logitrack.repository.interfaces.destination_repository_interface import IDestinationRepository
from logitrack.repository.destination_repository import DestinationRepository
from logitrack.repository.interfaces.container_type_repository_interface import IContainerTypeRepository
from logitrack.repository.container_type_repository import ContainerTypeRepository
from logitrack.repository.interfaces.order_repository_interface import IOrderRepository
from logitrack.repository.order_repository import OrderRepository
from logitrack.repository.interfaces.order_document_repository_interface import IOrderDocumentRepository
from logitrack.repository.order_document_repository import OrderDocumentRepository
from logitrack.repository.interfaces.user_repository_interface import IUserRepository
from logitrack.repository.user_repository import UserRepository
from logitrack.repository.interfaces.auth_session_repository_interface import IAuthSessionRepository
from logitrack.repository.auth_session_repository import AuthSessionRepository
from logitrack.services.interfaces.supplier_service_interface import ISupplierService
from logitrack.services.routers.supplier_service import SupplierService
from logitrack.services.interfaces.carrier_service_interface import ICarrierService
from logitrack.services.routers.carrier_service import CarrierService
from logitrack.services.interfaces.destination_service_interface import IDestinationService
from logitrack.services.routers.destination_service import DestinationService
from logitrack.services.interfaces.container_type_service_interface import IContainerTypeService
from logitrack.services.routers.container_type_service import ContainerTypeService
from logitrack.services.interfaces.order_service_interface import IOrderService
from logitrack.services.routers.order_service import OrderService
from logitrack.services.interfaces.order_document_service_interface import IOrderDocumentService
from logitrack.services.routers.order_document_service import OrderDocumentService
from logitrack.services.interfaces.dashboard_service_interface import IDashboardService
from logitrack.services.routers.dashboard_service import DashboardService
from logitrack.services.interfaces.user_service_interface import IUserService
from logitrack.services.routers.user_service import UserService
from logitrack.services.storage.document_storage import IDocumentStorage, LocalDocumentStorage


def configure_container():
    """Configura il container di dependency injection"""

    # Repository - Transient (nuova istanza per ogni richiesta)
    container.register_transient(ISupplierRepository, SupplierRepository)
    container.register_transient(ICarrierRepository, CarrierRepository)
    container.register_transient(IDestinationRepository, DestinationRepository)
    container.register_transient(IContainerTypeRepository, ContainerTypeRepository)
    container.register_transient(IOrderRepository, OrderRepository)
    container.register_transient(IOrderDocumentRepository, OrderDocumentRepository)
    container.register_transient(IUserRepository, UserRepository)
    container.register_transient(IAuthSessionRepository, AuthSessionRepository)

    # Services - Transient (nuova istanza per ogni richiesta)
    container.register_transient(ISupplierService, SupplierService)
    container.register_transient(ICarrierService, CarrierService)
    container.register_transient(IDestinationService, DestinationService)
    container.register_transient(IContainerTypeService, ContainerTypeService)
    container.register_transient(IOrderService, OrderService)
    container.register_transient(IOrderDocumentService, OrderDocumentService)
    container.register_transient(IDashboardService, DashboardService)
    container.register_transient(IUserService, UserService)

    # Storage - istanza unica configurata dalle impostazioni
    if not container.is_registered(IDocumentStorage):
        settings = get_app_settings()
        container.register_instance(
            IDocumentStorage,
            LocalDocumentStorage(settings.document_storage_root, settings.document_public_base_url)
        )

    return container


# Configurazione globale
_configured_container = None


def get_configured_container():
    """Ottiene il container configurato"""
    global _configured_container
    if _configured_container is None:
        _configured_container = configure_container()
    return _configured_container
