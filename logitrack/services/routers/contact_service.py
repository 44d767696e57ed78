"""
Servizio comune alle anagrafiche (fornitori, vettori, destinazioni)
"""
import logging
from typing import Any, Dict, Optional

from logitrack.core.exceptions import ConfirmationRequiredException, ValidationException, ErrorCode
from logitrack.core.invalidation import invalidate_entity
from logitrack.repository.interfaces.contact_repository_interface import IContactRepository
from logitrack.schemas.contact_schema import ContactResponseSchema, ContactSchema
from logitrack.services.interfaces.contact_service_interface import IContactService

logger = logging.getLogger(__name__)


class ContactService(IContactService):
    """
    Implementazione condivisa del CRUD delle anagrafiche.

    Le sottoclassi indicano ``entity_type`` (usato per l'invalidazione della
    cache) e applicano il decoratore ``cached`` al proprio ``list_contacts``.
    """

    entity_type = "contact"

    def __init__(self, repository: IContactRepository):
        self._repository = repository

    async def list_contacts(self, search: Optional[str] = None, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        page = max(page, 1)
        items = self._repository.search(search=search, page=page, limit=limit)
        total = self._repository.count(search=search)
        return {
            "items": [ContactResponseSchema.model_validate(item).model_dump(mode="json") for item in items],
            "total": total,
            "page": page,
            "limit": limit,
        }

    async def get_contact(self, contact_id: str) -> Any:
        return self._repository.get_by_id_or_raise(contact_id)

    async def create_contact(self, contact_data: ContactSchema) -> Any:
        await self.validate_business_rules(contact_data)
        contact = self._repository.create(contact_data.model_dump())
        await invalidate_entity(self.entity_type)
        logger.info(f"{self._repository.entity_name} creato: {contact.id}")
        return contact

    async def update_contact(self, contact_id: str, contact_data: ContactSchema) -> Any:
        await self.validate_business_rules(contact_data)
        contact = self._repository.get_by_id_or_raise(contact_id)

        # Sostituzione completa: un campo vuoto cancella il valore salvato
        for field_name, value in contact_data.model_dump().items():
            setattr(contact, field_name, value)

        contact = self._repository.update(contact)
        await invalidate_entity(self.entity_type)
        return contact

    async def delete_contact(self, contact_id: str, confirm: bool = False) -> bool:
        contact = self._repository.get_by_id_or_raise(contact_id)
        if not confirm:
            raise ConfirmationRequiredException(
                f"Confirm the deletion of '{contact.name}'",
                {"entity_type": self._repository.entity_name, "entity_id": contact.id, "name": contact.name}
            )

        self._repository.delete_entity(contact)
        await invalidate_entity(self.entity_type)
        logger.info(f"{self._repository.entity_name} eliminato: {contact_id}")
        return True

    async def validate_business_rules(self, data: Any) -> None:
        if not getattr(data, "name", None):
            raise ValidationException(
                "Name is required",
                ErrorCode.REQUIRED_FIELD_MISSING,
                {"field": "name"}
            )
