"""
Storage dei documenti allegati agli ordini.

I file sono indirizzati da un path relativo ``<order_id>/<nome file>``; l'URL
pubblico viene derivato dal path a ogni lettura e non viene mai salvato.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import quote

from logitrack.core.exceptions import (
    AlreadyExistsError,
    ErrorCode,
    InfrastructureException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class IDocumentStorage(ABC):
    """Interfaccia per lo storage dei documenti"""

    @abstractmethod
    async def upload(self, path: str, content: bytes) -> str:
        """Salva il contenuto al path indicato e restituisce il path"""
        pass

    @abstractmethod
    async def remove(self, path: str) -> bool:
        """Rimuove l'oggetto; False se non esiste o non è stato possibile rimuoverlo"""
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        pass


class LocalDocumentStorage(IDocumentStorage):
    """Storage su filesystem locale, servito come static files"""

    def __init__(self, root: str = "media/documents", public_base_url: str = "/media/documents"):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _resolve(self, path: str) -> Path:
        root = self.root.resolve()
        target = (root / path).resolve()
        if not path or root not in target.parents:
            raise ValidationException(
                "Invalid document path",
                ErrorCode.VALIDATION_ERROR,
                {"path": path}
            )
        return target

    async def upload(self, path: str, content: bytes) -> str:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(self._write_new, target, content)
        except FileExistsError:
            raise AlreadyExistsError(
                "A document with this file name already exists for this order",
                entity_type="OrderDocument",
                details={"path": path}
            )
        except OSError as e:
            logger.error(f"Errore scrittura documento {path}: {e}")
            raise InfrastructureException(
                "Unable to store the document",
                ErrorCode.STORAGE_ERROR,
                {"path": path}
            )
        logger.info(f"Documento salvato: {path} ({len(content)} bytes)")
        return path

    @staticmethod
    def _write_new(target: Path, content: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        handle = open(target, "xb")
        try:
            with handle:
                handle.write(content)
        except OSError:
            # Nessun file parziale resta nello storage
            target.unlink(missing_ok=True)
            raise

    async def remove(self, path: str) -> bool:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(target.unlink)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Impossibile rimuovere il documento {path}: {e}")
            return False
        return True

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def get_public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{quote(path)}"
