"""
Consultant directory service.

Implements list/get/create/update/delete of consultant accounts over the
relational store (consultores joined with dados_fcamara) and the avatar
blob store.

Operations that touch both stores are not atomic. They run as ordered steps
and undo what they can when a later step fails:

    update: delete old avatar -> upload new avatar -> update row
            (row failure: delete the new avatar)
    delete: delete avatar -> delete row
"""

import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.config import get_settings
from core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StateError,
    StorageError,
    ValidationError,
)
from core.logging import get_logger
from core.models import MAX_CONSULTANT_ID, Consultant
from core.repositories import ConsultantRepository, DirectoryRepository
from core.security import hash_password
from core.storage import BlobStorageError, BlobStore
from core.validation import decode_avatar, validate_registration, validate_update

logger = get_logger("service.consultants")

NOT_FOUND_MESSAGE = "Consultor não encontrado."
DATABASE_ERROR_MESSAGE = "Erro ao acessar os dados dos consultores."
IMAGE_DELETE_ERROR_MESSAGE = "Erro ao excluir a imagem do consultor."
IMAGE_UPLOAD_ERROR_MESSAGE = "Erro ao enviar a imagem do consultor."


def avatar_key(consultant_id: int) -> str:
    """Storage key of a consultant's avatar."""
    return f"consultor{consultant_id}/avatar"


def serialize_consultant(row: Any) -> dict:
    """Convert a joined consultant row to the public projection."""
    return {
        "nome_completo": row.nome_completo,
        "apelido": row.apelido,
        "email": row.email,
        "imagem": row.imagem,
        "admin": bool(row.admin),
    }


class ConsultantDirectoryService:
    """
    Consultant account operations with injected collaborators.

    Usage:
        with db.session() as session:
            service = ConsultantDirectoryService(
                ConsultantRepository(session),
                DirectoryRepository(session),
                get_blob_store(),
            )
            consultants = service.list_consultants()
    """

    def __init__(
        self,
        consultant_repo: ConsultantRepository,
        directory_repo: DirectoryRepository,
        blob_store: BlobStore,
        password_rounds: int | None = None,
        max_avatar_bytes: int | None = None,
    ):
        settings = get_settings()
        self.consultant_repo = consultant_repo
        self.directory_repo = directory_repo
        self.blob_store = blob_store
        self.password_rounds = password_rounds or settings.bcrypt_rounds
        self.max_avatar_bytes = max_avatar_bytes or settings.max_avatar_bytes

    # =========================================================================
    # Reads
    # =========================================================================

    def list_consultants(self) -> list[dict]:
        """All consultants with their directory name, ordered by apelido."""
        try:
            rows = self.consultant_repo.list_with_directory()
        except SQLAlchemyError as e:
            logger.error("consultant_list_failed", error=str(e))
            raise StorageError(DATABASE_ERROR_MESSAGE) from e
        return [serialize_consultant(row) for row in rows]

    def get_consultant(self, consultant_id: int) -> dict:
        """
        Get one consultant projection.

        Raises:
            NotFoundError: If no consultant (joined with the directory) has this id
            StorageError: If the database fails
        """
        if not 1 <= consultant_id <= MAX_CONSULTANT_ID:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        try:
            row = self.consultant_repo.get_with_directory(consultant_id)
        except SQLAlchemyError as e:
            logger.error("consultant_get_failed", consultant_id=consultant_id, error=str(e))
            raise StorageError(DATABASE_ERROR_MESSAGE) from e

        if row is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return serialize_consultant(row)

    # =========================================================================
    # Create
    # =========================================================================

    def create_consultant(self, apelido: str, email: str, senha: str) -> Consultant:
        """
        Register a consultant recognized by the employee directory.

        The stored email takes the directory's spelling so the read join
        matches regardless of the case the caller used.

        Raises:
            ValidationError: Invalid input
            ConflictError: Email already registered (any case)
            AuthorizationError: Email not in the directory
            StorageError: Insert failed
        """
        error = validate_registration(apelido, email, senha)
        if error:
            raise ValidationError(error)

        try:
            if self.consultant_repo.email_taken(email):
                raise ConflictError("O e-mail informado já foi cadastrado no sistema.")

            entry = self.directory_repo.get_by_email(email)
        except SQLAlchemyError as e:
            logger.error("consultant_lookup_failed", error=str(e))
            raise StorageError(DATABASE_ERROR_MESSAGE) from e

        if entry is None:
            logger.warning("consultant_registration_denied", reason="not_in_directory")
            raise AuthorizationError("Cadastro não autorizado. Consultor não identificado.")

        senha_hash = hash_password(senha, rounds=self.password_rounds)

        try:
            consultant = self.consultant_repo.create(
                secundario_id=str(uuid.uuid4()),
                apelido=apelido.strip(),
                email=entry.email,
                senha=senha_hash,
                admin=False,
            )
        except IntegrityError as e:
            # Lost the race against a concurrent registration
            logger.warning("consultant_create_conflict", error=str(e.orig))
            raise ConflictError("O e-mail informado já foi cadastrado no sistema.") from e
        except SQLAlchemyError as e:
            logger.error("consultant_create_failed", error=str(e))
            raise StorageError("Erro ao cadastrar consultor.") from e

        logger.info("consultant_created", consultant_id=consultant.id)
        return consultant

    # =========================================================================
    # Update
    # =========================================================================

    def update_consultant(
        self,
        consultant: Consultant,
        apelido: str | None = None,
        imagem: str | None = None,
        senha: str | None = None,
    ) -> None:
        """
        Update the nickname, avatar and/or password of a consultant.

        Only supplied fields are written. A new avatar always lands on
        ``consultor{id}/avatar`` after the previous one has been deleted.

        Raises:
            ValidationError: No field supplied, or invalid field
            StorageError: Avatar delete/upload failed (row untouched)
            StateError: The row update affected nothing
        """
        apelido = apelido or None
        imagem = imagem or None
        senha = senha or None

        if apelido is None and imagem is None and senha is None:
            raise ValidationError("Insira ao menos um campo para atualização.")

        error = validate_update(apelido, senha)
        if error:
            raise ValidationError(error)

        changes: dict[str, Any] = {}
        if apelido is not None:
            changes["apelido"] = apelido.strip()

        uploaded_key = None
        if imagem is not None:
            data, content_type = decode_avatar(imagem, self.max_avatar_bytes)
            key = avatar_key(consultant.id)

            if consultant.imagem:
                old_key = self.blob_store.key_from_url(consultant.imagem)
                try:
                    self.blob_store.delete(old_key)
                except BlobStorageError as e:
                    logger.error("avatar_delete_failed", consultant_id=consultant.id, error=str(e))
                    raise StorageError(IMAGE_DELETE_ERROR_MESSAGE) from e

            try:
                changes["imagem"] = self.blob_store.upload(key, data, content_type=content_type)
            except BlobStorageError as e:
                logger.error("avatar_upload_failed", consultant_id=consultant.id, error=str(e))
                raise StorageError(IMAGE_UPLOAD_ERROR_MESSAGE) from e
            uploaded_key = key

        if senha is not None:
            changes["senha"] = hash_password(senha, rounds=self.password_rounds)

        try:
            updated = self.consultant_repo.update_fields(consultant.id, **changes)
        except SQLAlchemyError as e:
            logger.error("consultant_update_failed", consultant_id=consultant.id, error=str(e))
            updated = 0

        if not updated:
            if uploaded_key is not None:
                self._discard_blob(uploaded_key)
            raise StateError("Erro ao atualizar dados do perfil do consultor.")

        logger.info(
            "consultant_updated",
            consultant_id=consultant.id,
            fields=sorted(changes),
        )

    # =========================================================================
    # Delete
    # =========================================================================

    def delete_consultant(self, consultant_id: int) -> None:
        """
        Delete a consultant and its avatar.

        Raises:
            NotFoundError: No consultant with this id
            StorageError: Avatar delete failed (row kept) or database failure
            StateError: The row delete affected nothing
        """
        if not 1 <= consultant_id <= MAX_CONSULTANT_ID:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        try:
            consultant = self.consultant_repo.get_by_id(consultant_id)
        except SQLAlchemyError as e:
            logger.error("consultant_get_failed", consultant_id=consultant_id, error=str(e))
            raise StorageError(DATABASE_ERROR_MESSAGE) from e

        if consultant is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        if consultant.imagem:
            try:
                self.blob_store.delete(self.blob_store.key_from_url(consultant.imagem))
            except BlobStorageError as e:
                logger.error("avatar_delete_failed", consultant_id=consultant_id, error=str(e))
                raise StorageError(IMAGE_DELETE_ERROR_MESSAGE) from e

        try:
            deleted = self.consultant_repo.delete_by_id(consultant_id)
        except SQLAlchemyError as e:
            logger.error("consultant_delete_failed", consultant_id=consultant_id, error=str(e))
            deleted = 0

        if not deleted:
            raise StateError("Erro ao remover consultor.")

        logger.info("consultant_deleted", consultant_id=consultant_id)

    def _discard_blob(self, key: str) -> None:
        """Best-effort removal of a blob whose row update did not happen."""
        try:
            self.blob_store.delete(key)
        except BlobStorageError as e:
            logger.warning("avatar_compensation_failed", key=key, error=str(e))


__all__ = [
    "ConsultantDirectoryService",
    "avatar_key",
    "serialize_consultant",
]
