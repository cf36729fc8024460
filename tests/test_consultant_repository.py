"""
Tests for consultant and directory repositories.
"""

from core.models import Consultant
from core.repositories import ConsultantRepository, DirectoryRepository


def _add(session, apelido, email, imagem=None):
    return ConsultantRepository(session).create(
        apelido=apelido,
        email=email,
        senha="$2b$04$hash",
        imagem=imagem,
    )


class TestDirectoryRepository:
    def test_get_by_email_ignores_case_and_whitespace(self, test_session, directory):
        repo = DirectoryRepository(test_session)

        entry = repo.get_by_email("  JOAO@empresa.com ")

        assert entry is not None
        assert entry.nome_completo == "João da Silva"

    def test_get_by_email_missing(self, test_session, directory):
        assert DirectoryRepository(test_session).get_by_email("ninguem@empresa.com") is None


class TestConsultantRepository:
    def test_create_defaults(self, test_session, directory):
        consultant = _add(test_session, "joao", "joao@empresa.com")

        assert consultant.id is not None
        assert consultant.admin is False
        assert len(consultant.secundario_id) == 36

    def test_list_joins_directory_and_skips_orphans(self, test_session, directory):
        _add(test_session, "joao", "joao@empresa.com")
        _add(test_session, "orfao", "saiu@empresa.com")

        rows = ConsultantRepository(test_session).list_with_directory()

        assert [(r.apelido, r.nome_completo) for r in rows] == [("joao", "João da Silva")]

    def test_get_with_directory(self, test_session, directory):
        consultant = _add(test_session, "maria", "maria@empresa.com", imagem="http://x/y")

        row = ConsultantRepository(test_session).get_with_directory(consultant.id)

        assert row.nome_completo == "Maria Souza"
        assert row.imagem == "http://x/y"

    def test_email_taken_ignores_case(self, test_session, directory):
        _add(test_session, "joao", "joao@empresa.com")
        repo = ConsultantRepository(test_session)

        assert repo.email_taken("Joao@Empresa.com")
        assert not repo.email_taken("maria@empresa.com")

    def test_update_fields_only_touches_given_columns(self, test_session, directory):
        consultant = _add(test_session, "joao", "joao@empresa.com", imagem="http://x/old")
        repo = ConsultantRepository(test_session)

        updated = repo.update_fields(consultant.id, apelido="novo")

        test_session.expire_all()
        stored = test_session.get(Consultant, consultant.id)
        assert updated == 1
        assert stored.apelido == "novo"
        assert stored.imagem == "http://x/old"
        assert stored.senha == "$2b$04$hash"

    def test_update_fields_missing_row(self, test_session, directory):
        assert ConsultantRepository(test_session).update_fields(999, apelido="x") == 0

    def test_update_fields_without_changes(self, test_session, directory):
        consultant = _add(test_session, "joao", "joao@empresa.com")

        assert ConsultantRepository(test_session).update_fields(consultant.id) == 0

    def test_delete_by_id(self, test_session, directory):
        consultant = _add(test_session, "joao", "joao@empresa.com")
        repo = ConsultantRepository(test_session)

        assert repo.delete_by_id(consultant.id) == 1
        assert repo.delete_by_id(consultant.id) == 0
        assert repo.get_by_id(consultant.id) is None

    def test_get_by_id_sees_bulk_update_in_same_session(self, test_session, directory):
        consultant = _add(test_session, "joao", "joao@empresa.com")
        repo = ConsultantRepository(test_session)

        repo.update_fields(consultant.id, imagem="http://x/new")

        assert repo.get_by_id(consultant.id).imagem == "http://x/new"
