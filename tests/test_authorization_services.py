import pytest

from doc_registry.errors import DocumentNotFound, NotAuthorized
from doc_registry.schemas.registry import DocumentRegister
from doc_registry.services.authorization import is_owner, require_owner
from doc_registry.services.documents import Documents


def _register(db_session, creator):
    payload = DocumentRegister(
        name="Memo",
        digest="9" * 64,
        descriptor="Internal memo",
        classification="internal",
        tags=["memo"],
    )
    return Documents.register(db_session, payload, creator, 1)


class TestIsOwner:
    def test_creator_is_owner(self, db_session, creator):
        doc_id = _register(db_session, creator)
        assert is_owner(db_session, doc_id, creator) is True

    def test_other_identity_is_not_owner(self, db_session, creator, other_identity):
        doc_id = _register(db_session, creator)
        assert is_owner(db_session, doc_id, other_identity) is False

    def test_missing_document_is_false_not_error(self, db_session, creator):
        assert is_owner(db_session, 123, creator) is False


class TestRequireOwner:
    def test_distinguishes_missing_from_not_owner(
        self, db_session, creator, other_identity
    ):
        doc_id = _register(db_session, creator)
        with pytest.raises(DocumentNotFound):
            require_owner(db_session, doc_id + 1, creator)
        with pytest.raises(NotAuthorized):
            require_owner(db_session, doc_id, other_identity)
        assert require_owner(db_session, doc_id, creator).id == doc_id
