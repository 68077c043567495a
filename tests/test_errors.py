from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app import database
from app.categories import service as category_service
from app.errors import DuplicateCategory, StoreFailure, Unauthenticated
from conftest import auth_headers, signup


def test_commit_failure_rolls_back_and_raises_store_failure():
    session = MagicMock()
    session.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk full"))

    with pytest.raises(StoreFailure):
        database.commit(session)

    session.rollback.assert_called_once()


def test_error_kinds_carry_status_and_default_detail():
    assert Unauthenticated().status_code == 401
    assert Unauthenticated().headers == {"WWW-Authenticate": "Bearer"}
    assert DuplicateCategory().detail == "Category already exists"
    assert DuplicateCategory("Category 'Food' already exists").detail == "Category 'Food' already exists"


def test_store_fault_surfaces_as_server_error(client, monkeypatch):
    headers = auth_headers(signup(client, "alice", "pw1"))

    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(category_service, "list_categories", broken)

    response = client.get("/categories/", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "Storage operation failed"}
    assert "connection lost" not in response.text
