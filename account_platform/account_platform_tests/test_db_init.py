"""Tests for database initialization and constraints."""
import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from account_platform.account_platform.account_service.db import (
    check_db_connection,
    create_db_engine,
    init_db,
)
from account_platform.account_platform.account_service.models import Post, User


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings)
    init_db(engine)
    yield engine
    engine.dispose()


def test_init_db_creates_tables_and_columns(engine):
    inspector = inspect(engine)
    assert {"users", "posts"} <= set(inspector.get_table_names())

    user_columns = {col["name"]: col for col in inspector.get_columns("users")}
    for col_name in ["id", "email", "password", "created_at"]:
        assert col_name in user_columns, f"Column {col_name} should exist in users table"
    assert user_columns["email"]["nullable"] is False
    assert user_columns["password"]["nullable"] is False

    post_columns = {col["name"]: col for col in inspector.get_columns("posts")}
    for col_name in ["id", "text", "user_id", "created_at"]:
        assert col_name in post_columns, f"Column {col_name} should exist in posts table"
    assert post_columns["user_id"]["nullable"] is False


def test_init_db_is_idempotent(engine):
    init_db(engine)
    assert "users" in inspect(engine).get_table_names()


def test_posts_reference_users(engine):
    foreign_keys = inspect(engine).get_foreign_keys("posts")
    user_fk = next((fk for fk in foreign_keys if fk["referred_table"] == "users"), None)
    assert user_fk is not None, "Foreign key to users table should exist"
    assert user_fk["constrained_columns"] == ["user_id"]


def test_email_is_unique(engine):
    with Session(engine) as session:
        session.add(User(email="dup@example.com", password="h1"))
        session.commit()
        session.add(User(email="dup@example.com", password="h2"))
        with pytest.raises(IntegrityError):
            session.commit()


def test_sqlite_enforces_post_owner(engine):
    with Session(engine) as session:
        session.add(Post(text="orphan", user_id=12345))
        with pytest.raises(IntegrityError):
            session.commit()


def test_check_db_connection(engine):
    assert check_db_connection(engine) is True


def test_models_map_columns_only():
    # Posts are always fetched by owner id through the store
    assert list(inspect(User).relationships) == []
    assert list(inspect(Post).relationships) == []
    assert {c.name for c in inspect(Post).columns} == {"id", "text", "user_id", "created_at"}
