from datetime import date

import pytest

from legacy_claims import create_app
from legacy_claims.config import Config, LegacySettings
from legacy_claims.extensions import db
from legacy_claims.models import LegacyClient, User
from legacy_claims.utils.passwords import hash_password
from legacy_claims.utils.tokens import make_token


@pytest.fixture
def settings(tmp_path):
    return LegacySettings(
        jwt_secret="test-secret",
        bcrypt_rounds=4,  # bcrypt minimum, keeps the suite fast
        upload_folder=tmp_path / "uploads",
    )


@pytest.fixture
def app(tmp_path, settings):
    # file-backed so every session gets its own connection, like production
    config = Config(
        SECRET_KEY="test",
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'test.db'}",
        TESTING=True,
        LEGACY=settings,
    )
    app = create_app(config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def add_legacy(app):
    def _add(box_id, full_name=None, email=None, registration_date=None, **extra):
        record = LegacyClient(
            box_id=box_id,
            full_name=full_name,
            email=email,
            registration_date=registration_date,
            **extra,
        )
        db.session.add(record)
        db.session.commit()
        return record.id
    return _add


@pytest.fixture
def add_user(app, settings):
    def _add(email, role="client", password="secret123", **extra):
        user = User(
            email=email,
            password=hash_password(password, settings.bcrypt_rounds),
            role=role,
            **extra,
        )
        db.session.add(user)
        db.session.commit()
        return user.id
    return _add


@pytest.fixture
def auth_header(app, settings, add_user):
    def _header(role="super_admin", email=None):
        user_id = add_user(email or f"{role}@entregax.test", role=role, full_name=role.title())
        user = db.session.get(User, user_id)
        token = make_token(user, settings.jwt_secret, settings.token_ttl_days)
        return {"Authorization": f"Bearer {token}"}
    return _header


@pytest.fixture
def juan(add_legacy):
    return add_legacy(
        "S4231",
        full_name="Juan Pérez García",
        email="juan.perez@mail.com",
        registration_date=date(2019, 3, 14),
    )
