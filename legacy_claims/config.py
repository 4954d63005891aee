# legacy_claims/config.py

import os
from dataclasses import dataclass, field
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _database_url(raw):
    # Render/Heroku style URLs need the psycopg3 driver name for SQLAlchemy
    if not raw:
        return "sqlite:///legacy_claims.db"
    if raw.startswith("postgres://"):
        raw = raw.replace("postgres://", "postgresql+psycopg://", 1)
    if raw.startswith("postgresql://") and "+psycopg" not in raw:
        raw = raw.replace("postgresql://", "postgresql+psycopg://", 1)
    return raw


@dataclass(frozen=True)
class LegacyLayout:
    """
    Column positions of the old system's wide, header-less export.

    Nobody has documented that export; the defaults come from the files seen
    so far. date_index = -1 means "scan every column for a date".
    """
    box_id_index: int = 14
    full_name_index: int = 3
    email_index: int = 7
    date_index: int = -1

    @classmethod
    def parse(cls, raw):
        """'14,3,7,-1' -> LegacyLayout(14, 3, 7, -1)"""
        if not raw:
            return cls()
        parts = [int(p.strip()) for p in raw.split(",")]
        if len(parts) != 4:
            raise ValueError(f"LEGACY_LAYOUT needs 4 indices (box,name,email,date), got {raw!r}")
        return cls(*parts)


@dataclass(frozen=True)
class LegacySettings:
    jwt_secret: str = "dev-secret"
    token_ttl_days: int = 7
    bcrypt_rounds: int = 10
    layout: LegacyLayout = field(default_factory=LegacyLayout)
    upload_folder: Path = BASE_DIR / "uploads"
    max_sample_errors: int = 10


@dataclass(frozen=True)
class Config:
    SECRET_KEY: str = "dev-secret"
    SQLALCHEMY_DATABASE_URI: str = "sqlite:///legacy_claims.db"
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_ENGINE_OPTIONS: dict = field(default_factory=dict)
    MAX_CONTENT_LENGTH: int = 10 * 1024 * 1024
    TESTING: bool = False
    LEGACY: LegacySettings = field(default_factory=LegacySettings)

    @classmethod
    def from_env(cls, environ=None):
        """Read the process environment once, at startup."""
        env = os.environ if environ is None else environ

        secret_key = env.get("SECRET_KEY", "dev-secret")
        upload_folder = Path(env.get("UPLOAD_FOLDER") or (BASE_DIR / "uploads"))

        legacy = LegacySettings(
            jwt_secret=env.get("JWT_SECRET", secret_key),
            token_ttl_days=int(env.get("JWT_EXP_DAYS", "7")),
            bcrypt_rounds=int(env.get("BCRYPT_ROUNDS", "10")),
            layout=LegacyLayout.parse(env.get("LEGACY_LAYOUT")),
            upload_folder=upload_folder,
        )

        return cls(
            SECRET_KEY=secret_key,
            SQLALCHEMY_DATABASE_URI=_database_url(env.get("DATABASE_URL")),
            MAX_CONTENT_LENGTH=int(env.get("MAX_UPLOAD_MB", "10")) * 1024 * 1024,
            LEGACY=legacy,
        )

    def as_flask_config(self):
        return {
            "SECRET_KEY": self.SECRET_KEY,
            "SQLALCHEMY_DATABASE_URI": self.SQLALCHEMY_DATABASE_URI,
            "SQLALCHEMY_TRACK_MODIFICATIONS": self.SQLALCHEMY_TRACK_MODIFICATIONS,
            "SQLALCHEMY_ENGINE_OPTIONS": dict(self.SQLALCHEMY_ENGINE_OPTIONS),
            "MAX_CONTENT_LENGTH": self.MAX_CONTENT_LENGTH,
            "TESTING": self.TESTING,
            "LEGACY": self.LEGACY,
        }
