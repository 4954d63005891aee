# legacy_claims/models.py
from datetime import datetime
from legacy_claims.extensions import db


# -------------------------------
# Accounts (owned by the main platform)
# -------------------------------
class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String, nullable=False, unique=True, index=True)
    password = db.Column(db.LargeBinary, nullable=False)
    role = db.Column(db.String, nullable=False, default='client')
    full_name = db.Column(db.String)
    phone = db.Column(db.String)
    box_id = db.Column(db.String, index=True)
    referral_code = db.Column(db.String, unique=True)
    verification_status = db.Column(db.String, default='pending')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login = db.Column(db.DateTime)

    def __repr__(self):
        return f"<User {self.email}>"


# -------------------------------
# Legacy clients (pre-migration system)
# -------------------------------
class LegacyClient(db.Model):
    __tablename__ = 'legacy_clients'

    id = db.Column(db.Integer, primary_key=True)
    box_id = db.Column(db.String, nullable=False, unique=True, index=True)
    full_name = db.Column(db.String)
    email = db.Column(db.String)
    registration_date = db.Column(db.Date)

    is_claimed = db.Column(db.Boolean, nullable=False, default=False)
    claimed_by_user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    claimed_at = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<LegacyClient {self.box_id} claimed={self.is_claimed}>"
