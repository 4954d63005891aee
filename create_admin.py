# create_admin.py
#
# Create ONE super_admin from ADMIN_EMAIL / ADMIN_PASSWORD if it doesn't exist.
# Does NOT reset the password on later runs.

import os
from datetime import datetime

from legacy_claims import create_app
from legacy_claims.extensions import db
from legacy_claims.models import User
from legacy_claims.utils.passwords import hash_password


def main():
    email = (os.getenv("ADMIN_EMAIL") or "").strip().lower()
    password = os.getenv("ADMIN_PASSWORD")
    if not email or not password:
        print("ADMIN_EMAIL / ADMIN_PASSWORD not set; nothing to do.")
        return

    app = create_app()
    with app.app_context():
        existing = User.query.filter_by(email=email).first()
        if existing:
            print(f"User {email} already exists (role={existing.role}); not modifying.")
            return

        settings = app.config["LEGACY"]
        admin = User(
            email=email,
            password=hash_password(password, settings.bcrypt_rounds),
            role="super_admin",
            full_name=os.getenv("ADMIN_NAME", "Administrator"),
            verification_status="verified",
            created_at=datetime.utcnow(),
        )
        db.session.add(admin)
        db.session.commit()
        print(f"Created super_admin {email}.")


if __name__ == "__main__":
    main()
