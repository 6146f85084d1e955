"""
Seed the three test accounts (admin / author / student).

For each account:
- Firebase Auth: fetched by email, or created with the password below
  (skipped when no Firebase credentials are configured; a stable
  ``dev-<role>`` uid is used instead, for AUTH_DEV_MODE).
- Local database: upserted with the preset role.

Test credentials:
    admin@cys-test.local   / CysTest@Admin1
    author@cys-test.local  / CysTest@Author1
    student@cys-test.local / CysTest@Student1

Usage (project root, .env configured, migrations applied):
    python scripts/seed-test-users.py
"""

import os
import sys

# .env must be loaded before importing app (session reads DATABASE_URL)
from pathlib import Path
root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))
os.chdir(root)

from dotenv import load_dotenv
load_dotenv()

from firebase_admin import auth as firebase_auth

from app.database.models.model_base import utcnow
from app.database.models.user import User
from app.database.session import get_session
from app.utils.enums import UserRole
from app.utils.firebase_config import get_firebase_app


TEST_USERS = [
    {
        "email": "admin@cys-test.local",
        "password": "CysTest@Admin1",
        "display_name": "Test Admin",
        "role": UserRole.ADMIN,
    },
    {
        "email": "author@cys-test.local",
        "password": "CysTest@Author1",
        "display_name": "Test Author",
        "role": UserRole.AUTHOR,
    },
    {
        "email": "student@cys-test.local",
        "password": "CysTest@Student1",
        "display_name": "Test Student",
        "role": UserRole.STUDENT,
    },
]


def ensure_firebase_user(app, account: dict) -> str:
    """Return the Firebase uid for ``account``, creating the account if needed."""
    try:
        record = firebase_auth.get_user_by_email(account["email"], app=app)
        print(f"[seed] Firebase user already exists: {account['email']} (uid: {record.uid})")
    except firebase_auth.UserNotFoundError:
        record = firebase_auth.create_user(
            email=account["email"],
            password=account["password"],
            display_name=account["display_name"],
            email_verified=True,
            app=app,
        )
        print(f"[seed] Created Firebase user:       {account['email']} (uid: {record.uid})")
    return record.uid


def main() -> None:
    app = get_firebase_app()
    if app is None:
        print("[seed] Firebase credentials not configured: seeding local users only (AUTH_DEV_MODE).")

    with get_session() as session:
        for account in TEST_USERS:
            uid = ensure_firebase_user(app, account) if app else f"dev-{account['role']}"

            user = session.query(User).filter(User.email == account["email"]).first()
            if user is None:
                user = User(
                    uid=uid,
                    email=account["email"],
                    display_name=account["display_name"],
                    provider="password",
                    role=account["role"],
                    last_login_at=utcnow(),
                )
                session.add(user)
                print(f"[seed] Created local user:  {account['email']} -> {account['role']}")
            else:
                user.uid = uid
                user.display_name = account["display_name"]
                user.role = account["role"]
                print(f"[seed] Updated local user:  {account['email']} -> {account['role']}")

    print("\n[seed] Done. Test credentials:")
    for account in TEST_USERS:
        print(f"  {account['role']:<8} {account['email']:<24} / {account['password']}")
    print("\nWith AUTH_DEV_MODE=true, impersonate any of them with the header:")
    print("  X-Dev-User-Email: author@cys-test.local")


if __name__ == "__main__":
    main()
