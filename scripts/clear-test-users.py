"""
Remove the test accounts created by seed-test-users.py from Firebase Auth
(when credentials are configured) and from the local database.

Articles written by these accounts are kept.

Usage (project root):
    python scripts/clear-test-users.py
"""

import os
import sys

from pathlib import Path
root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))
os.chdir(root)

from dotenv import load_dotenv
load_dotenv()

from firebase_admin import auth as firebase_auth

from app.database.models.user import User
from app.database.session import get_session
from app.utils.firebase_config import get_firebase_app


TEST_EMAILS = [
    "admin@cys-test.local",
    "author@cys-test.local",
    "student@cys-test.local",
]


def main() -> None:
    app = get_firebase_app()

    with get_session() as session:
        for email in TEST_EMAILS:
            if app is not None:
                try:
                    record = firebase_auth.get_user_by_email(email, app=app)
                    firebase_auth.delete_user(record.uid, app=app)
                    print(f"[clear] Deleted Firebase user: {email} (uid: {record.uid})")
                except firebase_auth.UserNotFoundError:
                    print(f"[clear] Firebase user not found (skipping): {email}")

            deleted = session.query(User).filter(User.email == email).delete()
            if deleted:
                print(f"[clear] Deleted local user:    {email}")
            else:
                print(f"[clear] Local user not found (skipping): {email}")

    print("[clear] Done.")


if __name__ == "__main__":
    main()
