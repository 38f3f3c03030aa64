from typing import List, Optional

from app.models.user import User
from sqlalchemy import func
from sqlalchemy.orm import Session


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def count(self) -> int:
        return self.db.query(func.count(User.id)).scalar() or 0

    def find_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def create(self, username: str, email: str, password: str, is_admin: int = 0) -> User:
        """
        Insert and commit a single user.

        A taken username raises sqlalchemy.exc.IntegrityError; the session is
        rolled back first so the caller can keep using it for the next insert.
        """
        u = User(username=username, email=email, password=password, is_admin=is_admin)
        self.db.add(u)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(u)
        return u
