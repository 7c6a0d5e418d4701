from typing import Optional
from sqlalchemy.orm import Session
from app.models.user_db.user_db import User
from app.schemas.users.user_base import UserCreate
from app.core.security import hash_password, verify_password


def create_user(db: Session, user: UserCreate) -> User:
    db_user = User(
        email=user.email.lower(),
        username=user.username,
        name=user.name,
        hashed_password=hash_password(user.password),
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Host account for the credentials, or None when they do not match."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user
