from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.models.user_db.user_db_crud import create_user, get_user_by_email, get_user_by_username
from app.schemas.users.user_base import UserCreate, UserOut


user_router = APIRouter(prefix="/users", tags=["Users"])


@user_router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    if get_user_by_email(db, user.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    if get_user_by_username(db, user.username):
        raise HTTPException(status_code=400, detail="Username already taken")
    return create_user(db, user)
