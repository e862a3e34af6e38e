from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.auth import (
    register_user,
    authenticate_user,
    create_access_token,
    get_current_user,
)
from app.schemas.auth_schema import RegisterRequest, LoginRequest, TokenOut


router = APIRouter(prefix="/auth", tags=["Authentication"])


# ----------------- REGISTER ------------------

@router.post("/register")
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    if len(payload.password) < 8:
        raise HTTPException(
            status_code=400,
            detail="Password must be at least 8 characters long",
        )
    try:
        user = register_user(
            db, email=payload.email, password=payload.password, name=payload.name
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "message": "Registration successful",
        "user_id": user.id,
    }


# ------------------- LOGIN -------------------

@router.post("/login", response_model=TokenOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, email=payload.email, password=payload.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    token = create_access_token({"sub": str(user.id)})

    return TokenOut(access_token=token)


# -------------------- ME ---------------------

@router.get("/me")
def get_me(current_user=Depends(get_current_user)):
    return {
        "id": current_user.id,
        "email": current_user.email,
        "name": current_user.name,
    }
