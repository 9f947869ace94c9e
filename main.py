from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
import os
import logging

from db import get_db, get_session, init_schema
from models.models_user import UserRole
from models.schemas_user import UserRegister, UserLogin, UserOut, CurrentUser, TokenResponse
from utils.crud_user import get_user_by_email, create_user, seed_super_admin
from utils.auth_utils import hash_password, verify_password, create_token, session_cookie_options, SESSION_COOKIE
from utils.auth_deps import auth_user
from catalog_routes import router as catalog_router
from qualification_routes import router as qualification_router
from application_routes import router as application_router
from matching.routes import router as matching_router
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 API starting up...")
    init_schema()
    with get_db() as db:
        seed_super_admin(db)
    logger.info("API startup complete")
    yield
    logger.info("API shutting down...")


app = FastAPI(title="Program Matching API", version="1.0.0", lifespan=lifespan)

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog_router)
app.include_router(qualification_router)
app.include_router(application_router)
app.include_router(matching_router)


@app.post("/auth/register", response_model=UserOut, status_code=201, tags=["auth"], summary="Register a student")
def register(payload: UserRegister, db: Session = Depends(get_session)):
    if get_user_by_email(db, payload.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    user = create_user(
        db,
        email=payload.email,
        name=payload.name,
        role=UserRole.STUDENT.value,
        password_hash=hash_password(payload.password),
    )
    logger.info(f"Registered student {user.email}")
    return user

@app.post("/auth/login", response_model=TokenResponse, tags=["auth"], summary="Login")
def login(payload: UserLogin, response: Response, db: Session = Depends(get_session)):
    user = get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_token(user.id, user.role)
    response.set_cookie(SESSION_COOKIE, token, **session_cookie_options())
    return TokenResponse(access_token=token)

@app.post("/auth/logout", tags=["auth"], summary="Logout")
def logout(response: Response):
    response.delete_cookie(SESSION_COOKIE)
    return {"message": "Logged out"}

@app.get("/users/me", response_model=CurrentUser, tags=["users"], summary="Current user")
def me(current: CurrentUser = Depends(auth_user)):
    return current


@app.get("/health", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok"}
