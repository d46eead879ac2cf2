from datetime import datetime, timedelta, timezone
from typing import Annotated
from uuid import uuid4
import logging
from time import time

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from sqlmodel import Session, select, create_engine
from jwt.exceptions import InvalidTokenError
import jwt
from redis.exceptions import RedisError

from core.config import get_settings
from models import User, TokenData, ControllerResponse
from auth.security import verify_password
from services.comments import CommentController

settings = get_settings()
logger = logging.getLogger(__name__)
engine = create_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

# Database dependency
def get_session():
    with Session(engine) as session:
        yield session

SessionDep = Annotated[Session, Depends(get_session)]

def get_comment_controller(session: SessionDep) -> CommentController:
    return CommentController(session)

ControllerDep = Annotated[CommentController, Depends(get_comment_controller)]

# Authentication dependencies
def get_user(username: str, session: Session):
    user = session.exec(select(User).where(User.username == username)).first()
    if not user:
        return False
    return user

def authenticate_user(username: str, password: str, session: Session):
    user = get_user(username, session)
    if not user:
        return False
    if not verify_password(password, user.password):
        return False
    return user

def create_access_token(data: dict, expires_delta: timedelta | None = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta else timedelta(minutes=15)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

async def get_current_user(request: Request, session: SessionDep):
    credentials_exception = HTTPException(
        status_code=401,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        token = request.cookies.get("access_token")
        if not token:
            raise credentials_exception
        token = token.replace("Bearer ", "")
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
        token_data = TokenData(username=username)
    except InvalidTokenError:
        raise credentials_exception

    user = get_user(username=token_data.username, session=session)
    if not user:
        raise credentials_exception
    return user

async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
):
    if current_user.disabled:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user

CurrentUserDep = Annotated[User, Depends(get_current_active_user)]

# Rate limiting
async def rate_limit(request: Request, key_prefix: str, limit: int, window: int = 60):
    """Fixed window counter in Redis. Lets the request through if Redis is unavailable."""
    redis = getattr(request.app.state, "redis", None)
    if not settings.RATE_LIMIT_ENABLED or redis is None:
        return

    key = f"rate_limit:{key_prefix}:{int(time() // window)}"
    try:
        # Counter and its TTL are written in one round trip
        pipe = redis.pipeline()
        pipe.incr(key)
        pipe.expire(key, window)
        requests, _ = await pipe.execute()
    except RedisError as e:
        logger.error(f"Rate limit error: {str(e)}")
        return

    if requests > limit:
        raise HTTPException(status_code=429, detail="Too many requests")

def rate_limiter(action: str, limit: int, window: int = 60):
    """Per user rate limit dependency for ``action``"""
    async def dependency(request: Request, current_user: CurrentUserDep):
        await rate_limit(request, f"{action}:{current_user.id}", limit, window)
    return dependency

# Rendering
def render(result: ControllerResponse) -> Response:
    """Turn a controller result into a response carrying the same status"""
    if result.status == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return JSONResponse(
        status_code=result.status,
        content=result.model_dump(mode="json", exclude_unset=True),
    )

# Middleware
async def log_requests(request: Request, call_next):
    start_time = time()
    response = await call_next(request)
    process_time = time() - start_time

    logger.info(
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Status: {response.status_code} | "
        f"Process Time: {process_time:.2f}s"
    )
    return response

# Error handlers
def setup_error_handlers(app):
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        error_id = str(uuid4())
        logger.error(
            f"Unhandled error {error_id}: {str(exc)}",
            exc_info=True,
            extra={
                "path": request.url.path,
                "method": request.method,
                "error_id": error_id,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An unexpected error occurred", "error_id": error_id},
        )
