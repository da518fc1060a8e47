import logging
from passlib.context import CryptContext
from jose import JWTError, jwt
from datetime import datetime, timedelta
from typing import Optional
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.models.auth.admin import is_super_admin_role
from app.models.auth.token import TokenData

logger = logging.getLogger(__name__)

# Password hashing context - simplified config
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=10
)

DEV_SECRET_KEY = "photocontest-dev-secret"

if not settings.secret_key:
    logger.warning("[WARN] SECRET_KEY is not set, using the development signing key")


class SecurityService:
    """Service for security operations like password hashing and JWT tokens"""

    @property
    def secret_key(self) -> str:
        return settings.secret_key or DEV_SECRET_KEY

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a plain password against a hashed password"""
        if not plain_password or not hashed_password:
            return False
        try:
            return pwd_context.verify(plain_password[:72], hashed_password)
        except ValueError:
            # Malformed stored hash
            return False

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password"""
        # Bcrypt has a 72-byte limit
        password_str = str(password)[:72]
        return pwd_context.hash(password_str)

    async def verify_password_async(self, plain_password: str, hashed_password: str) -> bool:
        """bcrypt is CPU bound; keep it off the event loop"""
        return await run_in_threadpool(self.verify_password, plain_password, hashed_password)

    async def get_password_hash_async(self, password: str) -> str:
        return await run_in_threadpool(self.get_password_hash, password)

    def create_access_token(self, admin: dict, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create JWT access token for an admin document.

        ``isSuperAdmin`` is included for the client only; the server always
        re-derives it from the live role.
        """
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)

        role = admin.get("role")
        to_encode = {
            "sub": str(admin["_id"]),
            "username": admin.get("username"),
            "role": role,
            "isSuperAdmin": is_super_admin_role(role),
            "exp": expire,
            "type": "access",
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=settings.algorithm)

    def verify_token(self, token: Optional[str], token_type: str = "access") -> Optional[TokenData]:
        """Verify and decode JWT token"""
        if not token:
            return None
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[settings.algorithm])
        except JWTError:
            return None

        # Verify token type
        if payload.get("type") != token_type:
            return None

        admin_id = payload.get("sub")
        if admin_id is None:
            return None

        return TokenData(
            admin_id=admin_id,
            username=payload.get("username"),
            role=payload.get("role")
        )


security_service = SecurityService()
