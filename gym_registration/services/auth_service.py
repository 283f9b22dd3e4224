import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import bcrypt
from jose import jwt, JWTError

from gym_registration.core.exceptions import (
    InvalidArgument,
    InvalidToken,
    MissingToken,
    RevokedToken,
)
from gym_registration.models.trainee import Trainee
from gym_registration.repositories.trainee_repository import TraineeRepository
from gym_registration.schemas.session import SessionClaims

logger = logging.getLogger(__name__)

# bcrypt учитывает только первые 72 байта пароля
BCRYPT_MAX_PASSWORD_BYTES = 72


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RevocationList:
    """
    Отозванные (logout) токены вместе с их собственным сроком жизни.
    Запись старше exp токена бесполезна: такой токен и так не пройдёт
    проверку подписи/срока, поэтому она вычищается.
    """

    def __init__(self):
        self._tokens: Dict[str, datetime] = {}

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: str) -> bool:
        expires_at = self._tokens.get(token)
        if expires_at is None:
            return False
        if expires_at <= _utcnow():
            del self._tokens[token]
            return False
        return True

    def add(self, token: str, expires_at: datetime) -> None:
        self.purge_expired()
        self._tokens[token] = expires_at

    def purge_expired(self) -> int:
        now = _utcnow()
        expired = [token for token, exp in self._tokens.items() if exp <= now]
        for token in expired:
            del self._tokens[token]
        return len(expired)


class AuthService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 120):
        self.SECRET_KEY = secret_key
        self.ALGORITHM = algorithm
        self.SESSION_EXPIRE_MINUTES = expire_minutes
        self.revoked_tokens = RevocationList()

    def hash_password(self, password: str) -> str:
        encoded = password.encode('utf-8')
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise InvalidArgument(f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        hashed = bcrypt.hashpw(encoded, bcrypt.gensalt())
        return hashed.decode('utf-8')  # Декодируем bytes в string для хранения в БД

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError:
            # Хэш не в формате bcrypt или слишком длинный пароль
            return False

    def create_session_token(self, trainee_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
        expire = _utcnow() + (expires_delta or timedelta(minutes=self.SESSION_EXPIRE_MINUTES))
        to_encode = {"sub": str(trainee_id), "email": email, "exp": expire}
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> SessionClaims:
        try:
            payload = jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
            trainee_id = payload.get("sub")
            if trainee_id is None:
                raise InvalidToken()
            return SessionClaims(
                trainee_id=int(trainee_id),
                email=payload.get("email", ""),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (JWTError, KeyError, ValueError):
            raise InvalidToken()

    def authenticate(self, token: Optional[str]) -> SessionClaims:
        """
        Проверка bearer-токена: наличие -> отзыв -> подпись и срок.
        Отзыв проверяется до подписи.
        """
        if not token:
            raise MissingToken()
        if token in self.revoked_tokens:
            logger.info("Отклонён отозванный токен")
            raise RevokedToken()
        return self.decode_token(token)

    def revoke(self, token: str, expires_at: datetime) -> None:
        self.revoked_tokens.add(token, expires_at)

    async def authenticate_trainee(self, repo: TraineeRepository, email: str, password: str) -> Optional[Trainee]:
        trainee = await repo.get_by_email(email)

        if not trainee or not self.verify_password(password, trainee.password):
            return None

        return trainee
