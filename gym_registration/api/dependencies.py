from typing import Optional

import grpc

from gym_registration.schemas.session import SessionClaims
from gym_registration.services.auth_service import AuthService

BEARER_PREFIX = "bearer "


def bearer_from_metadata(context: grpc.aio.ServicerContext) -> Optional[str]:
    """Токен из заголовка `authorization: Bearer <token>`, если он есть."""
    for key, value in context.invocation_metadata() or ():
        if key.lower() != "authorization" or not isinstance(value, str):
            continue
        if value.lower().startswith(BEARER_PREFIX):
            return value[len(BEARER_PREFIX):].strip()
    return None


def extract_token(request, context: grpc.aio.ServicerContext) -> Optional[str]:
    # Поле token в запросе приоритетнее метаданных
    return request.token or bearer_from_metadata(context)


def get_current_session(auth: AuthService, request, context: grpc.aio.ServicerContext) -> SessionClaims:
    return auth.authenticate(extract_token(request, context))
