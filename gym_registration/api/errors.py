import functools
import logging

import grpc

from gym_registration.core.exceptions import ServiceError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "Internal server error"


def handle_service_errors(method):
    """
    Граница RPC: ни одна ошибка не уходит клиенту без перевода в gRPC-статус.
    Детали внутренних сбоев остаются только в логе.
    """

    @functools.wraps(method)
    async def wrapper(self, request, context: grpc.aio.ServicerContext):
        try:
            return await method(self, request, context)
        except ServiceError as e:
            await context.abort(e.status_code, e.detail)
        except Exception:
            logger.exception(f"{type(self).__name__}.{method.__name__}: внутренняя ошибка")
            await context.abort(grpc.StatusCode.INTERNAL, INTERNAL_ERROR_DETAIL)

    return wrapper
