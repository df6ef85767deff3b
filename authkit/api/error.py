from typing import Dict

from fastapi import status
from authkit.result import Error

STATUS_BY_CODE: Dict[str, int] = {
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "WEAK_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
    "ALREADY_VERIFIED": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_DISABLED": status.HTTP_401_UNAUTHORIZED,
    "EMAIL_NOT_VERIFIED": status.HTTP_401_UNAUTHORIZED,
    "ACCESS_DENIED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def http_error(error: Error) -> Exception:
    """Map a use case Error onto the exception the handlers turn into a response"""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        return ServerError(error)
    return ClientError(error, status_code=status_code)
