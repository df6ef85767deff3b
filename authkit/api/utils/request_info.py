from starlette.requests import Request

from authkit.app.services.context import RequestInfo


def client_ip(request: Request) -> str:
    """First proxy-reported address, falling back to the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()

    for header in ("x-real-ip", "cf-connecting-ip"):
        value = request.headers.get(header)
        if value:
            return value.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def extract_request_info(request: Request) -> RequestInfo:
    return RequestInfo(
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent", "unknown"),
    )
