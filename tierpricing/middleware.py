import uuid
import time
import traceback
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from tierpricing.logging_config import get_logger
from tierpricing.metrics import observe_request

logger = get_logger("tierpricing.access")

# Single metrics label for requests no route matched.
UNMATCHED_PATH = "<unmatched>"

def _path_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_PATH

class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

class TimingAccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.time()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            elapsed = time.time() - start
            observe_request(request.method, _path_template(request), status, elapsed)
            logger.info(
                f"{request.method} {request.url.path} {status}",
                extra={
                    "request_id": getattr(request.state, "request_id", None),
                    "path": request.url.path,
                    "method": request.method,
                    "status": status,
                    "latency_ms": int(elapsed * 1000),
                }
            )

class ErrorEnvelopeMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            request_id = getattr(request.state, "request_id", None)
            logger.error(f"Unhandled error: {exc} {traceback.format_exc()}", extra={"request_id": request_id})
            return JSONResponse(
                status_code=500,
                content={"error": {"message": "Internal server error", "code": "INTERNAL_SERVER_ERROR", "request_id": request_id}}
            )
