from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from tierpricing.billing import UnknownTier
from tierpricing.db import init_db
from tierpricing.logging_config import setup_logging, get_logger
from tierpricing.metrics import increment_tier_lookup
from tierpricing.middleware import ErrorEnvelopeMiddleware, RequestIDMiddleware, TimingAccessLogMiddleware
from tierpricing.routes.ops import router as ops_router
from tierpricing.routes.plans import router as plans_router
from tierpricing.routes.tiers import router as tiers_router

setup_logging()
logger = get_logger("tierpricing")

app = FastAPI(title="tierpricing")

# Last added runs first: request id must be set before the access log reads it.
app.add_middleware(ErrorEnvelopeMiddleware)
app.add_middleware(TimingAccessLogMiddleware)
app.add_middleware(RequestIDMiddleware)

@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("Subscription plan tables ready")

@app.exception_handler(UnknownTier)
async def unknown_tier_handler(request: Request, exc: UnknownTier):
    endpoint = "renewal" if request.url.path.endswith("/renewal") else "detail"
    increment_tier_lookup(endpoint, "unknown_tier")
    logger.warning(
        str(exc),
        extra={"request_id": getattr(request.state, "request_id", None), "tier": str(exc.tier)},
    )
    return JSONResponse(
        status_code=404,
        content={"detail": str(exc), "code": "UNKNOWN_TIER", "tier": str(exc.tier)},
    )

app.include_router(tiers_router)
app.include_router(plans_router)
app.include_router(ops_router)
