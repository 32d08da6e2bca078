"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fleetfin.api.routes import companies, dashboard, loans, payments, schedules, vehicles
from fleetfin.config import settings
from fleetfin.engine.errors import FinanceError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Fleet Finance",
    description="Company fleet loans, payments and financial schedules",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(companies.router)
app.include_router(vehicles.router)
app.include_router(schedules.router)
app.include_router(dashboard.router)
app.include_router(loans.router)
app.include_router(payments.router)


@app.exception_handler(FinanceError)
async def finance_error_handler(request: Request, exc: FinanceError):
    # Stored loan terms are validated on the way in; reaching here means bad data
    logger.error("Financial computation failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal computation error"})


@app.get("/health")
async def health():
    return {"status": "ok"}
