"""FastAPI dependencies: per-request gateway and application-scoped services from app.state."""
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from charging_core.command_cache import CommandCache
from charging_core.gateway import PersistenceGateway
from charging_core.payments import RazorpayClient
from charging_core.simulator_registry import SimulatorRegistry
from db import get_db


def get_gateway(db: Session = Depends(get_db)) -> PersistenceGateway:
    """One persistence gateway per request, bound to the request's DB session."""
    return PersistenceGateway(db)


def _app_service(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(status_code=503, detail=f"{name} is not initialized")
    return service


def get_command_cache(request: Request) -> CommandCache:
    return _app_service(request, "command_cache")


def get_simple_command_cache(request: Request) -> CommandCache:
    return _app_service(request, "simple_command_cache")


def get_simulators(request: Request) -> SimulatorRegistry:
    return _app_service(request, "simulators")


def get_payment_client(request: Request) -> RazorpayClient:
    return _app_service(request, "payment_client")
