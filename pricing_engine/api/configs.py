from typing import List

from fastapi import APIRouter, Depends

from pricing_engine.core.dependencies import get_config_provider
from pricing_engine.core.errors import resolve_calculator
from pricing_engine.core.response_builders import build_config_response, build_service_info
from pricing_engine.schemas.quote import ConfigResponse, ServiceInfo
from pricing_engine.services.config_loader import ConfigurationProvider
from pricing_engine.services.registry import CALCULATORS

router = APIRouter(tags=["configs"])


@router.get("/services", response_model=List[ServiceInfo])
async def list_services():
    return [build_service_info(calculator) for calculator in CALCULATORS.values()]


@router.get("/configs/{service_id}", response_model=ConfigResponse)
async def get_config(
    service_id: str,
    provider: ConfigurationProvider = Depends(get_config_provider),
):
    calculator = resolve_calculator(service_id)
    return build_config_response(await provider.get(calculator.service_id))


@router.post("/configs/{service_id}/refresh", response_model=ConfigResponse)
async def refresh_config(
    service_id: str,
    provider: ConfigurationProvider = Depends(get_config_provider),
):
    calculator = resolve_calculator(service_id)
    return build_config_response(await provider.refresh(calculator.service_id))
