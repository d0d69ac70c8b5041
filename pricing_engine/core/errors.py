from typing import Optional

from fastapi import HTTPException

from pricing_engine.services.registry import ServiceCalculator, get_calculator


def check_not_found(item, resource_name: str = "Resource", resource_id: Optional[str] = None) -> None:

    if not item:
        if resource_id:
            raise HTTPException(
                status_code=404,
                detail=f"{resource_name} with id {resource_id} not found"
            )
        raise HTTPException(status_code=404, detail=f"{resource_name} not found")


def resolve_calculator(service_id: str) -> ServiceCalculator:
    try:
        return get_calculator(service_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown service: {service_id}")
