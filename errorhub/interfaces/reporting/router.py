"""
FastAPI router for the reporting bounded context.

All routes delegate to use cases. No business logic here.
Simulation and runtime-definition routes exist for test scaffolding and
refuse to run in production.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from errorhub.application.reporting.activate_simulation import ActivateSimulationUseCase
from errorhub.application.reporting.deactivate_simulation import (
    DeactivateSimulationUseCase,
)
from errorhub.application.reporting.define_error import DefineErrorUseCase
from errorhub.application.reporting.dtos import (
    DefineErrorCommand,
    ErrorCodeItem,
    ListErrorCodesQuery,
    SimulationCommand,
)
from errorhub.application.reporting.list_active_simulations import (
    ListActiveSimulationsUseCase,
)
from errorhub.application.reporting.list_error_codes import ListErrorCodesUseCase
from errorhub.application.reporting.reset_simulations import ResetSimulationsUseCase
from errorhub.interfaces.reporting.dependencies import (
    get_activate_simulation_use_case,
    get_deactivate_simulation_use_case,
    get_define_error_use_case,
    get_list_active_simulations_use_case,
    get_list_error_codes_use_case,
    get_reset_simulations_use_case,
)
from errorhub.interfaces.reporting.schemas import (
    ActiveSimulationsResponse,
    DefineErrorRequest,
    ErrorCodeSchema,
    ErrorCodesResponse,
    ErrorResponse,
    ResetSimulationsResponse,
    SimulationStatusResponse,
)
from errorhub.shared.security.environment import require_non_production
from errorhub.shared.security.rate_limiting import ADMIN_RATE_LIMIT, limiter

router = APIRouter(prefix="/errors", tags=["errors"])

admin_router = APIRouter(
    prefix="/errors",
    tags=["errors-admin"],
    dependencies=[Depends(require_non_production)],
    responses={403: {"model": ErrorResponse}},
)


def _code_schema(item: ErrorCodeItem) -> ErrorCodeSchema:
    return ErrorCodeSchema(
        code=item.code,
        severity=item.severity,
        blocking_level=item.blocking_level,
        status_code=item.status_code,
        display_mode=item.display_mode,
        notify_team=item.notify_team,
        recovery_action=item.recovery_action,
    )


@router.get(
    "/codes",
    response_model=ErrorCodesResponse,
    responses={422: {"model": ErrorResponse}},
    summary="List error codes",
    description="List catalog error codes, optionally filtered by severity.",
)
def list_error_codes(
    severity: Optional[str] = None,
    use_case: ListErrorCodesUseCase = Depends(get_list_error_codes_use_case),
) -> ErrorCodesResponse:
    items = use_case.execute(ListErrorCodesQuery(severity=severity))
    return ErrorCodesResponse(codes=[_code_schema(item) for item in items])


@admin_router.post(
    "/simulate/{code}",
    response_model=SimulationStatusResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Activate error simulation",
    description="Force the given error code to fire on its next check.",
)
@limiter.limit(ADMIN_RATE_LIMIT)
def activate_simulation(
    request: Request,
    code: str,
    use_case: ActivateSimulationUseCase = Depends(get_activate_simulation_use_case),
) -> SimulationStatusResponse:
    result = use_case.execute(SimulationCommand(code=code))
    return SimulationStatusResponse(code=result.code, active=result.active)


@admin_router.delete(
    "/simulate/{code}",
    response_model=SimulationStatusResponse,
    summary="Deactivate error simulation",
)
@limiter.limit(ADMIN_RATE_LIMIT)
def deactivate_simulation(
    request: Request,
    code: str,
    use_case: DeactivateSimulationUseCase = Depends(get_deactivate_simulation_use_case),
) -> SimulationStatusResponse:
    result = use_case.execute(SimulationCommand(code=code))
    return SimulationStatusResponse(code=result.code, active=result.active)


@admin_router.get(
    "/simulations",
    response_model=ActiveSimulationsResponse,
    summary="List active simulations",
)
def list_active_simulations(
    use_case: ListActiveSimulationsUseCase = Depends(get_list_active_simulations_use_case),
) -> ActiveSimulationsResponse:
    result = use_case.execute()
    return ActiveSimulationsResponse(enabled=result.enabled, codes=result.codes)


@admin_router.post(
    "/simulations/reset",
    response_model=ResetSimulationsResponse,
    summary="Reset all simulations",
)
@limiter.limit(ADMIN_RATE_LIMIT)
def reset_simulations(
    request: Request,
    use_case: ResetSimulationsUseCase = Depends(get_reset_simulations_use_case),
) -> ResetSimulationsResponse:
    return ResetSimulationsResponse(cleared=use_case.execute())


@admin_router.post(
    "/definitions",
    response_model=ErrorCodeSchema,
    status_code=201,
    responses={422: {"model": ErrorResponse}},
    summary="Define an error type",
    description="Register or override an error definition for this process.",
)
@limiter.limit(ADMIN_RATE_LIMIT)
def define_error(
    request: Request,
    body: DefineErrorRequest,
    use_case: DefineErrorUseCase = Depends(get_define_error_use_case),
) -> ErrorCodeSchema:
    item = use_case.execute(DefineErrorCommand(code=body.code, definition=body.definition))
    return _code_schema(item)
