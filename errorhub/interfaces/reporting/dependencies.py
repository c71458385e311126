"""
Dependency injection for the reporting bounded context.

build_container() wires infrastructure adapters into the ErrorManager
and the use cases; create_app() stores the result on ``app.state``.
The FastAPI dependency functions below read it back per request.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Depends, Request
from sqlalchemy import create_engine

from errorhub.application.reporting.activate_simulation import ActivateSimulationUseCase
from errorhub.application.reporting.deactivate_simulation import (
    DeactivateSimulationUseCase,
)
from errorhub.application.reporting.define_error import DefineErrorUseCase
from errorhub.application.reporting.list_active_simulations import (
    ListActiveSimulationsUseCase,
)
from errorhub.application.reporting.list_error_codes import ListErrorCodesUseCase
from errorhub.application.reporting.reset_simulations import ResetSimulationsUseCase
from errorhub.core.config import Settings
from errorhub.domain.reporting.catalog import ErrorCatalog
from errorhub.domain.reporting.entities import DisplayMode
from errorhub.domain.reporting.formatter import MessageFormatter
from errorhub.domain.reporting.manager import ErrorManager
from errorhub.domain.reporting.recovery import RecoveryRegistry
from errorhub.domain.reporting.simulation import SimulationRegistry
from errorhub.infrastructure.reporting.catalog_loader import load_catalog_file
from errorhub.infrastructure.reporting.error_record_repository import (
    SqlErrorRecordRepository,
)
from errorhub.infrastructure.reporting.log_handler import LogHandler
from errorhub.infrastructure.reporting.notification_handlers import (
    EmailNotifyHandler,
    SecondaryChannelNotifyHandler,
)
from errorhub.infrastructure.reporting.persistence_handler import PersistenceHandler
from errorhub.infrastructure.reporting.recovery_actions import default_recovery_registry
from errorhub.infrastructure.reporting.recovery_handler import RecoveryHandler
from errorhub.infrastructure.reporting.request_context import (
    ContextRequestMetadataProvider,
    ContextUiNoticeSink,
)
from errorhub.infrastructure.reporting.simulation_handler import SimulationHandler
from errorhub.infrastructure.reporting.slack_channel import SlackWebhookChannel
from errorhub.infrastructure.reporting.smtp_channel import SmtpEmailChannel
from errorhub.infrastructure.reporting.ui_handler import UIHandler
from errorhub.infrastructure.reporting.yaml_translator import YamlTranslator

logger = logging.getLogger(__name__)


@dataclass
class ReportingContainer:
    """Everything the reporting routes and middleware need."""

    settings: Settings
    catalog: ErrorCatalog
    manager: ErrorManager
    translator: YamlTranslator
    simulation: SimulationRegistry
    recovery: RecoveryRegistry
    repository: Optional[SqlErrorRecordRepository] = None


def _build_repository(settings: Settings) -> Optional[SqlErrorRecordRepository]:
    if not (settings.database_url and settings.database_logging_enabled):
        return None
    engine = create_engine(settings.database_url, pool_pre_ping=True)
    repository = SqlErrorRecordRepository(engine)
    repository.ensure_schema()
    return repository


def _build_handlers(
    settings: Settings,
    formatter: MessageFormatter,
    simulation: SimulationRegistry,
    recovery: RecoveryRegistry,
    repository: Optional[SqlErrorRecordRepository],
) -> list[Any]:
    """Handlers in dispatch order: log, persist, notify, show, recover, trace."""
    request_provider = ContextRequestMetadataProvider()
    handlers: list[Any] = [LogHandler()]

    if repository is not None:
        handlers.append(
            PersistenceHandler(
                repository,
                request_provider=request_provider,
                include_trace=settings.database_include_trace,
                max_trace_length=settings.database_max_trace_length,
            )
        )

    notify_kwargs = {
        "app_name": settings.project_name,
        "environment": settings.environment,
        "formatter": formatter,
        "request_provider": request_provider,
    }
    if settings.email_notifications_enabled and settings.email_recipient:
        channel = SmtpEmailChannel(
            settings.smtp_host,
            port=settings.smtp_port,
            from_address=settings.email_from_address,
            from_name=settings.email_from_name,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout,
        )
        handlers.append(
            EmailNotifyHandler(
                channel,
                settings.email_recipient,
                subject_prefix=settings.email_subject_prefix,
                **notify_kwargs,
            )
        )

    if settings.slack_notifications_enabled and settings.slack_webhook_url:
        channel = SlackWebhookChannel(
            settings.slack_webhook_url,
            username=settings.slack_username,
            icon_emoji=settings.slack_icon_emoji,
            timeout=settings.slack_timeout,
        )
        handlers.append(
            SecondaryChannelNotifyHandler(channel, settings.slack_channel, **notify_kwargs)
        )

    handlers.append(
        UIHandler(
            ContextUiNoticeSink(),
            formatter=formatter,
            show_error_codes=settings.show_error_codes,
        )
    )
    handlers.append(RecoveryHandler(recovery))
    handlers.append(SimulationHandler(simulation))
    return handlers


def build_container(
    settings: Settings,
    extra_handlers: Iterable[Any] = (),
    recovery: Optional[RecoveryRegistry] = None,
) -> ReportingContainer:
    """Load the catalog and assemble the ErrorManager.

    Args:
        settings: Application settings.
        extra_handlers: Host handlers appended after the built-in ones.
        recovery: Registry of recovery actions; defaults to the built-ins.

    Raises:
        InvalidDefinitionError: If the catalog file is malformed.
    """
    display_mode = DisplayMode(settings.ui_default_display_mode)
    loaded = load_catalog_file(settings.catalog_path, display_mode)
    catalog = ErrorCatalog(loaded.definitions)

    translator = YamlTranslator(
        settings.translations_dir,
        locale=settings.locale,
        fallback_locale=settings.fallback_locale,
    )
    formatter = MessageFormatter(translator)
    simulation = SimulationRegistry(enabled=settings.is_simulation_enabled())
    recovery = recovery if recovery is not None else default_recovery_registry()
    repository = _build_repository(settings)

    manager = ErrorManager(catalog, formatter=formatter, fallback=loaded.fallback)
    manager.register_handlers(
        _build_handlers(settings, formatter, simulation, recovery, repository)
    )
    manager.register_handlers(extra_handlers)

    logger.info(
        "Reporting container ready: environment=%s, simulation=%s, handlers=%d",
        settings.environment,
        simulation.enabled,
        len(manager.handlers),
    )
    return ReportingContainer(
        settings=settings,
        catalog=catalog,
        manager=manager,
        translator=translator,
        simulation=simulation,
        recovery=recovery,
        repository=repository,
    )


def get_container(request: Request) -> ReportingContainer:
    return request.app.state.container


def get_manager(container: ReportingContainer = Depends(get_container)) -> ErrorManager:
    return container.manager


def get_list_error_codes_use_case(
    container: ReportingContainer = Depends(get_container),
) -> ListErrorCodesUseCase:
    return ListErrorCodesUseCase(container.manager)


def get_activate_simulation_use_case(
    container: ReportingContainer = Depends(get_container),
) -> ActivateSimulationUseCase:
    return ActivateSimulationUseCase(
        container.simulation, container.catalog, container.settings.environment
    )


def get_deactivate_simulation_use_case(
    container: ReportingContainer = Depends(get_container),
) -> DeactivateSimulationUseCase:
    return DeactivateSimulationUseCase(container.simulation, container.settings.environment)


def get_list_active_simulations_use_case(
    container: ReportingContainer = Depends(get_container),
) -> ListActiveSimulationsUseCase:
    return ListActiveSimulationsUseCase(container.simulation)


def get_reset_simulations_use_case(
    container: ReportingContainer = Depends(get_container),
) -> ResetSimulationsUseCase:
    return ResetSimulationsUseCase(container.simulation, container.settings.environment)


def get_define_error_use_case(
    container: ReportingContainer = Depends(get_container),
) -> DefineErrorUseCase:
    settings = container.settings
    return DefineErrorUseCase(
        container.manager,
        allowed=not settings.is_production,
        environment=settings.environment,
        default_display_mode=DisplayMode(settings.ui_default_display_mode),
    )
