# docman_sdk/app_setup.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from docman_sdk.clients.auth import CredentialProvider, StaticCredentialProvider
from docman_sdk.clients.base import RemoteServiceClient
from docman_sdk.config import ListingSettings
from docman_sdk.data_access.common import app_http_client_lifespan
from docman_sdk.frontend.base import router as list_views_router
from docman_sdk.frontend.config import DEFAULT_MAX_VIEWS
from docman_sdk.frontend.session import ListViewManager
from docman_sdk.frontend.templating import initialize_templates
from docman_sdk.registry import ResourceRegistry, register_default_resources

logger = logging.getLogger("docman_sdk.app_setup")


@asynccontextmanager
async def sdk_lifespan_manager(
    app: FastAPI,
    settings: ListingSettings,
    credential_provider: CredentialProvider,
    max_views: int = DEFAULT_MAX_VIEWS,
):
    """
    Управляет общими ресурсами SDK: HTTP клиентом и менеджером ListView.
    """
    logger.info("SDK Lifespan: Starting up...")
    async with app_http_client_lifespan(app, settings) as http_client:

        def client_factory() -> RemoteServiceClient:
            return RemoteServiceClient(
                base_url=settings.API_BASE_URL,
                credential_provider=credential_provider,
                http_client=http_client,
            )

        app.state.view_manager = ListViewManager(client_factory, settings=settings, max_views=max_views)
        logger.info("SDK Lifespan: Startup sequence complete. Application running...")
        yield
        logger.info("SDK Lifespan: Starting shutdown sequence...")
        app.state.view_manager = None
    logger.info("SDK Lifespan: Shutdown sequence complete.")


def create_app(
    settings: ListingSettings,
    credential_provider: Optional[CredentialProvider] = None,
    service_template_dir: Optional[str] = None,
    max_views: int = DEFAULT_MAX_VIEWS,
    include_health_check: bool = True,
) -> FastAPI:
    """
    Создает FastAPI приложение со списками записей.

    :param credential_provider: Источник Bearer токена. По умолчанию статический токен из settings.API_TOKEN.
    :param service_template_dir: Директория шаблонов сервиса, переопределяющая шаблоны SDK.
    """
    logger.info(f"Creating FastAPI app '{settings.PROJECT_NAME}' with list views...")
    if not ResourceRegistry.is_configured():
        register_default_resources()
    initialize_templates(service_template_dir)

    provider = credential_provider or StaticCredentialProvider(settings.API_TOKEN)

    @asynccontextmanager
    async def app_lifespan_wrapper(app: FastAPI):
        async with sdk_lifespan_manager(app, settings, provider, max_views=max_views):
            yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=f"{settings.PROJECT_NAME} list views.",
        lifespan=app_lifespan_wrapper,
    )
    app.include_router(list_views_router, prefix=settings.UI_PREFIX)

    if include_health_check:

        @app.get("/health", tags=["Health"])
        async def health_check():
            return {"status": "ok"}

    logger.info(f"FastAPI app '{settings.PROJECT_NAME}' created. List views mounted at '{settings.UI_PREFIX}'.")
    return app
