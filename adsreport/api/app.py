"""
Facebook Ads Report API

Endpoints:
  Insights:
    GET  /insights?accountId&from&to          - Ad and campaign rows as JSON
    GET  /ad-accounts                          - Ad accounts of the token's user

  Auth:
    POST /auth/connect-token                   - Validate a token and its permissions

  Export:
    GET  /export?format=csv|excel&accountId&from&to   - File download
    POST /sheets/sync?accountId&from&to               - Snapshot to Google Sheets
    GET  /export/looker                               - Looker Studio report URL
    GET  /sheets/status                               - Spreadsheet title and sheets

Every endpoint except /auth/connect-token and /health requires
``Authorization: Bearer <facebook access token>``. Errors are returned as
``{"error": "<message>"}``.
"""

from typing import Callable, Optional

from fastapi import Depends, FastAPI, Header, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from loguru import logger
from pydantic import BaseModel

from adsreport import __version__
from adsreport.adapters.http_client import GraphHTTPClient
from adsreport.core.config import AppConfig, ConfigurationManager
from adsreport.core.exceptions import ReportError, ValidationError
from adsreport.core.protocols import TokenProvider
from adsreport.infrastructure.token_provider import StaticTokenProvider
from adsreport.platforms.facebook.client import FacebookGraphClient
from adsreport.platforms.facebook.pipeline import InsightsPipeline
from adsreport.services.export_service import (
    SheetsSyncService,
    export_report,
    parse_export_format,
)
from adsreport.sinks.google_sheets import GoogleSheetsSink

ClientFactory = Callable[[TokenProvider], FacebookGraphClient]


class ConnectTokenRequest(BaseModel):
    accessToken: Optional[str] = None


# --- Dependencies ---

def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_token_provider(authorization: Optional[str] = Header(None)) -> StaticTokenProvider:
    return StaticTokenProvider.from_bearer_header(authorization)


def get_client_factory(config: AppConfig = Depends(get_config)) -> ClientFactory:
    def factory(token_provider: TokenProvider) -> FacebookGraphClient:
        return FacebookGraphClient(GraphHTTPClient(token_provider, config.facebook))
    return factory


def get_graph_client(
    token_provider: StaticTokenProvider = Depends(get_token_provider),
    factory: ClientFactory = Depends(get_client_factory),
) -> FacebookGraphClient:
    return factory(token_provider)


def get_pipeline(client: FacebookGraphClient = Depends(get_graph_client)) -> InsightsPipeline:
    return InsightsPipeline(client)


def get_sheets_sink(config: AppConfig = Depends(get_config)) -> GoogleSheetsSink:
    return GoogleSheetsSink.from_config(config.sheets)


def _require_report_params(account_id: Optional[str], since: Optional[str], until: Optional[str]):
    if not account_id or not since or not until:
        raise ValidationError(
            "Missing required parameters",
            details={"accountId": account_id, "from": since, "to": until},
        )


# --- Application ---

def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application configuration (loaded from env/YAML when None)
    """
    config = config or ConfigurationManager().load_config()

    app = FastAPI(title="Facebook Ads Report API", version=__version__)
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ReportError)
    def handle_report_error(request: Request, exc: ReportError):
        if exc.http_status >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected ({exc.http_status}): {exc.message}")
        return JSONResponse(status_code=exc.http_status, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(Exception)
    def handle_unexpected(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} crashed: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    @app.get("/health")
    def health():
        return {"status": "ok", "version": __version__}

    @app.get("/insights")
    def get_insights(
        account_id: Optional[str] = Query(None, alias="accountId"),
        since: Optional[str] = Query(None, alias="from"),
        until: Optional[str] = Query(None, alias="to"),
        pipeline: InsightsPipeline = Depends(get_pipeline),
    ):
        _require_report_params(account_id, since, until)
        return pipeline.run(account_id, since, until).to_dict()

    @app.get("/ad-accounts")
    def get_ad_accounts(client: FacebookGraphClient = Depends(get_graph_client)):
        accounts = client.get_ad_accounts()
        return {"accounts": [account.to_dict() for account in accounts]}

    @app.post("/auth/connect-token")
    def connect_token(
        body: ConnectTokenRequest,
        factory: ClientFactory = Depends(get_client_factory),
    ):
        if not body.accessToken:
            raise ValidationError("Access token is required", field="accessToken")
        user = factory(StaticTokenProvider(body.accessToken)).verify_token()
        return {"user": user}

    @app.get("/export")
    def export(
        export_format: Optional[str] = Query(None, alias="format"),
        account_id: Optional[str] = Query(None, alias="accountId"),
        since: Optional[str] = Query(None, alias="from"),
        until: Optional[str] = Query(None, alias="to"),
        pipeline: InsightsPipeline = Depends(get_pipeline),
    ):
        fmt = parse_export_format(export_format)
        _require_report_params(account_id, since, until)
        exported = export_report(pipeline.run(account_id, since, until), fmt)
        return Response(
            content=exported.content,
            media_type=exported.content_type,
            headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
        )

    @app.post("/sheets/sync")
    def sync_sheets(
        account_id: Optional[str] = Query(None, alias="accountId"),
        since: Optional[str] = Query(None, alias="from"),
        until: Optional[str] = Query(None, alias="to"),
        pipeline: InsightsPipeline = Depends(get_pipeline),
        sink: GoogleSheetsSink = Depends(get_sheets_sink),
    ):
        _require_report_params(account_id, since, until)
        result = SheetsSyncService(sink).sync(pipeline.run(account_id, since, until))
        body = result.to_dict()
        if not result.ok:
            body["error"] = f"Failed to write sheets: {', '.join(result.errors)}"
            return JSONResponse(status_code=500, content=body)
        return body

    @app.get("/export/looker", dependencies=[Depends(get_token_provider)])
    def export_looker(sink: GoogleSheetsSink = Depends(get_sheets_sink)):
        return {"success": True, "url": SheetsSyncService(sink).looker_url()}

    @app.get("/sheets/status", dependencies=[Depends(get_token_provider)])
    def sheets_status(sink: GoogleSheetsSink = Depends(get_sheets_sink)):
        return sink.status()

    logger.info(f"Facebook Ads Report API ready (Graph {config.facebook.api_version})")
    return app
