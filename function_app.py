
from contextlib import asynccontextmanager

import azure.functions as func
from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from product_ingest import db
from product_ingest.exceptions import ApplicationError, StorageError
from product_ingest.logging_config import logger, tracer
from product_ingest.routes.product_route import router as product_router

SERVER_ERROR_MESSAGE = "Internal Server Error"


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    await db.close()


app = FastAPI(
    lifespan=lifespan,
    title="Product Ingest API",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
)


@app.exception_handler(ApplicationError)
async def handle_application_error(request: Request, exc: ApplicationError):
    """Answer storage and startup failures with an opaque 500."""
    with tracer.start_as_current_span("handle_application_error") as span:
        span.set_attribute("error", True)
        span.set_attribute("error.type", type(exc).__name__)

        original = exc.original_exception if isinstance(exc, StorageError) else None
        logger.error(
            "Request failed",
            extra={
                "error_type": type(exc).__name__,
                "detail": str(exc),
                "path": request.url.path,
            },
            exc_info=original or exc,
        )
        return PlainTextResponse(
            SERVER_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


app.include_router(product_router)

function_app = func.FunctionApp()


@function_app.route(
    route="{*route}", methods=["POST"], auth_level=func.AuthLevel.FUNCTION
)
async def main(req: func.HttpRequest) -> func.HttpResponse:
    """Azure Functions entry-point routed through FastAPI."""
    with tracer.start_as_current_span("process_request") as span:
        span.set_attribute("http.method", req.method)
        span.set_attribute("http.url", str(req.url))
        span.set_attribute("http.route", req.route_params.get('route', ''))

        logger.info(
            f"Processing {req.method} request",
            extra={
                "method": req.method,
                "path": str(req.url),
                "route": req.route_params.get('route', '')
            }
        )

        try:
            response = await func.AsgiMiddleware(app).handle_async(req)
            span.set_attribute("http.status_code", response.status_code)
            return response
        except Exception as e:
            span.set_attribute("error", True)
            span.set_attribute("error.type", type(e).__name__)
            span.set_attribute("error.message", str(e))

            logger.error(
                f"Error processing request: {str(e)}",
                extra={"error_type": type(e).__name__},
                exc_info=True,
            )
            return func.HttpResponse(
                body=SERVER_ERROR_MESSAGE,
                status_code=500,
                mimetype="text/plain",
            )
