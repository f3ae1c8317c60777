import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app import database
from app.exceptions import PortalError, ValidationError, NotFoundError, PersistenceError
from app.routes import public, request_form, client_hub, admin, client_request, reports, seo

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Set up a module-level logger
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database.init_db()
    logger.info("🚀 Client request portal started.")
    yield


app = FastAPI(title="Client Request Portal", lifespan=lifespan)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": exc.message, "errors": exc.errors}
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"success": False, "message": exc.message})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error(f"❌ Persistence failure on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=500, content={"success": False, "message": exc.message})


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    logger.error(f"❌ Unhandled portal error on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


app.include_router(public.router)
app.include_router(request_form.router)
app.include_router(client_hub.router)
app.include_router(admin.router)
app.include_router(client_request.router)
app.include_router(reports.router)
app.include_router(seo.router)
