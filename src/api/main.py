"""
FastAPI backend: REST API for contacts.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from neo4j import AsyncGraphDatabase

from api.contracts import ApiErrorBody, ContactContract, contract_to_contact
from contactbook.application import (
    ApiError,
    ContactService,
    ErrorStatus,
    Failure,
)
from contactbook.domain import Contact
from contactbook.infrastructure import (
    DateConversionError,
    InMemoryContactRepository,
    Neo4jContactRepository,
    ensure_contact_constraints,
    parse_contract_date,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
)
logger = logging.getLogger(__name__)

STORE_MEMORY = "memory"
STORE_NEO4J = "neo4j"

INVALID_REQUEST_MESSAGE = "The request is invalid."
INVALID_ID_MESSAGE = "A valid contact id is required."
INVALID_SEARCH_DATE_MESSAGE = "Birth date range values must be in the form YYYY-MM-DD."


def _store_backend() -> str:
    return os.environ.get("CONTACTBOOK_STORE", STORE_MEMORY).strip().lower() or STORE_MEMORY


def _neo4j_database() -> str | None:
    return os.environ.get("NEO4J_DATABASE", "").strip() or None


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return AsyncGraphDatabase.driver(uri, auth=(user, password))


def _build_service(app: FastAPI) -> ContactService:
    backend = _store_backend()
    if backend == STORE_MEMORY:
        return ContactService(InMemoryContactRepository())
    if backend == STORE_NEO4J:
        if getattr(app.state, "driver", None) is None:
            app.state.driver = _get_driver()
        repo = Neo4jContactRepository(app.state.driver, database=_neo4j_database())
        return ContactService(repo)
    raise ValueError(f"Unknown CONTACTBOOK_STORE {backend!r}")


def get_service(app: FastAPI) -> ContactService:
    if getattr(app.state, "service", None) is None:
        app.state.service = _build_service(app)
    return app.state.service


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    app.state.service = None
    try:
        app.state.service = _build_service(app)
        if app.state.driver is not None:
            await ensure_contact_constraints(app.state.driver, _neo4j_database())
        logger.info("Contact store: %s", _store_backend())
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            await app.state.driver.close()


app = FastAPI(title="Contactbook API", lifespan=lifespan)


def _error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(
        content=ApiErrorBody.from_error(error).model_dump(by_alias=True),
        status_code=int(error.status),
    )


def _bad_request(message: str) -> JSONResponse:
    return _error_response(ApiError(message=message, status=ErrorStatus.BAD_REQUEST))


def _contact_response(contact: Contact, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        content=ContactContract.from_contact(contact).model_dump(by_alias=True),
        status_code=status_code,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError):
    logger.warning(
        "Invalid request %s %s: %s", request.method, request.url.path, exc.errors()
    )
    return _bad_request(INVALID_REQUEST_MESSAGE)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


@app.post("/api/v1/contact")
async def create_contact(body: ContactContract, request: Request):
    logger.info("POST /contact")
    try:
        converted = contract_to_contact(body)
        if isinstance(converted, Failure):
            return _error_response(converted.error)
        result = await get_service(request.app).create_contact(converted.value)
        if isinstance(result, Failure):
            return _error_response(result.error)
        return _contact_response(result.value, status_code=201)
    except Exception:
        logger.exception("POST /contact failed")
        return _error_response(ApiError())


# Declared before /{contact_id} so "search" is not parsed as an id.
@app.get("/api/v1/contact/search")
async def search_contacts(
    request: Request,
    name: str | None = None,
    birth_date_range_start: str | None = Query(None, alias="birthDateRangeStart"),
    birth_date_range_end: str | None = Query(None, alias="birthDateRangeEnd"),
):
    logger.info(
        "GET /contact/search?name=%s&birthDateRangeStart=%s&birthDateRangeEnd=%s",
        name,
        birth_date_range_start,
        birth_date_range_end,
    )
    try:
        start = parse_contract_date(birth_date_range_start)
        end = parse_contract_date(birth_date_range_end)
    except DateConversionError as e:
        logger.warning("Search date conversion failed: %s", e)
        return _bad_request(INVALID_SEARCH_DATE_MESSAGE)
    # A blank query parameter counts as not given.
    if name is not None and not name.strip():
        name = None
    try:
        result = await get_service(request.app).search_contacts(name, start, end)
        if isinstance(result, Failure):
            return _error_response(result.error)
        return JSONResponse(
            content=[
                ContactContract.from_contact(c).model_dump(by_alias=True)
                for c in result.value
            ],
            status_code=200,
        )
    except Exception:
        logger.exception("GET /contact/search failed")
        return _error_response(ApiError())


@app.get("/api/v1/contact/{contact_id}")
async def get_contact(contact_id: int, request: Request):
    logger.info("GET /contact/%s", contact_id)
    if contact_id <= 0:
        return _bad_request(INVALID_ID_MESSAGE)
    try:
        result = await get_service(request.app).get_contact(contact_id)
        if isinstance(result, Failure):
            return _error_response(result.error)
        return _contact_response(result.value)
    except Exception:
        logger.exception("GET /contact/%s failed", contact_id)
        return _error_response(ApiError())


@app.put("/api/v1/contact")
async def update_contact(body: ContactContract, request: Request):
    logger.info("PUT /contact")
    if body.id < 0:
        return _bad_request(INVALID_ID_MESSAGE)
    try:
        converted = contract_to_contact(body)
        if isinstance(converted, Failure):
            return _error_response(converted.error)
        result = await get_service(request.app).update_contact(converted.value)
        if isinstance(result, Failure):
            return _error_response(result.error)
        return _contact_response(result.value)
    except Exception:
        logger.exception("PUT /contact failed")
        return _error_response(ApiError())


@app.delete("/api/v1/contact/{contact_id}")
async def delete_contact(contact_id: int, request: Request):
    logger.info("DELETE /contact/%s", contact_id)
    if contact_id < 0:
        return _bad_request(INVALID_ID_MESSAGE)
    try:
        result = await get_service(request.app).delete_contact(contact_id)
        if isinstance(result, Failure):
            return _error_response(result.error)
        if not result.value:
            raise RuntimeError(f"Store reported contact {contact_id} was not deleted")
        return Response(status_code=204)
    except Exception:
        logger.exception("DELETE /contact/%s failed", contact_id)
        return _error_response(ApiError())
