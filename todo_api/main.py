import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Body, Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todo_api.config import Settings, load_settings
from todo_api.errors import InternalError, InvalidInput, PayloadTooLarge, TodoError
from todo_api.models import ErrorResponse, TodoCreate, TodoResponse, TodoUpdate
from todo_api.service import TodoService
from todo_api.store import TodoStore

logger = logging.getLogger(__name__)

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_service(request: Request) -> TodoService:
    return request.app.state.service


def create_app(settings: Optional[Settings] = None, store: Optional[TodoStore] = None) -> FastAPI:
    settings = settings or load_settings()
    service = TodoService(store if store is not None else TodoStore(settings.db_path))

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("%s starting db=%s", settings.service_name, settings.db_path)
        yield
        logger.info("%s stopped", settings.service_name)

    app = FastAPI(title=settings.service_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.service = service

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        # checks the declared length only; chunked uploads are left to the server
        length = request.headers.get("content-length")
        if length is not None and length.isascii() and length.isdigit() and int(length) > settings.max_body_bytes:
            error = PayloadTooLarge()
            logger.warning("[todos] 413 %s %s length=%s", request.method, request.url.path, length)
            return JSONResponse(status_code=error.status_code, content=error.to_body())
        return await call_next(request)

    # added last so it wraps every response, 413s included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError):
        if exc.status_code >= 500:
            # cause was already logged where it happened
            logger.error("[todos] %s %s %s", exc.status_code, request.method, request.url.path)
        else:
            logger.warning("[todos] %s %s field=%s", exc.status_code, exc.message, exc.field)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = InvalidInput("body", "Invalid request body")
        logger.warning("[todos] 400 %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content=error.to_body())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("[todos] 500 %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content=InternalError().to_body())

    @app.get("/")
    def root():
        return {"ok": True, "service": settings.service_name}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    @app.post("/todos", status_code=201, response_model=TodoResponse, responses=_ERRORS)
    def create_todo(
        todo: Optional[TodoCreate] = Body(default=None),
        service: TodoService = Depends(get_service),
    ):
        todo = todo or TodoCreate()
        return service.create(todo.title, completed=todo.completed, priority=todo.priority)

    @app.get("/todos", response_model=List[TodoResponse], responses=_ERRORS)
    def list_todos(
        q: str = Query(default=""),
        status: str = Query(default="all"),
        priority: str = Query(default=""),
        service: TodoService = Depends(get_service),
    ):
        return service.list(q=q, status=status, priority=priority)

    @app.get("/todos/{todo_id}", response_model=TodoResponse, responses=_ERRORS)
    def get_todo(todo_id: str, service: TodoService = Depends(get_service)):
        return service.get(todo_id)

    @app.put("/todos/{todo_id}", response_model=TodoResponse, responses=_ERRORS)
    def update_todo(
        todo_id: str,
        updates: Optional[TodoUpdate] = Body(default=None),
        service: TodoService = Depends(get_service),
    ):
        return service.update(todo_id, updates.patch() if updates is not None else {})

    @app.delete("/todos/{todo_id}", status_code=204, responses=_ERRORS)
    def delete_todo(todo_id: str, service: TodoService = Depends(get_service)):
        service.delete(todo_id)
        return Response(status_code=204)

    return app

