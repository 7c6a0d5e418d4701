import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from app.core.errors import InputError, QuizPipelineError
from app.core.logging_config import configure_logging
from app.routes.auth.auth_routers import auth_router
from app.routes.user.user_routers import user_router
from app.routes.quiz.quiz_routers import quiz_router

logger = configure_logging()

app = FastAPI(title="Quiz Host API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(user_router)
app.include_router(quiz_router)


@app.exception_handler(QuizPipelineError)
async def quiz_pipeline_error_handler(request: Request, exc: QuizPipelineError):
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(level, "%s %s failed: %s (%s)", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.code, "detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=InputError.status_code,
        content={"error": InputError.code, "detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]


@app.get("/", response_class=HTMLResponse)
async def read_root():
    return """
    <html>
        <head>
            <title>Quiz Host</title>
        </head>
        <body>
            <h1>Quiz Host API</h1>
            <p>API documentation is available <a href="/docs">here</a>.</p>
        </body>
    </html>
    """
