from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from src.auth import SignInRequired
from src.config import settings
from src.domain.errors import ValidationFailed, service_error_detail
from src.routers import (
    auth_routes,
    staff,
    customer,
    subcustomer,
)

app = FastAPI(title="Ad Ops Portal", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def attach_request_id(request: Request, call_next):
    request_id = (
        request.headers.get("X-Request-ID")
        or request.headers.get("X-Correlation-ID")
        or str(uuid4())
    )
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(SignInRequired)
async def sign_in_required_handler(request: Request, exc: SignInRequired):
    # Wrong portal and no session look the same to the user: back to that portal's sign-in.
    return RedirectResponse(url=exc.sign_in_url, status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return JSONResponse(
        status_code=422,
        content={"detail": service_error_detail(ValidationFailed(errors))},
    )


app.include_router(auth_routes.router)
app.include_router(staff.router)
app.include_router(customer.router)
app.include_router(subcustomer.router)


@app.get("/")
async def root():
    return {"status": "ok", "service": "adops-portal"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
