from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from karoli_portal.api.routes import router
from karoli_portal.core.config import settings
from karoli_portal.core.exceptions import AuthenticationError, AuthorizationError, PortalError
from karoli_portal.core.logging_config import logger
from karoli_portal.core.middleware import RequestLoggingMiddleware

app = FastAPI(title="Karoli University Portal", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)

@app.get("/health")
async def health():
    return {"status": "ok", "env": settings.app_env}


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return RedirectResponse(settings.identity_sign_in_url, status_code=303)


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    return RedirectResponse("/dashboard", status_code=303)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    logger.error(f"Unhandled portal error on {request.url.path}: {exc.message}",
                 extra={"error_code": exc.code})
    return JSONResponse(status_code=502, content=exc.to_dict())

app.include_router(router)

from karoli_portal.api.student_pages import router as student_router
from karoli_portal.api.faculty_pages import router as faculty_router
from karoli_portal.api.admin_pages import router as admin_router
from karoli_portal.api.university_routes import router as university_router
app.include_router(student_router)
app.include_router(faculty_router)
app.include_router(admin_router)
app.include_router(university_router)


def run() -> None:
    import uvicorn
    uvicorn.run("karoli_portal.main:app", host="0.0.0.0", port=settings.app_port)
