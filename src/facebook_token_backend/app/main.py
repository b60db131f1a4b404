# src/facebook_token_backend/app/main.py
from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from dotenv import load_dotenv

# Load .env before any auth modules read environment variables
load_dotenv()

from facebook_token_backend.app.core.logging import setup_logging
setup_logging()

from .api.routes.auth import router as auth_router

app = FastAPI(title="Facebook Token Auth API", version="0.1.0")

# 1) Health check (open)
@app.get("/healthz")
def health():
    return {"status": "ok"}

# 2) Token exchange + whoami
app.include_router(auth_router)


# --- Swagger/OpenAPI: Add Bearer "Authorize" button ---
def _add_bearer_security_to_openapi(app: FastAPI) -> None:
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=getattr(app, "description", None),
            routes=app.routes,
        )
        components = openapi_schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes["BearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "description": (
                "On /auth/facebook/token paste the Facebook access token; "
                "everywhere else paste the internal access token it returns."
            ),
        }

        for path_item in openapi_schema.get("paths", {}).values():
            for op in path_item.values():
                if isinstance(op, dict):
                    op.setdefault("security", [{"BearerAuth": []}])

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

_add_bearer_security_to_openapi(app)
