"""
➡️ But : assembler toutes les pièces du puzzle.

create_app() crée l’instance FastAPI (app).

Configure :

les logs,

CORS (autorisations de qui peut appeler ces API),

titre, version, tags,

schéma OpenAPI personnalisé,

le gestionnaire d'erreurs base de données (500 générique, rien de l'interne n'est exposé).

Inclut les routers (ex : /api/v1/games).

Crée l'engine au démarrage de l'app, les tables au startup, et le libère au shutdown.

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d’exécution : uvicorn app.main:app --reload.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, settings as default_settings
from app.core.logging_config import setup_logging
from app.core.openapi import custom_openapi
from app.db.session import build_engine, init_db

from app.api.v1.routers import games, stats

import uvicorn

logger = logging.getLogger(__name__)

INVALID_JSON_ERROR = "Le corps de la requête n'est pas un JSON valide."


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        openapi_tags=[
            {"name": "games", "description": "Opérations sur la collection de jeux"},
            {"name": "stats", "description": "Statistiques de la collection"},
        ],
    )

    # Engine unique pour tout le process, injecté dans les routes via app.state
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL, echo=(settings.ENV == "dev"))

    # CORS (ajustez selon vos besoins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    # Routers
    app.include_router(games.router, prefix=settings.API_PREFIX)
    app.include_router(stats.router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["health"], summary="Vérifier que l'API répond")
    def health():
        return {"status": "ok"}

    @app.exception_handler(SQLAlchemyError)
    async def on_store_failure(request: Request, exc: SQLAlchemyError):
        logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Erreur serveur"},
        )

    @app.exception_handler(RequestValidationError)
    async def on_request_validation(request: Request, exc: RequestValidationError):
        # JSON illisible : même format que les erreurs de validation métier
        if any(err.get("type") == "json_invalid" for err in exc.errors()):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"errors": [INVALID_JSON_ERROR]},
            )
        return await request_validation_exception_handler(request, exc)

    # Génération du schéma OpenAPI custom (facultatif, mais propre)
    app.openapi = lambda: custom_openapi(app)

    # Démarrage / arrêt
    @app.on_event("startup")
    def on_startup():
        init_db(app.state.engine)
        logger.info("Database ready (%s)", app.state.engine.url.render_as_string(hide_password=True))

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.engine.dispose()
        logger.info("Database connections closed")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=(default_settings.ENV == "dev"),
    ) # http://localhost:4000
