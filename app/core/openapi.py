"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter un titre, une description détaillée,

documenter les conventions de l'API (dates, erreurs, filtres).

🔹 Avantages :

La doc est toujours complète et cohérente.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API de gestion d'une collection de jeux vidéo.\n\n"
            "### Conventions\n"
            "- Toutes les dates sont en UTC.\n"
            "- Les erreurs de validation sont renvoyées en 400 sous `errors` (liste de messages).\n"
            "- Les autres erreurs sont renvoyées sous `error` (message unique).\n"
            "- Filtres de liste : query params `genre`, `plateforme`, `termine`.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
