"""Dépendances partagées pour les routes de l'API.

But du module
-------------
- Donner aux endpoints l'accès au `Container` construit par `create_app`
  (stocké dans `app.state`), remplaçable dans les tests.
- Reconstruire l'URL de la requête telle que vue par le client, en tenant
  compte d'un reverse proxy (`X-Forwarded-Proto`).
"""

from fastapi import Request

from basin_service.core.container import Container
from basin_service.core.http_constants import FORWARDED_PROTO_HEADER


def get_container(request: Request) -> Container:
    """Retourne le conteneur de l'application courante."""
    return request.app.state.container


def request_url(request: Request, with_query: bool = True) -> str:
    """URL complète de la requête, avec le protocole transmis par le proxy."""
    url = request.url if with_query else request.url.replace(query="")
    protocol = request.headers.get(FORWARDED_PROTO_HEADER)
    if protocol:
        url = url.replace(scheme=protocol)
    return str(url)
