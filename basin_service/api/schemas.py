# Schémas Pydantic exposés par l'API (documentation OpenAPI des réponses).

from typing import Literal

from pydantic import BaseModel


class BasinTermOut(BaseModel):
    """Un terme de bassin.

    Champs:
    - model: str (clé amont du modèle, vide hors région)
    - value: float | None (profondeur en km, None si non calculable)
    """

    model: str
    value: float | None


class RegionRefOut(BaseModel):
    title: str
    id: str


class BasinRequestOut(BaseModel):
    """Écho de la requête normalisée (coordonnée arrondie à 0.01°)."""

    latitude: float
    longitude: float
    region: RegionRefOut | None
    model: str | None


class BasinTermsOut(BaseModel):
    z1p0: BasinTermOut
    z2p5: BasinTermOut


class BasinTermsResponse(BaseModel):
    """Réponse `success` de `/basin`."""

    status: Literal["success"]
    name: str
    date: str
    url: str
    request: BasinRequestOut
    response: BasinTermsOut


class ErrorResponse(BaseModel):
    """Réponse `error` commune à tous les endpoints."""

    status: Literal["error"]
    name: str
    date: str
    request: str
    message: str


class RegionOut(BaseModel):
    """Région de bassin exportée (frontière en paires [lon, lat])."""

    id: str
    title: str
    defaultModel: str
    boundary: list[list[float]]


class HealthResponse(BaseModel):
    status: str
    regions: int
    models: int
    upstream: str
