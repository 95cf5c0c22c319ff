"""Exceptions du domaine des termes de bassin.

Objectif du module
------------------
- Distinguer les erreurs corrigeables par l'appelant (validation), les
  défaillances du service amont (ArcGIS) et les erreurs de configuration
  détectées au démarrage.
- Laisser à la couche API le soin de les traduire en codes HTTP.
"""


class BasinServiceError(Exception):
    """Erreur de base du service de termes de bassin."""


class ValidationError(BasinServiceError):
    """Requête invalide: coordonnée absente/malformée ou modèle inconnu."""


class ModelNotFoundError(ValidationError):
    """Identifiant de modèle de bassin absent de la table des modèles."""

    def __init__(self, model_id: str) -> None:
        self.model_id = model_id
        super().__init__(f"Basin model [{model_id}] does not exist")


class UpstreamError(BasinServiceError):
    """Défaillance du service amont de valeurs ponctuelles."""

    def __init__(self, message: str, url: str | None = None) -> None:
        self.url = url
        super().__init__(message)


class UpstreamUnavailableError(UpstreamError):
    """Service amont injoignable (réseau, timeout, statut HTTP d'erreur)."""


class UpstreamEmptyError(UpstreamError):
    """Le service amont a répondu sans enregistrement exploitable."""


class ConfigurationError(BasinServiceError):
    """Configuration statique (régions/modèles) invalide; fatal au démarrage."""
