"""Table statique des modèles de vitesse de bassin.

Chaque modèle est identifié par un id historique (sensible à la casse) et
porte les deux noms d'attributs ArcGIS dont il a besoin:
- `Z1p0<id>`: profondeur de l'horizon 1.0 km/s
- `Z2p5<id>`: profondeur de l'horizon 2.5 km/s
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from basin_service.domain.errors import ModelNotFoundError

Z1P0_PREFIX = "Z1p0"
Z2P5_PREFIX = "Z2p5"

BASIN_MODEL_IDS: tuple[str, ...] = (
    "bayarea",
    "cca06",
    "cvmh1510",
    "cvms4",
    "cvms426",
    "cvms426m01",
    "linthurber",
    "SchmandtLin",
    "Seattle",
    "SchenRitzwoller",
    "Wasatch",
)


@dataclass(frozen=True)
class BasinModel:
    """Modèle de bassin et clés d'attributs amont associées."""

    id: str
    z1p0: str
    z2p5: str

    @classmethod
    def from_model_id(cls, model_id: str) -> BasinModel:
        return cls(id=model_id, z1p0=Z1P0_PREFIX + model_id, z2p5=Z2P5_PREFIX + model_id)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "z1p0": self.z1p0, "z2p5": self.z2p5}


class BasinModelTable:
    """Table en lecture seule id -> `BasinModel`, figée à la construction."""

    def __init__(self, model_ids: Iterable[str] = BASIN_MODEL_IDS):
        models = [BasinModel.from_model_id(model_id) for model_id in model_ids]
        self._models: dict[str, BasinModel] = {m.id: m for m in models}

    def from_id(self, model_id: str) -> BasinModel:
        """Retourne le modèle d'identifiant exact `model_id`.

        Raises:
            ModelNotFoundError: si l'identifiant n'est pas connu.
        """
        try:
            return self._models[model_id]
        except KeyError as err:
            raise ModelNotFoundError(model_id) from err

    def all(self) -> tuple[BasinModel, ...]:
        return tuple(self._models.values())

    def ids(self) -> tuple[str, ...]:
        return tuple(self._models)

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._models

    def __iter__(self) -> Iterator[BasinModel]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)
