"""Collaborateur de valeurs ponctuelles déterministe pour les tests et le développement.

Ce module implémente un fournisseur factice qui retourne toujours les mêmes attributs, sans appel
réseau, et compte les appels reçus.
"""

from basin_service.domain.coordinates import Coordinate
from basin_service.domain.errors import UpstreamEmptyError
from basin_service.domain.point_values import PointValueClient, PointValueResult


class StaticPointValueClient(PointValueClient):
    """Fournisseur factice retournant des attributs fixes.

    Args:
        basin_values: Attributs `Z1p0*`/`Z2p5*` retournés pour tout point.
        vs30: Valeur Vs30 retournée.
        empty: Si vrai, simule une réponse amont sans résultat.
    """

    def __init__(
        self,
        basin_values: dict[str, float | None] | None = None,
        vs30: float | None = 760.0,
        empty: bool = False,
    ):
        self.basin_values = dict(basin_values or {})
        self.vs30 = vs30
        self.empty = empty
        self.calls: list[Coordinate] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def lookup(self, coord: Coordinate) -> PointValueResult:
        self.calls.append(coord)
        url = f"static://basin?lat={coord.latitude}&lon={coord.longitude}"
        if self.empty:
            raise UpstreamEmptyError(f"Empty results array returned from: {url}", url=url)
        return PointValueResult(
            latitude=coord.latitude,
            longitude=coord.longitude,
            vs30=self.vs30,
            basin_values=dict(self.basin_values),
            url=url,
        )
