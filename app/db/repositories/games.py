from typing import List, NamedTuple, Optional, Sequence

from sqlalchemy import case
from sqlmodel import select, func

from app.db.repositories.base import BaseRepository

from app.db.models.games import Game


class GameTotals(NamedTuple):
    total_games: int
    total_play_time: float
    completed_games: int
    metacritic_sum: float


class GameRepository(BaseRepository[Game]):
    """CRUD Games + filtres de liste + agrégats."""
    model = Game

    def get_by_titre(self, titre: str) -> Optional[Game]:
        stmt = select(Game).where(Game.titre == titre)
        return self.session.exec(stmt).first()

    def list_filtered(
        self,
        *,
        genre: Optional[str] = None,
        plateforme: Optional[str] = None,
        termine: Optional[bool] = None,
    ) -> List[Game]:
        """
        Liste des jeux, du plus récent au plus ancien (date_ajout).
        - genre / plateforme : correspondance exacte d'un élément du tableau
        - termine            : égalité stricte
        """
        stmt = select(Game)
        if termine is not None:
            stmt = stmt.where(Game.termine == termine)
        stmt = stmt.order_by(Game.date_ajout.desc(), Game.id.desc())

        games: Sequence[Game] = self.session.exec(stmt).all()

        # les tableaux sont en JSON : le test d'appartenance se fait côté Python
        return [
            g for g in games
            if (not genre or genre in (g.genre or []))
            and (not plateforme or plateforme in (g.plateforme or []))
        ]

    def totals(self) -> GameTotals:
        """Agrégats pour les statistiques, les valeurs absentes comptent pour 0."""
        stmt = select(
            func.count(Game.id),
            func.coalesce(func.sum(func.coalesce(Game.temps_jeu_heures, 0)), 0),
            func.coalesce(func.sum(case((Game.termine.is_(True), 1), else_=0)), 0),
            func.coalesce(func.sum(func.coalesce(Game.metacritic_score, 0)), 0),
        )
        count, play_time, completed, metacritic = self.session.exec(stmt).one()
        return GameTotals(
            total_games=int(count),
            total_play_time=float(play_time),
            completed_games=int(completed),
            metacritic_sum=float(metacritic),
        )
