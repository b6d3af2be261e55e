from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from app.db.models.base import BaseModelDB


class Game(BaseModelDB, table=True):
    """Un jeu de la collection personnelle."""

    titre: str = Field(index=True, nullable=False)

    # listes de chaînes, stockées en JSON
    genre: List[str] = Field(sa_column=Column(JSON, nullable=False))
    plateforme: List[str] = Field(sa_column=Column(JSON, nullable=False))

    editeur: str = Field(default="")
    developpeur: str = Field(default="")

    annee_sortie: Optional[int] = Field(default=None)
    metacritic_score: Optional[int] = Field(default=None)
    temps_jeu_heures: float = Field(default=0)

    termine: bool = Field(default=False, nullable=False)
    favorite: bool = Field(default=False, nullable=False)
