"""
➡️ But : Définir les formats d’entrée/sortie de l’API pour les jeux.

GameCandidate → corps de requête POST / PUT, une fois les règles métier vérifiées

GameOut → réponse de l’API (valeurs par défaut normalisées)

StatsOut → agrégats de la collection

Sépare le modèle "de stockage" (ORM) de ceux "de transfert" (I/O API).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class GameCandidate(BaseModel):
    """Jeu proposé par le client. Les champs optionnels absents restent à None."""

    titre: str
    genre: List[str]
    plateforme: List[str]

    editeur: Optional[str] = None
    developpeur: Optional[str] = None
    annee_sortie: Optional[int] = None
    metacritic_score: Optional[int] = None
    temps_jeu_heures: Optional[float] = None
    termine: Optional[bool] = None
    favorite: Optional[bool] = None

    model_config = {
        "extra": "ignore",
        "json_schema_extra": {
            "examples": [
                {
                    "titre": "Hades",
                    "genre": ["Action", "Roguelike"],
                    "plateforme": ["PC", "Switch"],
                    "editeur": "Supergiant Games",
                    "developpeur": "Supergiant Games",
                    "annee_sortie": 2020,
                    "metacritic_score": 93,
                    "temps_jeu_heures": 42.5,
                    "termine": True,
                }
            ]
        },
    }


class GameOut(BaseModel):
    id: str
    titre: str
    genre: List[str]
    plateforme: List[str]
    editeur: str = ""
    developpeur: str = ""
    annee_sortie: Optional[int] = None
    metacritic_score: Optional[int] = None
    temps_jeu_heures: float = 0
    termine: bool = False
    favorite: bool = False
    date_ajout: datetime
    date_modification: datetime


class StatsOut(BaseModel):
    totalGames: int = Field(0, examples=[12])
    totalPlayTime: float = Field(0, examples=[340.5])
    completedGames: int = Field(0, examples=[7])
    avgMetacritic: float = Field(0, examples=[81.3])
