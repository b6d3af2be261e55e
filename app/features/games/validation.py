"""
Règles de validation d'un jeu proposé par le client.

validate_game() ne lève jamais d'exception : chaque règle violée produit un message,
dans un ordre fixe (titre, genre, plateforme, annee_sortie, metacritic_score, temps_jeu_heures).
"""

import math
from datetime import date
from typing import Any, List, Optional

ANNEE_SORTIE_MIN = 1970
METACRITIC_MIN = 0
METACRITIC_MAX = 100
TEMPS_JEU_MIN = 0

BODY_ERROR = "Le corps de la requête doit être un objet JSON."
TITRE_ERROR = 'Le champ "titre" est obligatoire et doit être une chaîne non vide.'
GENRE_ERROR = 'Le champ "genre" doit être un tableau avec au moins un élément.'
PLATEFORME_ERROR = 'Le champ "plateforme" doit être un tableau avec au moins un élément.'


def _is_number(value: Any) -> bool:
    # bool est un int en Python, mais pas un nombre côté JSON ; inf et NaN non plus
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # entier JSON trop grand pour un flottant
        return False


def _is_non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) >= 1


def _number_error(field: str) -> str:
    return f'"{field}" doit être un nombre.'


def validate_game(
    candidate: Any,
    is_partial: bool = False,
    *,
    current_year: Optional[int] = None,
) -> List[str]:
    """
    Vérifie un jeu candidat.

    - is_partial=False (création / remplacement) : titre, genre et plateforme
      sont obligatoires et vérifiés même s'ils sont absents.
    - is_partial=True : un champ n'est vérifié que s'il est présent.
    - Les champs numériques optionnels à null sont considérés comme absents.

    Retourne la liste des messages d'erreur, vide si le jeu est valide.
    """
    if not isinstance(candidate, dict):
        return [BODY_ERROR]

    year_max = current_year if current_year is not None else date.today().year
    errors: List[str] = []

    def required(field: str) -> bool:
        return not is_partial or field in candidate

    if required("titre"):
        titre = candidate.get("titre")
        if not isinstance(titre, str) or len(titre.strip()) < 1:
            errors.append(TITRE_ERROR)

    if required("genre") and not _is_non_empty_list(candidate.get("genre")):
        errors.append(GENRE_ERROR)

    if required("plateforme") and not _is_non_empty_list(candidate.get("plateforme")):
        errors.append(PLATEFORME_ERROR)

    annee = candidate.get("annee_sortie")
    if annee is not None:
        if not _is_number(annee):
            errors.append(_number_error("annee_sortie"))
        elif annee < ANNEE_SORTIE_MIN or annee > year_max:
            errors.append(f'"annee_sortie" doit être entre {ANNEE_SORTIE_MIN} et {year_max}.')

    score = candidate.get("metacritic_score")
    if score is not None:
        if not _is_number(score):
            errors.append(_number_error("metacritic_score"))
        elif score < METACRITIC_MIN or score > METACRITIC_MAX:
            errors.append(f'"metacritic_score" doit être entre {METACRITIC_MIN} et {METACRITIC_MAX}.')

    temps = candidate.get("temps_jeu_heures")
    if temps is not None:
        if not _is_number(temps):
            errors.append(_number_error("temps_jeu_heures"))
        elif temps < TEMPS_JEU_MIN:
            errors.append(f'"temps_jeu_heures" doit être >= {TEMPS_JEU_MIN}.')

    return errors
