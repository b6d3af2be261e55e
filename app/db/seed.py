import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from app.features.games.services import GameService, GameValidationError

logger = logging.getLogger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Games
# -----------------------------
def seed_games(svc: GameService, data: Dict[str, Any]) -> int:
    """
    Crée les jeux de data["games"] via GameService (validation incluse).
    Un titre déjà présent n'est pas recréé. Retourne le nombre de jeux créés.
    """
    games_yaml: List[Dict[str, Any]] = data.get("games") or []
    created = 0
    for entry in games_yaml:
        titre = entry.get("titre") if isinstance(entry, dict) else None
        if isinstance(titre, str) and svc.repo.get_by_titre(titre):
            logger.debug("Seed: %s déjà présent", titre)
            continue
        try:
            svc.create(entry)
        except GameValidationError as e:
            raise ValueError(f"Jeu de seed invalide ({titre!r}): {e.errors}") from e
        created += 1
    logger.info("Seed: %d jeu(x) créé(s)", created)
    return created
