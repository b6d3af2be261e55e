from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from sqlmodel import SQLModel, Session, select, func

# Type générique pour le modèle (Game, ...)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, update, delete, count.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def count(self) -> int:
        """Retourne le nombre total d’enregistrements."""
        return self.session.exec(select(func.count(self.model.id))).one()

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    # ---------- CREATE ----------

    def create(self, **fields) -> ModelT:
        """Crée, persiste puis relit un nouvel enregistrement."""
        entity = self.model(**fields)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, **changes) -> ModelT:
        """Met à jour un enregistrement existant puis le relit."""
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    # ---------- DELETE ----------

    def delete(self, entity: ModelT) -> None:
        """Supprime définitivement un enregistrement."""
        self.session.delete(entity)
        self._commit()

    # ---------- HELPERS ----------

    def _commit(self) -> None:
        # rien de visible si le commit échoue
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
