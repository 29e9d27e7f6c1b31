"""Disease reference repository (lookup table, never linked to patients)."""

import logging

from .models import Disease
from .store import HospitalStore

logger = logging.getLogger(__name__)


class DiseaseRepository:
    """Repository for the disease reference database."""

    def __init__(self, store: HospitalStore):
        self.store = store

    def create(self, name: str, symptoms: str, treatment: str) -> Disease:
        disease = Disease(id=0, name=name, symptoms=symptoms, treatment=treatment)
        self.store.diseases.add(disease)
        logger.info("Added disease reference %d (%s)", disease.id, disease.name)
        return disease

    def get_by_id(self, disease_id: int) -> Disease | None:
        return self.store.diseases.get_by_id(disease_id)

    def list_all(self) -> list[Disease]:
        return self.store.diseases.all()

    def find_by_name(self, name: str) -> list[Disease]:
        return self.store.diseases.find_by_name(name)
