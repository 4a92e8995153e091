## Row-level persistence scoped to one client id
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models.feedback import Feedback
from app.db.models.milestone import Milestone
from app.db.models.resource import Resource
from app.db.models.roadmap import Roadmap
from app.planning.errors import PersistenceError

logger = logging.getLogger(__name__)


class SqlGateway:
    """
    Every row written through the gateway carries its client_id, and every
    read is filtered by it. Each insert commits on its own; there is no
    transaction across a roadmap's rows.
    """

    def __init__(self, db: Session, client_id: str):
        self.db = db
        self.client_id = client_id

    @contextmanager
    def _write(self, what: str) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to write %s for client %s: %s", what, self.client_id, e)
            raise PersistenceError(f"Failed to write {what}: {e}") from e

    # -------------------------
    # Writes
    # -------------------------
    def insert_roadmap(self, fields: Dict[str, Any]) -> uuid.UUID:
        rm = Roadmap(**{**fields, "client_id": self.client_id})
        with self._write("roadmap"):
            self.db.add(rm)
            self.db.flush()
            roadmap_id = rm.id
        return roadmap_id

    def insert_milestones(self, rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        items = [Milestone(**{**row, "client_id": self.client_id}) for row in rows]
        with self._write("milestones"):
            self.db.add_all(items)
            self.db.flush()
            inserted = [{"id": m.id, "order_index": m.order_index} for m in items]
        return inserted

    def insert_resources(self, rows: Iterable[Dict[str, Any]]) -> None:
        items = [Resource(**{**row, "client_id": self.client_id}) for row in rows]
        if not items:
            return
        with self._write("resources"):
            self.db.add_all(items)

    def set_milestone_status(self, milestone_id: uuid.UUID, status: str) -> Milestone | None:
        """Update the status and append the change to the feedback log."""
        m = self.get_milestone(milestone_id)
        if not m:
            return None

        with self._write("milestone status"):
            m.status = status
            self.db.add(Feedback(milestone_id=m.id, client_id=self.client_id, action=status))
        return m

    # -------------------------
    # Reads
    # -------------------------
    def get_roadmap(self, roadmap_id: uuid.UUID) -> Roadmap | None:
        return (
            self.db.query(Roadmap)
            .filter(Roadmap.id == roadmap_id, Roadmap.client_id == self.client_id)
            .first()
        )

    def get_milestone(self, milestone_id: uuid.UUID) -> Milestone | None:
        return (
            self.db.query(Milestone)
            .filter(Milestone.id == milestone_id, Milestone.client_id == self.client_id)
            .first()
        )

    def list_milestones(self, roadmap_id: uuid.UUID) -> List[Milestone]:
        return (
            self.db.query(Milestone)
            .filter(Milestone.roadmap_id == roadmap_id, Milestone.client_id == self.client_id)
            .order_by(Milestone.order_index.asc())
            .all()
        )

    def list_resources(self, milestone_ids: List[uuid.UUID]) -> List[Resource]:
        if not milestone_ids:
            return []
        return (
            self.db.query(Resource)
            .filter(Resource.milestone_id.in_(milestone_ids), Resource.client_id == self.client_id)
            .order_by(Resource.rank_score.desc())
            .all()
        )

    def list_feedback(self, milestone_ids: List[uuid.UUID]) -> List[Feedback]:
        if not milestone_ids:
            return []
        return (
            self.db.query(Feedback)
            .filter(Feedback.milestone_id.in_(milestone_ids), Feedback.client_id == self.client_id)
            .order_by(Feedback.created_at.asc())
            .all()
        )
