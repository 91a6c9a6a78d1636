import json
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from surveyhub_core.app.crud.base import CRUDBase
from surveyhub_core.app.models.answer import Answer
from surveyhub_core.app.schemas.answer import AnswerCreate


def encode_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class CRUDAnswer(CRUDBase[Answer, AnswerCreate, AnswerCreate]):
    def build(self, obj_in: AnswerCreate) -> Answer:
        return self.model(
            question_id=obj_in.question_id,
            value=encode_value(obj_in.value),
        )

    def get_by_response(self, db: Session, *, response_id: int) -> List[Answer]:
        return (
            db.query(Answer)
            .filter(Answer.response_id == response_id)
            .order_by(Answer.id)
            .all()
        )


answer = CRUDAnswer(Answer)
