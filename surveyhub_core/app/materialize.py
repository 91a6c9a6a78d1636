from typing import Any, Dict, List

from surveyhub_core.app import models, schemas
from surveyhub_core.app.common import collects_email
from surveyhub_core.utils.base import as_utc, map_

_DATETIME_FIELDS = (
    "created_at",
    "updated_at",
    "start_at",
    "end_at",
    "submitted_at",
    "uploaded_at",
)


def _normalize_datetimes(d: Dict[str, Any]) -> Dict[str, Any]:
    for k in _DATETIME_FIELDS:
        if k in d:
            d[k] = map_(d[k], as_utc)
    return d


def _by_order(questions: List[models.Question]) -> List[models.Question]:
    return sorted(questions, key=lambda q: (q.order_index, q.id))


# Converts orm objects into the schemas endpoints return
class Materializer(object):
    def question_schema_from_orm(self, question: models.Question) -> schemas.Question:
        return schemas.Question.model_validate(question)

    def section_schema_from_orm(self, section: models.Section) -> schemas.Section:
        base = schemas.SectionInDBBase.model_validate(section)
        d = base.model_dump()
        d["questions"] = [
            self.question_schema_from_orm(q) for q in _by_order(section.questions)
        ]
        return schemas.Section(**d)

    def form_summary_schema_from_orm(self, form: models.Form) -> schemas.FormSummary:
        base = schemas.FormInDBBase.model_validate(form)
        return schemas.FormSummary(**_normalize_datetimes(base.model_dump()))

    def form_schema_from_orm(self, form: models.Form) -> schemas.Form:
        base = schemas.FormInDBBase.model_validate(form)
        d = _normalize_datetimes(base.model_dump())
        d["sections"] = [self.section_schema_from_orm(s) for s in form.sections]
        # Sectioned questions are only listed under their section
        d["questions"] = [
            self.question_schema_from_orm(q)
            for q in _by_order(form.questions)
            if q.section_id is None
        ]
        return schemas.Form(**d)

    def public_form_schema_from_orm(self, form: models.Form) -> schemas.FormPublic:
        return schemas.FormPublic(
            id=form.id,
            title=form.title,
            description=form.description,
            start_at=map_(form.start_at, as_utc),
            end_at=map_(form.end_at, as_utc),
            collect_email=collects_email(form.settings),
            sections=[
                schemas.SectionPublic(
                    id=s.id,
                    title=s.title,
                    description=s.description,
                    order_index=s.order_index,
                    questions=[
                        schemas.QuestionPublic.model_validate(q)
                        for q in _by_order(s.questions)
                    ],
                )
                for s in form.sections
            ],
            questions=[
                schemas.QuestionPublic.model_validate(q)
                for q in _by_order(form.questions)
                if q.section_id is None
            ],
        )

    def form_response_schema_from_orm(
        self, form_response: models.FormResponse
    ) -> schemas.FormResponse:
        base = schemas.FormResponseInDBBase.model_validate(form_response)
        d = _normalize_datetimes(base.model_dump())
        d["answers"] = [schemas.Answer.model_validate(a) for a in form_response.answers]
        return schemas.FormResponse(**d)

    def file_metadata_schema_from_orm(
        self, file_metadata: models.FileMetadata
    ) -> schemas.FileMetadata:
        base = schemas.FileMetadata.model_validate(file_metadata)
        return schemas.FileMetadata(**_normalize_datetimes(base.model_dump()))


materializer = Materializer()
