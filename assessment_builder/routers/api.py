"""API routes: template drafts, saving and the owner's template list."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from assessment_builder.core.config import get_settings
from assessment_builder.core.security import Identity, identity_from_token
from assessment_builder.db.session import get_db
from assessment_builder.schemas.template import (
    TemplateListSchema,
    TemplatePreviewSchema,
    TemplateSavedSchema,
    TemplateSummarySchema,
    ValidationErrorSchema,
)
from assessment_builder.services.drafts import TemplateDraft, new_template_draft
from assessment_builder.services.editor import EditorSession, EditorState, OutcomeKind, SubmitOutcome
from assessment_builder.services.errors import AuthorizationError
from assessment_builder.services.preview import list_owner_templates, template_preview
from assessment_builder.services.store import SqlAlchemyTemplateStore

router = APIRouter(prefix="/api", tags=["api"])
settings = get_settings()

_OUTCOME_STATUS = {
    OutcomeKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.STORE_ERROR: status.HTTP_502_BAD_GATEWAY,
}


# ---------- helpers ----------

def get_identity(request: Request) -> Identity:
    return identity_from_token(request.cookies.get(settings.auth_cookie_name))


def get_store(db: Annotated[AsyncSession, Depends(get_db)]) -> SqlAlchemyTemplateStore:
    return SqlAlchemyTemplateStore(db)


async def _open_session(
    store: SqlAlchemyTemplateStore,
    identity: Identity,
    template_id: str | None = None,
    draft: TemplateDraft | None = None,
) -> EditorSession:
    session = EditorSession(store, template_id=template_id, identity=identity)
    await session.load(draft)
    if session.state is EditorState.FAILED:
        raise HTTPException(status_code=session.load_error_code or 502, detail=session.load_error)
    return session


def _saved_or_raise(outcome: SubmitOutcome, status_code: int) -> JSONResponse:
    if outcome.kind is OutcomeKind.INVALID:
        body = ValidationErrorSchema(detail="Template has validation errors.", errors=outcome.errors)
        return JSONResponse(status_code=422, content=body.model_dump())
    if not outcome.ok:
        raise HTTPException(status_code=_OUTCOME_STATUS[outcome.kind], detail=outcome.message)
    return JSONResponse(
        status_code=status_code,
        content=TemplateSavedSchema(template_id=outcome.template_id).model_dump(),
    )


# ---------- routes ----------

@router.get("/templates", response_model=TemplateListSchema)
async def list_templates(
    store: Annotated[SqlAlchemyTemplateStore, Depends(get_store)],
    identity: Annotated[Identity, Depends(get_identity)],
    page: Annotated[int, Query(ge=1)] = 1,
):
    """List the signed-in owner's templates, most recently updated first."""
    if not identity.present:
        raise HTTPException(status_code=401, detail=AuthorizationError().detail)
    result = await list_owner_templates(store, identity.owner_id, page)
    return TemplateListSchema(
        items=[TemplateSummarySchema.model_validate(item) for item in result.items],
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        page_count=result.page_count,
    )


@router.get("/templates/new", response_model=TemplateDraft)
async def new_template():
    """Default draft for a template that does not exist yet."""
    return new_template_draft()


@router.post("/templates/preview", response_model=TemplatePreviewSchema)
async def preview_template(body: TemplateDraft):
    """Summary card for an unsaved draft."""
    return TemplatePreviewSchema.model_validate(template_preview(body))


@router.get("/templates/{template_id}", response_model=TemplateDraft)
async def get_template_draft(
    template_id: str,
    store: Annotated[SqlAlchemyTemplateStore, Depends(get_store)],
    identity: Annotated[Identity, Depends(get_identity)],
):
    """Load a saved template as an editable draft."""
    session = await _open_session(store, identity, template_id=template_id)
    return session.draft


@router.post("/templates", status_code=status.HTTP_201_CREATED, response_model=TemplateSavedSchema)
async def create_template(
    body: TemplateDraft,
    store: Annotated[SqlAlchemyTemplateStore, Depends(get_store)],
    identity: Annotated[Identity, Depends(get_identity)],
):
    """Validate and save a new template."""
    session = await _open_session(store, identity, draft=body)
    return _saved_or_raise(await session.submit(), status.HTTP_201_CREATED)


@router.put("/templates/{template_id}", response_model=TemplateSavedSchema)
async def replace_template(
    template_id: str,
    body: TemplateDraft,
    store: Annotated[SqlAlchemyTemplateStore, Depends(get_store)],
    identity: Annotated[Identity, Depends(get_identity)],
):
    """Validate and save an existing template, replacing all of its questions."""
    session = await _open_session(store, identity, template_id=template_id, draft=body)
    return _saved_or_raise(await session.submit(), status.HTTP_200_OK)
