import pytest

from assessment_builder.services.drafts import ChoiceDraft, QuestionDraft, ScaleLabelDraft, TemplateDraft
from assessment_builder.services.errors import StoreError, TemplateNotFoundError
from assessment_builder.services.hydration import hydrate_template
from assessment_builder.services.persistence import save_template
from tests.memory_store import MemoryStore


def _seed(store: MemoryStore, template_id: str = "t1", **fields) -> None:
    store.templates[template_id] = {"id": template_id, "name": "Team pulse", "description": None, **fields}


def _question(store: MemoryStore, qid: str, position, template_id: str = "t1", **fields) -> None:
    row = {
        "template_id": template_id,
        "question_type": "single_choice",
        "prompt": qid,
        "details": None,
        "score_weight": 1,
        "position": position,
        "scale_min": 1,
        "scale_max": 5,
        "scale_variant": "number",
    }
    row.update(fields)
    store.questions[qid] = row


async def test_missing_template_raises_not_found(memory_store: MemoryStore) -> None:
    with pytest.raises(TemplateNotFoundError) as excinfo:
        await hydrate_template(memory_store, "nope")
    assert excinfo.value.status_code == 404
    assert memory_store.calls == ["read_template"]


async def test_template_without_questions_gets_default_question(memory_store: MemoryStore) -> None:
    _seed(memory_store, description="About the team")
    draft = await hydrate_template(memory_store, "t1")
    assert draft.name == "Team pulse"
    assert draft.description == "About the team"
    assert len(draft.questions) == 1
    assert draft.questions[0].type == "single_choice"
    assert [c.label for c in draft.questions[0].choices] == ["Option A", "Option B"]


async def test_questions_follow_position_with_stable_ties(memory_store: MemoryStore) -> None:
    _seed(memory_store)
    _question(memory_store, "third", 2)
    _question(memory_store, "first-a", 0)
    _question(memory_store, "second", 1)
    _question(memory_store, "first-b", 0)

    draft = await hydrate_template(memory_store, "t1")
    assert [q.id for q in draft.questions] == ["first-a", "first-b", "second", "third"]


async def test_children_sorted_by_value(memory_store: MemoryStore) -> None:
    _seed(memory_store)
    _question(memory_store, "q", 0)
    _question(memory_store, "s", 1, question_type="scale", scale_min=0, scale_max=4, scale_variant="stars")
    memory_store.choices = [
        {"id": "c3", "question_id": "q", "label": "High", "description": None, "value": 3},
        {"id": "cx", "question_id": "q", "label": None, "description": None, "value": None},
        {"id": "c1", "question_id": "q", "label": "Low", "description": "least", "value": 1},
    ]
    memory_store.scale_labels = [
        {"question_id": "s", "scale_value": 4, "label": "Top"},
        {"question_id": "s", "scale_value": 0, "label": None},
    ]

    draft = await hydrate_template(memory_store, "t1")
    choices = draft.questions[0].choices
    assert [c.id for c in choices] == ["c1", "c3", "cx"]
    assert choices[0].description == "least"
    assert choices[2].label == ""
    assert choices[2].value == 3  # missing value falls back to its 1-based rank

    scale = draft.questions[1]
    assert scale.type == "scale"
    assert (scale.scale_min, scale.scale_max, scale.scale_variant) == (0, 4, "stars")
    assert [(e.value, e.label) for e in scale.scale_labels] == [(0, ""), (4, "Top")]


async def test_null_fields_use_defaults(memory_store: MemoryStore) -> None:
    _seed(memory_store, name=None)
    _question(
        memory_store,
        "q",
        None,
        prompt=None,
        score_weight=None,
        scale_min=None,
        scale_max=None,
        scale_variant=None,
    )
    draft = await hydrate_template(memory_store, "t1")
    question = draft.questions[0]
    assert draft.name == ""
    assert question.prompt == "" and question.details == ""
    assert question.score_weight == 1
    assert (question.scale_min, question.scale_max, question.scale_variant) == (1, 5, "number")


async def test_round_trip_through_database(store, owner) -> None:
    draft = TemplateDraft(
        name="Leadership",
        description="360 feedback",
        questions=(
            QuestionDraft(
                id="local-1",
                prompt="Communicates clearly",
                choices=(
                    ChoiceDraft(id="a", label="Rarely", value=5),
                    ChoiceDraft(id="b", label="Often", value=2),
                ),
            ),
            QuestionDraft(
                id="local-2",
                type="scale",
                prompt="Overall",
                scale_min=1,
                scale_max=10,
                scale_labels=(ScaleLabelDraft(value=10, label="Best"), ScaleLabelDraft(value=1, label="Worst")),
            ),
            QuestionDraft(
                id="local-3",
                type="multi_choice",
                prompt="Strengths",
                score_weight=2.5,
                details="Pick all",
                choices=(
                    ChoiceDraft(id="x", label="Focus", value=1),
                    ChoiceDraft(id="y", label="Empathy", value=2),
                ),
            ),
        ),
    )
    template_id = await save_template(store, draft, owner.owner_id)

    loaded = await hydrate_template(store, template_id)
    assert loaded.name == "Leadership"
    assert loaded.description == "360 feedback"
    assert [q.prompt for q in loaded.questions] == ["Communicates clearly", "Overall", "Strengths"]
    assert all(not q.id.startswith("local-") for q in loaded.questions)
    assert [c.label for c in loaded.questions[0].choices] == ["Often", "Rarely"]
    assert [e.value for e in loaded.questions[1].scale_labels] == [1, 10]
    assert loaded.questions[2].type == "multi_choice"
    assert loaded.questions[2].score_weight == 2.5
    assert loaded.questions[2].details == "Pick all"


async def test_unknown_stored_question_type_raises_store_error(memory_store: MemoryStore) -> None:
    _seed(memory_store)
    _question(memory_store, "q1", 0, question_type="text")

    with pytest.raises(StoreError) as excinfo:
        await hydrate_template(memory_store, "t1")
    assert excinfo.value.status_code == 502
