from datetime import datetime, timedelta, timezone

from assessment_builder.core.config import get_settings
from assessment_builder.services.drafts import TemplateDraft, new_template_draft
from assessment_builder.services.preview import list_owner_templates, template_preview
from tests.memory_store import MemoryStore


def test_preview_falls_back_to_untitled() -> None:
    preview = template_preview(new_template_draft())
    assert preview.name == "Untitled assessment"
    assert preview.description == ""
    assert preview.question_count == 1


def test_preview_uses_draft_values() -> None:
    preview = template_preview(TemplateDraft(name="Culture", description="Yearly", questions=()))
    assert (preview.name, preview.description, preview.question_count) == ("Culture", "Yearly", 0)


async def test_listing_pages_and_counts(memory_store: MemoryStore) -> None:
    page_size = get_settings().page_size
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for i in range(page_size + 2):
        memory_store.templates[f"t{i}"] = {
            "id": f"t{i}",
            "name": f"Template {i}",
            "description": None,
            "owner_id": "owner-1",
            "created_at": start,
            "updated_at": start + timedelta(minutes=i),
        }
    memory_store.questions["q"] = {"template_id": f"t{page_size + 1}", "position": 0}

    first = await list_owner_templates(memory_store, "owner-1", page=1)
    assert first.total == page_size + 2
    assert first.page_count == 2
    assert len(first.items) == page_size
    assert first.items[0].id == f"t{page_size + 1}"
    assert first.items[0].question_count == 1
    assert first.items[1].question_count == 0

    second = await list_owner_templates(memory_store, "owner-1", page=2)
    assert [item.id for item in second.items] == ["t1", "t0"]

    assert (await list_owner_templates(memory_store, "owner-1", page=0)).page == 1
    empty = await list_owner_templates(memory_store, "nobody")
    assert empty.items == [] and empty.total == 0 and empty.page_count == 1
