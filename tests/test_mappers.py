from sprint_alloc.core.mappers import map_item, map_items, work_type_from_labels


def _raw(**field_overrides):
    fields = {
        "summary": "Checkout flow",
        "assignee": {"displayName": "Alice"},
        "status": {"name": "Done"},
        "issuetype": {"name": "Story"},
        "labels": ["frontend", "cap-development"],
        "customfield_10015": {"value": "Checkout"},
    }
    fields.update(field_overrides)
    return {
        "key": "FN-1",
        "fields": fields,
        "changelog": {
            "histories": [
                {
                    "created": "2024-03-20T10:00:00.000+0000",
                    "items": [
                        {"field": "status", "fromString": "To Do", "toString": "In Progress"},
                        {"field": "assignee", "fromString": None, "toString": "Alice"},
                    ],
                },
                {
                    "created": "2024-03-21T15:00:00.000+0000",
                    "items": [{"field": "status", "fromString": "In Progress", "toString": "Done"}],
                },
            ]
        },
    }


def test_map_item_core_fields():
    item = map_item(_raw())
    assert item.key == "FN-1"
    assert item.summary == "Checkout flow"
    assert item.assignee == "Alice"
    assert item.status == "Done"
    assert item.issuetype == "Story"
    assert item.labels == ("frontend", "cap-development")
    assert item.asset_name == "Checkout"


def test_map_item_changelog():
    item = map_item(_raw())
    assert len(item.changelog) == 2
    first = item.changelog[0]
    assert first.created == "2024-03-20T10:00:00.000+0000"
    assert [c.field for c in first.items] == ["status", "assignee"]
    assert [c.to_value for c in first.status_changes()] == ["In Progress"]


def test_work_type_prefers_custom_field():
    assert map_item(_raw()).work_type == "cap-development"
    item = map_item(_raw(customfield_10014={"value": "cap-discovery"}))
    assert item.work_type == "cap-discovery"


def test_work_type_from_labels():
    assert work_type_from_labels(["x", "cap-maintenance", "cap-discovery"]) == "cap-maintenance"
    assert work_type_from_labels(["x"]) == ""


def test_missing_fields_become_empty_strings():
    item = map_item({"key": "FN-2", "fields": {"assignee": None, "status": None, "labels": None}})
    assert item.assignee == ""
    assert item.status == ""
    assert item.work_type == ""
    assert item.asset_name == ""
    assert item.changelog == ()


def test_map_items():
    assert [i.key for i in map_items([_raw(), {"key": "FN-3", "fields": {}}])] == ["FN-1", "FN-3"]
