"""
Tests for the in-memory record store
"""
import threading

import pytest

from skills_hub_api.app.core.errors import IdCollisionError, NotFoundError, ValidationError
from skills_hub_api.app.core.store import RecordStore


class TestAddUser:
    """add_user / user_exists / get_all_users"""

    def test_add_user_returns_fresh_id(self, store):
        """Each registration gets an id not issued before"""
        first = store.add_user(["python"], ["go"])
        second = store.add_user(["python"], ["go"])

        assert first != second
        assert store.user_exists(first)
        assert store.user_exists(second)

    @pytest.mark.parametrize("skills,wants", [([], ["go"]), (["go"], []), ([], [])])
    def test_empty_sets_rejected_and_store_unchanged(self, store, skills, wants):
        store.add_user(["rust"], ["c"])

        with pytest.raises(ValidationError):
            store.add_user(skills, wants)

        assert len(store.get_all_users()) == 1

    def test_blank_tag_rejected(self, store):
        with pytest.raises(ValidationError):
            store.add_user(["python", "   "], ["go"])

    def test_string_instead_of_collection_rejected(self, store):
        """A bare string is not a set of tags"""
        with pytest.raises(ValidationError):
            store.add_user("python", ["go"])

    def test_non_iterable_rejected(self, store):
        with pytest.raises(ValidationError):
            store.add_user(42, ["go"])

    def test_too_many_skills_rejected(self):
        store = RecordStore(max_skills=2)
        with pytest.raises(ValidationError):
            store.add_user(["a", "b", "c"], ["go"])

    def test_duplicates_collapse(self, store):
        user_id = store.add_user(["Python", "python ", "SQL"], ["go", "go"])
        user = store.get_user(user_id)

        assert user.skills == {"python", "sql"}
        assert user.wants_to_learn == {"go"}

    def test_exact_mode_keeps_case(self, exact_store):
        user_id = exact_store.add_user(["Go", "go"], ["Rust"])
        assert exact_store.get_user(user_id).skills == {"Go", "go"}

    def test_unknown_user_does_not_exist(self, store):
        assert store.user_exists("nope") is False

    def test_get_all_users_insertion_order(self, store):
        ids = [store.add_user([f"s{i}"], ["w"]) for i in range(5)]
        assert [u.id for u in store.get_all_users()] == ids

    def test_get_all_users_is_a_copy(self, store):
        store.add_user(["a"], ["b"])
        users = store.get_all_users()
        users.clear()
        assert len(store.get_all_users()) == 1

    def test_reads_are_idempotent(self, store):
        user_id = store.add_user(["a"], ["b"])

        assert store.get_all_users() == store.get_all_users()
        assert store.user_exists(user_id) == store.user_exists(user_id)


class TestUpdateAndDeleteUser:
    """update_user / delete_user"""

    def test_update_replaces_both_sets(self, store):
        user_id = store.add_user(["python"], ["go"])

        store.update_user(user_id, ["rust", "c"], ["haskell"])

        user = store.get_user(user_id)
        assert user.skills == {"rust", "c"}
        assert user.wants_to_learn == {"haskell"}

    def test_update_returns_new_record(self, store):
        """The returned record is the one written, not a later read"""
        user_id = store.add_user(["python"], ["go"])

        user = store.update_user(user_id, ["Rust"], ["c"])
        store.delete_user(user_id)

        assert user.id == user_id
        assert user.skills == {"rust"}
        assert user.wants_to_learn == {"c"}

    def test_update_unknown_user(self, store):
        with pytest.raises(NotFoundError):
            store.update_user("missing", ["a"], ["b"])

    def test_update_with_empty_set_keeps_old_record(self, store):
        user_id = store.add_user(["python"], ["go"])

        with pytest.raises(ValidationError):
            store.update_user(user_id, [], ["rust"])

        user = store.get_user(user_id)
        assert user.skills == {"python"}
        assert user.wants_to_learn == {"go"}

    def test_validation_checked_before_existence(self, store):
        """Empty input on an unknown id is a validation failure"""
        with pytest.raises(ValidationError):
            store.update_user("missing", [], ["b"])

    def test_delete_user(self, store):
        user_id = store.add_user(["a"], ["b"])
        store.delete_user(user_id)

        assert not store.user_exists(user_id)
        with pytest.raises(NotFoundError):
            store.get_user(user_id)

    def test_delete_unknown_user(self, store):
        with pytest.raises(NotFoundError):
            store.delete_user("missing")

    def test_delete_user_keeps_their_resources(self, store):
        user_id = store.add_user(["a"], ["b"])
        store.add_resource("https://example.com", "misc", user_id)

        store.delete_user(user_id)

        assert [r.added_by for r in store.get_resources("misc")] == [user_id]


class TestResources:
    """add_resource / get_resources / delete_resource"""

    def test_add_then_get(self, store):
        resource_id = store.add_resource("https://go.dev/tour", "go", "u1")

        resources = store.get_resources("go")
        assert [r.id for r in resources] == [resource_id]
        assert resources[0].link == "https://go.dev/tour"
        assert resources[0].added_by == "u1"

    def test_added_by_need_not_exist(self, store):
        store.add_resource("https://example.com", "misc", "nobody")
        assert store.get_resources("misc")[0].added_by == "nobody"

    @pytest.mark.parametrize(
        "link,category,added_by",
        [("", "go", "u1"), ("https://x", "", "u1"), ("https://x", "go", ""), ("https://x", "  ", "u1")],
    )
    def test_blank_fields_rejected(self, store, link, category, added_by):
        with pytest.raises(ValidationError):
            store.add_resource(link, category, added_by)
        assert store.list_categories() == []

    def test_never_used_category_not_found(self, store):
        with pytest.raises(NotFoundError):
            store.get_resources("cooking")

    def test_delete_keeps_relative_order(self, store):
        ids = [store.add_resource(f"https://x/{i}", "go", "u1") for i in range(4)]

        store.delete_resource(ids[1], "go")

        assert [r.id for r in store.get_resources("go")] == [ids[0], ids[2], ids[3]]

    def test_delete_last_resource_leaves_empty_category(self, store):
        resource_id = store.add_resource("https://x", "go", "u1")

        store.delete_resource(resource_id, "go")

        assert store.get_resources("go") == []
        assert store.list_categories() == [("go", 0)]

    def test_delete_from_unknown_category(self, store):
        with pytest.raises(NotFoundError):
            store.delete_resource("abc", "nope")

    def test_delete_unknown_id(self, store):
        store.add_resource("https://x", "go", "u1")
        with pytest.raises(NotFoundError):
            store.delete_resource("abc", "go")

    def test_delete_with_wrong_category(self, store):
        resource_id = store.add_resource("https://x", "go", "u1")
        store.add_resource("https://y", "rust", "u1")

        with pytest.raises(NotFoundError):
            store.delete_resource(resource_id, "rust")
        assert len(store.get_resources("go")) == 1

    def test_padded_category_round_trip(self, store):
        """A category with surrounding spaces is found with the same string"""
        resource_id = store.add_resource("https://x", "python ", "u1")

        assert [r.id for r in store.get_resources("python ")] == [resource_id]
        assert [r.id for r in store.get_resources("python")] == [resource_id]

    def test_delete_with_padded_category(self, store):
        resource_id = store.add_resource("https://x", " go", "u1")

        store.delete_resource(resource_id, " go")

        assert store.get_resources("go") == []

    def test_categories_are_case_sensitive(self, store):
        store.add_resource("https://x", "Go", "u1")
        with pytest.raises(NotFoundError):
            store.get_resources("go")

    def test_list_categories_sorted_with_counts(self, store):
        store.add_resource("https://x", "rust", "u1")
        store.add_resource("https://y", "go", "u1")
        store.add_resource("https://z", "go", "u1")

        assert store.list_categories() == [("go", 2), ("rust", 1)]


class TestIds:
    """Id generation"""

    def test_collision_is_fatal_and_does_not_overwrite(self):
        store = RecordStore(id_factory=lambda: "same")
        store.add_user(["a"], ["b"])

        with pytest.raises(IdCollisionError):
            store.add_user(["c"], ["d"])

        assert store.get_user("same").skills == {"a"}

    def test_resource_ids_unique_across_categories(self):
        store = RecordStore(id_factory=lambda: "same")
        store.add_resource("https://x", "go", "u1")

        with pytest.raises(IdCollisionError):
            store.add_resource("https://y", "rust", "u1")


class TestSnapshotAndState:
    """snapshot / export_state / from_state"""

    def test_snapshot_not_affected_by_later_mutation(self, store):
        user_id = store.add_user(["a"], ["b"])
        view = store.snapshot()

        store.update_user(user_id, ["c"], ["d"])
        store.add_resource("https://x", "go", user_id)

        assert view.get_user(user_id).skills == {"a"}
        assert "go" not in view.resources

    def test_export_state_round_trip(self, store):
        alice = store.add_user(["python", "sql"], ["go"])
        store.add_user(["go"], ["python"])
        first = store.add_resource("https://a", "go", alice)
        store.add_resource("https://b", "go", alice)
        store.delete_resource(first, "go")
        store.add_resource("https://c", "empty-later", alice)
        store.delete_resource(store.get_resources("empty-later")[0].id, "empty-later")

        restored = RecordStore.from_state(store.export_state())

        assert restored.get_all_users() == store.get_all_users()
        assert restored.get_resources("go") == store.get_resources("go")
        assert restored.get_resources("empty-later") == []
        assert restored.export_state() == store.export_state()

    def test_exact_mode_state_keeps_case_variants(self, exact_store):
        """Tags differing only by case survive export and reload"""
        user_id = exact_store.add_user(["Go", "go"], ["Rust"])

        restored = RecordStore.from_state(exact_store.export_state())

        assert restored.normalize_skills is False
        assert restored.get_user(user_id).skills == {"Go", "go"}
        assert restored.export_state() == exact_store.export_state()

    def test_explicit_mode_overrides_exported_flag(self, exact_store):
        user_id = exact_store.add_user(["Go", "go"], ["Rust"])

        restored = RecordStore.from_state(exact_store.export_state(), normalize_skills=True)

        assert restored.normalize_skills is True
        assert restored.get_user(user_id).skills == {"Go", "go"}

    def test_from_state_rejects_duplicate_user_ids(self):
        state = {
            "users": [
                {"id": "u1", "skills": ["a"], "wants_to_learn": ["b"]},
                {"id": "u1", "skills": ["c"], "wants_to_learn": ["d"]},
            ]
        }
        with pytest.raises(ValidationError):
            RecordStore.from_state(state)

    def test_from_state_rejects_invalid_records(self):
        state = {"users": [{"id": "u1", "skills": [], "wants_to_learn": ["b"]}]}
        with pytest.raises(ValidationError):
            RecordStore.from_state(state)

    def test_from_state_rejects_malformed_data(self):
        with pytest.raises(ValidationError):
            RecordStore.from_state({"users": [{"id": "u1"}]})


def test_concurrent_adds_issue_unique_ids(store):
    """Parallel registrations never lose a user"""
    ids = []
    lock = threading.Lock()

    def register():
        for _ in range(50):
            user_id = store.add_user(["a"], ["b"])
            with lock:
                ids.append(user_id)

    threads = [threading.Thread(target=register) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(set(ids)) == 400
    assert len(store.get_all_users()) == 400
