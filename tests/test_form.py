"""Tests for FormSession."""

from schemamold.form import FormSession


class TestFormSession:
    """Test the edit, validate, submit loop."""

    def test_initial_errors(self, person_schema):
        """Test that a new session is validated immediately."""
        session = FormSession(person_schema)

        assert session.value == {}
        assert session.errors_for(["name"]) == ["This field is required."]
        assert not session.can_submit

    def test_change_revalidates(self, person_schema):
        """Test that edits produce a new session with fresh errors."""
        session = FormSession(person_schema)
        updated = session.change(["name"], "Ann").change(["age"], 30)

        assert updated.value == {"name": "Ann", "age": 30}
        assert updated.can_submit
        assert session.value == {}
        assert not session.can_submit

    def test_nested_change(self, person_schema):
        """Test writes that create intermediate containers."""
        session = FormSession(person_schema).change(["favorites", "foods", 1], "pie")

        assert session.value == {"favorites": {"foods": [None, "pie"]}}

    def test_add_and_remove_items(self, person_schema):
        """Test array item helpers."""
        session = FormSession(person_schema, {"name": "Ann", "age": 3})
        session = session.add_item(["favorites", "foods"])
        session = session.change(["favorites", "foods", 0], "soup")
        session = session.add_item(["favorites", "foods"])

        assert session.value["favorites"]["foods"] == ["soup", None]

        session = session.remove_item(["favorites", "foods"], 0)
        assert session.value["favorites"]["foods"] == [None]

        session = session.remove_item(["favorites", "foods"], 5)
        assert session.value["favorites"]["foods"] == [None]

    def test_submit_only_when_valid(self, person_schema):
        """Test that the callback is called only for valid values."""
        submitted = []

        invalid = FormSession(person_schema, {"name": ""})
        assert invalid.submit(submitted.append) is False
        assert submitted == []

        valid = invalid.change(["name"], "Ann").change(["age"], 40)
        assert valid.submit(submitted.append) is True
        assert submitted == [{"name": "Ann", "age": 40}]

    def test_errors_for_exact_path_only(self, person_schema):
        """Test that lookups do not include descendants."""
        session = FormSession(person_schema, {"name": "A", "age": -1})

        assert session.errors_for(["age"]) == ["Must be at least 0."]
        assert session.errors_for([]) == []
