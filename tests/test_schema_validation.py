"""Comprehensive tests for schema validation module."""

import logging
import math

from schemamold.paths import ABSENT
from schemamold.schema.core import (
    ArrayField,
    BooleanField,
    EnumField,
    EnumOption,
    NumberField,
    ObjectField,
    StringField,
)
from schemamold.schema.validation import (
    SchemaValidator,
    format_errors,
    is_empty,
    is_valid,
    messages_for,
    to_display_string,
    validate_field,
)


class TestRequired:
    """Test required field handling."""

    def test_required_empty_string(self):
        """Test that an empty required string yields a single root error."""
        errors = validate_field(StringField(required=True), "")
        assert errors == {"/": ["This field is required."]}

    def test_required_absent(self):
        """Test that an absent required value yields a single root error."""
        assert validate_field(StringField(required=True), ABSENT) == {"/": ["This field is required."]}
        assert validate_field(StringField(required=True)) == {"/": ["This field is required."]}

    def test_required_null(self):
        """Test that null counts as empty."""
        assert validate_field(NumberField(required=True, min=5), None) == {"/": ["This field is required."]}

    def test_required_empty_array(self):
        """Test that an empty array counts as empty and length checks still run."""
        field = ArrayField(required=True, min_items=1, items=StringField())
        errors = validate_field(field, [])
        assert errors == {"/": ["This field is required.", "At least 1 items."]}

    def test_empty_object_is_not_empty(self):
        """Test that an empty object satisfies required."""
        field = ObjectField(required=True, properties={})
        assert validate_field(field, {}) == {}

    def test_required_string_with_min_length(self):
        """Test that required and length messages can accumulate on one key."""
        field = StringField(required=True, min_length=2)
        assert validate_field(field, "") == {"/": ["This field is required.", "Must be at least 2 characters."]}

    def test_optional_absent_has_no_errors(self):
        """Test that optional absent values pass."""
        assert validate_field(StringField(min_length=3)) == {}

    def test_is_empty(self):
        """Test the emptiness rule directly."""
        assert is_empty(ABSENT)
        assert is_empty(None)
        assert is_empty("")
        assert is_empty([])
        assert not is_empty({})
        assert not is_empty(0)
        assert not is_empty(False)


class TestStringValidation:
    """Test string length and pattern checks."""

    def test_min_and_max_length(self):
        """Test length bounds messages."""
        field = StringField(min_length=3, max_length=5)

        assert validate_field(field, "ab", ["user", "name"]) == {
            "/user/name": ["Must be at least 3 characters."]
        }
        assert validate_field(field, "abcdef") == {"/": ["Must be at most 5 characters."]}
        assert validate_field(field, "abcd") == {}

    def test_pattern_is_unanchored(self):
        """Test that the pattern may match anywhere."""
        field = StringField(pattern="[0-9]+")

        assert validate_field(field, "abc123") == {}
        assert validate_field(field, "abc") == {"/": ["Invalid format."]}

    def test_anchored_pattern(self):
        """Test that anchors in the pattern are honoured."""
        field = StringField(pattern="^[a-z]+$")
        assert validate_field(field, "abc1") == {"/": ["Invalid format."]}

    def test_non_string_values_are_coerced(self):
        """Test that numbers and booleans are checked as their text form."""
        assert validate_field(StringField(max_length=2), 12345) == {"/": ["Must be at most 2 characters."]}
        assert validate_field(StringField(pattern="^true$"), True) == {}

    def test_malformed_pattern_never_matches(self, caplog):
        """Test the fallback for patterns that do not compile."""
        field = StringField(pattern="([unclosed")

        with caplog.at_level(logging.WARNING, logger="schemamold.schema.validation"):
            errors = validate_field(field, "anything")

        assert errors == {"/": ["Invalid format."]}

    def test_empty_string_still_checked_against_pattern(self):
        """Test that '' is still checked when present (only null/absent skip checks)."""
        assert validate_field(StringField(pattern="x"), "") == {"/": ["Invalid format."]}


class TestNumberValidation:
    """Test number checks."""

    def test_range(self):
        """Test min and max messages."""
        field = NumberField(min=0, max=150)

        assert validate_field(field, 30) == {}
        assert validate_field(field, -1) == {"/": ["Must be at least 0."]}
        assert validate_field(field, 151) == {"/": ["Must be at most 150."]}

    def test_inverted_bounds_fire_independently(self):
        """Test that min and max are not mutually exclusive."""
        errors = validate_field(NumberField(min=10, max=5), 7)
        assert errors == {"/": ["Must be at least 10.", "Must be at most 5."]}

    def test_non_numeric_only_reports_type(self):
        """Test that non-numbers get the type message and no range message."""
        field = NumberField(min=0, max=10)

        assert validate_field(field, "5") == {"/": ["Must be a number."]}
        assert validate_field(field, True) == {"/": ["Must be a number."]}
        assert validate_field(field, [1]) == {"/": ["Must be a number."]}
        assert validate_field(field, math.nan) == {"/": ["Must be a number."]}

    def test_float_bounds_formatting(self):
        """Test that integral float bounds print without a decimal part."""
        assert validate_field(NumberField(min=10.0), 1) == {"/": ["Must be at least 10."]}
        assert validate_field(NumberField(max=0.5), 1) == {"/": ["Must be at most 0.5."]}

    def test_step_is_not_validated(self):
        """Test that step is only a rendering hint."""
        assert validate_field(NumberField(step=5), 3) == {}


class TestEnumValidation:
    """Test enum membership."""

    def test_membership(self):
        """Test valid and invalid choices."""
        field = EnumField(options=[EnumOption("red", "Red"), EnumOption("blue")])

        assert validate_field(field, "red") == {}
        assert validate_field(field, "green") == {"/": ["Invalid choice."]}

    def test_value_is_coerced_to_string(self):
        """Test that numeric values are compared as text."""
        field = EnumField(options=[EnumOption("1"), EnumOption("2")])
        assert validate_field(field, 1) == {}
        assert validate_field(field, 3) == {"/": ["Invalid choice."]}

    def test_duplicate_options(self):
        """Test that duplicates do not matter for membership."""
        field = EnumField(options=[EnumOption("a"), EnumOption("a", "Again")])
        assert validate_field(field, "a") == {}


class TestBooleanValidation:
    """Test boolean fields."""

    def test_no_extra_checks(self):
        """Test that any present value passes."""
        assert validate_field(BooleanField(), "not a bool") == {}
        assert validate_field(BooleanField(required=True), False) == {}


class TestObjectValidation:
    """Test object recursion."""

    def test_valid_object_passes(self):
        """Test a valid person document."""
        schema = ObjectField(
            properties={
                "name": StringField(required=True, min_length=1),
                "age": NumberField(min=0, max=150),
            }
        )
        errors = validate_field(schema, {"name": "John", "age": 30})

        assert errors == {}
        assert is_valid(errors)

    def test_child_errors_are_path_keyed(self):
        """Test nested property errors."""
        schema = ObjectField(
            properties={
                "name": StringField(required=True),
                "age": NumberField(min=0),
            }
        )
        errors = validate_field(schema, {"age": -5}, ["profile"])

        assert errors == {
            "/profile/name": ["This field is required."],
            "/profile/age": ["Must be at least 0."],
        }

    def test_non_object_value_is_not_descended(self):
        """Test that arrays and scalars under an object field produce no child errors."""
        schema = ObjectField(properties={"name": StringField(required=True)})

        assert validate_field(schema, ["x"]) == {}
        assert validate_field(schema, "x") == {}

    def test_unknown_properties_are_ignored(self):
        """Test that extra keys in the value are not errors."""
        schema = ObjectField(properties={"a": StringField()})
        assert validate_field(schema, {"a": "x", "b": 1}) == {}

    def test_order_controls_traversal(self):
        """Test that declared order drives key order, including properties order leaves out."""
        schema = ObjectField(
            order=["b", "missing", "a"],
            properties={
                "a": StringField(required=True),
                "b": StringField(required=True),
                "c": StringField(required=True),
            },
        )
        errors = validate_field(schema, {})

        assert list(errors) == ["/b", "/a", "/c"]

    def test_sibling_errors_all_reported(self):
        """Test that one invalid child does not stop the others."""
        schema = ObjectField(
            properties={
                "a": NumberField(),
                "b": NumberField(),
                "c": EnumField(options=[EnumOption("x")]),
            }
        )
        errors = validate_field(schema, {"a": "1", "b": "2", "c": "y"})

        assert set(errors) == {"/a", "/b", "/c"}


class TestArrayValidation:
    """Test array checks and recursion."""

    def test_nested_array_errors_are_path_addressed(self):
        """Test that only the failing element gets an error."""
        field = ArrayField(items=StringField(required=True))
        errors = validate_field(field, ["a", ""])

        assert errors == {"/1": ["This field is required."]}
        assert "/0" not in errors
        assert "/" not in errors

    def test_item_bounds(self):
        """Test min and max items."""
        field = ArrayField(min_items=2, max_items=3, items=NumberField())

        assert validate_field(field, [1]) == {"/": ["At least 2 items."]}
        assert validate_field(field, [1, 2, 3, 4]) == {"/": ["At most 3 items."]}
        assert validate_field(field, [1, 2]) == {}

    def test_not_an_array(self):
        """Test that a non-array value stops element recursion."""
        field = ArrayField(min_items=5, items=StringField(required=True))

        assert validate_field(field, "abc") == {"/": ["Must be an array."]}
        assert validate_field(field, {"0": ""}) == {"/": ["Must be an array."]}

    def test_null_elements(self):
        """Test sparse-filled arrays."""
        field = ArrayField(items=StringField(required=True))
        errors = validate_field(field, [None, None, "f"], ["foods"])

        assert errors == {
            "/foods/0": ["This field is required."],
            "/foods/1": ["This field is required."],
        }

    def test_arrays_of_objects(self):
        """Test deep paths through arrays of objects."""
        schema = ObjectField(
            properties={
                "people": ArrayField(
                    items=ObjectField(properties={"name": StringField(required=True)}),
                )
            }
        )
        errors = validate_field(schema, {"people": [{"name": "a"}, {}]})

        assert errors == {"/people/1/name": ["This field is required."]}


class TestHelpers:
    """Test error-map helpers and the validator class."""

    def test_is_valid(self):
        """Test the validity check."""
        assert is_valid({})
        assert not is_valid({"/user/name": ["This field is required."]})

    def test_messages_for(self):
        """Test exact-path lookups."""
        errors = {"/a": ["x", "y"], "/a/b": ["z"]}

        assert messages_for(errors, ["a"]) == ["x", "y"]
        assert messages_for(errors, ["a", "c"]) == []
        assert messages_for(errors, []) == []

    def test_format_errors(self):
        """Test flattening."""
        assert format_errors({"/a": ["x", "y"], "/": ["z"]}) == ["/a: x", "/a: y", "/: z"]

    def test_schema_validator(self, person_schema):
        """Test validating whole documents."""
        validator = SchemaValidator(person_schema)

        assert validator.is_valid({"name": "Ann", "age": 3})
        assert validator.validate({}) == {
            "/name": ["This field is required."],
            "/age": ["This field is required."],
        }

    def test_validation_is_deterministic(self, person_schema):
        """Test that repeated validation gives identical maps."""
        value = {"name": "", "age": "x", "favorites": {"foods": ["", None]}}

        first = validate_field(person_schema, value)
        second = validate_field(person_schema, value)

        assert first == second
        assert list(first) == list(second)

    def test_inputs_not_mutated(self, person_schema):
        """Test that validation only reads."""
        value = {"name": "", "favorites": {"foods": [None]}}
        validate_field(person_schema, value)
        assert value == {"name": "", "favorites": {"foods": [None]}}

    def test_to_display_string(self):
        """Test text coercion of JSON values."""
        assert to_display_string(True) == "true"
        assert to_display_string(1.0) == "1"
        assert to_display_string(1.5) == "1.5"
        assert to_display_string([1, None, "a"]) == "1,,a"
        assert to_display_string({"a": 1}) == "[object Object]"
