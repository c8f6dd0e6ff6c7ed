"""Predicate builder against the fifteen-person demo dataset (in memory)."""

from __future__ import annotations

import logging

import pytest

from person_service.filtering import (
    PERSON_SCHEMA,
    SYSTEM_PARAMS,
    EntitySchema,
    FieldSpec,
    FilterValidationError,
    PredicateBuilder,
    TypeTag,
)
from person_service.specifications import (
    AndSpecification,
    AttributeSpecification,
    MatchAllSpecification,
)

ALL_IDS = set(range(1, 16))


def matching_ids(builder, persons, params) -> set[int]:
    spec = builder.build(params)
    return {p.id for p in persons if spec.is_satisfied_by(p)}


class TestSingleFilters:
    @pytest.mark.parametrize(
        ("params", "expected"),
        [
            ({"hairColor": "brown"}, {1, 6, 10, 14}),
            ({"hairColor[ne]": "BROWN"}, ALL_IDS - {1, 6, 10, 14}),
            ({"nationality[eq]": "thailand"}, {4, 9, 14}),
            ({"weight[gte]": "70"}, {1, 3, 6, 10, 12, 13}),
            ({"weight[lt]": "55"}, {8, 14}),
            ({"height[gt]": "175"}, {1, 6, 12, 13, 15}),
            ({"height[lte]": "160"}, {5, 8, 14}),
            ({"id": "7"}, {7}),
            ({"coordinates.y": "626"}, {9}),
            ({"location.z[gt]": "45"}, {4, 11}),
            ({"creationDate[gte]": "2024-04-01T00:00:00"}, {11, 12, 13, 14, 15}),
            ({"name": "Raj Patel"}, {3}),
            ({"name[gt]": "S"}, {4, 11, 14}),
        ],
    )
    def test_operator(self, builder, persons, params, expected) -> None:
        assert matching_ids(builder, persons, params) == expected

    def test_ne_excludes_null(self, builder, persons) -> None:
        # 4 and 10 have no height
        assert matching_ids(builder, persons, {"height[ne]": "180"}) == ALL_IDS - {
            1,
            4,
            10,
        }


class TestLike:
    def test_string_is_case_insensitive(self, builder, persons) -> None:
        assert matching_ids(builder, persons, {"name[like]": "SMITH"}) == {1}
        assert matching_ids(builder, persons, {"name[like]": "smith"}) == {1}

    def test_embedded_string(self, builder, persons) -> None:
        assert matching_ids(builder, persons, {"location.name[like]": "office"}) == {
            1,
            9,
            14,
        }

    def test_enum_matches_upper_cased_value(self, builder, persons) -> None:
        assert matching_ids(builder, persons, {"hairColor[like]": "own"}) == {
            1,
            6,
            10,
            14,
        }
        assert matching_ids(builder, persons, {"nationality[like]": "south"}) == {
            5,
            10,
            15,
        }

    def test_number_rendered_as_text(self, builder, persons) -> None:
        assert matching_ids(builder, persons, {"weight[like]": ".5"}) == {1, 10}

    def test_leaf_shapes(self, builder) -> None:
        spec = builder.build({"hairColor[like]": "own"})
        assert isinstance(spec, AttributeSpecification)
        assert spec.to_dict() == {
            "op": "icontains",
            "attr": "hair_color",
            "val": "OWN",
            "as_text": True,
        }
        spec = builder.build({"name[like]": "an"})
        assert spec.to_dict() == {"op": "icontains", "attr": "name", "val": "an"}


class TestEnumOrdinal:
    def test_less_than_member(self, builder, persons) -> None:
        # GREEN(0), BLUE(1) come before ORANGE(2)
        assert matching_ids(builder, persons, {"hairColor[lt]": "ORANGE"}) == {
            3,
            4,
            7,
            8,
            11,
            12,
            15,
        }

    def test_less_than_integer(self, builder, persons) -> None:
        assert matching_ids(builder, persons, {"hairColor[lt]": "1"}) == {3, 7, 11, 15}

    def test_nationality_before_india(self, builder, persons) -> None:
        matched = matching_ids(builder, persons, {"nationality[lt]": "INDIA"})
        assert matched == {1, 2, 6, 7, 11, 12}
        assert {persons[i - 1].nationality.name for i in matched} == {"FRANCE", "SPAIN"}

    def test_gte_last_member(self, builder, persons) -> None:
        assert matching_ids(builder, persons, {"nationality[gte]": "south_korea"}) == {
            5,
            10,
            15,
        }

    def test_invalid_member_is_dropped(self, builder, persons) -> None:
        assert matching_ids(builder, persons, {"hairColor[lt]": "PURPLE"}) == ALL_IDS


class TestComposition:
    def test_and_of_filters(self, builder, persons) -> None:
        params = {"coordinates.x[gte]": "0", "coordinates.x[lte]": "100"}
        assert matching_ids(builder, persons, params) == {1, 3, 8, 10, 14}
        assert isinstance(builder.build(params), AndSpecification)

    def test_mixed_types(self, builder, persons) -> None:
        params = {"hairColor": "orange", "weight[gt]": "60", "nationality[ne]": "INDIA"}
        assert matching_ids(builder, persons, params) == {2, 9}

    def test_single_filter_is_not_wrapped(self, builder) -> None:
        assert isinstance(builder.build({"id": "1"}), AttributeSpecification)


class TestSoftFail:
    def test_empty_params_match_all(self, builder) -> None:
        assert isinstance(builder.build({}), MatchAllSpecification)

    def test_system_params_are_ignored(self, builder) -> None:
        params = {"page": "1", "size": "2", "sortBy": "name", "sortDirection": "desc"}
        assert set(params) == SYSTEM_PARAMS
        assert isinstance(builder.build(params), MatchAllSpecification)

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_values_are_skipped(self, builder, value) -> None:
        assert isinstance(builder.build({"name": value}), MatchAllSpecification)

    def test_unknown_field(self, builder, persons, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            assert matching_ids(builder, persons, {"unknownField": "x"}) == ALL_IDS
        assert "unknownField" in caplog.text

    def test_unknown_operator_drops_filter(self, builder, persons) -> None:
        assert matching_ids(builder, persons, {"weight[xyz]": "50"}) == ALL_IDS

    def test_number_format(self, builder, persons) -> None:
        assert matching_ids(builder, persons, {"weight[gt]": "heavy"}) == ALL_IDS

    def test_bad_filter_does_not_affect_others(self, builder, persons) -> None:
        params = {"weight[gte]": "70", "height[gt]": "tall", "bogus": "1"}
        assert matching_ids(builder, persons, params) == {1, 3, 6, 10, 12, 13}

    def test_invalid_timestamp(self, builder, persons) -> None:
        params = {"creationDate[gt]": "2024-04-01"}
        assert matching_ids(builder, persons, params) == ALL_IDS

    def test_ordering_on_unordered_type(self, registry) -> None:
        schema = EntitySchema(
            name="Flag", fields={"active": FieldSpec(TypeTag.BOOLEAN, "active")}
        )
        builder = PredicateBuilder(schema, registry=registry)
        assert isinstance(builder.build({"active[gt]": "true"}), MatchAllSpecification)
        spec = builder.build({"active": "TRUE"})
        assert spec.is_satisfied_by({"active": True}) is True


class TestStrictMode:
    def test_collects_every_error(self, registry) -> None:
        builder = PredicateBuilder(PERSON_SCHEMA, registry=registry, strict=True)
        with pytest.raises(FilterValidationError) as exc_info:
            builder.build(
                {
                    "weight[gt]": "heavy",
                    "bogus": "1",
                    "weight[xyz]": "1",
                    "hairColor[lt]": "PURPLE",
                    "name": "ok",
                }
            )
        errors = exc_info.value.errors
        assert set(errors) == {"weight[gt]", "bogus", "weight[xyz]", "hairColor[lt]"}
        assert "NUMBER_FORMAT" in errors["weight[gt]"][0]
        assert "not found" in errors["bogus"][0]
        assert "xyz" in errors["weight[xyz]"][0]

    def test_valid_params_pass(self, registry) -> None:
        builder = PredicateBuilder(PERSON_SCHEMA, registry=registry, strict=True)
        assert isinstance(builder.build({"name": "x"}), AttributeSpecification)


def test_build_is_idempotent(builder) -> None:
    params = {"weight[gte]": "60", "hairColor[lt]": "BROWN", "name[like]": "a"}
    assert builder.build(params).to_dict() == builder.build(params).to_dict()


def test_input_mapping_is_not_mutated(builder) -> None:
    params = {"page": "0", "weight": "75.5"}
    builder.build(params)
    assert params == {"page": "0", "weight": "75.5"}
