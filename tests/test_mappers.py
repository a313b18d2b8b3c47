"""Tests for the built-in conversion strategies."""

from decimal import Decimal
from enum import Enum

import pytest

from mapper_profiles import default_mappers
from mapper_profiles.mappers import AssignableMapper
from mapper_profiles.mappers import ConstructorMapper
from mapper_profiles.mappers import EnumMapper
from mapper_profiles.mappers import StringMapper


class Color(Enum):
    RED = 1
    GREEN = 2


class ColorDto(Enum):
    RED = "red"
    BLUE = "blue"


def _first_match(source_type, destination_type):
    return next(m for m in default_mappers() if m.is_match(source_type, destination_type))


class TestDefaultMappers:
    """Test strategy order and selection."""

    def test_order(self):
        assert [type(m) for m in default_mappers()] == [AssignableMapper, EnumMapper, StringMapper, ConstructorMapper]

    def test_fresh_list_each_call(self):
        assert default_mappers() is not default_mappers()

    def test_assignable_wins_over_string(self):
        assert isinstance(_first_match(str, str), AssignableMapper)

    def test_selection(self):
        assert isinstance(_first_match(Color, ColorDto), EnumMapper)
        assert isinstance(_first_match(int, str), StringMapper)
        assert isinstance(_first_match(str, Decimal), ConstructorMapper)


class TestStrategies:
    def test_assignable_passes_value_through(self):
        value = [1, 2]

        assert AssignableMapper().map(value, list) is value

    def test_enum_by_name(self):
        assert EnumMapper().map(Color.RED, ColorDto) is ColorDto.RED

    def test_enum_missing_member(self):
        with pytest.raises(ValueError, match="GREEN"):
            EnumMapper().map(Color.GREEN, ColorDto)

    def test_string(self):
        assert StringMapper().map(12, str) == "12"

    def test_constructor(self):
        assert ConstructorMapper().map("1.5", Decimal) == Decimal("1.5")
        assert not ConstructorMapper().is_match(list, int)

    def test_assignable_rejects_non_class_types(self):
        """Generic aliases and unions never match instead of raising from issubclass()."""
        assert not AssignableMapper().is_match(list[int], list)
        assert not AssignableMapper().is_match(int | None, int)
        assert not AssignableMapper().is_match(int, list[int])
        assert not EnumMapper().is_match(list[int], ColorDto)

    def test_constructor_parses_bool_strings(self):
        mapper = ConstructorMapper()

        assert mapper.map("False", bool) is False
        assert mapper.map("0", bool) is False
        assert mapper.map("", bool) is False
        assert mapper.map(" yes ", bool) is True
        assert mapper.map("TRUE", bool) is True

    def test_constructor_rejects_unknown_bool_string(self):
        with pytest.raises(ValueError, match="maybe"):
            ConstructorMapper().map("maybe", bool)

    def test_constructor_bool_from_number(self):
        assert ConstructorMapper().map(0, bool) is False
        assert ConstructorMapper().map(2, bool) is True
