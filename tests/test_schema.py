"""Tests for declaration schemas and the Profile base class."""

import pytest

from mapper_profiles import AdvancedConfiguration
from mapper_profiles import Ignore
from mapper_profiles import MapFrom
from mapper_profiles import MappingDeclaration
from mapper_profiles import MemberOverrideRule
from mapper_profiles import NullSubstitute
from mapper_profiles import Profile
from mapper_profiles import SourceMember
from mapper_profiles import UseExistingValue


class Order:
    pass


class OrderDto:
    pass


class OrderProfile(Profile):
    def configure(self):
        self.create_map(Order, OrderDto).ignore("notes").with_reverse_map()


class TestMappingDeclaration:
    """Test fluent declaration building."""

    def test_for_member_appends_in_order(self):
        declaration = MappingDeclaration(source_type=Order, destination_type=OrderDto)

        declaration.ignore("notes").for_member("total", SourceMember(name="amount"))

        assert [rule.member for rule in declaration.member_rules] == ["notes", "total"]

    def test_for_member_replaces_in_place(self):
        """A later effect replaces the earlier one and keeps the member's position."""
        declaration = MappingDeclaration(source_type=Order, destination_type=OrderDto)
        declaration.ignore("notes").ignore("total")

        declaration.for_member("notes", SourceMember(name="remarks"))

        assert declaration.member_rules == [
            MemberOverrideRule(member="notes", source=SourceMember(name="remarks")),
            MemberOverrideRule(member="total", source=Ignore()),
        ]

    def test_for_member_combines_aspects(self):
        """Source, null substitute and use-existing settings of a member are kept together."""
        declaration = MappingDeclaration(source_type=Order, destination_type=OrderDto)

        declaration.for_member("notes", SourceMember(name="remarks"))
        declaration.for_member("notes", NullSubstitute(value=""))
        declaration.for_member("notes", UseExistingValue())

        (rule,) = declaration.member_rules
        assert rule.source_member == "remarks"
        assert rule.null_substitute == NullSubstitute(value="")
        assert rule.use_existing_value == UseExistingValue()
        assert not rule.ignored

    def test_for_member_replaces_only_same_aspect(self):
        declaration = MappingDeclaration(source_type=Order, destination_type=OrderDto)
        declaration.for_member("notes", NullSubstitute(value="n/a")).ignore("notes")

        declaration.for_member("notes", MapFrom(resolver=str))

        (rule,) = declaration.member_rules
        assert rule.resolver is str
        assert rule.null_substitute == NullSubstitute(value="n/a")

    def test_for_member_rejects_non_effects(self):
        declaration = MappingDeclaration(source_type=Order, destination_type=OrderDto)

        with pytest.raises(TypeError):
            declaration.for_member("notes", "ignore")

    def test_blanket_settings(self):
        converter = str
        declaration = (
            MappingDeclaration(source_type=Order, destination_type=OrderDto)
            .with_max_depth(2)
            .with_service_locator_construction()
            .with_include_all_derived()
            .convert_using(converter)
        )

        assert declaration.max_depth == 2
        assert declaration.construct_using_service_locator
        assert declaration.include_all_derived
        assert declaration.type_converter is converter
        assert not declaration.reverse_map

    def test_max_depth_must_be_positive(self):
        declaration = MappingDeclaration(source_type=Order, destination_type=OrderDto)

        with pytest.raises(ValueError):
            declaration.with_max_depth(0)

    def test_types_required(self):
        with pytest.raises(ValueError):
            MappingDeclaration(source_type="Order", destination_type=OrderDto)

    def test_effects_are_frozen(self):
        effect = SourceMember(name="x")

        with pytest.raises(ValueError):
            effect.name = "y"

    def test_map_from_requires_callable(self):
        with pytest.raises(ValueError):
            MapFrom(resolver="not callable")


class TestMemberOverrideRule:
    """Test member rules built from raw data."""

    def test_source_selected_by_kind(self):
        rule = MemberOverrideRule(member="notes", source={"kind": "source_member", "name": "remarks"})

        assert rule.source == SourceMember(name="remarks")
        assert rule.source_member == "remarks"

    def test_ignore_selected_by_kind(self):
        rule = MemberOverrideRule.model_validate({"member": "notes", "source": {"kind": "ignore"}})

        assert rule.ignored

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            MemberOverrideRule(member="notes", source={"kind": "rename", "name": "remarks"})

    def test_non_source_effect_rejected_as_source(self):
        with pytest.raises(ValueError):
            MemberOverrideRule(member="notes", source={"kind": "null_substitute", "value": 0})

    def test_empty_rule(self):
        rule = MemberOverrideRule(member="notes")

        assert rule.source is None
        assert not rule.ignored
        assert rule.source_member is None
        assert rule.resolver is None


class TestProfile:
    """Test the Profile base class."""

    def test_default_name_is_qualified_class_name(self):
        assert OrderProfile().name == f"{__name__}.OrderProfile"

    def test_configure_runs_on_construction(self):
        profile = OrderProfile()

        (declaration,) = profile.declarations
        assert declaration.reverse_map
        assert declaration.rule_for("notes").ignored

    def test_configure_callable(self):
        profile = Profile("inline", lambda p: p.create_map(Order, OrderDto))

        assert profile.name == "inline"
        assert profile.declarations[0].source_type is Order

    def test_equality(self):
        assert OrderProfile() == OrderProfile()
        assert OrderProfile() != Profile(f"{__name__}.OrderProfile")
        assert Profile("a") != Profile("b")


class TestAdvancedConfiguration:
    def test_defaults(self):
        advanced = AdvancedConfiguration()

        assert not advanced.skip_uninspectable_types
        assert advanced.max_execution_plan_depth == 1
        assert advanced.before_seal == []

    def test_extra_settings_kept(self):
        advanced = AdvancedConfiguration(compiler_cache_size=128)

        assert advanced.compiler_cache_size == 128
