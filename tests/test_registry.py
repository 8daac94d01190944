"""Unit tests for UnitRegistry."""

import logging

import pytest

from recipe_book.common.config import DEFAULT_UNITS_PATH
from recipe_book.quantities import (
    CategoryMismatchError,
    ConversionDataError,
    MeasurementCategory,
    UnitRegistry,
    UnknownUnitError,
    get_registry,
)


def _table(**extra_units):
    units = {
        "mL": {"factor": 1.0, "singular": "mL", "plural": "mL"},
        "cup": {"factor": 236.588, "singular": "cup", "plural": "cups", "aliases": ["c"]},
    }
    units.update(extra_units)
    return {"volume": {"base_unit": "mL", "units": units}}


class TestResolve:
    """Test unit token resolution."""

    def test_canonical_token(self, registry):
        unit = registry.resolve("cup")
        assert unit.token == "cup"
        assert unit.category == MeasurementCategory.VOLUME

    def test_case_and_whitespace_insensitive(self, registry):
        assert registry.resolve("  CUP ") is registry.resolve("cup")
        assert registry.resolve("Tbsp") is registry.resolve("tbsp")

    def test_plural_forms(self, registry):
        """Plurals resolve through the singular form."""
        assert registry.resolve("cups").token == "cup"
        assert registry.resolve("Teaspoons").token == "tsp"
        assert registry.resolve("lbs").token == "lb"
        assert registry.resolve("minutes").token == "min"
        assert registry.resolve("fluid ounces").token == "fl oz"

    def test_irregular_plurals_registered_as_aliases(self, registry):
        assert registry.resolve("pinches").token == "pinch"
        assert registry.resolve("dashes").token == "dash"

    def test_alias_ending_in_s_without_registered_stem(self, registry):
        assert registry.resolve("tbs").token == "tbsp"

    def test_internal_whitespace_collapsed(self, registry):
        assert registry.resolve("fl    oz").token == "fl oz"

    def test_mass_ounce_distinct_from_fluid_ounce(self, registry):
        assert registry.resolve("oz").category == MeasurementCategory.MASS
        assert registry.resolve("fl oz").category == MeasurementCategory.VOLUME

    def test_every_alias_resolves_to_its_unit(self, registry):
        """Aliases of a unit resolve identically regardless of case or plural s."""
        for unit in registry.units.values():
            for alias in unit.aliases:
                assert registry.resolve(alias) is unit
                assert registry.resolve(alias.upper()) is unit
                assert registry.resolve(alias + "s") is unit

    def test_aliases_globally_unique(self, registry):
        seen = {}
        for unit in registry.units.values():
            for alias in unit.aliases:
                assert alias not in seen, f"{alias} shared by {seen.get(alias)} and {unit.token}"
                seen[alias] = unit.token

    @pytest.mark.parametrize("token", ["bogus", "cupz", "", "   ", "s"])
    def test_unknown_unit(self, registry, token):
        with pytest.raises(UnknownUnitError, match="not in registry") as exc_info:
            registry.resolve(token)
        assert exc_info.value.token == token

    def test_no_fuzzy_matching(self, registry):
        with pytest.raises(UnknownUnitError):
            registry.resolve("tablespon")

    @pytest.mark.parametrize("token", [5, 1.5, ["cup"]])
    def test_non_string_token(self, registry, token):
        with pytest.raises(UnknownUnitError) as exc_info:
            registry.resolve(token)
        assert exc_info.value.token == str(token)


class TestBaseUnits:
    """Test base unit lookups."""

    def test_get_base_unit(self, registry):
        assert registry.get_base_unit("volume").token == "mL"
        assert registry.get_base_unit(MeasurementCategory.MASS).token == "g"
        assert registry.get_base_unit("count").token == "whole"
        assert registry.get_base_unit("time").token == "min"

    def test_base_units_have_unit_factor(self, registry):
        for base in registry.base_units.values():
            assert base.factor == 1.0

    def test_get_base_unit_unknown_category(self, registry):
        with pytest.raises(UnknownUnitError, match="Category .* not in registry"):
            registry.get_base_unit("temperature")


class TestConversionFactors:
    """Test conversion factor retrieval."""

    def test_same_category(self, registry):
        assert registry.get_conversion_factor("cup", "tbsp") == pytest.approx(16.0, rel=1e-4)
        assert registry.get_conversion_factor("kg", "g") == 1000.0

    def test_identity(self, registry):
        assert registry.get_conversion_factor("tsp", "teaspoons") == 1.0

    def test_reverse(self, registry):
        assert registry.get_conversion_factor("g", "kg") == 0.001

    def test_different_categories(self, registry):
        with pytest.raises(CategoryMismatchError, match="Cannot convert between different categories"):
            registry.get_conversion_factor("cup", "g")

    def test_unknown_unit(self, registry):
        with pytest.raises(UnknownUnitError):
            registry.get_conversion_factor("xyz", "cup")

    def test_validate_conversion(self, registry):
        assert registry.validate_conversion("cup", "mL") is True
        assert registry.validate_conversion("hr", "min") is True
        assert registry.validate_conversion("cup", "lb") is False
        assert registry.validate_conversion("xyz", "mL") is False


class TestSupportedUnits:
    """Test supported unit listings."""

    def test_all_categories(self, registry):
        units = registry.get_supported_units()
        assert set(units) == {"volume", "mass", "count", "time"}
        assert units["volume"][0] == "mL"
        assert "cup" in units["volume"]
        assert "lb" in units["mass"]
        assert "dozen" in units["count"]

    def test_single_category(self, registry):
        units = registry.get_supported_units(MeasurementCategory.MASS)
        assert list(units) == ["mass"]
        assert units["mass"][0] == "g"

    def test_unknown_category(self, registry):
        assert registry.get_supported_units("unknown") == {}


class TestUnitTableValidation:
    """Test rejection of malformed unit tables."""

    def test_valid_table(self, write_units):
        registry = UnitRegistry(write_units(_table()))
        assert registry.resolve("C").token == "cup"

    def test_alias_claimed_twice(self, write_units):
        path = write_units(_table(pint={"factor": 473.176, "aliases": ["c"]}))
        with pytest.raises(ConversionDataError, match="claimed by both"):
            UnitRegistry(path)

    def test_plural_alias_shadows_other_unit(self, write_units):
        path = write_units(_table(pint={"factor": 473.176, "aliases": ["cs"]}))
        with pytest.raises(ConversionDataError, match="singular form"):
            UnitRegistry(path)

    def test_unknown_category(self, write_units):
        data = _table()
        data["temperature"] = data.pop("volume")
        with pytest.raises(ConversionDataError, match="Unknown measurement category"):
            UnitRegistry(write_units(data))

    def test_missing_base_unit(self, write_units):
        data = _table()
        data["volume"]["base_unit"] = "L"
        with pytest.raises(ConversionDataError, match="is not defined"):
            UnitRegistry(write_units(data))

    def test_base_unit_factor_must_be_one(self, write_units):
        data = _table()
        data["volume"]["units"]["mL"]["factor"] = 2.0
        with pytest.raises(ConversionDataError, match="must have factor 1"):
            UnitRegistry(write_units(data))

    def test_non_positive_factor(self, write_units):
        with pytest.raises(ConversionDataError, match="must be positive"):
            UnitRegistry(write_units(_table(drop={"factor": 0})))

    def test_unit_defined_in_two_categories(self, write_units):
        data = _table()
        data["mass"] = {"base_unit": "cup", "units": {"cup": {"factor": 1.0}}}
        with pytest.raises(ConversionDataError, match="defined more than once"):
            UnitRegistry(write_units(data))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConversionDataError, match="Cannot read unit table"):
            UnitRegistry(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "units.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConversionDataError, match="Cannot read unit table"):
            UnitRegistry(path)

    def test_display_forms_default_to_token(self, write_units):
        registry = UnitRegistry(write_units(_table()))
        unit = registry.resolve("mL")
        assert unit.singular == "mL"
        assert unit.plural == "mL"

    def test_logs_loaded_units(self, write_units, caplog):
        with caplog.at_level(logging.INFO, logger="recipe_book.quantities.registry"):
            UnitRegistry(write_units(_table()))
        assert "Loaded 2 units in 1 categories" in caplog.text


class TestProcessRegistry:
    """Test the process-wide registry."""

    def test_cached(self):
        assert get_registry() is get_registry()

    def test_same_table_same_instance(self):
        assert get_registry(DEFAULT_UNITS_PATH) is get_registry(str(DEFAULT_UNITS_PATH))
