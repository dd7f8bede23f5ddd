"""Tests for the present/absent resolution type."""

from analyzer_ci.resolution import Absent, Present, is_present, map_resolution, then, value_or


class TestResolution:
    def test_present_and_absent_are_distinguished(self):
        assert is_present(Present(1))
        assert not is_present(Absent())

    def test_present_holds_falsy_values(self):
        """A present empty value is still present."""
        assert is_present(Present(None))
        assert is_present(Present(""))

    def test_map_applies_to_present_only(self):
        assert map_resolution(Present(2), lambda v: v * 3) == Present(6)
        absent = Absent("missing")
        assert map_resolution(absent, lambda v: v * 3) is absent

    def test_then_chains_resolutions(self):
        assert then(Present(2), lambda v: Present(v + 1)) == Present(3)
        assert then(Present(2), lambda v: Absent("nope")) == Absent("nope")
        assert then(Absent("first"), lambda v: Present(v)) == Absent("first")

    def test_value_or(self):
        assert value_or(Present("x"), "default") == "x"
        assert value_or(Absent(), "default") == "default"
