#
# Embcon - Utils Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from embcon.utils import class_name, ctor_prefix


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class Outer:
    class Inner:
        pass


class Masked:
    """Lies about its class."""

    @property
    def __class__(self):
        return int


# Tests ----------------------------------------------------------------------------------------------------------------

class TestClassName:
    @pytest.mark.parametrize(
        ("obj", "fully_qualified", "expected"),
        [
            pytest.param(10, False, "int", id="instance"),
            pytest.param(int, False, "int", id="class"),
            pytest.param(10, True, "int", id="builtin_fq"),
            pytest.param(Outer.Inner(), False, "Inner", id="nested"),
            pytest.param(Outer.Inner, True, f"{__name__}.Outer.Inner", id="nested_fq"),
            pytest.param(type, False, "type", id="metaclass"),
        ],
    )
    def test_class_name(self, obj, fully_qualified, expected):
        assert class_name(obj, fully_qualified=fully_qualified) == expected

    def test_ignores_class_override(self):
        """Name the real type, not the one claimed by __class__."""
        assert class_name(Masked()) == "Masked"


class TestCtorPrefix:
    @pytest.mark.parametrize(
        ("obj", "expected"),
        [
            pytest.param({}, "", id="dict"),
            pytest.param([], "", id="list"),
            pytest.param((), "tuple", id="tuple"),
            pytest.param(collections.OrderedDict(), "OrderedDict", id="ordered_dict"),
            pytest.param(Outer(), "Outer", id="instance"),
        ],
    )
    def test_ctor_prefix(self, obj, expected):
        """Plain dicts and lists carry no constructor prefix."""
        assert ctor_prefix(obj) == expected
