#
# Embcon - Substitute Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from embcon.inspector import Inspector
from embcon.substitute import Substitution, substitute


# Tests ----------------------------------------------------------------------------------------------------------------

class TestSubstitute:
    @pytest.mark.parametrize(
        "args, head, rest",
        [
            pytest.param(["%s-%d", "x", 5], "x-5", [], id="all_consumed"),
            pytest.param(["%s", "x", 5], "x", [5], id="rest_kept"),
            pytest.param(["%s"], "%s", [], id="no_argument"),
            pytest.param(["%s and %o", "a"], "a and %o", [], id="partial_arguments"),
            pytest.param(["plain text"], "plain text", [], id="no_directives"),
            pytest.param(["", 1], "", [1], id="empty_format"),
            pytest.param(["100%% sure"], "100% sure", [], id="escaped_percent"),
            pytest.param(["%%s", "x"], "%s", ["x"], id="escaped_directive"),
            pytest.param(["50%x"], "50x", [], id="unknown_directive"),
            pytest.param(["50%"], "50", [], id="trailing_percent"),
            pytest.param(["%i", 3.9], "3", [], id="int_directive_truncates"),
            pytest.param(["%d", -3.9], "-3", [], id="int_directive_negative"),
            pytest.param(["%f", 2], "2.0", [], id="float_directive"),
            pytest.param(["%d", "x"], "x", [], id="int_directive_text"),
            pytest.param(["%d", True], "True", [], id="int_directive_bool"),
            pytest.param(["%d", float("nan")], "nan", [], id="int_directive_nan"),
            pytest.param(["%s", 0], "0", [], id="falsy_argument"),
            pytest.param(["%s", ""], "", [], id="empty_string_argument"),
            pytest.param(["%O%o", 1, 2, 3], "12", [3], id="adjacent"),
        ],
    )
    def test_substitution(self, args, head, rest):
        """Substitute directives and keep unconsumed arguments."""
        assert substitute(args) == Substitution(head, rest)

    @pytest.mark.parametrize(
        "args",
        [
            pytest.param([42, "%s"], id="number_first"),
            pytest.param([None], id="none_first"),
            pytest.param([["%s"], "x"], id="list_first"),
        ],
    )
    def test_not_a_format(self, args):
        """Leave arguments alone when the first one is not a string."""
        result = substitute(args)
        assert result.head is None
        assert result.rest == args

    def test_empty(self):
        assert substitute([]) == Substitution(None, [])

    def test_rendered_form(self):
        """Insert the inspected rendering of objects, not their str()."""
        render = Inspector().render
        result = substitute(["got %o", {"a": [1, 2]}], render=render)
        assert result.head == "got ⯈ {a: ⯈ (2) [1, 2]}"

    def test_literal_mapping(self):
        """Map plain text runs and leave substituted values untouched."""
        result = substitute(["<%s>", "x"], render=lambda v: f"[{v}]", literal=str.upper)
        assert result.head == "<[x]>"

    def test_literal_runs(self):
        """Pass each run of format text to literal once."""
        runs = []

        def literal(text):
            runs.append(text)
            return text

        substitute(["a %s b %s c", 1, 2], literal=literal)
        assert runs == ["a ", " b ", " c"]

    def test_input_not_mutated(self):
        args = ["%s", "x", 5]
        substitute(args)
        assert args == ["%s", "x", 5]
