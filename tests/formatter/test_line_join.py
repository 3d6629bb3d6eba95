"""
Tests for formatter.line_join

Test Coverage:
- is_incomplete_line / starts_with_continuation / starts_new_equation
- join_broken_lines / join_until_stable
"""
from mathtext_toolkit.formatter.line_join import (
    is_incomplete_line,
    join_broken_lines,
    join_until_stable,
    starts_new_equation,
    starts_with_continuation,
)


class TestLinePredicates:
    """Tests for line classification helpers."""

    def test_incomplete_when_operator_opener_or_comma_then_true(self):
        """Lines that cannot end an expression are incomplete."""
        assert is_incomplete_line("x +")
        assert is_incomplete_line("f(x")
        assert is_incomplete_line("a,")
        assert is_incomplete_line("")

    def test_incomplete_when_finished_equation_then_false(self):
        """A closed equation is complete."""
        assert not is_incomplete_line("x = 5")

    def test_continuation_when_closer_or_operator_then_true(self):
        """Leading closers, operators and -x continue the previous line."""
        assert starts_with_continuation(") + 2")
        assert starts_with_continuation("+ 5")
        assert starts_with_continuation("-y")

    def test_continuation_when_bullet_or_negative_number_then_false(self):
        """Bullets and negative numbers start something new."""
        assert not starts_with_continuation("- First point")
        assert not starts_with_continuation("-5 is the answer")

    def test_new_equation_when_equals_early_then_false(self):
        """A wrapped right-hand side is not a new equation."""
        assert not starts_new_equation("5 = 10")
        assert not starts_new_equation("(x) = 2")

    def test_new_equation_when_identifier_and_equals_later_then_true(self):
        """An identifier start with "=" past the prefix is a new equation."""
        assert starts_new_equation("2x + 3 = 7")


class TestJoinBrokenLines:
    """Tests for joining wrapped lines."""

    def test_join_when_trailing_operator_then_joined(self):
        """A line ending in an operator joins its successor; labels stay put."""
        assert join_broken_lines("x +\n5 = 10\n\nLeft Side:\ny") == "x + 5 = 10\n\nLeft Side:\ny"

    def test_join_when_new_equation_follows_then_not_joined(self):
        """Separate equations stay on separate lines."""
        assert join_broken_lines("2x + 3 = 7\n4x = 8") == "2x + 3 = 7\n4x = 8"

    def test_join_when_unbalanced_paren_then_joined(self):
        """An open parenthesis pulls the next line in."""
        assert join_broken_lines("(x + 1\n+ 2) = 5") == "(x + 1 + 2) = 5"

    def test_join_when_bullet_follows_then_not_joined(self):
        """Bullet items are not continuations."""
        assert join_broken_lines("Key points\n- First point") == "Key points\n- First point"

    def test_join_when_leading_minus_variable_then_joined(self):
        """A line starting with -y continues the previous one."""
        assert join_broken_lines("x = 4\n-y") == "x = 4 -y"

    def test_join_until_stable_when_chain_then_single_line(self):
        """Several wrapped lines collapse into one."""
        assert join_until_stable("x +\n2 +\n3 = 5") == "x + 2 + 3 = 5"
