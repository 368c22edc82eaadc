import pytest

from ripmail.boundary_stack import BoundaryStack, non_hyphen_length


def test_non_hyphen_length_ignores_hyphens():
    assert non_hyphen_length("--abc") == non_hyphen_length("abc")
    assert non_hyphen_length("-----") == 0


def test_push_pop_order():
    stack = BoundaryStack()
    stack.push("--one")
    stack.push("--two")
    assert len(stack) == 2
    assert stack.top() == "--two"
    assert stack.pop() == "--two"
    assert stack.pop() == "--one"
    assert len(stack) == 0


def test_top_of_empty_is_none():
    assert BoundaryStack().top() is None


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        BoundaryStack().pop()


def test_hold_limit_ignores_extra_pushes():
    stack = BoundaryStack(hold_limit=1)
    stack.push("--first")
    stack.push("--second")
    assert len(stack) == 1
    assert stack.top() == "--first"


@pytest.mark.parametrize("limit", [0, -1, 1024])
def test_invalid_detect_limit(limit):
    with pytest.raises(ValueError):
        BoundaryStack(detect_limit=limit)


def test_negative_hold_limit_rejected():
    with pytest.raises(ValueError):
        BoundaryStack(hold_limit=-1)


def test_clear_empties_stack():
    stack = BoundaryStack()
    stack.push("--a")
    stack.push("--b")
    stack.clear()
    assert len(stack) == 0
    assert stack.is_long_enough(100) is False


def test_is_long_enough_uses_shortest_boundary():
    stack = BoundaryStack()
    assert stack.is_long_enough(10) is False
    stack.push("--longer-boundary")
    stack.push("--short")
    assert stack.is_long_enough(len("--short")) is True
    assert stack.is_long_enough(len("--short") - 1) is False


def test_detect_within_shift_window():
    stack = BoundaryStack()
    assert stack.detect("xx--abc", "--abc") is True
    assert stack.detect("xxxx--abc", "--abc") is False


def test_detect_respects_custom_limit():
    stack = BoundaryStack(detect_limit=1)
    assert stack.detect("--abc", "--abc") is True
    assert stack.detect("x--abc", "--abc") is False


def test_detect_empty_needle_without_empty_boundary():
    assert BoundaryStack().detect("--", "") is False


def test_empty_boundary_matches_double_hyphen():
    stack = BoundaryStack()
    stack.push("")
    assert stack.detect("--\n", "") is True
    assert stack.detect("ab", "") is False
    assert stack.matches("--\n") is True


def test_matches_simple_boundary():
    stack = BoundaryStack()
    stack.push("--outer")
    assert stack.matches("--outer\n") is True
    assert stack.matches("--outer--\n") is True
    assert stack.matches("--outerX\n") is False
    assert stack.matches("plain text line") is False


def test_matches_on_empty_stack_is_false():
    assert BoundaryStack().matches("--outer") is False


def test_matching_outer_drops_inner():
    stack = BoundaryStack()
    stack.push("--outer")
    stack.push("--inner")
    assert stack.matches("--outer--\n") is True
    assert stack.top() == "--outer"
    assert len(stack) == 1


def test_matching_top_keeps_stack():
    stack = BoundaryStack()
    stack.push("--outer")
    stack.push("--inner")
    assert stack.matches("--inner\n") is True
    assert len(stack) == 2
    assert stack.top() == "--inner"


def test_short_line_never_matches():
    stack = BoundaryStack()
    stack.push("--boundary")
    assert stack.matches("--b") is False
    assert len(stack) == 1


def test_long_line_is_cropped_but_still_matches():
    stack = BoundaryStack()
    stack.push("--abc")
    line = "--abc" + "-" * 300
    assert stack.matches(line) is True
    assert stack.top() == "--abc"
    assert len(stack) == 1