"""Unit tests for composite path rules."""

import pytest

from tokentree.path_rules.base_rules import BasePathRules
from tokentree.path_rules.composite_rules import CompositePathRules
from tokentree.path_rules.git_rules import GitIgnorePathRules
from tokentree.path_rules.regex_rules import RegexPathRules


class MockPathRules(BasePathRules):
    """Mock path rules for testing."""

    def __init__(self, matching_paths=None, has_rules_result=True):
        self.matching_paths = matching_paths or []
        self.has_rules_result = has_rules_result
        self.calls = []

    def matches(self, path: str) -> bool:
        self.calls.append(path)
        return path in self.matching_paths

    def has_rules(self) -> bool:
        return self.has_rules_result


class TestCompositePathRules:
    """Test the CompositePathRules class."""

    def test_init_requires_rules(self):
        with pytest.raises(ValueError, match="At least one path rule"):
            CompositePathRules([])

    def test_init_rejects_non_rules(self):
        with pytest.raises(TypeError, match="index 1"):
            CompositePathRules([MockPathRules(), "*.py"])

    def test_matches_if_any_rule_matches(self):
        composite = CompositePathRules([MockPathRules(["/a"]), MockPathRules(["/b"])])
        assert composite.matches("/a")
        assert composite.matches("/b")
        assert not composite.matches("/c")

    def test_short_circuits(self):
        first = MockPathRules(["/a"])
        second = MockPathRules()
        CompositePathRules([first, second]).matches("/a")
        assert first.calls == ["/a"]
        assert second.calls == []

    def test_has_rules(self):
        assert not CompositePathRules([MockPathRules(has_rules_result=False)]).has_rules()
        assert CompositePathRules(
            [MockPathRules(has_rules_result=False), MockPathRules(has_rules_result=True)]
        ).has_rules()

    def test_add_rule_object(self):
        composite = CompositePathRules([MockPathRules()])
        composite.add_rule_object(MockPathRules(["/x"]))
        assert len(composite.get_rules()) == 2
        assert composite.matches("/x")
        with pytest.raises(TypeError):
            composite.add_rule_object(object())

    def test_get_rules_returns_copy(self):
        composite = CompositePathRules([MockPathRules()])
        composite.get_rules().clear()
        assert len(composite.get_rules()) == 1

    def test_combines_git_and_regex_rules(self):
        git_rules = GitIgnorePathRules()
        git_rules.add_rule("*.pyc")
        composite = CompositePathRules([git_rules, RegexPathRules([r"/vendor/"])])
        assert composite.matches("/app/cache/mod.pyc")
        assert composite.matches("/app/vendor/lib.js")
        assert not composite.matches("/app/src/mod.py")
