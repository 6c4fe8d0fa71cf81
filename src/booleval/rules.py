"""Named boolean rules stored as YAML data.

A rule file maps rule names to expressions:

    rules:
      is_adult: "age >= 18"
      beta_user:
        expression: "plan == 'beta' && enabled"
        description: Beta feature flag

Usage:
    rule_set = RuleSetLoader().load_dir(Path("rules"))
    rule_set.evaluate("is_adult", {"age": 21})
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from booleval.evaluation import detect_identifiers, evaluate
from booleval.expressions.errors import MalformedExpression

logger = logging.getLogger(__name__)


class RuleSetError(Exception):
    """A rule file is not shaped like a rule set."""


@dataclass(frozen=True)
class Rule:
    """A named expression."""

    name: str
    expression: str
    description: str = ""


@dataclass
class RuleIssue:
    """A problem found while validating a rule set."""

    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.rule}: {self.message}"


@dataclass
class RuleSet:
    """A collection of named rules evaluated through the evaluation facade."""

    rules: dict[str, Rule] = field(default_factory=dict)

    def add(self, rule: Rule) -> None:
        """Add a rule, replacing any rule of the same name."""
        self.rules[rule.name] = rule

    def get(self, name: str) -> Rule:
        """Get a rule by name.

        Raises:
            KeyError: If the rule is not defined
        """
        if name not in self.rules:
            raise KeyError(f"Unknown rule: {name}")
        return self.rules[name]

    def names(self) -> list[str]:
        return list(self.rules)

    def evaluate(self, name: str, parameters: Mapping[str, Any]) -> bool:
        """Evaluate a named rule against a parameter set."""
        return evaluate(self.get(name).expression, parameters)

    def required_parameters(self, name: str) -> tuple[str, ...]:
        """Parameter names the rule's expression references."""
        return detect_identifiers(self.get(name).expression)

    def validate(self) -> list[RuleIssue]:
        """Check every rule parses, returning the problems found."""
        issues: list[RuleIssue] = []
        for rule in self.rules.values():
            try:
                detect_identifiers(rule.expression)
            except MalformedExpression as e:
                issues.append(RuleIssue(rule.name, str(e)))
        return issues

    def __len__(self) -> int:
        return len(self.rules)

    def __contains__(self, name: object) -> bool:
        return name in self.rules


class RuleSetLoader:
    """Loads rule sets from YAML files."""

    def load(self, path: Path, rule_set: RuleSet | None = None) -> RuleSet:
        """Load rules from a single YAML file.

        Args:
            path: The YAML file
            rule_set: Existing rule set to add to; a new one is created if omitted

        Raises:
            RuleSetError: If the document has no rules mapping or a rule is malformed
        """
        rule_set = rule_set if rule_set is not None else RuleSet()

        with open(path) as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or not isinstance(data.get("rules"), dict):
            raise RuleSetError(f"{path}: expected a top-level 'rules' mapping")

        for name, entry in data["rules"].items():
            rule_set.add(self._parse_rule(path, str(name), entry))

        logger.debug("Loaded %d rule(s) from %s", len(data["rules"]), path)
        return rule_set

    def load_dir(self, directory: Path) -> RuleSet:
        """Load every *.yaml file in a directory, in name order.

        Rules in later files replace same-named rules from earlier ones.
        """
        rule_set = RuleSet()
        if not directory.exists():
            return rule_set

        for yaml_file in sorted(directory.glob("*.yaml")):
            self.load(yaml_file, rule_set)
        return rule_set

    def _parse_rule(self, path: Path, name: str, entry: Any) -> Rule:
        if isinstance(entry, str):
            return Rule(name=name, expression=entry)

        if isinstance(entry, dict) and isinstance(entry.get("expression"), str):
            description = entry.get("description")
            if description is None:
                description = ""
            if not isinstance(description, str):
                raise RuleSetError(
                    f"{path}: rule '{name}' description must be a string"
                )
            return Rule(name=name, expression=entry["expression"], description=description)

        raise RuleSetError(
            f"{path}: rule '{name}' must be a string or a mapping with 'expression'"
        )
