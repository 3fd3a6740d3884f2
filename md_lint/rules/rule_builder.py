"""Declarative rule descriptors: metadata, typed options and executable examples.

A rule is a ``RuleBuilder`` subclass that pairs a text transformation with
its name, description and category, a frozen options dataclass, one option
builder per configurable field and a list of examples. Rules are added to a
``RuleCatalog`` by an explicit ``register`` call.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from typing import Any, Generic, Mapping, Optional, TypeVar

from ..exceptions import RuleOptionError, UnknownRuleError
from ..processing.models import Example, RuleType


logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT")


def to_camel_case(key: str) -> str:
    """Convert a snake_case field name to the camelCase key hosts use."""
    head, *rest = key.split('_')
    return head + ''.join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class OptionDescriptor:
    """Rendering-agnostic description of one option for a settings UI."""
    display_name: str
    description: str
    key: str
    default_value: Any
    kind: str
    # Other keys accepted for this option in overrides, e.g. camelCase
    aliases: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "display_name": self.display_name,
            "description": self.description,
            "key": self.key,
            "default_value": self.default_value,
            "kind": self.kind,
            "aliases": list(self.aliases)
        }


class OptionBuilderBase(ABC, Generic[OptionsT]):
    """One configurable field of a rule's options dataclass."""

    kind: str = ""

    def __init__(
        self,
        options_class: type,
        name: str,
        description: str,
        options_key: str
    ):
        """Initialize the option builder.

        Args:
            options_class: The rule's options dataclass.
            name: Display name of the option.
            description: One-line help text.
            options_key: Field of ``options_class`` this option controls.
        """
        field_names = {f.name for f in fields(options_class)}
        if options_key not in field_names:
            raise ValueError(
                f"{options_class.__name__} has no field '{options_key}'"
            )
        self.options_class = options_class
        self.name = name
        self.description = description
        self.options_key = options_key

    @property
    def setting_keys(self) -> tuple[str, ...]:
        """Keys accepted for this option in override mappings."""
        camel = to_camel_case(self.options_key)
        if camel == self.options_key:
            return (self.options_key,)
        return (self.options_key, camel)

    def default_value(self) -> Any:
        return getattr(self.options_class(), self.options_key)

    def describe(self) -> OptionDescriptor:
        return OptionDescriptor(
            display_name=self.name,
            description=self.description,
            key=self.options_key,
            default_value=self.default_value(),
            kind=self.kind,
            aliases=self.setting_keys[1:]
        )

    @abstractmethod
    def validate(self, value: Any) -> Any:
        """Check an override value and return it in its stored form.

        Raises:
            RuleOptionError: If the value is not acceptable.
        """
        pass


class BooleanOptionBuilder(OptionBuilderBase[OptionsT]):
    """A simple on/off toggle."""

    kind = "boolean"

    def validate(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise RuleOptionError(
                f"Option '{self.options_key}' expects true or false, got {value!r}"
            )
        return value


class ExampleBuilder(Generic[OptionsT]):
    """Builds an ``Example`` for a rule."""

    def __init__(
        self,
        description: str,
        before: str,
        after: str,
        options: Optional[Mapping[str, Any]] = None
    ):
        self.description = description
        self.before = before
        self.after = after
        self.options = dict(options or {})

    def to_example(self) -> Example:
        return Example(
            description=self.description,
            before=self.before,
            after=self.after,
            options=dict(self.options)
        )


class RuleBuilder(ABC, Generic[OptionsT]):
    """Base class for a lint rule.

    Subclasses describe themselves through properties and implement
    ``apply``. Instances hold no per-run state; every run receives its own
    options record.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @property
    @abstractmethod
    def rule_type(self) -> RuleType:
        pass

    @property
    @abstractmethod
    def options_class(self) -> type:
        """Frozen dataclass holding the rule's options and their defaults."""
        pass

    @property
    @abstractmethod
    def example_builders(self) -> list[ExampleBuilder[OptionsT]]:
        pass

    @property
    @abstractmethod
    def option_builders(self) -> list[OptionBuilderBase[OptionsT]]:
        pass

    @abstractmethod
    def apply(self, text: str, options: OptionsT) -> str:
        """Transform ``text``. Must accept any string and never raise."""
        pass

    @property
    def alias(self) -> str:
        """Kebab-case identifier derived from the name."""
        return re.sub(r'[^a-z0-9]+', '-', self.name.lower()).strip('-')

    def default_options(self) -> OptionsT:
        return self.options_class()

    def options(self) -> list[OptionDescriptor]:
        return [builder.describe() for builder in self.option_builders]

    def examples(self) -> list[Example]:
        return [builder.to_example() for builder in self.example_builders]

    def build_options(self, overrides: Optional[Mapping[str, Any]] = None) -> OptionsT:
        """Merge overrides over a fresh default options record.

        Args:
            overrides: Option values keyed by field name or camelCase key.

        Returns:
            A new options record.

        Raises:
            RuleOptionError: On unknown keys or invalid values.
        """
        builders = {}
        for builder in self.option_builders:
            for key in builder.setting_keys:
                builders[key] = builder

        values = {}
        for key, value in (overrides or {}).items():
            builder = builders.get(key)
            if builder is None:
                raise RuleOptionError(f"Unknown option '{key}' for rule '{self.alias}'")
            values[builder.options_key] = builder.validate(value)

        return replace(self.default_options(), **values)

    def run(self, text: str, overrides: Optional[Mapping[str, Any]] = None) -> str:
        """Apply the rule with defaults merged with ``overrides``."""
        return self.apply(text, self.build_options(overrides))

    def run_example(self, example: Example) -> str:
        return self.run(example.before, example.options)


class RuleCatalog:
    """Registry of rule instances, written at startup and read afterwards."""

    def __init__(self):
        self._rules: list[RuleBuilder] = []

    def register(self, rule: RuleBuilder) -> RuleBuilder:
        """Add a rule to the catalog.

        Raises:
            ValueError: If a rule with the same alias is already registered.
        """
        if any(existing.alias == rule.alias for existing in self._rules):
            raise ValueError(f"Rule '{rule.alias}' is already registered")
        self._rules.append(rule)
        logger.debug(f"Registered rule '{rule.alias}'")
        return rule

    def get(self, name: str) -> RuleBuilder:
        """Look up a rule by alias or display name (case-insensitive).

        Raises:
            UnknownRuleError: If nothing matches.
        """
        wanted = name.strip().lower()
        for rule in self._rules:
            if wanted in (rule.alias, rule.name.lower()):
                return rule
        raise UnknownRuleError(f"Unknown rule: {name}")

    def rules(self) -> tuple[RuleBuilder, ...]:
        return tuple(self._rules)


# Process-wide catalog, populated when ``md_lint.rules`` is imported
CATALOG = RuleCatalog()


def register_rule(rule: RuleBuilder) -> RuleBuilder:
    """Add a rule to the process-wide catalog."""
    return CATALOG.register(rule)


def registered_rules() -> tuple[RuleBuilder, ...]:
    return CATALOG.rules()


def get_rule(name: str) -> RuleBuilder:
    return CATALOG.get(name)
