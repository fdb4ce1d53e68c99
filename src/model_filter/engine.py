"""
Filter Engine.

Applies submitted filter form values to a query, one rule per form field.
Form values are remembered in a session-scoped state store under a filter
key (usually the queried table's name), so a list page keeps its filters
across requests until the form is submitted again.

State layout in the store::

    {namespace: {filter_key: {"form_data": {field: value, ...}}}}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from model_filter.config.settings import DEFAULT_NAMESPACE, DateErrorPolicy, FilterSettings
from model_filter.errors import ConfigurationError, MissingCollaboratorError, ParseError
from model_filter.rules import Equals, From, In, Like, Primary, Rule, RuleSet, To, parse_rules
from model_filter.utils.logging import get_logger
from model_filter.utils.time import end_of_day, start_of_day

if TYPE_CHECKING:
    from model_filter.config.settings import Settings
    from model_filter.state.protocol import StateStore

logger = get_logger(__name__)

Q = TypeVar("Q")

FORM_DATA = "form_data"

# Accumulator method each rule type dispatches to
RULE_METHODS: dict[type[Rule], str] = {
    Primary: "where_equals",
    In: "where_in",
    From: "where_gte",
    To: "where_lte",
    Like: "where_like",
    Equals: "where_equals",
}


def is_empty_value(value: Any) -> bool:
    """Whether a submitted value means "no filter".

    Only a missing value (``None``) and the empty string count as empty.
    ``0``, ``False`` and ``[]`` are real values and are filtered on.
    """
    return value is None or (isinstance(value, str) and value == "")


class FilterEngine:
    """Builds a query from filter rules and remembered form data.

    Usage:
        engine = FilterEngine(MemoryStore(request.session), "tickets")
        engine.set_rules({
            "id": ("primary",),
            "status": ("in", "status"),
            "created_from": ("from", "created_at"),
            "created_to": ("to", "created_at"),
            "subject": ("like",),
        })

        if request.method == "POST":
            engine.set_form_data(request.form)

        query = engine.filter(SQLQuery("tickets")).paginate(page=1, per_page=30)

    Engines with different keys never see each other's form data. Two
    engines sharing a key share their form data.
    """

    def __init__(
        self,
        store: StateStore,
        key: str | None = None,
        *,
        settings: Settings | None = None,
        namespace: str | None = None,
        date_error_policy: DateErrorPolicy | str | None = None,
    ):
        """Initialize filter engine.

        Args:
            store: Session-scoped state store holding form data
            key: Filter key; when given, ``configure`` is called with it
            settings: Settings providing the namespace and filter options
            namespace: Store entry shared by all filter keys (overrides settings)
            date_error_policy: "raise" or "skip" for unparseable dates
                (overrides settings)
        """
        filter_settings = settings.filter if settings is not None else FilterSettings()

        self.store = store
        self.namespace = namespace or (settings.namespace if settings is not None else DEFAULT_NAMESPACE)
        self.date_error_policy = DateErrorPolicy(date_error_policy or filter_settings.date_error_policy)
        self.date_formats = tuple(filter_settings.date_formats)
        self.datetime_format = filter_settings.datetime_format
        self.like_suffix = filter_settings.like_suffix

        self._key: str | None = None
        self._rules: RuleSet | None = None

        if key is not None:
            self.configure(key)

    @property
    def key(self) -> str | None:
        return self._key

    def configure(self, key: str) -> FilterEngine:
        """Bind the engine to a filter key.

        Creates the namespace entry with an empty bucket for this key if the
        store has none. An existing namespace is never reset, so configuring
        again keeps form data of this and every other key.

        Args:
            key: Filter key, usually the queried table's name

        Returns:
            self
        """
        if not key:
            raise ConfigurationError("Filter key must be a non-empty string")

        self._key = key

        if not self.store.has(self.namespace):
            self.store.set(self.namespace, {key: {}})
            logger.debug("filter_namespace_initialized", namespace=self.namespace, key=key)

        return self

    def set_rules(self, rules: RuleSet | Mapping[str, Any]) -> None:
        """Define how each form field filters the query.

        Rules are kept in memory only. Tuple definitions with an unknown kind
        behave as equality rules.

        Args:
            rules: RuleSet, or mapping of field name to Rule or
                ``(kind, target?)`` tuple, in evaluation order
        """
        self._rules = parse_rules(rules)

    def get_rules(self) -> RuleSet | None:
        return self._rules

    def set_form_data(self, form_data: Mapping[str, Any]) -> None:
        """Remember submitted form values, replacing any previous ones.

        Multi-value mappings (anything with a ``lists()`` method, such as a
        Werkzeug ``MultiDict``) keep every value of a repeated field: a
        field submitted once stays a scalar, a repeated one becomes a list.

        Args:
            form_data: Mapping of field name to submitted value
        """
        lists = getattr(form_data, "lists", None)
        if callable(lists):
            data = {name: values[0] if len(values) == 1 else list(values) for name, values in lists()}
        else:
            data = dict(form_data)

        self._remember(FORM_DATA, data)

    def get_form_data(self, field: str | None = None) -> Any:
        """Get the remembered form data, or one field of it.

        Args:
            field: Optional field name

        Returns:
            The whole mapping (empty if nothing was submitted), or the
            field's value (``None`` if absent)
        """
        form_data = self._bucket().get(FORM_DATA)

        if form_data is None:
            return None if field is not None else {}

        if field is not None:
            return form_data.get(field)

        return form_data

    def clear_form_data(self) -> None:
        """Forget the remembered form data for this key."""
        key = self._require_key()
        filters = self._filters()
        bucket = filters.get(key) or {}
        bucket.pop(FORM_DATA, None)
        filters[key] = bucket
        self.store.set(self.namespace, filters)

    def filter(self, query: Q) -> Q:
        """Apply the remembered form data to a query.

        Primary rules are applied first, then the rest in definition order.
        A rule is skipped when its field's value is empty (see
        :func:`is_empty_value`). A primary rule with a value adds its
        equality condition and ends the pass, so no other rule applies.

        Example:
            >>> rows = engine.filter(SQLQuery("tickets")).paginate(page=1).to_sql()

        Args:
            query: Query accumulator; it is mutated and returned

        Returns:
            The same query

        Raises:
            ConfigurationError: If no filter key is bound
            ParseError: If a from/to value is not a date and the date
                policy is "raise"
            MissingCollaboratorError: If the query lacks a required method
        """
        key = self._require_key()
        form_data = self.get_form_data()
        applied = 0

        rules = self._rules.evaluation_order() if self._rules is not None else []

        for name, rule in rules:
            value = form_data.get(name)

            if is_empty_value(value):
                continue

            column = rule.column(name)
            method = self._method(query, rule)

            if isinstance(rule, (From, To)):
                try:
                    value = self._day_bound(rule, value)
                except ParseError as e:
                    error = ParseError(e.value, name)
                    if self.date_error_policy == DateErrorPolicy.SKIP:
                        logger.warning("rule_skipped", key=key, field=name, reason=str(error))
                        continue
                    raise error from e
            elif isinstance(rule, Like):
                value = f"{value}{self.like_suffix}"

            method(column, value)
            applied += 1

            if isinstance(rule, Primary):
                logger.debug("primary_rule_matched", key=key, field=name)
                break

        logger.debug("filter_applied", key=key, conditions=applied)

        return query

    def _method(self, query: Any, rule: Rule) -> Any:
        name = next(
            (method for rule_type, method in RULE_METHODS.items() if isinstance(rule, rule_type)),
            "where_equals",
        )
        method = getattr(query, name, None)
        if not callable(method):
            raise MissingCollaboratorError(query, name)
        return method

    def _day_bound(self, rule: Rule, value: Any) -> str:
        bound = start_of_day if isinstance(rule, From) else end_of_day
        return bound(value, self.date_formats, self.datetime_format)

    def _require_key(self) -> str:
        if self._key is None:
            raise ConfigurationError("No filter key set; call configure(key) first")
        return self._key

    def _filters(self) -> dict[str, Any]:
        filters = self.store.get(self.namespace)
        return filters if isinstance(filters, dict) else {}

    def _bucket(self) -> dict[str, Any]:
        return self._filters().get(self._require_key()) or {}

    def _remember(self, name: str, value: Any) -> None:
        filters = self._filters()
        filters.setdefault(self._require_key(), {})[name] = value
        self.store.set(self.namespace, filters)

    def __repr__(self) -> str:
        rules = len(self._rules) if self._rules is not None else 0
        return f"FilterEngine(key={self._key!r}, namespace={self.namespace!r}, rules={rules})"
