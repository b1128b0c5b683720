"""In-memory criteria and named scopes.

A Criteria filters a candidate set of documents by equality conditions.
Candidates are either assigned explicitly (``criteria.documents = [...]``,
which is how embedded association proxies hand over their elements) or
loaded from the class's bound collection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator

from docnest.core.exceptions import CriteriaError, UnboundCollectionError

DEFAULT_PER_PAGE = 20

_OPTION_KEYS = frozenset({"conditions", "page", "per_page"})


@dataclass(frozen=True)
class Page:
    """One page of results."""

    items: list[Any]
    page: int
    per_page: int
    total: int

    @property
    def total_pages(self) -> int:
        return max(1, -(-self.total // self.per_page))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Any:
        return self.items[index]


class Scope:
    """A named, reusable restriction declared on a document class.

    Accessing the scope on the class returns a fresh Criteria with the
    restriction applied.
    """

    def __init__(self, func: Callable[[Criteria], Criteria]) -> None:
        self.func = func
        self.name = func.__name__
        self.__doc__ = func.__doc__

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type) -> Criteria:
        return self.apply(Criteria(owner))

    def apply(self, criteria: Criteria) -> Criteria:
        result = self.func(criteria)
        if not isinstance(result, Criteria):
            raise CriteriaError(f"Scope '{self.name}' must return a Criteria")
        return result


def scope(func: Callable[[Criteria], Criteria]) -> Scope:
    """Declare a named scope on a document class."""
    return Scope(func)


def scopes_of(klass: type) -> dict[str, Scope]:
    """All scopes visible on *klass*, including inherited ones."""
    found: dict[str, Scope] = {}
    for base in reversed(klass.__mro__):
        for name, value in vars(base).items():
            if isinstance(value, Scope):
                found[name] = value
    return found


def _matches(document: Any, conditions: dict[str, Any]) -> bool:
    attributes = document.raw_attributes
    for name, expected in conditions.items():
        actual = attributes.get(name)
        if callable(expected):
            if not expected(actual):
                return False
        elif isinstance(expected, (list, tuple, set, frozenset)):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


class Criteria:
    """Equality-condition query over documents of one class."""

    def __init__(
        self,
        klass: type,
        conditions: dict[str, Any] | None = None,
        *,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        if page < 1 or per_page < 1:
            raise CriteriaError(f"Invalid pagination: page={page}, per_page={per_page}")
        self.klass = klass
        self.conditions: dict[str, Any] = dict(conditions or {})
        self.page = page
        self.per_page = per_page
        self._documents: list[Any] | None = None

    @classmethod
    def translate(cls, klass: type, options: dict[str, Any] | None = None) -> Criteria:
        """Build a Criteria from an options mapping.

        Recognized keys: ``conditions``, ``page``, ``per_page``.

        Raises:
            CriteriaError: On unknown keys or invalid page numbers.
        """
        options = dict(options or {})
        unknown = set(options) - _OPTION_KEYS
        if unknown:
            raise CriteriaError(f"Unknown criteria options: {sorted(unknown)}")
        try:
            page = int(options.get("page", 1))
            per_page = int(options.get("per_page", DEFAULT_PER_PAGE))
        except (TypeError, ValueError) as e:
            raise CriteriaError(f"Invalid pagination options: {e}") from e
        return cls(klass, options.get("conditions"), page=page, per_page=per_page)

    @property
    def documents(self) -> list[Any]:
        """The candidate set; loaded from the bound collection if unassigned."""
        if self._documents is None:
            return self._load()
        return self._documents

    @documents.setter
    def documents(self, documents: list[Any]) -> None:
        self._documents = documents

    def _load(self) -> list[Any]:
        collection = getattr(self.klass, "collection", None)
        if collection is None:
            raise UnboundCollectionError(self.klass.__name__)
        return [self.klass.instantiate(attrs) for attrs in collection.find_all()]  # type: ignore[attr-defined]

    def where(self, **conditions: Any) -> Criteria:
        """Return a copy restricted by additional equality conditions."""
        criteria = Criteria(
            self.klass, {**self.conditions, **conditions}, page=self.page, per_page=self.per_page
        )
        criteria._documents = self._documents
        return criteria

    def execute(self) -> list[Any]:
        """Matching documents, in candidate order."""
        return [doc for doc in self.documents if _matches(doc, self.conditions)]

    def paginate(self) -> Page:
        matches = self.execute()
        start = (self.page - 1) * self.per_page
        return Page(
            items=matches[start : start + self.per_page],
            page=self.page,
            per_page=self.per_page,
            total=len(matches),
        )

    def first(self) -> Any:
        matches = self.execute()
        return matches[0] if matches else None

    def last(self) -> Any:
        matches = self.execute()
        return matches[-1] if matches else None

    def entries(self) -> list[Any]:
        return self.execute()

    def size(self) -> int:
        return len(self.execute())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.execute())

    def __len__(self) -> int:
        return len(self.execute())

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        found = scopes_of(self.klass).get(name)
        if found is None:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute or scope '{name}'"
            )
        return found.apply(self)

    def __repr__(self) -> str:
        return f"Criteria({self.klass.__name__}, {self.conditions!r})"
