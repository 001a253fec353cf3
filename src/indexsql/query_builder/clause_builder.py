"""Composition of variable-length SQL clauses.

SELECT lists, WHERE conjunctions and GROUP BY lists are all built from
fragments that may or may not be present for a given source. ClauseBuilder
keeps them as ``(text, blank)`` pairs until the final join.
"""

from typing import Iterable, List, NamedTuple, Optional, Union

FragmentInput = Union[None, str, Iterable[Optional[str]]]


class Fragment(NamedTuple):
    text: str
    blank: bool

    @classmethod
    def of(cls, value: Optional[str]) -> "Fragment":
        text = "" if value is None else str(value)
        return cls(text, not text.strip())


class ClauseBuilder:
    """Join non-blank SQL fragments, keeping an optional leading element.

    Example:
        >>> ClauseBuilder("articles.id").compose(["title", None], [""]).separated()
        'articles.id, title'
        >>> ClauseBuilder(None).add_clause(None).separated(" AND ")
        ''
    """

    def __init__(self, first_element: Optional[str] = None):
        self.first_element = Fragment.of(first_element)
        self.fragments: List[Fragment] = []

    def add_clause(self, clause: FragmentInput) -> "ClauseBuilder":
        """Append one fragment or an ordered group of fragments."""
        if clause is None or isinstance(clause, str):
            self.fragments.append(Fragment.of(clause))
        else:
            self.fragments.extend(Fragment.of(item) for item in clause)
        return self

    def compose(self, *groups: FragmentInput) -> "ClauseBuilder":
        for group in groups:
            self.add_clause(group)
        return self

    def separated(self, by: str = ", ") -> str:
        """Join every non-blank fragment with ``by``.

        Returns:
            The joined clause, or an empty string when nothing remains
        """
        fragments = [self.first_element, *self.fragments]
        return by.join(fragment.text for fragment in fragments if not fragment.blank)
