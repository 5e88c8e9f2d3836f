"""
Declarative selector rules for finding dated article links on a front page.

Each rule describes where a candidate anchor lives; it is expanded into one
CSS selector per tracked year. Adding a year or a new page structure is a
change to the data below, not to the extraction loop.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple


class HrefMatch(str, Enum):
    CONTAINS = "*="
    PREFIX = "^="


@dataclass(frozen=True)
class SelectorRule:
    name: str
    href_match: HrefMatch = HrefMatch.CONTAINS
    scope: Optional[str] = None
    # Container attribute carrying the year instead of the anchor href
    scope_attribute: Optional[str] = None

    def selector_for(self, year: int) -> str:
        if self.scope_attribute:
            return f'[{self.scope_attribute}*="{year}"] a'

        anchor = f'a[href{self.href_match.value}"/{year}/"]'
        if self.scope:
            return f"{self.scope} {anchor}"
        return anchor


# Ancestors that may hold a better title than the anchor text itself
ARTICLE_CONTAINER_SELECTOR = "article, .c-story-card, h1, h2, h3, h4, [data-analytics-link]"
HEADING_SELECTOR = "h1, h2, h3, h4"

DEFAULT_RULES: Tuple[SelectorRule, ...] = (
    SelectorRule("href_contains_year"),
    SelectorRule("href_starts_with_year", href_match=HrefMatch.PREFIX),
    SelectorRule("analytics_link", scope_attribute="data-analytics-link"),
    SelectorRule("article", scope="article"),
    SelectorRule("story_card", scope=".c-story-card"),
    SelectorRule("h1", scope="h1"),
    SelectorRule("h2", scope="h2"),
    SelectorRule("h3", scope="h3"),
    SelectorRule("h4", scope="h4"),
)


def expand_rules(rules: Sequence[SelectorRule], years: Iterable[int]) -> Iterator[Tuple[SelectorRule, str]]:
    years = list(years)
    for rule in rules:
        for year in years:
            yield rule, rule.selector_for(year)


def build_selectors(rules: Sequence[SelectorRule], years: Iterable[int]) -> List[str]:
    return [selector for _rule, selector in expand_rules(rules, years)]
