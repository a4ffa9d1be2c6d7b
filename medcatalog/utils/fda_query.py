"""
openFDA Query Builder

Translates medication filters into openFDA search syntax. This is the only
module that knows the field names and boolean operators of the openFDA
query language; callers are responsible for URL encoding the result.
"""
import re

from medcatalog.models.fda_resources import MedicationFilter

MATCH_ALL = "*"
AND = "+AND+"
OR = "+OR+"

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
# Quote and plus are query grammar inside a quoted term and cannot be escaped
_IDENTIFIER_RESERVED = re.compile(r'["+]')


def sanitize_search_term(term: str, is_identifier: bool = False) -> str:
    """
    Clean a search term and wrap it in wildcards.

    Free text is trimmed, lowercased, stripped of anything but letters, digits
    and spaces, and has repeated whitespace collapsed. Identifiers are only
    trimmed so that characters such as hyphens survive.

    Args:
        term: Raw search term
        is_identifier: Whether the term is a record identifier

    Returns:
        Term wrapped as *term*
    """
    if is_identifier:
        return f"*{term.strip()}*"

    clean_term = term.strip().lower()
    clean_term = _DISALLOWED_CHARS.sub("", clean_term)
    clean_term = _WHITESPACE.sub(" ", clean_term)
    return f"*{clean_term}*"


def field_match(field: str, term: str) -> str:
    return f'{field}:"{term}"'


def translate_to_fda_query(filters: MedicationFilter) -> str:
    """
    Build the openFDA search expression for a filter.

    Args:
        filters: Validated medication filter

    Returns:
        Search expression, or "*" when no filter is set
    """
    search_terms = []

    if filters.name:
        name = sanitize_search_term(filters.name)
        search_terms.append(f"({field_match('brand_name', name)}{OR}{field_match('generic_name', name)})")

    if filters.active_ingredient:
        ingredient = sanitize_search_term(filters.active_ingredient)
        search_terms.append(field_match("active_ingredients.name", ingredient))

    if filters.route:
        route = sanitize_search_term(filters.route)
        search_terms.append(field_match("route", route))

    return AND.join(search_terms) if search_terms else MATCH_ALL


def is_queryable_identifier(product_id: str) -> bool:
    return bool(product_id.strip()) and not _IDENTIFIER_RESERVED.search(product_id)


def identifier_query(product_id: str) -> str:
    return field_match("product_id", sanitize_search_term(product_id, is_identifier=True))
