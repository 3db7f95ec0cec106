"""
Dashboard validation helpers.

Validates movie records entered in the admin panel before they are sent to
the API. Reuses the CSV field coercion so a value typed into the form is
stored exactly as the same value would be after a CSV import.
"""

from typing import Dict, List

from cineverse.constants import INDUSTRIES, MONEY_FIELDS
from cineverse.field_mapper import map_field

MIN_YEAR = 1888  # Roundhay Garden Scene
MAX_YEAR = 2100


def parse_form_values(form: Dict[str, str]) -> Dict:
    """
    Coerce raw form strings (keyed by canonical field name)

    Blank fields are dropped, so an edit never overwrites a stored value
    with an empty one.
    """
    movie = {}
    for name, raw in form.items():
        if raw is None:
            continue
        mapped = map_field(name, str(raw))
        if not mapped.omitted:
            movie[mapped.name] = mapped.value
    return movie


class MovieValidator:
    """Validates movie records from the admin form."""

    def __init__(self, known_categories=INDUSTRIES):
        self.known_categories = set(known_categories)

    def validate(self, movie: Dict) -> Dict:
        """
        Validate a single movie record.

        Returns dict with:
        - valid: bool
        - errors: list of error messages
        - warnings: list of warning messages
        """
        errors = []
        warnings = []

        title = movie.get('title')
        if not isinstance(title, str) or not title.strip():
            errors.append("Title is required")

        errors.extend(self._validate_year(movie))
        errors.extend(self._validate_rating(movie))
        errors.extend(self._validate_money(movie))

        category = movie.get('category')
        if category and category not in self.known_categories:
            warnings.append(
                f"Category '{category}' is not one of {', '.join(sorted(self.known_categories))}; "
                "it won't appear in industry statistics"
            )

        if not movie.get('worldwide_gross_usd') and not movie.get('worldwide_gross_inr'):
            warnings.append("No worldwide gross; movie won't appear in the Top 10")

        return {
            'valid': len(errors) == 0,
            'errors': errors,
            'warnings': warnings
        }

    def _validate_year(self, movie: Dict) -> List[str]:
        year = movie.get('year')
        if year is None:
            return []
        if isinstance(year, bool) or not isinstance(year, int):
            return [f"Year must be a whole number, got {year!r}"]
        if not MIN_YEAR <= year <= MAX_YEAR:
            return [f"Year {year} is outside {MIN_YEAR}-{MAX_YEAR}"]
        return []

    def _validate_rating(self, movie: Dict) -> List[str]:
        rating = movie.get('imdb_rating')
        if rating is None:
            return []
        if isinstance(rating, bool) or not isinstance(rating, (int, float)):
            return [f"IMDb rating must be a number, got {rating!r}"]
        if not 0 <= rating <= 10:
            return [f"IMDb rating {rating} is outside 0-10"]
        return []

    def _validate_money(self, movie: Dict) -> List[str]:
        errors = []
        for name in MONEY_FIELDS:
            value = movie.get(name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{name} must be a number")
            elif value < 0 and not name.startswith('profit'):
                errors.append(f"{name} cannot be negative")
        return errors
