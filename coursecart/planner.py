"""
Planner state: the catalog plus everything the user can change.

Handlers (load, set_filter, request_sort, toggle_session, ...) update one
piece of state. Derived views (filtered, sorted_courses, selected, total,
events) are recomputed from the current state on every access.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from coursecart.calendar_view import CalendarProjection, TermScope, project_events
from coursecart.conflicts import selected_sections
from coursecart.model import FILTER_FIELDS, Course, FilterState, SelectedSection, SortState
from coursecart.pricing import display_total
from coursecart.sources import LoadError, load_catalog
from coursecart.views import (
    FilterOptions,
    apply_filters,
    filter_options,
    find_course,
    is_code_visible,
    next_sort_state,
    section_matches_filters,
    sort_courses,
)

logger = logging.getLogger(__name__)


class Planner:
    def __init__(
        self,
        courses: Optional[List[Course]] = None,
        selection: Optional[Mapping[str, bool]] = None,
    ) -> None:
        self.courses: List[Course] = list(courses or [])
        self.filters = FilterState()
        self.search_query = ""
        self.sort = SortState()
        self.selection: Dict[str, bool] = dict(selection or {})
        self.detail_code: Optional[str] = None
        self.scope = TermScope.OVERALL
        self.load_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def load(self, listing_path: str | Path, prices_path: str | Path) -> bool:
        """
        Rebuild the catalog from both data files.

        On failure the catalog is emptied and load_error is set. Returns True on success.
        """
        try:
            courses = load_catalog(listing_path, prices_path)
        except LoadError as exc:
            logger.error("Error loading files: %s", exc)
            self.load_error = str(exc)
            self.set_catalog([])
            return False

        self.load_error = None
        self.set_catalog(courses)
        return True

    def set_catalog(self, courses: List[Course]) -> None:
        """
        Replace the catalog. Selected ids and filter values that the new
        catalog no longer contains are dropped.
        """
        self.courses = list(courses)

        known_ids = {s.session_id for c in self.courses for s in c.sections}
        self.selection = {sid: on for sid, on in self.selection.items() if sid in known_ids}

        options = self.options
        vocabularies = {
            "dept": options.depts,
            "day": options.days,
            "time": options.times,
            "term": options.terms,
            "credits": options.credits,
        }
        stale = {}
        for name, values in vocabularies.items():
            value = getattr(self.filters, name)
            if value and value not in values:
                stale[name] = ""
        if stale:
            logger.info("Clearing filters no longer in the catalog: %s", ", ".join(sorted(stale)))
            self.filters = replace(self.filters, **stale)

        self._clear_hidden_detail()

    def set_filter(self, name: str, value: str) -> None:
        if name not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter: {name!r}")
        self.filters = replace(self.filters, **{name: value or ""})
        self._clear_hidden_detail()

    def set_search(self, query: str) -> None:
        self.search_query = query or ""
        self._clear_hidden_detail()

    def reset_filters(self) -> None:
        self.filters = FilterState()
        self.search_query = ""

    def request_sort(self, key: str) -> SortState:
        self.sort = next_sort_state(self.sort, key)
        return self.sort

    def show_detail(self, code: Optional[str]) -> None:
        self.detail_code = code

    def toggle_session(self, session_id: str) -> bool:
        """
        Flip the checkbox of a session of the detail course.

        Sections hidden by the active section filters cannot be checked, but a
        checked one can always be unchecked. Returns False if nothing changed.
        """
        session_id = str(session_id)
        if not self.selection.get(session_id):
            course = self.detail_course
            if course is not None:
                matching = [s for s in course.sections if s.session_id == session_id]
                if matching and not any(section_matches_filters(s, self.filters) for s in matching):
                    return False
        self.selection[session_id] = not self.selection.get(session_id, False)
        return True

    def set_scope(self, scope: TermScope | str) -> None:
        self.scope = scope if isinstance(scope, TermScope) else TermScope.parse(scope)

    def _clear_hidden_detail(self) -> None:
        if self.detail_code and not is_code_visible(self.detail_code, self.filtered):
            self.detail_code = None

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def options(self) -> FilterOptions:
        return filter_options(self.courses)

    @property
    def filtered(self) -> List[Course]:
        return apply_filters(self.courses, self.filters, self.search_query)

    @property
    def sorted_courses(self) -> List[Course]:
        return sort_courses(self.filtered, self.sort.key, self.sort.direction)

    @property
    def detail_course(self) -> Optional[Course]:
        return find_course(self.courses, self.detail_code)

    @property
    def selected(self) -> List[SelectedSection]:
        return selected_sections(self.courses, self.selection)

    @property
    def total(self) -> int:
        return display_total(self.selected)

    def events(self) -> CalendarProjection:
        return project_events(self.selected, self.scope)
