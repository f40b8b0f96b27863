# Session state behind the API: selected courses, the latest schedule batch and bookmarks
import threading
from typing import Callable, List, Optional

from schedule_builder.catalog import CourseCatalog
from schedule_builder.models import AddResult, CourseNotFound, Course, Schedule
from schedule_builder.scripts.exhaustive_scheduler import build_ranked_schedules
from schedule_builder.scripts.meeting_time import MeetingBlock
from schedule_builder.store import CourseSelectionStore, normalize_course_id

Listener = Callable[[str, "PlannerSession"], None]


class PlannerSession:
    """
    One student's planning state.

    Mutations (add/remove/reset/bookmark) and schedule builds all take the
    same lock, so a build always sees a stable snapshot of the selection and
    never runs alongside a mutation. Listeners are called after each change
    while the lock is still held, so they must not call back into the
    session from another thread.
    """

    def __init__(self, catalog: CourseCatalog, store: Optional[CourseSelectionStore] = None):
        self.catalog = catalog
        self.store = store or CourseSelectionStore()
        self._schedules: List[Schedule] = []
        self._bookmarks: List[Schedule] = []
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, *events: str):
        """
        Delivers every event to every listener. A listener that raises does not
        stop the others; the first error is re-raised once all have been called.
        """
        errors = []
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event, self)
                except Exception as e:
                    print(f"❌ Listener failed on {event!r} event: {e}")
                    errors.append(e)
        if errors:
            raise errors[0]

    @property
    def courses(self) -> List[Course]:
        with self._lock:
            return self.store.courses

    @property
    def schedules(self) -> List[Schedule]:
        with self._lock:
            return list(self._schedules)

    @property
    def bookmarks(self) -> List[Schedule]:
        with self._lock:
            return list(self._bookmarks)

    def add_course(self, course_id: str) -> AddResult:
        """
        Looks the course up in the catalog and adds it to the selection.
        Duplicates and a full selection are detected before the catalog is
        consulted. EmptySectionList from the catalog propagates to the caller.
        """
        canonical = normalize_course_id(course_id)
        with self._lock:
            if canonical in self.store:
                return AddResult.ALREADY_PRESENT
            if self.store.is_full:
                return AddResult.LIMIT_REACHED

            try:
                course = self.catalog.build_course(canonical)
            except CourseNotFound:
                return AddResult.NOT_FOUND

            result = self.store.add(course)
            if result is AddResult.ADDED:
                self._notify("courses")
            return result

    def remove_course(self, course_id: str) -> bool:
        with self._lock:
            removed = self.store.remove(course_id)
            if removed:
                self._notify("courses")
            return removed

    def reset(self):
        """Clears the selection and the generated schedules. Bookmarks are kept."""
        with self._lock:
            self.store.reset()
            self._schedules = []
            self._notify("courses", "schedules")

    def build_schedules(self) -> List[Schedule]:
        """Regenerates the ranked schedule batch from the current selection, replacing the old one."""
        with self._lock:
            self._schedules = build_ranked_schedules(self.store.courses)
            self._notify("schedules")
            return list(self._schedules)

    def find_schedule(self, schedule_id: str) -> Schedule:
        with self._lock:
            for schedule in self._schedules + self._bookmarks:
                if schedule.id == schedule_id:
                    return schedule
        raise KeyError(schedule_id)

    def is_bookmarked(self, schedule_id: str) -> bool:
        with self._lock:
            return any(s.id == schedule_id for s in self._bookmarks)

    def toggle_bookmark(self, schedule_id: str) -> bool:
        """
        Bookmarks the schedule, or removes the bookmark if it is already set.
        Returns:
            bool: True if the schedule is bookmarked after the call.
        Raises:
            KeyError: No schedule with this id in the current batch or the bookmarks.
        """
        with self._lock:
            if self.is_bookmarked(schedule_id):
                self._bookmarks = [s for s in self._bookmarks if s.id != schedule_id]
                bookmarked = False
            else:
                self._bookmarks.append(self.find_schedule(schedule_id))
                bookmarked = True
            self._notify("bookmarks")
            return bookmarked

    def calendar_meetings(self, schedule_id: str) -> List[dict]:
        """
        Meeting times of a schedule in the shape a calendar integration needs:
        one entry per section meeting with a fixed time. Online meetings are skipped.
        """
        schedule = self.find_schedule(schedule_id)
        entries = []
        for section in schedule.sections:
            for meeting in section.meetings:
                if not meeting.has_fixed_time:
                    continue
                entries.append(_calendar_entry(section.course_id, section.section_id, meeting))
        return entries


def _calendar_entry(course_id: str, section_id: str, meeting: MeetingBlock) -> dict:
    return {
        "course_id": course_id,
        "section_id": section_id,
        "weekdays": sorted(day.index for day in meeting.days),
        "start": meeting.start,
        "end": meeting.end,
        "start_time": meeting.start_time,
        "end_time": meeting.end_time,
        "location": " ".join(part for part in (meeting.building, meeting.room) if part),
    }
