# Catalog data provider: builds Course values from already-fetched catalog and ratings records
import json
from pathlib import Path
from typing import Dict, List, Optional

from schedule_builder.models import (
    DEFAULT_AVG_GPA,
    DEFAULT_INSTRUCTOR_RATING,
    Course,
    CourseNotFound,
    EmptySectionList,
    Section,
)
from schedule_builder.scripts.meeting_time import MeetingBlock
from schedule_builder.store import normalize_course_id

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.json"


def _to_int(value, default: int = 0) -> int:
    # umd.io sends counts as strings ("12"); credits can come back as "1-3" for variable-credit courses
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if "-" in text:
        text = text.split("-", 1)[0]
    return int(text)


def _to_rating(value) -> Optional[float]:
    if value is None:
        return None
    return float(value)


class CourseCatalog:
    """
    In-memory view of the catalog records a data provider fetched beforehand.

    The records dict mirrors the upstream APIs:
      courses:    umd.io /courses/<id>  (course_id, name, credits, sections: [section_id])
      sections:   umd.io /courses/sections/<id>  (section_id, number, instructors, meetings, ...)
      professors: planetterp /professor  (name, average_rating)
      grades:     planetterp /course  (course or department + course_number, average_gpa)
    """

    def __init__(self, records: Optional[dict] = None):
        records = records or {}
        self._courses: Dict[str, dict] = {
            normalize_course_id(c["course_id"]): c for c in records.get("courses", [])
        }
        self._sections: Dict[str, dict] = {
            s["section_id"]: s for s in records.get("sections", [])
        }
        self._prof_ratings: Dict[str, Optional[float]] = {
            p["name"]: _to_rating(p.get("average_rating")) for p in records.get("professors", [])
        }
        self._gpas: Dict[str, Optional[float]] = {}
        for grade in records.get("grades", []):
            key = grade.get("course") or f"{grade.get('department', '')}{grade.get('course_number', '')}"
            self._gpas[normalize_course_id(key)] = _to_rating(grade.get("average_gpa"))

    @classmethod
    def from_file(cls, path) -> "CourseCatalog":
        """Load catalog records from a JSON file. A missing file gives an empty catalog."""
        path = Path(path)
        if not path.exists():
            print(f"⚠️ Catalog file not found at {path}, starting with an empty catalog")
            return cls()

        with path.open("r", encoding="utf-8") as file:
            records = json.load(file)

        if not isinstance(records, dict):
            raise ValueError(f"Catalog file {path} must contain a JSON object")

        catalog = cls(records)
        print(f"✅ Loaded catalog from {path} ({len(catalog.course_ids())} courses)")
        return catalog

    def course_ids(self) -> List[str]:
        return sorted(self._courses)

    def instructor_rating(self, instructors: List[str]) -> float:
        """Mean of the known professor ratings; the neutral default when none are known."""
        known = [
            self._prof_ratings[name]
            for name in instructors
            if self._prof_ratings.get(name) is not None
        ]
        if not known:
            return DEFAULT_INSTRUCTOR_RATING
        return sum(known) / len(known)

    def average_gpa(self, course_id: str) -> float:
        gpa = self._gpas.get(normalize_course_id(course_id))
        return DEFAULT_AVG_GPA if gpa is None else gpa

    def _build_section(self, record: dict, course_id: str, course_name: str, credits: int) -> Section:
        instructors = list(record.get("instructors", []))
        meetings = [
            MeetingBlock.from_times(
                meeting.get("days", ""),
                meeting.get("start_time", ""),
                meeting.get("end_time", ""),
                room=meeting.get("room", "") or "",
                building=meeting.get("building", "") or "",
                classtype=meeting.get("classtype", "") or "",
            )
            for meeting in record.get("meetings", [])
        ]
        return Section(
            section_id=record["section_id"],
            course_id=course_id,
            course_name=course_name,
            number=str(record.get("number", "")),
            instructors=instructors,
            instructor_rating=self.instructor_rating(instructors),
            avg_gpa=self.average_gpa(course_id),
            open_seats=_to_int(record.get("open_seats")),
            waitlist=_to_int(record.get("waitlist")),
            credits=credits,
            meetings=meetings,
        )

    def build_course(self, course_id: str) -> Course:
        """
        Builds a fully populated Course for the given id.
        Raises:
            CourseNotFound: The catalog has no such course.
            EmptySectionList: The course lists no sections the catalog can resolve.
            ValueError: A meeting record has a malformed day or clock string.
        """
        canonical = normalize_course_id(course_id)
        record = self._courses.get(canonical)
        if record is None:
            raise CourseNotFound(canonical)

        course_name = record.get("name", "")
        credits = _to_int(record.get("credits"))
        sections = []
        for section_id in record.get("sections", []):
            section_record = self._sections.get(section_id)
            if section_record is None:
                print(f"⚠️ Section {section_id} listed by {canonical} is missing from the catalog")
                continue
            sections.append(self._build_section(section_record, canonical, course_name, credits))

        if not sections:
            raise EmptySectionList(canonical)

        return Course(course_id=canonical, course_name=course_name, sections=sections)
