from fastapi import FastAPI, HTTPException, Depends
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from pydantic import BaseModel, Field
from typing import List, Optional
import uvicorn
import os
from dotenv import load_dotenv

load_dotenv()

from schedule_builder.catalog import DEFAULT_CATALOG_PATH, CourseCatalog
from schedule_builder.models import (
    DEFAULT_AVG_GPA,
    DEFAULT_INSTRUCTOR_RATING,
    MAX_COURSES,
    AddResult,
    Course,
    EmptySectionList,
    Schedule,
    Section,
)
from schedule_builder.scripts.conflicts import find_conflicts
from schedule_builder.scripts.exhaustive_scheduler import build_ranked_schedules
from schedule_builder.scripts.meeting_time import MeetingBlock, day_codes
from schedule_builder.session import PlannerSession
from schedule_builder.store import CourseSelectionStore


CATALOG_PATH = os.getenv("SCHEDULER_CATALOG_PATH", str(DEFAULT_CATALOG_PATH))
HOST = os.getenv("SCHEDULER_HOST", "0.0.0.0")
PORT = int(os.getenv("SCHEDULER_PORT", "8502"))

# Define allowed origins
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "SCHEDULER_ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]


app = FastAPI()

# One planning session per process; the presentation layer is a single student
session = PlannerSession(CourseCatalog.from_file(CATALOG_PATH))


class SingleOriginCORSMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        origin = request.headers.get("origin")

        # Handle preflight requests
        if request.method == "OPTIONS" and origin in ALLOWED_ORIGINS:
            response = Response()
            self._add_cors_headers(response, origin)
            return response

        response = await call_next(request)

        # Only add CORS headers if origin is allowed
        if origin in ALLOWED_ORIGINS:
            self._add_cors_headers(response, origin)
        elif origin:
            print(f"🔧 CORS Middleware: NOT adding CORS headers for origin: {origin}")

        return response

    @staticmethod
    def _add_cors_headers(response, origin):
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS, DELETE"
        response.headers["Access-Control-Allow-Headers"] = "*"
        response.headers["Access-Control-Allow-Credentials"] = "false"


# Add our custom CORS middleware
app.add_middleware(SingleOriginCORSMiddleware)


def get_session() -> PlannerSession:
    return session


# Define Pydantic models for data validation and parsing
class MeetingInput(BaseModel):
    days: str  # Day codes (e.g., "MWF", "TuTh")
    start_time: str = ""  # Clock time (e.g., "9:00am"); empty for online meetings
    end_time: str = ""
    room: str = ""
    building: str = ""
    classtype: str = ""


class SectionInput(BaseModel):
    section_id: str
    course_id: str = ""  # Filled in from the enclosing course when omitted
    course_name: str = ""
    number: str = ""
    instructors: List[str] = []
    instructor_rating: Optional[float] = None  # Neutral 3.0 when unknown
    avg_gpa: Optional[float] = None  # Neutral 3.0 when unknown
    open_seats: int = 0
    waitlist: int = 0
    credits: int = Field(default=0, ge=0)
    meetings: List[MeetingInput] = []


class CourseInput(BaseModel):
    course_id: str
    course_name: str = ""
    sections: List[SectionInput]


class ClassScheduleInput(BaseModel):
    courses: List[CourseInput]  # Courses in the order their sections should be combined


class AddCourseRequest(BaseModel):
    course_id: str


class ValidateScheduleRequest(BaseModel):
    sections: List[SectionInput]  # One chosen section per course


def to_section(data: SectionInput, course_id: str = "", course_name: str = "") -> Section:
    return Section(
        section_id=data.section_id,
        course_id=data.course_id or course_id,
        course_name=data.course_name or course_name,
        number=data.number,
        instructors=data.instructors,
        instructor_rating=(
            DEFAULT_INSTRUCTOR_RATING
            if data.instructor_rating is None
            else data.instructor_rating
        ),
        avg_gpa=DEFAULT_AVG_GPA if data.avg_gpa is None else data.avg_gpa,
        open_seats=data.open_seats,
        waitlist=data.waitlist,
        credits=data.credits,
        meetings=[
            MeetingBlock.from_times(
                meeting.days,
                meeting.start_time,
                meeting.end_time,
                room=meeting.room,
                building=meeting.building,
                classtype=meeting.classtype,
            )
            for meeting in data.meetings
        ],
    )


def to_course(data: CourseInput) -> Course:
    course_id = data.course_id.strip().upper()
    return Course(
        course_id=course_id,
        course_name=data.course_name,
        sections=[to_section(s, course_id, data.course_name) for s in data.sections],
    )


def serialize_meeting(meeting: MeetingBlock) -> dict:
    return {
        "days": day_codes(meeting.days),
        "start_time": meeting.start_time,
        "end_time": meeting.end_time,
        "start": meeting.start if meeting.has_fixed_time else None,
        "end": meeting.end if meeting.has_fixed_time else None,
        "room": meeting.room,
        "building": meeting.building,
        "classtype": meeting.classtype,
    }


def serialize_section(section: Section) -> dict:
    return {
        "section_id": section.section_id,
        "course_id": section.course_id,
        "course_name": section.course_name,
        "number": section.number,
        "instructors": list(section.instructors),
        "instructor_rating": section.instructor_rating,
        "avg_gpa": section.avg_gpa,
        "open_seats": section.open_seats,
        "waitlist": section.waitlist,
        "credits": section.credits,
        "meetings": [serialize_meeting(m) for m in section.meetings],
    }


def serialize_course(course: Course) -> dict:
    return {
        "course_id": course.course_id,
        "course_name": course.course_name,
        "sections": [serialize_section(s) for s in course.sections],
    }


def serialize_schedule(schedule: Schedule, bookmarked: bool = False) -> dict:
    return {
        "id": schedule.id,
        "rank": schedule.rank,
        "score": schedule.score.as_float(),
        "rated": schedule.score.is_rated,
        "bookmarked": bookmarked,
        "sections": [serialize_section(s) for s in schedule.sections],
    }


def serialize_schedules(planner: PlannerSession, schedules: List[Schedule]) -> List[dict]:
    return [serialize_schedule(s, planner.is_bookmarked(s.id)) for s in schedules]


def courses_response(planner: PlannerSession, message: str) -> dict:
    return {
        "courses": [serialize_course(c) for c in planner.courses],
        "message": message,
    }


@app.get("/")
def read_root():
    """
    Root endpoint to confirm the API is running.
    """
    return {
        "message": "Schedule Builder is up!",
        "version": "2026-10-18-v1",
        "max_courses": MAX_COURSES,
    }


@app.get("/api/v1/catalog")
async def list_catalog(planner: PlannerSession = Depends(get_session)):
    """
    List the course ids the catalog can resolve.
    """
    return {"course_ids": planner.catalog.course_ids()}


@app.get("/api/v1/courses")
async def list_courses(planner: PlannerSession = Depends(get_session)):
    return courses_response(planner, f"{len(planner.courses)} course(s) selected")


@app.post("/api/v1/courses")
async def add_course(data: AddCourseRequest, planner: PlannerSession = Depends(get_session)):
    """
    Add a course to the selection by id.
    Responds 404 when the catalog does not know the course, 409 when it is
    already selected and 400 when the selection is full.
    """
    course_id = data.course_id.strip().upper()
    print(f"📚 Adding course {course_id}")

    try:
        result = planner.add_course(course_id)
    except EmptySectionList as e:
        print(f"❌ Failed to add course {course_id}: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        print(f"❌ Failed to add course {course_id}: {e}")
        raise HTTPException(status_code=422, detail=f"Malformed catalog data: {e}")

    if result is AddResult.NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"Course {course_id} not found")
    if result is AddResult.ALREADY_PRESENT:
        raise HTTPException(status_code=409, detail=f"Course {course_id} is already selected")
    if result is AddResult.LIMIT_REACHED:
        raise HTTPException(
            status_code=400,
            detail=f"Course limit reached: at most {MAX_COURSES} courses can be selected",
        )

    print(f"✅ Added course {course_id}")
    return courses_response(planner, f"Course {course_id} added")


@app.delete("/api/v1/courses/{course_id}")
async def remove_course(course_id: str, planner: PlannerSession = Depends(get_session)):
    """
    Remove a course from the selection. Removing an unselected course is not an error.
    """
    removed = planner.remove_course(course_id)
    message = f"Course {course_id.upper()} removed" if removed else f"Course {course_id.upper()} was not selected"
    return courses_response(planner, message)


@app.post("/api/v1/reset")
async def reset(planner: PlannerSession = Depends(get_session)):
    """
    Clear the selected courses and generated schedules. Bookmarks are kept.
    """
    planner.reset()
    return courses_response(planner, "Selection reset")


@app.post("/api/v1/schedules/build")
async def build_schedules(planner: PlannerSession = Depends(get_session)):
    """
    Generate and rank every conflict-free schedule for the selected courses,
    replacing the previous batch.
    """
    courses = planner.courses
    print(f"🔄 Building schedules for {[c.course_id for c in courses]}")

    schedules = planner.build_schedules()

    if schedules:
        message = f"Generated {len(schedules)} schedule(s)"
    elif not courses:
        message = "No courses selected"
    else:
        message = "Every combination of the selected courses has a time conflict"

    print(f"✅ {message}")
    return {"schedules": serialize_schedules(planner, schedules), "message": message}


@app.get("/api/v1/schedules")
async def list_schedules(planner: PlannerSession = Depends(get_session)):
    return {"schedules": serialize_schedules(planner, planner.schedules)}


@app.get("/api/v1/bookmarks")
async def list_bookmarks(planner: PlannerSession = Depends(get_session)):
    return {"schedules": serialize_schedules(planner, planner.bookmarks)}


@app.post("/api/v1/schedules/{schedule_id}/bookmark")
async def toggle_bookmark(schedule_id: str, planner: PlannerSession = Depends(get_session)):
    """
    Toggle the bookmark on a schedule from the current batch or the bookmarks.
    """
    try:
        bookmarked = planner.toggle_bookmark(schedule_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Schedule {schedule_id} not found")

    return {"id": schedule_id, "bookmarked": bookmarked}


@app.get("/api/v1/schedules/{schedule_id}/calendar")
async def calendar_meetings(schedule_id: str, planner: PlannerSession = Depends(get_session)):
    """
    Meeting times of a schedule for the calendar integration.
    """
    try:
        meetings = planner.calendar_meetings(schedule_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Schedule {schedule_id} not found")

    return {"id": schedule_id, "meetings": meetings}


@app.post("/api/v1/class-scheduler")
async def class_scheduler(data: ClassScheduleInput):
    """
    API endpoint to rank every conflict-free schedule for courses posted in the body.
    Nothing is stored in the session.
    Args:
        data (ClassScheduleInput): Input data in json containing courses and their sections.
    Returns:
        dict: The ranked schedules or a message explaining why there are none.
    """
    try:
        courses = [to_course(course) for course in data.courses]
    except (EmptySectionList, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    # same uniqueness and size rules as the session's selection
    selection = CourseSelectionStore()
    for course in courses:
        result = selection.add(course)
        if result is AddResult.ALREADY_PRESENT:
            raise HTTPException(status_code=422, detail=f"Course {course.course_id} is listed more than once")
        if result is AddResult.LIMIT_REACHED:
            return {
                "schedules": [],
                "message": f"Too many courses: at most {MAX_COURSES} can be scheduled together.",
            }

    schedules = build_ranked_schedules(selection.courses)
    if schedules:
        response = {
            "schedules": [serialize_schedule(s) for s in schedules],
            "message": f"Generated {len(schedules)} schedule(s)",
        }
    else:
        response = {"schedules": [], "message": "No valid schedule found."}

    return response


@app.post("/api/v1/validate-schedule")
async def validate_schedule(data: ValidateScheduleRequest):
    """
    Check hand-picked sections for time conflicts
    """
    try:
        sections = [to_section(s) for s in data.sections]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    conflicts = [
        {
            "section1": conflict.first.section_id,
            "section2": conflict.second.section_id,
            "day": conflict.day.value,
            "time1": f"{conflict.first_meeting.start_time}-{conflict.first_meeting.end_time}",
            "time2": f"{conflict.second_meeting.start_time}-{conflict.second_meeting.end_time}",
        }
        for conflict in find_conflicts(sections)
    ]

    return {
        "valid": len(conflicts) == 0,
        "conflicts": conflicts,
        "message": f"Validation complete. {len(conflicts)} conflicts found.",
    }


def main():
    # Run the FastAPI application with uvicorn server
    uvicorn.run(app="schedule_builder.app:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()
