"""Courses endpoints, including member enrollment."""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from .. import validation
from ..database import CourseRepository, RepositoryException
from ..models import Course, CourseMember, CourseSummary
from .dependencies import get_course_repository
from .errors import bad_request, not_found, server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Courses", tags=["Courses"])


@router.get("/All", response_model=list[CourseSummary])
def get_all_courses(repo: CourseRepository = Depends(get_course_repository)):
    courses = repo.get_all_summaries()
    if not courses:
        raise not_found("Courses are not found")
    return courses


@router.get("/EnrollMember/{member_id}/{course_id}", response_model=bool)
def enroll_member(
    member_id: int, course_id: int, repo: CourseRepository = Depends(get_course_repository)
):
    """
    Enroll a member in a course.

    Returns ``false`` when the course is full, the member is already enrolled,
    or either id is unknown.
    """
    if not validation.is_valid_id(member_id) or not validation.is_valid_id(course_id):
        raise bad_request()

    enrolled = repo.enroll_member(member_id, course_id)
    if enrolled:
        logger.info("Enrolled member %s in course %s", member_id, course_id)
    return enrolled


@router.get("/MembersForCourse/{course_id}", response_model=list[CourseMember])
def get_members_for_course(
    course_id: int, repo: CourseRepository = Depends(get_course_repository)
):
    if not validation.is_valid_id(course_id):
        raise bad_request("ID is invalid")

    members = repo.get_members(course_id)
    if not members:
        raise not_found("Members for this course are not found")
    return members


@router.get("/{course_id}", response_model=Course, name="get_course")
def get_course(course_id: int, repo: CourseRepository = Depends(get_course_repository)):
    if not validation.is_valid_id(course_id):
        raise bad_request("ID is invalid")

    course = repo.get_by_id(course_id)
    if course is None:
        raise not_found(f"Course with id {course_id} is not found")
    return course


@router.post("", response_model=Course, status_code=status.HTTP_201_CREATED)
def add_course(
    course: Course,
    request: Request,
    response: Response,
    repo: CourseRepository = Depends(get_course_repository),
):
    if not validation.is_valid_course(course):
        raise bad_request()

    try:
        created = repo.create(course)
    except RepositoryException:
        return server_error("An error occurred while adding the new course.")

    logger.info("Added course %s (%s)", created.course_id, created.course_name)
    response.headers["Location"] = str(request.url_for("get_course", course_id=created.course_id))
    return created


@router.put("/{course_id}", response_model=Course)
def update_course(
    course_id: int, course: Course, repo: CourseRepository = Depends(get_course_repository)
):
    if not validation.is_valid_id(course_id) or not validation.is_valid_course(course):
        raise bad_request()
    if not repo.exists(course_id):
        raise not_found(f"Course with id {course_id} is not found")

    try:
        repo.update(course_id, course)
        updated = repo.get_by_id(course_id)
    except RepositoryException:
        return server_error("An error occurred while updating the course.")

    logger.info("Updated course %s", course_id)
    return updated
