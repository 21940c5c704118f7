"""Solved-problem routes."""

import math
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from leetracker.api.request_models import ProblemCreateRequest, ProblemUpdateRequest
from leetracker.api.responses import api_response
from leetracker.database.database import get_db
from leetracker.database.repository import ProblemRepository
from leetracker.database.user_repository import UserRepository
from leetracker.errors import NotFoundError
from leetracker.models.constants import DEFAULT_PAGE_SIZE

router = APIRouter(prefix="/problems", tags=["Problems"])


@router.post("")
def create_problem(request: ProblemCreateRequest, db: Session = Depends(get_db)):
    """Record a solved problem; difficulty, language and tags are created on demand."""
    if not UserRepository(db).exists(request.user_id):
        raise NotFoundError("User not found")

    problem = ProblemRepository(db).create(
        user_id=request.user_id,
        title=request.title,
        leetcode_id=request.leetcode_id,
        difficulty_level=request.difficulty_level,
        language_name=request.language_name,
        time_spent_min=request.time_spent_min,
        tag_names=request.tag_names,
        solved_at=request.solved_at,
    )
    return api_response(problem, "Problem created successfully", status_code=201)


@router.get("/user/{user_id}")
def list_user_problems(
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    difficulty: Optional[str] = None,
    language: Optional[str] = None,
    tag: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """One page of a user's problems, newest first, with optional filters."""
    problems, total = ProblemRepository(db).list_for_user(
        user_id, page=page, limit=limit, difficulty=difficulty, language=language, tag=tag
    )
    total_pages = math.ceil(total / limit)
    return api_response(
        {
            "problems": problems,
            "pagination": {
                "currentPage": page,
                "totalPages": total_pages,
                "totalProblems": total,
                "hasNext": page < total_pages,
                "hasPrev": page > 1,
            },
        },
        "Problems retrieved successfully",
    )


@router.get("/{problem_id}")
def get_problem(problem_id: str, db: Session = Depends(get_db)):
    problem = ProblemRepository(db).get(problem_id)
    if not problem:
        raise NotFoundError("Problem not found")
    return api_response(problem, "Problem retrieved successfully")


@router.put("/{problem_id}")
def update_problem(problem_id: str, request: ProblemUpdateRequest, db: Session = Depends(get_db)):
    problem = ProblemRepository(db).update(
        problem_id,
        title=request.title,
        difficulty_level=request.difficulty_level,
        language_name=request.language_name,
        tag_names=request.tag_names,
        time_spent_min=request.time_spent_min,
        solved_at=request.solved_at,
    )
    if not problem:
        raise NotFoundError("Problem not found")
    return api_response(problem, "Problem updated successfully")


@router.delete("/{problem_id}")
def delete_problem(problem_id: str, db: Session = Depends(get_db)):
    if not ProblemRepository(db).delete(problem_id):
        raise NotFoundError("Problem not found")
    return api_response(None, "Problem deleted successfully")
